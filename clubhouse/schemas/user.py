"""
User Request/Response Models
Identities without a member profile (guests, hangarounds) and admin listings
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from clubhouse.schemas.common import UtcDatetime
from clubhouse.auth.policy import Role


class CreateUserRequest(BaseModel):
    """Request to create a login identity"""
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(..., min_length=8, max_length=128)
    role: Role = Field(default=Role.guest, description="Fixed for the life of the account")
    
    class Config:
        example = {
            "username": "visitor",
            "password": "guest-pass-123",
            "role": "guest"
        }


class UserResponse(BaseModel):
    """User details, never includes the password hash"""
    id: str
    username: str
    role: Role
    member_id: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    
    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    """List of users"""
    total: int
    users: List[UserResponse]
