"""
Member Request/Response Models
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import date
from clubhouse.auth.policy import Role
from clubhouse.schemas.user import UserResponse
from clubhouse.schemas.payment import PaymentResponse
from clubhouse.schemas.common import UtcDatetime


class CreateMemberRequest(BaseModel):
    """Request to add a member: creates the login and the profile together"""
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(..., min_length=8, max_length=128)
    role: Role = Field(default=Role.member)
    road_name: str = Field(..., min_length=1, max_length=100, description="Club name the member rides under")
    real_name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    emergency_contact: Optional[str] = Field(default=None, max_length=255)
    join_date: Optional[date] = Field(default=None, description="Defaults to today")
    
    class Config:
        example = {
            "username": "john_steel",
            "password": "member123!",
            "role": "member",
            "road_name": "Steel",
            "real_name": "John Anderson",
            "phone": "555-0101",
            "email": "john@steelridersmc.com",
            "emergency_contact": "Jane Anderson - 555-0102",
            "join_date": "2020-03-15"
        }


class UpdateMemberRequest(BaseModel):
    """Request to update member profile fields"""
    road_name: Optional[str] = Field(None, min_length=1, max_length=100)
    real_name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    emergency_contact: Optional[str] = Field(None, max_length=255)
    join_date: Optional[date] = None


class MemberResponse(BaseModel):
    """Member profile; emergency_contact is only populated for admins"""
    id: str
    user_id: str
    username: str
    role: Role
    road_name: str
    real_name: str
    phone: str
    email: str
    emergency_contact: Optional[str] = None
    join_date: date
    created_at: Optional[UtcDatetime] = None
    
    class Config:
        from_attributes = True


class MemberEventSummary(BaseModel):
    """Event a member has RSVPed to"""
    id: str
    title: str
    date: UtcDatetime
    type: str


class MemberDetailResponse(MemberResponse):
    """Member with payments and RSVPs the viewer is allowed to see"""
    payments: List[PaymentResponse] = Field(default_factory=list)
    events: List[MemberEventSummary] = Field(default_factory=list)


class MemberListResponse(BaseModel):
    """List of members"""
    total: int
    members: List[MemberResponse]


class MemberCreatedResponse(BaseModel):
    """Both halves of a compound member creation"""
    user: UserResponse
    member: MemberResponse
