"""
Authentication Routes
Login, logout, password change endpoints
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from clubhouse.auth import Actor, create_session_token, get_current_actor
from clubhouse.auth.policy import Role, permissions_for
from clubhouse.errors import ValidationError
from clubhouse.services.user_service import user_service

router = APIRouter()


# Request/Response Models
class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    status: str
    message: str
    access_token: str
    token_type: str = "bearer"
    role: Role
    member_id: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str


class ActorResponse(BaseModel):
    user_id: str
    username: str
    role: Role
    member_id: Optional[str] = None


class PermissionsResponse(BaseModel):
    role: Role
    permissions: Dict[str, List[str]]


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest):
    """
    Login with username and password
    
    The returned token carries the role and member id every other
    endpoint authorizes against.
    """
    user = await user_service.authenticate(credentials.username, credentials.password)
    access_token = create_session_token(user, user["member_id"])
    
    return LoginResponse(
        status="success",
        message="Login successful",
        access_token=access_token,
        role=user["role"],
        member_id=user["member_id"]
    )


@router.post("/change-password")
async def change_password(
    request: ChangePasswordRequest,
    actor: Actor = Depends(get_current_actor)
):
    """
    Change password for current user
    """
    if request.new_password != request.confirm_password:
        raise ValidationError("New passwords do not match")
    
    await user_service.change_password(actor, request.current_password, request.new_password)
    
    return {
        "status": "success",
        "message": "Password changed successfully"
    }


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout():
    """
    Logout endpoint (client should delete token)
    """
    return {
        "status": "success",
        "message": "Logged out successfully"
    }


@router.get("/me", response_model=ActorResponse)
async def get_current_user_info(actor: Actor = Depends(get_current_actor)):
    """
    Get current authenticated user information
    """
    return ActorResponse(
        user_id=actor.user_id,
        username=actor.username,
        role=actor.role,
        member_id=actor.member_id
    )


@router.get("/permissions", response_model=PermissionsResponse)
async def get_permissions(actor: Actor = Depends(get_current_actor)):
    """
    What the current user may do, per resource (drives navigation in the UI)
    """
    return PermissionsResponse(role=actor.role, permissions=permissions_for(actor))
