"""
User Routes
Login identities without a member profile
"""

from fastapi import APIRouter, Depends, status
from clubhouse.auth import Actor, get_current_actor
from clubhouse.schemas.user import CreateUserRequest, UserListResponse, UserResponse
from clubhouse.services.user_service import user_service, public_user

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(actor: Actor = Depends(get_current_actor)):
    """List every login (admin only)"""
    return await user_service.list_users(actor)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: CreateUserRequest, actor: Actor = Depends(get_current_actor)):
    """
    Create a login without a member profile (admin only)
    
    Used for guests and hangarounds; use POST /members for roster members.
    """
    return public_user(await user_service.create_user(actor, request))
