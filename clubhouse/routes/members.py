"""
Member Routes
Club roster
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from clubhouse.auth import Actor, Role, get_current_actor
from clubhouse.schemas.member import (
    CreateMemberRequest,
    UpdateMemberRequest,
    MemberCreatedResponse,
    MemberDetailResponse,
    MemberListResponse,
    MemberResponse,
)
from clubhouse.services.member_service import member_service

router = APIRouter()


@router.get("", response_model=MemberListResponse)
async def list_members(
    search: Optional[str] = Query(None, max_length=100, description="Match road name or real name"),
    role: Optional[Role] = Query(None, description="Only members with this role"),
    actor: Actor = Depends(get_current_actor)
):
    """
    List members (admin, member, prospect)
    
    Emergency contacts are only included for admins.
    """
    return await member_service.list_members(actor, search=search, role=role)


@router.post("", response_model=MemberCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    request: CreateMemberRequest,
    actor: Actor = Depends(get_current_actor)
):
    """
    Add a member (admin only)
    
    Creates the login and the profile together; if either fails neither is kept.
    """
    return await member_service.create_member(actor, request)


@router.get("/{member_id}", response_model=MemberDetailResponse)
async def get_member(member_id: str, actor: Actor = Depends(get_current_actor)):
    """Member profile with payments (admin or self) and RSVPed events"""
    return await member_service.get_member(actor, member_id)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    request: UpdateMemberRequest,
    actor: Actor = Depends(get_current_actor)
):
    """Update a member (admin only)"""
    return await member_service.update_member(actor, member_id, request)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(member_id: str, actor: Actor = Depends(get_current_actor)):
    """Delete a member with their login, payments and RSVPs (admin only)"""
    await member_service.delete_member(actor, member_id)
