"""
Event Routes
Events, visibility by type, and RSVPs
"""

from fastapi import APIRouter, Depends, Query, status
from clubhouse.auth import Actor, get_current_actor
from clubhouse.schemas.event import (
    CreateEventRequest,
    UpdateEventRequest,
    EventListResponse,
    EventResponse,
    RsvpResponse,
)
from clubhouse.services.event_service import event_service

router = APIRouter()


@router.get("", response_model=EventListResponse)
async def list_events(
    upcoming: bool = Query(False, description="Only events that have not started yet"),
    actor: Actor = Depends(get_current_actor)
):
    """
    List events the caller may see
    
    - public: every role
    - member: admin, member, prospect
    - private: admin, member
    
    Attendee lists are only included for admins; everyone gets the count.
    """
    return await event_service.list_events(actor, upcoming_only=upcoming)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    actor: Actor = Depends(get_current_actor)
):
    """Create an event (admin, member)"""
    return await event_service.create_event(actor, request)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, actor: Actor = Depends(get_current_actor)):
    """Get an event"""
    return await event_service.get_event(actor, event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    actor: Actor = Depends(get_current_actor)
):
    """Update an event (admin only)"""
    return await event_service.update_event(actor, event_id, request)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, actor: Actor = Depends(get_current_actor)):
    """Delete an event (admin only)"""
    await event_service.delete_event(actor, event_id)


@router.post("/{event_id}/rsvp", response_model=RsvpResponse, status_code=status.HTTP_201_CREATED)
async def rsvp_to_event(event_id: str, actor: Actor = Depends(get_current_actor)):
    """RSVP to an event (registered members only, once per event)"""
    return await event_service.rsvp(actor, event_id)


@router.delete("/{event_id}/rsvp", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_rsvp(event_id: str, actor: Actor = Depends(get_current_actor)):
    """Cancel your RSVP"""
    await event_service.cancel_rsvp(actor, event_id)
