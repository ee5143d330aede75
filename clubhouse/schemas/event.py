"""
Event Request/Response Models
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from clubhouse.auth.policy import EventType
from clubhouse.schemas.common import UtcDatetime


class CreateEventRequest(BaseModel):
    """Request to create an event"""
    title: str = Field(..., min_length=1, max_length=200)
    date: UtcDatetime
    time: str = Field(..., min_length=1, max_length=20, description="Display time, e.g. 7:00 PM")
    location: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    type: EventType = EventType.member
    
    class Config:
        example = {
            "title": "Weekly Chapter Meeting",
            "date": "2024-12-15T19:00:00Z",
            "time": "7:00 PM",
            "location": "Clubhouse",
            "description": "Regular chapter meeting",
            "type": "member"
        }


class UpdateEventRequest(BaseModel):
    """Request to update an event"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[UtcDatetime] = None
    time: Optional[str] = Field(None, min_length=1, max_length=20)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    type: Optional[EventType] = None


class RsvpMember(BaseModel):
    """Attendee shown on the admin RSVP list"""
    member_id: str
    road_name: str


class EventResponse(BaseModel):
    """Event with attendance; `rsvps` is only filled in for admins"""
    id: str
    title: str
    date: UtcDatetime
    time: str
    location: str
    description: str
    type: EventType
    rsvp_count: int = 0
    attending: bool = False
    rsvps: Optional[List[RsvpMember]] = None
    created_at: Optional[UtcDatetime] = None


class EventListResponse(BaseModel):
    """List of events visible to the caller"""
    total: int
    events: List[EventResponse]


class RsvpResponse(BaseModel):
    """A member's RSVP"""
    id: str
    event_id: str
    member_id: str
    road_name: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
