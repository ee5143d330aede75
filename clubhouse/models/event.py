"""
Event Models
Club events and member RSVPs
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship
from clubhouse.database import Base


class Event(Base):
    __tablename__ = "events"
    
    id = Column(String(36), primary_key=True)
    title = Column(String(200), nullable=False)
    event_date = Column(DateTime(timezone=True), nullable=False, index=True)
    event_time = Column(String(20), nullable=False)
    location = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    
    # public, member, private
    event_type = Column(String(20), nullable=False, default="member")
    
    created_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class EventRsvp(Base):
    __tablename__ = "event_rsvps"
    __table_args__ = (
        UniqueConstraint("event_id", "member_id", name="uq_event_rsvps_event_member"),
    )
    
    id = Column(String(36), primary_key=True)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(String(36), ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationships
    event = relationship("Event", backref="rsvps")
    member = relationship("Member", backref="event_rsvps")
