"""
Database Models
Import all models here so the metadata knows every table
"""

from clubhouse.models.user import User
from clubhouse.models.member import Member
from clubhouse.models.payment import Payment
from clubhouse.models.event import Event, EventRsvp
from clubhouse.models.rule import Rule

__all__ = [
    "User",
    "Member",
    "Payment",
    "Event",
    "EventRsvp",
    "Rule",
]
