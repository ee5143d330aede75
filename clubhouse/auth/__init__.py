"""
Authentication Module
Password hashing, session tokens and the authorization policy
"""

from clubhouse.auth.password import hash_password, verify_password, check_new_password, generate_random_password
from clubhouse.auth.dependencies import (
    create_access_token,
    create_session_token,
    decode_access_token,
    get_current_actor,
)
from clubhouse.auth.policy import (
    Action,
    Actor,
    Decision,
    EventType,
    ResourceKind,
    Role,
    authorize,
    can_view_event,
)

__all__ = [
    "hash_password",
    "verify_password",
    "check_new_password",
    "generate_random_password",
    "create_access_token",
    "create_session_token",
    "decode_access_token",
    "get_current_actor",
    "Action",
    "Actor",
    "Decision",
    "EventType",
    "ResourceKind",
    "Role",
    "authorize",
    "can_view_event",
]
