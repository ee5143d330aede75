"""
Authorization Policy
Who may do what to which resource

Every service asks `authorize()` before touching storage. The table below is
the single source of truth; nothing else in the codebase compares roles.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional

from clubhouse.errors import Forbidden

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Club roles, most senior first"""
    admin = "admin"
    member = "member"
    prospect = "prospect"
    hangaround = "hangaround"
    guest = "guest"


class ResourceKind(str, Enum):
    members = "members"
    payments = "payments"
    events = "events"
    rsvps = "rsvps"
    rules = "rules"
    users = "users"


class Action(str, Enum):
    read = "read"
    create = "create"
    update = "update"
    delete = "delete"


class EventType(str, Enum):
    public = "public"
    member = "member"
    private = "private"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, taken from the session token"""
    user_id: str
    username: str
    role: Role
    member_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin

    @property
    def has_member_profile(self) -> bool:
        return bool(self.member_id)


@dataclass(frozen=True)
class Decision:
    """
    Outcome of a policy check

    owner_filter: when set, reads must be narrowed to rows owned by this member id
    hide_sensitive: strip admin-only fields (emergency contact) from the response
    see_rsvp_list: the caller may see who is attending an event
    """
    allowed: bool
    reason: str = ""
    owner_filter: Optional[str] = None
    hide_sensitive: bool = True
    see_rsvp_list: bool = False

    def require(self) -> "Decision":
        """Return self when allowed, raise Forbidden otherwise"""
        if not self.allowed:
            raise Forbidden(self.reason or None)
        return self


ALL_ROLES: FrozenSet[Role] = frozenset(Role)
ADMIN_ONLY: FrozenSet[Role] = frozenset({Role.admin})

POLICY_TABLE: Dict[ResourceKind, Dict[Action, FrozenSet[Role]]] = {
    ResourceKind.members: {
        Action.read: frozenset({Role.admin, Role.member, Role.prospect}),
        Action.create: ADMIN_ONLY,
        Action.update: ADMIN_ONLY,
        Action.delete: ADMIN_ONLY,
    },
    ResourceKind.payments: {
        # Non-admins are narrowed to their own rows
        Action.read: ALL_ROLES,
        Action.create: ADMIN_ONLY,
        Action.update: ADMIN_ONLY,
        Action.delete: ADMIN_ONLY,
    },
    ResourceKind.events: {
        # Narrowed per event by EVENT_VISIBILITY
        Action.read: ALL_ROLES,
        Action.create: frozenset({Role.admin, Role.member}),
        Action.update: ADMIN_ONLY,
        Action.delete: ADMIN_ONLY,
    },
    ResourceKind.rsvps: {
        # Any role holding a member profile, own rsvp only
        Action.read: ALL_ROLES,
        Action.create: ALL_ROLES,
        Action.update: frozenset(),
        Action.delete: ALL_ROLES,
    },
    ResourceKind.rules: {
        Action.read: ALL_ROLES,
        Action.create: ADMIN_ONLY,
        Action.update: ADMIN_ONLY,
        Action.delete: ADMIN_ONLY,
    },
    ResourceKind.users: {
        Action.read: ADMIN_ONLY,
        Action.create: ADMIN_ONLY,
        Action.update: frozenset(),
        Action.delete: frozenset(),
    },
}

EVENT_VISIBILITY: Dict[EventType, FrozenSet[Role]] = {
    EventType.public: ALL_ROLES,
    EventType.member: frozenset({Role.admin, Role.member, Role.prospect}),
    EventType.private: frozenset({Role.admin, Role.member}),
}


def _deny(actor: Actor, resource: ResourceKind, action: Action, reason: str) -> Decision:
    logger.info(
        "Denied %s %s for %s (role=%s): %s",
        action.value, resource.value, actor.username, actor.role.value, reason,
    )
    return Decision(allowed=False, reason=reason)


def authorize(
    actor: Actor,
    resource: ResourceKind,
    action: Action,
    owner_member_id: Optional[str] = None,
) -> Decision:
    """
    Decide whether `actor` may perform `action` on `resource`

    Args:
        actor: Authenticated caller
        resource: Resource kind being touched
        action: Requested action
        owner_member_id: Member id owning the target row, when there is one

    Returns:
        Decision, with narrowing hints for allowed reads
    """
    allowed_roles = POLICY_TABLE[resource][action]
    if actor.role not in allowed_roles:
        return _deny(actor, resource, action, f"Role '{actor.role.value}' may not {action.value} {resource.value}")

    hide_sensitive = not actor.is_admin

    if resource is ResourceKind.payments and action is Action.read and not actor.is_admin:
        if owner_member_id is not None and owner_member_id != actor.member_id:
            return _deny(actor, resource, action, "You can only view your own payments")
        # No member profile narrows to nothing, never an error
        return Decision(allowed=True, owner_filter=actor.member_id or "", hide_sensitive=hide_sensitive)

    if resource is ResourceKind.rsvps:
        if not actor.has_member_profile:
            return _deny(actor, resource, action, "Only registered members can RSVP")
        if owner_member_id is not None and owner_member_id != actor.member_id:
            return _deny(actor, resource, action, "You can only manage your own RSVP")
        return Decision(allowed=True, owner_filter=actor.member_id, hide_sensitive=hide_sensitive)

    return Decision(
        allowed=True,
        hide_sensitive=hide_sensitive,
        see_rsvp_list=actor.is_admin,
    )


def visible_event_types(role: Role) -> FrozenSet[EventType]:
    """Event types a role may see"""
    return frozenset(event_type for event_type, roles in EVENT_VISIBILITY.items() if role in roles)


def can_view_event(actor: Actor, event_type: EventType) -> bool:
    return EventType(event_type) in visible_event_types(actor.role)


def filter_visible_events(actor: Actor, events: Iterable[dict]) -> List[dict]:
    """Drop events whose type the actor may not see"""
    return [event for event in events if can_view_event(actor, event["type"])]


def policy_matrix() -> Dict[Role, Dict[ResourceKind, Dict[Action, bool]]]:
    """Role-level allow table, ignoring ownership"""
    return {
        role: {
            resource: {action: role in roles for action, roles in actions.items()}
            for resource, actions in POLICY_TABLE.items()
        }
        for role in Role
    }


def permissions_for(actor: Actor) -> Dict[str, List[str]]:
    """Actions the actor may perform, per resource"""
    permissions = {}
    for resource, actions in policy_matrix()[actor.role].items():
        granted = [action.value for action, allowed in actions.items() if allowed]
        if resource is ResourceKind.rsvps and not actor.has_member_profile:
            granted = []
        permissions[resource.value] = granted
    return permissions
