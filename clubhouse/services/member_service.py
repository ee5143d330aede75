"""
Member Service
Club roster: profiles linked one-to-one with a login identity
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4

from clubhouse.auth.password import hash_password
from clubhouse.auth.policy import Action, Actor, Decision, ResourceKind, Role, authorize, can_view_event
from clubhouse.database import database
from clubhouse.errors import Conflict, InternalError, NotFound, is_unique_violation
from clubhouse.schemas.member import CreateMemberRequest, UpdateMemberRequest
from clubhouse.services.payment_service import PaymentService
from clubhouse.services.user_service import UserService, public_user

logger = logging.getLogger(__name__)

MEMBER_QUERY = """
    SELECT m.id, m.user_id, m.road_name, m.real_name, m.phone, m.email,
           m.emergency_contact, m.join_date, m.created_at, u.username, u.role
    FROM members m
    JOIN users u ON u.id = m.user_id
"""

# Columns an admin may edit; emergency_contact may be cleared with null
EDITABLE_COLUMNS = ("road_name", "real_name", "phone", "email", "emergency_contact", "join_date")


def _escape_like(text: str) -> str:
    """Match % and _ literally in a LIKE pattern"""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _shape_member(row, decision: Decision) -> dict:
    member = dict(row)
    if decision.hide_sensitive:
        member["emergency_contact"] = None
    return member


class MemberService:
    """Service for roster management"""

    @staticmethod
    async def _fetch_member(member_id: str):
        member = await database.fetch_one(
            MEMBER_QUERY + " WHERE m.id = :id",
            {"id": member_id}
        )

        if not member:
            raise NotFound("Member not found")

        return member

    @staticmethod
    async def _insert_profile(member_id: str, user_id: str, data: CreateMemberRequest) -> None:
        await database.execute(
            """
            INSERT INTO members
            (id, user_id, road_name, real_name, phone, email, emergency_contact, join_date, created_at, updated_at)
            VALUES (:id, :user_id, :road_name, :real_name, :phone, :email, :emergency_contact, :join_date, :now, :now)
            """,
            {
                "id": member_id,
                "user_id": user_id,
                "road_name": data.road_name,
                "real_name": data.real_name,
                "phone": data.phone,
                "email": data.email,
                "emergency_contact": data.emergency_contact,
                "join_date": data.join_date or date.today(),
                "now": datetime.now(timezone.utc),
            }
        )

    @staticmethod
    async def list_members(actor: Actor, search: Optional[str] = None, role: Optional[Role] = None) -> dict:
        """List the roster, newest members first"""
        decision = authorize(actor, ResourceKind.members, Action.read).require()

        conditions = []
        params = {}

        if search:
            conditions.append("(LOWER(m.road_name) LIKE :search ESCAPE '\\' OR LOWER(m.real_name) LIKE :search ESCAPE '\\')")
            params["search"] = f"%{_escape_like(search.lower())}%"

        if role is not None:
            conditions.append("u.role = :role")
            params["role"] = role.value

        query = MEMBER_QUERY
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY m.join_date DESC"

        members = await database.fetch_all(query, params)

        return {
            "total": len(members),
            "members": [_shape_member(member, decision) for member in members]
        }

    @staticmethod
    async def get_member(actor: Actor, member_id: str) -> dict:
        """
        Member profile with the payments and RSVPed events the actor may see

        Payments are included for admins and for the member themself only.
        """
        decision = authorize(actor, ResourceKind.members, Action.read).require()

        member = _shape_member(await MemberService._fetch_member(member_id), decision)

        payments_decision = authorize(actor, ResourceKind.payments, Action.read, owner_member_id=member_id)
        member["payments"] = (
            await PaymentService.payments_for_member(member_id) if payments_decision.allowed else []
        )

        events = await database.fetch_all(
            """
            SELECT e.id, e.title, e.event_date, e.event_type
            FROM event_rsvps r
            JOIN events e ON e.id = r.event_id
            WHERE r.member_id = :member_id
            ORDER BY e.event_date
            """,
            {"member_id": member_id}
        )
        member["events"] = [
            {"id": event["id"], "title": event["title"], "date": event["event_date"], "type": event["event_type"]}
            for event in events
            if can_view_event(actor, event["event_type"])
        ]

        return member

    @staticmethod
    async def create_member(actor: Actor, data: CreateMemberRequest) -> dict:
        """
        Create the login identity and the member profile as one unit

        Either both rows exist afterwards or neither does.
        """
        decision = authorize(actor, ResourceKind.members, Action.create).require()

        if await UserService.username_taken(data.username):
            raise Conflict(f"Username '{data.username}' is already taken")

        user_id = str(uuid4())
        member_id = str(uuid4())
        password_hash = hash_password(data.password)

        try:
            async with database.transaction():
                await UserService.insert_user(user_id, data.username, password_hash, data.role.value)
                await MemberService._insert_profile(member_id, user_id, data)
        except Exception as exc:
            if is_unique_violation(exc):
                raise Conflict(f"Username '{data.username}' is already taken")
            logger.exception("Member creation for %s rolled back", data.username)
            raise InternalError("Failed to create member") from exc

        logger.info("Member %s (%s) created by %s", data.road_name, data.username, actor.username)

        member = _shape_member(await MemberService._fetch_member(member_id), decision)
        user = await UserService.get_user(user_id)
        return {"user": public_user(user, member_id), "member": member}

    @staticmethod
    async def update_member(actor: Actor, member_id: str, data: UpdateMemberRequest) -> dict:
        """Update profile fields (admin only)"""
        decision = authorize(actor, ResourceKind.members, Action.update).require()

        current = await MemberService._fetch_member(member_id)

        fields = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if key in EDITABLE_COLUMNS and (value is not None or key == "emergency_contact")
        }

        if not fields:
            return _shape_member(current, decision)

        fields["updated_at"] = datetime.now(timezone.utc)
        assignments = ", ".join(f"{column} = :{column}" for column in fields)
        await database.execute(
            f"UPDATE members SET {assignments} WHERE id = :id",
            {**fields, "id": member_id}
        )

        logger.info("Member %s updated by %s", member_id, actor.username)
        return _shape_member(await MemberService._fetch_member(member_id), decision)

    @staticmethod
    async def delete_member(actor: Actor, member_id: str) -> None:
        """Delete a member together with their login, payments and RSVPs"""
        authorize(actor, ResourceKind.members, Action.delete).require()

        member = await MemberService._fetch_member(member_id)

        async with database.transaction():
            await database.execute("DELETE FROM event_rsvps WHERE member_id = :id", {"id": member_id})
            await database.execute("DELETE FROM payments WHERE member_id = :id", {"id": member_id})
            await database.execute("DELETE FROM members WHERE id = :id", {"id": member_id})
            await database.execute("DELETE FROM users WHERE id = :id", {"id": member["user_id"]})

        logger.info("Member %s (%s) deleted by %s", member_id, member["username"], actor.username)


member_service = MemberService()
