"""
Event Service
Club events, visibility by type, and member RSVPs
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Set
from uuid import uuid4

from clubhouse.auth.policy import (
    Action,
    Actor,
    Decision,
    ResourceKind,
    authorize,
    can_view_event,
    filter_visible_events,
)
from clubhouse.database import database
from clubhouse.errors import Conflict, Forbidden, InternalError, NotFound, is_unique_violation
from clubhouse.schemas.event import CreateEventRequest, UpdateEventRequest

logger = logging.getLogger(__name__)

EVENT_QUERY = """
    SELECT e.id, e.title, e.event_date, e.event_time, e.location, e.description,
           e.event_type, e.created_at,
           (SELECT COUNT(*) FROM event_rsvps r WHERE r.event_id = e.id) AS rsvp_count
    FROM events e
"""

# API field -> column
EVENT_COLUMNS = {
    "title": "title",
    "date": "event_date",
    "time": "event_time",
    "location": "location",
    "description": "description",
    "type": "event_type",
}


def _event_from_row(row) -> dict:
    return {
        "id": row["id"],
        "title": row["title"],
        "date": row["event_date"],
        "time": row["event_time"],
        "location": row["location"],
        "description": row["description"] or "",
        "type": row["event_type"],
        "created_at": row["created_at"],
        "rsvp_count": row["rsvp_count"] or 0,
    }


class EventService:
    """Service for events and RSVPs"""

    @staticmethod
    async def _fetch_event(event_id: str) -> dict:
        event = await database.fetch_one(
            EVENT_QUERY + " WHERE e.id = :id",
            {"id": event_id}
        )

        if not event:
            raise NotFound("Event not found")

        return _event_from_row(event)

    @staticmethod
    async def _fetch_visible_event(actor: Actor, event_id: str) -> dict:
        event = await EventService._fetch_event(event_id)
        if not can_view_event(actor, event["type"]):
            raise Forbidden("You do not have access to this event")
        return event

    @staticmethod
    async def _attending_event_ids(actor: Actor) -> Set[str]:
        if not actor.has_member_profile:
            return set()
        rows = await database.fetch_all(
            "SELECT event_id FROM event_rsvps WHERE member_id = :member_id",
            {"member_id": actor.member_id}
        )
        return {row["event_id"] for row in rows}

    @staticmethod
    async def _rsvp_lists(event_ids: List[str]) -> Dict[str, List[dict]]:
        """Attendees per event, in RSVP order"""
        if not event_ids:
            return {}
        placeholders = ", ".join(f":event_{index}" for index in range(len(event_ids)))
        rows = await database.fetch_all(
            f"""
            SELECT r.event_id, r.member_id, m.road_name
            FROM event_rsvps r
            JOIN members m ON m.id = r.member_id
            WHERE r.event_id IN ({placeholders})
            ORDER BY r.created_at
            """,
            {f"event_{index}": event_id for index, event_id in enumerate(event_ids)}
        )
        attendees = {event_id: [] for event_id in event_ids}
        for row in rows:
            attendees[row["event_id"]].append({"member_id": row["member_id"], "road_name": row["road_name"]})
        return attendees

    @staticmethod
    async def _shape_events(actor: Actor, decision: Decision, events: List[dict]) -> List[dict]:
        """Add `attending` for everyone and the attendee list for admins"""
        attending = await EventService._attending_event_ids(actor)
        rsvp_lists = (
            await EventService._rsvp_lists([event["id"] for event in events])
            if decision.see_rsvp_list else {}
        )
        for event in events:
            event["attending"] = event["id"] in attending
            event["rsvps"] = rsvp_lists.get(event["id"], []) if decision.see_rsvp_list else None
        return events

    @staticmethod
    async def list_events(actor: Actor, upcoming_only: bool = False) -> dict:
        """List events whose type the actor may see, soonest first"""
        decision = authorize(actor, ResourceKind.events, Action.read).require()

        query = EVENT_QUERY
        params = {}
        if upcoming_only:
            query += " WHERE e.event_date >= :now"
            params["now"] = datetime.now(timezone.utc)
        query += " ORDER BY e.event_date ASC"

        rows = await database.fetch_all(query, params)
        events = filter_visible_events(actor, [_event_from_row(row) for row in rows])
        events = await EventService._shape_events(actor, decision, events)

        return {
            "total": len(events),
            "events": events
        }

    @staticmethod
    async def get_event(actor: Actor, event_id: str) -> dict:
        """Get one event the actor may see"""
        decision = authorize(actor, ResourceKind.events, Action.read).require()
        event = await EventService._fetch_visible_event(actor, event_id)
        return (await EventService._shape_events(actor, decision, [event]))[0]

    @staticmethod
    async def create_event(actor: Actor, data: CreateEventRequest) -> dict:
        """Create an event"""
        decision = authorize(actor, ResourceKind.events, Action.create).require()

        event_id = str(uuid4())
        await database.execute(
            """
            INSERT INTO events
            (id, title, event_date, event_time, location, description, event_type, created_by, created_at)
            VALUES (:id, :title, :event_date, :event_time, :location, :description, :event_type, :created_by, :created_at)
            """,
            {
                "id": event_id,
                "title": data.title,
                "event_date": data.date,
                "event_time": data.time,
                "location": data.location,
                "description": data.description,
                "event_type": data.type.value,
                "created_by": actor.user_id,
                "created_at": datetime.now(timezone.utc),
            }
        )

        logger.info("Event %s (%s) created by %s", event_id, data.type.value, actor.username)
        event = await EventService._fetch_event(event_id)
        return (await EventService._shape_events(actor, decision, [event]))[0]

    @staticmethod
    async def update_event(actor: Actor, event_id: str, data: UpdateEventRequest) -> dict:
        """Update an event (admin only)"""
        decision = authorize(actor, ResourceKind.events, Action.update).require()

        event = await EventService._fetch_event(event_id)

        fields = {
            EVENT_COLUMNS[key]: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }

        if fields:
            if "event_type" in fields:
                fields["event_type"] = fields["event_type"].value
            assignments = ", ".join(f"{column} = :{column}" for column in fields)
            await database.execute(
                f"UPDATE events SET {assignments} WHERE id = :id",
                {**fields, "id": event_id}
            )
            logger.info("Event %s updated by %s", event_id, actor.username)
            event = await EventService._fetch_event(event_id)

        return (await EventService._shape_events(actor, decision, [event]))[0]

    @staticmethod
    async def delete_event(actor: Actor, event_id: str) -> None:
        """Delete an event and its RSVPs (admin only)"""
        authorize(actor, ResourceKind.events, Action.delete).require()

        await EventService._fetch_event(event_id)

        async with database.transaction():
            await database.execute("DELETE FROM event_rsvps WHERE event_id = :id", {"id": event_id})
            await database.execute("DELETE FROM events WHERE id = :id", {"id": event_id})

        logger.info("Event %s deleted by %s", event_id, actor.username)

    @staticmethod
    async def rsvp(actor: Actor, event_id: str) -> dict:
        """
        RSVP the actor to an event

        The unique (event_id, member_id) constraint is the real guard; the
        lookup before the insert only gives a friendlier error on the common path.
        """
        authorize(actor, ResourceKind.rsvps, Action.create).require()
        await EventService._fetch_visible_event(actor, event_id)

        member = await database.fetch_one(
            "SELECT id, road_name FROM members WHERE id = :id",
            {"id": actor.member_id}
        )
        if not member:
            raise Forbidden("Member profile no longer exists")

        existing = await database.fetch_one(
            "SELECT id FROM event_rsvps WHERE event_id = :event_id AND member_id = :member_id",
            {"event_id": event_id, "member_id": actor.member_id}
        )
        if existing:
            raise Conflict("Already RSVPed to this event")

        rsvp_id = str(uuid4())
        created_at = datetime.now(timezone.utc)
        try:
            await database.execute(
                """
                INSERT INTO event_rsvps (id, event_id, member_id, created_at)
                VALUES (:id, :event_id, :member_id, :created_at)
                """,
                {"id": rsvp_id, "event_id": event_id, "member_id": actor.member_id, "created_at": created_at}
            )
        except Exception as exc:
            if is_unique_violation(exc):
                raise Conflict("Already RSVPed to this event")
            logger.exception("RSVP insert failed for event %s", event_id)
            raise InternalError("Failed to RSVP to event") from exc

        logger.info("Member %s RSVPed to event %s", actor.member_id, event_id)
        return {
            "id": rsvp_id,
            "event_id": event_id,
            "member_id": actor.member_id,
            "road_name": member["road_name"],
            "created_at": created_at,
        }

    @staticmethod
    async def cancel_rsvp(actor: Actor, event_id: str) -> None:
        """Cancel the actor's own RSVP"""
        authorize(actor, ResourceKind.rsvps, Action.delete, owner_member_id=actor.member_id).require()
        await EventService._fetch_visible_event(actor, event_id)

        existing = await database.fetch_one(
            "SELECT id FROM event_rsvps WHERE event_id = :event_id AND member_id = :member_id",
            {"event_id": event_id, "member_id": actor.member_id}
        )
        if not existing:
            raise NotFound("You have not RSVPed to this event")

        await database.execute(
            "DELETE FROM event_rsvps WHERE id = :id",
            {"id": existing["id"]}
        )
        logger.info("Member %s cancelled RSVP to event %s", actor.member_id, event_id)


event_service = EventService()
