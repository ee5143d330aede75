"""
Seed the demo club
Admin, members, a prospect, a guest, events with RSVPs, dues and bylaws
"""

import sys
import asyncio
import argparse
import uuid
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clubhouse.database import database, connect_db, disconnect_db, create_tables
from clubhouse.auth import Actor, Role, hash_password
from clubhouse.schemas import (
    CreateMemberRequest,
    CreatePaymentRequest,
    CreateEventRequest,
    CreateRuleRequest,
    CreateUserRequest,
)
from clubhouse.services.user_service import UserService
from clubhouse.services.member_service import member_service
from clubhouse.services.payment_service import payment_service
from clubhouse.services.event_service import event_service
from clubhouse.services.rule_service import rule_service

ADMIN = {"username": "admin", "password": "admin123"}

MEMBERS = [
    {
        "username": "john_steel", "password": "member123", "role": "member",
        "road_name": "Steel", "real_name": "John Anderson", "phone": "555-0101",
        "email": "john@steelridersmc.com", "emergency_contact": "Jane Anderson - 555-0102",
        "join_date": "2020-03-15",
    },
    {
        "username": "mike_thunder", "password": "member123", "role": "member",
        "road_name": "Thunder", "real_name": "Mike Thompson", "phone": "555-0201",
        "email": "mike@steelridersmc.com", "emergency_contact": "Sarah Thompson - 555-0202",
        "join_date": "2021-06-20",
    },
    {
        "username": "jake_rookie", "password": "prospect123", "role": "prospect",
        "road_name": "Rookie", "real_name": "Jake Martinez", "phone": "555-0301",
        "email": "jake@steelridersmc.com", "emergency_contact": "Maria Martinez - 555-0302",
        "join_date": "2024-01-10",
    },
]

GUEST = {"username": "visitor", "password": "guest1234", "role": "guest"}

EVENTS = [
    {
        "title": "Weekly Chapter Meeting", "date": "2024-12-15T19:00:00Z", "time": "7:00 PM",
        "location": "Clubhouse", "type": "member",
        "description": "Regular chapter meeting to discuss club business and upcoming rides.",
    },
    {
        "title": "Holiday Charity Ride", "date": "2024-12-20T10:00:00Z", "time": "10:00 AM",
        "location": "Main Street Parking", "type": "public",
        "description": "Annual charity ride to raise funds for local children hospital. All riders welcome!",
    },
    {
        "title": "New Year Party", "date": "2024-12-31T20:00:00Z", "time": "8:00 PM",
        "location": "Clubhouse", "type": "private",
        "description": "Members-only New Year celebration. Bring your family!",
    },
]

# (event index, member index)
RSVPS = [(0, 0), (0, 1), (1, 0), (1, 2)]

PAYMENTS = [
    (0, {"amount": 50.0, "due_date": "2024-12-01", "paid_date": "2024-11-28T00:00:00Z", "status": "paid", "notes": "December dues"}),
    (1, {"amount": 50.0, "due_date": "2024-12-01", "paid_date": "2024-12-02T00:00:00Z", "status": "paid", "notes": "December dues"}),
    (2, {"amount": 30.0, "due_date": "2024-12-01", "status": "pending", "notes": "December prospect dues"}),
    (0, {"amount": 50.0, "due_date": "2025-01-01", "status": "pending", "notes": "January dues"}),
]

RULES = [
    ("Respect and Brotherhood", "All members must treat each other with respect and maintain the brotherhood of the club.", "general"),
    ("Meeting Attendance", "Members are required to attend at least 75% of chapter meetings unless excused.", "meetings"),
    ("Riding Formation", "When riding as a group, maintain staggered formation and follow the road captain signals.", "riding"),
    ("Club Colors", "Full patch members must wear their colors when riding or attending club events.", "conduct"),
    ("Dues Payment", "Monthly dues must be paid by the 1st of each month. Overdue payments may result in suspension.", "general"),
]


async def clear_database():
    """Remove every row, children first"""
    async with database.transaction():
        for table in ("event_rsvps", "payments", "rules", "events", "members", "users"):
            await database.execute(f"DELETE FROM {table}")
    print("🧹 Cleared existing data")


async def seed_database(reset: bool = False):
    create_tables()
    await connect_db()

    try:
        if reset:
            await clear_database()

        if await UserService.username_taken(ADMIN["username"]):
            print("✅ Database already seeded (use --reset to start over)")
            return

        admin_id = str(uuid.uuid4())
        await UserService.insert_user(admin_id, ADMIN["username"], hash_password(ADMIN["password"]), Role.admin.value)
        admin = Actor(user_id=admin_id, username=ADMIN["username"], role=Role.admin)
        print("👤 Created admin")

        members = []
        for data in MEMBERS:
            created = await member_service.create_member(admin, CreateMemberRequest(**data))
            members.append(created["member"])
        await UserService.create_user(admin, CreateUserRequest(**GUEST))
        print(f"👥 Created {len(members)} members and a guest")

        events = [await event_service.create_event(admin, CreateEventRequest(**data)) for data in EVENTS]
        print(f"📅 Created {len(events)} events")

        for event_index, member_index in RSVPS:
            member = members[member_index]
            rider = Actor(
                user_id=member["user_id"],
                username=member["username"],
                role=Role(member["role"]),
                member_id=member["id"],
            )
            await event_service.rsvp(rider, events[event_index]["id"])
        print(f"🙋 Created {len(RSVPS)} RSVPs")

        for member_index, data in PAYMENTS:
            await payment_service.create_payment(
                admin, CreatePaymentRequest(member_id=members[member_index]["id"], **data)
            )
        print(f"💵 Created {len(PAYMENTS)} payments")

        for order, (title, description, category) in enumerate(RULES, start=1):
            await rule_service.create_rule(
                admin, CreateRuleRequest(title=title, description=description, category=category, order=order)
            )
        print(f"📜 Created {len(RULES)} rules")

        print("✅ Seed completed successfully!")
        print(f"   Admin login: {ADMIN['username']} / {ADMIN['password']}")

    finally:
        await disconnect_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the demo club")
    parser.add_argument("--reset", action="store_true", help="Delete all existing rows first")
    args = parser.parse_args()

    asyncio.run(seed_database(reset=args.reset))
