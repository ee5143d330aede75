"""
Pytest configuration and fixtures for Clubhouse tests
"""

import os
import tempfile
from pathlib import Path

# Settings are read at import time, so point them at a throwaway database first
_TEST_DB = Path(tempfile.mkdtemp()) / "clubhouse_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from clubhouse.auth import create_access_token, hash_password
from clubhouse.database import Base, create_tables, engine
from clubhouse.main import app
from clubhouse.models import User

ADMIN_PASSWORD = "admin-pass-123"


def auth_headers(user_id: str, username: str, role: str, member_id: str = None) -> dict:
    """Bearer header for a session with the given role and member id"""
    token = create_access_token({
        "sub": user_id,
        "username": username,
        "role": role,
        "member_id": member_id,
    })
    return {"Authorization": f"Bearer {token}"}


def member_payload(username: str, road_name: str, role: str = "member", **overrides) -> dict:
    payload = {
        "username": username,
        "password": f"{username}-pass",
        "role": role,
        "road_name": road_name,
        "real_name": f"{road_name} Rider",
        "phone": "555-0100",
        "email": f"{username}@steelridersmc.com",
        "emergency_contact": f"Next of kin of {road_name} - 555-0199",
        "join_date": "2021-06-20",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def client():
    """Client against a freshly created schema"""
    Base.metadata.drop_all(bind=engine)
    create_tables()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def admin_headers(client):
    """Admin login inserted straight into the identity store"""
    user_id = str(uuid4())
    with engine.begin() as connection:
        connection.execute(
            User.__table__.insert().values(
                id=user_id,
                username="admin",
                password_hash=hash_password(ADMIN_PASSWORD),
                role="admin",
                created_at=datetime.now(timezone.utc),
            )
        )
    return auth_headers(user_id, "admin", "admin")


@pytest.fixture()
def make_member(client, admin_headers):
    """Create a roster member through the API; returns the member with session headers"""

    def _make(username: str, road_name: str, role: str = "member", **overrides) -> dict:
        response = client.post(
            "/members",
            json=member_payload(username, road_name, role, **overrides),
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        body = response.json()
        member = body["member"]
        return {
            **member,
            "headers": auth_headers(body["user"]["id"], username, role, member["id"]),
        }

    return _make


@pytest.fixture()
def roster(make_member):
    """Two full members and a prospect"""
    return {
        "steel": make_member("john_steel", "Steel"),
        "thunder": make_member("mike_thunder", "Thunder"),
        "rookie": make_member("jake_rookie", "Rookie", role="prospect"),
    }


@pytest.fixture()
def make_user(client, admin_headers):
    """Create a login without a member profile; returns session headers"""

    def _make(username: str, role: str) -> dict:
        response = client.post(
            "/users",
            json={"username": username, "password": f"{username}-pass", "role": role},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        user = response.json()
        return auth_headers(user["id"], username, role)

    return _make


@pytest.fixture()
def guest_headers(make_user):
    return make_user("visitor", "guest")


@pytest.fixture()
def hangaround_headers(make_user):
    return make_user("hawk", "hangaround")
