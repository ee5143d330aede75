"""
User Service
Identity store: login identities, credentials and roles
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from clubhouse.auth.password import check_new_password, hash_password, verify_password
from clubhouse.auth.policy import Action, Actor, ResourceKind, authorize
from clubhouse.database import database
from clubhouse.errors import Conflict, InternalError, NotFound, Unauthenticated, is_unique_violation
from clubhouse.schemas.user import CreateUserRequest

logger = logging.getLogger(__name__)

USER_QUERY = """
    SELECT u.id, u.username, u.role, u.created_at, m.id AS member_id
    FROM users u
    LEFT JOIN members m ON m.user_id = u.id
"""


class UserService:
    """Service for login identities"""

    @staticmethod
    async def username_taken(username: str) -> bool:
        existing = await database.fetch_one(
            "SELECT id FROM users WHERE username = :username",
            {"username": username}
        )
        return existing is not None

    @staticmethod
    async def insert_user(user_id: str, username: str, password_hash: str, role: str) -> None:
        """Insert a users row; callers own the transaction"""
        await database.execute(
            """
            INSERT INTO users (id, username, password_hash, role, created_at)
            VALUES (:id, :username, :password_hash, :role, :created_at)
            """,
            {
                "id": user_id,
                "username": username,
                "password_hash": password_hash,
                "role": role,
                "created_at": datetime.now(timezone.utc),
            }
        )

    @staticmethod
    async def get_user(user_id: str) -> dict:
        user = await database.fetch_one(
            USER_QUERY + " WHERE u.id = :id",
            {"id": user_id}
        )
        if not user:
            raise NotFound("User not found")
        return dict(user)

    @staticmethod
    async def list_users(actor: Actor) -> dict:
        """List every identity, with the member profile id when there is one"""
        authorize(actor, ResourceKind.users, Action.read).require()

        users = await database.fetch_all(USER_QUERY + " ORDER BY u.username")
        return {
            "total": len(users),
            "users": [dict(user) for user in users]
        }

    @staticmethod
    async def create_user(actor: Actor, data: CreateUserRequest) -> dict:
        """Create an identity with no member profile (guest, hangaround, ...)"""
        authorize(actor, ResourceKind.users, Action.create).require()

        if await UserService.username_taken(data.username):
            raise Conflict(f"Username '{data.username}' is already taken")

        user_id = str(uuid4())
        try:
            await UserService.insert_user(user_id, data.username, hash_password(data.password), data.role.value)
        except Exception as exc:
            if is_unique_violation(exc):
                raise Conflict(f"Username '{data.username}' is already taken")
            logger.exception("Failed to create user %s", data.username)
            raise InternalError("Failed to create user") from exc

        logger.info("User %s (%s) created by %s", data.username, data.role.value, actor.username)
        return await UserService.get_user(user_id)

    @staticmethod
    async def authenticate(username: str, password: str) -> dict:
        """
        Verify credentials

        Returns:
            User row plus `member_id` (None when the user has no profile)

        Raises:
            Unauthenticated: Unknown username or wrong password
        """
        user = await database.fetch_one(
            """
            SELECT u.id, u.username, u.password_hash, u.role, m.id AS member_id
            FROM users u
            LEFT JOIN members m ON m.user_id = u.id
            WHERE u.username = :username
            """,
            {"username": username}
        )

        if not user or not verify_password(password, user["password_hash"]):
            logger.info("Failed login for %s", username)
            raise Unauthenticated("Invalid username or password")

        user = dict(user)
        user.pop("password_hash")
        return user

    @staticmethod
    async def change_password(actor: Actor, current_password: str, new_password: str) -> None:
        """Change the actor's own password"""
        check_new_password(new_password)

        user = await database.fetch_one(
            "SELECT password_hash FROM users WHERE id = :id",
            {"id": actor.user_id}
        )
        if not user:
            raise Unauthenticated("Account no longer exists")

        if not verify_password(current_password, user["password_hash"]):
            raise Unauthenticated("Current password is incorrect")

        await database.execute(
            "UPDATE users SET password_hash = :password_hash WHERE id = :id",
            {"password_hash": hash_password(new_password), "id": actor.user_id}
        )
        logger.info("Password changed for %s", actor.username)


user_service = UserService()


def public_user(user: dict, member_id: Optional[str] = None) -> dict:
    """User fields safe to return"""
    return {
        "id": user["id"],
        "username": user["username"],
        "role": user["role"],
        "member_id": member_id if member_id is not None else user.get("member_id"),
        "created_at": user.get("created_at"),
    }
