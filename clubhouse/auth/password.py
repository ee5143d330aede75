"""
Password Hashing and Verification
bcrypt through passlib; rounds and minimum length come from settings
"""

import secrets
import string
from passlib.context import CryptContext
from clubhouse.config import settings
from clubhouse.errors import ValidationError

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

PASSWORD_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a login attempt against a stored hash

    Returns:
        False for a wrong password or a hash passlib cannot read
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def check_new_password(password: str) -> None:
    """
    Reject passwords below the configured minimum length

    Raises:
        ValidationError: Password is too short
    """
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )


def generate_random_password(length: int = 12) -> str:
    """Random letters and digits, never shorter than the configured minimum"""
    length = max(length, settings.MIN_PASSWORD_LENGTH)
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
