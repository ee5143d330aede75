"""
Authentication Dependencies
JWT token handling and actor resolution
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from clubhouse.auth.policy import Actor, Role
from clubhouse.config import settings
from clubhouse.errors import Unauthenticated

# Security scheme; missing header is our own 401, not FastAPI's 403
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token
    
    Args:
        data: Data to encode in token
        expires_delta: Token expiration time
        
    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    
    to_encode.update({"exp": expire})
    
    encoded_jwt = jwt.encode(
        to_encode, 
        settings.JWT_SECRET_KEY, 
        algorithm=settings.JWT_ALGORITHM
    )
    
    return encoded_jwt


def create_session_token(user: dict, member_id: Optional[str]) -> str:
    """Token carrying exactly what the policy needs: role and member id"""
    return create_access_token({
        "sub": str(user["id"]),
        "username": user["username"],
        "role": user["role"],
        "member_id": member_id,
    })


def decode_access_token(token: str) -> dict:
    """
    Decode JWT access token
    
    Args:
        token: JWT token string
        
    Returns:
        Decoded token payload
        
    Raises:
        Unauthenticated: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token, 
            settings.JWT_SECRET_KEY, 
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise Unauthenticated("Could not validate credentials")


def actor_from_payload(payload: dict) -> Actor:
    """Build the actor from a decoded token, rejecting malformed sessions"""
    user_id = payload.get("sub")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise Unauthenticated("Invalid authentication credentials")
    
    if not user_id:
        raise Unauthenticated("Invalid authentication credentials")
    
    return Actor(
        user_id=user_id,
        username=payload.get("username") or "",
        role=role,
        member_id=payload.get("member_id") or None,
    )


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Actor:
    """
    Get current authenticated actor from the bearer token
    
    Raises:
        Unauthenticated: No token, or token is invalid
    """
    if credentials is None:
        raise Unauthenticated()
    
    return actor_from_payload(decode_access_token(credentials.credentials))
