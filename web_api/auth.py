"""
JWT session utilities for the web API.

Sessions are issued by the upstream auth service; this module only reads
them. The token is an HS256 JWT in the "session" cookie whose "sub" claim
is the viewer id used by the entitlement ledger.
"""

import os
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import HTTPException, Request

JWT_SECRET = os.environ.get("JWT_SECRET")
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = 24
SESSION_COOKIE = "session"


def create_jwt(user_id: str, email: str | None = None) -> str:
    """
    Create a signed session token (dev tooling and tests).

    Args:
        user_id: The viewer id to put in "sub"
        email: Optional email claim

    Returns:
        Signed JWT token string
    """
    if not JWT_SECRET:
        raise ValueError("JWT_SECRET environment variable not set")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_jwt(token: str) -> dict | None:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded payload dict if valid, None if invalid or expired
    """
    if not JWT_SECRET:
        raise ValueError("JWT_SECRET environment variable not set")

    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


async def get_current_user(request: Request) -> dict:
    """
    FastAPI dependency to get the current authenticated user.

    Raises:
        HTTPException: 401 if not authenticated or invalid token
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = verify_jwt(token)
    if not payload or not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return payload


async def get_optional_user(request: Request) -> dict | None:
    """
    FastAPI dependency to optionally get the current user.

    Returns None for anonymous viewers instead of raising, so lesson pages
    can serve free content and previews without a session.
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None

    return verify_jwt(token)


async def get_viewer_id(request: Request) -> str | None:
    """The signed-in viewer's id, or None for anonymous viewers."""
    payload = await get_optional_user(request)
    if not payload:
        return None
    return payload.get("sub") or None
