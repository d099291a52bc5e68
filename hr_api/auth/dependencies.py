"""FastAPI dependencies that turn a bearer token into a ``User``.

A token is accepted only when its signature verifies, it is an *access*
token, and the ``user_sessions`` row issued with it is neither revoked nor
expired. Logging out therefore invalidates a token before its ``exp``.
"""

from __future__ import annotations

import uuid
from typing import Any, Callable

from fastapi import Depends, Request
from fastapi.exceptions import HTTPException
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.models import User, UserSession
from hr_api.auth.service import hash_token
from hr_api.common.audit import utcnow
from hr_api.common.constants import ROLE_LEVELS, UserRole
from hr_api.common.exceptions import ForbiddenException
from hr_api.config import settings
from hr_api.database import get_db

BEARER_PREFIX = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX) or not header[len(BEARER_PREFIX):].strip():
        raise _unauthorized("Missing or invalid Authorization header.")
    return header[len(BEARER_PREFIX):].strip()


def _decode_access_token(token: str) -> dict[str, Any]:
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise _unauthorized("Token has expired.")
    except JWTError:
        raise _unauthorized("Invalid token.")
    if claims.get("type") != "access":
        raise _unauthorized("Invalid token type.")
    return claims


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    token = extract_bearer(request)
    claims = _decode_access_token(token)

    live_session = await db.scalar(
        select(UserSession.id).where(
            UserSession.token_hash == hash_token(token),
            UserSession.is_revoked.is_(False),
            UserSession.expires_at > utcnow(),
        ),
    )
    if live_session is None:
        raise _unauthorized("Session invalid or expired.")

    try:
        user_id = uuid.UUID(claims["sub"])
    except (KeyError, ValueError):
        raise _unauthorized("Invalid token.")

    user = await db.scalar(select(User).where(User.id == user_id, User.is_active.is_(True)))
    if user is None:
        raise _unauthorized("User account is inactive or not found.")

    request.state.user_role = user.role
    return user


def has_role(user: User, *allowed_roles: UserRole) -> bool:
    """Roles are ranked; a user passes if ranked at least the lowest allowed role."""
    required = min(ROLE_LEVELS[r] for r in allowed_roles)
    return ROLE_LEVELS.get(user.role, 0) >= required


def require_role(*allowed_roles: UserRole) -> Callable:
    """Dependency factory: ``Depends(require_role(UserRole.manager))``."""

    async def _check(user: User = Depends(get_current_user)) -> User:
        if not has_role(user, *allowed_roles):
            allowed = ", ".join(r.value for r in allowed_roles)
            raise ForbiddenException(
                detail=f"Role '{user.role.value}' may not perform this action (requires {allowed}).",
            )
        return user

    return _check


def require_manager_for_status(user: User, fields_set: set[str]) -> None:
    """A generic PATCH may move ``status`` only when the caller is a manager or above."""
    if "status" in fields_set and not has_role(user, UserRole.manager):
        raise ForbiddenException(
            detail=f"Role '{user.role.value}' may not change the status of this record.",
        )
