"""Auth service: password login, JWT management, session lifecycle."""

from __future__ import annotations

import hashlib
import logging
import uuid
from datetime import timedelta
from typing import Optional

from fastapi.exceptions import HTTPException
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.auth.models import User, UserSession
from hr_api.common.audit import utcnow
from hr_api.common.constants import UserRole
from hr_api.common.exceptions import ConflictError, ForbiddenException
from hr_api.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


# ── Passwords ───────────────────────────────────────────────────────

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


# ── Users ───────────────────────────────────────────────────────────

async def create_user(
    db: AsyncSession,
    email: str,
    password: str,
    role: UserRole = UserRole.employee,
    is_active: bool = True,
) -> User:
    """Create a login account with a bcrypt-hashed password."""
    email = email.lower()
    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.first() is not None:
        raise ConflictError.duplicate("email", email)

    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    await db.flush()
    logger.info("Created user %s with role %s", user.id, role.value)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    """Return the active user for these credentials, or raise 401.

    Unknown email, inactive account and wrong password all produce the
    same response.
    """
    result = await db.execute(select(User).where(User.email == email.lower()))
    user = result.scalars().first()
    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        logger.warning("Rejected login for %s", email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return user


async def get_user_profile(db: AsyncSession, user_id: uuid.UUID) -> User:
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .options(selectinload(User.employee))
        .execution_options(populate_existing=True),
    )
    return result.scalars().one()


# ── Tokens ──────────────────────────────────────────────────────────

def hash_token(token: str) -> str:
    """Sessions store a SHA-256 digest, never the token itself."""
    return hashlib.sha256(token.encode()).hexdigest()


def _encode(claims: dict, lifetime: timedelta) -> str:
    # jti keeps two tokens minted in the same second distinct
    body = {**claims, "jti": uuid.uuid4().hex, "exp": utcnow() + lifetime}
    return jwt.encode(body, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _access_lifetime() -> timedelta:
    return timedelta(hours=settings.JWT_EXPIRY_HOURS)


def _issue_pair(user: User) -> tuple[str, str]:
    access = _encode(
        {"sub": str(user.id), "email": user.email, "role": user.role.value, "type": "access"},
        _access_lifetime(),
    )
    refresh = _encode(
        {"sub": str(user.id), "type": "refresh"},
        timedelta(days=settings.REFRESH_EXPIRY_DAYS),
    )
    return access, refresh


# ── Sessions ────────────────────────────────────────────────────────

async def create_session(
    db: AsyncSession,
    user: User,
    ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> tuple[str, str, int]:
    """Mint a token pair for *user* and record it as a live session.

    Returns ``(access_token, refresh_token, expires_in_seconds)``.
    """
    access_token, refresh_token = _issue_pair(user)
    lifetime = _access_lifetime()
    db.add(
        UserSession(
            user_id=user.id,
            token_hash=hash_token(access_token),
            refresh_token_hash=hash_token(refresh_token),
            ip_address=ip,
            user_agent=user_agent,
            expires_at=utcnow() + lifetime,
        ),
    )
    await db.flush()
    return access_token, refresh_token, int(lifetime.total_seconds())


async def refresh_access_token(
    db: AsyncSession,
    refresh_token_str: str,
) -> tuple[str, str, int]:
    """Trade a refresh token for a fresh pair, consuming the old session.

    Refresh tokens are single use. A consumed token presented again is
    treated as stolen: every session of its user is revoked and committed
    before the 403 is raised.
    """
    try:
        claims = jwt.decode(
            refresh_token_str, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        raise ForbiddenException(detail="Invalid or expired refresh token.")
    if claims.get("type") != "refresh":
        raise ForbiddenException(detail="Invalid token type.")

    session = await db.scalar(
        select(UserSession).where(UserSession.refresh_token_hash == hash_token(refresh_token_str)),
    )
    if session is None:
        raise ForbiddenException(detail="Invalid refresh token.")

    if session.is_revoked:
        logger.warning("Refresh token reuse for user %s; revoking all sessions", session.user_id)
        await revoke_all_user_sessions(db, session.user_id)
        await db.commit()
        raise ForbiddenException(
            detail="Refresh token reuse detected. All sessions revoked for security.",
        )

    session.is_revoked = True
    user = await db.get(User, session.user_id)
    if user is None or not user.is_active:
        raise ForbiddenException(detail="User account is inactive or not found.")
    return await create_session(db, user, session.ip_address, session.user_agent)


async def revoke_all_user_sessions(db: AsyncSession, user_id: uuid.UUID) -> int:
    """Revoke every live session of *user_id*; returns how many were live."""
    result = await db.execute(
        update(UserSession)
        .where(UserSession.user_id == user_id, UserSession.is_revoked.is_(False))
        .values(is_revoked=True)
        .execution_options(synchronize_session="fetch"),
    )
    return result.rowcount


async def revoke_session(db: AsyncSession, token_hash: str) -> None:
    session = await db.scalar(select(UserSession).where(UserSession.token_hash == token_hash))
    if session is not None:
        session.is_revoked = True
        await db.flush()
