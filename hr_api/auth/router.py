"""Auth router: password login, token refresh, logout and the caller's profile."""


from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import extract_bearer, get_current_user
from hr_api.auth.models import User
from hr_api.auth.schemas import (
    LoginRequest,
    ProfileResponse,
    RefreshRequest,
    RefreshResponse,
    TokenResponse,
    UserInfo,
)
from hr_api.auth.service import (
    authenticate_user,
    create_session,
    get_user_profile,
    hash_token,
    refresh_access_token,
    revoke_session,
)
from hr_api.common.audit import create_audit_entry
from hr_api.common.rate_limit import limiter
from hr_api.config import settings
from hr_api.database import get_db

router = APIRouter(prefix="", tags=["auth"])


def _client(request: Request) -> tuple[Optional[str], Optional[str]]:
    host = request.client.host if request.client else None
    return host, request.headers.get("user-agent")


async def _audit_session(db: AsyncSession, request: Request, user: User, action: str) -> None:
    ip, user_agent = _client(request)
    await create_audit_entry(
        db,
        action=action,
        entity_type="user_session",
        entity_id=user.id,
        actor_id=user.id,
        ip_address=ip,
        user_agent=user_agent,
    )


# ── POST /login ─────────────────────────────────────────────────────

@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Exchange email and password for an access/refresh token pair.

    Every attempt, failed or not, counts against ``LOGIN_RATE_LIMIT`` for
    the calling address.
    """
    user = await authenticate_user(db, body.email, body.password)
    ip, user_agent = _client(request)
    access_token, refresh_token, expires_in = await create_session(db, user, ip, user_agent)
    await _audit_session(db, request, user, "login")

    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=expires_in,
        user=UserInfo.model_validate(user),
    )


# ── POST /refresh ───────────────────────────────────────────────────

@router.post("/refresh", response_model=RefreshResponse)
async def refresh_token(
    body: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    access_token, refresh_token, expires_in = await refresh_access_token(db, body.refresh_token)
    return RefreshResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=expires_in,
    )


# ── POST /logout ────────────────────────────────────────────────────

@router.post("/logout")
async def logout(
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await revoke_session(db, hash_token(extract_bearer(request)))
    await _audit_session(db, request, user, "logout")
    return {"message": "Logged out successfully"}


# ── GET /profile (also /me) ─────────────────────────────────────────

@router.get("/profile", response_model=ProfileResponse)
@router.get("/me", response_model=ProfileResponse, include_in_schema=False)
async def profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ProfileResponse.model_validate(await get_user_profile(db, user.id))
