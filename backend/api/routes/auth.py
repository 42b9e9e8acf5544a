"""Sign-in endpoints: Google OAuth login, callback, current user, logout."""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime

from cachetools import TTLCache
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from backend.api.deps import (
    SESSION_COOKIE,
    get_current_user,
    get_session_token,
    issue_session,
)
from backend.api.limiter import limiter
from backend.api.schemas import LoginResponse, SessionResponse, UserResponse
from backend.config import settings
from backend.db import AuthSession, User, get_db
from backend.tools.google_oauth import GoogleOAuthClient, OAuthError, get_oauth_client

logger = logging.getLogger(__name__)

router = APIRouter()

# Pending login states (state -> issued at). Single use, expire after oauth_state_ttl.
_pending_states: TTLCache = TTLCache(maxsize=1000, ttl=settings.oauth_state_ttl)


@dataclass
class ProviderIdentity:
    """User data as reported by the OAuth provider."""

    provider_id: str
    email: str
    name: str
    avatar_url: str

    @classmethod
    def from_userinfo(cls, info: dict) -> "ProviderIdentity":
        return cls(
            provider_id=str(info.get("sub") or info.get("id") or ""),
            email=info.get("email") or "",
            name=info.get("full_name") or info.get("name") or "",
            avatar_url=info.get("avatar_url") or info.get("picture") or "",
        )


def reconcile_user(db: Session, identity: ProviderIdentity) -> User:
    """Create or refresh the user row for a provider identity.

    Name and avatar already stored in the database win; the provider's
    values only fill empty fields. Admin flag is never cleared here.
    """
    user = db.query(User).filter(User.provider_id == identity.provider_id).first()
    if not user:
        user = User(provider_id=identity.provider_id, is_admin=False)
        db.add(user)
        logger.info(f"Created user for {identity.email or identity.provider_id}")

    user.email = identity.email
    if not user.name:
        user.name = identity.name or None
    if not user.avatar_url:
        user.avatar_url = identity.avatar_url or None

    admin_emails = {e.strip().lower() for e in settings.admin_emails if e.strip()}
    if identity.email and identity.email.lower() in admin_emails:
        user.is_admin = True

    user.last_login_at = datetime.now(UTC)
    db.commit()
    db.refresh(user)
    return user


@router.get("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(
    request: Request,
    oauth: GoogleOAuthClient = Depends(get_oauth_client),
):
    """Start Google sign-in; returns the consent URL."""
    if not oauth.configured:
        raise HTTPException(status_code=503, detail="Google sign-in is not configured")

    state = secrets.token_urlsafe(24)
    _pending_states[state] = datetime.now(UTC)
    return LoginResponse(url=oauth.authorization_url(state))


@router.get("/callback", response_model=SessionResponse)
def oauth_callback(
    response: Response,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    db: Session = Depends(get_db),
    oauth: GoogleOAuthClient = Depends(get_oauth_client),
):
    """Finish Google sign-in and issue a session."""
    if error:
        logger.warning(f"OAuth provider returned error: {error}")
        raise HTTPException(status_code=401, detail="OAuth sign-in failed")
    if not code:
        raise HTTPException(status_code=400, detail="Missing authorization code")
    if not state or _pending_states.pop(state, None) is None:
        raise HTTPException(status_code=400, detail="Invalid or expired OAuth state")

    try:
        info = oauth.sign_in(code)
    except OAuthError as e:
        logger.error(f"OAuth callback failed: {e}")
        raise HTTPException(status_code=401, detail="OAuth sign-in failed")

    user = reconcile_user(db, ProviderIdentity.from_userinfo(info))
    session = issue_session(db, user)

    response.set_cookie(
        SESSION_COOKIE,
        session.token,
        httponly=True,
        samesite="lax",
        max_age=settings.session_ttl_hours * 3600,
    )
    return SessionResponse(
        token=session.token,
        expires_at=session.expires_at,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    """Get the signed-in user."""
    return UserResponse.model_validate(user)


@router.post("/logout")
def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    """End the current session."""
    if token:
        db.query(AuthSession).filter(AuthSession.token == token).delete()
        db.commit()
    response.delete_cookie(SESSION_COOKIE)
    return {"message": "Signed out"}
