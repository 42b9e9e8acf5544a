"""Request identity: session tokens, viewers and role checks."""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from fastapi import Cookie, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from backend.config import settings
from backend.db import AuthSession, Profile, User, get_db
from backend.utils.mentors import get_mentor, is_mentor_id

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session"


@dataclass
class Viewer:
    """Whoever is making the request: a signed-in user or a mentor."""

    id: str
    name: str
    avatar_url: str | None
    is_admin: bool = False
    user: User | None = None

    @property
    def is_mentor(self) -> bool:
        return is_mentor_id(self.id)


def as_utc(value: datetime) -> datetime:
    """Stored datetimes may come back naive; they are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def issue_session(db: Session, user: User) -> AuthSession:
    """Create a new session token for a user."""
    now = datetime.now(UTC)
    session = AuthSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(hours=settings.session_ttl_hours),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def resolve_session(db: Session, token: str) -> User | None:
    """Return the session's user, or None when unknown or expired."""
    session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if not session:
        return None

    if as_utc(session.expires_at) <= datetime.now(UTC):
        logger.info(f"Session for user {session.user_id} expired")
        db.delete(session)
        db.commit()
        return None

    return session.user


def extract_token(authorization: str | None, session_cookie: str | None) -> str | None:
    """Bearer header wins over the session cookie."""
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return session_cookie or None


def get_session_token(
    authorization: str | None = Header(None),
    session_cookie: str | None = Cookie(None, alias=SESSION_COOKIE),
) -> str | None:
    return extract_token(authorization, session_cookie)


def get_optional_user(
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
) -> User | None:
    if not token:
        return None
    return resolve_session(db, token)


def get_current_user(
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
) -> User:
    """Signed-in user, or 401."""
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")
    user = resolve_session(db, token)
    if not user:
        raise HTTPException(status_code=401, detail="Session expired or invalid")
    return user


def get_viewer(
    user: User | None = Depends(get_optional_user),
    x_mentor_id: str | None = Header(None, alias="X-Mentor-ID"),
) -> Viewer:
    """Signed-in user first, then the mentor named in X-Mentor-ID."""
    if user:
        return Viewer(
            id=user.id,
            name=user.name or user.email,
            avatar_url=user.avatar_url,
            is_admin=user.is_admin,
            user=user,
        )

    if x_mentor_id:
        mentor = get_mentor(x_mentor_id)
        if not mentor:
            raise HTTPException(status_code=401, detail="Unknown mentor")
        return Viewer(id=mentor.id, name=mentor.name, avatar_url=mentor.avatar_url)

    raise HTTPException(status_code=401, detail="Authentication required")


def require_user(viewer: Viewer = Depends(get_viewer)) -> User:
    """A real signed-in user; mentors are rejected."""
    if viewer.user is None:
        raise HTTPException(status_code=403, detail="Sign in required")
    return viewer.user


def get_visible_profile(db: Session, profile_id: str, viewer: Viewer) -> Profile:
    """Load a profile the viewer may see; inactive ones are admin-only."""
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile or (not profile.is_active and not viewer.is_admin):
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
