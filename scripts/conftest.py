"""Shared fixtures: in-memory database, test client, signed-in users."""

import os
import sys
import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path

# Add project root to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

# Keep uploads out of the working tree
os.environ.setdefault("MEDIA_DIR", tempfile.mkdtemp(prefix="profile-directory-media-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.api.app import app
from backend.api.deps import issue_session
from backend.api.limiter import limiter
from backend.db import Base, Profile, TouchPoint, User, get_db
from backend.tools.image_storage import ImageStorage, get_image_storage


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage(tmp_path):
    return ImageStorage(tmp_path / "media", "/media", max_size=1024)


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: storage
    limiter.enabled = False
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.enabled = True


def _make_user(db, email: str, name: str | None, is_admin: bool) -> tuple[User, dict]:
    user = User(
        provider_id=f"google-{email}",
        email=email,
        name=name,
        avatar_url=f"https://avatars.example/{email}.png",
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    session = issue_session(db, user)
    return user, {"Authorization": f"Bearer {session.token}"}


@pytest.fixture
def user_and_headers(db):
    return _make_user(db, "reader@example.com", "Reader", is_admin=False)


@pytest.fixture
def user_headers(user_and_headers):
    return user_and_headers[1]


@pytest.fixture
def admin_headers(db):
    return _make_user(db, "admin@example.com", "Admin", is_admin=True)[1]


@pytest.fixture
def mentor_headers():
    return {"X-Mentor-ID": "mentor-1"}


@pytest.fixture
def make_profile(db):
    """Insert a profile; created_at defaults to one minute apart per call."""
    base = datetime(2020, 1, 1, tzinfo=UTC)
    counter = {"n": 0}

    def _make(name: str, **fields) -> Profile:
        counter["n"] += 1
        fields.setdefault("created_at", base + timedelta(minutes=counter["n"]))
        fields.setdefault("updated_at", fields["created_at"])
        fields.setdefault("skills", [])
        profile = Profile(name=name, **fields)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def make_touch_point(db):
    def _make(profile: Profile, content: str, created_at: datetime, author_name: str = "Mentor") -> TouchPoint:
        tp = TouchPoint(
            profile_id=profile.id,
            author_id=None,
            author_name=author_name,
            content=content,
            created_at=created_at,
        )
        db.add(tp)
        db.commit()
        db.refresh(tp)
        return tp

    return _make
