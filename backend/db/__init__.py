"""Database package."""

from backend.db.base import Base, get_db, init_db
from backend.db.tables import (
    AuthSession,
    Comment,
    Profile,
    TouchPoint,
    User,
)

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "User",
    "AuthSession",
    "Profile",
    "Comment",
    "TouchPoint",
]
