"""Mentor pseudo-identities: a fixed list, selectable without signing in."""

from dataclasses import dataclass

from backend.config import settings
from backend.utils.avatar import get_avatar_url

MENTOR_PREFIX = "mentor-"


@dataclass(frozen=True)
class Mentor:
    id: str
    name: str
    avatar_url: str


def list_mentors(names: list[str] | None = None) -> list[Mentor]:
    names = settings.mentor_names if names is None else names
    return [
        Mentor(id=f"{MENTOR_PREFIX}{i}", name=name, avatar_url=get_avatar_url(name))
        for i, name in enumerate(names, start=1)
    ]


def get_mentor(mentor_id: str, names: list[str] | None = None) -> Mentor | None:
    if not mentor_id.startswith(MENTOR_PREFIX):
        return None
    for mentor in list_mentors(names):
        if mentor.id == mentor_id:
            return mentor
    return None


def is_mentor_id(author_id: str | None) -> bool:
    return bool(author_id) and author_id.startswith(MENTOR_PREFIX)
