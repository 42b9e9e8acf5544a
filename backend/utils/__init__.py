"""Utility modules."""

from .avatar import get_avatar_url
from .directory import filter_profiles, latest_touch_points, normalize_skills, sort_profiles
from .mentors import Mentor, get_mentor, list_mentors

__all__ = [
    "get_avatar_url",
    "filter_profiles",
    "sort_profiles",
    "latest_touch_points",
    "normalize_skills",
    "Mentor",
    "get_mentor",
    "list_mentors",
]
