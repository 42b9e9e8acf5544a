"""Search, sorting and field normalization for the profile list."""

from backend.db import Profile, TouchPoint

SORT_OPTIONS = ("newest", "oldest", "name", "activity")


def normalize_skills(skills: list[str] | None) -> list[str]:
    """Strip, drop blanks and case-insensitive duplicates; first spelling wins."""
    result = []
    seen = set()
    for skill in skills or []:
        cleaned = skill.strip()
        key = cleaned.casefold()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result


def matches(profile: Profile, term: str) -> bool:
    """Case-insensitive substring match on name, bio, expertise or any skill."""
    term = term.strip().casefold()
    if not term:
        return True

    fields = [profile.name, profile.bio, profile.expertise]
    if any(term in (value or "").casefold() for value in fields):
        return True
    return any(term in skill.casefold() for skill in (profile.skills or []))


def filter_profiles(profiles: list[Profile], term: str | None) -> list[Profile]:
    if not term or not term.strip():
        return list(profiles)
    return [p for p in profiles if matches(p, term)]


def latest_touch_points(touch_points: list[TouchPoint]) -> dict[str, TouchPoint]:
    """Newest touch point per profile id."""
    latest: dict[str, TouchPoint] = {}
    for tp in touch_points:
        current = latest.get(tp.profile_id)
        if current is None or tp.created_at > current.created_at:
            latest[tp.profile_id] = tp
    return latest


def sort_profiles(
    profiles: list[Profile],
    sort: str = "newest",
    latest: dict[str, TouchPoint] | None = None,
) -> list[Profile]:
    """Order profiles; unknown sort keys raise ValueError."""
    if sort not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option: {sort}")

    newest_first = sorted(profiles, key=lambda p: p.created_at, reverse=True)

    if sort == "newest":
        return newest_first
    if sort == "oldest":
        return sorted(profiles, key=lambda p: p.created_at)
    if sort == "name":
        # stable sort keeps newest-first among equal names
        return sorted(newest_first, key=lambda p: (p.name or "").casefold())

    latest = latest or {}
    with_activity = [p for p in newest_first if p.id in latest]
    without_activity = [p for p in newest_first if p.id not in latest]
    with_activity.sort(key=lambda p: latest[p.id].created_at, reverse=True)
    return with_activity + without_activity
