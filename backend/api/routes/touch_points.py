"""Touch point endpoints: status notes from users and mentors."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from backend.api.deps import Viewer, get_viewer, get_visible_profile
from backend.api.limiter import limiter
from backend.api.schemas import TouchPointCreate, TouchPointResponse
from backend.db import Profile, TouchPoint, get_db
from backend.utils.directory import latest_touch_points

logger = logging.getLogger(__name__)

router = APIRouter()


def load_latest_touch_points(db: Session, profile_ids: list[str]) -> dict[str, TouchPoint]:
    """Newest touch point for each of the given profiles."""
    if not profile_ids:
        return {}
    touch_points = db.query(TouchPoint).filter(TouchPoint.profile_id.in_(profile_ids)).all()
    return latest_touch_points(touch_points)


@router.get("/profiles/{profile_id}/touch-points", response_model=list[TouchPointResponse])
def list_touch_points(
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """List a profile's touch points, newest first."""
    profile = get_visible_profile(db, profile_id, viewer)
    touch_points = (
        db.query(TouchPoint)
        .filter(TouchPoint.profile_id == profile.id)
        .order_by(TouchPoint.created_at.desc())
        .all()
    )
    return [TouchPointResponse.model_validate(tp) for tp in touch_points]


@router.get("/profiles/{profile_id}/touch-points/latest", response_model=TouchPointResponse | None)
def get_latest_touch_point(
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """The newest touch point of a profile, or null."""
    profile = get_visible_profile(db, profile_id, viewer)
    touch_point = (
        db.query(TouchPoint)
        .filter(TouchPoint.profile_id == profile.id)
        .order_by(TouchPoint.created_at.desc())
        .first()
    )
    return TouchPointResponse.model_validate(touch_point) if touch_point else None


@router.get("/touch-points/latest", response_model=dict[str, TouchPointResponse])
def get_latest_touch_points(
    profile_id: list[str] = Query(default=[]),
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """Newest touch point per profile; profiles without any are omitted."""
    ids = list(dict.fromkeys(profile_id))
    if ids and not viewer.is_admin:
        # Inactive profiles stay hidden from non-admins
        active = db.query(Profile.id).filter(Profile.id.in_(ids), Profile.is_active.is_(True)).all()
        ids = [row.id for row in active]

    latest = load_latest_touch_points(db, ids)
    return {pid: TouchPointResponse.model_validate(tp) for pid, tp in latest.items()}


@router.post(
    "/profiles/{profile_id}/touch-points",
    response_model=TouchPointResponse,
    status_code=201,
)
@limiter.limit("10/minute")
def add_touch_point(
    request: Request,
    profile_id: str,
    data: TouchPointCreate,
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """Add a touch point as the current user or mentor."""
    profile = get_visible_profile(db, profile_id, viewer)

    touch_point = TouchPoint(
        profile_id=profile.id,
        author_id=None if viewer.is_mentor else viewer.id,
        author_name=viewer.name,
        author_avatar=viewer.avatar_url,
        content=data.content,
    )
    db.add(touch_point)
    db.commit()
    db.refresh(touch_point)

    logger.info(f"Touch point added to profile {profile.id} by {viewer.id}")
    return TouchPointResponse.model_validate(touch_point)
