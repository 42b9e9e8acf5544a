"""Profile endpoints."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from backend.api.deps import Viewer, get_viewer, get_visible_profile, require_admin
from backend.api.routes.touch_points import load_latest_touch_points
from backend.api.schemas import (
    ProfileCreate,
    ProfileListResponse,
    ProfileResponse,
    ProfileStatusUpdate,
    ProfileUpdate,
    TouchPointResponse,
)
from backend.db import Profile, TouchPoint, User, get_db
from backend.tools.image_storage import ImageStorage, StorageError, get_image_storage
from backend.utils.avatar import get_avatar_url
from backend.utils.directory import SORT_OPTIONS, filter_profiles, normalize_skills, sort_profiles

logger = logging.getLogger(__name__)

router = APIRouter()

# Nullable in the API, never null in the table
_TEXT_FIELDS = {
    "email",
    "phone",
    "education",
    "expertise",
    "resume_link",
    "interviewer_opinion",
    "bio",
    "image_url",
}


def to_profile_response(profile: Profile, latest: TouchPoint | None = None) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        name=profile.name,
        email=profile.email or "",
        phone=profile.phone or "",
        age=profile.age,
        education=profile.education or "",
        expertise=profile.expertise or "",
        resume_link=profile.resume_link or "",
        interviewer_opinion=profile.interviewer_opinion or "",
        skills=profile.skills or [],
        bio=profile.bio or "",
        image_url=profile.image_url or "",
        avatar_url=profile.image_url or get_avatar_url(profile.name),
        is_active=profile.is_active,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
        latest_touch_point=TouchPointResponse.model_validate(latest) if latest else None,
    )


def _apply_fields(profile: Profile, data: dict):
    for field, value in data.items():
        if field == "skills":
            value = normalize_skills(value)
        elif field in _TEXT_FIELDS and value is None:
            value = ""
        elif isinstance(value, str):
            value = value.strip()
        setattr(profile, field, value)


@router.get("", response_model=ProfileListResponse)
def list_profiles(
    q: str | None = None,
    sort: str = "newest",
    include_inactive: bool | None = None,
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """List profiles, optionally searched and sorted."""
    if sort not in SORT_OPTIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid sort option. Use one of: {', '.join(SORT_OPTIONS)}",
        )

    query = db.query(Profile)
    if not viewer.is_admin or include_inactive is False:
        query = query.filter(Profile.is_active.is_(True))

    profiles = filter_profiles(query.all(), q)
    latest = load_latest_touch_points(db, [p.id for p in profiles])
    ordered = sort_profiles(profiles, sort, latest)

    return ProfileListResponse(
        profiles=[to_profile_response(p, latest.get(p.id)) for p in ordered],
        total=len(ordered),
    )


@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """Get a single profile."""
    profile = get_visible_profile(db, profile_id, viewer)
    latest = load_latest_touch_points(db, [profile.id])
    return to_profile_response(profile, latest.get(profile.id))


@router.post("", response_model=ProfileResponse, status_code=201)
def create_profile(
    data: ProfileCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a profile (admin)."""
    profile = Profile(name=data.name, skills=[])
    _apply_fields(profile, data.model_dump(exclude_unset=True))
    db.add(profile)
    db.commit()
    db.refresh(profile)

    logger.info(f"Admin {admin.email} created profile {profile.id}")
    return to_profile_response(profile)


@router.put("/{profile_id}", response_model=ProfileResponse)
def update_profile(
    profile_id: str,
    data: ProfileUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Update the supplied fields of a profile (admin)."""
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    changes = data.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is None:
        raise HTTPException(status_code=400, detail="name must not be empty")

    previous_image = profile.image_url
    _apply_fields(profile, changes)
    profile.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(profile)

    if previous_image and previous_image != profile.image_url:
        storage.delete(previous_image)

    logger.info(f"Admin {admin.email} updated profile {profile.id}: {sorted(changes)}")
    latest = load_latest_touch_points(db, [profile.id])
    return to_profile_response(profile, latest.get(profile.id))


@router.patch("/{profile_id}/status", response_model=ProfileResponse)
def set_profile_status(
    profile_id: str,
    data: ProfileStatusUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Activate or deactivate a profile (admin)."""
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    profile.is_active = data.is_active
    profile.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(profile)

    logger.info(f"Admin {admin.email} set profile {profile.id} active={data.is_active}")
    latest = load_latest_touch_points(db, [profile.id])
    return to_profile_response(profile, latest.get(profile.id))


@router.delete("/{profile_id}")
def delete_profile(
    profile_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Delete a profile with its comments, touch points and stored image (admin)."""
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    image_url = profile.image_url
    db.delete(profile)
    db.commit()

    if image_url:
        storage.delete(image_url)

    logger.info(f"Admin {admin.email} deleted profile {profile_id}")
    return {"message": "Profile deleted"}


@router.post("/{profile_id}/image", response_model=ProfileResponse)
async def upload_profile_image(
    profile_id: str,
    file: UploadFile = File(...),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Upload a profile photo (admin); replaces the previous one."""
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    content = await file.read()
    if len(content) > storage.max_size:
        raise HTTPException(status_code=413, detail="Image too large")

    try:
        url = storage.upload(content, file.filename or "", profile.id)
    except StorageError as e:
        logger.warning(f"Rejected image upload for profile {profile.id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    previous = profile.image_url
    profile.image_url = url
    profile.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(profile)

    if previous and previous != url:
        storage.delete(previous)

    latest = load_latest_touch_points(db, [profile.id])
    return to_profile_response(profile, latest.get(profile.id))
