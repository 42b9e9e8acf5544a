"""Comment endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from backend.api.deps import Viewer, get_viewer, get_visible_profile, require_user
from backend.api.limiter import limiter
from backend.api.schemas import CommentCreate, CommentResponse
from backend.db import Comment, User, get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{profile_id}/comments", response_model=list[CommentResponse])
def list_comments(
    profile_id: str,
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """List comments on a profile, newest first."""
    profile = get_visible_profile(db, profile_id, viewer)
    comments = (
        db.query(Comment)
        .filter(Comment.profile_id == profile.id)
        .order_by(Comment.created_at.desc())
        .all()
    )
    return [CommentResponse.model_validate(c) for c in comments]


@router.post("/{profile_id}/comments", response_model=CommentResponse, status_code=201)
@limiter.limit("10/minute")
def add_comment(
    request: Request,
    profile_id: str,
    data: CommentCreate,
    user: User = Depends(require_user),
    viewer: Viewer = Depends(get_viewer),
    db: Session = Depends(get_db),
):
    """Comment on a profile (signed-in users only)."""
    profile = get_visible_profile(db, profile_id, viewer)

    comment = Comment(
        profile_id=profile.id,
        author_id=user.id,
        author_name=user.name or user.email,
        author_avatar=user.avatar_url,
        content=data.content,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info(f"Comment added to profile {profile.id} by {user.id}")
    return CommentResponse.model_validate(comment)
