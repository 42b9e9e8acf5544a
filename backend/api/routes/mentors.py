"""Mentor pseudo-identity endpoint."""

from fastapi import APIRouter

from backend.api.schemas import MentorResponse
from backend.utils.mentors import list_mentors

router = APIRouter()


@router.get("", response_model=list[MentorResponse])
def get_mentors():
    """List the mentors selectable without signing in."""
    return [MentorResponse.model_validate(m) for m in list_mentors()]
