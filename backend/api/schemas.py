"""API request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

MAX_CONTENT_LENGTH = 5000


# User / auth schemas
class UserResponse(BaseModel):
    id: str
    email: str
    name: str | None
    avatar_url: str | None
    is_admin: bool

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    url: str


class SessionResponse(BaseModel):
    token: str
    expires_at: datetime
    user: UserResponse


class MentorResponse(BaseModel):
    id: str
    name: str
    avatar_url: str

    class Config:
        from_attributes = True


# Touch point schemas
class TouchPointCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("content must not be empty")
        if len(value) > MAX_CONTENT_LENGTH:
            raise ValueError(f"content must be at most {MAX_CONTENT_LENGTH} characters")
        return value


class TouchPointResponse(BaseModel):
    id: str
    profile_id: str
    author_id: str | None
    author_name: str
    author_avatar: str | None
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


# Comment schemas
class CommentCreate(TouchPointCreate):
    pass


class CommentResponse(BaseModel):
    id: str
    profile_id: str
    author_id: str
    author_name: str
    author_avatar: str | None
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


# Profile schemas
class ProfileFields(BaseModel):
    email: str | None = None
    phone: str | None = None
    age: int | None = Field(default=None, ge=1, le=100)
    education: str | None = None
    expertise: str | None = None
    resume_link: str | None = None
    interviewer_opinion: str | None = None
    skills: list[str] | None = None
    bio: str | None = None
    image_url: str | None = None


class ProfileCreate(ProfileFields):
    name: str = Field(..., max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class ProfileUpdate(ProfileFields):
    name: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class ProfileStatusUpdate(BaseModel):
    is_active: bool


class ProfileResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    age: int | None
    education: str
    expertise: str
    resume_link: str
    interviewer_opinion: str
    skills: list[str]
    bio: str
    image_url: str
    avatar_url: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    latest_touch_point: TouchPointResponse | None = None


class ProfileListResponse(BaseModel):
    profiles: list[ProfileResponse]
    total: int
