"""
Pydantic schemas for request and response validation.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from devconnector.constants import REQUIRED_FIELD_MESSAGES


# =============================================================================
# Profile
# =============================================================================


class ProfileUpsertRequest(BaseModel):
    status: str = Field(min_length=1)
    skills: str = Field(min_length=1, description="Comma-separated skills, e.g. 'python, sql'")

    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None

    # Social links
    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    @field_validator("skills")
    @classmethod
    def skills_not_blank(cls, v: str) -> str:
        """Reject input such as " , " that names no skill."""
        if not any(part.strip() for part in v.split(",")):
            raise PydanticCustomError("skills_blank", REQUIRED_FIELD_MESSAGES["skills"])
        return v


class ProfileOwner(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar: str | None = None


# =============================================================================
# Experience / Education entries
# =============================================================================


class _EntryBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class ExperienceCreateRequest(_EntryBase):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str | None = None


class EducationCreateRequest(_EntryBase):
    school: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    fieldofstudy: str = Field(min_length=1)


class ExperienceUpdateRequest(BaseModel):
    """Partial update: only fields sent in the body are written."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    company: str | None = None
    location: str | None = None
    from_date: date | None = Field(default=None, alias="from")
    to: date | None = None
    current: bool | None = None
    description: str | None = None


class EducationUpdateRequest(BaseModel):
    """Partial update: only fields sent in the body are written."""

    model_config = ConfigDict(populate_by_name=True)

    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = None
    from_date: date | None = Field(default=None, alias="from")
    to: date | None = None
    current: bool | None = None
    description: str | None = None


class ExperienceEntry(ExperienceCreateRequest):
    id: str


class EducationEntry(EducationCreateRequest):
    id: str


class ProfileResponse(BaseModel):
    id: int
    user: ProfileOwner
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Generic bodies
# =============================================================================


class MessageResponse(BaseModel):
    msg: str


class FieldError(BaseModel):
    msg: str
    param: str
    location: str = "body"
    value: Any | None = None


class ValidationErrorResponse(BaseModel):
    errors: list[FieldError]
