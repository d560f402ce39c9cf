"""
Profile management endpoints.

Mounted at ``{api_prefix}/profile``. Write routes act on the authenticated
user's own profile; reads of other profiles and the upstream proxies are
public.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from devconnector.api import fetch_github_repos, fetch_spotify_profile
from devconnector.constants import (
    MSG_INTERNAL_SERVER_ERROR,
    MSG_NO_GITHUB_PROFILE,
    MSG_NO_PROFILE_FOR_USER,
    MSG_PROFILE_NOT_FOUND,
    MSG_SERVER_ERROR,
    MSG_USER_REMOVED,
    SECTION_LABELS,
    ProfileSection,
)
from devconnector.exceptions import (
    EntryNotFoundError,
    ProfileNotFoundError,
    UpstreamError,
    UpstreamNotFoundError,
)

from ..auth.dependencies import get_current_user
from ..database import get_db
from ..models import Profile, User
from ..schemas import (
    EducationCreateRequest,
    EducationEntry,
    EducationUpdateRequest,
    ExperienceCreateRequest,
    ExperienceEntry,
    ExperienceUpdateRequest,
    MessageResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpsertRequest,
)
from ..services import profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Convert Profile to response, embedding the owner's name and avatar."""
    return ProfileResponse(
        id=profile.id,
        user=ProfileOwner.model_validate(profile.user),
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        status=profile.status,
        githubusername=profile.githubusername,
        skills=profile.skills or [],
        social=profile.social or {},
        experience=[ExperienceEntry.model_validate(e) for e in profile.experience or []],
        education=[EducationEntry.model_validate(e) for e in profile.education or []],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def _no_profile() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MSG_NO_PROFILE_FOR_USER)


def _entry_not_found(section: ProfileSection) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"{SECTION_LABELS[section]} not found",
    )


# =============================================================================
# Profile
# =============================================================================


@router.get("/me", response_model=ProfileResponse, response_model_exclude_none=True)
def get_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get current user's profile."""
    try:
        profile = profile_service.get_profile_for_user(db, current_user.id)
    except ProfileNotFoundError:
        raise _no_profile() from None
    return _profile_to_response(profile)


@router.post("", response_model=ProfileResponse, response_model_exclude_none=True)
def create_or_update_profile(
    payload: ProfileUpsertRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create the current user's profile, or update it.

    Only fields present in the body are written; stored fields that are not
    sent keep their values.
    """
    profile = profile_service.create_or_update_profile(db, current_user.id, payload)
    return _profile_to_response(profile)


@router.get("", response_model=list[ProfileResponse], response_model_exclude_none=True)
def list_profiles(db: Session = Depends(get_db)):
    """Get all profiles."""
    return [_profile_to_response(p) for p in profile_service.list_profiles(db)]


@router.get("/user/{user_id}", response_model=ProfileResponse, response_model_exclude_none=True)
def get_profile_by_user(user_id: str, db: Session = Depends(get_db)):
    """
    Get a profile by user id.

    A malformed id gets the same answer as a user without a profile.
    """
    try:
        uid = profile_service.resolve_user_id(user_id)
        profile = profile_service.get_profile_for_user(db, uid)
    except ProfileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MSG_PROFILE_NOT_FOUND,
        ) from None
    return _profile_to_response(profile)


@router.delete("", response_model=MessageResponse)
def delete_account(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the current user's profile and account together."""
    profile_service.delete_account(db, current_user.id)
    return MessageResponse(msg=MSG_USER_REMOVED)


# =============================================================================
# Experience / Education
# =============================================================================


def _add(db: Session, user: User, section: ProfileSection, entry) -> ProfileResponse:
    try:
        profile = profile_service.add_entry(db, user.id, section, entry)
    except ProfileNotFoundError:
        raise _no_profile() from None
    return _profile_to_response(profile)


def _update(db: Session, user: User, section: ProfileSection, entry_id: str, changes) -> ProfileResponse:
    try:
        profile = profile_service.update_entry(db, user.id, section, entry_id, changes)
    except ProfileNotFoundError:
        raise _no_profile() from None
    except EntryNotFoundError:
        raise _entry_not_found(section) from None
    return _profile_to_response(profile)


def _remove(db: Session, user: User, section: ProfileSection, entry_id: str) -> ProfileResponse:
    try:
        profile = profile_service.remove_entry(db, user.id, section, entry_id)
    except ProfileNotFoundError:
        raise _no_profile() from None
    except EntryNotFoundError:
        raise _entry_not_found(section) from None
    return _profile_to_response(profile)


@router.put("/experience", response_model=ProfileResponse, response_model_exclude_none=True)
def add_experience(
    payload: ExperienceCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an experience entry to the top of the list."""
    return _add(db, current_user, ProfileSection.EXPERIENCE, payload)


@router.put("/experience/{exp_id}", response_model=ProfileResponse, response_model_exclude_none=True)
def update_experience(
    exp_id: str,
    payload: ExperienceUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the supplied fields of one experience entry."""
    return _update(db, current_user, ProfileSection.EXPERIENCE, exp_id, payload)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse, response_model_exclude_none=True)
def delete_experience(
    exp_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove one experience entry."""
    return _remove(db, current_user, ProfileSection.EXPERIENCE, exp_id)


@router.put("/education", response_model=ProfileResponse, response_model_exclude_none=True)
def add_education(
    payload: EducationCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an education entry to the top of the list."""
    return _add(db, current_user, ProfileSection.EDUCATION, payload)


@router.put("/education/{edu_id}", response_model=ProfileResponse, response_model_exclude_none=True)
def update_education(
    edu_id: str,
    payload: EducationUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the supplied fields of one education entry."""
    return _update(db, current_user, ProfileSection.EDUCATION, edu_id, payload)


@router.delete("/education/{edu_id}", response_model=ProfileResponse, response_model_exclude_none=True)
def delete_education(
    edu_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove one education entry."""
    return _remove(db, current_user, ProfileSection.EDUCATION, edu_id)


# =============================================================================
# Upstream proxies
# =============================================================================


@router.get("/github/{username}")
def get_github_repos(username: str) -> list[dict[str, Any]]:
    """Relay a user's five oldest public GitHub repositories."""
    try:
        return fetch_github_repos(username)
    except UpstreamNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=MSG_NO_GITHUB_PROFILE,
        ) from None
    except UpstreamError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MSG_SERVER_ERROR,
        ) from None


@router.get("/spotify")
def get_spotify_profile() -> dict[str, Any]:
    """Relay the configured Spotify user's public profile."""
    try:
        return fetch_spotify_profile()
    except UpstreamError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MSG_INTERNAL_SERVER_ERROR,
        ) from None
