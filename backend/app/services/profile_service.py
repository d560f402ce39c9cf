"""
Profile management service functions.

Each public function is one unit of work: it reads, edits and commits the
profile in the given session, or raises a domain error and leaves the session
for the caller to roll back.
"""

import secrets
from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import Session

from devconnector.constants import PROFILE_SCALAR_FIELDS, SOCIAL_PLATFORMS, ProfileSection
from devconnector.exceptions import EntryNotFoundError, ProfileNotFoundError
from devconnector.logging import get_logger
from devconnector.models import Profile
from devconnector.repositories import ProfileRepository, UserRepository

from ..schemas import ProfileUpsertRequest

logger = get_logger("profile.service")


# =============================================================================
# Field building
# =============================================================================


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string into trimmed, non-empty names."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


def build_profile_fields(payload: ProfileUpsertRequest) -> dict[str, Any]:
    """
    Collect the profile fields present in a create/update request.

    Empty or missing values are left out entirely so that a merge never
    clears a stored value.
    """
    fields: dict[str, Any] = {}
    for name in PROFILE_SCALAR_FIELDS:
        value = getattr(payload, name)
        if value:
            fields[name] = value

    if payload.skills:
        fields["skills"] = parse_skills(payload.skills)

    social = {name: getattr(payload, name) for name in SOCIAL_PLATFORMS if getattr(payload, name)}
    if social:
        fields["social"] = social

    return fields


def generate_entry_id() -> str:
    """Generate a 24-hex-character identifier for a list entry."""
    return secrets.token_hex(12)


def _present_fields(model: BaseModel) -> dict[str, Any]:
    """Fields the client actually sent, JSON-ready and keyed by wire name."""
    data = model.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return {key: value for key, value in data.items() if value is not None and value != ""}


def _entry_fields(model: BaseModel) -> dict[str, Any]:
    # Creation keeps schema defaults (current=False) but drops absent optionals
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _find_entry_index(entries: list[dict[str, Any]], entry_id: str) -> int:
    for idx, entry in enumerate(entries):
        if entry.get("id") == entry_id:
            return idx
    return -1


# =============================================================================
# Reads
# =============================================================================


def resolve_user_id(raw: str) -> int:
    """Parse a user id from a URL segment; malformed ids count as not found."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ProfileNotFoundError(raw) from None


def get_profile_for_user(db: Session, user_id: int) -> Profile:
    """Fetch the profile for a user or raise ProfileNotFoundError."""
    profile = ProfileRepository(db).get_by_user_id(user_id)
    if profile is None:
        raise ProfileNotFoundError(user_id)
    return profile


def list_profiles(db: Session) -> list[Profile]:
    """All profiles with their owning users."""
    return ProfileRepository(db).list_with_users()


# =============================================================================
# Writes
# =============================================================================


def create_or_update_profile(db: Session, user_id: int, payload: ProfileUpsertRequest) -> Profile:
    """
    Create the user's profile, or merge the supplied fields into it.

    Repeating the same request against an existing profile leaves it unchanged.
    """
    fields = build_profile_fields(payload)
    profile, created = ProfileRepository(db).create_or_update(user_id, fields)
    db.commit()
    db.refresh(profile)

    logger.info(
        "profile_created" if created else "profile_updated",
        user_id=user_id,
        fields=sorted(fields),
    )
    return profile


def add_entry(
    db: Session,
    user_id: int,
    section: ProfileSection,
    entry: BaseModel,
) -> Profile:
    """Prepend a new experience/education entry with a fresh id."""
    profile = get_profile_for_user(db, user_id)

    new_entry = {"id": generate_entry_id(), **_entry_fields(entry)}
    entries = list(getattr(profile, section.value) or [])
    setattr(profile, section.value, [new_entry, *entries])

    db.commit()
    db.refresh(profile)

    logger.info(f"{section.value}_added", user_id=user_id, entry_id=new_entry["id"])
    return profile


def update_entry(
    db: Session,
    user_id: int,
    section: ProfileSection,
    entry_id: str,
    changes: BaseModel,
) -> Profile:
    """
    Overwrite the supplied fields of one entry in place.

    Raises:
        ProfileNotFoundError: the user has no profile
        EntryNotFoundError: no entry in the section has ``entry_id``
    """
    profile = get_profile_for_user(db, user_id)
    entries = list(getattr(profile, section.value) or [])

    idx = _find_entry_index(entries, entry_id)
    if idx < 0:
        raise EntryNotFoundError(section.value, entry_id)

    fields = _present_fields(changes)
    entries[idx] = {**entries[idx], **fields}
    setattr(profile, section.value, entries)

    db.commit()
    db.refresh(profile)

    logger.info(f"{section.value}_updated", user_id=user_id, entry_id=entry_id, fields=sorted(fields))
    return profile


def remove_entry(db: Session, user_id: int, section: ProfileSection, entry_id: str) -> Profile:
    """
    Remove exactly one entry, keeping the order of the rest.

    Raises:
        ProfileNotFoundError: the user has no profile
        EntryNotFoundError: no entry in the section has ``entry_id``
    """
    profile = get_profile_for_user(db, user_id)
    entries = list(getattr(profile, section.value) or [])

    idx = _find_entry_index(entries, entry_id)
    if idx < 0:
        raise EntryNotFoundError(section.value, entry_id)

    del entries[idx]
    setattr(profile, section.value, entries)

    db.commit()
    db.refresh(profile)

    logger.info(f"{section.value}_removed", user_id=user_id, entry_id=entry_id)
    return profile


def delete_account(db: Session, user_id: int) -> None:
    """
    Delete the user's profile and the user in a single transaction.

    Either both rows are gone afterwards or neither is.
    """
    try:
        profile_deleted = ProfileRepository(db).delete_for_user(user_id)
        user_deleted = UserRepository(db).delete_account(user_id)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("account_delete_failed", user_id=user_id)
        raise

    logger.info(
        "account_deleted",
        user_id=user_id,
        profile_deleted=profile_deleted,
        user_deleted=user_deleted,
    )
