"""Developer profile repository."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import joinedload

from devconnector.models import Profile

from .base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations."""

    model = Profile

    def get_by_user_id(self, user_id: int) -> Profile | None:
        """Get profile by user ID, with the owning user loaded."""
        return (
            self.session.query(Profile)
            .options(joinedload(Profile.user))
            .filter(Profile.user_id == user_id)
            .first()
        )

    def list_with_users(self) -> list[Profile]:
        """Get every profile with its owning user loaded in the same query."""
        return self.session.query(Profile).options(joinedload(Profile.user)).order_by(Profile.id).all()

    def create_or_update(self, user_id: int, fields: dict[str, Any]) -> tuple[Profile, bool]:
        """
        Create a profile or merge fields into the existing one.

        Only keys present in ``fields`` are written; everything else on an
        existing profile is left untouched. ``social`` is merged per platform.

        Returns:
            (profile, created)
        """
        profile = self.get_by_user_id(user_id)

        if profile is None:
            return self.create(user_id=user_id, **fields), True

        for key, value in fields.items():
            if key == "social":
                merged = dict(profile.social or {})
                merged.update(value)
                profile.social = merged
            else:
                setattr(profile, key, value)
        profile.updated_at = datetime.now(timezone.utc)

        self.session.flush()
        return profile, False

    def delete_for_user(self, user_id: int) -> bool:
        """Delete the user's profile if one exists."""
        profile = self.session.query(Profile).filter(Profile.user_id == user_id).first()
        if profile is None:
            return False
        self.session.delete(profile)
        self.session.flush()
        return True
