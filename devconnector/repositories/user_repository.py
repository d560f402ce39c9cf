"""User repository for account removal."""

from devconnector.logging import get_logger
from devconnector.models import User

from .base import BaseRepository

logger = get_logger("repository.user")


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def delete_account(self, user_id: int) -> bool:
        """Delete the user row. The caller owns the transaction."""
        deleted = self.delete(user_id)
        if not deleted:
            logger.warning("user_delete_missing", user_id=user_id)
        return deleted
