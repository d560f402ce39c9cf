"""
SQLAlchemy models for DevConnector.

Usage:
    from devconnector.models import Profile, User
"""

from .base import Base
from .profile import Profile
from .user import User

__all__ = [
    "Base",
    "Profile",
    "User",
]
