"""
SQLAlchemy ORM models for the DevConnector backend.

Re-exports all models from devconnector.models.
"""

from devconnector.models import Base, Profile, User

__all__ = [
    "Base",
    "Profile",
    "User",
]
