"""
Application configuration using Pydantic settings.

Re-exports from devconnector.config so backend modules can import
settings relative to the app package:
    from ..config import get_settings
"""

from devconnector.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
