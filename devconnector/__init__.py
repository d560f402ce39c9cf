"""
DevConnector core library.

Provides configuration, logging, database management, models, repositories
and upstream API clients for the profile service.

Usage:
    # Database
    from devconnector.db import db, get_db
    from devconnector.models import Profile, User
    from devconnector.repositories import ProfileRepository

    # Config
    from devconnector.config import get_settings

    # Logging
    from devconnector.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"
