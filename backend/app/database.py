"""
Database session dependency for the backend.

Re-exports from devconnector.db. Database initialization is handled
explicitly in main.py startup, NOT at import time.
"""

from devconnector.db import db, get_db

__all__ = ["db", "get_db"]
