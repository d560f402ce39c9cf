"""
Domain errors raised by services and upstream clients.

Routers translate these into HTTP responses; nothing here knows about HTTP.
"""


class DevConnectorError(Exception):
    """Base class for all DevConnector errors."""


class ProfileNotFoundError(DevConnectorError):
    """Raised when a user has no profile (or the user id cannot be resolved)."""

    def __init__(self, user_id: object):
        self.user_id = user_id
        super().__init__(f"No profile for user {user_id!r}")


class EntryNotFoundError(DevConnectorError):
    """Raised when an experience/education entry id is not in the profile."""

    def __init__(self, section: str, entry_id: str):
        self.section = section
        self.entry_id = entry_id
        super().__init__(f"No {section} entry with id {entry_id!r}")


class UpstreamError(DevConnectorError):
    """Raised when a third-party API call fails or is misconfigured."""

    def __init__(self, service: str, message: str, status_code: int | None = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class UpstreamNotFoundError(UpstreamError):
    """Raised when a third-party API answers with a non-success status."""


__all__ = [
    "DevConnectorError",
    "ProfileNotFoundError",
    "EntryNotFoundError",
    "UpstreamError",
    "UpstreamNotFoundError",
]
