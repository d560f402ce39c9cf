"""
Application-wide constants for DevConnector.

Usage:
    from devconnector.constants import SOCIAL_PLATFORMS, GITHUB_API_BASE
"""

from enum import Enum

# =============================================================================
# Profile Fields
# =============================================================================

# Scalar profile fields copied verbatim from a create/update request
PROFILE_SCALAR_FIELDS = (
    "company",
    "website",
    "location",
    "bio",
    "status",
    "githubusername",
)

# Platforms accepted in the nested social-links document
SOCIAL_PLATFORMS = (
    "youtube",
    "facebook",
    "twitter",
    "instagram",
    "linkedin",
)


class ProfileSection(str, Enum):
    """Ordered sub-lists embedded in a profile."""

    EXPERIENCE = "experience"
    EDUCATION = "education"


# Human-readable singular used in not-found messages
SECTION_LABELS = {
    ProfileSection.EXPERIENCE: "Experience",
    ProfileSection.EDUCATION: "Education",
}

# =============================================================================
# Error Messages
# =============================================================================

MSG_NO_PROFILE_FOR_USER = "There is no profile for this user"
MSG_PROFILE_NOT_FOUND = "Profile Not Found"
MSG_USER_REMOVED = "User removed"
MSG_NO_GITHUB_PROFILE = "No Github profile found"
MSG_SERVER_ERROR = "Server Error"
MSG_INTERNAL_SERVER_ERROR = "Internal Server Error"
MSG_NO_TOKEN = "No token, authorization denied"
MSG_INVALID_TOKEN = "Token is not valid"

# Field-level messages reported when a required request field is missing
REQUIRED_FIELD_MESSAGES = {
    "status": "Status is required.",
    "skills": "Skills is required.",
    "title": "Title is required",
    "company": "Company is required",
    "from": "From date is required",
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of Study is required",
}

# =============================================================================
# Upstream API Constants
# =============================================================================

GITHUB_API_BASE = "https://api.github.com"
GITHUB_REPOS_PER_PAGE = 5
GITHUB_USER_AGENT = "DevConnector/1.0"

SPOTIFY_ACCOUNTS_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"


__all__ = [
    "PROFILE_SCALAR_FIELDS",
    "SOCIAL_PLATFORMS",
    "ProfileSection",
    "SECTION_LABELS",
    "MSG_NO_PROFILE_FOR_USER",
    "MSG_PROFILE_NOT_FOUND",
    "MSG_USER_REMOVED",
    "MSG_NO_GITHUB_PROFILE",
    "MSG_SERVER_ERROR",
    "MSG_INTERNAL_SERVER_ERROR",
    "MSG_NO_TOKEN",
    "MSG_INVALID_TOKEN",
    "REQUIRED_FIELD_MESSAGES",
    "GITHUB_API_BASE",
    "GITHUB_REPOS_PER_PAGE",
    "GITHUB_USER_AGENT",
    "SPOTIFY_ACCOUNTS_TOKEN_URL",
    "SPOTIFY_API_BASE",
]
