"""GitHub API client for the public repository proxy."""

from typing import Any

import requests  # type: ignore[import-untyped]

from devconnector.config import get_settings
from devconnector.constants import GITHUB_API_BASE, GITHUB_REPOS_PER_PAGE, GITHUB_USER_AGENT
from devconnector.exceptions import UpstreamError, UpstreamNotFoundError
from devconnector.logging import get_logger, log_timing

logger = get_logger("github")


def _get_headers() -> dict[str, str]:
    """Get headers for GitHub API requests."""
    headers = {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": GITHUB_USER_AGENT,
    }
    token = get_settings().github_token
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


@log_timing("github_repos")
def fetch_github_repos(username: str) -> list[dict[str, Any]]:
    """
    Fetch a user's oldest public repositories.

    Args:
        username: GitHub login

    Returns:
        Up to five repositories, sorted by creation date ascending, exactly as
        GitHub returned them.

    Raises:
        UpstreamNotFoundError: GitHub answered with any non-200 status
        UpstreamError: the request could not be completed
    """
    url = f"{GITHUB_API_BASE}/users/{username}/repos"
    params = {"per_page": GITHUB_REPOS_PER_PAGE, "sort": "created", "direction": "asc"}

    try:
        response = requests.get(
            url,
            headers=_get_headers(),
            params=params,
            timeout=get_settings().http_timeout_seconds,
        )
    except requests.RequestException as e:
        logger.error("github_request_exception", error=str(e), username=username)
        raise UpstreamError("github", str(e)) from e

    if response.status_code != 200:
        logger.info("github_not_found", status=response.status_code, username=username)
        raise UpstreamNotFoundError(
            "github", f"status {response.status_code}", status_code=response.status_code
        )

    try:
        return response.json()
    except ValueError as e:
        logger.error("github_invalid_body", error=str(e), username=username)
        raise UpstreamError("github", "response body is not JSON") from e
