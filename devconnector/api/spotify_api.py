"""
Spotify Web API client.

Uses the client-credentials flow: the app's own client id/secret are
exchanged for a short-lived bearer token, which is then used for a single
public profile lookup. Credentials come from settings only.
"""

from typing import Any

import requests  # type: ignore[import-untyped]

from devconnector.config import get_settings
from devconnector.constants import SPOTIFY_ACCOUNTS_TOKEN_URL, SPOTIFY_API_BASE
from devconnector.exceptions import UpstreamError
from devconnector.logging import get_logger, log_timing

logger = get_logger("spotify")


def get_spotify_token() -> str:
    """
    Exchange the configured client credentials for an access token.

    Raises:
        UpstreamError: credentials missing, transport failure, or non-200 reply
    """
    settings = get_settings()
    if not settings.spotify_configured:
        logger.error("spotify_not_configured")
        raise UpstreamError("spotify", "client credentials are not configured")

    try:
        response = requests.post(
            SPOTIFY_ACCOUNTS_TOKEN_URL,
            data={"grant_type": "client_credentials"},
            auth=(settings.spotify_client_id, settings.spotify_client_secret),
            timeout=settings.http_timeout_seconds,
        )
    except requests.RequestException as e:
        logger.error("spotify_token_exception", error=str(e))
        raise UpstreamError("spotify", str(e)) from e

    if response.status_code != 200:
        logger.error("spotify_token_rejected", status=response.status_code)
        raise UpstreamError(
            "spotify", "token exchange failed", status_code=response.status_code
        )

    try:
        token = response.json().get("access_token")
    except ValueError as e:
        logger.error("spotify_token_invalid_body", error=str(e))
        raise UpstreamError("spotify", "token response is not JSON") from e

    if not token:
        logger.error("spotify_token_missing")
        raise UpstreamError("spotify", "token response had no access_token")
    return token


@log_timing("spotify_profile")
def fetch_spotify_profile(username: str | None = None) -> dict[str, Any]:
    """Fetch a public Spotify user profile (the configured one by default)."""
    settings = get_settings()
    username = username or settings.spotify_profile_user
    token = get_spotify_token()

    try:
        response = requests.get(
            f"{SPOTIFY_API_BASE}/users/{username}",
            headers={"Authorization": f"Bearer {token}"},
            timeout=settings.http_timeout_seconds,
        )
    except requests.RequestException as e:
        logger.error("spotify_request_exception", error=str(e), username=username)
        raise UpstreamError("spotify", str(e)) from e

    if response.status_code != 200:
        logger.error("spotify_profile_failed", status=response.status_code, username=username)
        raise UpstreamError(
            "spotify", f"status {response.status_code}", status_code=response.status_code
        )

    try:
        return response.json()
    except ValueError as e:
        logger.error("spotify_profile_invalid_body", error=str(e), username=username)
        raise UpstreamError("spotify", "profile response is not JSON") from e
