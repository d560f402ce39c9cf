# Third-party API proxies (GitHub, Spotify)

from .github_api import fetch_github_repos
from .spotify_api import fetch_spotify_profile, get_spotify_token

__all__ = [
    "fetch_github_repos",
    "fetch_spotify_profile",
    "get_spotify_token",
]
