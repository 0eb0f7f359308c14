"""Spotipy client setup, cleanup and the top-items knowledge source."""

import logging
from typing import Any

import requests
import spotipy
from spotipy.exceptions import SpotifyBaseException
from spotipy.oauth2 import SpotifyPKCE

from .config import SCOPE, TOKEN_CACHE_PATH, TOP_ITEMS_PAGE_SIZE
from .env import get_required_env
from .knowledge import KnowledgeFetchError
from .models import Category, ItemType


def configure_spotipy_logging() -> None:
    """Reduce Spotipy logger noise so gameplay output stays readable."""
    for logger_name in ("spotipy", "spotipy.client", "spotipy.oauth2"):
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.CRITICAL)
        logger.propagate = False


# Apply logging policy at import so all consumers get consistent behavior.
configure_spotipy_logging()


def create_spotify_client() -> spotipy.Spotify:
    """Create a PKCE-authenticated Spotipy client with retries and timeouts."""
    # SpotifyPKCE handles the browser auth flow, token refresh and cache management.
    auth_manager = SpotifyPKCE(
        client_id=get_required_env("SPOTIPY_CLIENT_ID"),
        redirect_uri=get_required_env("SPOTIPY_REDIRECT_URI"),
        scope=SCOPE,
        cache_path=str(TOKEN_CACHE_PATH),
        open_browser=True,
    )

    return spotipy.Spotify(
        auth_manager=auth_manager,
        requests_timeout=10,
        retries=3,
        status_retries=3,
    )


def is_authenticated(sp: spotipy.Spotify) -> bool:
    """True when a valid access token is cached for the client."""
    auth_manager = sp.auth_manager
    if auth_manager is None:
        return False

    token_info = auth_manager.cache_handler.get_cached_token()
    if not token_info:
        return False
    return not auth_manager.is_token_expired(token_info)


def close_sessions(sp: spotipy.Spotify) -> None:
    """Close HTTP sessions held by Spotipy objects."""
    for obj in (sp, sp.auth_manager):
        # Spotipy exposes sessions on private attributes.
        session = getattr(obj, "_session", None)
        close_fn = getattr(session, "close", None)
        if callable(close_fn):
            close_fn()


class SpotifyKnowledgeSource:
    """Fetches one page of the user's top artists or tracks per category."""

    def __init__(self, sp: spotipy.Spotify, limit: int = TOP_ITEMS_PAGE_SIZE) -> None:
        self.sp = sp
        self.limit = limit

    def fetch(self, category: Category) -> list[dict[str, Any]]:
        try:
            if category.item_type is ItemType.ARTIST:
                page = self.sp.current_user_top_artists(limit=self.limit, time_range=category.period.time_range)
            else:
                page = self.sp.current_user_top_tracks(limit=self.limit, time_range=category.period.time_range)
        except (SpotifyBaseException, requests.exceptions.RequestException) as exc:
            # Covers API errors, failed token refreshes and transport failures.
            raise KnowledgeFetchError(f"Could not fetch top {category.item_type.value}s: {exc}") from exc

        if not isinstance(page, dict):
            raise KnowledgeFetchError("Unexpected response from Spotify personalization endpoint.")

        items = page.get("items", [])
        return [item for item in items if isinstance(item, dict)]
