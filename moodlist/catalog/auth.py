import asyncio
import time
from typing import Callable, Dict, Optional

import httpx

from moodlist.config import (
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_TOKEN_URL,
)
from moodlist.core import CatalogAuthError, log_step

# Refresh this many seconds before the token actually expires
TOKEN_EXPIRY_MARGIN = 60


class SpotifyTokenProvider:
    """
    Client-credentials access token for the Spotify Web API.

    The token is cached in memory with the time it was obtained and fetched
    again once it gets within TOKEN_EXPIRY_MARGIN seconds of expires_in.
    Concurrent searches share one refresh.
    """

    def __init__(
        self,
        client_id: Optional[str] = SPOTIFY_CLIENT_ID,
        client_secret: Optional[str] = SPOTIFY_CLIENT_SECRET,
        token_url: str = SPOTIFY_TOKEN_URL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self._clock = clock
        self._token_info: Optional[Dict] = None
        self._lock = asyncio.Lock()

    def _is_expired(self, token_info: Dict) -> bool:
        now = int(self._clock())
        expires_in = token_info.get("expires_in", 3600)
        return now - token_info.get("timestamp", 0) > expires_in - TOKEN_EXPIRY_MARGIN

    async def get_token(self, client: httpx.AsyncClient) -> str:
        async with self._lock:
            if self._token_info is None or self._is_expired(self._token_info):
                self._token_info = await self._fetch_token(client)
            return self._token_info["access_token"]

    def invalidate(self) -> None:
        """Drop the cached token (e.g. after a 401)."""
        self._token_info = None

    async def _fetch_token(self, client: httpx.AsyncClient) -> Dict:
        if not self.client_id or not self.client_secret:
            raise CatalogAuthError("Spotify client credentials are not configured.")

        log_step("Requesting Spotify access token...")
        try:
            r = await client.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
            )
            r.raise_for_status()
            token_info = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise CatalogAuthError(f"Could not obtain Spotify access token: {e}") from e

        if not isinstance(token_info, dict) or not token_info.get("access_token"):
            raise CatalogAuthError("Spotify token response has no access_token.")

        token_info["timestamp"] = int(self._clock())
        return token_info
