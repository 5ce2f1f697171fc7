from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from moodlist.config import CATALOG_TIMEOUT_SECONDS, SPOTIFY_API_BASE
from moodlist.core import CatalogSearchError, Track

from .auth import SpotifyTokenProvider

# Spotify rejects search limits outside 1..50
_MAX_SEARCH_LIMIT = 50


class CatalogClient(ABC):
    """
    Abstract music catalog.

    search_tracks() returns at most `limit` tracks for one free-text term, in
    the catalog's relevance order, and raises CatalogSearchError on failure.
    """

    @abstractmethod
    async def search_tracks(self, term: str, limit: int) -> List[Track]:
        raise NotImplementedError


def track_from_catalog_item(item: Any) -> Optional[Track]:
    """
    Map one Spotify track object to a Track.

    Artwork and preview are optional. Returns None for null entries and
    entries without an id.
    """
    if not isinstance(item, dict) or not item.get("id"):
        return None

    artists = item.get("artists") or []
    first_artist = artists[0] if artists and isinstance(artists[0], dict) else {}

    album = item.get("album") or {}
    images = album.get("images") or []
    first_image = images[0] if images and isinstance(images[0], dict) else {}

    external_urls = item.get("external_urls") or {}

    return Track(
        id=str(item["id"]),
        title=item.get("name") or "",
        artist=first_artist.get("name") or "",
        album_art_url=first_image.get("url") or None,
        preview_url=item.get("preview_url") or None,
        external_url=external_urls.get("spotify") or "",
    )


class SpotifyCatalog(CatalogClient):
    """
    CatalogClient backed by the Spotify Web API search endpoint.

    When no http_client is injected, each search opens its own short-lived
    httpx.AsyncClient.
    """

    def __init__(
        self,
        tokens: Optional[SpotifyTokenProvider] = None,
        api_base: str = SPOTIFY_API_BASE,
        timeout: float = CATALOG_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.tokens = tokens or SpotifyTokenProvider()
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._http = http_client

    async def search_tracks(self, term: str, limit: int) -> List[Track]:
        if self._http is not None:
            return await self._search(self._http, term, limit)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._search(client, term, limit)

    async def _search(
        self,
        client: httpx.AsyncClient,
        term: str,
        limit: int,
    ) -> List[Track]:
        params = {
            "q": term,
            "type": "track",
            "limit": max(1, min(limit, _MAX_SEARCH_LIMIT)),
        }
        try:
            r = await self._get(client, f"{self.api_base}/search", params)
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as e:
            raise CatalogSearchError(
                f"Spotify search returned HTTP {e.response.status_code}",
                term=term,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise CatalogSearchError(f"Spotify search failed: {e}", term=term) from e

        if not isinstance(data, dict):
            raise CatalogSearchError("Unexpected Spotify search payload", term=term)

        items = (data.get("tracks") or {}).get("items") or []
        tracks: List[Track] = []
        for item in items:
            track = track_from_catalog_item(item)
            if track is not None:
                tracks.append(track)
        return tracks

    async def _get(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Dict[str, Any],
    ) -> httpx.Response:
        token = await self.tokens.get_token(client)
        r = await client.get(url, params=params, headers=_bearer(token))
        if r.status_code == 401:
            # Token revoked or expired early: fetch a fresh one and retry once.
            self.tokens.invalidate()
            token = await self.tokens.get_token(client)
            r = await client.get(url, params=params, headers=_bearer(token))
        return r


def _bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
