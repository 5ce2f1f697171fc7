from typing import Dict, List

import httpx
import pytest

from moodlist.catalog import SpotifyCatalog, SpotifyTokenProvider, track_from_catalog_item
from moodlist.core import CatalogAuthError, CatalogSearchError

TOKEN_URL = "https://accounts.test/api/token"
API_BASE = "https://api.test/v1"


def _item(track_id: str, **overrides) -> Dict:
    item = {
        "id": track_id,
        "name": f"Song {track_id}",
        "artists": [{"name": "Sia"}, {"name": "Guest"}],
        "album": {"images": [{"url": f"https://img/{track_id}.jpg"}]},
        "preview_url": f"https://preview/{track_id}.mp3",
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
    }
    item.update(overrides)
    return item


class SpotifyStub:
    """Records requests and answers like the token and search endpoints."""

    def __init__(self, items: List, search_statuses: List[int] = None) -> None:
        self.items = items
        self.search_statuses = list(search_statuses or [])
        self.token_requests = 0
        self.search_requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            self.token_requests += 1
            return httpx.Response(
                200,
                json={"access_token": f"token-{self.token_requests}", "expires_in": 3600},
            )

        self.search_requests.append(request)
        status = self.search_statuses.pop(0) if self.search_statuses else 200
        if status != 200:
            return httpx.Response(status, json={"error": {"status": status}})
        return httpx.Response(200, json={"tracks": {"items": self.items}})


def _catalog(stub: SpotifyStub, clock=lambda: 1_000_000.0) -> SpotifyCatalog:
    tokens = SpotifyTokenProvider(
        client_id="id",
        client_secret="secret",
        token_url=TOKEN_URL,
        clock=clock,
    )
    client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
    return SpotifyCatalog(tokens=tokens, api_base=API_BASE, http_client=client)


def test_track_from_catalog_item_maps_fields() -> None:
    track = track_from_catalog_item(_item("abc"))

    assert track.id == "abc"
    assert track.title == "Song abc"
    assert track.artist == "Sia"
    assert track.album_art_url == "https://img/abc.jpg"
    assert track.preview_url == "https://preview/abc.mp3"
    assert track.external_url == "https://open.spotify.com/track/abc"


def test_track_from_catalog_item_tolerates_missing_optional_fields() -> None:
    track = track_from_catalog_item(
        _item("abc", album={"images": []}, preview_url=None, external_urls={})
    )

    assert track is not None
    assert track.album_art_url is None
    assert track.preview_url is None
    assert track.external_url == ""


def test_track_from_catalog_item_skips_unusable_entries() -> None:
    assert track_from_catalog_item(None) is None
    assert track_from_catalog_item({"name": "no id"}) is None


@pytest.mark.asyncio
async def test_search_sends_term_and_limit_with_bearer_token() -> None:
    stub = SpotifyStub([_item("1"), None, _item("2", preview_url=None)])
    catalog = _catalog(stub)

    tracks = await catalog.search_tracks("melancholy", 5)

    assert [t.id for t in tracks] == ["1", "2"]
    assert tracks[1].preview_url is None
    request = stub.search_requests[0]
    assert request.url.params["q"] == "melancholy"
    assert request.url.params["type"] == "track"
    assert request.url.params["limit"] == "5"
    assert request.headers["Authorization"] == "Bearer token-1"


@pytest.mark.asyncio
async def test_token_is_reused_until_expiry() -> None:
    now = [1_000_000.0]
    stub = SpotifyStub([_item("1")])
    catalog = _catalog(stub, clock=lambda: now[0])

    await catalog.search_tracks("a", 5)
    await catalog.search_tracks("b", 5)
    assert stub.token_requests == 1

    now[0] += 3600
    await catalog.search_tracks("c", 5)
    assert stub.token_requests == 2


@pytest.mark.asyncio
async def test_unauthorized_search_refreshes_token_once() -> None:
    stub = SpotifyStub([_item("1")], search_statuses=[401, 200])
    catalog = _catalog(stub)

    tracks = await catalog.search_tracks("a", 5)

    assert [t.id for t in tracks] == ["1"]
    assert stub.token_requests == 2
    assert stub.search_requests[-1].headers["Authorization"] == "Bearer token-2"


@pytest.mark.asyncio
async def test_http_error_raises_catalog_search_error() -> None:
    stub = SpotifyStub([], search_statuses=[503])
    catalog = _catalog(stub)

    with pytest.raises(CatalogSearchError) as excinfo:
        await catalog.search_tracks("a", 5)

    assert excinfo.value.term == "a"
    assert "503" in str(excinfo.value)


@pytest.mark.asyncio
async def test_missing_credentials_raise_auth_error() -> None:
    tokens = SpotifyTokenProvider(client_id=None, client_secret=None, token_url=TOKEN_URL)
    client = httpx.AsyncClient(transport=httpx.MockTransport(SpotifyStub([])))
    catalog = SpotifyCatalog(tokens=tokens, api_base=API_BASE, http_client=client)

    with pytest.raises(CatalogAuthError):
        await catalog.search_tracks("a", 5)
