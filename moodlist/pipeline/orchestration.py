"""Request-level orchestration of the mood-to-playlist pipeline.

PlaylistPipeline sequences seed extraction, catalog aggregation, merging and
persistence for the two top-level operations (generate and append) and maps
failures to the outcomes the HTTP layer exposes:

  - GenerationStatus.NO_RESULTS : every term was searched, nothing was found;
                                  no playlist is stored
  - PlaylistNotFound            : append/lookup on an unknown playlist id
  - PipelineFailure             : extraction, aggregation or storage failed

Each call is independent; the only state shared between calls is what the
repository persists.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional

from moodlist.catalog import CatalogClient
from moodlist.config import (
    CATALOG_TIMEOUT_SECONDS,
    MAX_CONCURRENT_SEARCHES,
    SEARCH_LIMIT_PER_TERM,
)
from moodlist.core import (
    PipelineFailure,
    Playlist,
    PlaylistNotFound,
    Track,
    log_error,
    log_info,
    log_section,
    log_success,
    log_warning,
)
from moodlist.data import PlaylistRepository
from moodlist.llm import GenerativeClient

from .aggregator import AggregationResult, aggregate
from .merge import merge_new_tracks
from .seeds import extract_seeds


class GenerationStatus(str, Enum):
    CREATED = "created"
    NO_RESULTS = "no_results"


@dataclass
class GenerationResult:
    status: GenerationStatus
    aggregation: AggregationResult
    playlist: Optional[Playlist] = None


@dataclass
class AppendResult:
    playlist: Playlist
    aggregation: AggregationResult
    added: List[Track] = field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_mood(mood_prompt: str) -> str:
    if not mood_prompt or not mood_prompt.strip():
        raise ValueError("Mood prompt must not be empty.")
    return mood_prompt


class PlaylistPipeline:
    def __init__(
        self,
        generator: GenerativeClient,
        catalog: CatalogClient,
        repository: PlaylistRepository,
        *,
        search_limit: int = SEARCH_LIMIT_PER_TERM,
        concurrency: int = MAX_CONCURRENT_SEARCHES,
        timeout: Optional[float] = CATALOG_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.generator = generator
        self.catalog = catalog
        self.repository = repository
        self.search_limit = search_limit
        self.concurrency = concurrency
        self.timeout = timeout
        self._clock = clock

    async def _collect_tracks(self, mood_prompt: str) -> AggregationResult:
        try:
            seeds = await extract_seeds(mood_prompt, self.generator)
        except Exception as exc:  # noqa: BLE001
            log_error(f"Seed extraction failed: {exc}")
            raise PipelineFailure(
                "Could not derive search seeds from the mood.", stage="extract"
            ) from exc

        log_info(
            f"Seeds: {len(seeds.core_artists)} artists, "
            f"{len(seeds.vibe_keywords)} keywords."
        )

        try:
            return await aggregate(
                seeds.search_terms(),
                self.catalog,
                limit=self.search_limit,
                concurrency=self.concurrency,
                timeout=self.timeout,
            )
        except Exception as exc:  # noqa: BLE001
            log_error(f"Catalog aggregation failed: {exc}")
            raise PipelineFailure("Catalog aggregation failed.", stage="aggregate") from exc

    async def preview(self, mood_prompt: str) -> AggregationResult:
        """Extract and aggregate without storing anything."""
        return await self._collect_tracks(_require_mood(mood_prompt))

    async def generate(self, mood_prompt: str, owner_id: str) -> GenerationResult:
        _require_mood(mood_prompt)
        log_section(f"Generate playlist for {owner_id}")

        aggregation = await self._collect_tracks(mood_prompt)
        if not aggregation.tracks:
            log_warning("No tracks found for this mood; no playlist created.")
            return GenerationResult(GenerationStatus.NO_RESULTS, aggregation)

        playlist = Playlist(
            owner_id=owner_id,
            mood_prompt=mood_prompt,
            tracks=list(aggregation.tracks),
            created_at=self._clock(),
        )
        try:
            stored = self.repository.save(playlist)
        except Exception as exc:  # noqa: BLE001
            log_error(f"Could not store playlist: {exc}")
            raise PipelineFailure("Could not store the playlist.", stage="persist") from exc

        log_success(f"Playlist {stored.id} created with {len(stored.tracks)} tracks.")
        return GenerationResult(GenerationStatus.CREATED, aggregation, stored)

    async def append_to_playlist(self, playlist_id: str, mood_prompt: str) -> AppendResult:
        _require_mood(mood_prompt)
        log_section(f"Append to playlist {playlist_id}")

        playlist = self.get_playlist(playlist_id)
        aggregation = await self._collect_tracks(mood_prompt)

        new_tracks = merge_new_tracks(playlist.tracks, aggregation.tracks)
        if not new_tracks:
            log_info("No new tracks to append; playlist unchanged.")
            return AppendResult(playlist, aggregation)

        # The repository re-checks ids under its lock; a concurrent append may
        # already have stored some of new_tracks.
        try:
            updated, appended = self.repository.append_tracks(
                playlist_id,
                new_tracks,
                mood_prompt=mood_prompt,
            )
        except PlaylistNotFound:
            raise
        except Exception as exc:  # noqa: BLE001
            log_error(f"Could not append to playlist {playlist_id}: {exc}")
            raise PipelineFailure("Could not update the playlist.", stage="persist") from exc

        log_success(f"Appended {len(appended)} tracks to playlist {playlist_id}.")
        return AppendResult(updated, aggregation, appended)

    def get_playlist(self, playlist_id: str) -> Playlist:
        try:
            playlist = self.repository.load(playlist_id)
        except Exception as exc:  # noqa: BLE001
            log_error(f"Could not load playlist {playlist_id}: {exc}")
            raise PipelineFailure("Could not load the playlist.", stage="persist") from exc

        if playlist is None:
            raise PlaylistNotFound(playlist_id)
        return playlist

    def list_history(self, owner_id: str) -> List[Playlist]:
        try:
            return self.repository.list_by_owner(owner_id)
        except Exception as exc:  # noqa: BLE001
            log_error(f"Could not list playlists for {owner_id}: {exc}")
            raise PipelineFailure("Could not load playlist history.", stage="persist") from exc
