from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
import threading
from typing import List, Optional, Sequence, Tuple
from uuid import uuid4

from moodlist.core import Playlist, PlaylistNotFound, Track

from .playlists import load_playlists, save_playlists


class PlaylistRepository(ABC):
    """Persistence contract for generated playlists."""

    @abstractmethod
    def save(self, playlist: Playlist) -> Playlist:
        """Store a new playlist and return it with its assigned id."""

    @abstractmethod
    def load(self, playlist_id: str) -> Optional[Playlist]:
        """Return the playlist, or None when the id is unknown."""

    @abstractmethod
    def append_tracks(
        self,
        playlist_id: str,
        tracks: Sequence[Track],
        mood_prompt: Optional[str] = None,
    ) -> Tuple[Playlist, List[Track]]:
        """
        Append tracks to the end of a stored playlist.

        Tracks whose id is already stored are skipped, so the call is safe to
        repeat. Returns the updated playlist and the tracks actually appended.
        Raises PlaylistNotFound for an unknown id.
        """

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> List[Playlist]:
        """Return the owner's playlists, most recently created first."""


class JsonPlaylistRepository(PlaylistRepository):
    """
    Repository over a single JSON document.

    Every write is a read-modify-write of the whole file under one lock, and
    the file itself is replaced atomically. append_tracks() filters against
    the stored ids inside that critical section, which keeps ids unique even
    when two appends for the same playlist race.

    Reads tolerate a damaged file. Writes load it strictly and raise
    PlaylistStoreCorrupted instead of replacing it.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        # None means "use the configured PLAYLISTS_FILE at call time"
        self.path = path
        self._lock = threading.Lock()

    def save(self, playlist: Playlist) -> Playlist:
        with self._lock:
            playlists = load_playlists(self.path, strict=True)
            stored = replace(
                playlist,
                id=playlist.id or str(uuid4()),
                tracks=list(playlist.tracks),
                append_prompts=list(playlist.append_prompts),
            )
            playlists[stored.id] = stored
            save_playlists(playlists, self.path)
        return stored

    def load(self, playlist_id: str) -> Optional[Playlist]:
        return load_playlists(self.path).get(playlist_id)

    def append_tracks(
        self,
        playlist_id: str,
        tracks: Sequence[Track],
        mood_prompt: Optional[str] = None,
    ) -> Tuple[Playlist, List[Track]]:
        with self._lock:
            playlists = load_playlists(self.path, strict=True)
            playlist = playlists.get(playlist_id)
            if playlist is None:
                raise PlaylistNotFound(playlist_id)

            stored_ids = set(playlist.track_ids())
            appended: List[Track] = []
            for track in tracks:
                if track.id in stored_ids:
                    continue
                stored_ids.add(track.id)
                appended.append(track)
            playlist.tracks.extend(appended)

            if mood_prompt:
                playlist.append_prompts.append(mood_prompt)
            playlist.updated_at = datetime.now(timezone.utc)

            save_playlists(playlists, self.path)
        return playlist, appended

    def list_by_owner(self, owner_id: str) -> List[Playlist]:
        owned = [p for p in load_playlists(self.path).values() if p.owner_id == owner_id]
        return sorted(owned, key=lambda p: p.created_at, reverse=True)
