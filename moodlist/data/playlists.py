from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from moodlist.config import PLAYLISTS_FILE
from moodlist.core import (
    Playlist,
    PlaylistStoreCorrupted,
    Track,
    log_warning,
    read_json,
    write_json,
)


def _serialize_playlist(playlist: Playlist) -> Dict[str, Any]:
    return {
        "id": playlist.id,
        "owner_id": playlist.owner_id,
        "mood_prompt": playlist.mood_prompt,
        "tracks": [asdict(t) for t in playlist.tracks],
        "created_at": playlist.created_at.isoformat(),
        "updated_at": playlist.updated_at.isoformat() if playlist.updated_at else None,
        "append_prompts": list(playlist.append_prompts),
    }


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO datetime string and normalize it to UTC-aware."""
    if not value:
        return None

    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _deserialize_track(data: Dict[str, Any]) -> Track:
    return Track(
        id=str(data["id"]),
        title=data.get("title") or "",
        artist=data.get("artist") or "",
        album_art_url=data.get("album_art_url"),
        preview_url=data.get("preview_url"),
        external_url=data.get("external_url") or "",
    )


def _deserialize_playlist(data: Dict[str, Any]) -> Playlist:
    created_at = _parse_dt(data["created_at"])
    if created_at is None:
        raise ValueError("created_at is required")

    tracks = [
        _deserialize_track(item)
        for item in data.get("tracks") or []
        if isinstance(item, dict) and item.get("id")
    ]

    return Playlist(
        id=data["id"],
        owner_id=data["owner_id"],
        mood_prompt=data.get("mood_prompt") or "",
        tracks=tracks,
        created_at=created_at,
        updated_at=_parse_dt(data.get("updated_at")),
        append_prompts=list(data.get("append_prompts") or []),
    )


def load_playlists(path: Optional[str] = None, strict: bool = False) -> Dict[str, Playlist]:
    """
    Load every stored playlist, keyed by id.

    Structure on disk:
      {
        "playlist_id": {
          "owner_id": "...",
          "mood_prompt": "...",
          "tracks": [{"id": "...", "title": "...", ...}, ...],
          "created_at": "2025-01-01T12:00:00+00:00",
          ...
        },
        ...
      }

    By default an unreadable file reads as an empty store and malformed
    entries are skipped. With strict=True both raise PlaylistStoreCorrupted,
    so a caller about to rewrite the file never drops what it could not parse.
    """
    path = path or PLAYLISTS_FILE

    def _on_error(e: Exception) -> None:
        if strict:
            raise PlaylistStoreCorrupted(path, "invalid JSON") from e
        log_warning(f"Playlists file {path} is corrupted; ignoring it.")

    raw = read_json(path, default={}, on_error=_on_error)
    if not isinstance(raw, dict):
        if strict:
            raise PlaylistStoreCorrupted(path, "top level is not an object")
        log_warning("Playlists file has invalid structure; using empty store.")
        return {}

    playlists: Dict[str, Playlist] = {}
    for playlist_id, payload in raw.items():
        try:
            if not isinstance(payload, dict):
                raise TypeError("entry is not an object")
            payload = dict(payload)
            payload.setdefault("id", playlist_id)
            playlist = _deserialize_playlist(payload)
        except (KeyError, TypeError, ValueError) as e:
            if strict:
                raise PlaylistStoreCorrupted(path, f"entry {playlist_id!r}: {e}") from e
            log_warning(f"Skipping malformed playlist entry {playlist_id!r}.")
            continue
        playlists[playlist.id] = playlist
    return playlists


def save_playlists(playlists: Dict[str, Playlist], path: Optional[str] = None) -> None:
    path = path or PLAYLISTS_FILE
    serialised = {pid: _serialize_playlist(p) for pid, p in playlists.items()}
    write_json(path, serialised)


__all__ = [
    "load_playlists",
    "save_playlists",
]
