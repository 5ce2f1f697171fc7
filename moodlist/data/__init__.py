"""Public façade for the moodlist.data package.

This module exposes the playlist persistence contract, its JSON-file
implementation and the low-level load/save helpers. Callers should use this
façade instead of importing from the internal modules directly.
"""

from .playlists import load_playlists, save_playlists
from .repositories import JsonPlaylistRepository, PlaylistRepository

__all__ = [
    "load_playlists",
    "save_playlists",
    "PlaylistRepository",
    "JsonPlaylistRepository",
]
