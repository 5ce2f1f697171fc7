from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Track:
    """
    A catalog track as stored in a playlist.

    - id             : catalog identifier, the deduplication key
    - album_art_url  : None when the catalog has no artwork
    - preview_url    : None when the catalog has no preview clip
    """

    id: str
    title: str
    artist: str
    album_art_url: Optional[str] = None
    preview_url: Optional[str] = None
    external_url: str = ""


@dataclass
class SeedSet:
    """Search seeds derived from a mood prompt."""

    core_artists: List[str] = field(default_factory=list)
    vibe_keywords: List[str] = field(default_factory=list)

    def search_terms(self) -> List[str]:
        """Core artists first, then vibe keywords, in extraction order."""
        return [*self.core_artists, *self.vibe_keywords]

    @property
    def is_empty(self) -> bool:
        return not self.core_artists and not self.vibe_keywords


@dataclass
class Playlist:
    owner_id: str
    mood_prompt: str
    tracks: List[Track]
    created_at: datetime
    id: Optional[str] = None
    updated_at: Optional[datetime] = None
    # Prompts of later append requests; mood_prompt stays the creating one.
    append_prompts: List[str] = field(default_factory=list)

    def track_ids(self) -> List[str]:
        return [t.id for t in self.tracks]
