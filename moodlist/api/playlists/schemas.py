from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class MoodRequest(BaseModel):
    mood: str = Field(..., min_length=1, max_length=500)

    @field_validator("mood")
    @classmethod
    def _mood_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("mood must not be blank")
        return value


class TrackResponse(BaseModel):
    id: str
    title: str
    artist: str
    album_art_url: Optional[str] = None
    preview_url: Optional[str] = None
    external_url: str


class PlaylistResponse(BaseModel):
    id: str
    owner_id: str
    mood_prompt: str
    tracks: List[TrackResponse]
    track_count: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    append_prompts: List[str] = []


class GeneratedPlaylistResponse(PlaylistResponse):
    failed_terms: List[str] = []


class AppendPlaylistResponse(PlaylistResponse):
    added_count: int
    failed_terms: List[str] = []
