from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from moodlist.api.dependencies import get_current_user_id, get_pipeline
from moodlist.core import PipelineFailure, Playlist, PlaylistNotFound, Track
from moodlist.pipeline import GenerationStatus, PlaylistPipeline

from .schemas import (
    AppendPlaylistResponse,
    GeneratedPlaylistResponse,
    MoodRequest,
    PlaylistResponse,
    TrackResponse,
)

router = APIRouter()

NOT_FOUND_DETAIL = "Playlist not found."


def _track_to_response(track: Track) -> TrackResponse:
    return TrackResponse(
        id=track.id,
        title=track.title,
        artist=track.artist,
        album_art_url=track.album_art_url,
        preview_url=track.preview_url,
        external_url=track.external_url,
    )


def _playlist_fields(playlist: Playlist) -> dict:
    return {
        "id": playlist.id,
        "owner_id": playlist.owner_id,
        "mood_prompt": playlist.mood_prompt,
        "tracks": [_track_to_response(t) for t in playlist.tracks],
        "track_count": len(playlist.tracks),
        "created_at": playlist.created_at,
        "updated_at": playlist.updated_at,
        "append_prompts": list(playlist.append_prompts),
    }


@router.post(
    "/generate",
    response_model=GeneratedPlaylistResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_playlist(
    body: MoodRequest,
    owner_id: str = Depends(get_current_user_id),
    pipeline: PlaylistPipeline = Depends(get_pipeline),
) -> GeneratedPlaylistResponse:
    """
    Generate and store a new playlist from a mood description.

    404 when no catalog search returned a track; nothing is stored then.
    """
    try:
        result = await pipeline.generate(body.mood, owner_id)
    except PipelineFailure:
        raise HTTPException(status_code=500, detail="Failed to generate playlist.")

    if result.status is GenerationStatus.NO_RESULTS or result.playlist is None:
        raise HTTPException(
            status_code=404,
            detail="Could not find any tracks for that mood.",
        )

    return GeneratedPlaylistResponse(
        **_playlist_fields(result.playlist),
        failed_terms=result.aggregation.failed_terms,
    )


@router.post(
    "/{playlist_id}/add",
    response_model=AppendPlaylistResponse,
    dependencies=[Depends(get_current_user_id)],
)
async def add_to_playlist(
    playlist_id: str,
    body: MoodRequest,
    pipeline: PlaylistPipeline = Depends(get_pipeline),
) -> AppendPlaylistResponse:
    """
    Extend a playlist with tracks generated from a new mood.

    Tracks already in the playlist are never added twice; existing tracks
    keep their positions.
    """
    try:
        result = await pipeline.append_to_playlist(playlist_id, body.mood)
    except PlaylistNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    except PipelineFailure:
        raise HTTPException(status_code=500, detail="Failed to update playlist.")

    return AppendPlaylistResponse(
        **_playlist_fields(result.playlist),
        added_count=len(result.added),
        failed_terms=result.aggregation.failed_terms,
    )


@router.get("/history", response_model=List[PlaylistResponse])
def playlist_history(
    owner_id: str = Depends(get_current_user_id),
    pipeline: PlaylistPipeline = Depends(get_pipeline),
) -> List[PlaylistResponse]:
    """The caller's playlists, most recent first."""
    try:
        playlists = pipeline.list_history(owner_id)
    except PipelineFailure:
        raise HTTPException(status_code=500, detail="Failed to fetch history.")
    return [PlaylistResponse(**_playlist_fields(p)) for p in playlists]


@router.get("/{playlist_id}", response_model=PlaylistResponse)
def get_playlist(
    playlist_id: str,
    pipeline: PlaylistPipeline = Depends(get_pipeline),
) -> PlaylistResponse:
    try:
        playlist = pipeline.get_playlist(playlist_id)
    except PlaylistNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    except PipelineFailure:
        raise HTTPException(status_code=500, detail="Failed to load playlist.")
    return PlaylistResponse(**_playlist_fields(playlist))
