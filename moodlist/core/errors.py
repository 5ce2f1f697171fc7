"""Exception hierarchy shared by the pipeline, its collaborators and the API."""

from typing import Optional


class MoodlistError(Exception):
    """Base class for all application errors."""


class ExtractionFailure(MoodlistError):
    """The generative reply could not be parsed into search seeds."""


class CatalogSearchError(MoodlistError):
    """A single catalog search failed."""

    def __init__(self, message: str, term: Optional[str] = None) -> None:
        super().__init__(message)
        self.term = term


class CatalogAuthError(CatalogSearchError):
    """The catalog access token could not be obtained."""


class PlaylistNotFound(MoodlistError):
    def __init__(self, playlist_id: str) -> None:
        super().__init__(f"Playlist not found: {playlist_id!r}")
        self.playlist_id = playlist_id


class PlaylistStoreCorrupted(MoodlistError):
    """The playlists file exists but cannot be read back in full."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Playlists file {path} is unreadable: {reason}")
        self.path = path


class PipelineFailure(MoodlistError):
    """
    Terminal failure of a generate/append request.

    stage is one of "extract", "aggregate" or "persist".
    """

    def __init__(self, message: str, stage: str) -> None:
        super().__init__(message)
        self.stage = stage


class InsufficientBalance(MoodlistError):
    def __init__(self, balance: int, cost: int) -> None:
        super().__init__(f"Cannot spend {cost} with a balance of {balance}.")
        self.balance = balance
        self.cost = cost
