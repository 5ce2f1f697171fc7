"""Public façade for the moodlist.core package.

This module exposes the domain models, the error hierarchy, logging helpers
and JSON file helpers that every other package builds on. Callers should
import these cross-cutting concerns from this façade instead of the internal
submodules.
"""

from .errors import (
    CatalogAuthError,
    CatalogSearchError,
    ExtractionFailure,
    InsufficientBalance,
    MoodlistError,
    PipelineFailure,
    PlaylistNotFound,
    PlaylistStoreCorrupted,
)
from .fs_utils import read_json, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_info,
    log_section,
    log_step,
    log_success,
    log_term_failure,
    log_warning,
)
from .models import Playlist, SeedSet, Track

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_term_failure",
    "log_error",
    "read_json",
    "write_json",
    "Track",
    "SeedSet",
    "Playlist",
    "MoodlistError",
    "ExtractionFailure",
    "CatalogSearchError",
    "CatalogAuthError",
    "PlaylistNotFound",
    "PlaylistStoreCorrupted",
    "PipelineFailure",
    "InsufficientBalance",
]
