"""Public façade for the moodlist.pipeline package.

This module exposes the mood-to-playlist pipeline: seed extraction, catalog
aggregation, playlist merging and the request-level orchestrator. Other
packages should import pipeline behaviour from this façade instead of the
internal pipeline submodules.
"""

from .aggregator import AggregationResult, TermOutcome, TermStatus, aggregate
from .merge import merge_new_tracks
from .orchestration import (
    AppendResult,
    GenerationResult,
    GenerationStatus,
    PlaylistPipeline,
)
from .seeds import build_seed_prompt, extract_seeds, parse_seed_reply

__all__ = [
    "build_seed_prompt",
    "parse_seed_reply",
    "extract_seeds",
    "aggregate",
    "AggregationResult",
    "TermOutcome",
    "TermStatus",
    "merge_new_tracks",
    "PlaylistPipeline",
    "GenerationStatus",
    "GenerationResult",
    "AppendResult",
]
