"""Command-line entrypoint: preview (or store) a playlist for a mood.

    python main.py "rainy sunday, slow coffee"
    python main.py "late night drive" --owner alice     # also stores it
"""

import argparse
import asyncio
import sys

from moodlist.api.dependencies import get_pipeline
from moodlist.config import LOG_LEVEL, OPENAI_API_KEY, SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET
from moodlist.core import (
    PipelineFailure,
    configure_logging,
    log_error,
    log_info,
    log_section,
    log_success,
    log_warning,
)
from moodlist.pipeline import AggregationResult, GenerationStatus


def _print_tracks(aggregation: AggregationResult) -> None:
    for position, track in enumerate(aggregation.tracks, start=1):
        log_info(f"{position:2d}. {track.artist} - {track.title}  {track.external_url}")
    for term in aggregation.failed_terms:
        log_warning(f"Search term failed: {term!r}")


async def run(mood: str, owner: str | None) -> int:
    pipeline = get_pipeline()

    if owner is None:
        log_section(f"Preview for mood: {mood}")
        aggregation = await pipeline.preview(mood)
        if not aggregation.tracks:
            log_warning("No tracks found for that mood.")
            return 1
        _print_tracks(aggregation)
        log_success(f"{len(aggregation.tracks)} tracks (preview only, nothing stored).")
        return 0

    result = await pipeline.generate(mood, owner)
    if result.status is GenerationStatus.NO_RESULTS or result.playlist is None:
        log_warning("No tracks found for that mood; no playlist stored.")
        return 1
    _print_tracks(result.aggregation)
    log_success(f"Stored playlist {result.playlist.id} for {owner}.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a playlist from a mood.")
    parser.add_argument("mood", help="free-text mood description")
    parser.add_argument("--owner", help="store the playlist for this user id")
    args = parser.parse_args(argv)

    configure_logging(LOG_LEVEL)

    if not (SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET):
        log_error("Please set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET in the .env file.")
        return 2
    if not OPENAI_API_KEY:
        log_error("Please set OPENAI_API_KEY in the .env file.")
        return 2

    try:
        return asyncio.run(run(args.mood, args.owner))
    except PipelineFailure as e:
        log_error(f"Pipeline failed during {e.stage}: {e}")
        return 1
    except ValueError as e:
        log_error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
