import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from moodlist.catalog import CatalogClient
from moodlist.config import (
    CATALOG_TIMEOUT_SECONDS,
    MAX_CONCURRENT_SEARCHES,
    SEARCH_LIMIT_PER_TERM,
)
from moodlist.core import Track, log_info, log_step, log_term_failure


class TermStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class TermOutcome:
    """
    What one search term contributed.

    - found : tracks returned by the catalog
    - added : tracks kept after deduplication
    - error : failure description when status is FAILED
    """

    term: str
    status: TermStatus
    found: int = 0
    added: int = 0
    error: Optional[str] = None


@dataclass
class AggregationResult:
    tracks: List[Track] = field(default_factory=list)
    terms: List[TermOutcome] = field(default_factory=list)

    @property
    def failed_terms(self) -> List[str]:
        return [t.term for t in self.terms if t.status is TermStatus.FAILED]

    @property
    def empty_terms(self) -> List[str]:
        return [t.term for t in self.terms if t.status is TermStatus.EMPTY]


def _describe(exc: BaseException) -> str:
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


async def _search_term(
    catalog: CatalogClient,
    term: str,
    limit: int,
    semaphore: asyncio.Semaphore,
    timeout: Optional[float],
) -> Tuple[List[Track], Optional[Exception]]:
    """Run one search; failures are returned, never raised."""
    async with semaphore:
        try:
            search = catalog.search_tracks(term, limit)
            if timeout:
                tracks = await asyncio.wait_for(search, timeout)
            else:
                tracks = await search
        except Exception as exc:  # noqa: BLE001
            return [], exc
    return list(tracks or []), None


async def aggregate(
    terms: Iterable[str],
    catalog: CatalogClient,
    *,
    limit: int = SEARCH_LIMIT_PER_TERM,
    concurrency: int = MAX_CONCURRENT_SEARCHES,
    timeout: Optional[float] = CATALOG_TIMEOUT_SECONDS,
) -> AggregationResult:
    """
    Search the catalog once per term and merge the hits into one list.

    Searches run concurrently, but results are merged in term order and then
    in each term's result order, so the output only depends on the terms and
    the catalog's answers. The first occurrence of a track id wins. A term
    whose search raises contributes nothing and is recorded as FAILED.
    """
    terms = list(terms)
    result = AggregationResult()
    if not terms:
        log_info("No search terms; skipping catalog search.")
        return result

    log_step(f"Searching catalog for {len(terms)} terms (limit {limit} each)...")
    semaphore = asyncio.Semaphore(max(1, concurrency))
    responses = await asyncio.gather(
        *(_search_term(catalog, term, limit, semaphore, timeout) for term in terms)
    )

    seen: Set[str] = set()
    for term, (tracks, error) in zip(terms, responses):
        if error is not None:
            description = _describe(error)
            log_term_failure(term, description)
            result.terms.append(
                TermOutcome(term=term, status=TermStatus.FAILED, error=description)
            )
            continue

        added = 0
        for track in tracks:
            if track.id in seen:
                continue
            seen.add(track.id)
            result.tracks.append(track)
            added += 1

        result.terms.append(
            TermOutcome(
                term=term,
                status=TermStatus.OK if tracks else TermStatus.EMPTY,
                found=len(tracks),
                added=added,
            )
        )

    log_info(
        f"Aggregated {len(result.tracks)} tracks from {len(terms)} terms "
        f"({len(result.failed_terms)} failed, {len(result.empty_terms)} empty)."
    )
    return result
