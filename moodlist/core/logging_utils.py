"""Log helpers for the request pipeline.

A generate or append request logs one section header, a step per pipeline
stage, then either a success line or an error line. Per-term catalog
failures are warnings because the request can still succeed without them.
"""

import logging

# Project logger; level and handlers come from configure_logging()
logger = logging.getLogger("moodlist")


def log_section(title: str) -> None:
    """Header for one generate/append request."""
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    logger.warning("⚠️ %s", message)


def log_term_failure(term: str, reason: str) -> None:
    """A single search term that contributed nothing because it failed."""
    logger.warning("⚠️ Catalog search failed for %r: %s", term, reason)


def log_error(message: str) -> None:
    """A request-level failure, i.e. one the caller sees as an error."""
    logger.error("❌ %s", message)
