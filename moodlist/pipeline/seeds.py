"""Seed extraction: mood prompt -> generative reply -> SeedSet.

The generative service is asked for a bare JSON object but its formatting is
not trusted: code fences are removed and, when the remaining text still is
not JSON, the outermost {...} span is parsed instead. Anything that does not
yield an object with both arrays is an ExtractionFailure; no defaults are
substituted.
"""

import json
import re
from typing import Any, List

from moodlist.core import ExtractionFailure, SeedSet
from moodlist.llm import GenerativeClient

ARTISTS_FIELD = "coreArtists"
KEYWORDS_FIELD = "vibeKeywords"

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def build_seed_prompt(mood_prompt: str) -> str:
    return (
        "Act as an expert music curator. "
        f'Create a playlist for the mood: "{mood_prompt}".\n'
        "Return ONLY a raw JSON object with exactly this structure "
        "(no markdown, no code fences, no extra text):\n"
        "{\n"
        f'  "{ARTISTS_FIELD}": ["artist1", "artist2"],\n'
        f'  "{KEYWORDS_FIELD}": ["keyword1", "keyword2", "keyword3"]\n'
        "}"
    )


def _strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def _load_json_object(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ExtractionFailure("Generative reply contains no JSON object.")

    try:
        return json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise ExtractionFailure(f"Generative reply is not valid JSON: {e.msg}") from e


def _clean_terms(values: List[Any]) -> List[str]:
    # Non-string and blank entries are dropped rather than failing the request.
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


def parse_seed_reply(text: str) -> SeedSet:
    payload = _load_json_object(_strip_fences(text or ""))

    if not isinstance(payload, dict):
        raise ExtractionFailure("Generative reply is not a JSON object.")

    for name in (ARTISTS_FIELD, KEYWORDS_FIELD):
        if not isinstance(payload.get(name), list):
            raise ExtractionFailure(f"Generative reply has no {name!r} array.")

    return SeedSet(
        core_artists=_clean_terms(payload[ARTISTS_FIELD]),
        vibe_keywords=_clean_terms(payload[KEYWORDS_FIELD]),
    )


async def extract_seeds(mood_prompt: str, generator: GenerativeClient) -> SeedSet:
    reply = await generator.complete(build_seed_prompt(mood_prompt))
    return parse_seed_reply(reply)
