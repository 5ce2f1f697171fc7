from typing import List

import pytest

from moodlist.core import ExtractionFailure, SeedSet
from moodlist.llm import GenerativeClient
from moodlist.pipeline import build_seed_prompt, extract_seeds, parse_seed_reply


class FakeGenerator(GenerativeClient):
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


def test_parse_plain_json_reply() -> None:
    seeds = parse_seed_reply(
        '{"coreArtists": ["Sia", "Adele"], "vibeKeywords": ["melancholy"]}'
    )

    assert seeds.core_artists == ["Sia", "Adele"]
    assert seeds.vibe_keywords == ["melancholy"]
    assert seeds.search_terms() == ["Sia", "Adele", "melancholy"]


def test_parse_strips_code_fences() -> None:
    reply = '```json\n{"coreArtists": ["Bon Iver"], "vibeKeywords": ["cozy"]}\n```'

    seeds = parse_seed_reply(reply)

    assert seeds.core_artists == ["Bon Iver"]
    assert seeds.vibe_keywords == ["cozy"]


def test_parse_fenced_reply_with_leading_prose_gives_empty_seed_set() -> None:
    reply = 'Sure! ```json {"coreArtists":[],"vibeKeywords":[]} ``` '

    seeds = parse_seed_reply(reply)

    assert seeds == SeedSet(core_artists=[], vibe_keywords=[])
    assert seeds.is_empty


def test_parse_drops_blank_and_non_string_entries() -> None:
    reply = '{"coreArtists": ["  Sia ", 42, null, ""], "vibeKeywords": ["rain", {"x": 1}]}'

    seeds = parse_seed_reply(reply)

    assert seeds.core_artists == ["Sia"]
    assert seeds.vibe_keywords == ["rain"]


@pytest.mark.parametrize(
    "reply",
    [
        "",
        "I cannot help with that.",
        '{"coreArtists": ["Sia"]',
        '["Sia", "melancholy"]',
        '{"coreArtists": ["Sia"]}',
        '{"vibeKeywords": ["rain"]}',
        '{"coreArtists": "Sia", "vibeKeywords": ["rain"]}',
        '{"coreArtists": ["Sia"], "vibeKeywords": null}',
    ],
)
def test_parse_rejects_unusable_replies(reply: str) -> None:
    with pytest.raises(ExtractionFailure):
        parse_seed_reply(reply)


def test_build_seed_prompt_embeds_mood_and_format() -> None:
    prompt = build_seed_prompt("rainy sunday, slow coffee")

    assert "expert" in prompt.lower()
    assert '"rainy sunday, slow coffee"' in prompt
    assert "coreArtists" in prompt
    assert "vibeKeywords" in prompt
    assert "JSON" in prompt


@pytest.mark.asyncio
async def test_extract_seeds_calls_generator_once() -> None:
    generator = FakeGenerator('{"coreArtists": ["Sia"], "vibeKeywords": ["melancholy"]}')

    seeds = await extract_seeds("sad but hopeful", generator)

    assert len(generator.prompts) == 1
    assert "sad but hopeful" in generator.prompts[0]
    assert seeds.search_terms() == ["Sia", "melancholy"]


@pytest.mark.asyncio
async def test_extract_seeds_propagates_parse_failure() -> None:
    generator = FakeGenerator("no json here")

    with pytest.raises(ExtractionFailure):
        await extract_seeds("anything", generator)
