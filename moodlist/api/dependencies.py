from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException

from moodlist.catalog import SpotifyCatalog
from moodlist.config import LLM_BASE_URL, LLM_MODEL, OPENAI_API_KEY
from moodlist.data import JsonPlaylistRepository
from moodlist.llm import OpenAIGenerativeClient
from moodlist.pipeline import PlaylistPipeline


@lru_cache(maxsize=1)
def get_pipeline() -> PlaylistPipeline:
    """Process-wide pipeline wired to the configured services."""
    generator = OpenAIGenerativeClient(
        api_key=OPENAI_API_KEY,
        model=LLM_MODEL,
        base_url=LLM_BASE_URL,
    )
    return PlaylistPipeline(
        generator=generator,
        catalog=SpotifyCatalog(),
        repository=JsonPlaylistRepository(),
    )


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Caller identity, as verified and forwarded by the upstream auth layer.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required.")
    return x_user_id.strip()
