"""Public façade for the moodlist.llm package.

Exposes the generative-service abstraction and its OpenAI-compatible
implementation.
"""

from .client import GenerativeClient, OpenAIGenerativeClient

__all__ = [
    "GenerativeClient",
    "OpenAIGenerativeClient",
]
