from abc import ABC, abstractmethod
from typing import Any, Optional

from openai import AsyncOpenAI


class GenerativeClient(ABC):
    """
    Abstract text-generation service.

    Implementations receive one instructional prompt and return the raw
    reply text. Parsing the reply is the caller's job.
    """

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        raise NotImplementedError


class OpenAIGenerativeClient(GenerativeClient):
    """
    GenerativeClient backed by the OpenAI chat completions API.

    base_url lets the same client talk to any OpenAI-compatible endpoint
    (Gemini exposes one). An already-built client may be injected instead of
    credentials. Otherwise the SDK client is created on the first completion,
    so a missing API key only fails the requests that need the model.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        temperature: float = 0.7,
        client: Optional[Any] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ValueError("An API key is required for the generative service.")
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    async def complete(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
