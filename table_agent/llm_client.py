# table_agent/llm_client.py
import logging
from typing import Optional, Protocol

from groq import AsyncGroq

from table_agent.config import Settings

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Anything that turns a system prompt and a user turn into reply text."""

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...


def extract_content(completion) -> str:
    """Pull the assistant text out of a chat completion, tolerating older SDK shapes."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    first = choices[0]
    message = getattr(first, "message", None)
    if message is not None and getattr(message, "content", None):
        return message.content
    # older shape: .text
    if getattr(first, "text", None):
        return first.text
    delta = getattr(first, "delta", None)
    return getattr(delta, "content", None) or ""


class GroqCompletionClient:
    """Chat completions against Groq with low temperature and a bounded reply length."""

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.1-8b-instant",
        temperature: float = 0.1,
        max_tokens: int = 500,
        client: Optional[AsyncGroq] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client or AsyncGroq(api_key=api_key)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GroqCompletionClient":
        return cls(
            api_key=settings.groq_api_key or "",
            model=settings.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        logger.debug("Sending %d-char prompt to %s", len(user_prompt), self.model)
        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_completion_tokens=self.max_tokens,
            top_p=1,
            stream=False,
        )
        return extract_content(completion)
