"""
Language-model interface for selection and validation prompts.

LanguageModel is the seam the AI selector and validation engine call through;
AnthropicLanguageModel adapts the Anthropic Messages API to it. Transport
errors propagate to the caller, which decides on fallbacks: nothing here
retries.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import anthropic

from hybrid_selector.core.types import TokenUsage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Completion:
    """Text returned by a model call plus accounting."""

    text: str
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    finish_reason: str | None = None


@runtime_checkable
class LanguageModel(Protocol):
    """Anything that can complete a prompt."""

    async def complete(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        system: str | None = None,
    ) -> Completion: ...


class AnthropicLanguageModel:
    """LanguageModel backed by ``anthropic.AsyncAnthropic``."""

    def __init__(self, api_key: str):
        self.api_key = api_key
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            # SDK retries are disabled; callers fall back instead of retrying
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key, max_retries=0)
        return self._client

    async def complete(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        system: str | None = None,
    ) -> Completion:
        """
        Send a single-turn prompt and return the first text block.

        Raises:
            anthropic.APIError: On any transport or API failure
        """
        if system:
            response = await self.client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        else:
            response = await self.client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )

        # Extract text from the first content block; an empty reply parses as a failure
        if response.content:
            first_block = response.content[0]
            response_text = first_block.text if hasattr(first_block, "text") else str(first_block)
        else:
            response_text = ""

        usage = getattr(response, "usage", None)
        token_usage = TokenUsage(
            prompt_tokens=getattr(usage, "input_tokens", 0) or 0,
            completion_tokens=getattr(usage, "output_tokens", 0) or 0,
        )
        logger.debug(f"{model} completion: {token_usage.total_tokens} tokens")

        return Completion(
            text=response_text,
            token_usage=token_usage,
            finish_reason=getattr(response, "stop_reason", None),
        )
