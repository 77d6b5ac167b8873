"""Claude API wrapper used for text suggestions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import anthropic

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"


@dataclass
class LLMResponse:
    """Text of one completion plus its token usage."""

    text: str
    input_tokens: int
    output_tokens: int
    stop_reason: str | None = None


@dataclass
class UsageTotals:
    calls: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    models: set[str] = field(default_factory=set)

    def add(self, model: str, response: LLMResponse) -> None:
        self.calls += 1
        self.input_tokens += response.input_tokens
        self.output_tokens += response.output_tokens
        self.models.add(model)


class LLMClient:
    """Async Claude client for one-shot prompts.

    Suggestions are requested by the user one at a time, so a failed call is
    raised back to the caller instead of being retried.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 1024,
    ):
        client_kwargs: dict = {}
        if api_key is not None:
            client_kwargs["api_key"] = api_key
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**client_kwargs)
        self.model = model
        self.max_tokens = max_tokens
        self.usage = UsageTotals()

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send ``prompt`` as a single user turn and return the reply text."""
        model = model or self.model
        request: dict = {
            "model": model,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        logger.info("Requesting completion from %s", model)
        try:
            message = await self.client.messages.create(**request)
        except Exception:
            logger.error("Claude request failed (model=%s)", model, exc_info=True)
            raise

        # non-text blocks carry no .text
        text = "".join(getattr(block, "text", "") for block in message.content)
        response = LLMResponse(
            text=text,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
            stop_reason=message.stop_reason,
        )
        self.usage.add(model, response)
        logger.debug(
            "Claude reply: %d input / %d output tokens, stop=%s",
            response.input_tokens, response.output_tokens, response.stop_reason,
        )
        return response

    def reset_usage(self) -> UsageTotals:
        """Return the usage collected so far and start counting again."""
        totals, self.usage = self.usage, UsageTotals()
        return totals
