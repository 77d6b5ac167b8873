"""Tests for LLMClient."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from resume_builder.clients.llm_client import DEFAULT_MODEL, LLMClient, LLMResponse

ANTHROPIC_CLS = "resume_builder.clients.llm_client.anthropic.AsyncAnthropic"


def _reply(*texts: str, input_tokens: int = 12, output_tokens: int = 4):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=t) for t in texts],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
        stop_reason="end_turn",
    )


@pytest.fixture
def api():
    """Patched AsyncAnthropic instance shared by the client under test."""
    with patch(ANTHROPIC_CLS) as mock_cls:
        instance = MagicMock()
        instance.messages.create = AsyncMock(return_value=_reply("hello"))
        mock_cls.return_value = instance
        yield mock_cls


class TestLLMClientInit:
    def test_no_arguments(self, api):
        client = LLMClient()
        api.assert_called_once_with()
        assert client.model == DEFAULT_MODEL

    def test_key_and_timeout_forwarded(self, api):
        LLMClient(api_key="k", timeout=12.0)
        api.assert_called_once_with(api_key="k", timeout=12.0)


class TestLLMClientGenerate:
    async def test_request_shape(self, api):
        client = LLMClient(model="m-default", max_tokens=300)
        result = await client.generate("write", system="be brief")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello"
        assert result.stop_reason == "end_turn"
        request = api.return_value.messages.create.await_args.kwargs
        assert request["model"] == "m-default"
        assert request["max_tokens"] == 300
        assert request["system"] == "be brief"
        assert request["messages"] == [{"role": "user", "content": "write"}]

    async def test_per_call_overrides(self, api):
        await LLMClient().generate("x", model="other", max_tokens=64)
        request = api.return_value.messages.create.await_args.kwargs
        assert request["model"] == "other"
        assert request["max_tokens"] == 64
        assert "system" not in request

    async def test_joins_text_blocks_and_skips_others(self, api):
        reply = _reply("one ", "two")
        reply.content.insert(1, SimpleNamespace(type="tool_use", id="t1"))
        api.return_value.messages.create.return_value = reply
        result = await LLMClient().generate("x")
        assert result.text == "one two"

    async def test_failure_is_not_retried(self, api):
        api.return_value.messages.create.side_effect = RuntimeError("overloaded")
        with pytest.raises(RuntimeError, match="overloaded"):
            await LLMClient().generate("x")
        assert api.return_value.messages.create.await_count == 1

    async def test_usage_totals(self, api):
        client = LLMClient()
        await client.generate("a")
        await client.generate("b", model="other")

        totals = client.reset_usage()

        assert totals.calls == 2
        assert totals.input_tokens == 24
        assert totals.output_tokens == 8
        assert totals.models == {DEFAULT_MODEL, "other"}
        assert client.usage.calls == 0
