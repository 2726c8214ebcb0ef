"""Tests for anthropic_client.fetch_research_response."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from anthropic_client import fetch_research_response


def _mock_client(blocks: list[SimpleNamespace]) -> MagicMock:
    client = MagicMock()
    client.messages.create.return_value = SimpleNamespace(content=blocks, stop_reason="end_turn")
    return client


def test_fetch_research_response_joins_text_blocks_only() -> None:
    blocks = [
        SimpleNamespace(type="text", text="Let me search."),
        SimpleNamespace(type="server_tool_use", name="web_search"),
        SimpleNamespace(type="web_search_tool_result", content=[]),
        SimpleNamespace(type="text", text="%%%JSON_START%%%{}%%%JSON_END%%%"),
    ]
    client = _mock_client(blocks)

    with patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}, clear=True), \
         patch("anthropic_client.anthropic.Anthropic", return_value=client):
        result = fetch_research_response("system text", "user text")

    assert result == "Let me search.\n%%%JSON_START%%%{}%%%JSON_END%%%"


def test_fetch_research_response_request_shape() -> None:
    client = _mock_client([SimpleNamespace(type="text", text="ok")])

    with patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}, clear=True), \
         patch("anthropic_client.anthropic.Anthropic", return_value=client):
        fetch_research_response("system text", "user text")

    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-opus-4-5-20251101"
    assert kwargs["max_tokens"] == 16000
    assert kwargs["system"] == "system text"
    assert kwargs["messages"] == [{"role": "user", "content": "user text"}]
    assert kwargs["tools"] == [{"type": "web_search_20250305", "name": "web_search", "max_uses": 20}]


def test_fetch_research_response_env_overrides() -> None:
    client = _mock_client([SimpleNamespace(type="text", text="ok")])
    env = {
        "ANTHROPIC_API_KEY": "test-key",
        "CLAUDE_MODEL": "claude-sonnet-4-5",
        "CLAUDE_MAX_TOKENS": "4000",
        "WEB_SEARCH_MAX_USES": "5",
    }

    with patch.dict("os.environ", env, clear=True), \
         patch("anthropic_client.anthropic.Anthropic", return_value=client):
        fetch_research_response("s", "u")

    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-sonnet-4-5"
    assert kwargs["max_tokens"] == 4000
    assert kwargs["tools"][0]["max_uses"] == 5


def test_fetch_research_response_raises_without_api_key() -> None:
    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(RuntimeError, match="ANTHROPIC_API_KEY"):
            fetch_research_response("s", "u")


def test_fetch_research_response_propagates_sdk_errors() -> None:
    client = MagicMock()
    client.messages.create.side_effect = RuntimeError("overloaded")

    with patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}, clear=True), \
         patch("anthropic_client.anthropic.Anthropic", return_value=client):
        with pytest.raises(RuntimeError, match="overloaded"):
            fetch_research_response("s", "u")
