"""Thin wrapper around the Anthropic Messages API with server-side web search."""

from __future__ import annotations

import logging
import os
from typing import Any

import anthropic

LOGGER = logging.getLogger(__name__)

WEB_SEARCH_TOOL_TYPE = "web_search_20250305"


def fetch_research_response(system_prompt: str, user_prompt: str) -> str:
    """Call Claude with web search enabled and return the answer text.

    Only the ``text`` blocks of the final response are kept; tool-use and
    search-result blocks are dropped. Blocks are joined with newlines.

    Args:
        system_prompt: Passed via the API's dedicated system= parameter.
        user_prompt: Single user turn.
    """
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        raise RuntimeError("ANTHROPIC_API_KEY environment variable is required")

    claude_model = os.getenv("CLAUDE_MODEL", "claude-opus-4-5-20251101")
    max_tokens = int(os.getenv("CLAUDE_MAX_TOKENS", "16000"))
    max_searches = int(os.getenv("WEB_SEARCH_MAX_USES", "20"))
    client = anthropic.Anthropic(api_key=api_key)

    kwargs: dict[str, Any] = {
        "model": claude_model,
        "max_tokens": max_tokens,
        "system": system_prompt,
        "tools": [{"type": WEB_SEARCH_TOOL_TYPE, "name": "web_search", "max_uses": max_searches}],
        "messages": [{"role": "user", "content": user_prompt}],
    }

    LOGGER.info("Calling Anthropic API (%s + web_search, max_uses=%s)...", claude_model, max_searches)
    response = client.messages.create(**kwargs)

    text_parts = [block.text for block in response.content if getattr(block, "type", None) == "text"]
    LOGGER.debug(
        "Claude response: blocks=%s text_blocks=%s stop_reason=%s",
        len(response.content),
        len(text_parts),
        getattr(response, "stop_reason", None),
    )
    return "\n".join(text_parts)
