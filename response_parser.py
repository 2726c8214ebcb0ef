"""Extract the structured papers payload from free-text model output.

The model is asked to wrap its JSON between ``%%%JSON_START%%%`` and
``%%%JSON_END%%%``, but nothing guarantees it will. Three strategies are tried
in order and the first one that yields an object with a ``papers`` list wins:

1. the marker-delimited block,
2. the first fenced ```` ```json ```` code block,
3. any brace-delimited block in the text, longest first.
"""

from __future__ import annotations

import json
import logging
import re
from json import JSONDecodeError
from typing import Any, Callable

LOGGER = logging.getLogger(__name__)

JSON_START_MARKER = "%%%JSON_START%%%"
JSON_END_MARKER = "%%%JSON_END%%%"
CODE_BLOCK_FENCE = "```json"

_MARKER_RE = re.compile(
    re.escape(JSON_START_MARKER) + r"(.*?)" + re.escape(JSON_END_MARKER), re.DOTALL
)
_CODE_BLOCK_RE = re.compile(r"```json\s*(.*?)```", re.DOTALL)
_BRACE_BLOCK_RE = re.compile(r"\{.*\}", re.DOTALL)


class ExtractionError(RuntimeError):
    """Raised when no strategy finds a usable JSON payload."""


def parse_response(raw_text: str) -> dict[str, Any]:
    """Return the papers document embedded in raw_text.

    Raises:
        ExtractionError: none of the strategies produced an object with a
            list-valued ``papers`` field.
    """
    for strategy in STRATEGIES:
        parsed = strategy(raw_text)
        if parsed is not None:
            LOGGER.debug("Parsed model response with strategy=%s", strategy.__name__)
            return parsed

    raise ExtractionError("Could not extract valid JSON from API response")


def from_markers(raw_text: str) -> dict[str, Any] | None:
    match = _MARKER_RE.search(raw_text)
    if not match:
        return None
    parsed = _loads_papers_document(match.group(1).strip())
    if parsed is None:
        LOGGER.warning("Marker-delimited JSON found but failed to parse, trying fallback...")
    return parsed


def from_code_block(raw_text: str) -> dict[str, Any] | None:
    match = _CODE_BLOCK_RE.search(raw_text)
    if not match:
        return None
    parsed = _loads_papers_document(match.group(1).strip())
    if parsed is None:
        LOGGER.warning("Code-block JSON found but failed to parse, trying fallback...")
    return parsed


def from_brace_blocks(raw_text: str) -> dict[str, Any] | None:
    """Try every brace-delimited candidate, longest first."""
    for candidate in sorted(_brace_candidates(raw_text), key=len, reverse=True):
        parsed = _loads_papers_document(candidate)
        if parsed is not None:
            return parsed
    return None


STRATEGIES: tuple[Callable[[str], dict[str, Any] | None], ...] = (
    from_markers,
    from_code_block,
    from_brace_blocks,
)


def extract_pre_summary(raw_text: str) -> str:
    """Return the prose the model wrote before its JSON block, if any."""
    marker_index = raw_text.find(JSON_START_MARKER)
    if marker_index > 0:
        return raw_text[:marker_index].strip()

    code_index = raw_text.find(CODE_BLOCK_FENCE)
    if code_index > 0:
        return raw_text[:code_index].strip()

    return ""


def _brace_candidates(raw_text: str) -> list[str]:
    """Collect greedy {...} spans plus every object decodable from a '{'."""
    candidates = _BRACE_BLOCK_RE.findall(raw_text)

    decoder = json.JSONDecoder()
    for index, char in enumerate(raw_text):
        if char != "{":
            continue
        try:
            _, end = decoder.raw_decode(raw_text, index)
        except JSONDecodeError:
            continue
        candidates.append(raw_text[index:end])

    return list(dict.fromkeys(candidates))


def _loads_papers_document(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except JSONDecodeError:
        return None
    if not isinstance(parsed, dict) or not isinstance(parsed.get("papers"), list):
        return None
    return parsed
