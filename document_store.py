"""JSON file sink for the papers document served to the static page."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from enricher import enrich_papers
from prompts import SCHOLAR_URL, TIMEFRAME
from response_parser import extract_pre_summary, parse_response

# Overridden by PAPERS_OUTPUT_PATH or --output.
DEFAULT_PAPERS_PATH = "data/papers.json"

LOGGER = logging.getLogger(__name__)


def utc_timestamp(now: datetime | None = None) -> str:
    """Format as ISO-8601 UTC with millisecond precision and a trailing Z."""
    now = now or datetime.now(UTC)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def ensure_output_dir(path: str | Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def load_previous_document(path: str | Path) -> dict[str, Any] | None:
    """Return the last persisted document, or None if there is no usable one."""
    path = Path(path)
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as fh:
            document = json.load(fh)
    except (OSError, UnicodeDecodeError, JSONDecodeError) as exc:
        LOGGER.warning("Ignoring unreadable previous document %s: %s", path, exc)
        return None

    if not isinstance(document, dict):
        LOGGER.warning("Ignoring previous document %s: expected a JSON object", path)
        return None
    return document


def write_document(document: dict[str, Any], path: str | Path) -> None:
    """Overwrite path with the document (pretty-printed ASCII-escaped JSON).

    The document is written to a sibling temp file first and moved over path,
    so a failed write leaves the previous file intact.
    """
    path = Path(path)
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(document, fh, indent=2)
            fh.write("\n")
        tmp_path.replace(path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def build_document(raw_text: str, now: datetime | None = None) -> dict[str, Any]:
    """Turn a raw model answer into the document persisted for the page.

    Raises:
        ExtractionError: no JSON payload could be recovered from raw_text.
    """
    pre_summary = extract_pre_summary(raw_text)
    enriched = enrich_papers(parse_response(raw_text))

    document: dict[str, Any] = {
        "generatedAt": utc_timestamp(now),
        "timeframe": TIMEFRAME,
        "scholarUrl": SCHOLAR_URL,
    }
    if pre_summary:
        document["preSummary"] = pre_summary
    document.update(enriched)
    return document


def build_degraded_document(
    previous: dict[str, Any] | None,
    error: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Document to persist after a failed run.

    Keeps the previous document (with an ``error`` note) so the page still has
    something to show; otherwise a minimal empty document carrying the error.
    previous is not modified.
    """
    timestamp = utc_timestamp(now)
    if previous is not None:
        return {**previous, "error": f"Update failed at {timestamp}: {error}"}

    return {
        "generatedAt": timestamp,
        "error": error,
        "papers": [],
        "summary": None,
    }
