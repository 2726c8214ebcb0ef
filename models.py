"""Shared typed models for the research radar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Paper:
    """Display-ready paper record read from the persisted papers document."""

    rank: str
    title: str
    authors: str
    source: str
    date: str
    url: str | None
    download_url: str | None
    description: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Paper:
        """Normalize one loosely-typed paper dict, applying display fallbacks."""
        rank = raw.get("rank")
        return cls(
            rank="" if rank is None else str(rank),
            title=_as_text(raw.get("title")),
            authors=_as_text(raw.get("authors")) or "Unknown",
            source=_as_text(raw.get("source")) or "N/A",
            date=_as_text(raw.get("date")) or "N/A",
            url=_as_text(raw.get("url")) or None,
            download_url=_as_text(raw.get("downloadUrl")) or None,
            description=_as_text(raw.get("description")),
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
