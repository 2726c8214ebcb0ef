"""Derived fields for parsed papers (no LLM calls, no I/O)."""

from __future__ import annotations

import re
from typing import Any

# arXiv abstract pages: /abs/XXXX.XXXXX -> /pdf/XXXX.XXXXX.pdf
_ARXIV_ABS_RE = re.compile(r"arxiv\.org/abs/([\d.]+)")


def derive_download_url(url: str | None) -> str | None:
    """Return a direct PDF link for a known abstract-page URL, else None."""
    if not url or not isinstance(url, str):
        return None
    match = _ARXIV_ABS_RE.search(url)
    if match:
        return f"https://arxiv.org/pdf/{match.group(1)}.pdf"
    return None


def enrich_papers(document: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of document with downloadUrl recomputed on every paper.

    The input document and its paper dicts are left untouched.
    """
    enriched = dict(document)
    papers = document.get("papers")
    if not isinstance(papers, list):
        return enriched

    enriched["papers"] = [
        {**paper, "downloadUrl": derive_download_url(paper.get("url"))}
        if isinstance(paper, dict)
        else paper
        for paper in papers
    ]
    return enriched
