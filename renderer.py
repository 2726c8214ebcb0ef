"""Static page renderer for the persisted papers document.

The page is built from a fixed set of regions (``ViewHandles``). ``render``
fills them from one fetched document and ``render_page`` serializes them into
a standalone HTML file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Callable

import requests

from escaping import escape_attr, escape_html
from models import Paper

REQUEST_TIMEOUT_SECONDS = 20
DEFAULT_TIMEFRAME = "7 days"

LOGGER = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when the papers document cannot be loaded."""


@dataclass(slots=True)
class Region:
    """One page region: visibility, plain text, and pre-escaped HTML children."""

    element_id: str
    tag: str = "div"
    hidden: bool = True
    text: str = ""
    children: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ViewHandles:
    status_bar: Region
    status_text: Region
    error_banner: Region
    meta_bar: Region
    last_updated: Region
    timeframe_badge: Region
    summary_section: Region
    summary_trends: Region
    summary_recommendations: Region
    papers_list: Region
    empty_state: Region

    @classmethod
    def create(cls) -> ViewHandles:
        """Initial page state: everything hidden except the always-on labels."""
        return cls(
            status_bar=Region("status-bar"),
            status_text=Region("status-text", tag="span", hidden=False, text="Loading papers..."),
            error_banner=Region("error-banner"),
            meta_bar=Region("meta-bar"),
            last_updated=Region("last-updated", tag="span", hidden=False),
            timeframe_badge=Region("timeframe-badge", tag="span", hidden=False),
            summary_section=Region("summary-section", tag="section"),
            summary_trends=Region("summary-trends", tag="p", hidden=False),
            summary_recommendations=Region("summary-recommendations", tag="p", hidden=False),
            papers_list=Region("papers-list", hidden=False),
            empty_state=Region("empty-state", text="No papers found for this period."),
        )


def fetch_document(source: str | Path) -> dict[str, Any]:
    """Load the papers document from an http(s) URL or a local path.

    Raises:
        FetchError: network error, non-success status, or a body that is not
            a JSON object.
    """
    source = str(source)
    if source.startswith(("http://", "https://")):
        try:
            response = requests.get(source, timeout=REQUEST_TIMEOUT_SECONDS)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to load papers: {exc}") from exc
        if not response.ok:
            raise FetchError(f"Failed to load papers (HTTP {response.status_code})")
        try:
            document = response.json()
        except ValueError as exc:
            raise FetchError(f"Failed to parse papers document: {exc}") from exc
    else:
        try:
            document = json.loads(Path(source).read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise FetchError(f"Failed to load papers (not found: {source})") from exc
        except (OSError, UnicodeDecodeError, JSONDecodeError) as exc:
            raise FetchError(f"Failed to parse papers document: {exc}") from exc

    if not isinstance(document, dict):
        raise FetchError("Failed to parse papers document: expected a JSON object")
    return document


def render(view: ViewHandles, load: Callable[[], dict[str, Any]]) -> ViewHandles:
    """Fill view from the document returned by load(). Never raises."""
    view.status_bar.hidden = False

    try:
        data = load()
        view.status_bar.hidden = True
        _render_document(view, data)
    except Exception as exc:  # broad: any load failure becomes page state
        LOGGER.warning("Rendering empty page after load failure: %s", exc)
        view.status_bar.hidden = True
        view.error_banner.text = str(exc) or exc.__class__.__name__
        view.error_banner.hidden = False
        view.empty_state.hidden = False

    return view


def _render_document(view: ViewHandles, data: dict[str, Any]) -> None:
    if data.get("error"):
        view.error_banner.text = f"Last update encountered an error: {data['error']}"
        view.error_banner.hidden = False

    if data.get("generatedAt"):
        view.last_updated.text = f"Last updated: {format_generated_at(data['generatedAt'])}"
        view.timeframe_badge.text = f"Last {data.get('timeframe') or DEFAULT_TIMEFRAME}"
        view.meta_bar.hidden = False

    summary = data.get("summary")
    if isinstance(summary, dict):
        trends = summary.get("trends")
        recommendations = summary.get("recommendations")
        if trends:
            view.summary_trends.text = str(trends)
        if recommendations:
            view.summary_recommendations.text = str(recommendations)
        if trends or recommendations:
            view.summary_section.hidden = False

    papers = data.get("papers")
    if not papers or not isinstance(papers, list):
        view.empty_state.hidden = False
        return

    for raw_paper in papers:
        paper = Paper.from_dict(raw_paper if isinstance(raw_paper, dict) else {})
        view.papers_list.children.append(render_card(paper))


def format_generated_at(value: Any) -> str:
    """Format like 'Sat, Oct 17, 2026, 09:30 AM'; unparseable input is returned as-is."""
    raw = str(value)
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return raw
    return (
        f"{parsed:%a}, {parsed:%b} {parsed.day}, {parsed.year}, "
        f"{parsed:%I}:{parsed:%M} {parsed:%p}"
    )


def render_card(paper: Paper) -> str:
    """HTML for one paper card; every field is escaped before insertion."""
    if paper.url:
        title = (
            f'<a href="{escape_attr(paper.url)}" target="_blank" rel="noopener">'
            f"{escape_html(paper.title)}</a>"
        )
    else:
        title = escape_html(paper.title)

    return (
        '<div class="paper-card">'
        '<div class="paper-header">'
        f'<span class="paper-rank">{escape_html(paper.rank)}</span>'
        f'<span class="paper-title">{title}</span>'
        "</div>"
        '<div class="paper-meta">'
        f'<span><span class="meta-label">Authors:</span> {escape_html(paper.authors)}</span>'
        f'<span><span class="meta-label">Source:</span> {escape_html(paper.source)}</span>'
        f'<span><span class="meta-label">Date:</span> {escape_html(paper.date)}</span>'
        "</div>"
        f'<div class="paper-description">{escape_html(paper.description)}</div>'
        f"{_render_actions(paper)}"
        "</div>"
    )


def _render_actions(paper: Paper) -> str:
    links = []
    if paper.url:
        links.append(
            f'<a class="btn-link btn-view" href="{escape_attr(paper.url)}" '
            'target="_blank" rel="noopener">View</a>'
        )
    if paper.download_url:
        links.append(
            f'<a class="btn-link btn-download" href="{escape_attr(paper.download_url)}" '
            'target="_blank" rel="noopener">PDF</a>'
        )
    return f'<div class="paper-actions">{"".join(links)}</div>'


_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Research Radar</title>
<link rel="stylesheet" href="style.css">
</head>
<body>
<header>
<h1>Research Radar</h1>
{meta_bar}
</header>
<main>
{status_bar}
{error_banner}
{summary_section}
{papers_list}
{empty_state}
</main>
</body>
</html>
"""


def render_page(view: ViewHandles) -> str:
    """Serialize the view into a standalone HTML page."""
    meta_bar = _wrap(view.meta_bar, _element(view.last_updated) + _element(view.timeframe_badge))
    status_bar = _wrap(view.status_bar, _element(view.status_text))
    summary_section = _wrap(
        view.summary_section,
        "<h2>Summary</h2>"
        '<h3>Trends</h3>' + _element(view.summary_trends)
        + '<h3>Recommendations</h3>' + _element(view.summary_recommendations),
    )
    return _PAGE_TEMPLATE.format(
        meta_bar=meta_bar,
        status_bar=status_bar,
        error_banner=_element(view.error_banner),
        summary_section=summary_section,
        papers_list=_wrap(view.papers_list, "".join(view.papers_list.children)),
        empty_state=_element(view.empty_state),
    )


def write_page(view: ViewHandles, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_page(view), encoding="utf-8", errors="xmlcharrefreplace")
    LOGGER.info("Wrote page to %s (cards=%s)", path, len(view.papers_list.children))


def _element(region: Region) -> str:
    return _wrap(region, escape_html(region.text))


def _wrap(region: Region, inner_html: str) -> str:
    hidden = " hidden" if region.hidden else ""
    return f'<{region.tag} id="{escape_attr(region.element_id)}"{hidden}>{inner_html}</{region.tag}>'
