"""HTML escaping for text and attribute values inserted into the page."""

from __future__ import annotations

import html
from typing import Any


def escape_html(value: Any) -> str:
    """Escape a value for use as element text content."""
    if value is None:
        return ""
    return html.escape(str(value), quote=False)


def escape_attr(value: Any) -> str:
    """Escape a value for use inside a quoted attribute (href, class, ...)."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)
