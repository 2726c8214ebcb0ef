from __future__ import annotations

import html

import pytest

from escaping import escape_attr, escape_html

_HOSTILE = [
    '<script>alert("x")</script>',
    "Tom & Jerry's <b>bold</b> \"quoted\"",
    '" onmouseover="alert(1)',
    "' autofocus onfocus='alert(1)",
    "&amp; already escaped",
    "",
]


def test_escape_html_basic() -> None:
    assert escape_html('<script>alert("x")</script>') == '&lt;script&gt;alert("x")&lt;/script&gt;'
    assert escape_html("R&D") == "R&amp;D"


def test_escape_attr_quotes() -> None:
    assert escape_attr('a"b') == "a&quot;b"
    assert escape_attr("a'b") == "a&#x27;b"
    assert escape_attr("https://x.org/?a=1&b=<2>") == "https://x.org/?a=1&amp;b=&lt;2&gt;"


def test_escape_none_and_non_strings() -> None:
    assert escape_html(None) == ""
    assert escape_attr(None) == ""
    assert escape_html(3) == "3"


@pytest.mark.parametrize("text", _HOSTILE)
def test_escape_html_round_trips_without_markup(text: str) -> None:
    escaped = escape_html(text)
    assert html.unescape(escaped) == text
    assert "<" not in escaped and ">" not in escaped


@pytest.mark.parametrize("text", _HOSTILE)
def test_escape_attr_round_trips_without_breaking_attribute(text: str) -> None:
    escaped = escape_attr(text)
    assert html.unescape(escaped) == text
    for char in "<>\"'":
        assert char not in escaped
