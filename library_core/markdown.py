"""Minimal markdown to HTML conversion for file previews.

Handles headings (h1-h3), bold, italics, inline code and blank-line paragraphs.
Input is HTML-escaped first.
"""

import re
from html import escape

_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"`(.*?)`"), r"<code>\1</code>"),
    (re.compile(r"\n\n"), "</p><p>"),
    (re.compile(r"^\n", re.MULTILINE), "<p>"),
    (re.compile(r"\n$", re.MULTILINE), "</p>"),
]


def render_markdown(text: str) -> str:
    """Render markdown text to an HTML fragment wrapped in a paragraph.

    Example:
        >>> render_markdown("# Title")
        '<p><h1>Title</h1></p>'
    """
    html = escape(text, quote=False)
    for pattern, replacement in _RULES:
        html = pattern.sub(replacement, html)
    return f"<p>{html}</p>"
