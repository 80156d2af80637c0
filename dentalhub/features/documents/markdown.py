"""Render the markdown subset used in clinic documents to HTML."""

import html
import re


# (pattern, replacement) pairs, applied in order
_RULES = [
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"^- (.*)$", re.MULTILINE), r"<li>\1</li>"),
    (re.compile(r"^\d+\. (.*)$", re.MULTILINE), r"<li>\1</li>"),
]


def render_markdown(content: str) -> str:
    """
    Convert document content to HTML.
    
    Supports headings (#, ##, ###), **bold**, *italic*, "- " and "1. "
    list items, and blank-line paragraph breaks. The input is escaped
    first so raw HTML in a document is shown as text.
    """
    text = html.escape(content, quote=False)
    
    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)
    
    text = text.replace("\n\n", "</p><p>")
    
    return f"<p>{text}</p>"
