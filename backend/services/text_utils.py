"""Text helpers shared by search summaries and rendered listings."""

import html
import re

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

_md = MarkdownIt()

WHITESPACE = re.compile(r"\s+")


def markdown_to_text(source: str) -> str:
    """Render CMS Markdown to HTML and flatten it to a single line of text."""
    if not source:
        return ""
    rendered = _md.render(source)
    text = BeautifulSoup(rendered, "html.parser").get_text(" ")
    return WHITESPACE.sub(" ", text).strip()


def truncate(text: str | None, length: int) -> str:
    """Cut text to length characters and mark the cut with '...'."""
    if not text:
        return ""
    if len(text) > length:
        return text[:length] + "..."
    return text


def slugify(text: str | None) -> str:
    """Lowercase and collapse runs of non-alphanumerics into '-'."""
    if not text:
        return ""
    return re.sub(r"[^a-z0-9]+", "-", text.lower())


def esc(s) -> str:
    """HTML-escape a string."""
    return html.escape(str(s)) if s else ""
