"""Markdown rendering for assistant messages."""

from routemethod.domains.markdown.normalizer import escape_html, normalize_text
from routemethod.domains.markdown.renderer import render_markdown, transform_markdown, wrap_paragraphs

__all__ = ["escape_html", "normalize_text", "render_markdown", "transform_markdown", "wrap_paragraphs"]
