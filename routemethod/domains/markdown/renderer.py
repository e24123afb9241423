"""Markdown-to-HTML rendering for assistant replies.

Only the dialect the planner actually writes is supported: `#`/`##`/`###`
headings, `**bold**`, `*italic*`, `- ` bullets and `1. ` numbered items. Anything
else comes through as escaped text inside a paragraph.

The pipeline is normalize -> escape -> transform -> wrap paragraphs. It is pure
and never raises, so it can be re-run on every streamed chunk; it is not
idempotent, so never feed it its own output.
"""

from __future__ import annotations

import re

from routemethod.domains.markdown.normalizer import escape_html, normalize_text

SPACER = '<br class="spacer">'
BLOCK_PREFIXES = ("<h", "<ul", "<ol", "<li")

# Longest heading marker first.
_HEADINGS = (
    (re.compile(r"^### (.+)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.+)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.+)$", re.MULTILINE), r"<h1>\1</h1>"),
)
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*([^*\n]+)\*")

_BULLET_ITEM = re.compile(r"^- (.+)$", re.MULTILINE)
_BULLET_RUN = re.compile(r"(?:<li>.*</li>\n?)+")
# Numbered items get a temporary tag so a run directly after a bullet list is
# not pulled into that list's <ul>.
_NUMBERED_ITEM = re.compile(r"^\d+\. (.+)$", re.MULTILINE)
_NUMBERED_RUN = re.compile(r"(?:<oli>.*</oli>\n?)+")
_NUMBERED_MARKER = re.compile(r"<oli>(.*?)</oli>")

_SPACER_BEFORE_CLOSE = re.compile(re.escape(SPACER) + r"\s*</p>")
_SPACER_RUN = re.compile("(?:" + re.escape(SPACER) + r"\n?)+")


def _wrap_run(tag: str, run: str) -> str:
    # The closing tag stays on the last item's line; the newline after the run
    # is kept outside the container.
    body = run.rstrip("\n")
    return f"<{tag}>{body}</{tag}>{run[len(body):]}"


def _wrap_bullets(match: re.Match) -> str:
    return _wrap_run("ul", match.group(0))


def _wrap_numbered(match: re.Match) -> str:
    items = _NUMBERED_MARKER.sub(r"<li>\1</li>", match.group(0))
    return _wrap_run("ol", items)


def transform_markdown(escaped: str) -> str:
    """Convert headings, emphasis and lists in already-escaped text to HTML."""
    html = escaped
    for pattern, repl in _HEADINGS:
        html = pattern.sub(repl, html)

    # Bold before italic so `**x**` is not eaten by the single-star rule.
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    html = _ITALIC.sub(r"<em>\1</em>", html)

    html = _BULLET_ITEM.sub(r"<li>\1</li>", html)
    html = _BULLET_RUN.sub(_wrap_bullets, html)

    html = _NUMBERED_ITEM.sub(r"<oli>\1</oli>", html)
    html = _NUMBERED_RUN.sub(_wrap_numbered, html)
    return html


def _is_block_line(trimmed: str) -> bool:
    return not trimmed or trimmed.startswith(BLOCK_PREFIXES)


def wrap_paragraphs(html: str) -> str:
    """
    Wrap loose lines in <p> elements, leaving block-level lines untouched.

    Consecutive loose lines share one paragraph and are joined with a trailing
    space. Blank lines close the current paragraph; they become spacer markers
    that the clean-up pass collapses into plain blank lines.
    """
    out: list[str] = []
    in_para = False
    for line in html.split("\n"):
        trimmed = line.strip()
        if _is_block_line(trimmed):
            if in_para:
                out.append("</p>")
                in_para = False
            out.append(line if trimmed else SPACER)
        else:
            if not in_para:
                out.append("<p>")
                in_para = True
            out.append(trimmed + " ")
    if in_para:
        out.append("</p>")

    wrapped = _SPACER_BEFORE_CLOSE.sub("</p>", "\n".join(out))
    return _SPACER_RUN.sub("\n", wrapped).strip()


def render_markdown(text: str) -> str:
    """Render assistant markdown to an HTML fragment safe to inject as inner markup."""
    if not text:
        return ""
    html = escape_html(normalize_text(text))
    html = transform_markdown(html)
    return wrap_paragraphs(html)
