"""
Tests for the markdown pipeline: normalize_text, escape_html, transform_markdown,
wrap_paragraphs, render_markdown.
"""

from __future__ import annotations

import pytest

from routemethod.domains.markdown.normalizer import escape_html, normalize_text
from routemethod.domains.markdown.renderer import (
    render_markdown,
    transform_markdown,
    wrap_paragraphs,
)


def _unescape(text: str) -> str:
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


@pytest.mark.parametrize(
    "broken, fixed",
    [
        ("Day 1 â€” Monday", "Day 1 — Monday"),
        ('Day 1 â€" Monday', "Day 1 — Monday"),
        ("Itâ€™s open", "It’s open"),
        ("â€˜softâ€™", "‘soft’"),
        ("â€œBest tacosâ€", "“Best tacos”"),
        ("9â€“11am", "9–11am"),
        ("and moreâ€¦", "and more…"),
    ],
)
def test_normalize_text_repairs_mojibake(broken: str, fixed: str) -> None:
    """normalize_text maps mis-decoded dashes and quotes back to the intended characters."""
    assert normalize_text(broken) == fixed


def test_normalize_text_is_noop_on_clean_text() -> None:
    """Clean text, including real em dashes and quotes, passes through unchanged."""
    clean = "Day 1 — Monday, “Café” & ‘bar’ <3"
    assert normalize_text(clean) == clean
    assert normalize_text("") == ""


def test_escape_html_escapes_ampersand_first() -> None:
    """Ampersand is escaped before < and > so the new entities are not double-escaped."""
    assert escape_html("a < b & c > d") == "a &lt; b &amp; c &gt; d"
    assert escape_html("<&>") == "&lt;&amp;&gt;"


@pytest.mark.parametrize(
    "raw",
    ["plain text", "x < y && y > z", "<b>tag</b>", "AT&T", "", "a&b<c>d\n<e>"],
)
def test_escape_html_round_trips(raw: str) -> None:
    """Undoing the three entities recovers the original string."""
    assert _unescape(escape_html(raw)) == raw


def test_transform_headings_longest_marker_first() -> None:
    """### is a level-3 heading, not a level-1 heading with '##' text."""
    out = transform_markdown("# Trip\n## Day 1\n### Morning")
    assert out == "<h1>Trip</h1>\n<h2>Day 1</h2>\n<h3>Morning</h3>"


def test_transform_bold_before_italic() -> None:
    """**bold** is not partially consumed by the single-star italic rule."""
    assert transform_markdown("**Tip:** go *early*") == "<strong>Tip:</strong> go <em>early</em>"


def test_transform_ordered_run_not_merged_into_bullets() -> None:
    """A numbered run right after a bullet run gets its own <ol>."""
    out = transform_markdown("- a\n1. b\n2. c")
    assert out == "<ul><li>a</li></ul>\n<ol><li>b</li>\n<li>c</li></ol>"


def test_wrap_paragraphs_leaves_block_lines_alone() -> None:
    """Headings are emitted as-is; loose text after them is wrapped."""
    assert wrap_paragraphs("<h2>X</h2>\ntext") == "<h2>X</h2>\n<p>\ntext \n</p>"


def test_render_plain_text_is_single_paragraph() -> None:
    """Plain text yields exactly one paragraph wrapper around the trimmed text."""
    html = render_markdown("  hello world  ")
    assert html.replace("\n", "") == "<p>hello world </p>"


def test_render_joins_wrapped_lines_with_space() -> None:
    """Consecutive loose lines share one paragraph and the final one is flushed."""
    html = render_markdown("line one\nline two")
    assert html == "<p>\nline one \nline two \n</p>"
    assert html.count("<p>") == html.count("</p>") == 1


def test_render_day_heading_not_wrapped() -> None:
    """A day heading renders as a single h2 with no surrounding paragraph."""
    html = render_markdown("## Day 1 — Monday, June 1")
    assert html == "<h2>Day 1 — Monday, June 1</h2>"
    assert "<p>" not in html


def test_render_repairs_encoding_in_heading() -> None:
    """Mojibake inside a heading is fixed before rendering."""
    html = render_markdown("## Day 2 â€” Tuesday")
    assert html == "<h2>Day 2 — Tuesday</h2>"


def test_render_escapes_model_markup() -> None:
    """Literal tags typed by the model never become live markup."""
    html = render_markdown("<script>alert(1)</script> & more")
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt; &amp; more" in html


def test_render_list_then_paragraph() -> None:
    """A bullet list followed by prose: list stays block-level, prose gets one paragraph."""
    html = render_markdown("- a\n- b\n\nAfter")
    assert html == "<ul><li>a</li>\n<li>b</li></ul>\n\n<p>\nAfter \n</p>"


def test_render_never_leaks_spacers() -> None:
    """Blank lines become plain blank lines, never <br> markers."""
    html = render_markdown("Intro\n\n\n## Day 1\n\n")
    assert "<br" not in html
    assert html == "<p>\nIntro \n</p>\n\n<h2>Day 1</h2>"


@pytest.mark.parametrize(
    "partial",
    ["**Tip: arrive", "*half", "## Day 1\n- Visit **Lou", "Ends mid paragraph", "\n\n", "1. "],
)
def test_render_partial_stream_text_is_balanced(partial: str) -> None:
    """Truncated streaming text never crashes or leaves an unclosed paragraph."""
    html = render_markdown(partial)
    assert html.count("<p>") == html.count("</p>")


def test_render_unterminated_bold_stays_literal() -> None:
    """A dangling ** renders literally until the rest arrives."""
    assert render_markdown("**Tip: arrive") == "<p>\n**Tip: arrive \n</p>"


def test_render_empty_input() -> None:
    assert render_markdown("") == ""


def test_render_full_itinerary_uses_known_tags_only() -> None:
    """A realistic reply only produces tags from the supported set."""
    import re

    text = """# Mexico City in June

## Day 1 — Monday, June 1
### Morning
- Visit **Chapultepec Castle** for the views
- Grab coffee at Café Avellaneda
### Evening
Dinner at *Contramar* — book ahead.

1. Do you prefer early starts?
2. Any dietary restrictions?"""
    html = render_markdown(text)
    tags = set(re.findall(r"</?([a-z0-9]+)", html))
    assert tags <= {"h1", "h2", "h3", "p", "ul", "ol", "li", "strong", "em"}
    assert "<h1>Mexico City in June</h1>" in html
    assert "<li>Visit <strong>Chapultepec Castle</strong> for the views</li>" in html
    assert "<ol><li>Do you prefer early starts?</li>" in html
