"""Character-level clean-up that runs before any markdown is interpreted."""

from __future__ import annotations

# UTF-8 punctuation that was decoded as cp1252 somewhere upstream. The bare
# prefix must stay last: it is the tail of every other entry.
MOJIBAKE_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("â€”", "—"),  # em dash
    ("â€\"", "—"),  # em dash, last byte flattened to an ASCII quote
    ("â€“", "–"),  # en dash
    ("â€˜", "‘"),
    ("â€™", "’"),
    ("â€œ", "“"),
    ("â€¦", "…"),
    ("â€\x9d", "”"),
    ("â€", "”"),
)

HTML_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


def normalize_text(text: str) -> str:
    """Repair known mis-encoded dashes and smart quotes. No-op on clean text."""
    if not text:
        return ""
    for broken, fixed in MOJIBAKE_REPLACEMENTS:
        text = text.replace(broken, fixed)
    return text


def escape_html(text: str) -> str:
    """Entity-escape `&`, `<` and `>`; ampersand goes first so entities are not double-escaped."""
    if not text:
        return ""
    for raw, entity in HTML_ESCAPES:
        text = text.replace(raw, entity)
    return text
