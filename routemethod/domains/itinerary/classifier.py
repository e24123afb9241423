"""
Itinerary detection and message segmentation.

An itinerary reply usually reads: some conversational lead-in, an optional
`# Trip title`, the `## Day N` sections, then a closing sentence inviting
refinements. The display layer shows the middle part as an itinerary card and
the surrounding prose as normal chat bubbles.
"""

from __future__ import annotations

import re
from typing import Iterable

from routemethod.utils.config import DEFAULT_CLOSING_MARKERS

DAY_HEADING = "## Day"
MORNING_HEADING = "### Morning"
EVENING_HEADING = "### Evening"

_TITLE_HEADING = re.compile(r"^# ", re.MULTILINE)


def is_itinerary(text: str) -> bool:
    """
    True when the text looks like a full itinerary.

    Coarse on purpose: prose that merely contains these heading tokens is a
    known false positive.
    """
    if not text:
        return False
    return DAY_HEADING in text or (MORNING_HEADING in text and EVENING_HEADING in text)


def _itinerary_start(text: str) -> int:
    day_idx = text.find(DAY_HEADING)
    title = _TITLE_HEADING.search(text)
    if title and (day_idx < 0 or title.start() < day_idx):
        return title.start()
    # No day heading: callers should have classified first. Treat the whole
    # text as itinerary rather than guessing a boundary.
    return max(day_idx, 0)


def _itinerary_end(text: str, start: int, markers: Iterable[str]) -> int:
    end = -1
    for marker in markers:
        if not marker:
            continue
        idx = text.rfind(marker)
        if idx >= start:
            end = max(end, idx)
    return end if end >= 0 else len(text)


def segment_message(
    text: str,
    closing_markers: Iterable[str] | None = None,
) -> dict[str, str]:
    """
    Split an itinerary message into leading prose, itinerary body and trailing prose.

    Args:
        text: Assistant message for which `is_itinerary` returned True.
        closing_markers: Phrases that open the trailing prose. Defaults to the
            built-in markers; pass `config.closing_markers()` to honour overrides.

    Returns:
        Dict with "before", "itinerary" and "after" (each trimmed, possibly empty).
        When no closing marker is found the itinerary runs to the end of the text.
    """
    text = text or ""
    markers = DEFAULT_CLOSING_MARKERS if closing_markers is None else tuple(closing_markers)
    start = _itinerary_start(text)
    end = _itinerary_end(text, start, markers)
    return {
        "before": text[:start].strip() if start > 0 else "",
        "itinerary": text[start:end].strip(),
        "after": text[end:].strip(),
    }
