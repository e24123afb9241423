"""Map place names to the itinerary day they were scheduled on.

Best-effort extraction over prose: a cue word ("visit", "head to", "grab", ...)
followed by a capitalised phrase. Misses and stray matches are expected; the
place panel simply shows no label when a lookup fails.
"""

from __future__ import annotations

import re
from typing import Iterable

from routemethod.utils.logger import get_logger

logger = get_logger()

DAY_HEADING_RE = re.compile(r"## Day (\d+)[^\n]*")
# Cue words match in any case; the place itself must start with a capital.
PLACE_RE = re.compile(
    r"(?i:at|visit|head to|grab|stop at|try)\s+([A-Z][^,.\n]+?)(?:\s+for|\s+at|\s+—|,|\.|\n)"
)
MIN_PLACE_LEN = 2
MAX_PLACE_LEN = 50


def extract_day_assignments(itinerary_text: str) -> dict[str, str]:
    """
    Build a lowercase place name -> "Day N" lookup from itinerary text.

    Each day's span runs from its heading to the next day heading (or the end of
    the text). A place seen more than once keeps the last day it was found on.
    """
    assignments: dict[str, str] = {}
    if not itinerary_text:
        return assignments

    headings = list(DAY_HEADING_RE.finditer(itinerary_text))
    for i, heading in enumerate(headings):
        span_end = headings[i + 1].start() if i + 1 < len(headings) else len(itinerary_text)
        day_content = itinerary_text[heading.start():span_end]
        label = f"Day {heading.group(1)}"
        for m in PLACE_RE.finditer(day_content):
            place = m.group(1).strip()
            if MIN_PLACE_LEN < len(place) < MAX_PLACE_LEN:
                assignments[place.lower()] = label

    logger.debug("Extracted %d day assignments from %d day headings", len(assignments), len(headings))
    return assignments


def find_day_for_place(name: str, assignments: dict[str, str]) -> str | None:
    """
    Day label for a user-entered place name, or None.

    Loose on purpose: matches when either name contains the other, so "Louvre"
    finds "the louvre museum" and vice versa.
    """
    query = (name or "").strip().lower()
    if not query:
        return None
    for place, day in assignments.items():
        if query in place or place in query:
            return day
    return None


def label_places(
    names: Iterable[str],
    assignments: dict[str, str],
) -> list[tuple[str, str | None]]:
    """Pair each place name with its day label (None when not scheduled)."""
    return [(name, find_day_for_place(name, assignments)) for name in names]
