"""
Trip input form: field definitions and the message the planner expects.

The assistant asks for trip details in a fixed block ("Trip Details:",
"Saved Places:", reservations, notes). The form collects the same fields and
formats them into that block so the first planning message is always complete.
"""

from __future__ import annotations

import re
from typing import Any

# (key, label) pairs in the order the planner asks for them.
TRIP_FIELDS: list[tuple[str, str]] = [
    ("destination", "Destination"),
    ("arrival", "Arrival date & time"),
    ("departure", "Departure date & time"),
    ("hotel", "Hotel name and neighborhood"),
]

PLACE_CATEGORIES: list[tuple[str, str]] = [
    ("cafes", "Cafés"),
    ("restaurants", "Restaurants"),
    ("bars", "Bars"),
    ("museums", "Museums"),
    ("landmarks", "Landmarks"),
    ("events", "Events"),
    ("other", "Other"),
]

_PLACE_SPLIT = re.compile(r"[,\n;]+")


class TripFormError(ValueError):
    """Raised when the form is missing something the planner cannot work without."""


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split())


def split_places(raw: Any) -> list[str]:
    """Split a free-text place list on commas, semicolons and newlines."""
    if not raw:
        return []
    if isinstance(raw, (list, tuple)):
        parts = [str(p) for p in raw]
    else:
        parts = _PLACE_SPLIT.split(str(raw))
    return [p.strip().lstrip("-•").strip() for p in parts if p and p.strip().lstrip("-•").strip()]


def saved_place_names(trip: dict[str, Any] | None) -> list[str]:
    """All saved places across categories, first occurrence wins (case-insensitive)."""
    if not trip:
        return []
    names: list[str] = []
    seen: set[str] = set()
    for key, _label in PLACE_CATEGORIES:
        for name in split_places(trip.get(key)):
            lowered = name.lower()
            if lowered in seen:
                continue
            seen.add(lowered)
            names.append(name)
    return names


def format_trip_details(trip: dict[str, Any]) -> str:
    """
    Format form values into the planner's trip-details message.

    Raises:
        TripFormError: If no destination is given.
    """
    if not _clean(trip.get("destination")):
        raise TripFormError("Destination is required.")

    lines = ["Trip Details:"]
    for key, label in TRIP_FIELDS:
        lines.append(f"- {label}: {_clean(trip.get(key))}".rstrip())

    lines += ["", "Saved Places:"]
    for key, label in PLACE_CATEGORIES:
        lines.append(f"- {label}: {', '.join(split_places(trip.get(key)))}".rstrip())

    reservations = (trip.get("reservations") or "").strip()
    lines += ["", "Confirmed reservations (include date and time for each):"]
    if reservations:
        lines.append(reservations)

    notes = (trip.get("notes") or "").strip()
    if notes:
        lines += ["", "Optional — any priorities or notes:", notes]

    return "\n".join(lines)
