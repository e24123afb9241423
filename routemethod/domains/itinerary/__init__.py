"""Itinerary classification and extraction over assistant text."""

from routemethod.domains.itinerary.classifier import is_itinerary, segment_message
from routemethod.domains.itinerary.day_assignments import (
    extract_day_assignments,
    find_day_for_place,
    label_places,
)
from routemethod.domains.itinerary.questions import extract_questions, format_answers

__all__ = [
    "is_itinerary",
    "segment_message",
    "extract_day_assignments",
    "find_day_for_place",
    "label_places",
    "extract_questions",
    "format_answers",
]
