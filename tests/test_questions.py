"""
Tests for extract_questions and format_answers.
"""

from __future__ import annotations

from routemethod.domains.itinerary.questions import extract_questions, format_answers


def test_extract_questions_skips_statements() -> None:
    """Numbered statements are skipped; both '.' and ')' numbering are accepted."""
    text = "1. Do you prefer mornings?\n2. Nice view today.\n3) Any dietary restrictions?"
    assert extract_questions(text) == ["Do you prefer mornings?", "Any dietary restrictions?"]


def test_extract_questions_embedded_question_mark() -> None:
    """The '?' may sit anywhere after the number; surrounding whitespace is ignored."""
    text = "Before I build this:\n   2. Sunday brunch? It books out early.\n- Not numbered?"
    assert extract_questions(text) == ["Sunday brunch? It books out early."]


def test_extract_questions_requires_space_after_number() -> None:
    assert extract_questions("1.5 hours at the museum?") == []


def test_extract_questions_empty() -> None:
    assert extract_questions("") == []
    assert extract_questions("No questions here.") == []


def test_format_answers_skips_blank() -> None:
    """Answers are numbered after their question; blank answers are dropped."""
    out = format_answers(["Early starts?", "Any allergies?", "Budget?"], ["Yes", " ", "Mid-range"])
    assert out == "1. Early starts?\nYes\n\n3. Budget?\nMid-range"
