"""Pull the numbered clarifying questions out of an assistant message."""

from __future__ import annotations

import re

QUESTION_LINE_RE = re.compile(r"^\d+[.)]\s+.+\?")
NUMBER_PREFIX_RE = re.compile(r"^\d+[.)]\s+")


def extract_questions(text: str) -> list[str]:
    """Return numbered lines containing a '?' with their number stripped, in source order."""
    questions: list[str] = []
    for line in (text or "").split("\n"):
        trimmed = line.strip()
        if QUESTION_LINE_RE.match(trimmed):
            questions.append(NUMBER_PREFIX_RE.sub("", trimmed, count=1))
    return questions


def format_answers(questions: list[str], answers: list[str]) -> str:
    """Compose one reply to numbered questions; unanswered ones are left out."""
    parts = []
    for i, (question, answer) in enumerate(zip(questions, answers), start=1):
        answer = (answer or "").strip()
        if answer:
            parts.append(f"{i}. {question}\n{answer}")
    return "\n\n".join(parts)
