"""
Planning session state: conversation, trip data, refinement budget and the
place -> day lookup rebuilt from the latest itinerary.
"""

from __future__ import annotations

from typing import Any, Iterator

import requests

from routemethod.domains.itinerary.classifier import DAY_HEADING, MORNING_HEADING, is_itinerary
from routemethod.domains.itinerary.day_assignments import extract_day_assignments
from routemethod.domains.itinerary.questions import extract_questions
from routemethod.domains.trip_form import format_trip_details
from routemethod.orchestration.claude_client import ClaudeAPIError, ClaudeClient
from routemethod.orchestration.prompt import build_system_prompt
from routemethod.utils import config
from routemethod.utils.logger import get_logger

logger = get_logger()

PHASE_INPUT = 1
PHASE_QUESTIONS = 2
PHASE_ITINERARY = 3
PHASE_REFINEMENT = 4

OPENING_MESSAGE = "Hello, I want to plan a trip."
REFINEMENT_LIMIT_REPLY = (
    "You've reached the refinement limit for this itinerary. "
    "Your final plan is ready to save or export."
)
FALLBACK_REPLY = "I couldn't reach the planner just now. Please try sending that again in a moment."
MAX_MESSAGES = 40


def detect_phase(content: str, current: int) -> int:
    """Phase implied by an assistant message; falls back to `current`."""
    if DAY_HEADING in content or MORNING_HEADING in content:
        return PHASE_ITINERARY
    if "clarif" in content or "question" in content or ("1." in content and "2." in content):
        return PHASE_QUESTIONS
    return current


class PlanningSession:
    def __init__(
        self,
        client: Any | None = None,
        max_refinements: int | None = None,
        closing_markers: tuple[str, ...] | None = None,
    ) -> None:
        self._client = client
        self.max_refinements = config.max_refinements() if max_refinements is None else max_refinements
        self.closing_markers = config.closing_markers() if closing_markers is None else tuple(closing_markers)
        self._reset()

    def _reset(self) -> None:
        self._messages: list[dict[str, str]] = []
        self.trip_data: dict[str, Any] | None = None
        self.refinements_used = 0
        self.day_assignments: dict[str, str] = {}
        self.phase = PHASE_INPUT
        self.started = False
        self.last_error: str | None = None

    def __getstate__(self) -> dict[str, Any]:
        """Drop the client and keep only recent history so Streamlit can pickle the session."""
        state = dict(self.__dict__)
        state["_client"] = None
        messages = self._messages
        if len(messages) > MAX_MESSAGES:
            # Keep the opening exchange so the model still sees the trip details.
            messages = messages[:2] + messages[-(MAX_MESSAGES - 2):]
        state["_messages"] = [dict(m) for m in messages]
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._client = None  # recreated on demand

    # --- events ---

    def start(self) -> None:
        """Open the conversation with the greeting the planner answers with its intake form."""
        if self.started:
            return
        self.started = True
        self._messages.append({"role": "user", "content": OPENING_MESSAGE})

    def submit_trip(self, trip: dict[str, Any]) -> str:
        """
        Store the form values and queue them as the next user message.

        Raises:
            TripFormError: If the destination is missing.
        """
        text = format_trip_details(trip)
        self.start()
        self.trip_data = dict(trip)
        self._messages.append({"role": "user", "content": text})
        logger.info("Trip details submitted for %s", self.trip_data.get("destination"))
        return text

    def add_user_message(self, text: str) -> bool:
        """
        Queue a user message. Returns False when it was not accepted.

        Once an itinerary is on the table every message counts as a refinement;
        past the cap the message is answered locally with the limit notice.
        """
        text = (text or "").strip()
        if not text:
            return False
        self.start()
        if self.phase >= PHASE_ITINERARY:
            self.phase = PHASE_REFINEMENT
            if self.refinement_limit_reached:
                self._messages.append({"role": "user", "content": text})
                self._messages.append({"role": "assistant", "content": REFINEMENT_LIMIT_REPLY})
                logger.info("Refinement rejected: limit of %d reached", self.max_refinements)
                return False
            self.refinements_used += 1
        self._messages.append({"role": "user", "content": text})
        return True

    def record_assistant_message(self, content: str) -> None:
        """Append a finished assistant reply and update derived state."""
        self._messages.append({"role": "assistant", "content": content})
        if is_itinerary(content):
            self.day_assignments = extract_day_assignments(content)
            logger.info("Itinerary received: %d places assigned to days", len(self.day_assignments))
        new_phase = detect_phase(content, self.phase)
        if new_phase > self.phase:
            self.phase = new_phase

    # --- LLM round trip ---

    def _ensure_client(self) -> tuple[Any | None, str | None]:
        """Return (client, error_detail). error_detail is set when init fails."""
        if self._client is not None:
            return self._client, None
        try:
            self._client = ClaudeClient(system_prompt=build_system_prompt(self.max_refinements))
            return self._client, None
        except ValueError as e:
            logger.warning("LLM client init failed: %s", e)
            return None, f"LLM client init failed: {e}"

    def stream_reply(self) -> Iterator[str]:
        """
        Ask the model for the next reply, yielding the accumulated text as it streams.

        The finished text (or a fallback notice on failure) is recorded as the
        assistant message; `last_error` holds the failure detail, if any.
        """
        self.last_error = None
        client, init_err = self._ensure_client()
        if client is None:
            self.last_error = init_err
            self.record_assistant_message(FALLBACK_REPLY)
            yield FALLBACK_REPLY
            return

        partial = ""
        try:
            for chunk in client.stream_text(self.api_messages()):
                partial += chunk
                yield partial
        except (ClaudeAPIError, requests.RequestException) as e:
            logger.exception("Streaming reply failed: %s", e)
            self.last_error = f"{type(e).__name__}: {e}"
            if not partial:
                partial = FALLBACK_REPLY
                yield partial
        self.record_assistant_message(partial)

    def respond(self) -> tuple[str, str | None]:
        """Non-streaming round trip. Returns (reply_text, error_detail)."""
        reply = ""
        for reply in self.stream_reply():
            pass
        return reply, self.last_error

    # --- views ---

    @property
    def messages(self) -> list[dict[str, str]]:
        return [dict(m) for m in self._messages]

    def api_messages(self) -> list[dict[str, str]]:
        """Conversation in the shape the Messages API expects."""
        return [{"role": m["role"], "content": m["content"]} for m in self._messages]

    @property
    def refinements_left(self) -> int:
        return max(self.max_refinements - self.refinements_used, 0)

    @property
    def refinement_limit_reached(self) -> bool:
        return self.refinements_used >= self.max_refinements

    @property
    def awaiting_reply(self) -> bool:
        """True when the last message is from the user."""
        return bool(self._messages) and self._messages[-1]["role"] == "user"

    def open_questions(self) -> list[str]:
        """Clarifying questions from the latest assistant message while in the questions phase."""
        if self.phase != PHASE_QUESTIONS:
            return []
        for msg in reversed(self._messages):
            if msg["role"] == "assistant":
                return extract_questions(msg["content"])
        return []

    def clear(self) -> None:
        self._reset()
