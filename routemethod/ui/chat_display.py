"""Streamlit helpers for the planning chat: messages, itinerary card, side panels.

All assistant text goes through `render_markdown` and is injected as HTML, so
what the user sees matches the printable export.
"""

from __future__ import annotations

from typing import Any, Iterable

import streamlit as st

from routemethod.domains.itinerary.classifier import is_itinerary, segment_message
from routemethod.domains.itinerary.day_assignments import label_places
from routemethod.domains.itinerary.questions import format_answers
from routemethod.domains.markdown.normalizer import escape_html
from routemethod.domains.markdown.renderer import render_markdown
from routemethod.domains.trip_form import PLACE_CATEGORIES, TRIP_FIELDS, saved_place_names
from routemethod.orchestration.session import (
    PHASE_INPUT,
    PHASE_ITINERARY,
    PHASE_QUESTIONS,
    PHASE_REFINEMENT,
    PlanningSession,
)
from routemethod.ui.export import build_export_document, export_filename


CHAT_CSS = """
<style>
.rm-chat h1, .rm-chat h2 { font-family: Georgia, serif; font-weight: 400; }
.rm-chat h2 { border-bottom: 1px solid #C9A96E; padding-bottom: 0.3rem; margin-top: 1.2rem; }
.rm-chat h3 { font-size: 0.7rem; letter-spacing: 0.14em; text-transform: uppercase; color: #C9A96E; }
.rm-chat em { color: #8C9BAB; }
.rm-day { color: #C9A96E; font-size: 0.75rem; letter-spacing: 0.06em; }
</style>
"""

INPUT_PLACEHOLDERS = {
    PHASE_INPUT: "Paste your trip details here...",
    PHASE_QUESTIONS: "Answer the questions above...",
}


def inject_styles(st=st) -> None:
    st.markdown(CHAT_CSS, unsafe_allow_html=True)


def render_html_block(content: str, st=st) -> None:
    """Render assistant markdown through the RouteMethod renderer."""
    html = render_markdown(content)
    if html:
        st.markdown(f'<div class="rm-chat">{html}</div>', unsafe_allow_html=True)


def render_itinerary_card(content: str, key: str, trip_data: dict[str, Any] | None = None, st=st) -> None:
    """Bordered itinerary card with an export button."""
    with st.container(border=True):
        head, action = st.columns([3, 1])
        with head:
            st.markdown("**Your Itinerary**")
            st.caption("RouteMethod — Travel, Engineered.")
        with action:
            st.download_button(
                "Export / Print",
                data=build_export_document(content),
                file_name=export_filename(trip_data),
                mime="text/html",
                key=f"export_{key}",
                use_container_width=True,
            )
        render_html_block(content, st=st)


def render_message(
    message: dict[str, str],
    index: int,
    closing_markers: Iterable[str] | None = None,
    trip_data: dict[str, Any] | None = None,
    st=st,
) -> None:
    """Render one chat message; itinerary replies are split around a card."""
    role = message.get("role", "assistant")
    content = message.get("content") or ""
    with st.chat_message(role):
        if role == "user":
            st.text(content)
            return
        if not is_itinerary(content):
            render_html_block(content, st=st)
            return
        parts = segment_message(content, closing_markers)
        if parts["before"]:
            render_html_block(parts["before"], st=st)
        render_itinerary_card(parts["itinerary"], key=str(index), trip_data=trip_data, st=st)
        if parts["after"]:
            render_html_block(parts["after"], st=st)


def render_history(session: PlanningSession, st=st) -> None:
    for i, msg in enumerate(session.messages):
        render_message(msg, i, session.closing_markers, session.trip_data, st=st)


def stream_into(placeholder: Any, session: PlanningSession) -> str:
    """Stream the next reply into a placeholder, re-rendering on every chunk."""
    text = ""
    for text in session.stream_reply():
        placeholder.markdown(f'<div class="rm-chat">{render_markdown(text)}</div>', unsafe_allow_html=True)
    return text


def render_trip_form(st=st) -> dict[str, str] | None:
    """Trip intake form. Returns the submitted values, or None until submitted."""
    with st.form("trip_form"):
        st.markdown("**Trip Details**")
        values: dict[str, str] = {}
        for key, label in TRIP_FIELDS:
            values[key] = st.text_input(label, key=f"trip_{key}")
        st.markdown("**Saved Places** — separate with commas or new lines")
        for key, label in PLACE_CATEGORIES:
            values[key] = st.text_area(label, key=f"trip_{key}", height=68)
        values["reservations"] = st.text_area(
            "Confirmed reservations (include date and time for each)", key="trip_reservations"
        )
        values["notes"] = st.text_area("Optional — any priorities or notes", key="trip_notes")
        submitted = st.form_submit_button("Submit trip details", use_container_width=True)
    return values if submitted else None


def render_question_helper(session: PlanningSession, st=st) -> str | None:
    """One field per clarifying question. Returns the composed reply once submitted."""
    questions = session.open_questions()
    if not questions:
        return None
    with st.expander(f"Answer the {len(questions)} questions", expanded=True):
        with st.form(f"answers_{len(session.messages)}"):
            answers = [st.text_input(q, key=f"answer_{len(session.messages)}_{i}") for i, q in enumerate(questions)]
            submitted = st.form_submit_button("Send answers")
    if not submitted:
        return None
    reply = format_answers(questions, answers)
    return reply or None


def render_refinement_counter(session: PlanningSession, st=st) -> None:
    if session.phase != PHASE_REFINEMENT:
        return
    st.metric("Refinements left", f"{session.refinements_left} / {session.max_refinements}")


def render_place_panel(session: PlanningSession, st=st) -> None:
    """Saved places with the day each one landed on in the latest itinerary."""
    names = saved_place_names(session.trip_data)
    if not names:
        st.caption("Your saved places will appear here after you submit the trip form.")
        return
    items = []
    for name, day in label_places(names, session.day_assignments):
        label = f' <span class="rm-day">{escape_html(day)}</span>' if day else ""
        items.append(f"<li>{escape_html(name)}{label}</li>")
    st.markdown(f'<ul class="rm-chat">{"".join(items)}</ul>', unsafe_allow_html=True)


def input_placeholder(session: PlanningSession) -> str:
    if session.phase >= PHASE_ITINERARY:
        return "Request a refinement..."
    return INPUT_PLACEHOLDERS.get(session.phase, "Type your message...")
