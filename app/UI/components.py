from __future__ import annotations

import html
import logging
from typing import Callable

import streamlit as st

from app.core.errors import AnswerError
from app.models.results import NoResponses, SurveyResults
from app.models.session import Screen
from app.models.survey import MULTIPLE_CHOICE, RATING, TEXT, SurveyDefinition
from app.services.question_renderer import QuestionView, unsupported_question
from app.services.survey_runner import SurveyRunner

from . import state

logger = logging.getLogger(__name__)

PLACEHOLDER_OPTION = "Select an option..."
PLACEHOLDER_RATING = "Select a rating..."


def render_start_page(definition: SurveyDefinition, on_start: Callable[[], None]) -> None:
    """Display the introductory screen shown before the survey begins."""

    st.markdown(f"## {definition.title or 'Welcome to the survey'}")
    if definition.description:
        st.markdown(definition.description)
    st.caption(f"{len(definition.questions)} questions")

    st.button("Start survey", key="start_survey_button", type="primary", on_click=on_start)


def render_question_header(screen: Screen) -> None:
    """Render progress information and the active question text."""

    progress = screen.progress
    view = screen.view
    if progress is None or view is None:
        return

    st.progress(progress.ratio)
    st.markdown(f"Question {progress.position} of {progress.total}")
    required_marker = " *" if view.required else ""
    st.markdown(f"### {view.title}{required_marker}")
    if view.description:
        st.caption(view.description)


def render_answer_widget(runner: SurveyRunner, view: QuestionView | None) -> None:
    """Render the input widget for the current question and record its value."""

    if view is None:
        return

    if view.kind == MULTIPLE_CHOICE:
        _render_choice_widget(runner, view, PLACEHOLDER_OPTION)
    elif view.kind == RATING:
        _render_choice_widget(runner, view, PLACEHOLDER_RATING, horizontal=True)
        if view.low_label or view.high_label:
            low_col, high_col = st.columns(2)
            low_col.caption(view.low_label or "")
            high_col.markdown(
                f"<div style='text-align: right; font-size: 0.875rem; opacity: 0.6'>{html.escape(view.high_label or '')}</div>",
                unsafe_allow_html=True,
            )
    elif view.kind == TEXT:
        _render_text_widget(runner, view)
    else:
        unsupported_question(view)


def record_widget_answer(runner: SurveyRunner, view: QuestionView) -> None:
    """Copy the current widget value for ``view`` into the runner's answers.

    Used as the widgets' ``on_change`` callback and by the navigation buttons,
    whose callbacks run before the page script redraws the widgets.
    """

    widget_key = state.widget_key(view.question_id)
    if widget_key not in st.session_state:
        return

    value = st.session_state[widget_key]
    if view.kind == TEXT:
        value = value or ""
    elif value in (PLACEHOLDER_OPTION, PLACEHOLDER_RATING):
        runner.clear_answer(view.question_id)
        return

    try:
        runner.submit_answer(view.question_id, value)
    except AnswerError as exc:
        logger.warning("Ignoring answer for question %d: %s", view.question_id, exc)


def _render_choice_widget(
    runner: SurveyRunner,
    view: QuestionView,
    placeholder: str,
    *,
    horizontal: bool = False,
) -> None:
    widget_key = state.widget_key(view.question_id)
    options = [placeholder, *(choice.value for choice in view.choices)]

    if widget_key not in st.session_state:
        selected = view.selected_value
        st.session_state[widget_key] = selected if selected is not None else placeholder

    selection = st.radio(
        "Select an answer",
        options=options,
        key=widget_key,
        horizontal=horizontal,
        on_change=record_widget_answer,
        args=(runner, view),
    )
    if selection == placeholder:
        runner.clear_answer(view.question_id)
        return

    try:
        runner.submit_answer(view.question_id, selection)
    except AnswerError as exc:
        st.warning(str(exc))


def _render_text_widget(runner: SurveyRunner, view: QuestionView) -> None:
    widget_key = state.widget_key(view.question_id)
    if widget_key not in st.session_state:
        st.session_state[widget_key] = view.text_value

    value = st.text_area(
        "Your answer",
        key=widget_key,
        placeholder=view.placeholder,
        height=120,
        on_change=record_widget_answer,
        args=(runner, view),
    )
    runner.submit_answer(view.question_id, value or "")


def render_summary(results: SurveyResults | NoResponses | None, on_restart: Callable[[], None]) -> None:
    """Display the collected responses, or a notice when nothing was answered."""

    st.success("Thank you for completing the survey!")
    st.markdown("### Your responses")

    if isinstance(results, SurveyResults):
        for entry in results.entries:
            st.markdown(f"**{entry.title}**")
            st.write(entry.answer)
    else:
        st.info(results.message if isinstance(results, NoResponses) else NoResponses().message)

    st.divider()
    st.button("Restart survey", key="restart_survey_button", on_click=on_restart)
