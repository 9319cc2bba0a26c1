from __future__ import annotations

from typing import Callable

import streamlit as st

from app.services.navigation import NEXT_LABEL
from app.services.question_renderer import QuestionView
from app.services.survey_runner import SurveyRunner

from .components import record_widget_answer


def render(runner: SurveyRunner) -> None:
    """Render navigation controls for moving through the survey."""

    screen = runner.get_current_screen()
    if not screen.can_go_next:
        st.info("Please answer this question before moving on.")

    prev_col, next_col = st.columns(2)
    with prev_col:
        st.button(
            "Previous",
            key="previous_button",
            on_click=_move,
            args=(runner, screen.view, runner.go_previous),
            disabled=not screen.can_go_previous,
        )
    with next_col:
        st.button(
            screen.next_label or NEXT_LABEL,
            key="next_button",
            type="primary",
            on_click=_move,
            args=(runner, screen.view, runner.go_next),
            disabled=not screen.can_go_next,
        )


def _move(runner: SurveyRunner, view: QuestionView | None, step: Callable[[], object]) -> None:
    # Widget values from the same rerun are not yet recorded when a button callback runs.
    if view is not None:
        record_widget_answer(runner, view)
    step()
