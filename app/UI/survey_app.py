from __future__ import annotations

import logging

import streamlit as st

from app.UI import components, navigation, state
from app.core.config import settings
from app.core.errors import LoadError
from app.core.logging import setup_logging
from app.models.session import Phase
from app.services.survey_loader import load_survey
from app.services.survey_runner import SurveyRunner

logger = logging.getLogger(__name__)


def run_app() -> None:
    """Entry point for the Streamlit-based survey UI."""

    st.set_page_config(page_title="Survey", page_icon="📝", layout="centered")
    setup_logging(settings.log_level)

    runner = _ensure_runner()
    if runner is None:
        st.error(state.get_load_error() or "Failed to load survey data. Please refresh the page.")
        return

    screen = runner.get_current_screen()

    if screen.phase is Phase.WELCOME:
        components.render_start_page(runner.definition, on_start=lambda: _start(runner))
        return

    if screen.phase is Phase.RESULTS:
        components.render_summary(screen.results, on_restart=lambda: _restart(runner))
        return

    components.render_question_header(screen)
    components.render_answer_widget(runner, screen.view)
    navigation.render(runner)


def _ensure_runner() -> SurveyRunner | None:
    runner = state.get_runner()
    if runner is not None:
        return runner
    if state.get_load_error() is not None:
        return None

    try:
        definition = load_survey(settings.survey_source)
    except LoadError as exc:
        logger.error("Failed to initialize survey: %s", exc)
        state.set_load_error(f"Failed to load survey data. Please refresh the page. ({exc})")
        return None

    runner = SurveyRunner(definition)
    state.set_runner(runner)
    return runner


def _start(runner: SurveyRunner) -> None:
    state.forget_widgets()
    runner.start()


def _restart(runner: SurveyRunner) -> None:
    state.forget_widgets()
    runner.restart()
