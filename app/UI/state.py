from __future__ import annotations

from typing import Optional

import streamlit as st

from app.services.survey_runner import SurveyRunner

RUNNER_KEY = "survey_runner"
LOAD_ERROR_KEY = "survey_load_error"
RESPONSE_PREFIX = "response_"
CATEGORY_EDITING_KEY = "category_editing_id"
CATEGORY_DELETING_KEY = "category_pending_delete_id"


def get_runner() -> Optional[SurveyRunner]:
    """Return the runner owned by this browser session, if one was created."""

    return st.session_state.get(RUNNER_KEY)


def set_runner(runner: SurveyRunner) -> None:
    st.session_state[RUNNER_KEY] = runner
    st.session_state.pop(LOAD_ERROR_KEY, None)


def get_load_error() -> Optional[str]:
    """Return the message of a failed survey load for this session."""

    return st.session_state.get(LOAD_ERROR_KEY)


def set_load_error(message: str) -> None:
    st.session_state[LOAD_ERROR_KEY] = message


def widget_key(question_id: int) -> str:
    return f"{RESPONSE_PREFIX}{question_id}"


def forget_widgets() -> None:
    """Drop cached answer widget values so inputs start blank."""

    for key in [name for name in st.session_state.keys() if str(name).startswith(RESPONSE_PREFIX)]:
        del st.session_state[key]


def get_editing_category() -> Optional[int]:
    return st.session_state.get(CATEGORY_EDITING_KEY)


def set_editing_category(category_id: Optional[int]) -> None:
    if category_id is None:
        st.session_state.pop(CATEGORY_EDITING_KEY, None)
    else:
        st.session_state[CATEGORY_EDITING_KEY] = category_id


def get_pending_delete() -> Optional[int]:
    """Return the id of the category waiting for delete confirmation."""

    return st.session_state.get(CATEGORY_DELETING_KEY)


def set_pending_delete(category_id: Optional[int]) -> None:
    if category_id is None:
        st.session_state.pop(CATEGORY_DELETING_KEY, None)
    else:
        st.session_state[CATEGORY_DELETING_KEY] = category_id
