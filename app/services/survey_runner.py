from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Mapping

from app.core.errors import AnswerError
from app.models.results import NoResponses, SurveyResults
from app.models.session import Phase, Progress, Screen, SessionState
from app.models.survey import (
    AnswerValue,
    MultipleChoiceQuestion,
    Question,
    RatingQuestion,
    SurveyDefinition,
    TextQuestion,
)
from app.services import navigation
from app.services.question_renderer import render_question, unsupported_question
from app.services.results import aggregate_results

logger = logging.getLogger(__name__)


class SurveyRunner:
    """Drive one survey-taking session through Welcome, In-Progress and Results.

    Every command returns the resulting :class:`Screen`. Commands that are not
    legal in the current state (moving back from the first question, moving
    forward past an unanswered required question, ...) leave the state as it
    was and simply return the current screen.
    """

    def __init__(self, definition: SurveyDefinition) -> None:
        self._definition = definition
        self._state = SessionState()

    @property
    def definition(self) -> SurveyDefinition:
        return self._definition

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def answers(self) -> Mapping[int, AnswerValue]:
        """Read-only view of the recorded answers."""

        return MappingProxyType(self._state.answers)

    @property
    def total_questions(self) -> int:
        return len(self._definition.questions)

    def snapshot(self) -> SessionState:
        """Return a detached copy of the session state."""

        return replace(self._state, answers=dict(self._state.answers))

    def current_question(self) -> Question | None:
        if self._state.phase is not Phase.IN_PROGRESS:
            return None
        return self._definition.questions[self._state.current_index]

    def start(self) -> Screen:
        if self._state.phase is not Phase.WELCOME:
            return self.get_current_screen()

        self._state.current_index = 0
        self._state.answers = {}
        if self.total_questions == 0:
            logger.info("Survey has no questions; going straight to results")
            self._state.phase = Phase.RESULTS
        else:
            self._state.phase = Phase.IN_PROGRESS
        return self.get_current_screen()

    def submit_answer(self, question_id: int, value: AnswerValue) -> Screen:
        """Record ``value`` for ``question_id`` after checking it fits the question.

        Raises :class:`AnswerError` when the survey is not in progress, the
        question is unknown or the value is not acceptable for its type. The
        state is left untouched in that case.
        """

        if self._state.phase is not Phase.IN_PROGRESS:
            raise AnswerError("Answers can only be recorded while the survey is in progress")

        question = self._definition.question_by_id(question_id)
        if question is None:
            raise AnswerError(f"Unknown question id: {question_id}")

        self._state.answers[question.id] = _validated_answer(question, value)
        return self.get_current_screen()

    def clear_answer(self, question_id: int) -> Screen:
        self._state.answers.pop(question_id, None)
        return self.get_current_screen()

    def go_next(self) -> Screen:
        question = self.current_question()
        if question is None or not navigation.can_go_next(question, self._state.answers):
            return self.get_current_screen()

        if self._state.current_index >= self.total_questions - 1:
            self._state.phase = Phase.RESULTS
            logger.info("Survey completed with %d answers", len(self._state.answers))
        else:
            self._state.current_index += 1
        return self.get_current_screen()

    def go_previous(self) -> Screen:
        if self._state.phase is Phase.IN_PROGRESS and navigation.can_go_previous(self._state.current_index):
            self._state.current_index -= 1
        return self.get_current_screen()

    def restart(self) -> Screen:
        self._state.reset()
        return self.get_current_screen()

    def can_go_next(self) -> bool:
        question = self.current_question()
        return question is not None and navigation.can_go_next(question, self._state.answers)

    def can_go_previous(self) -> bool:
        return self._state.phase is Phase.IN_PROGRESS and navigation.can_go_previous(self._state.current_index)

    def results(self) -> SurveyResults | NoResponses:
        return aggregate_results(self._definition, self._state.answers)

    def get_current_screen(self) -> Screen:
        phase = self._state.phase
        if phase is Phase.WELCOME:
            return Screen(phase=phase)
        if phase is Phase.RESULTS:
            return Screen(phase=phase, results=self.results())

        index = self._state.current_index
        question = self._definition.questions[index]
        return Screen(
            phase=phase,
            question=question,
            view=render_question(question, self._state.answers),
            progress=Progress(position=index + 1, total=self.total_questions),
            can_go_next=navigation.can_go_next(question, self._state.answers),
            can_go_previous=navigation.can_go_previous(index),
            next_label=navigation.next_label(index, self.total_questions),
        )


def _validated_answer(question: Question, value: AnswerValue) -> AnswerValue:
    if isinstance(question, MultipleChoiceQuestion):
        if not isinstance(value, str) or value not in question.options:
            raise AnswerError(f"Answer for question {question.id} must be one of {question.options}")
        return value

    if isinstance(question, RatingQuestion):
        if isinstance(value, bool) or not isinstance(value, int):
            raise AnswerError(f"Rating for question {question.id} must be an integer")
        if not 1 <= value <= question.scale:
            raise AnswerError(f"Rating for question {question.id} must be between 1 and {question.scale}")
        return value

    if isinstance(question, TextQuestion):
        if not isinstance(value, str):
            raise AnswerError(f"Answer for question {question.id} must be text")
        return value

    unsupported_question(question)
