from __future__ import annotations

import pytest

from app.core.errors import AnswerError
from app.models.results import NoResponses, SurveyResults
from app.models.session import Phase
from app.models.survey import SurveyDefinition
from app.services.navigation import COMPLETE_LABEL, NEXT_LABEL
from app.services.survey_runner import SurveyRunner


def _started(definition: SurveyDefinition) -> SurveyRunner:
    runner = SurveyRunner(definition)
    runner.start()
    return runner


def test_new_runner_shows_welcome(definition: SurveyDefinition) -> None:
    screen = SurveyRunner(definition).get_current_screen()

    assert screen.phase is Phase.WELCOME
    assert screen.question is None
    assert screen.progress is None


def test_start_enters_first_question(definition: SurveyDefinition) -> None:
    screen = SurveyRunner(definition).start()

    assert screen.phase is Phase.IN_PROGRESS
    assert screen.question is not None and screen.question.id == 1
    assert (screen.progress.position, screen.progress.total) == (1, 3)
    assert screen.can_go_previous is False
    assert screen.next_label == NEXT_LABEL


def test_skipping_optional_questions_reports_only_answered(definition: SurveyDefinition) -> None:
    runner = _started(definition)

    runner.submit_answer(1, "B")
    runner.go_next()
    assert runner.can_go_next() is True
    runner.go_next()
    screen = runner.go_next()

    assert screen.phase is Phase.RESULTS
    assert isinstance(screen.results, SurveyResults)
    assert screen.results.pairs() == [("Favourite letter", "B")]


def test_rating_answer_is_formatted_with_scale(definition: SurveyDefinition) -> None:
    runner = _started(definition)

    runner.submit_answer(1, "A")
    runner.go_next()
    runner.submit_answer(2, 4)
    runner.go_next()
    screen = runner.go_next()

    assert ("Rate the survey", "4 out of 5") in screen.results.pairs()


def test_required_unanswered_question_blocks_next(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    before = runner.snapshot()

    screen = runner.go_next()

    assert screen.can_go_next is False
    assert runner.snapshot() == before

    runner.submit_answer(1, "A")
    screen = runner.go_next()

    assert screen.phase is Phase.IN_PROGRESS
    assert runner.current_index == 1


def test_go_previous_on_first_question_is_noop(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    runner.submit_answer(1, "A")
    before = runner.snapshot()

    runner.go_previous()
    runner.go_previous()

    assert runner.snapshot() == before


def test_go_previous_is_not_gated_by_answers() -> None:
    definition = SurveyDefinition.model_validate(
        {
            "questions": [
                {"id": 1, "type": "text", "title": "First"},
                {"id": 2, "type": "text", "title": "Second", "required": True},
            ]
        }
    )
    runner = _started(definition)
    runner.go_next()

    assert runner.can_go_next() is False
    screen = runner.go_previous()

    assert screen.question.id == 1


def test_answers_are_restored_when_returning(definition: SurveyDefinition) -> None:
    runner = _started(definition)

    runner.submit_answer(1, "B")
    runner.go_next()
    runner.submit_answer(2, 3)
    runner.go_next()
    runner.submit_answer(3, "Keep it short")

    screen = runner.go_previous()
    assert screen.view.selected_value == 3

    screen = runner.go_previous()
    assert screen.view.selected_value == "B"

    runner.go_next()
    screen = runner.go_next()
    assert screen.view.text_value == "Keep it short"


def test_last_question_uses_complete_label(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    runner.submit_answer(1, "A")
    runner.go_next()
    screen = runner.go_next()

    assert screen.next_label == COMPLETE_LABEL
    assert screen.can_go_next is True


def test_empty_text_answer_counts_as_unanswered() -> None:
    definition = SurveyDefinition.model_validate(
        {"questions": [{"id": 7, "type": "text", "title": "Why?", "required": True}]}
    )
    runner = _started(definition)

    runner.submit_answer(7, "")
    assert runner.can_go_next() is False

    runner.submit_answer(7, "Because")
    assert runner.can_go_next() is True

    runner.submit_answer(7, "")
    assert runner.go_next().phase is Phase.IN_PROGRESS


def test_rejects_rating_outside_scale(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    before = runner.snapshot()

    for value in (0, 6, True, "4"):
        with pytest.raises(AnswerError):
            runner.submit_answer(2, value)

    assert runner.snapshot() == before


def test_rejects_unknown_option_and_question(definition: SurveyDefinition) -> None:
    runner = _started(definition)

    with pytest.raises(AnswerError):
        runner.submit_answer(1, "C")
    with pytest.raises(AnswerError):
        runner.submit_answer(99, "A")

    assert dict(runner.answers) == {}


def test_submit_outside_progress_is_rejected(definition: SurveyDefinition) -> None:
    runner = SurveyRunner(definition)

    with pytest.raises(AnswerError):
        runner.submit_answer(1, "A")


def test_clear_answer_regates_required_question(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    runner.submit_answer(1, "A")

    screen = runner.clear_answer(1)

    assert screen.can_go_next is False
    assert 1 not in runner.answers


def test_restart_returns_to_welcome_and_clears_answers(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    runner.submit_answer(1, "A")
    runner.go_next()
    runner.go_next()
    runner.go_next()
    assert runner.phase is Phase.RESULTS

    screen = runner.restart()

    assert screen.phase is Phase.WELCOME
    assert dict(runner.answers) == {}
    assert runner.definition is definition

    screen = runner.start()
    assert screen.question.id == 1
    assert screen.view.selected_value is None


def test_results_without_answers_signal_no_responses() -> None:
    definition = SurveyDefinition.model_validate(
        {"questions": [{"id": 1, "type": "text", "title": "Optional"}]}
    )
    runner = _started(definition)

    screen = runner.go_next()

    assert screen.phase is Phase.RESULTS
    assert isinstance(screen.results, NoResponses)


def test_results_phase_is_stable(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    runner.submit_answer(1, "A")
    for _ in range(3):
        runner.go_next()
    before = runner.snapshot()

    runner.go_next()
    runner.go_previous()
    runner.start()

    assert runner.snapshot() == before


def test_empty_survey_goes_straight_to_results() -> None:
    runner = SurveyRunner(SurveyDefinition(questions=[]))

    screen = runner.start()

    assert screen.phase is Phase.RESULTS
    assert isinstance(screen.results, NoResponses)


def test_index_stays_in_bounds_under_any_navigation(definition: SurveyDefinition) -> None:
    runner = _started(definition)
    runner.submit_answer(1, "A")
    moves = [runner.go_previous, runner.go_next, runner.go_next, runner.go_previous, runner.go_next]

    for move in moves:
        move()
        if runner.phase is Phase.IN_PROGRESS:
            assert 0 <= runner.current_index < runner.total_questions


def test_runners_do_not_share_state(definition: SurveyDefinition) -> None:
    first = _started(definition)
    second = _started(definition)

    first.submit_answer(1, "A")

    assert dict(second.answers) == {}
