from __future__ import annotations

from app.models.survey import AnswerSet, AnswerValue, Question

NEXT_LABEL = "Next"
COMPLETE_LABEL = "Complete Survey"


def has_answer(value: AnswerValue | None) -> bool:
    """Return True for a recorded answer; ``None`` and ``""`` count as unanswered."""

    return value is not None and value != ""


def can_go_next(question: Question, answers: AnswerSet) -> bool:
    """Forward navigation is only blocked by an unanswered required question."""

    if not question.required:
        return True
    return has_answer(answers.get(question.id))


def can_go_previous(current_index: int) -> bool:
    """Backward navigation is never gated by answers."""

    return current_index > 0


def next_label(current_index: int, total_questions: int) -> str:
    if current_index >= total_questions - 1:
        return COMPLETE_LABEL
    return NEXT_LABEL
