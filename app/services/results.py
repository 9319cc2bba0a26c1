from __future__ import annotations

from typing import List

from app.models.results import NoResponses, ResultEntry, SurveyResults
from app.models.survey import (
    AnswerSet,
    AnswerValue,
    MultipleChoiceQuestion,
    Question,
    RatingQuestion,
    SurveyDefinition,
    TextQuestion,
)
from app.services.navigation import has_answer
from app.services.question_renderer import unsupported_question


def aggregate_results(definition: SurveyDefinition, answers: AnswerSet) -> SurveyResults | NoResponses:
    """Pair each answered question with its formatted answer, in survey order.

    Unanswered questions and empty text answers are left out. When nothing is
    left, :class:`NoResponses` is returned instead of an empty result list.
    """

    entries: List[ResultEntry] = []
    for question in definition.questions:
        value = answers.get(question.id)
        if not has_answer(value):
            continue
        entries.append(
            ResultEntry(
                question_id=question.id,
                title=question.title,
                answer=format_answer(question, value),
            )
        )

    if not entries:
        return NoResponses()
    return SurveyResults(entries=entries)


def format_answer(question: Question, value: AnswerValue) -> str:
    if isinstance(question, RatingQuestion):
        return f"{value} out of {question.scale}"
    if isinstance(question, (MultipleChoiceQuestion, TextQuestion)):
        return str(value)
    unsupported_question(question)
