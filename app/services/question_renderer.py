from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn, Tuple

from app.models.survey import (
    AnswerSet,
    MultipleChoiceQuestion,
    Question,
    RatingQuestion,
    TextQuestion,
)

DEFAULT_TEXT_PLACEHOLDER = "Enter your answer..."


@dataclass(frozen=True)
class Choice:
    """One selectable control of a multiple-choice or rating question."""

    label: str
    value: str | int
    selected: bool = False


@dataclass(frozen=True)
class QuestionView:
    """Input surface for a single question, with any recorded answer restored."""

    question_id: int
    kind: str
    title: str
    description: str
    required: bool
    choices: Tuple[Choice, ...] = ()
    low_label: str | None = None
    high_label: str | None = None
    text_value: str = ""
    placeholder: str | None = None
    multiline: bool = False

    @property
    def selected_value(self) -> str | int | None:
        """Return the highlighted choice value, if any."""

        for choice in self.choices:
            if choice.selected:
                return choice.value
        return None


def render_question(question: Question, answers: AnswerSet) -> QuestionView:
    """Build the input surface for ``question`` from the current answers."""

    recorded = answers.get(question.id)

    if isinstance(question, MultipleChoiceQuestion):
        choices = tuple(
            Choice(label=option, value=option, selected=recorded == option)
            for option in question.options
        )
        return _view(question, kind=question.type, choices=choices)

    if isinstance(question, RatingQuestion):
        choices = tuple(
            Choice(label=str(value), value=value, selected=recorded == value)
            for value in range(1, question.scale + 1)
        )
        labels = question.labels
        return _view(
            question,
            kind=question.type,
            choices=choices,
            low_label=labels.low if labels else None,
            high_label=labels.high if labels else None,
        )

    if isinstance(question, TextQuestion):
        return _view(
            question,
            kind=question.type,
            text_value=recorded if isinstance(recorded, str) else "",
            placeholder=question.placeholder or DEFAULT_TEXT_PLACEHOLDER,
            multiline=True,
        )

    unsupported_question(question)


def unsupported_question(question: object) -> NoReturn:
    """Fail loudly for a question variant with no handling branch."""

    raise TypeError(f"Unsupported question variant: {type(question).__name__}")


def _view(question: Question, **fields: object) -> QuestionView:
    return QuestionView(
        question_id=question.id,
        title=question.title,
        description=question.description or "",
        required=question.required,
        **fields,  # type: ignore[arg-type]
    )
