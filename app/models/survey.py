from __future__ import annotations

from typing import Annotated, Dict, Iterable, List, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

MULTIPLE_CHOICE = "multiple-choice"
RATING = "rating"
TEXT = "text"


class _BaseQuestion(BaseModel):
    """Fields shared by every question variant."""

    id: int
    title: str
    description: str | None = None
    required: bool = False

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("title")
    @classmethod
    def _ensure_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title cannot be empty")
        return value


class MultipleChoiceQuestion(_BaseQuestion):
    """Single-select question over an ordered list of options."""

    type: Literal["multiple-choice"] = Field(default=MULTIPLE_CHOICE, frozen=True)
    options: List[str]

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: Iterable[Union[str, int]] | None) -> List[str]:
        if value is None:
            raise ValueError("options must be provided")
        if isinstance(value, str):
            raise ValueError("options must be provided as a sequence, not a single string")
        options = [str(option) for option in value]
        if not options:
            raise ValueError("multiple-choice questions need at least one option")
        return options


class RatingLabels(BaseModel):
    """Captions shown next to the lowest and highest rating."""

    low: str = ""
    high: str = ""

    model_config = {"extra": "ignore", "frozen": True}


class RatingQuestion(_BaseQuestion):
    """Integer rating from 1 to ``scale``."""

    type: Literal["rating"] = Field(default=RATING, frozen=True)
    scale: int = Field(gt=0)
    labels: RatingLabels | None = None


class TextQuestion(_BaseQuestion):
    """Free-form, multi-line text answer."""

    type: Literal["text"] = Field(default=TEXT, frozen=True)
    placeholder: str | None = None


Question = Annotated[
    Union[MultipleChoiceQuestion, RatingQuestion, TextQuestion],
    Field(discriminator="type"),
]

AnswerValue = Union[str, int]
AnswerSet = Dict[int, AnswerValue]


class SurveyDefinition(BaseModel):
    """Ordered questions making up one survey."""

    title: str | None = None
    description: str | None = None
    questions: List[Question]

    model_config = {"extra": "ignore", "frozen": True}

    @model_validator(mode="after")
    def _ensure_unique_ids(self) -> "SurveyDefinition":
        seen: set[int] = set()
        for question in self.questions:
            if question.id in seen:
                raise ValueError(f"duplicate question id {question.id}")
            seen.add(question.id)
        return self

    def question_by_id(self, question_id: int) -> Question | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def __len__(self) -> int:
        return len(self.questions)
