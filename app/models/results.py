from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

NO_RESPONSES_MESSAGE = "No responses recorded."


class ResultEntry(BaseModel):
    """A question title paired with its formatted answer."""

    question_id: int
    title: str
    answer: str

    model_config = {"extra": "forbid", "frozen": True}

    def as_pair(self) -> tuple[str, str]:
        return self.title, self.answer


class SurveyResults(BaseModel):
    """Answered questions in presentation order."""

    entries: List[ResultEntry] = Field(min_length=1)

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def answered_count(self) -> int:
        return len(self.entries)

    def pairs(self) -> List[tuple[str, str]]:
        return [entry.as_pair() for entry in self.entries]


class NoResponses(BaseModel):
    """Returned instead of an empty ``SurveyResults`` when nothing was answered."""

    message: str = NO_RESPONSES_MESSAGE

    model_config = {"extra": "forbid", "frozen": True}
