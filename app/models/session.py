from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from app.models.survey import AnswerSet, Question

if TYPE_CHECKING:
    from app.models.results import NoResponses, SurveyResults
    from app.services.question_renderer import QuestionView


class Phase(str, Enum):
    """Coarse lifecycle of a survey-taking session."""

    WELCOME = "welcome"
    IN_PROGRESS = "in_progress"
    RESULTS = "results"


@dataclass
class SessionState:
    """Mutable state owned by a single ``SurveyRunner``."""

    current_index: int = 0
    answers: AnswerSet = field(default_factory=dict)
    phase: Phase = Phase.WELCOME

    def reset(self) -> None:
        self.current_index = 0
        self.answers = {}
        self.phase = Phase.WELCOME


@dataclass(frozen=True)
class Progress:
    position: int
    total: int

    @property
    def ratio(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.position / self.total


@dataclass(frozen=True)
class Screen:
    """What the presentation layer has to draw for the current phase."""

    phase: Phase
    question: Question | None = None
    view: QuestionView | None = None
    progress: Progress | None = None
    can_go_next: bool = False
    can_go_previous: bool = False
    next_label: str | None = None
    results: SurveyResults | NoResponses | None = None
