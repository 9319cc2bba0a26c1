from __future__ import annotations

import copy
import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("SURVEY_SOURCE", str(PROJECT_ROOT / "app" / "data" / "survey-data.json"))
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from app.models.survey import SurveyDefinition  # noqa: E402

SCENARIO_PAYLOAD = {
    "questions": [
        {
            "id": 1,
            "type": "multiple-choice",
            "title": "Favourite letter",
            "options": ["A", "B"],
            "required": True,
        },
        {
            "id": 2,
            "type": "rating",
            "title": "Rate the survey",
            "scale": 5,
            "required": False,
            "labels": {"low": "Poor", "high": "Great"},
        },
        {
            "id": 3,
            "type": "text",
            "title": "Anything else?",
            "required": False,
        },
    ]
}


@pytest.fixture
def scenario_payload() -> dict:
    return copy.deepcopy(SCENARIO_PAYLOAD)


@pytest.fixture
def definition(scenario_payload: dict) -> SurveyDefinition:
    return SurveyDefinition.model_validate(scenario_payload)


@pytest.fixture
def categories_path(tmp_path: Path) -> Path:
    return tmp_path / "categories-data.json"
