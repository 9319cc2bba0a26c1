from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import pytest

from app.core.errors import LoadError
from app.models.survey import MultipleChoiceQuestion, RatingQuestion, TextQuestion
from app.services import survey_loader
from app.services.survey_loader import SurveyLoader, load_survey, load_survey_async, parse_survey

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _write(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "survey.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_loads_questions_in_order(tmp_path: Path, scenario_payload: dict) -> None:
    survey = SurveyLoader(_write(tmp_path, scenario_payload)).survey

    assert [question.id for question in survey.questions] == [1, 2, 3]
    assert isinstance(survey.questions[0], MultipleChoiceQuestion)
    assert isinstance(survey.questions[1], RatingQuestion)
    assert isinstance(survey.questions[2], TextQuestion)
    assert survey.questions[1].labels.high == "Great"


def test_optional_fields_default(tmp_path: Path) -> None:
    survey = load_survey(_write(tmp_path, {"questions": [{"id": 4, "type": "text", "title": "Hi"}]}))

    question = survey.questions[0]
    assert question.required is False
    assert question.description is None
    assert question.placeholder is None


def test_bundled_survey_is_valid() -> None:
    survey = load_survey(PROJECT_ROOT / "app" / "data" / "survey-data.json")

    assert len(survey) > 0


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(LoadError):
        load_survey(tmp_path / "nope.json")


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps([1, 2, 3]),
        json.dumps({"title": "no questions"}),
        json.dumps({"questions": {"id": 1}}),
    ],
)
def test_malformed_documents_raise_load_error(raw: str) -> None:
    with pytest.raises(LoadError):
        parse_survey(raw)


def test_unknown_question_type_is_fatal() -> None:
    raw = json.dumps({"questions": [{"id": 1, "type": "slider", "title": "Slide"}]})

    with pytest.raises(LoadError, match="unsupported question type 'slider'"):
        parse_survey(raw)


@pytest.mark.parametrize(
    "question",
    [
        {"id": 1, "type": "multiple-choice", "title": "No options", "options": []},
        {"id": 1, "type": "rating", "title": "Bad scale", "scale": 0},
        {"id": 1, "type": "text", "title": "   "},
    ],
)
def test_invalid_questions_raise_load_error(question: dict) -> None:
    with pytest.raises(LoadError):
        parse_survey(json.dumps({"questions": [question]}))


def test_duplicate_ids_raise_load_error() -> None:
    raw = json.dumps(
        {
            "questions": [
                {"id": 1, "type": "text", "title": "One"},
                {"id": 1, "type": "text", "title": "Again"},
            ]
        }
    )

    with pytest.raises(LoadError):
        parse_survey(raw)


def test_fetches_definition_from_url(monkeypatch: pytest.MonkeyPatch, scenario_payload: dict) -> None:
    calls: list[str] = []

    def _fake_get(url: str, **kwargs: object) -> httpx.Response:
        calls.append(url)
        return httpx.Response(200, json=scenario_payload, request=httpx.Request("GET", url))

    monkeypatch.setattr(survey_loader.httpx, "get", _fake_get)

    survey = load_survey("https://example.test/survey-data.json")

    assert calls == ["https://example.test/survey-data.json"]
    assert len(survey) == 3


def test_non_success_status_raises_load_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_get(url: str, **kwargs: object) -> httpx.Response:
        return httpx.Response(404, text="missing", request=httpx.Request("GET", url))

    monkeypatch.setattr(survey_loader.httpx, "get", _fake_get)

    with pytest.raises(LoadError, match="HTTP 404"):
        load_survey("https://example.test/survey-data.json")


def test_transport_error_raises_load_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_get(url: str, **kwargs: object) -> httpx.Response:
        raise httpx.ConnectError("refused", request=httpx.Request("GET", url))

    monkeypatch.setattr(survey_loader.httpx, "get", _fake_get)

    with pytest.raises(LoadError):
        load_survey("http://localhost:1/survey-data.json")


def test_async_loader_reads_local_files(tmp_path: Path, scenario_payload: dict) -> None:
    survey = asyncio.run(load_survey_async(_write(tmp_path, scenario_payload)))

    assert [question.id for question in survey.questions] == [1, 2, 3]
