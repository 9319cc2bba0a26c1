from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import LoadError
from app.models.survey import SurveyDefinition

logger = logging.getLogger(__name__)


class SurveyLoader:
    """Load a survey definition from a JSON document.

    The source is either a local file path or an ``http(s)://`` URL that is
    fetched once with a GET request. The document must have the shape::

        {"questions": [{"id": 1, "type": "multiple-choice", "title": "...", "options": [...]}]}

    Any failure to read, fetch, parse or validate the document raises
    :class:`LoadError`. There is no retry.
    """

    def __init__(self, source: str | Path, *, timeout: float | None = None) -> None:
        self._source = str(source)
        self._timeout = settings.http_timeout if timeout is None else timeout
        self._survey = parse_survey(self._read_source(), source=self._source)
        logger.info("Loaded survey from %s with %d questions", self._source, len(self._survey))

    @property
    def survey(self) -> SurveyDefinition:
        """Return the loaded survey definition."""

        return self._survey

    def _read_source(self) -> str:
        if _is_url(self._source):
            try:
                response = httpx.get(self._source, timeout=self._timeout, follow_redirects=True)
            except httpx.HTTPError as exc:
                logger.error("Fetching survey from %s failed: %s", self._source, exc)
                raise LoadError(f"Could not fetch survey from {self._source}: {exc}") from exc
            _raise_for_status(response, self._source)
            return response.text

        path = Path(self._source)
        if not path.is_file():
            logger.error("Survey file not found: %s", path)
            raise LoadError(f"Survey file not found: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Reading survey file %s failed: %s", path, exc)
            raise LoadError(f"Could not read survey file {path}: {exc}") from exc


def load_survey(source: str | Path, *, timeout: float | None = None) -> SurveyDefinition:
    """Convenience wrapper returning the definition loaded from ``source``."""

    return SurveyLoader(source, timeout=timeout).survey


async def load_survey_async(source: str | Path, *, timeout: float | None = None) -> SurveyDefinition:
    """Fetch and parse a survey definition without blocking the event loop."""

    source_text = str(source)
    if not _is_url(source_text):
        return load_survey(source_text, timeout=timeout)

    resolved_timeout = settings.http_timeout if timeout is None else timeout
    try:
        async with httpx.AsyncClient(timeout=resolved_timeout, follow_redirects=True) as client:
            response = await client.get(source_text)
    except httpx.HTTPError as exc:
        logger.error("Fetching survey from %s failed: %s", source_text, exc)
        raise LoadError(f"Could not fetch survey from {source_text}: {exc}") from exc

    _raise_for_status(response, source_text)
    survey = parse_survey(response.text, source=source_text)
    logger.info("Loaded survey from %s with %d questions", source_text, len(survey))
    return survey


def parse_survey(raw: str | bytes, *, source: str = "<memory>") -> SurveyDefinition:
    """Parse a JSON survey document, raising :class:`LoadError` on any problem."""

    try:
        payload: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.error("Survey document %s is not valid JSON: %s", source, exc)
        raise LoadError(f"Survey document {source} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("questions"), list):
        logger.error("Survey document %s has no questions array", source)
        raise LoadError(f"Survey document {source} must contain a 'questions' array")

    try:
        return SurveyDefinition.model_validate(payload)
    except ValidationError as exc:
        message = _describe_validation_error(exc)
        logger.error("Survey document %s is invalid: %s", source, message)
        raise LoadError(f"Survey document {source} is invalid: {message}") from exc


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        if error.get("type") == "union_tag_invalid":
            tag = (error.get("ctx") or {}).get("tag")
            problems.append(f"{location}: unsupported question type {tag!r}")
        else:
            problems.append(f"{location}: {error.get('msg')}")
    return "; ".join(problems)


def _raise_for_status(response: httpx.Response, source: str) -> None:
    if response.is_success:
        return
    logger.error("Fetching survey from %s returned HTTP %d", source, response.status_code)
    raise LoadError(f"Could not fetch survey from {source}: HTTP {response.status_code}")


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))
