from __future__ import annotations


class SurveyAppError(Exception):
    """Base class for expected, user-meaningful failures."""


class LoadError(SurveyAppError):
    """Raised when a survey definition cannot be fetched or parsed."""


class AnswerError(SurveyAppError, ValueError):
    """Raised when an answer does not fit the question it was submitted for."""


class CategoryValidationError(SurveyAppError):
    """Raised for an empty or duplicate category name."""


class CategoryNotFoundError(SurveyAppError):
    """Raised when no category has the requested id."""


class StorageError(SurveyAppError):
    """Raised when the category file cannot be read or is corrupt."""
