from __future__ import annotations

from app.models.results import NO_RESPONSES_MESSAGE, NoResponses, SurveyResults
from app.models.survey import SurveyDefinition
from app.services.results import aggregate_results


def test_results_follow_question_order(definition: SurveyDefinition) -> None:
    results = aggregate_results(definition, {3: "Thanks", 1: "A", 2: 5})

    assert isinstance(results, SurveyResults)
    assert results.pairs() == [
        ("Favourite letter", "A"),
        ("Rate the survey", "5 out of 5"),
        ("Anything else?", "Thanks"),
    ]
    assert [entry.question_id for entry in results.entries] == [1, 2, 3]


def test_empty_text_and_missing_answers_are_omitted(definition: SurveyDefinition) -> None:
    results = aggregate_results(definition, {1: "B", 3: ""})

    assert results.pairs() == [("Favourite letter", "B")]
    assert results.answered_count == 1


def test_text_answers_are_not_reformatted(definition: SurveyDefinition) -> None:
    results = aggregate_results(definition, {3: "  spaced  out  "})

    assert results.pairs() == [("Anything else?", "  spaced  out  ")]


def test_no_answers_yields_no_responses(definition: SurveyDefinition) -> None:
    results = aggregate_results(definition, {3: ""})

    assert isinstance(results, NoResponses)
    assert results.message == NO_RESPONSES_MESSAGE
