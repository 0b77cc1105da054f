"""Unit tests for competency score aggregation."""

import itertools

import pytest

from perfreview.engine.scoring import (
    build_ratings,
    category_average,
    format_score,
    normalize,
    scoring_progress,
    weighted_final,
)
from perfreview.errors import ValidationError
from perfreview.schemas.evaluation import CompetencyRating


def _r(category, score, criterion="c"):
    return CompetencyRating(criterion=criterion, category=category, score=score)


def test_category_average_empty_is_zero():
    """No ratings yields exactly 0, not NaN."""
    assert category_average([], "technical") == 0


def test_category_average_ignores_other_categories():
    ratings = [_r("technical", 4), _r("technical", 3), _r("behavioral", 1)]
    assert category_average(ratings, "technical") == 3.5
    assert category_average(ratings, "organizational") == 0


def test_weighted_final_bounds():
    assert weighted_final(4, 4, 4) == 4
    assert weighted_final(0, 0, 0) == 0


def test_weighted_final_stays_in_range():
    """Output stays within [0, 4] for inputs in [0, 4]."""
    values = [0, 0.5, 1, 1.75, 2.5, 3.25, 4]
    for t, b, o in itertools.product(values, repeat=3):
        assert 0 <= weighted_final(t, b, o) <= 4


def test_weighted_final_weights():
    assert weighted_final(4, 0, 0) == 2
    assert weighted_final(0, 4, 0) == 1.2
    assert weighted_final(0, 0, 4) == 0.8


def test_weighted_final_rejects_out_of_range():
    with pytest.raises(ValidationError) as exc:
        weighted_final(5, 1, 1)
    assert exc.value.fields == ["technical"]


def test_normalize_drops_float_noise():
    assert normalize(0.1 + 0.2) == 0.3


def test_format_score():
    assert format_score(2.3333333333457) == "2.333"
    assert format_score(0) == "0"
    assert format_score(2.33) == "2.33"
    assert format_score(4) == "4"


def test_build_ratings_rejects_unknown_and_out_of_range():
    with pytest.raises(ValidationError) as exc:
        build_ratings({"not-a-criterion": 3})
    assert exc.value.fields == ["not-a-criterion"]

    with pytest.raises(ValidationError) as exc:
        build_ratings({"comunicacao": 5})
    assert exc.value.fields == ["comunicacao"]


def test_build_ratings_uses_template_category():
    ratings = build_ratings({"comunicacao": 2, "pensamento-critico": 4})
    assert {r.criterion: r.category for r in ratings} == {
        "pensamento-critico": "technical",
        "comunicacao": "behavioral",
    }


def test_scoring_progress():
    assert scoring_progress({}) == 0
    assert scoring_progress({"comunicacao": 2, "colaboracao": 3, "flexibilidade": 1}) == 25
