"""Competency score aggregation - category averages and weighted final score."""

from collections.abc import Iterable, Mapping

from perfreview.engine.templates import CATEGORY_WEIGHTS, DEFAULT_TEMPLATE, Criterion
from perfreview.errors import ValidationError
from perfreview.schemas.evaluation import CompetencyRating

MIN_SCORE = 1
MAX_SCORE = 4


def normalize(value: float) -> float:
    """Round to 10 decimal places to drop floating-point noise."""
    return round(value * 1e10) / 1e10


def format_score(value: float) -> str:
    """Display form: at most 3 decimals, trailing zeros stripped (2.330 -> "2.33", 0 -> "0")."""
    text = f"{round(normalize(value), 3):.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def check_score(criterion: str, score) -> int:
    """Reject anything that is not an integer in 1..4."""
    if isinstance(score, bool) or not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(
            f"Score for {criterion} must be an integer between {MIN_SCORE} and {MAX_SCORE}",
            fields=[criterion],
        )
    return score


def category_average(ratings: Iterable[CompetencyRating], category: str) -> float:
    """Mean of the scores in ``category``; exactly 0 when nothing is rated there."""
    scores = [r.score for r in ratings if r.category == category]
    if not scores:
        return 0
    return sum(scores) / len(scores)


def weighted_final(technical: float, behavioral: float, organizational: float) -> float:
    """0.5*technical + 0.3*behavioral + 0.2*organizational, normalized."""
    for name, value in (
        ("technical", technical),
        ("behavioral", behavioral),
        ("organizational", organizational),
    ):
        if not 0 <= value <= MAX_SCORE:
            raise ValidationError(f"{name} average must be within [0, {MAX_SCORE}]", fields=[name])
    raw = (
        technical * CATEGORY_WEIGHTS["technical"]
        + behavioral * CATEGORY_WEIGHTS["behavioral"]
        + organizational * CATEGORY_WEIGHTS["organizational"]
    )
    return normalize(raw)


def category_averages(ratings: Iterable[CompetencyRating]) -> dict[str, float]:
    ratings = list(ratings)
    return {category: category_average(ratings, category) for category in CATEGORY_WEIGHTS}


def final_score(ratings: Iterable[CompetencyRating]) -> float:
    averages = category_averages(ratings)
    return weighted_final(
        averages["technical"], averages["behavioral"], averages["organizational"]
    )


def build_ratings(
    scores: Mapping[str, int],
    template: Iterable[Criterion] = DEFAULT_TEMPLATE,
) -> tuple[CompetencyRating, ...]:
    """Turn ``{criterion_id: score}`` into ratings, in template order.

    Criteria missing from ``scores`` are skipped; unknown criteria and
    out-of-range scores raise ValidationError.
    """
    template = tuple(template)
    known = {c.id for c in template}
    unknown = sorted(k for k in scores if k not in known)
    if unknown:
        raise ValidationError(f"Unknown criteria: {', '.join(unknown)}", fields=unknown)
    return tuple(
        CompetencyRating(criterion=c.id, category=c.category, score=check_score(c.id, scores[c.id]))
        for c in template
        if c.id in scores
    )


def missing_criteria(
    scores: Mapping[str, int], template: Iterable[Criterion] = DEFAULT_TEMPLATE
) -> list[str]:
    return [c.id for c in template if scores.get(c.id) is None]


def scoring_progress(
    scores: Mapping[str, int], template: Iterable[Criterion] = DEFAULT_TEMPLATE
) -> float:
    """Percentage of template criteria with a score."""
    template = tuple(template)
    if not template:
        return 0
    rated = sum(1 for c in template if scores.get(c.id) is not None)
    return rated / len(template) * 100
