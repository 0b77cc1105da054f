"""Potential questionnaire aggregation.

``final`` is the plain mean of the four raw answers. It is not weighted like
the competency score.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from perfreview.engine.scoring import check_score
from perfreview.engine.templates import POTENTIAL_ITEMS
from perfreview.errors import ValidationError


@dataclass(frozen=True)
class PotentialScores:
    results: float | None
    agility: float | None
    relationships: float | None
    final: float | None

    @property
    def complete(self) -> bool:
        return self.final is not None


def _check_items(items: Sequence[int | None]) -> list[int | None]:
    if len(items) != len(POTENTIAL_ITEMS):
        raise ValidationError(
            f"Potential questionnaire needs exactly {len(POTENTIAL_ITEMS)} items, got {len(items)}",
            fields=["potential_items"],
        )
    return [
        None if score is None else check_score(item.id, score)
        for item, score in zip(POTENTIAL_ITEMS, items)
    ]


def potential_scores(items: Sequence[int | None]) -> PotentialScores:
    """Aggregate the four potential items (results, agility, alignment, systemic view)."""
    results, agility, alignment, systemic = _check_items(items)
    relationships = None
    if alignment is not None and systemic is not None:
        relationships = (alignment + systemic) / 2
    final = None
    if None not in (results, agility, alignment, systemic):
        final = (results + agility + alignment + systemic) / 4
    return PotentialScores(
        results=results,
        agility=agility,
        relationships=relationships,
        final=final,
    )


def potential_progress(items: Sequence[int | None]) -> float:
    """Percentage of potential items answered; below 100 means incomplete."""
    checked = _check_items(items)
    return sum(1 for s in checked if s is not None) / len(checked) * 100
