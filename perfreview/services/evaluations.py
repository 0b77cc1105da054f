"""Self and leader evaluation entry and submission."""

import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from uuid import uuid4

from perfreview.engine.potential import potential_scores
from perfreview.engine.scoring import build_ratings, final_score, missing_criteria
from perfreview.engine.templates import DEFAULT_TEMPLATE, POTENTIAL_ITEMS
from perfreview.errors import ConflictError, NotFoundError, ValidationError
from perfreview.schemas.evaluation import Evaluation
from perfreview.services.cycles import get_writable_cycle
from perfreview.storage.base import ReviewStore
from perfreview.storage.drafts import DraftStore

logger = logging.getLogger(__name__)


def _check_type(evaluation_type: str) -> None:
    if evaluation_type not in ("self", "leader"):
        raise ValidationError(
            f"Unknown evaluation type '{evaluation_type}'", fields=["evaluation_type"]
        )


async def save_evaluation(
    store: ReviewStore,
    cycle_id: str,
    employee_id: str,
    evaluation_type: str,
    evaluator_id: str,
    scores: Mapping[str, int],
    potential_items: Sequence[int | None] | None = None,
    now: date | datetime | None = None,
) -> Evaluation:
    """Store draft ratings. Partial input is fine; completed evaluations are frozen."""
    _check_type(evaluation_type)
    if potential_items is not None and evaluation_type != "leader":
        raise ValidationError(
            "Only leader evaluations carry potential items", fields=["potential_items"]
        )
    await get_writable_cycle(store, cycle_id, now)

    ratings = build_ratings(scores, DEFAULT_TEMPLATE)
    items: tuple[int | None, ...] = ()
    if evaluation_type == "leader":
        items = tuple(potential_items) if potential_items is not None else (None,) * len(POTENTIAL_ITEMS)
        potential_scores(items)

    existing = await store.get_evaluation(employee_id, cycle_id, evaluation_type)
    if existing is not None and existing.status == "completed":
        raise ConflictError(
            f"The {evaluation_type} evaluation for employee {employee_id} is already completed"
        )
    evaluation = Evaluation(
        id=existing.id if existing else str(uuid4()),
        employee_id=employee_id,
        cycle_id=cycle_id,
        evaluator_id=evaluator_id,
        evaluation_type=evaluation_type,
        status="draft",
        ratings=ratings,
        potential_items=items,
    )
    return await store.save_evaluation(evaluation)


async def submit_evaluation(
    store: ReviewStore,
    cycle_id: str,
    employee_id: str,
    evaluation_type: str,
    drafts: DraftStore | None = None,
    now: date | datetime | None = None,
) -> Evaluation:
    """Mark a fully rated evaluation completed and clear the rater's draft."""
    _check_type(evaluation_type)
    await get_writable_cycle(store, cycle_id, now)
    evaluation = await store.get_evaluation(employee_id, cycle_id, evaluation_type)
    if evaluation is None:
        raise NotFoundError(f"No {evaluation_type} evaluation for employee {employee_id}")
    if evaluation.status == "completed":
        raise ConflictError(
            f"The {evaluation_type} evaluation for employee {employee_id} is already completed"
        )

    missing = missing_criteria(evaluation.scores_by_criterion(), DEFAULT_TEMPLATE)
    potential = None
    if evaluation_type == "leader":
        potential = potential_scores(evaluation.potential_items)
        missing += [
            item.id
            for item, score in zip(POTENTIAL_ITEMS, evaluation.potential_items)
            if score is None
        ]
    if missing:
        raise ValidationError(f"Unrated items: {', '.join(missing)}", fields=missing)

    completed = evaluation.model_copy(
        update={
            "status": "completed",
            "final_score": final_score(evaluation.ratings),
            "potential_score": potential.final if potential else None,
        }
    )
    saved = await store.save_evaluation(completed)
    logger.info(
        "Submitted %s evaluation %s for employee %s", evaluation_type, saved.id, employee_id
    )
    if drafts is not None:
        await drafts.clear_draft(cycle_id, evaluation.evaluator_id)
    return saved
