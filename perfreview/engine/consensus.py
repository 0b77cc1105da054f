"""Consensus reconciliation - pure validation and record construction.

No I/O happens here. ``perfreview.services.consensus`` loads the inputs,
runs the checks in order and hands the finished record to the store.
"""

from collections.abc import Iterable

from perfreview.engine.ninebox import classify
from perfreview.engine.scoring import build_ratings, category_averages, missing_criteria, weighted_final
from perfreview.engine.templates import DEFAULT_TEMPLATE, Criterion
from perfreview.errors import ConflictError, NotFoundError, ValidationError
from perfreview.schemas.consensus import ConsensusNotes, ConsensusRecord, ConsensusSubmission
from perfreview.schemas.evaluation import Evaluation


def check_sources(
    employee_id: str,
    self_evaluation: Evaluation | None,
    leader_evaluation: Evaluation | None,
) -> tuple[Evaluation, Evaluation]:
    """Both source evaluations must exist and be completed."""
    for label, ev in (("self", self_evaluation), ("leader", leader_evaluation)):
        if ev is None:
            raise NotFoundError(f"No {label} evaluation for employee {employee_id}")
        if ev.status != "completed":
            raise NotFoundError(
                f"The {label} evaluation for employee {employee_id} is not completed"
            )
    return self_evaluation, leader_evaluation


def check_submission(
    submission: ConsensusSubmission,
    template: Iterable[Criterion] = DEFAULT_TEMPLATE,
) -> None:
    """Every template criterion needs a score, and the potential score must be known."""
    template = tuple(template)
    missing = missing_criteria(submission.scores, template)
    if missing:
        raise ValidationError(
            f"Missing consensus score for: {', '.join(missing)}", fields=missing
        )
    build_ratings(submission.scores, template)
    if submission.potential_score is None:
        raise ValidationError(
            "Potential score not found; the leader evaluation must include it",
            fields=["potential_score"],
        )


def check_not_reconciled(existing: bool, employee_id: str, cycle_id: str) -> None:
    if existing:
        raise ConflictError(
            f"A consensus already exists for employee {employee_id} in cycle {cycle_id}"
        )


def build_record(
    submission: ConsensusSubmission,
    self_evaluation: Evaluation,
    leader_evaluation: Evaluation,
    template: Iterable[Criterion] = DEFAULT_TEMPLATE,
) -> ConsensusRecord:
    """Compute the consensus score and nine-box code and assemble the record."""
    ratings = build_ratings(submission.scores, template)
    averages = category_averages(ratings)
    score = weighted_final(
        averages["technical"], averages["behavioral"], averages["organizational"]
    )
    position = classify(score, submission.potential_score)
    notes = ConsensusNotes(
        criterion_scores={r.criterion: r.score for r in ratings},
        observations=dict(submission.observations),
        technical_average=averages["technical"],
        behavioral_average=averages["behavioral"],
        organizational_average=averages["organizational"],
        self_scores=self_evaluation.scores_by_criterion(),
        leader_scores=leader_evaluation.scores_by_criterion(),
    )
    return ConsensusRecord(
        employee_id=submission.employee_id,
        cycle_id=submission.cycle_id,
        self_evaluation_id=self_evaluation.id,
        leader_evaluation_id=leader_evaluation.id,
        consensus_score=score,
        potential_score=submission.potential_score,
        nine_box_position=position,
        notes=notes,
    )
