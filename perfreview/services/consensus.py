"""Consensus reconciliation against the store.

Order of checks: cycle state, source evaluations, submitted scores,
existing consensus. None of them writes anything. The existence check is
only an optimistic pre-check; the store's unique constraint decides, and
a conflicting insert surfaces as ConflictError even when the pre-check
passed. On TransientError the write outcome is unknown: call
``consensus_exists`` again before any retry.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime

from perfreview.engine.consensus import build_record, check_not_reconciled, check_sources, check_submission
from perfreview.engine.templates import DEFAULT_TEMPLATE
from perfreview.errors import ConflictError, NotFoundError, TransientError
from perfreview.schemas.consensus import ConsensusRecord, ConsensusSubmission
from perfreview.services.cycles import get_writable_cycle
from perfreview.storage.base import ReviewStore
from perfreview.storage.drafts import DraftStore

logger = logging.getLogger(__name__)


async def reconcile_consensus(
    store: ReviewStore,
    employee_id: str,
    cycle_id: str,
    submitted_scores: Mapping[str, int],
    potential_score: float | None = None,
    observations: Mapping[str, str] | None = None,
    drafts: DraftStore | None = None,
    user_id: str | None = None,
    now: date | datetime | None = None,
) -> ConsensusRecord:
    """Create the single consensus record for (employee, cycle).

    ``potential_score`` defaults to the leader evaluation's potential score.
    """
    await get_writable_cycle(store, cycle_id, now)
    self_ev, leader_ev = check_sources(
        employee_id,
        await store.get_evaluation(employee_id, cycle_id, "self"),
        await store.get_evaluation(employee_id, cycle_id, "leader"),
    )

    submission = ConsensusSubmission(
        employee_id=employee_id,
        cycle_id=cycle_id,
        scores=dict(submitted_scores),
        observations=dict(observations or {}),
        potential_score=potential_score if potential_score is not None else leader_ev.potential_score,
    )
    check_submission(submission, DEFAULT_TEMPLATE)
    check_not_reconciled(await store.consensus_exists(employee_id, cycle_id), employee_id, cycle_id)

    record = build_record(submission, self_ev, leader_ev, DEFAULT_TEMPLATE)
    try:
        created = await store.create_consensus(record)
    except ConflictError:
        logger.warning(
            "Consensus insert for employee %s in cycle %s lost a race", employee_id, cycle_id
        )
        raise
    except TransientError:
        logger.warning(
            "Consensus insert for employee %s in cycle %s has unknown outcome", employee_id, cycle_id
        )
        raise

    logger.info(
        "Consensus %s for employee %s in cycle %s: score=%s potential=%s box=%s",
        created.id,
        employee_id,
        cycle_id,
        created.consensus_score,
        created.potential_score,
        created.nine_box_position,
    )
    if drafts is not None and user_id is not None:
        await drafts.clear_draft(cycle_id, user_id)
    return created


async def get_consensus(store: ReviewStore, employee_id: str, cycle_id: str) -> ConsensusRecord:
    record = await store.get_consensus(employee_id, cycle_id)
    if record is None:
        raise NotFoundError(f"No consensus for employee {employee_id} in cycle {cycle_id}")
    return record
