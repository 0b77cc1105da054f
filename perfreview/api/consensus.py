"""Consensus and nine-box endpoints."""

from fastapi import APIRouter, Header

from perfreview.api.deps import DraftsDep, StoreDep
from perfreview.engine.ninebox import describe
from perfreview.engine.scoring import format_score
from perfreview.schemas.consensus import ConsensusRecord, ConsensusRequest
from perfreview.services import consensus

router = APIRouter()


def _present(record: ConsensusRecord) -> dict:
    label = describe(record.nine_box_position)
    body = record.model_dump()
    body["consensus_score_display"] = format_score(record.consensus_score)
    body["nine_box_label"] = {"title": label.title, "summary": label.summary}
    return body


@router.post("/cycles/{cycle_id}/consensus/{employee_id}", status_code=201)
async def reconcile(
    cycle_id: str,
    employee_id: str,
    body: ConsensusRequest,
    store: StoreDep,
    drafts: DraftsDep,
    x_user_id: str | None = Header(default=None),
):
    """
    Create the consensus for an employee in a cycle.
    Fails with 409 if one already exists; it is never updated.
    """
    record = await consensus.reconcile_consensus(
        store,
        employee_id,
        cycle_id,
        body.scores,
        potential_score=body.potential_score,
        observations=body.observations,
        drafts=drafts,
        user_id=x_user_id,
    )
    return _present(record)


@router.get("/cycles/{cycle_id}/consensus/{employee_id}")
async def get_consensus(cycle_id: str, employee_id: str, store: StoreDep):
    return _present(await consensus.get_consensus(store, employee_id, cycle_id))


@router.get("/ninebox/{code}")
async def nine_box_label(code: str):
    """Descriptive label for a B1..B9 code."""
    label = describe(code)
    return {
        "code": label.code,
        "title": label.title,
        "summary": label.summary,
        "performance": label.performance,
        "potential": label.potential,
    }
