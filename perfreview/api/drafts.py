"""Advisory draft endpoints (auto-save of unsubmitted forms)."""

from typing import Any

from fastapi import APIRouter, Body, Response

from perfreview.api.deps import DraftsDep
from perfreview.errors import NotFoundError

router = APIRouter()


@router.put("/drafts/{cycle_id}/{user_id}", status_code=204)
async def save_draft(cycle_id: str, user_id: str, drafts: DraftsDep, payload: dict[str, Any] = Body(...)):
    await drafts.save_draft(cycle_id, user_id, payload)
    return Response(status_code=204)


@router.get("/drafts/{cycle_id}/{user_id}")
async def load_draft(cycle_id: str, user_id: str, drafts: DraftsDep):
    """Returns 404 when there is no draft or it has gone stale."""
    payload = await drafts.load_draft(cycle_id, user_id)
    if payload is None:
        raise NotFoundError(f"No draft for user {user_id} in cycle {cycle_id}")
    return payload


@router.delete("/drafts/{cycle_id}/{user_id}", status_code=204)
async def clear_draft(cycle_id: str, user_id: str, drafts: DraftsDep):
    await drafts.clear_draft(cycle_id, user_id)
    return Response(status_code=204)
