"""Cycle endpoints - create, read, open, close."""

from fastapi import APIRouter

from perfreview.api.deps import StoreDep
from perfreview.schemas.cycle import CreateCycleRequest, EvaluationCycle
from perfreview.services import cycles

router = APIRouter()


@router.post("/cycles", response_model=EvaluationCycle, status_code=201)
async def create_cycle(body: CreateCycleRequest, store: StoreDep):
    """Create a cycle in draft status."""
    return await cycles.create_cycle(store, body.title, body.start_date, body.end_date)


@router.get("/cycles", response_model=list[EvaluationCycle])
async def list_cycles(store: StoreDep):
    return await store.list_cycles()


@router.get("/cycles/current", response_model=EvaluationCycle)
async def get_current_cycle(store: StoreDep):
    """The open cycle whose period contains today."""
    return await cycles.get_current_cycle(store)


@router.get("/cycles/{cycle_id}", response_model=EvaluationCycle)
async def get_cycle(cycle_id: str, store: StoreDep):
    return await cycles.get_cycle(store, cycle_id)


@router.post("/cycles/{cycle_id}/open", response_model=EvaluationCycle)
async def open_cycle(cycle_id: str, store: StoreDep):
    """draft -> open."""
    return await cycles.open_cycle(store, cycle_id)


@router.post("/cycles/{cycle_id}/close", response_model=EvaluationCycle)
async def close_cycle(cycle_id: str, store: StoreDep):
    """open -> closed. Closed cycles cannot be reopened."""
    return await cycles.close_cycle(store, cycle_id)
