"""Cycle lifecycle operations against the store."""

import logging
from datetime import date, datetime, timezone
from uuid import uuid4

from perfreview.engine.lifecycle import (
    check_transition,
    current_cycle,
    ensure_writable,
    validate_new_cycle,
)
from perfreview.errors import NotFoundError
from perfreview.schemas.cycle import EvaluationCycle
from perfreview.storage.base import ReviewStore

logger = logging.getLogger(__name__)


def today() -> date:
    return datetime.now(timezone.utc).date()


async def get_cycle(store: ReviewStore, cycle_id: str) -> EvaluationCycle:
    cycle = await store.get_cycle(cycle_id)
    if cycle is None:
        raise NotFoundError(f"Cycle {cycle_id} not found")
    return cycle


async def get_current_cycle(store: ReviewStore, now: date | datetime | None = None) -> EvaluationCycle:
    """The open cycle accepting writes today; the latest started wins."""
    cycle = current_cycle(await store.list_cycles(), now or today())
    if cycle is None:
        raise NotFoundError("No open cycle covers the current date")
    return cycle


async def get_writable_cycle(
    store: ReviewStore, cycle_id: str, now: date | datetime | None = None
) -> EvaluationCycle:
    cycle = await get_cycle(store, cycle_id)
    ensure_writable(cycle, now or today())
    return cycle


async def create_cycle(store: ReviewStore, title: str, start: date, end: date) -> EvaluationCycle:
    validate_new_cycle(title, start, end)
    cycle = EvaluationCycle(
        id=str(uuid4()), title=title.strip(), start_date=start, end_date=end, status="draft"
    )
    created = await store.create_cycle(cycle)
    logger.info("Created cycle %s (%s..%s)", created.id, start, end)
    return created


async def _transition(store: ReviewStore, cycle_id: str, target: str) -> EvaluationCycle:
    # Check-then-write: concurrent transitions rely on the store's own constraints.
    cycle = await get_cycle(store, cycle_id)
    check_transition(cycle, target)
    updated = await store.set_cycle_status(cycle_id, target)
    logger.info("Cycle %s: %s -> %s", cycle_id, cycle.status, target)
    return updated


async def open_cycle(store: ReviewStore, cycle_id: str) -> EvaluationCycle:
    return await _transition(store, cycle_id, "open")


async def close_cycle(store: ReviewStore, cycle_id: str) -> EvaluationCycle:
    return await _transition(store, cycle_id, "closed")
