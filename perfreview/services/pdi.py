"""PDI plan operations against the store.

Plans tied to a cycle can only change while that cycle is writable; plans
without a cycle are always editable.
"""

import logging
from datetime import date, datetime
from typing import Any

from perfreview.engine import pdi as tracker
from perfreview.errors import NotFoundError
from perfreview.schemas.pdi import PDIPlan
from perfreview.services.cycles import get_writable_cycle
from perfreview.storage.base import ReviewStore

logger = logging.getLogger(__name__)


async def get_plan(store: ReviewStore, employee_id: str) -> PDIPlan:
    plan = await store.get_pdi_plan(employee_id)
    if plan is None:
        raise NotFoundError(f"No PDI plan for employee {employee_id}")
    return plan


async def _editable_plan(
    store: ReviewStore,
    employee_id: str,
    cycle_id: str | None = None,
    now: date | datetime | None = None,
) -> PDIPlan:
    plan = await store.get_pdi_plan(employee_id)
    if plan is None:
        plan = PDIPlan(employee_id=employee_id, cycle_id=cycle_id)
    if plan.cycle_id:
        await get_writable_cycle(store, plan.cycle_id, now)
    return plan


async def add_item(
    store: ReviewStore,
    employee_id: str,
    horizon: str | None,
    fields: dict[str, Any],
    cycle_id: str | None = None,
    now: date | datetime | None = None,
) -> PDIPlan:
    plan = await _editable_plan(store, employee_id, cycle_id, now)
    saved = await store.save_pdi_plan(tracker.add_item(plan, horizon, fields))
    logger.info("Added %s-term PDI item for employee %s", horizon, employee_id)
    return saved


async def update_item(
    store: ReviewStore,
    employee_id: str,
    item_id: str,
    field: str,
    value: Any,
    now: date | datetime | None = None,
) -> PDIPlan:
    plan = await _editable_plan(store, employee_id, now=now)
    return await store.save_pdi_plan(tracker.update_item(plan, item_id, field, value))


async def remove_item(
    store: ReviewStore,
    employee_id: str,
    item_id: str,
    now: date | datetime | None = None,
) -> PDIPlan:
    plan = await _editable_plan(store, employee_id, now=now)
    saved = await store.save_pdi_plan(tracker.remove_item(plan, item_id))
    logger.info("Removed PDI item %s for employee %s", item_id, employee_id)
    return saved
