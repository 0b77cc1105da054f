"""PDI plan endpoints."""

from fastapi import APIRouter

from perfreview.api.deps import StoreDep
from perfreview.engine.pdi import buckets, progress, stats
from perfreview.schemas.pdi import AddItemRequest, PDIPlan, UpdateItemRequest
from perfreview.services import pdi

router = APIRouter()


def _present(plan: PDIPlan) -> dict:
    return {
        "id": plan.id,
        "employee_id": plan.employee_id,
        "cycle_id": plan.cycle_id,
        "items": buckets(plan),
        "progress": progress(plan),
        "stats": stats(plan),
    }


@router.get("/pdi/{employee_id}")
async def get_plan(employee_id: str, store: StoreDep):
    return _present(await pdi.get_plan(store, employee_id))


@router.post("/pdi/{employee_id}/items", status_code=201)
async def add_item(employee_id: str, body: AddItemRequest, store: StoreDep):
    fields = body.model_dump(exclude={"horizon", "cycle_id"})
    plan = await pdi.add_item(store, employee_id, body.horizon, fields, cycle_id=body.cycle_id)
    return _present(plan)


@router.patch("/pdi/{employee_id}/items/{item_id}")
async def update_item(employee_id: str, item_id: str, body: UpdateItemRequest, store: StoreDep):
    plan = await pdi.update_item(store, employee_id, item_id, body.field, body.value)
    return _present(plan)


@router.delete("/pdi/{employee_id}/items/{item_id}")
async def remove_item(employee_id: str, item_id: str, store: StoreDep):
    return _present(await pdi.remove_item(store, employee_id, item_id))
