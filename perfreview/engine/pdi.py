"""PDI tracker - horizon-bucketed development actions.

Plans are immutable; every operation returns a new plan. Status is a free
ordinal (1..5) that may move in any direction. ``forward_only_status`` is an
opt-in check for callers that want a stricter workflow.
"""

from collections.abc import Callable
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as ModelError

from perfreview.errors import NotFoundError, ValidationError
from perfreview.schemas.pdi import (
    COMPLETED_STATUS,
    HORIZONS,
    STATUS_LABELS,
    PDIItem,
    PDIPlan,
    PDIStats,
)

REQUIRED_FIELDS = ("competencia", "como_desenvolver", "resultados_esperados")
EDITABLE_FIELDS = frozenset(
    {
        "competencia",
        "como_desenvolver",
        "resultados_esperados",
        "calendarizacao",
        "status",
        "observacao",
    }
)
_WIRE_NAMES = {
    "comoDesenvolver": "como_desenvolver",
    "resultadosEsperados": "resultados_esperados",
}

ItemCheck = Callable[[PDIItem, str, Any], None]


def _check_status(value) -> int:
    if isinstance(value, str) and value.isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value not in STATUS_LABELS:
        raise ValidationError("status must be an integer between 1 and 5", fields=["status"])
    return value


def _find(plan: PDIPlan, item_id: str) -> int:
    for index, item in enumerate(plan.items):
        if item.id == item_id:
            return index
    raise NotFoundError(f"PDI item {item_id} not found")


def add_item(plan: PDIPlan, horizon: str | None, fields: dict[str, Any]) -> PDIPlan:
    fields = {_WIRE_NAMES.get(k, k): v for k, v in fields.items()}
    missing = [name for name in REQUIRED_FIELDS if not str(fields.get(name) or "").strip()]
    if horizon not in HORIZONS:
        missing.append("horizon")
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)

    status = _check_status(fields.get("status", 1))
    try:
        item = PDIItem(
            id=str(uuid4()),
            horizon=horizon,
            competencia=fields["competencia"],
            como_desenvolver=fields["como_desenvolver"],
            resultados_esperados=fields["resultados_esperados"],
            calendarizacao=fields.get("calendarizacao") or "",
            status=status,
            observacao=fields.get("observacao") or "",
        )
    except ModelError as exc:
        bad = [str(err["loc"][0]) for err in exc.errors() if err["loc"]]
        raise ValidationError(f"Invalid PDI item fields: {', '.join(bad)}", fields=bad) from exc
    return plan.model_copy(update={"items": plan.items + (item,)})


def update_item(
    plan: PDIPlan,
    item_id: str,
    field: str,
    value: Any,
    checks: tuple[ItemCheck, ...] = (),
) -> PDIPlan:
    """Change exactly one field of one item. No cross-field validation."""
    field = _WIRE_NAMES.get(field, field)
    if field not in EDITABLE_FIELDS:
        raise ValidationError(f"Field '{field}' cannot be edited", fields=[field])
    index = _find(plan, item_id)
    item = plan.items[index]
    if field == "status":
        value = _check_status(value)
    elif value is None:
        value = ""
    for check in checks:
        check(item, field, value)

    try:
        changed = PDIItem.model_validate({**item.model_dump(), field: value})
    except ModelError as exc:
        raise ValidationError(f"Invalid value for '{field}'", fields=[field]) from exc

    items = list(plan.items)
    items[index] = changed
    return plan.model_copy(update={"items": tuple(items)})


def remove_item(plan: PDIPlan, item_id: str) -> PDIPlan:
    index = _find(plan, item_id)
    return plan.model_copy(update={"items": plan.items[:index] + plan.items[index + 1:]})


def progress(plan: PDIPlan) -> float:
    """Share of items with status 5, from 0 to 1; 0 for an empty plan."""
    total = len(plan.items)
    if total == 0:
        return 0
    return sum(1 for item in plan.items if item.status == COMPLETED_STATUS) / total


def buckets(plan: PDIPlan) -> dict[str, list[PDIItem]]:
    return {h: [item for item in plan.items if item.horizon == h] for h in HORIZONS}


def stats(plan: PDIPlan) -> PDIStats:
    counts = {status: 0 for status in STATUS_LABELS}
    for item in plan.items:
        counts[item.status] += 1
    total = len(plan.items)
    return PDIStats(
        total=total,
        nao_iniciados=counts[1],
        iniciados=counts[2],
        em_andamento=counts[3],
        quase_concluidos=counts[4],
        concluidos=counts[5],
        percentual_conclusao=int(counts[5] * 100 / total + 0.5) if total else 0,
    )


def forward_only_status(item: PDIItem, field: str, value: Any) -> None:
    """Opt-in check: status may not move backwards."""
    if field == "status" and value < item.status:
        raise ValidationError(
            f"status cannot move back from {item.status} to {value}", fields=["status"]
        )
