"""Individual development plan (PDI) schemas.

Field names follow the plan's Portuguese vocabulary; the camelCase wire
names (``comoDesenvolver``, ``resultadosEsperados``) are accepted as aliases.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

Horizon = Literal["curto", "medio", "longo"]

HORIZONS: tuple[str, ...] = ("curto", "medio", "longo")

# 1: not started .. 5: completed
STATUS_LABELS = {
    1: "nao_iniciado",
    2: "iniciado",
    3: "em_andamento",
    4: "quase_concluido",
    5: "concluido",
}
COMPLETED_STATUS = 5


class PDIItem(BaseModel):
    """One development action, bound to a horizon bucket at creation."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str
    horizon: Horizon
    competencia: str
    como_desenvolver: str = Field(alias="comoDesenvolver")
    resultados_esperados: str = Field(alias="resultadosEsperados")
    calendarizacao: str = ""
    status: int = 1
    observacao: str = ""


class PDIPlan(BaseModel):
    """One plan per employee, optionally tied to a cycle."""

    model_config = {"frozen": True}

    id: str | None = None
    employee_id: str
    cycle_id: str | None = None
    items: tuple[PDIItem, ...] = ()


class PDIStats(BaseModel):
    """Per-status counts and completion percentage."""

    total: int
    nao_iniciados: int
    iniciados: int
    em_andamento: int
    quase_concluidos: int
    concluidos: int
    percentual_conclusao: int


class AddItemRequest(BaseModel):
    """POST /v1/pdi/{employee_id}/items request."""

    model_config = {"populate_by_name": True}

    horizon: Horizon | None = None
    competencia: str = ""
    como_desenvolver: str = Field(default="", alias="comoDesenvolver")
    resultados_esperados: str = Field(default="", alias="resultadosEsperados")
    calendarizacao: str = ""
    status: int = 1
    observacao: str = ""
    cycle_id: str | None = None


class UpdateItemRequest(BaseModel):
    """PATCH /v1/pdi/{employee_id}/items/{item_id} request - one field at a time."""

    field: str
    value: Any
