"""Evaluation cycle schemas."""

from datetime import date
from typing import Literal

from pydantic import BaseModel

CycleStatus = Literal["draft", "open", "closed"]


class EvaluationCycle(BaseModel):
    """A time-boxed evaluation period."""

    model_config = {"frozen": True}

    id: str
    title: str
    start_date: date
    end_date: date
    status: CycleStatus = "draft"


class CreateCycleRequest(BaseModel):
    """POST /v1/cycles request."""

    title: str
    start_date: date
    end_date: date
