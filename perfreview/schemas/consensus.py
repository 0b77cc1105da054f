"""Consensus schemas."""

from pydantic import BaseModel, Field


class ConsensusNotes(BaseModel):
    """Structured breakdown kept with a consensus record for audit."""

    model_config = {"frozen": True}

    criterion_scores: dict[str, int]
    observations: dict[str, str] = Field(default_factory=dict)
    technical_average: float
    behavioral_average: float
    organizational_average: float
    self_scores: dict[str, int] = Field(default_factory=dict)
    leader_scores: dict[str, int] = Field(default_factory=dict)


class ConsensusSubmission(BaseModel):
    """Committee input for one (employee, cycle) pair."""

    model_config = {"frozen": True}

    employee_id: str
    cycle_id: str
    scores: dict[str, int]
    observations: dict[str, str] = Field(default_factory=dict)
    potential_score: float | None = None


class ConsensusRecord(BaseModel):
    """The single authoritative result for an (employee, cycle) pair. Never updated."""

    model_config = {"frozen": True}

    id: str | None = None
    employee_id: str
    cycle_id: str
    self_evaluation_id: str
    leader_evaluation_id: str
    consensus_score: float
    potential_score: float
    nine_box_position: str
    notes: ConsensusNotes


class ConsensusRequest(BaseModel):
    """POST /v1/cycles/{cycle_id}/consensus/{employee_id} request."""

    scores: dict[str, int]
    observations: dict[str, str] = Field(default_factory=dict)
    potential_score: float | None = None
