"""Self and leader evaluation schemas."""

from typing import Literal

from pydantic import BaseModel, Field

Category = Literal["technical", "behavioral", "organizational"]
EvaluationType = Literal["self", "leader"]
EvaluationStatus = Literal["draft", "completed"]


class CompetencyRating(BaseModel):
    """One rater's score for one criterion."""

    model_config = {"frozen": True}

    criterion: str
    category: Category
    score: int


class Evaluation(BaseModel):
    """A self- or leader-sourced evaluation for one employee in one cycle.

    Leader evaluations also carry the four potential questionnaire items
    (``None`` while unrated) and the resulting ``potential_score``.
    """

    model_config = {"frozen": True}

    id: str
    employee_id: str
    cycle_id: str
    evaluator_id: str
    evaluation_type: EvaluationType
    status: EvaluationStatus = "draft"
    ratings: tuple[CompetencyRating, ...] = ()
    potential_items: tuple[int | None, ...] = ()
    final_score: float | None = None
    potential_score: float | None = None

    def scores_by_criterion(self) -> dict[str, int]:
        return {r.criterion: r.score for r in self.ratings}


class SaveEvaluationRequest(BaseModel):
    """PUT /v1/cycles/{cycle_id}/evaluations/{employee_id}/{type} request."""

    evaluator_id: str
    scores: dict[str, int] = Field(default_factory=dict)
    potential_items: list[int | None] | None = None
