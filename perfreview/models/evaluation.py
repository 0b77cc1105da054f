"""Self and leader evaluation model."""

from sqlalchemy import Float, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from perfreview.database import Base


class EvaluationRow(Base):
    """One row per (employee, cycle, evaluation_type)."""

    __tablename__ = "evaluations"
    __table_args__ = (
        UniqueConstraint(
            "employee_id", "cycle_id", "evaluation_type", name="uq_evaluations_employee_cycle_type"
        ),
    )

    evaluation_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    cycle_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("evaluation_cycles.cycle_id"), nullable=False
    )
    employee_id: Mapped[str] = mapped_column(Text, nullable=False)
    evaluator_id: Mapped[str] = mapped_column(Text, nullable=False)
    evaluation_type: Mapped[str] = mapped_column(String(10), nullable=False)  # self|leader
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    ratings_json: Mapped[list] = mapped_column(JSONB, nullable=False)
    potential_json: Mapped[list] = mapped_column(JSONB, nullable=False)
    final_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    potential_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    updated_at: Mapped[str] = mapped_column(String(50), nullable=False)
