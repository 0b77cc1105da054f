"""Consensus model."""

from sqlalchemy import Float, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from perfreview.database import Base


class ConsensusRow(Base):
    """Consensus records - insert-only, at most one per (employee, cycle)."""

    __tablename__ = "consensus_evaluations"
    __table_args__ = (
        UniqueConstraint("employee_id", "cycle_id", name="uq_consensus_employee_cycle"),
    )

    consensus_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    cycle_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("evaluation_cycles.cycle_id"), nullable=False
    )
    employee_id: Mapped[str] = mapped_column(Text, nullable=False)
    self_evaluation_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("evaluations.evaluation_id"), nullable=False
    )
    leader_evaluation_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("evaluations.evaluation_id"), nullable=False
    )
    consensus_score: Mapped[float] = mapped_column(Float, nullable=False)
    potential_score: Mapped[float] = mapped_column(Float, nullable=False)
    nine_box_position: Mapped[str] = mapped_column(String(2), nullable=False)
    notes: Mapped[dict] = mapped_column(JSONB, nullable=False)
    created_at: Mapped[str] = mapped_column(String(50), nullable=False)
