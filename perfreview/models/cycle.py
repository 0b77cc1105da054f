"""Evaluation cycle model."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from perfreview.database import Base


class Cycle(Base):
    """Evaluation cycles - status only moves draft -> open -> closed."""

    __tablename__ = "evaluation_cycles"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_cycles_period"),
        CheckConstraint("status IN ('draft', 'open', 'closed')", name="ck_cycles_status"),
    )

    cycle_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft"
    )  # draft|open|closed
    created_at: Mapped[str] = mapped_column(String(50), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(50), nullable=False)
