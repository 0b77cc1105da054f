"""PDI plan model."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from perfreview.database import Base


class PDIPlanRow(Base):
    """One development plan per employee; items kept as a JSON list."""

    __tablename__ = "pdi_plans"

    plan_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    employee_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    cycle_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False), ForeignKey("evaluation_cycles.cycle_id"), nullable=True
    )
    items_json: Mapped[list] = mapped_column(JSONB, nullable=False)
    updated_at: Mapped[str] = mapped_column(String(50), nullable=False)
