"""Initial schema - evaluation_cycles, evaluations, consensus_evaluations, pdi_plans.

Revision ID: 001
Revises:
Create Date: 2025-01-06

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "evaluation_cycles",
        sa.Column("cycle_id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("created_at", sa.String(50), nullable=False),
        sa.Column("updated_at", sa.String(50), nullable=False),
        sa.CheckConstraint("start_date < end_date", name="ck_cycles_period"),
        sa.CheckConstraint("status IN ('draft', 'open', 'closed')", name="ck_cycles_status"),
    )

    op.create_table(
        "evaluations",
        sa.Column("evaluation_id", sa.UUID(), primary_key=True),
        sa.Column("cycle_id", sa.UUID(), sa.ForeignKey("evaluation_cycles.cycle_id"), nullable=False),
        sa.Column("employee_id", sa.Text(), nullable=False),
        sa.Column("evaluator_id", sa.Text(), nullable=False),
        sa.Column("evaluation_type", sa.String(10), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("ratings_json", postgresql.JSONB(), nullable=False),
        sa.Column("potential_json", postgresql.JSONB(), nullable=False),
        sa.Column("final_score", sa.Float(), nullable=True),
        sa.Column("potential_score", sa.Float(), nullable=True),
        sa.Column("updated_at", sa.String(50), nullable=False),
    )
    op.create_unique_constraint(
        "uq_evaluations_employee_cycle_type",
        "evaluations",
        ["employee_id", "cycle_id", "evaluation_type"],
    )

    op.create_table(
        "consensus_evaluations",
        sa.Column("consensus_id", sa.UUID(), primary_key=True),
        sa.Column("cycle_id", sa.UUID(), sa.ForeignKey("evaluation_cycles.cycle_id"), nullable=False),
        sa.Column("employee_id", sa.Text(), nullable=False),
        sa.Column(
            "self_evaluation_id", sa.UUID(), sa.ForeignKey("evaluations.evaluation_id"), nullable=False
        ),
        sa.Column(
            "leader_evaluation_id", sa.UUID(), sa.ForeignKey("evaluations.evaluation_id"), nullable=False
        ),
        sa.Column("consensus_score", sa.Float(), nullable=False),
        sa.Column("potential_score", sa.Float(), nullable=False),
        sa.Column("nine_box_position", sa.String(2), nullable=False),
        sa.Column("notes", postgresql.JSONB(), nullable=False),
        sa.Column("created_at", sa.String(50), nullable=False),
    )
    # The authoritative at-most-once guarantee for consensus records
    op.create_unique_constraint(
        "uq_consensus_employee_cycle",
        "consensus_evaluations",
        ["employee_id", "cycle_id"],
    )

    op.create_table(
        "pdi_plans",
        sa.Column("plan_id", sa.UUID(), primary_key=True),
        sa.Column("employee_id", sa.Text(), unique=True, nullable=False),
        sa.Column("cycle_id", sa.UUID(), sa.ForeignKey("evaluation_cycles.cycle_id"), nullable=True),
        sa.Column("items_json", postgresql.JSONB(), nullable=False),
        sa.Column("updated_at", sa.String(50), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("pdi_plans")
    op.drop_table("consensus_evaluations")
    op.drop_table("evaluations")
    op.drop_table("evaluation_cycles")
