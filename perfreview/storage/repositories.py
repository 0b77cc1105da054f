"""Repository functions for cycles, evaluations, consensus and PDI plans.

``SqlReviewStore`` binds them to a session and implements ``ReviewStore``:
every call is bounded by ``store_timeout_seconds`` and connectivity
failures become TransientError. Cycle ids that are not UUIDs never reach the
driver; they read as absent.
"""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import datetime
from typing import TypeVar
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from perfreview.config import settings
from perfreview.errors import ConflictError, NotFoundError, TransientError
from perfreview.models import ConsensusRow, Cycle, EvaluationRow, PDIPlanRow
from perfreview.schemas.consensus import ConsensusNotes, ConsensusRecord
from perfreview.schemas.cycle import EvaluationCycle
from perfreview.schemas.evaluation import CompetencyRating, Evaluation
from perfreview.schemas.pdi import PDIItem, PDIPlan

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _now_iso() -> str:
    return datetime.utcnow().strftime("%Y-%m-%dT%H:%M:%SZ")


def _is_uuid(value: str) -> bool:
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


def _to_cycle(row: Cycle) -> EvaluationCycle:
    return EvaluationCycle(
        id=str(row.cycle_id),
        title=row.title,
        start_date=row.start_date,
        end_date=row.end_date,
        status=row.status,
    )


def _to_evaluation(row: EvaluationRow) -> Evaluation:
    return Evaluation(
        id=str(row.evaluation_id),
        employee_id=row.employee_id,
        cycle_id=str(row.cycle_id),
        evaluator_id=row.evaluator_id,
        evaluation_type=row.evaluation_type,
        status=row.status,
        ratings=tuple(CompetencyRating(**r) for r in row.ratings_json),
        potential_items=tuple(row.potential_json),
        final_score=row.final_score,
        potential_score=row.potential_score,
    )


def _to_consensus(row: ConsensusRow) -> ConsensusRecord:
    return ConsensusRecord(
        id=str(row.consensus_id),
        employee_id=row.employee_id,
        cycle_id=str(row.cycle_id),
        self_evaluation_id=str(row.self_evaluation_id),
        leader_evaluation_id=str(row.leader_evaluation_id),
        consensus_score=row.consensus_score,
        potential_score=row.potential_score,
        nine_box_position=row.nine_box_position,
        notes=ConsensusNotes(**row.notes),
    )


def _to_plan(row: PDIPlanRow) -> PDIPlan:
    return PDIPlan(
        id=str(row.plan_id),
        employee_id=row.employee_id,
        cycle_id=str(row.cycle_id) if row.cycle_id else None,
        items=tuple(PDIItem(**item) for item in row.items_json),
    )


async def get_cycle_row(db: AsyncSession, cycle_id: str) -> Cycle | None:
    result = await db.execute(select(Cycle).where(Cycle.cycle_id == cycle_id))
    return result.scalar_one_or_none()


async def list_cycle_rows(db: AsyncSession) -> list[Cycle]:
    result = await db.execute(select(Cycle).order_by(Cycle.start_date.desc()))
    return list(result.scalars().all())


async def create_cycle_row(db: AsyncSession, cycle: EvaluationCycle) -> Cycle:
    now = _now_iso()
    row = Cycle(
        cycle_id=cycle.id,
        title=cycle.title,
        start_date=cycle.start_date,
        end_date=cycle.end_date,
        status=cycle.status,
        created_at=now,
        updated_at=now,
    )
    db.add(row)
    await db.flush()
    return row


async def get_evaluation_row(
    db: AsyncSession, employee_id: str, cycle_id: str, evaluation_type: str
) -> EvaluationRow | None:
    result = await db.execute(
        select(EvaluationRow).where(
            EvaluationRow.employee_id == employee_id,
            EvaluationRow.cycle_id == cycle_id,
            EvaluationRow.evaluation_type == evaluation_type,
        )
    )
    return result.scalar_one_or_none()


async def get_consensus_row(
    db: AsyncSession, employee_id: str, cycle_id: str
) -> ConsensusRow | None:
    result = await db.execute(
        select(ConsensusRow).where(
            ConsensusRow.employee_id == employee_id,
            ConsensusRow.cycle_id == cycle_id,
        )
    )
    return result.scalar_one_or_none()


async def get_plan_row(db: AsyncSession, employee_id: str) -> PDIPlanRow | None:
    result = await db.execute(select(PDIPlanRow).where(PDIPlanRow.employee_id == employee_id))
    return result.scalar_one_or_none()


class SqlReviewStore:
    """ReviewStore backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession, timeout: float | None = None):
        self.db = db
        self.timeout = timeout if timeout is not None else settings.store_timeout_seconds

    async def _run(self, op: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(op, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Store call timed out after %ss", self.timeout)
            raise TransientError("Persistence call timed out; outcome unknown") from None
        except (OperationalError, InterfaceError) as exc:
            logger.warning("Store connectivity failure: %s", exc)
            raise TransientError("Persistence unavailable; outcome unknown") from exc
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise TransientError("Persistence connection lost; outcome unknown") from exc
            raise

    async def get_cycle(self, cycle_id: str) -> EvaluationCycle | None:
        if not _is_uuid(cycle_id):
            return None
        row = await self._run(get_cycle_row(self.db, cycle_id))
        return _to_cycle(row) if row else None

    async def list_cycles(self) -> list[EvaluationCycle]:
        rows = await self._run(list_cycle_rows(self.db))
        return [_to_cycle(r) for r in rows]

    async def create_cycle(self, cycle: EvaluationCycle) -> EvaluationCycle:
        row = await self._run(create_cycle_row(self.db, cycle))
        return _to_cycle(row)

    async def set_cycle_status(self, cycle_id: str, status: str) -> EvaluationCycle:
        if not _is_uuid(cycle_id):
            raise NotFoundError(f"Cycle {cycle_id} not found")

        async def _update() -> Cycle:
            row = await get_cycle_row(self.db, cycle_id)
            if not row:
                raise NotFoundError(f"Cycle {cycle_id} not found")
            row.status = status
            row.updated_at = _now_iso()
            await self.db.flush()
            return row

        return _to_cycle(await self._run(_update()))

    async def get_evaluation(
        self, employee_id: str, cycle_id: str, evaluation_type: str
    ) -> Evaluation | None:
        if not _is_uuid(cycle_id):
            return None
        row = await self._run(get_evaluation_row(self.db, employee_id, cycle_id, evaluation_type))
        return _to_evaluation(row) if row else None

    async def save_evaluation(self, evaluation: Evaluation) -> Evaluation:
        async def _upsert() -> EvaluationRow:
            row = await get_evaluation_row(
                self.db, evaluation.employee_id, evaluation.cycle_id, evaluation.evaluation_type
            )
            if row is None:
                row = EvaluationRow(
                    evaluation_id=evaluation.id,
                    cycle_id=evaluation.cycle_id,
                    employee_id=evaluation.employee_id,
                    evaluation_type=evaluation.evaluation_type,
                )
                self.db.add(row)
            row.evaluator_id = evaluation.evaluator_id
            row.status = evaluation.status
            row.ratings_json = [r.model_dump() for r in evaluation.ratings]
            row.potential_json = list(evaluation.potential_items)
            row.final_score = evaluation.final_score
            row.potential_score = evaluation.potential_score
            row.updated_at = _now_iso()
            await self.db.flush()
            return row

        return _to_evaluation(await self._run(_upsert()))

    async def consensus_exists(self, employee_id: str, cycle_id: str) -> bool:
        if not _is_uuid(cycle_id):
            return False
        row = await self._run(get_consensus_row(self.db, employee_id, cycle_id))
        return row is not None

    async def get_consensus(self, employee_id: str, cycle_id: str) -> ConsensusRecord | None:
        if not _is_uuid(cycle_id):
            return None
        row = await self._run(get_consensus_row(self.db, employee_id, cycle_id))
        return _to_consensus(row) if row else None

    async def create_consensus(self, record: ConsensusRecord) -> ConsensusRecord:
        async def _insert() -> ConsensusRow:
            row = ConsensusRow(
                consensus_id=str(uuid4()),
                cycle_id=record.cycle_id,
                employee_id=record.employee_id,
                self_evaluation_id=record.self_evaluation_id,
                leader_evaluation_id=record.leader_evaluation_id,
                consensus_score=record.consensus_score,
                potential_score=record.potential_score,
                nine_box_position=record.nine_box_position,
                notes=record.notes.model_dump(),
                created_at=_now_iso(),
            )
            # Savepoint so a unique violation leaves the outer transaction usable
            async with self.db.begin_nested():
                self.db.add(row)
            return row

        try:
            row = await self._run(_insert())
        except IntegrityError as exc:
            raise ConflictError(
                f"A consensus already exists for employee {record.employee_id} "
                f"in cycle {record.cycle_id}"
            ) from exc
        return _to_consensus(row)

    async def get_pdi_plan(self, employee_id: str) -> PDIPlan | None:
        row = await self._run(get_plan_row(self.db, employee_id))
        return _to_plan(row) if row else None

    async def save_pdi_plan(self, plan: PDIPlan) -> PDIPlan:
        async def _upsert() -> PDIPlanRow:
            row = await get_plan_row(self.db, plan.employee_id)
            if row is None:
                row = PDIPlanRow(plan_id=plan.id or str(uuid4()), employee_id=plan.employee_id)
                self.db.add(row)
            row.cycle_id = plan.cycle_id
            row.items_json = [item.model_dump() for item in plan.items]
            row.updated_at = _now_iso()
            await self.db.flush()
            return row

        return _to_plan(await self._run(_upsert()))
