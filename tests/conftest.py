"""Shared fixtures: an in-memory ReviewStore and a ready-to-reconcile cycle."""

import asyncio
from datetime import date
from uuid import uuid4

import pytest

from perfreview.engine.templates import DEFAULT_TEMPLATE
from perfreview.errors import ConflictError, NotFoundError, TransientError
from perfreview.schemas.cycle import EvaluationCycle
from perfreview.schemas.evaluation import CompetencyRating, Evaluation

IN_PERIOD = date(2025, 1, 15)


def run(coro):
    return asyncio.run(coro)


class FakeStore:
    """Dict-backed ReviewStore. The consensus map enforces uniqueness like a DB constraint."""

    def __init__(self):
        self.cycles = {}
        self.evaluations = {}
        self.consensus = {}
        self.plans = {}
        self.hide_existing_consensus = False
        self.fail_consensus_insert = False

    async def get_cycle(self, cycle_id):
        return self.cycles.get(cycle_id)

    async def list_cycles(self):
        return list(self.cycles.values())

    async def create_cycle(self, cycle):
        self.cycles[cycle.id] = cycle
        return cycle

    async def set_cycle_status(self, cycle_id, status):
        if cycle_id not in self.cycles:
            raise NotFoundError(cycle_id)
        self.cycles[cycle_id] = self.cycles[cycle_id].model_copy(update={"status": status})
        return self.cycles[cycle_id]

    async def get_evaluation(self, employee_id, cycle_id, evaluation_type):
        return self.evaluations.get((employee_id, cycle_id, evaluation_type))

    async def save_evaluation(self, evaluation):
        key = (evaluation.employee_id, evaluation.cycle_id, evaluation.evaluation_type)
        self.evaluations[key] = evaluation
        return evaluation

    async def consensus_exists(self, employee_id, cycle_id):
        if self.hide_existing_consensus:
            return False
        return (employee_id, cycle_id) in self.consensus

    async def get_consensus(self, employee_id, cycle_id):
        return self.consensus.get((employee_id, cycle_id))

    async def create_consensus(self, record):
        if self.fail_consensus_insert:
            raise TransientError("timed out")
        key = (record.employee_id, record.cycle_id)
        if key in self.consensus:
            raise ConflictError("duplicate consensus")
        stored = record.model_copy(update={"id": str(uuid4())})
        self.consensus[key] = stored
        return stored

    async def get_pdi_plan(self, employee_id):
        return self.plans.get(employee_id)

    async def save_pdi_plan(self, plan):
        if plan.id is None:
            plan = plan.model_copy(update={"id": str(uuid4())})
        self.plans[plan.employee_id] = plan
        return plan


def all_scores(value=3):
    return {c.id: value for c in DEFAULT_TEMPLATE}


def completed_evaluation(evaluation_type, employee_id, cycle_id, value=3, potential_score=None):
    return Evaluation(
        id=str(uuid4()),
        employee_id=employee_id,
        cycle_id=cycle_id,
        evaluator_id=employee_id if evaluation_type == "self" else "leader-1",
        evaluation_type=evaluation_type,
        status="completed",
        ratings=tuple(
            CompetencyRating(criterion=c.id, category=c.category, score=value)
            for c in DEFAULT_TEMPLATE
        ),
        potential_items=(3, 3, 3, 3) if evaluation_type == "leader" else (),
        potential_score=potential_score,
    )


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def open_cycle(store):
    cycle = EvaluationCycle(
        id="cycle-1",
        title="Avaliação 2025",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 31),
        status="open",
    )
    store.cycles[cycle.id] = cycle
    return cycle


@pytest.fixture
def ready_store(store, open_cycle):
    """Open cycle with completed self and leader evaluations for emp-1."""
    for ev in (
        completed_evaluation("self", "emp-1", open_cycle.id, value=2),
        completed_evaluation("leader", "emp-1", open_cycle.id, value=4, potential_score=3.25),
    ):
        store.evaluations[(ev.employee_id, ev.cycle_id, ev.evaluation_type)] = ev
    return store
