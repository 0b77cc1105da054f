"""Unit tests for SqlReviewStore error mapping, using a stub session."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError

from conftest import run
from perfreview.errors import ConflictError, NotFoundError, TransientError
from perfreview.models import Cycle
from perfreview.schemas.consensus import ConsensusNotes, ConsensusRecord
from perfreview.services.cycles import get_cycle
from perfreview.storage.repositories import SqlReviewStore

CYCLE_ID = str(uuid4())


class StubResult:
    def scalar_one_or_none(self):
        return None


class StubSavepoint:
    def __init__(self, error):
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        # the pending INSERT is flushed when the savepoint closes
        if self.error is not None:
            raise self.error
        return False


class StubSession:
    """Just enough of AsyncSession for the store: execute, add, begin_nested."""

    def __init__(self, execute_error=None, flush_error=None, delay=0):
        self.execute_error = execute_error
        self.flush_error = flush_error
        self.delay = delay
        self.executed = 0
        self.added = []

    async def execute(self, statement):
        self.executed += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.execute_error is not None:
            raise self.execute_error
        return StubResult()

    def add(self, row):
        self.added.append(row)

    def begin_nested(self):
        return StubSavepoint(self.flush_error)


def _record():
    return ConsensusRecord(
        employee_id="emp-1",
        cycle_id=CYCLE_ID,
        self_evaluation_id=str(uuid4()),
        leader_evaluation_id=str(uuid4()),
        consensus_score=3.0,
        potential_score=3.25,
        nine_box_position="B9",
        notes=ConsensusNotes(
            criterion_scores={"comunicacao": 3},
            technical_average=3.0,
            behavioral_average=3.0,
            organizational_average=3.0,
        ),
    )


def test_unique_violation_becomes_conflict():
    error = IntegrityError("INSERT INTO consensus_evaluations", {}, Exception("duplicate key"))
    store = SqlReviewStore(StubSession(flush_error=error))
    with pytest.raises(ConflictError) as exc:
        run(store.create_consensus(_record()))
    assert exc.value.__cause__ is error


def test_consensus_insert_returns_stored_record():
    session = StubSession()
    created = run(SqlReviewStore(session).create_consensus(_record()))
    assert created.id == str(session.added[0].consensus_id)
    assert created.nine_box_position == "B9"


@pytest.mark.parametrize(
    "error",
    [
        OperationalError("SELECT", {}, Exception("connection refused")),
        InterfaceError("SELECT", {}, Exception("connection closed")),
        DBAPIError("SELECT", {}, Exception("server closed"), connection_invalidated=True),
    ],
)
def test_connectivity_failures_are_transient(error):
    store = SqlReviewStore(StubSession(execute_error=error))
    with pytest.raises(TransientError):
        run(store.get_cycle(CYCLE_ID))
    with pytest.raises(TransientError):
        run(store.consensus_exists("emp-1", CYCLE_ID))


def test_failed_consensus_insert_on_lost_connection_is_transient():
    error = OperationalError("INSERT INTO consensus_evaluations", {}, Exception("reset"))
    with pytest.raises(TransientError):
        run(SqlReviewStore(StubSession(flush_error=error)).create_consensus(_record()))


def test_other_database_errors_propagate():
    error = DBAPIError("SELECT", {}, Exception("syntax error"))
    with pytest.raises(DBAPIError):
        run(SqlReviewStore(StubSession(execute_error=error)).get_cycle(CYCLE_ID))


def test_slow_store_times_out():
    store = SqlReviewStore(StubSession(delay=1), timeout=0.01)
    with pytest.raises(TransientError):
        run(store.get_cycle(CYCLE_ID))


def test_malformed_cycle_id_reads_as_missing():
    session = StubSession(execute_error=DBAPIError("SELECT", {}, Exception("invalid uuid")))
    store = SqlReviewStore(session)
    assert run(store.get_cycle("abc")) is None
    assert run(store.get_evaluation("emp-1", "abc", "self")) is None
    assert run(store.consensus_exists("emp-1", "abc")) is False
    assert run(store.get_consensus("emp-1", "abc")) is None
    with pytest.raises(NotFoundError):
        run(store.set_cycle_status("abc", "open"))
    with pytest.raises(NotFoundError):
        run(get_cycle(store, "abc"))
    assert session.executed == 0


def test_cycle_model_carries_migration_checks():
    names = {c.name for c in Cycle.__table__.constraints if c.name}
    assert {"ck_cycles_period", "ck_cycles_status"} <= names
