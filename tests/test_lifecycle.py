"""Unit tests for cycle lifecycle rules and services."""

from datetime import date, datetime

import pytest

from conftest import IN_PERIOD, run
from perfreview.engine.lifecycle import current_cycle, ensure_writable, is_within_period
from perfreview.errors import ConflictError, NotFoundError, ValidationError
from perfreview.schemas.cycle import EvaluationCycle
from perfreview.services.cycles import (
    close_cycle,
    create_cycle,
    get_current_cycle,
    get_writable_cycle,
    open_cycle,
)


def _cycle(status="open", start=date(2025, 1, 1), end=date(2025, 1, 31), id="c1"):
    return EvaluationCycle(id=id, title="T", start_date=start, end_date=end, status=status)


def test_is_within_period():
    cycle = _cycle()
    assert is_within_period(cycle, date(2025, 1, 15)) is True
    assert is_within_period(cycle, date(2025, 2, 1)) is False
    assert is_within_period(cycle, date(2025, 1, 1)) is True
    assert is_within_period(cycle, datetime(2025, 1, 31, 23, 59)) is True


def test_open_cycle_outside_period_is_not_writable():
    with pytest.raises(ConflictError):
        ensure_writable(_cycle(), date(2025, 2, 1))
    with pytest.raises(ConflictError):
        ensure_writable(_cycle(status="draft"), IN_PERIOD)
    ensure_writable(_cycle(), IN_PERIOD)


def test_current_cycle_picks_latest_open_in_period():
    older = _cycle(id="old", start=date(2024, 12, 1), end=date(2025, 2, 28))
    newer = _cycle(id="new", start=date(2025, 1, 10), end=date(2025, 3, 31))
    closed = _cycle(id="closed", status="closed", start=date(2025, 1, 12))
    assert current_cycle([older, newer, closed], IN_PERIOD).id == "new"
    assert current_cycle([closed], IN_PERIOD) is None


def test_create_cycle_starts_as_draft(store):
    cycle = run(create_cycle(store, "Avaliação 2025", date(2025, 1, 1), date(2025, 6, 30)))
    assert cycle.status == "draft"
    assert store.cycles[cycle.id] == cycle


def test_create_cycle_validation(store):
    with pytest.raises(ValidationError) as exc:
        run(create_cycle(store, "", date(2025, 1, 1), date(2025, 6, 30)))
    assert exc.value.fields == ["title"]
    with pytest.raises(ValidationError):
        run(create_cycle(store, "T", date(2025, 1, 1), date(2025, 1, 1)))
    assert store.cycles == {}


def test_full_lifecycle_is_one_way(store):
    cycle = run(create_cycle(store, "T", date(2025, 1, 1), date(2025, 1, 31)))
    with pytest.raises(ConflictError):
        run(close_cycle(store, cycle.id))
    assert run(open_cycle(store, cycle.id)).status == "open"
    with pytest.raises(ConflictError):
        run(open_cycle(store, cycle.id))
    assert run(close_cycle(store, cycle.id)).status == "closed"
    with pytest.raises(ConflictError):
        run(open_cycle(store, cycle.id))
    with pytest.raises(ConflictError):
        run(close_cycle(store, cycle.id))
    assert store.cycles[cycle.id].status == "closed"


def test_unknown_cycle(store):
    with pytest.raises(NotFoundError):
        run(open_cycle(store, "missing"))
    with pytest.raises(NotFoundError):
        run(get_writable_cycle(store, "missing", IN_PERIOD))


def test_current_cycle_service(store, open_cycle):
    assert run(get_current_cycle(store, IN_PERIOD)) == open_cycle
    with pytest.raises(NotFoundError):
        run(get_current_cycle(store, date(2025, 2, 1)))
