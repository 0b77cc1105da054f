"""Cycle lifecycle rules: draft -> open -> closed, with no way back."""

from collections.abc import Iterable
from datetime import date, datetime

from perfreview.errors import ConflictError, ValidationError
from perfreview.schemas.cycle import EvaluationCycle

TRANSITIONS = {
    "open": "draft",
    "closed": "open",
}


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def validate_new_cycle(title: str, start: date, end: date) -> None:
    missing = []
    if not title or not title.strip():
        missing.append("title")
    if start is None:
        missing.append("start_date")
    if end is None:
        missing.append("end_date")
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)
    if start >= end:
        raise ValidationError("start_date must be before end_date", fields=["start_date", "end_date"])


def check_transition(cycle: EvaluationCycle, target: str) -> None:
    """Raise ConflictError unless ``cycle`` may move to ``target``."""
    required = TRANSITIONS.get(target)
    if required is None:
        raise ConflictError(f"No transition leads to status '{target}'")
    if cycle.status != required:
        raise ConflictError(
            f"Cycle {cycle.id} is '{cycle.status}'; it must be '{required}' to become '{target}'"
        )


def is_within_period(cycle: EvaluationCycle, now: date | datetime) -> bool:
    """start_date <= now <= end_date, compared by calendar day."""
    return cycle.start_date <= _as_date(now) <= cycle.end_date


def ensure_writable(cycle: EvaluationCycle, now: date | datetime) -> None:
    """Writes need the cycle open AND inside its period."""
    if cycle.status != "open":
        raise ConflictError(f"Cycle {cycle.id} is not open (status '{cycle.status}')")
    if not is_within_period(cycle, now):
        raise ConflictError(
            f"Cycle {cycle.id} is open but {_as_date(now).isoformat()} is outside "
            f"{cycle.start_date.isoformat()}..{cycle.end_date.isoformat()}"
        )


def current_cycle(cycles: Iterable[EvaluationCycle], now: date | datetime) -> EvaluationCycle | None:
    """Most recently started open cycle whose period contains ``now``."""
    candidates = [c for c in cycles if c.status == "open" and is_within_period(c, now)]
    if not candidates:
        return None
    return max(candidates, key=lambda c: c.start_date)
