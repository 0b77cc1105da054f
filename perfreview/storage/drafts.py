"""Advisory draft store for unsubmitted form input, keyed by (cycle, user).

Drafts are never authoritative. They are cleared on successful submission
and discarded on load once older than the configured TTL.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from redis import asyncio as aioredis

from perfreview.config import settings

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def draft_key(cycle_id: str, user_id: str) -> str:
    return f"draft:{cycle_id}:{user_id}"


class DraftStore(Protocol):
    async def save_draft(self, cycle_id: str, user_id: str, payload: dict[str, Any]) -> None: ...

    async def load_draft(self, cycle_id: str, user_id: str) -> dict[str, Any] | None: ...

    async def clear_draft(self, cycle_id: str, user_id: str) -> None: ...


class MemoryDraftStore:
    """In-process draft store."""

    def __init__(self, ttl: timedelta | None = None, clock=_now):
        self.ttl = ttl or timedelta(hours=settings.draft_ttl_hours)
        self._clock = clock
        self._drafts: dict[str, tuple[datetime, dict[str, Any]]] = {}

    async def save_draft(self, cycle_id: str, user_id: str, payload: dict[str, Any]) -> None:
        self._drafts[draft_key(cycle_id, user_id)] = (self._clock(), dict(payload))

    async def load_draft(self, cycle_id: str, user_id: str) -> dict[str, Any] | None:
        key = draft_key(cycle_id, user_id)
        entry = self._drafts.get(key)
        if entry is None:
            return None
        saved_at, payload = entry
        if self._clock() - saved_at > self.ttl:
            logger.info("Discarding stale draft %s saved at %s", key, saved_at.isoformat())
            del self._drafts[key]
            return None
        return dict(payload)

    async def clear_draft(self, cycle_id: str, user_id: str) -> None:
        self._drafts.pop(draft_key(cycle_id, user_id), None)


class RedisDraftStore:
    """Draft store on an asyncio Redis client. Entries also expire server-side after the TTL."""

    def __init__(self, client, ttl: timedelta | None = None, clock=_now):
        self.client = client
        self.ttl = ttl or timedelta(hours=settings.draft_ttl_hours)
        self._clock = clock

    async def save_draft(self, cycle_id: str, user_id: str, payload: dict[str, Any]) -> None:
        entry = {"saved_at": self._clock().isoformat(), "payload": payload}
        await self.client.setex(
            draft_key(cycle_id, user_id),
            int(self.ttl.total_seconds()),
            json.dumps(entry, default=str),
        )

    async def load_draft(self, cycle_id: str, user_id: str) -> dict[str, Any] | None:
        key = draft_key(cycle_id, user_id)
        raw = await self.client.get(key)
        if raw is None:
            return None
        entry = json.loads(raw)
        saved_at = datetime.fromisoformat(entry["saved_at"])
        if self._clock() - saved_at > self.ttl:
            logger.info("Discarding stale draft %s saved at %s", key, entry["saved_at"])
            await self.client.delete(key)
            return None
        return entry["payload"]

    async def clear_draft(self, cycle_id: str, user_id: str) -> None:
        await self.client.delete(draft_key(cycle_id, user_id))


def build_draft_store() -> DraftStore:
    """Redis when REDIS_URL is configured, memory otherwise."""
    if settings.redis_url:
        return RedisDraftStore(aioredis.Redis.from_url(settings.redis_url))
    return MemoryDraftStore()
