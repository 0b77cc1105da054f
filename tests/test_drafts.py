"""Unit tests for the advisory draft stores."""

import json
from datetime import datetime, timedelta, timezone

from redis import asyncio as aioredis

from conftest import run
from perfreview.config import settings
from perfreview.storage.drafts import MemoryDraftStore, RedisDraftStore, build_draft_store


class Clock:
    def __init__(self):
        self.now = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.ttls = {}

    async def setex(self, key, seconds, value):
        self.data[key] = value
        self.ttls[key] = seconds

    async def get(self, key):
        return self.data.get(key)

    async def delete(self, key):
        self.data.pop(key, None)


def test_memory_round_trip_and_clear():
    drafts = MemoryDraftStore(ttl=timedelta(hours=24), clock=Clock())
    run(drafts.save_draft("c1", "u1", {"comunicacao": 3}))
    assert run(drafts.load_draft("c1", "u1")) == {"comunicacao": 3}
    assert run(drafts.load_draft("c1", "u2")) is None
    run(drafts.clear_draft("c1", "u1"))
    assert run(drafts.load_draft("c1", "u1")) is None


def test_memory_discards_stale_draft():
    clock = Clock()
    drafts = MemoryDraftStore(ttl=timedelta(hours=24), clock=clock)
    run(drafts.save_draft("c1", "u1", {"comunicacao": 3}))
    clock.now += timedelta(hours=23)
    assert run(drafts.load_draft("c1", "u1")) is not None
    clock.now += timedelta(hours=2)
    assert run(drafts.load_draft("c1", "u1")) is None


def test_redis_store_sets_ttl_and_discards_stale():
    clock = Clock()
    client = FakeRedis()
    drafts = RedisDraftStore(client, ttl=timedelta(hours=24), clock=clock)
    run(drafts.save_draft("c1", "u1", {"comunicacao": 3}))
    assert client.ttls["draft:c1:u1"] == 24 * 3600
    assert json.loads(client.data["draft:c1:u1"])["payload"] == {"comunicacao": 3}
    assert run(drafts.load_draft("c1", "u1")) == {"comunicacao": 3}

    clock.now += timedelta(hours=25)
    assert run(drafts.load_draft("c1", "u1")) is None
    assert "draft:c1:u1" not in client.data


def test_build_uses_asyncio_redis_client(monkeypatch):
    monkeypatch.setattr(settings, "redis_url", "redis://localhost:6379/0")
    drafts = build_draft_store()
    assert isinstance(drafts, RedisDraftStore)
    assert isinstance(drafts.client, aioredis.Redis)


def test_build_falls_back_to_memory(monkeypatch):
    monkeypatch.setattr(settings, "redis_url", None)
    assert isinstance(build_draft_store(), MemoryDraftStore)
