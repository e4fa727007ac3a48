# tests/unit/infra/test_redis_session_store.py
"""
Unit tests for RedisSessionStore using fakeredis.

These tests exercise the main flows:
- create + exists
- insert + get (JSON values)
- rotate (attributes carried, old id gone)
- delete
- idle TTL refresh

They use fakeredis.FakeRedis so they run entirely in-memory.
"""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest
from newsletter.infra.redis import RedisSessionStore


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def store(fake_redis):
    """Provide a RedisSessionStore backed by FakeRedis with a 60s idle timeout."""
    return RedisSessionStore(r=fake_redis, idle_timeout=timedelta(seconds=60))


def test_create_returns_a_live_empty_session(store, fake_redis):
    sid = store.create()

    assert store.exists(sid)
    assert store.get(sid, "user_id") is None
    assert 0 < fake_redis.ttl(f"session:{sid}") <= 60


def test_unknown_sessions_do_not_exist(store):
    assert not store.exists("never-issued")
    assert store.get("never-issued", "user_id") is None


def test_insert_then_get_round_trips_json_values(store):
    sid = store.create()

    store.insert(sid, "user_id", "9b2f4c1e-0000-4000-8000-000000000000")
    store.insert(sid, "flags", {"admin": True})

    assert store.get(sid, "user_id") == "9b2f4c1e-0000-4000-8000-000000000000"
    assert store.get(sid, "flags") == {"admin": True}


def test_rotate_moves_attributes_under_a_new_id(store):
    sid = store.create()
    store.insert(sid, "user_id", "abc")

    new_sid = store.rotate(sid)

    assert new_sid != sid
    assert not store.exists(sid)
    assert store.get(new_sid, "user_id") == "abc"


def test_rotating_an_unknown_session_yields_an_empty_one(store):
    new_sid = store.rotate("never-issued")

    assert store.exists(new_sid)
    assert store.get(new_sid, "user_id") is None


def test_delete_destroys_the_session(store):
    sid = store.create()
    store.insert(sid, "user_id", "abc")

    store.delete(sid)

    assert not store.exists(sid)
    assert store.get(sid, "user_id") is None
    store.delete(sid)  # no-op when unknown


def test_access_refreshes_the_idle_ttl(store, fake_redis):
    sid = store.create()
    key = f"session:{sid}"
    fake_redis.expire(key, 5)

    store.get(sid, "user_id")

    assert fake_redis.ttl(key) > 5


def test_expired_sessions_behave_like_unknown_ones(store, fake_redis):
    sid = store.create()
    store.insert(sid, "user_id", "abc")
    fake_redis.delete(f"session:{sid}")  # what the TTL does on expiry

    assert not store.exists(sid)
    assert store.get(sid, "user_id") is None
