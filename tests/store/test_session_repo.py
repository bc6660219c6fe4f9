import json
import pytest
from unittest.mock import patch
from screener.settings import settings
from screener.store.kv import MemoryKV
from screener.store.models import SessionState
from screener.store.session_repo import (
    create_session,
    delete_session,
    load_session,
    reset_session,
    save_session,
)


class FakeClock:
    def __init__(self, t=1000.0):
        self.t = t

    def __call__(self):
        return self.t


@pytest.fixture
def store():
    return MemoryKV()


def test_create_session_starts_at_intro():
    s = create_session()
    assert s.step == "INTRO"
    assert s.answers == {}
    assert s.completed is False
    assert s.startedAt and s.startedAt == s.lastActivityAt
    assert s.startedAt.endswith("Z")


def test_save_and_load_round_trip(store):
    s = create_session()
    s.step = "Q3"
    s.answers = {"team_role": "yes", "weekly_availability": "part_time"}
    save_session("whatsapp:+1", s, store)

    loaded = load_session("whatsapp:+1", store)
    assert loaded == s
    raw = json.loads(store.get("session:whatsapp:+1"))
    assert raw["step"] == "Q3"


def test_save_stamps_last_activity(store):
    s = SessionState(step="Q1", startedAt="2020-01-01T00:00:00.000Z", lastActivityAt="2020-01-01T00:00:00.000Z")
    save_session("id", s, store)
    assert s.lastActivityAt != "2020-01-01T00:00:00.000Z"
    assert s.startedAt == "2020-01-01T00:00:00.000Z"


def test_session_expires_after_seven_days():
    clock = FakeClock()
    store = MemoryKV(clock=clock)
    save_session("id", create_session(), store)
    assert store.ttl("session:id") == settings.SESSION_TTL_SECONDS == 604800

    clock.t += 604800 - 1
    assert load_session("id", store) is not None
    clock.t += 1
    assert load_session("id", store) is None


def test_missing_session_is_none(store):
    assert load_session("nobody", store) is None


@pytest.mark.parametrize("raw", [
    "not json{",
    "[1, 2, 3]",
    '"just a string"',
    '{"step": "Q9", "answers": {}}',
    '{"answers": {}}',
    '{"step": "Q1", "answers": ["yes"]}',
    '{"step": "Q1", "answers": {"team_role": 1}}',
    '{"step": "Q1", "answers": {}, "completed": "yes"}',
])
@patch("screener.store.session_repo.log")
def test_malformed_session_is_treated_as_absent(mock_log, store, raw):
    store.put("session:bad", raw)
    assert load_session("bad", store) is None
    assert mock_log.call_args.kwargs["event"] == "session_malformed"


def test_unknown_fields_are_ignored(store):
    store.put("session:x", json.dumps({"step": "Q2", "answers": {"team_role": "yes"}, "legacy": 1}))
    s = load_session("x", store)
    assert s.step == "Q2"
    assert s.answers == {"team_role": "yes"}


def test_delete_session(store):
    save_session("id", create_session(), store)
    delete_session("id", store)
    assert load_session("id", store) is None


def test_reset_session_discards_progress(store):
    s = SessionState(step="Q5", answers={"team_role": "yes"}, completed=True)
    save_session("id", s, store)

    fresh = reset_session("id", store)
    assert fresh.step == "INTRO"
    loaded = load_session("id", store)
    assert loaded.step == "INTRO"
    assert loaded.answers == {}
    assert loaded.completed is False
