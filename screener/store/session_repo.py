import inspect
import json
from dataclasses import asdict
from typing import Optional

from screener.core.state_machine import STEP_ORDER, INTRO
from screener.observability.logging import log
from screener.settings import settings
from screener.store.kv import KVStore, get_store, safe_delete, safe_get, safe_put
from screener.store.models import SessionState
from screener.utils.time import now_iso

PREFIX = "session:"


def _key(identity: str) -> str:
    return f"{PREFIX}{identity}"


def _filter_session_kwargs(data: dict) -> dict:
    """
    Drop unknown fields so SessionState(**kwargs) never explodes
    """
    sig = inspect.signature(SessionState)
    allowed = set(sig.parameters.keys())
    return {k: v for k, v in data.items() if k in allowed}


def _parse_session(raw: str) -> Optional[SessionState]:
    """
    Decode a stored session. Anything that does not look like a session we
    wrote ourselves yields None, which callers treat as "no session".
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    data = _filter_session_kwargs(data)
    if data.get("step") not in STEP_ORDER:
        return None

    answers = data.get("answers", {})
    if not isinstance(answers, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in answers.items()
    ):
        return None

    completed = data.get("completed", False)
    if not isinstance(completed, bool):
        return None

    return SessionState(
        step=data["step"],
        answers=dict(answers),
        startedAt=str(data.get("startedAt") or ""),
        lastActivityAt=str(data.get("lastActivityAt") or ""),
        completed=completed,
    )


def create_session() -> SessionState:
    now = now_iso()
    return SessionState(step=INTRO, answers={}, startedAt=now, lastActivityAt=now)


def load_session(identity: str, store: Optional[KVStore] = None) -> Optional[SessionState]:
    store = store or get_store()
    raw = safe_get(store, _key(identity))
    if not raw:
        return None

    session = _parse_session(raw)
    if session is None:
        log(event="session_malformed", identity=identity, size=len(raw))
    return session


def save_session(identity: str, session: SessionState, store: Optional[KVStore] = None) -> None:
    store = store or get_store()
    session.lastActivityAt = now_iso()
    safe_put(
        store,
        _key(identity),
        json.dumps(asdict(session), ensure_ascii=False),
        ttl_sec=settings.SESSION_TTL_SECONDS,
    )


def delete_session(identity: str, store: Optional[KVStore] = None) -> None:
    store = store or get_store()
    safe_delete(store, _key(identity))


def reset_session(identity: str, store: Optional[KVStore] = None) -> SessionState:
    """START/RESTART: discard whatever exists and begin again at INTRO."""
    store = store or get_store()
    delete_session(identity, store)
    session = create_session()
    save_session(identity, session, store)
    return session
