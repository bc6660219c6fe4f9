"""
Terminal-state dispatch.

Order matters: the session is marked completed and persisted first, so any
re-delivered or late message finds `completed=True` and is ignored. Only then
do the two side effects run, concurrently and independently:

  - publish the result payload to the external sink
  - send the pass/fail message to the contact

Neither is retried and a failure in one never affects the other.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Optional, Union

from screener.callback.client import publish_result
from screener.core.state_machine import Fail, Pass
from screener.messaging.messages import fail_message, pass_message
from screener.messaging.sender import send_text
from screener.observability.logging import log
from screener.settings import settings
from screener.store.kv import KVStore, get_store
from screener.store.models import SessionState
from screener.store.session_repo import save_session
from screener.utils.time import now_iso

SendFn = Callable[[str, str], bool]
PublishFn = Callable[[dict], bool]


def build_result_payload(identity: str, session: SessionState, outcome: Union[Pass, Fail]) -> dict:
    is_pass = isinstance(outcome, Pass)
    return {
        "whatsapp_from": identity,
        "result": "pass" if is_pass else "fail",
        "reason": "" if is_pass else outcome.reason,
        "answers": dict(session.answers),
        "completed_at": now_iso(),
    }


def terminal_message(outcome: Union[Pass, Fail]) -> str:
    if isinstance(outcome, Pass):
        return pass_message(settings.HANDOFF_LINK)
    return fail_message(outcome.fail_key)


def _best_effort(failure_event: str, identity: str, fn: Callable, *args) -> bool:
    try:
        return bool(fn(*args))
    except Exception as e:
        log(event=failure_event, identity=identity, errorType=type(e).__name__, error=str(e)[:300])
        return False


def finalize(
    identity: str,
    session: SessionState,
    outcome: Union[Pass, Fail],
    *,
    store: Optional[KVStore] = None,
    send: Optional[SendFn] = None,
    publish: Optional[PublishFn] = None,
) -> bool:
    """
    Returns False (and does nothing) when the session was already completed.
    """
    if session.completed:
        log(event="finalize_skipped_completed", identity=identity)
        return False

    store = store or get_store()
    send = send or send_text
    publish = publish or publish_result

    session.completed = True
    save_session(identity, session, store)

    payload = build_result_payload(identity, session, outcome)
    message = terminal_message(outcome)

    pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="finalize")
    try:
        publish_f = pool.submit(_best_effort, "result_publish_failed", identity, publish, payload)
        send_f = pool.submit(_best_effort, "terminal_send_failed", identity, send, identity, message)
        _, pending = wait([publish_f, send_f], timeout=settings.FINALIZE_WAIT_SEC)
    finally:
        pool.shutdown(wait=False)

    log(
        event="session_finalized",
        identity=identity,
        result=payload["result"],
        reason=payload["reason"],
        publishOk=publish_f.done() and publish_f.result(),
        sendOk=send_f.done() and send_f.result(),
        pending=len(pending),
    )
    return True
