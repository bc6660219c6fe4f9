from typing import Callable, Optional

from screener.callback.client import publish_result
from screener.core import state_machine as sm
from screener.core.finalize import finalize
from screener.core.rate_limit import admit
from screener.messaging import messages
from screener.messaging.sender import send_text
from screener.observability.logging import log
from screener.settings import settings
from screener.store.kv import KVStore, get_store
from screener.store.session_repo import delete_session, load_session, reset_session, save_session

RESET_COMMANDS = ("START", "RESTART")


def is_reset_command(raw_input: Optional[str]) -> bool:
    return sm.resolve_input(raw_input) in RESET_COMMANDS


def handle_inbound(
    identity: str,
    raw_input: Optional[str],
    *,
    source: str = "body",
    store: Optional[KVStore] = None,
    send: Optional[Callable[[str, str], bool]] = None,
    publish: Optional[Callable[[dict], bool]] = None,
    min_weekly_hours: Optional[int] = None,
) -> str:
    """
    Process one inbound message end to end and return a short status label
    (useful for logs and tests). Never raises.
    """
    store = store or get_store()
    send = send or send_text
    publish = publish or publish_result
    if min_weekly_hours is None:
        min_weekly_hours = settings.MIN_WEEKLY_HOURS

    try:
        return _process(identity, raw_input, source, store, send, publish, int(min_weekly_hours))
    except Exception as e:
        log(event="inbound_failed", identity=identity, errorType=type(e).__name__, error=str(e)[:300])
        try:
            send(identity, messages.GENERIC_ERROR_MESSAGE)
        except Exception as send_err:
            log(event="error_notice_send_failed", identity=identity, error=str(send_err)[:200])
        return "error"


def _process(identity, raw_input, source, store, send, publish, min_weekly_hours) -> str:
    text = (raw_input or "").strip()
    log(event="inbound_received", identity=identity, inputSource=source, rawInput=text)

    # START/RESTART is honoured whatever the limiter or the stored state say
    if is_reset_command(text):
        log(event="session_reset", identity=identity, command=sm.resolve_input(text))
        reset_session(identity, store)
        send(identity, messages.QUESTION_TEXT[sm.INTRO])
        return "reset"

    if not admit(identity, store):
        send(identity, messages.RATE_LIMITED_MESSAGE)
        return "rate_limited"

    session = load_session(identity, store)
    if session is None:
        send(identity, messages.NO_SESSION_MESSAGE)
        return "no_session"

    if session.completed:
        log(event="inbound_ignored_completed", identity=identity)
        return "ignored"

    step_before = session.step
    outcome = sm.transition(session.step, text, min_weekly_hours)
    log(
        event="step_evaluated",
        identity=identity,
        stepBefore=step_before,
        outcome=type(outcome).__name__,
    )

    if isinstance(outcome, sm.Reject):
        send(identity, messages.reprompt_for(step_before))
        return "rejected"

    if isinstance(outcome, sm.Exit):
        delete_session(identity, store)
        send(identity, messages.EXIT_MESSAGE)
        return "exited"

    sm.apply_outcome(session, outcome)

    if isinstance(outcome, sm.Advance):
        save_session(identity, session, store)
        send(identity, messages.QUESTION_TEXT[outcome.next_step])
        return "advanced"

    finalize(identity, session, outcome, store=store, send=send, publish=publish)
    return "passed" if isinstance(outcome, sm.Pass) else "failed"
