"""
Outbound WhatsApp text via the Twilio Messages REST API.

Every body is sanitized first. Returns a success flag; HTTP and transport
errors are logged and reported as False so callers can carry on.
"""
from __future__ import annotations

import time

import httpx

from screener.messaging.sanitize import sanitize
from screener.observability.logging import log
from screener.settings import settings


def _messages_url() -> str:
    base = settings.TWILIO_API_BASE.rstrip("/")
    return f"{base}/Accounts/{settings.TWILIO_ACCOUNT_SID}/Messages.json"


def send_text(to: str, body: str) -> bool:
    if not (settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN and settings.TWILIO_WHATSAPP_FROM):
        log(event="twilio_send_skipped_no_credentials", to=to)
        return False

    data = {"To": to, "From": settings.TWILIO_WHATSAPP_FROM, "Body": sanitize(body)}
    start = time.monotonic()
    try:
        with httpx.Client(timeout=settings.SEND_TIMEOUT_SEC) as client:
            resp = client.post(
                _messages_url(),
                data=data,
                auth=(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN),
            )
    except Exception as e:
        log(
            event="twilio_send_exception",
            to=to,
            elapsedMs=int((time.monotonic() - start) * 1000),
            errorType=type(e).__name__,
            error=str(e)[:300],
        )
        return False

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if 200 <= resp.status_code < 300:
        sid = ""
        try:
            data = resp.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            sid = str(data.get("sid") or "")
        log(event="twilio_send_success", to=to, messageSid=sid, elapsedMs=elapsed_ms)
        return True

    log(
        event="twilio_send_failed",
        to=to,
        statusCode=int(resp.status_code),
        elapsedMs=elapsed_ms,
        responseText=(resp.text or "")[:300],
    )
    return False
