import time

import httpx

from screener.observability.logging import log
from screener.settings import settings


def publish_result(payload: dict) -> bool:
    """
    POST the screening result to RESULT_WEBHOOK_URL. One attempt, no retry.
    Returns True on 2xx; every other outcome is logged and returns False.
    """
    if not settings.RESULT_WEBHOOK_URL:
        log(event="result_publish_skipped_no_url", whatsapp_from=payload.get("whatsapp_from", ""))
        return False

    start = time.time()
    try:
        with httpx.Client(timeout=settings.CALLBACK_TIMEOUT_SEC) as client:
            resp = client.post(settings.RESULT_WEBHOOK_URL, json=payload)
    except Exception as e:
        log(
            event="result_publish_exception",
            whatsapp_from=payload.get("whatsapp_from", ""),
            elapsedMs=int((time.time() - start) * 1000),
            errorType=type(e).__name__,
            error=str(e)[:500],
        )
        return False

    elapsed_ms = int((time.time() - start) * 1000)
    if 200 <= resp.status_code < 300:
        log(
            event="result_publish_success",
            whatsapp_from=payload.get("whatsapp_from", ""),
            result=payload.get("result", ""),
            statusCode=int(resp.status_code),
            elapsedMs=elapsed_ms,
        )
        return True

    log(
        event="result_publish_failed",
        whatsapp_from=payload.get("whatsapp_from", ""),
        statusCode=int(resp.status_code),
        elapsedMs=elapsed_ms,
        responseText=(resp.text or "")[:500],
    )
    return False
