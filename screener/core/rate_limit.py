"""
Sliding-window admission control per contact.

The record lives under `ratelimit:<identity>` with a short TTL of its own.
Reads and writes are not transactional, so two deliveries landing at the same
moment can both see the same count and both be admitted.
"""
import json
from dataclasses import asdict
from typing import Optional

from screener.observability.logging import log
from screener.settings import settings
from screener.store.kv import KVStore, get_store, safe_get, safe_put
from screener.store.models import RateLimitRecord
from screener.utils.time import now_ms as _now_ms

PREFIX = "ratelimit:"


def _key(identity: str) -> str:
    return f"{PREFIX}{identity}"


def _load_record(raw: Optional[str]) -> RateLimitRecord:
    if not raw:
        return RateLimitRecord()
    try:
        data = json.loads(raw)
        stamps = data.get("timestamps") if isinstance(data, dict) else None
        if not isinstance(stamps, list):
            return RateLimitRecord()
        return RateLimitRecord(timestamps=[int(ts) for ts in stamps])
    except (TypeError, ValueError):
        return RateLimitRecord()


def admit(identity: str, store: Optional[KVStore] = None, now_ms: Optional[int] = None) -> bool:
    """
    Returns True and records the event when fewer than RATE_LIMIT_MAX events
    were admitted in the last RATE_LIMIT_WINDOW_MS. Rejected events are not
    recorded, so a burst never extends its own penalty.
    """
    store = store or get_store()
    now = int(now_ms if now_ms is not None else _now_ms())
    window_start = now - int(settings.RATE_LIMIT_WINDOW_MS)

    record = _load_record(safe_get(store, _key(identity)))
    record.timestamps = [ts for ts in record.timestamps if ts > window_start]

    if len(record.timestamps) >= int(settings.RATE_LIMIT_MAX):
        log(event="rate_limited", identity=identity, inWindow=len(record.timestamps))
        return False

    record.timestamps.append(now)
    safe_put(store, _key(identity), json.dumps(asdict(record)), ttl_sec=settings.RATE_LIMIT_TTL_SECONDS)
    return True
