import time
from datetime import datetime, timezone

def now_ms() -> int:
    return int(time.time() * 1000)

def now_iso() -> str:
    """UTC ISO-8601 with millisecond precision and a trailing 'Z'."""
    dt = datetime.now(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
