import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    REDIS_SOCKET_TIMEOUT_SEC: float = float(os.getenv("REDIS_SOCKET_TIMEOUT_SEC", "2.0"))
    # "redis" in deployments; "memory" keeps everything in-process (local runs only)
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "redis").lower()

    # Twilio WhatsApp sender, e.g. "whatsapp:+57xxxxxxxxxx"
    TWILIO_ACCOUNT_SID: str = os.getenv("TWILIO_ACCOUNT_SID", "")
    TWILIO_AUTH_TOKEN: str = os.getenv("TWILIO_AUTH_TOKEN", "")
    TWILIO_WHATSAPP_FROM: str = os.getenv("TWILIO_WHATSAPP_FROM", "")
    TWILIO_API_BASE: str = os.getenv("TWILIO_API_BASE", "https://api.twilio.com/2010-04-01")
    SEND_TIMEOUT_SEC: float = float(os.getenv("SEND_TIMEOUT_SEC", "5"))

    # Result sink (e.g. a Make.com scenario). Empty disables publishing.
    RESULT_WEBHOOK_URL: str = os.getenv("RESULT_WEBHOOK_URL", "")
    CALLBACK_TIMEOUT_SEC: float = float(os.getenv("CALLBACK_TIMEOUT_SEC", "5"))

    HANDOFF_LINK: str = os.getenv("HANDOFF_LINK", "https://wa.me/57xxxxxxxxxx")

    # Q2 gate: part-time fails above 29, low fails at 1 or more
    MIN_WEEKLY_HOURS: int = _int_env("MIN_WEEKLY_HOURS", 15)

    SESSION_TTL_SECONDS: int = _int_env("SESSION_TTL_SECONDS", 604800)  # 7 days
    RATE_LIMIT_WINDOW_MS: int = _int_env("RATE_LIMIT_WINDOW_MS", 10000)
    RATE_LIMIT_MAX: int = _int_env("RATE_LIMIT_MAX", 5)
    RATE_LIMIT_TTL_SECONDS: int = _int_env("RATE_LIMIT_TTL_SECONDS", 60)

    # Upper bound on waiting for publish + terminal send during finalize
    FINALIZE_WAIT_SEC: float = float(os.getenv("FINALIZE_WAIT_SEC", "8.0"))

    ENABLE_PII_REDACTION: bool = os.getenv("ENABLE_PII_REDACTION", "true").lower() == "true"
    ADMIN_API_KEY: str = os.getenv("ADMIN_API_KEY", "")

settings = Settings()
