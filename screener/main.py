from fastapi import FastAPI
from fastapi import Request
from screener.api.routes import router, twiml_ack
from screener.api.admin_routes import router as admin_router
from screener.observability.logging import log
from screener.settings import settings

app = FastAPI(title="Screening Bot")

app.include_router(router)
app.include_router(admin_router)


# Twilio retries (and eventually disables) webhooks that answer non-2xx,
# so even an unexpected failure is acknowledged with empty TwiML.
@app.exception_handler(Exception)
async def universal_exception_handler(request: Request, exc: Exception):
    log(event="unhandled_error", path=request.url.path, errorType=type(exc).__name__, error=str(exc)[:300])
    return twiml_ack()


log(
    event="boot",
    storeBackend=settings.STORE_BACKEND,
    minWeeklyHours=settings.MIN_WEEKLY_HOURS,
    resultWebhook=bool(settings.RESULT_WEBHOOK_URL),
)
