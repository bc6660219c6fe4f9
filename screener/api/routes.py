from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import PlainTextResponse, Response

from screener.api.normalize import normalize_twilio_form
from screener.core.orchestrator import handle_inbound
from screener.observability.logging import log

router = APIRouter()

TWIML_EMPTY = '<?xml version="1.0" encoding="UTF-8"?>\n<Response/>'


def twiml_ack() -> Response:
    # Replies go out through the REST API, so Twilio only needs an empty TwiML document
    return Response(content=TWIML_EMPTY, media_type="text/xml")


@router.post("/whatsapp")
async def whatsapp_webhook(request: Request, background_tasks: BackgroundTasks):
    form = await request.form()
    inbound = normalize_twilio_form(form)

    if not inbound.identity:
        log(event="webhook_missing_from")
        return twiml_ack()

    # Runs after the ack is sent; sync handler goes to the threadpool
    background_tasks.add_task(handle_inbound, inbound.identity, inbound.text, source=inbound.source)
    return twiml_ack()


@router.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"
