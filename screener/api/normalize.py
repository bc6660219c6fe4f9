from typing import Any, Mapping

from screener.api.schemas import InboundMessage


def _field(form: Mapping[str, Any], name: str) -> str:
    v = form.get(name)
    if v is None:
        return ""
    return str(v).strip()


def normalize_twilio_form(form: Mapping[str, Any]) -> InboundMessage:
    """
    Twilio posts quick-reply taps as ButtonPayload/ButtonText alongside Body.
    Priority: ButtonPayload > ButtonText > Body.
    """
    payload = _field(form, "ButtonPayload")
    button_text = _field(form, "ButtonText")
    body = _field(form, "Body")

    if payload:
        text, source = payload, "payload"
    elif button_text:
        text, source = button_text, "buttonText"
    else:
        text, source = body, "body"

    return InboundMessage(identity=_field(form, "From"), text=text, source=source)
