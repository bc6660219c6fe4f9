from typing import Dict, Literal
from pydantic import BaseModel, Field

InputSource = Literal["payload", "buttonText", "body"]

class InboundMessage(BaseModel):
    # Twilio "From", e.g. "whatsapp:+573001234567"
    identity: str = ""
    text: str = ""
    source: InputSource = "body"

class SessionSnapshot(BaseModel):
    identity: str
    step: str
    answers: Dict[str, str] = Field(default_factory=dict)
    startedAt: str = ""
    lastActivityAt: str = ""
    completed: bool = False
