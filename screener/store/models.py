from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class SessionState:
    # INTRO/Q1/Q2/Q3/Q4/Q5/Q6
    step: str = "INTRO"

    # field -> recorded option value, e.g. {"team_role": "yes"}
    answers: Dict[str, str] = field(default_factory=dict)

    # ISO-8601 UTC
    startedAt: str = ""
    lastActivityAt: str = ""

    # Set once at the terminal transition; completed sessions ignore input
    completed: bool = False

@dataclass
class RateLimitRecord:
    # Admitted event times (epoch ms), oldest first
    timestamps: List[int] = field(default_factory=list)
