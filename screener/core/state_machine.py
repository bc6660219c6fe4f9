"""
Screening state machine
-----------------------
The question sequence is strictly linear:

    INTRO -> Q1 -> Q2 -> Q3 -> Q4 -> Q5 -> Q6 -> terminal

Each step is described as data (`StepSpec`): the answer field it records, the
options it accepts (numeric shorthand plus keyword synonyms), the step that
follows, and a policy deciding whether the chosen option advances, passes or
fails the applicant. `transition()` is a pure function over
(step, raw input, min weekly hours); persisting and messaging happen elsewhere.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional, Tuple, Union

from screener.store.models import SessionState

# Interaction Surface: greeting / consent to start
INTRO = "INTRO"

# Team role vs marketplace freelancing
Q1 = "Q1"

# Weekly availability (threshold-gated)
Q2 = "Q2"

# Start date (informational)
Q3 = "Q3"

# Stable internet + quiet place
Q4 = "Q4"

# Follows curriculum and SOPs
Q5 = "Q5"

# English level
Q6 = "Q6"

STEP_ORDER = (INTRO, Q1, Q2, Q3, Q4, Q5, Q6)

# Fixed availability tier boundaries (hours/week)
FULL_TIME_MIN_HOURS = 30
PART_TIME_MIN_HOURS = 1

DEFAULT_MIN_WEEKLY_HOURS = 15

ADVANCE = "advance"
FAIL = "fail"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Advance:
    next_step: str
    field: Optional[str] = None
    value: Optional[str] = None


@dataclass(frozen=True)
class Pass:
    field: str
    value: str


@dataclass(frozen=True)
class Fail:
    field: str
    value: str
    reason: str
    # Step whose fail message the contact receives
    fail_key: str


@dataclass(frozen=True)
class Reject:
    step: str


@dataclass(frozen=True)
class Exit:
    pass


Outcome = Union[Advance, Pass, Fail, Reject, Exit]


# ---------------------------------------------------------------------------
# Step table
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Option:
    value: str
    tokens: FrozenSet[str]


@dataclass(frozen=True)
class StepSpec:
    name: str
    field: Optional[str]
    options: Tuple[Option, ...]
    next_step: Optional[str]
    # None for INTRO, which records no answer
    policy: Optional[Callable[[str, int], str]] = None
    fail_reason: str = ""

    def match(self, token: str) -> Optional[str]:
        for option in self.options:
            if token in option.tokens:
                return option.value
        return None


def _opt(value: str, *tokens: str) -> Option:
    return Option(value=value, tokens=frozenset(tokens))


def _always_advance(value: str, min_weekly_hours: int) -> str:
    return ADVANCE


def _yes_advances(value: str, min_weekly_hours: int) -> str:
    return ADVANCE if value == "yes" else FAIL


def _availability_policy(value: str, min_weekly_hours: int) -> str:
    """
    Compare the chosen tier against the configured minimum. Only the two
    fixed boundaries matter: part-time covers 15-29 h, low covers < 15 h.
    """
    if value == "full_time":
        return ADVANCE
    if value == "part_time":
        return FAIL if min_weekly_hours >= FULL_TIME_MIN_HOURS else ADVANCE
    return FAIL if min_weekly_hours >= PART_TIME_MIN_HOURS else ADVANCE


def _english_policy(value: str, min_weekly_hours: int) -> str:
    return FAIL if value == "low" else ADVANCE


STEPS: Dict[str, StepSpec] = {
    INTRO: StepSpec(
        name=INTRO,
        field=None,
        options=(
            _opt("begin", "1", "EMPEZAR", "EMPEZAR 🚀"),
            _opt("exit", "2", "SALIR", "SALIR ❌"),
        ),
        next_step=Q1,
    ),
    Q1: StepSpec(
        name=Q1,
        field="team_role",
        options=(
            _opt("yes", "1", "YES", "SI", "SÍ", "Y"),
            _opt("no", "2", "NO", "N"),
        ),
        next_step=Q2,
        policy=_yes_advances,
        fail_reason="not team role",
    ),
    Q2: StepSpec(
        name=Q2,
        field="weekly_availability",
        options=(
            _opt("full_time", "1", "FT", "FULLTIME", "FULL-TIME"),
            _opt("part_time", "2", "PT", "PARTTIME", "PART-TIME"),
            _opt("low", "3", "LOW", "<15", "LESS", "MENOS"),
        ),
        next_step=Q3,
        policy=_availability_policy,
        fail_reason="low",
    ),
    Q3: StepSpec(
        name=Q3,
        field="start_date",
        options=(
            _opt("now", "1", "NOW", "INMEDIATO", "INMEDIATAMENTE"),
            _opt("soon", "2", "2WEEKS", "SOON", "PRONTO", "1-2"),
            _opt("later", "3", "1MONTH", "LATER", "MAS", "MÁS", "1 MES"),
        ),
        next_step=Q4,
        policy=_always_advance,
    ),
    Q4: StepSpec(
        name=Q4,
        field="setup",
        options=(
            _opt("yes", "1", "YES", "SI", "SÍ"),
            _opt("no", "2", "NO"),
        ),
        next_step=Q5,
        policy=_yes_advances,
        fail_reason="no stable setup",
    ),
    Q5: StepSpec(
        name=Q5,
        field="sop",
        options=(
            _opt("yes", "1", "YES", "SI", "SÍ"),
            _opt("no", "2", "NO"),
        ),
        next_step=Q6,
        policy=_yes_advances,
        fail_reason="not willing to follow SOP",
    ),
    Q6: StepSpec(
        name=Q6,
        field="english_level",
        options=(
            _opt("good", "1", "GOOD", "BUENO", "B1", "B2", "C1", "C2"),
            _opt("ok", "2", "DEFENDERME", "ME DEFIENDO", "BASIC", "BASICO", "BÁSICO"),
            _opt("low", "3", "POCO", "NO MUCHO", "NO SE", "NO", "NADA"),
        ),
        # Last question: advancing means passing
        next_step=None,
        policy=_english_policy,
        fail_reason="english_low",
    ),
}


def resolve_input(raw: Optional[str]) -> str:
    return (raw or "").strip().upper()


def transition(step: str, raw_input: Optional[str], min_weekly_hours: int = DEFAULT_MIN_WEEKLY_HOURS) -> Outcome:
    """
    Decide what an input does at `step`. Never mutates anything.
    Unknown steps and unrecognized input both yield Reject.
    """
    spec = STEPS.get(step)
    if spec is None:
        return Reject(step=step)

    value = spec.match(resolve_input(raw_input))
    if value is None:
        return Reject(step=step)

    if spec.field is None:
        # INTRO carries no answer, only begin/exit
        if value == "exit":
            return Exit()
        return Advance(next_step=spec.next_step)

    if spec.policy(value, int(min_weekly_hours)) == FAIL:
        return Fail(field=spec.field, value=value, reason=spec.fail_reason, fail_key=step)

    if spec.next_step is None:
        return Pass(field=spec.field, value=value)
    return Advance(next_step=spec.next_step, field=spec.field, value=value)


def apply_outcome(session: SessionState, outcome: Outcome) -> bool:
    """
    Record the answer carried by `outcome` and move the step on Advance.
    Answers are append-only: an already-recorded field keeps its value.
    Returns True if the session changed.
    """
    if session.completed:
        return False
    if not isinstance(outcome, (Advance, Pass, Fail)):
        return False

    if outcome.field and outcome.field not in session.answers:
        session.answers[outcome.field] = outcome.value

    if isinstance(outcome, Advance):
        session.step = outcome.next_step
    return True

