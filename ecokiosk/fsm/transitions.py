"""
EcoKiosk — Step × Event Transition Table

Every legal (step, event) pair is listed here. Anything not listed is
illegal and must be a no-op: get_transition() returns None for it.

This is the core of the kiosk flow.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ecokiosk.state.session import Step


class KioskEvent(str, Enum):
    # User events (exposed on the input surface)
    SELECT_LANGUAGE = "select_language"
    START = "start"
    CARD_DETECTED = "card_detected"
    CHOOSE_MATERIAL = "choose_material"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    # Internal events (raised by the controller itself)
    PROCESSING_DONE = "processing_done"
    TIMEOUT = "timeout"


USER_EVENTS = frozenset({
    KioskEvent.SELECT_LANGUAGE,
    KioskEvent.START,
    KioskEvent.CARD_DETECTED,
    KioskEvent.CHOOSE_MATERIAL,
    KioskEvent.INCREMENT,
    KioskEvent.DECREMENT,
    KioskEvent.CONFIRM,
    KioskEvent.CANCEL,
})


@dataclass(frozen=True)
class TransitionResult:
    """
    Result of a transition lookup.

    next_step: Where to go next
    action: What the controller should do on the session
    special: Extra handling flag ("delayed", "guard_count", "dwell", "reset")
    """
    next_step: Step
    action: str
    special: Optional[str] = None


# ─── The Transition Table ────────────────────────────────────────────────────

TRANSITIONS: dict[tuple[Step, KioskEvent], TransitionResult] = {
    # ── WELCOME ──────────────────────────────────────────────────────────────
    (Step.WELCOME, KioskEvent.SELECT_LANGUAGE): TransitionResult(
        next_step=Step.WELCOME,
        action="set_language",
    ),
    (Step.WELCOME, KioskEvent.START): TransitionResult(
        next_step=Step.SCAN_CARD,
        action="start",
    ),

    # ── SCAN_CARD ────────────────────────────────────────────────────────────
    (Step.SCAN_CARD, KioskEvent.CARD_DETECTED): TransitionResult(
        next_step=Step.SELECT_TYPE,
        action="read_card",
        special="delayed",
    ),
    (Step.SCAN_CARD, KioskEvent.CANCEL): TransitionResult(
        next_step=Step.WELCOME,
        action="cancel",
        special="reset",
    ),

    # ── SELECT_TYPE ──────────────────────────────────────────────────────────
    (Step.SELECT_TYPE, KioskEvent.CHOOSE_MATERIAL): TransitionResult(
        next_step=Step.INSERTING,
        action="set_material",
    ),
    (Step.SELECT_TYPE, KioskEvent.CANCEL): TransitionResult(
        next_step=Step.WELCOME,
        action="cancel",
        special="reset",
    ),

    # ── INSERTING ────────────────────────────────────────────────────────────
    (Step.INSERTING, KioskEvent.INCREMENT): TransitionResult(
        next_step=Step.INSERTING,
        action="increment",
    ),
    (Step.INSERTING, KioskEvent.DECREMENT): TransitionResult(
        next_step=Step.INSERTING,
        action="decrement",
    ),
    (Step.INSERTING, KioskEvent.CONFIRM): TransitionResult(
        next_step=Step.PROCESSING,
        action="confirm",
        special="guard_count",
    ),
    (Step.INSERTING, KioskEvent.CANCEL): TransitionResult(
        next_step=Step.WELCOME,
        action="cancel",
        special="reset",
    ),

    # ── PROCESSING (no user events accepted) ─────────────────────────────────
    (Step.PROCESSING, KioskEvent.PROCESSING_DONE): TransitionResult(
        next_step=Step.SUCCESS,
        action="store_fact",
        special="dwell",
    ),

    # ── SUCCESS ──────────────────────────────────────────────────────────────
    (Step.SUCCESS, KioskEvent.TIMEOUT): TransitionResult(
        next_step=Step.WELCOME,
        action="auto_reset",
        special="reset",
    ),
    (Step.SUCCESS, KioskEvent.CANCEL): TransitionResult(
        next_step=Step.WELCOME,
        action="cancel",
        special="reset",
    ),
}


def get_transition(step: Step, event: KioskEvent) -> Optional[TransitionResult]:
    """
    Look up the transition for a step × event pair.

    Accepts enum values or their string codes. Returns None when the
    pair is not a legal transition.
    """
    if isinstance(step, str):
        step = Step(step)
    if isinstance(event, str):
        try:
            event = KioskEvent(event.lower())
        except ValueError:
            return None
    return TRANSITIONS.get((step, event))


def allowed_events(step: Step) -> list[KioskEvent]:
    """User events the UI should offer on this step."""
    return [
        event for (from_step, event) in TRANSITIONS
        if from_step == step and event in USER_EVENTS
    ]
