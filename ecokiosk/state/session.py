"""
EcoKiosk — Session State Schema

The kiosk has ONE session object. The controller is its only writer.
No ad-hoc variables. This is the single source of truth for session data.

Persistence Rules:
- language: Set ONLY while step is WELCOME. Survives resets (kiosk preference).
- count: Resets to 0 on material choice and on every return to WELCOME.
- last_fact: Set on entering SUCCESS. Cleared on return to WELCOME.
- points: Never stored. Always count * material.rate.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from ecokiosk.config import DEFAULT_LANGUAGE, POINTS_PER_PAPER, POINTS_PER_PLASTIC


class Step(str, Enum):
    """Six steps. No more, no less."""
    WELCOME = "welcome"
    SCAN_CARD = "scan_card"
    SELECT_TYPE = "select_type"
    INSERTING = "inserting"
    PROCESSING = "processing"
    SUCCESS = "success"


class Language(str, Enum):
    AZE = "aze"
    ENG = "eng"
    RU = "ru"


class Material(str, Enum):
    PLASTIC = "plastic"
    PAPER = "paper"

    @property
    def rate(self) -> int:
        """Points awarded per deposited unit."""
        return POINTS_PER_UNIT[self]


POINTS_PER_UNIT = {
    Material.PLASTIC: POINTS_PER_PLASTIC,
    Material.PAPER: POINTS_PER_PAPER,
}


def _new_session_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class KioskSession:
    """
    Complete state of one kiosk interaction.

    The controller reads from it and writes to it through transitions.
    The fact orchestrator never sees it, only a snapshot of its inputs.
    """
    # ─── Identity ────────────────────────────────────────────────────────────
    session_id: str = field(default_factory=_new_session_id)
    started_at: datetime = field(default_factory=datetime.now)

    # ─── FSM ─────────────────────────────────────────────────────────────────
    step: Step = Step.WELCOME
    previous_step: Optional[Step] = None

    # ─── Selections ──────────────────────────────────────────────────────────
    language: Language = field(default_factory=lambda: Language(DEFAULT_LANGUAGE))
    material: Material = Material.PLASTIC
    count: int = 0

    # ─── Result ──────────────────────────────────────────────────────────────
    last_fact: Optional[str] = None

    @property
    def points(self) -> int:
        return self.count * self.material.rate

    def transition_to(self, new_step: Step) -> None:
        """Move to a new step, remembering where we came from."""
        self.previous_step = self.step
        self.step = new_step

    def reset(self) -> None:
        """
        Start a fresh interaction at WELCOME.

        Language and material are kept; count and fact are cleared and the
        session gets a new id so late callbacks can tell it apart.
        """
        self.transition_to(Step.WELCOME)
        self.session_id = _new_session_id()
        self.started_at = datetime.now()
        self.count = 0
        self.last_fact = None

    def to_dict(self) -> dict:
        """Serialize to dictionary for logging and the HTTP snapshot."""
        return {
            "session_id": self.session_id,
            "started_at": self.started_at.isoformat(),
            "step": self.step.value,
            "previous_step": self.previous_step.value if self.previous_step else None,
            "language": self.language.value,
            "material": self.material.value,
            "count": self.count,
            "points": self.points,
            "fact_text": self.last_fact,
        }
