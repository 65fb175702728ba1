"""
EcoKiosk — FSM Package

Step × event transition table and the controller that owns the session.
"""
from ecokiosk.fsm.transitions import TRANSITIONS, KioskEvent, TransitionResult, get_transition
from ecokiosk.fsm.controller import KioskController

__all__ = ["TRANSITIONS", "KioskEvent", "TransitionResult", "get_transition", "KioskController"]
