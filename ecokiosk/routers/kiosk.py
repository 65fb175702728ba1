"""
EcoKiosk — Kiosk Router
The input surface. Discrete events in, session snapshot out.

POST /api/kiosk/events   one user event per request
GET  /api/kiosk/state    current snapshot (poll while PROCESSING)
GET  /api/kiosk/materials
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ecokiosk.content.strings import get_strings
from ecokiosk.facts.llm import get_fact_generator
from ecokiosk.fsm.controller import KioskController
from ecokiosk.fsm.transitions import USER_EVENTS, KioskEvent, allowed_events
from ecokiosk.state.session import Language, Material

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/kiosk", tags=["kiosk"])

# One kiosk, one session, one controller per process
_controller: Optional[KioskController] = None


def get_controller() -> KioskController:
    global _controller
    if _controller is None:
        _controller = KioskController(fact_generator=get_fact_generator())
    return _controller


async def shutdown_controller() -> None:
    if _controller is not None:
        await _controller.shutdown()


# ─── Request/Response Models ─────────────────────────────────────────────────

class EventRequest(BaseModel):
    event: KioskEvent
    language: Optional[Language] = None
    material: Optional[Material] = None


class KioskStateResponse(BaseModel):
    session_id: str
    step: str
    language: str
    material: str
    count: int
    points: int
    fact_text: Optional[str] = None
    card_read_pending: bool = False
    allowed_events: list[str]
    labels: dict[str, str]


class EventResponse(BaseModel):
    accepted: bool
    state: KioskStateResponse


class MaterialInfo(BaseModel):
    material: str
    rate: int
    label: str


def build_state(controller: KioskController) -> KioskStateResponse:
    session = controller.session
    return KioskStateResponse(
        session_id=session.session_id,
        step=session.step.value,
        language=session.language.value,
        material=session.material.value,
        count=session.count,
        points=session.points,
        fact_text=session.last_fact,
        card_read_pending=controller.card_read_pending,
        allowed_events=[e.value for e in allowed_events(session.step)],
        labels=get_strings(session.language),
    )


# ─── Endpoints ───────────────────────────────────────────────────────────────

@router.get("/state", response_model=KioskStateResponse)
async def get_state(controller: KioskController = Depends(get_controller)):
    return build_state(controller)


@router.post("/events", response_model=EventResponse)
async def post_event(
    req: EventRequest,
    controller: KioskController = Depends(get_controller),
):
    if req.event not in USER_EVENTS:
        raise HTTPException(status_code=422, detail=f"Event '{req.event.value}' is not a user event")
    if req.event == KioskEvent.SELECT_LANGUAGE and req.language is None:
        raise HTTPException(status_code=422, detail="select_language requires 'language'")
    if req.event == KioskEvent.CHOOSE_MATERIAL and req.material is None:
        raise HTTPException(status_code=422, detail="choose_material requires 'material'")

    accepted = controller.dispatch(req.event, language=req.language, material=req.material)
    if not accepted:
        logger.info(f"Event {req.event.value} not accepted in step {controller.session.step.value}")
    return EventResponse(accepted=accepted, state=build_state(controller))


@router.get("/materials", response_model=list[MaterialInfo])
async def list_materials(controller: KioskController = Depends(get_controller)):
    labels = get_strings(controller.session.language)
    return [
        MaterialInfo(material=m.value, rate=m.rate, label=labels[m.value])
        for m in Material
    ]
