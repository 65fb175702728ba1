"""
EcoKiosk — Kiosk Controller

The single owner of the session. Every mutation goes through the
transition table; anything the table does not list is a no-op that
returns False.

Timers (card read delay, success dwell) share ONE active handle. It is
cancelled on every applied transition, so a timer armed for an older
session can never fire against a newer one.
"""

import asyncio
import logging
from typing import Callable, Optional

from ecokiosk.config import CARD_READ_DELAY_SECONDS, SUCCESS_DWELL_SECONDS
from ecokiosk.facts.llm import FactGenerator
from ecokiosk.facts.orchestrator import FactOrchestrator, SuccessResult
from ecokiosk.fsm.transitions import KioskEvent, TransitionResult, get_transition
from ecokiosk.state.session import KioskSession, Language, Material, Step

logger = logging.getLogger("ecokiosk.fsm.controller")

StepListener = Callable[[KioskSession], None]


class KioskController:
    def __init__(
        self,
        fact_generator: Optional[FactGenerator] = None,
        orchestrator: Optional[FactOrchestrator] = None,
        card_read_delay: float = CARD_READ_DELAY_SECONDS,
        success_dwell: float = SUCCESS_DWELL_SECONDS,
        session: Optional[KioskSession] = None,
    ):
        self.session = session or KioskSession()
        self.orchestrator = orchestrator or FactOrchestrator(fact_generator)
        self.card_read_delay = card_read_delay
        self.success_dwell = success_dwell
        self.last_result: Optional[SuccessResult] = None

        self._timer: Optional[asyncio.TimerHandle] = None
        self._card_read_pending = False
        self._processing_task: Optional[asyncio.Task] = None
        self._listeners: list[StepListener] = []

    # ─── Observers ───────────────────────────────────────────────────────────

    def add_listener(self, listener: StepListener) -> None:
        """Call listener(session) after every step change."""
        self._listeners.append(listener)

    @property
    def card_read_pending(self) -> bool:
        return self._card_read_pending

    @property
    def timer_active(self) -> bool:
        return self._timer is not None

    # ─── User Events ─────────────────────────────────────────────────────────

    def select_language(self, language: Language) -> bool:
        result = self._lookup(KioskEvent.SELECT_LANGUAGE)
        if result is None:
            return False
        self.session.language = Language(language)
        logger.info(f"[{self.session.session_id}] language={self.session.language.value}")
        return True

    def start(self) -> bool:
        result = self._lookup(KioskEvent.START)
        if result is None:
            return False
        self._move(result)
        return True

    def card_detected(self) -> bool:
        """
        Simulated card tap. The move to SELECT_TYPE is applied after
        card_read_delay. Needs a running event loop.
        """
        result = self._lookup(KioskEvent.CARD_DETECTED)
        if result is None:
            return False
        if result.special != "delayed":
            self._move(result)
            return True
        if self._card_read_pending:
            logger.debug(f"[{self.session.session_id}] card read already pending")
            return False
        self._schedule(self.card_read_delay, self._on_card_read, self.session.session_id, result)
        # set after _schedule, which clears it along with any older timer
        self._card_read_pending = True
        return True

    def choose_material(self, material: Material) -> bool:
        result = self._lookup(KioskEvent.CHOOSE_MATERIAL)
        if result is None:
            return False
        self.session.material = Material(material)
        self.session.count = 0
        self._move(result)
        return True

    def increment(self) -> bool:
        if self._lookup(KioskEvent.INCREMENT) is None:
            return False
        self.session.count += 1
        return True

    def decrement(self) -> bool:
        if self._lookup(KioskEvent.DECREMENT) is None:
            return False
        self.session.count = max(0, self.session.count - 1)
        return True

    async def confirm(self) -> Optional[SuccessResult]:
        """
        Move to PROCESSING and wait for the orchestrator, then SUCCESS.

        Returns None when confirm was not accepted (wrong step or count 0).
        """
        if not self._begin_processing():
            return None
        return await self._finish_processing()

    def request_confirm(self) -> bool:
        """Start confirm in the background; callers poll the session."""
        if not self._begin_processing():
            return False
        self._processing_task = asyncio.get_running_loop().create_task(self._finish_processing())
        return True

    def cancel(self) -> bool:
        result = self._lookup(KioskEvent.CANCEL)
        if result is None:
            return False
        self._move(result)
        return True

    def dispatch(
        self,
        event: KioskEvent,
        language: Optional[Language] = None,
        material: Optional[Material] = None,
    ) -> bool:
        """Route a user event by name. Confirm runs in the background."""
        event = KioskEvent(event)
        if event == KioskEvent.SELECT_LANGUAGE:
            return self.select_language(language)
        if event == KioskEvent.CHOOSE_MATERIAL:
            return self.choose_material(material)
        if event == KioskEvent.CONFIRM:
            return self.request_confirm()
        handlers = {
            KioskEvent.START: self.start,
            KioskEvent.CARD_DETECTED: self.card_detected,
            KioskEvent.INCREMENT: self.increment,
            KioskEvent.DECREMENT: self.decrement,
            KioskEvent.CANCEL: self.cancel,
        }
        handler = handlers.get(event)
        if handler is None:
            logger.debug(f"Event {event.value} is internal and cannot be dispatched")
            return False
        return handler()

    async def shutdown(self) -> None:
        """Wait for an in-flight confirm, then drop pending timers."""
        if self._processing_task is not None and not self._processing_task.done():
            await self._processing_task
        self._cancel_timer()

    # ─── Internals ───────────────────────────────────────────────────────────

    def _lookup(self, event: KioskEvent) -> Optional[TransitionResult]:
        result = get_transition(self.session.step, event)
        if result is None:
            logger.debug(
                f"[{self.session.session_id}] ignored {event.value} in {self.session.step.value}"
            )
        return result

    def _move(self, result: TransitionResult) -> None:
        self._cancel_timer()
        before = self.session.step
        if result.special == "reset":
            self.session.reset()
            self.last_result = None
        else:
            self.session.transition_to(result.next_step)
        if result.special == "dwell":
            self._schedule(self.success_dwell, self._on_success_timeout, self.session.session_id)
        logger.info(
            f"[{self.session.session_id}] {before.value} -> {self.session.step.value} ({result.action})"
        )
        self._notify()

    def _notify(self) -> None:
        # listener errors are logged, never raised into the flow
        for listener in self._listeners:
            try:
                listener(self.session)
            except Exception as e:
                logger.error(f"Step listener {listener!r} failed: {type(e).__name__}: {e}")

    def _schedule(self, delay: float, callback, *args) -> None:
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().call_later(delay, callback, *args)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._card_read_pending = False

    def _on_card_read(self, session_id: str, result: TransitionResult) -> None:
        self._timer = None
        self._card_read_pending = False
        if session_id != self.session.session_id or self.session.step != Step.SCAN_CARD:
            return
        self._move(result)

    def _on_success_timeout(self, session_id: str) -> None:
        self._timer = None
        if session_id != self.session.session_id:
            return
        result = self._lookup(KioskEvent.TIMEOUT)
        if result is not None:
            self._move(result)

    def _begin_processing(self) -> bool:
        result = self._lookup(KioskEvent.CONFIRM)
        if result is None:
            return False
        if result.special == "guard_count" and self.session.count <= 0:
            logger.debug(f"[{self.session.session_id}] confirm ignored: count is 0")
            return False
        self._move(result)
        return True

    async def _finish_processing(self) -> SuccessResult:
        session = self.session
        result = await self.orchestrator.confirm(session.count, session.material, session.language)

        done = self._lookup(KioskEvent.PROCESSING_DONE)
        if done is None:
            return result
        self.last_result = result
        session.last_fact = result.fact_text
        self._move(done)
        return result
