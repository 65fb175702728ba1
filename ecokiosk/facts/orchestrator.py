"""
EcoKiosk — Points & Fact Orchestrator

Runs the confirm side effect: the fact call and the Processing floor timer
start together and are joined. Processing lasts max(fact latency, floor).
A failing or missing fact generator degrades to an empty fact; it never
fails the join and never leaves the kiosk stuck in PROCESSING.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

from ecokiosk.config import PROCESSING_FLOOR_SECONDS
from ecokiosk.facts.llm import FactGenerator
from ecokiosk.state.session import Language, Material

logger = logging.getLogger("ecokiosk.facts.orchestrator")


@dataclass(frozen=True)
class SuccessResult:
    fact_text: str
    elapsed_ms: int = 0


class FactOrchestrator:
    """
    Joins the fact-generation call with the Processing floor.

    Receives its inputs by value. It never touches the session; the
    controller applies the returned SuccessResult.
    """

    def __init__(
        self,
        fact_generator: Optional[FactGenerator] = None,
        floor_seconds: float = PROCESSING_FLOOR_SECONDS,
    ):
        self.fact_generator = fact_generator
        self.floor_seconds = floor_seconds

    async def confirm(self, count: int, material: Material, language: Language) -> SuccessResult:
        start = time.perf_counter()
        fact, _ = await asyncio.gather(
            self._fetch_fact(count, material, language),
            asyncio.sleep(self.floor_seconds),
        )
        elapsed = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"Processing done in {elapsed}ms "
            f"(count={count}, material={material.value}, fact={'yes' if fact else 'no'})"
        )
        return SuccessResult(fact_text=fact, elapsed_ms=elapsed)

    async def _fetch_fact(self, count: int, material: Material, language: Language) -> str:
        if self.fact_generator is None:
            logger.warning("No fact generator configured. Skipping eco-fact.")
            return ""
        try:
            text = await self.fact_generator(count, material, language)
        except Exception as e:
            logger.error(f"Error fetching eco-fact: {type(e).__name__}: {e}")
            return ""
        if not isinstance(text, str):
            logger.warning(f"Fact generator returned {type(text).__name__}, expected str")
            return ""
        return text.strip()
