"""
EcoKiosk — Eco-Fact Generation Layer
Async providers that turn a recycling summary into a short motivating fact.

Every provider is an async callable (count, material, language) -> str.
A missing API key is not an error: the provider warns and returns "".
Upstream failures are logged and re-raised; the orchestrator absorbs them.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from google import genai
from google.genai import types
from openai import AsyncOpenAI

from ecokiosk.config import (
    FACT_MAX_TOKENS,
    FACT_PROVIDER,
    FACT_TEMPERATURE,
    FACT_TIMEOUT_SECONDS,
    GEMINI_API_KEY,
    GEMINI_FACT_MODEL,
    OPENAI_API_KEY,
    OPENAI_FACT_MODEL,
)
from ecokiosk.state.session import Language, Material

logger = logging.getLogger("ecokiosk.facts.llm")

FactGenerator = Callable[[int, Material, Language], Awaitable[str]]

MATERIAL_PROMPT_NAMES = {
    Material.PLASTIC: "plastic bottles",
    Material.PAPER: "paper sheets",
}

LANGUAGE_NAMES = {
    Language.AZE: "Azerbaijani",
    Language.ENG: "English",
    Language.RU: "Russian",
}

MAX_FACT_WORDS = 20


def build_fact_prompt(count: int, material: Material, language: Language) -> str:
    """Describe the deposit and ask for a one-sentence fact in the kiosk language."""
    return (
        f"The user just recycled {count} {MATERIAL_PROMPT_NAMES[material]}.\n"
        "Generate a very short, motivating, one-sentence fun fact or congratulatory "
        "message about how much CO2 or energy they saved.\n"
        f"The message must be in {LANGUAGE_NAMES[language]}.\n"
        f"Keep it under {MAX_FACT_WORDS} words."
    )


async def _with_timeout(coro, timeout: float):
    if timeout and timeout > 0:
        return await asyncio.wait_for(coro, timeout)
    return await coro


# ─── Google Gemini ───────────────────────────────────────────────────────────

class GeminiFactProvider:
    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model: str = GEMINI_FACT_MODEL,
        timeout: float = FACT_TIMEOUT_SECONDS,
    ):
        self.model = model
        self.timeout = timeout
        self._client = genai.Client(api_key=api_key) if api_key else None

    async def __call__(self, count: int, material: Material, language: Language) -> str:
        if self._client is None:
            logger.warning("Gemini API key is missing. Returning empty fact.")
            return ""

        prompt = build_fact_prompt(count, material, language)
        start = time.perf_counter()
        try:
            response = await _with_timeout(
                self._client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=FACT_TEMPERATURE,
                        max_output_tokens=FACT_MAX_TOKENS,
                        # thinking tokens count against max_output_tokens
                        thinking_config=types.ThinkingConfig(thinking_budget=0),
                    ),
                ),
                self.timeout,
            )
        except Exception as e:
            elapsed = int((time.perf_counter() - start) * 1000)
            logger.error(f"Gemini fact error after {elapsed}ms: {e}")
            raise

        elapsed = int((time.perf_counter() - start) * 1000)
        text = (response.text or "").strip()
        if not text:
            logger.warning(f"Empty response from Gemini after {elapsed}ms")
        else:
            logger.info(f"Gemini fact: {elapsed}ms, {len(text.split())} words")
        return text


# ─── OpenAI ──────────────────────────────────────────────────────────────────

class OpenAIFactProvider:
    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = OPENAI_FACT_MODEL,
        timeout: float = FACT_TIMEOUT_SECONDS,
    ):
        self.model = model
        self.timeout = timeout
        self._client = AsyncOpenAI(api_key=api_key) if api_key else None

    async def __call__(self, count: int, material: Material, language: Language) -> str:
        if self._client is None:
            logger.warning("OpenAI API key is missing. Returning empty fact.")
            return ""

        prompt = build_fact_prompt(count, material, language)
        start = time.perf_counter()
        try:
            response = await _with_timeout(
                self._client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    max_tokens=FACT_MAX_TOKENS,
                    temperature=FACT_TEMPERATURE,
                ),
                self.timeout,
            )
        except Exception as e:
            elapsed = int((time.perf_counter() - start) * 1000)
            logger.error(f"OpenAI fact error after {elapsed}ms: {e}")
            raise

        elapsed = int((time.perf_counter() - start) * 1000)
        content = response.choices[0].message.content if response.choices else None
        text = (content or "").strip()
        logger.info(f"OpenAI fact: {elapsed}ms, {len(text.split())} words")
        return text


# ─── Provider Factory ────────────────────────────────────────────────────────

_providers = {
    "gemini": GeminiFactProvider,
    "openai": OpenAIFactProvider,
}

_instance: Optional[FactGenerator] = None


def get_fact_generator(provider: Optional[str] = None) -> FactGenerator:
    """Get the configured fact provider (singleton for the default provider)."""
    global _instance
    name = (provider or FACT_PROVIDER).lower()
    provider_cls = _providers.get(name)
    if not provider_cls:
        raise ValueError(f"Unknown fact provider: {name}")
    if provider is not None:
        return provider_cls()
    if _instance is None:
        _instance = provider_cls()
    return _instance
