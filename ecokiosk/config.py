"""
EcoKiosk — Configuration
All environment variables and constants. Single source of truth.
No other file reads os.environ directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# ─── Paths ───────────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env file if present
load_dotenv(BASE_DIR / ".env")

APP_VERSION = "1.0.0"

# ─── API Keys ────────────────────────────────────────────────────────────────
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

# ─── Fact Provider (swap by changing this) ───────────────────────────────────
FACT_PROVIDER = os.getenv("FACT_PROVIDER", "gemini")
# Options: gemini | openai

GEMINI_FACT_MODEL = os.getenv("GEMINI_FACT_MODEL", "gemini-2.5-flash")
OPENAI_FACT_MODEL = os.getenv("OPENAI_FACT_MODEL", "gpt-4.1-mini")
FACT_MAX_TOKENS = int(os.getenv("FACT_MAX_TOKENS", "80"))
FACT_TEMPERATURE = float(os.getenv("FACT_TEMPERATURE", "0.7"))
# 0 disables the provider-side timeout
FACT_TIMEOUT_SECONDS = float(os.getenv("FACT_TIMEOUT_SECONDS", "10"))

# ─── Step Timing ─────────────────────────────────────────────────────────────
CARD_READ_DELAY_SECONDS = float(os.getenv("CARD_READ_DELAY_SECONDS", "0.8"))
PROCESSING_FLOOR_SECONDS = float(os.getenv("PROCESSING_FLOOR_SECONDS", "2.0"))
SUCCESS_DWELL_SECONDS = float(os.getenv("SUCCESS_DWELL_SECONDS", "8.0"))

# ─── Points ──────────────────────────────────────────────────────────────────
POINTS_PER_PLASTIC = 10
POINTS_PER_PAPER = 5

# ─── Languages ───────────────────────────────────────────────────────────────
# Codes: aze | eng | ru
DEFAULT_LANGUAGE = os.getenv("KIOSK_DEFAULT_LANGUAGE", "aze")

# ─── CORS ────────────────────────────────────────────────────────────────────
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# ─── Logging ─────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
