"""
EcoKiosk — Main Application
FastAPI app. Mounts the kiosk router and CORS, configures logging.

Run with:
    uvicorn ecokiosk.main:app --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecokiosk.config import APP_VERSION, CORS_ORIGINS, FACT_PROVIDER, LOG_LEVEL

logger = logging.getLogger("ecokiosk")


# ─── Lifespan (startup/shutdown) ─────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging. Shutdown: drop pending kiosk timers."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    logger.info(f"EcoKiosk v{APP_VERSION} ready (fact provider: {FACT_PROVIDER})")
    yield
    await kiosk.shutdown_controller()
    logger.info("Shutting down")


# ─── App ─────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="EcoKiosk",
    description="Simulated self-service recycling kiosk",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
from ecokiosk.routers import kiosk
app.include_router(kiosk.router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": APP_VERSION}
