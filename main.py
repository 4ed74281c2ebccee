"""SleepSync API application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()  # load .env before anything reads os.getenv()

from fastapi import FastAPI

from sleepsync.api.routes import bands_router, health_router, naps_router, schedule_router
from sleepsync.services.nap_log_service import NapLog

# Opaque link to the background reading, passed through untouched
KNOWLEDGE_BASE_URL = os.getenv("KNOWLEDGE_BASE_URL", "")


def _log_level() -> int:
    """LOG_LEVEL as a logging level, INFO when unset or unknown."""
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=_log_level(),
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start every process with an empty nap log."""
    app.state.nap_log = NapLog()
    app.state.knowledge_base_url = KNOWLEDGE_BASE_URL
    logger.info("SleepSync API started (knowledge base: %s)", KNOWLEDGE_BASE_URL or "none")

    yield

    logger.info("SleepSync API stopped")


app = FastAPI(
    title="SleepSync API",
    description=(
        "Rule-based nap and bedtime planner for children aged 0–5: wake windows, "
        "nap capping and bedtime from age, wake-up time and today's naps."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(bands_router)
app.include_router(schedule_router)
app.include_router(naps_router)
