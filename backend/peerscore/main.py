from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from peerscore.api.router import api_router
from peerscore.config import load_cors_origins, load_settings
from peerscore.services.ledger_service import build_ledger

CORS_ORIGINS = load_cors_origins()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app.state.ledger = build_ledger(settings)
    app.state.lifespan_started = True
    logger.info("ledger ready with authority %s", settings.authority_address)
    yield
    app.state.lifespan_shutdown = True


app = FastAPI(title="peerscore", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix="/api")
