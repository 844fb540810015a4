"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, Firestore client,
WebSocket room manager).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.infrastructure.firebase.client import close_firebase, init_firebase
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, WebSocket room manager, Firestore client.
    Shutdown: Firestore HTTP pool close.
    """
    # ---- Startup ----
    setup_logging()

    from app.api.websocket import NoteRoomManager

    app.state.ws_manager = NoteRoomManager()

    if init_firebase():
        logger.info("Firestore ready")
    else:
        logger.warning("Firestore unavailable; store-backed routes will return 503")

    yield

    # ---- Shutdown ----
    await close_firebase()
