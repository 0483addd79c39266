"""FastAPI application entrypoint for the chat room server."""
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import config, messages, participants, status
from .errors import ChatError
from .logging_config import configure_logging
from .message_log import MessageLog
from .presence import PresenceTracker
from .store import Store
from .sweeper import EvictionSweeper

logger = configure_logging()


def create_app(
    database_url: Optional[str] = None,
    sweep_interval: Optional[float] = None,
    stale_after: Optional[float] = None,
    clock: Callable[[], float] = time.time,
    start_sweeper: bool = True,
) -> FastAPI:
    """Build the application; the store and sweeper live as long as its lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = Store(database_url or config.DATABASE_URL).connect()
        presence = PresenceTracker(store, clock=clock)
        sweeper = EvictionSweeper(
            presence,
            interval=config.SWEEP_INTERVAL_SECONDS if sweep_interval is None else sweep_interval,
            stale_after=config.STALE_AFTER_SECONDS if stale_after is None else stale_after,
        )
        app.state.store = store
        app.state.presence = presence
        app.state.message_log = MessageLog(store, presence)
        app.state.sweeper = sweeper
        if start_sweeper:
            sweeper.start()
        try:
            yield
        finally:
            sweeper.stop()
            store.close()

    app = FastAPI(title="Chat Room Server", version="1.0.0", lifespan=lifespan)
    app.include_router(participants.router)
    app.include_router(messages.router)
    app.include_router(status.router)

    @app.exception_handler(ChatError)
    async def handle_chat_error(request: Request, exc: ChatError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.get("/")
    def root():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("chat_room.server.main:app", host=config.HOST, port=config.PORT, reload=False)
