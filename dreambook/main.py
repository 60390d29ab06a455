import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from dreambook.config import settings
from dreambook.db import init_models
from dreambook.engine.chat import ChatSession
from dreambook.engine.chat_router import router as chat_router
from dreambook.engine.discover_router import router as discover_router
from dreambook.engine.events import ChangeEvent, ChangeFeed
from dreambook.engine.router import router as dreams_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("dreambook")


def _log_change(event: ChangeEvent) -> None:
    logger.info("%s %s %s", event.entity, event.action, event.entity_id or "")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("database ready at %s", settings.database_url)
    yield
    await app.state.chat.aclose()


app = FastAPI(title="Dreambook", version="0.1.0", lifespan=lifespan)
app.state.feed = ChangeFeed()
app.state.feed.subscribe(_log_change)
app.state.chat = ChatSession(
    delay_ms=(settings.chat_delay_min_ms, settings.chat_delay_max_ms),
    suggestion_limit=settings.chat_suggestion_limit,
    focus_check_threshold=settings.focus_check_threshold,
)
app.include_router(dreams_router)
app.include_router(discover_router)
app.include_router(chat_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "dreambook": {
            "onboarding_options": "/onboarding/options",
            "profile": "/profile",
            "dreams": "/dreams",
            "dream_detail": "/dreams/{id}",
            "toggle_step": "/dreams/{id}/steps/{index}/toggle",
            "toggle_complete": "/dreams/{id}/complete",
            "dream_insight": "/dreams/{id}/insight",
            "discover": "/discover",
            "accept_suggestion": "/discover/accept",
            "patterns": "/insights/patterns",
            "stats": "/insights/stats",
            "chat": "/chat",
            "chat_send": "/chat/messages",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "dreambook.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
