"""Shared fixtures for the test suite."""

from __future__ import annotations

import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dreambook.db import get_session, init_models, make_engine
from dreambook.engine.chat import ChatSession
from dreambook.engine.events import ChangeEvent, ChangeFeed
from dreambook.main import app


# ---------------------------------------------------------------------------
# Database (throwaway SQLite file per test)
# ---------------------------------------------------------------------------

@pytest.fixture()
async def engine(tmp_path):
    eng = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'dreambook-test.db'}")
    await init_models(eng)
    yield eng
    await eng.dispose()


@pytest.fixture()
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def session(session_maker):
    async with session_maker() as s:
        yield s


# ---------------------------------------------------------------------------
# Change feed & chat
# ---------------------------------------------------------------------------

@pytest.fixture()
def events() -> list[ChangeEvent]:
    return []


@pytest.fixture()
def feed(events):
    f = ChangeFeed()
    f.subscribe(events.append)
    return f


@pytest.fixture()
def chat():
    """Chat session with no typing delay and a pinned random source."""
    return ChatSession(rng=random.Random(7), delay_ms=(0, 0))


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture()
async def client(session_maker, feed, chat):
    async def _override():
        async with session_maker() as s:
            yield s

    saved = (app.state.feed, app.state.chat)
    app.dependency_overrides[get_session] = _override
    app.state.feed = feed
    app.state.chat = chat

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await chat.aclose()
    app.dependency_overrides.clear()
    app.state.feed, app.state.chat = saved
