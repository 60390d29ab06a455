"""FastAPI dependencies shared by the routers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dreambook.db import get_session
from dreambook.engine.chat import ChatSession
from dreambook.engine.events import ChangeFeed
from dreambook.engine.repository import DreamRepository, ProfileRepository


def get_feed(request: Request) -> ChangeFeed:
    return request.app.state.feed


def get_chat(request: Request) -> ChatSession:
    return request.app.state.chat


def get_profiles(
    session: AsyncSession = Depends(get_session),
    feed: ChangeFeed = Depends(get_feed),
) -> ProfileRepository:
    return ProfileRepository(session, feed)


def get_dreams(
    session: AsyncSession = Depends(get_session),
    feed: ChangeFeed = Depends(get_feed),
) -> DreamRepository:
    return DreamRepository(session, feed)
