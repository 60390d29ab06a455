"""Dream Assistant chat endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from dreambook.auth import verify_api_key
from dreambook.deps import get_chat, get_dreams, get_profiles
from dreambook.engine.chat import ChatSession
from dreambook.engine.models import ChatMessage, ChatRequest, ChatState
from dreambook.engine.repository import DreamRepository, ProfileRepository

router = APIRouter(prefix="/chat", tags=["chat"], dependencies=[Depends(verify_api_key)])


@router.get("", response_model=ChatState)
async def chat_state(chat: ChatSession = Depends(get_chat)) -> ChatState:
    """Messages so far and whether a reply is still being composed. Poll this."""
    return chat.state()


@router.post("/messages", response_model=ChatMessage, status_code=202)
async def send_message(
    body: ChatRequest,
    chat: ChatSession = Depends(get_chat),
    profiles: ProfileRepository = Depends(get_profiles),
    dreams: DreamRepository = Depends(get_dreams),
) -> ChatMessage:
    """Append the user's message; the reply follows after a short delay."""
    message = chat.submit(body.text, await profiles.get(), await dreams.list())
    if message is None:
        raise HTTPException(status_code=422, detail="Message text must not be blank")
    return message
