from typing import List

from fastapi import APIRouter, Depends

from chatapp.schemas.chat import ChatCreate, ChatResolved
from chatapp.schemas.message import MessagePublic
from chatapp.services.chat_service import ChatService
from chatapp.utils.dependencies import get_chat_service


router = APIRouter(prefix="/chats", tags=["chat"])


@router.post("", response_model=ChatResolved)
async def create_or_fetch_chat(payload: ChatCreate, service: ChatService = Depends(get_chat_service)):
    chat_id = await service.find_or_create_chat(payload.senderId, payload.recipientId)
    return ChatResolved(chatId=chat_id)


@router.get("/{chat_id}/messages", response_model=List[MessagePublic])
async def list_messages(chat_id: str, service: ChatService = Depends(get_chat_service)):
    return await service.list_messages(chat_id)
