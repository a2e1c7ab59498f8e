from fastapi import APIRouter, Depends, status

from chatapp.schemas.message import MessageCreate, MessageCreated
from chatapp.services.chat_service import ChatService
from chatapp.utils.dependencies import get_chat_service


router = APIRouter(prefix="/messages", tags=["chat"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MessageCreated)
async def send_message(payload: MessageCreate, service: ChatService = Depends(get_chat_service)):
    saved = await service.send_message(payload.chatId, payload.senderId, payload.recipientId, payload.text)
    return MessageCreated(messageId=saved["_id"], text=saved["text"])
