from typing import List

from fastapi import APIRouter, Depends, status

from chatapp.schemas.chat import ChatPublic
from chatapp.schemas.user import UserCreate, UserCreated
from chatapp.services.chat_service import ChatService
from chatapp.services.user_service import UserService
from chatapp.utils.dependencies import get_chat_service, get_user_service


router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserCreated)
async def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    new_id = await service.register_user(payload.userId, payload.customUserId)
    return UserCreated(userId=new_id)


@router.get("/{user_id}/chats", response_model=List[ChatPublic])
async def list_user_chats(user_id: str, service: ChatService = Depends(get_chat_service)):
    return await service.list_chats_for_user(user_id)
