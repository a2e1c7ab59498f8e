from fastapi import Depends

from chatapp.core.config import Settings, get_settings
from chatapp.database.connection import mongo_db_dependency
from chatapp.repositories.chat_repository import ChatRepository
from chatapp.repositories.message_repository import MessageRepository
from chatapp.repositories.user_repository import UserRepository
from chatapp.services.chat_service import ChatService
from chatapp.services.user_service import UserService


def get_user_service(db = Depends(mongo_db_dependency)) -> UserService:
    return UserService(UserRepository(db))


def get_chat_service(db = Depends(mongo_db_dependency), settings: Settings = Depends(get_settings)) -> ChatService:
    msg_repo = MessageRepository(db)
    chat_repo = ChatRepository(db)
    return ChatService(msg_repo, chat_repo, summary_update_attempts=settings.summary_update_attempts)
