from typing import Optional

from pydantic import BaseModel


class ChatCreate(BaseModel):

    senderId: str
    recipientId: str


class ChatResolved(BaseModel):

    chatId: str
    message: str = "Chat created or fetched successfully"


class ChatPublic(BaseModel):

    id: str
    userId1: str
    userId2: str
    lastMessage: str
    updatedAt: Optional[str] = None
