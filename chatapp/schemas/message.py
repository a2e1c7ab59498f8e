from typing import Optional

from pydantic import BaseModel


class MessageCreate(BaseModel):

    chatId: str
    senderId: str
    recipientId: str
    # empty text is a valid message
    text: str = ""


class MessageCreated(BaseModel):

    messageId: str
    text: str


class MessagePublic(BaseModel):

    id: str
    chatId: str
    senderId: str
    recipientId: str
    text: str
    timestamp: Optional[str] = None
