from datetime import datetime
from typing import TypedDict


class MessageDocument(TypedDict, total=False):
    _id: str
    chatId: str
    senderId: str
    recipientId: str
    text: str
    # per-chat ordering key, 1-based
    seq: int
    timestamp: datetime
