from datetime import datetime
from typing import List, TypedDict


class ChatDocument(TypedDict, total=False):
    # _id is the pair key of the sorted participants
    _id: str
    userId1: str
    userId2: str
    participants: List[str]
    lastMessage: str
    # seq of the message lastMessage was taken from
    lastMessageSeq: int
    messageCount: int
    updatedAt: datetime
