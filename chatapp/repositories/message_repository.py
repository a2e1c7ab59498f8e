from datetime import datetime, timezone
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from chatapp.models.message import MessageDocument


class MessageRepository:

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._db = db

    @property
    def collection(self):
        return self._db["messages"]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("chatId", ASCENDING), ("seq", ASCENDING)], unique=True)

    async def save_message(
        self,
        chat_id: str,
        sender_id: str,
        recipient_id: str,
        text: str,
        seq: int,
    ) -> MessageDocument:
        doc: MessageDocument = {
            "chatId": chat_id,
            "senderId": sender_id,
            "recipientId": recipient_id,
            "text": text,
            "seq": seq,
            "timestamp": datetime.now(timezone.utc),
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = str(result.inserted_id)
        return doc

    async def get_messages_by_chat(self, chat_id: str) -> List[MessageDocument]:
        sort = [("seq", ASCENDING), ("timestamp", ASCENDING), ("_id", ASCENDING)]
        cursor = self.collection.find({"chatId": chat_id}, sort=sort)
        items = await cursor.to_list(length=None)
        for it in items:
            it["_id"] = str(it.get("_id"))
        return items
