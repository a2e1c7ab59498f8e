import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from chatapp.models.chat import ChatDocument


logger = logging.getLogger(__name__)


def pair_key(user_a: str, user_b: str) -> str:
    """Deterministic chat id for the unordered pair ``{user_a, user_b}``."""
    participants = sorted([user_a, user_b])
    # JSON keeps ("a_b", "c") and ("a", "b_c") apart
    raw = json.dumps(participants, separators=(",", ":"))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class ChatRepository:

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._db = db

    @property
    def collection(self):
        return self._db["chats"]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("participants", ASCENDING)])
        await self.collection.create_index([("updatedAt", DESCENDING)])

    async def get_chat(self, chat_id: str) -> Optional[ChatDocument]:
        return await self.collection.find_one({"_id": chat_id})

    async def get_or_create_one_to_one(self, sender_id: str, recipient_id: str) -> Tuple[ChatDocument, bool]:
        """Return ``(chat, created)`` for the pair, creating the chat at most once.

        The chat ``_id`` is the pair key, so the unique ``_id`` index turns a
        concurrent second insert into a ``DuplicateKeyError``; the loser reads
        back the winner's document.
        """
        chat_id = pair_key(sender_id, recipient_id)
        existing = await self.get_chat(chat_id)
        if existing:
            return existing, False
        doc: ChatDocument = {
            "_id": chat_id,
            "userId1": sender_id,
            "userId2": recipient_id,
            "participants": sorted([sender_id, recipient_id]),
            "lastMessage": "",
            "lastMessageSeq": 0,
            "messageCount": 0,
            "updatedAt": datetime.now(timezone.utc),
        }
        try:
            await self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.info("Chat %s created concurrently, using existing record", chat_id)
            existing = await self.get_chat(chat_id)
            return (existing or doc), False
        logger.info("Created chat %s between %s and %s", chat_id, sender_id, recipient_id)
        return doc, True

    async def reserve_message_seq(self, chat_id: str) -> Optional[int]:
        """Atomically bump the chat's message counter. ``None`` if the chat is missing."""
        updated = await self.collection.find_one_and_update(
            {"_id": chat_id},
            {"$inc": {"messageCount": 1}},
            projection={"messageCount": True},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            return None
        return int(updated["messageCount"])

    async def update_on_new_message(self, chat_id: str, text: str, seq: int) -> bool:
        # a summary for an older seq never overwrites a newer one
        result = await self.collection.update_one(
            {"_id": chat_id, "lastMessageSeq": {"$lt": seq}},
            {
                "$set": {"lastMessage": text, "lastMessageSeq": seq},
                # stamped by the server clock
                "$currentDate": {"updatedAt": True},
            },
        )
        return result.matched_count > 0

    async def list_for_user(self, user_id: str) -> List[ChatDocument]:
        query = {"participants": user_id}
        cursor = self.collection.find(query, sort=[("updatedAt", DESCENDING), ("_id", ASCENDING)])
        # an array match returns each chat once, self-chats included
        return await cursor.to_list(length=None)
