from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from chatapp.models.user import UserDocument


class UserRepository:

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._collection = db.get_collection("users")

    async def create_user(self, user_id: Optional[str], custom_user_id: Optional[str]) -> str:
        # no uniqueness check on userId: every call inserts a new user
        doc: UserDocument = {
            "userId": user_id,
            "customUserId": custom_user_id,
            "createdAt": datetime.now(timezone.utc),
        }
        result = await self._collection.insert_one(doc)
        return str(result.inserted_id)
