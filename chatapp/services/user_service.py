from typing import Optional

from chatapp.core.errors import STORE_ERRORS, StoreError
from chatapp.repositories.user_repository import UserRepository


class UserService:
    """Registers users. There is no lookup by external id and no dedup on it."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def register_user(self, user_id: Optional[str], custom_user_id: Optional[str]) -> str:
        try:
            return await self.user_repository.create_user(user_id=user_id, custom_user_id=custom_user_id)
        except STORE_ERRORS as exc:
            raise StoreError("Error creating user", exc) from exc
