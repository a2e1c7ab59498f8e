import logging
from typing import Any, Dict, List

from chatapp.core.errors import STORE_ERRORS, ChatNotFoundError, NotFoundError, StoreError
from chatapp.repositories.chat_repository import ChatRepository
from chatapp.repositories.message_repository import MessageRepository
from chatapp.utils.serialization import chat_to_public, message_to_public


logger = logging.getLogger(__name__)


class ChatService:

    def __init__(
        self,
        message_repo: MessageRepository,
        chat_repo: ChatRepository,
        summary_update_attempts: int = 3,
    ) -> None:
        self._message_repo = message_repo
        self._chat_repo = chat_repo
        self._summary_update_attempts = max(1, summary_update_attempts)

    async def find_or_create_chat(self, sender_id: str, recipient_id: str) -> str:
        try:
            chat, _ = await self._chat_repo.get_or_create_one_to_one(sender_id, recipient_id)
        except STORE_ERRORS as exc:
            raise StoreError("Error creating or fetching chat", exc) from exc
        return str(chat["_id"])

    async def send_message(self, chat_id: str, sender_id: str, recipient_id: str, text: str) -> Dict[str, Any]:
        """Append a message to ``chat_id`` and refresh the chat summary.

        The message insert and the summary update are separate writes. Once the
        insert succeeds the message is kept; the summary update is retried and,
        if it still fails, the chat summary lags until the next message.
        """
        try:
            seq = await self._chat_repo.reserve_message_seq(chat_id)
            if seq is None:
                raise ChatNotFoundError(chat_id)
            saved = await self._message_repo.save_message(
                chat_id=chat_id,
                sender_id=sender_id,
                recipient_id=recipient_id,
                text=text,
                seq=seq,
            )
        except STORE_ERRORS as exc:
            raise StoreError("Error sending message", exc) from exc
        await self._refresh_summary(chat_id, text, seq)
        return saved

    async def _refresh_summary(self, chat_id: str, text: str, seq: int) -> None:
        for attempt in range(1, self._summary_update_attempts + 1):
            try:
                await self._chat_repo.update_on_new_message(chat_id, text, seq)
                return
            except STORE_ERRORS as exc:
                logger.warning(
                    "summary update for chat %s seq %d failed (attempt %d/%d): %s",
                    chat_id, seq, attempt, self._summary_update_attempts, exc,
                )
        logger.error("chat %s summary left at an older message; seq %d stored without summary", chat_id, seq)

    async def list_chats_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            chats = await self._chat_repo.list_for_user(user_id)
        except STORE_ERRORS as exc:
            raise StoreError("Error fetching chats", exc) from exc
        if not chats:
            raise NotFoundError("No chats found for this user.")
        return [chat_to_public(c) for c in chats]

    async def list_messages(self, chat_id: str) -> List[Dict[str, Any]]:
        try:
            messages = await self._message_repo.get_messages_by_chat(chat_id)
            if not messages and await self._chat_repo.get_chat(chat_id) is None:
                raise ChatNotFoundError(chat_id)
        except STORE_ERRORS as exc:
            raise StoreError("Error fetching messages", exc) from exc
        if not messages:
            raise NotFoundError("No messages found for this chat.")
        return [message_to_public(m) for m in messages]
