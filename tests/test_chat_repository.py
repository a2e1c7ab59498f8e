from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from chatapp.repositories.chat_repository import ChatRepository, pair_key


def test_pair_key_is_symmetric():
    assert pair_key("alice", "bob") == pair_key("bob", "alice")


def test_pair_key_keeps_separator_lookalikes_apart():
    assert pair_key("a_b", "c") != pair_key("a", "b_c")
    assert pair_key("alice", "bob") != pair_key("alice", "carol")


@pytest.mark.asyncio
async def test_get_or_create_is_symmetric_and_idempotent(chat_repo: ChatRepository):
    first, created = await chat_repo.get_or_create_one_to_one("u1", "u2")
    assert created is True
    again, created_again = await chat_repo.get_or_create_one_to_one("u1", "u2")
    swapped, created_swapped = await chat_repo.get_or_create_one_to_one("u2", "u1")

    assert again["_id"] == first["_id"]
    assert swapped["_id"] == first["_id"]
    assert created_again is False and created_swapped is False
    assert await chat_repo.collection.count_documents({}) == 1


@pytest.mark.asyncio
async def test_new_chat_keeps_creation_roles(chat_repo: ChatRepository):
    chat, _ = await chat_repo.get_or_create_one_to_one("zed", "amy")
    stored = await chat_repo.get_chat(chat["_id"])

    assert stored["userId1"] == "zed"
    assert stored["userId2"] == "amy"
    assert stored["participants"] == ["amy", "zed"]
    assert stored["lastMessage"] == ""
    assert stored["messageCount"] == 0


@pytest.mark.asyncio
async def test_concurrent_first_time_creation_yields_one_chat(chat_repo: ChatRepository):
    calls = [chat_repo.get_or_create_one_to_one("u1", "u2") for _ in range(5)]
    calls += [chat_repo.get_or_create_one_to_one("u2", "u1") for _ in range(5)]
    results = await asyncio.gather(*calls)

    assert len({chat["_id"] for chat, _ in results}) == 1
    assert sum(1 for _, created in results if created) == 1
    assert await chat_repo.collection.count_documents({}) == 1


class _LateLookupRepository(ChatRepository):
    """Misses the first lookup, as a creator racing another creator would."""

    def __init__(self, db) -> None:
        super().__init__(db)
        self.lookups = 0

    async def get_chat(self, chat_id):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return await super().get_chat(chat_id)


@pytest.mark.asyncio
async def test_duplicate_key_on_insert_returns_existing_chat(mock_db):
    winner, _ = await ChatRepository(mock_db).get_or_create_one_to_one("u1", "u2")
    await ChatRepository(mock_db).collection.update_one({"_id": winner["_id"]}, {"$set": {"lastMessage": "hi"}})

    loser = _LateLookupRepository(mock_db)
    chat, created = await loser.get_or_create_one_to_one("u2", "u1")

    assert created is False
    assert chat["_id"] == winner["_id"]
    assert chat["lastMessage"] == "hi"
    assert await loser.collection.count_documents({}) == 1


@pytest.mark.asyncio
async def test_reserve_message_seq_counts_up(chat_repo: ChatRepository):
    chat, _ = await chat_repo.get_or_create_one_to_one("u1", "u2")

    assert await chat_repo.reserve_message_seq(chat["_id"]) == 1
    assert await chat_repo.reserve_message_seq(chat["_id"]) == 2
    assert await chat_repo.reserve_message_seq("missing") is None


@pytest.mark.asyncio
async def test_summary_update_never_regresses(chat_repo: ChatRepository):
    chat, _ = await chat_repo.get_or_create_one_to_one("u1", "u2")

    assert await chat_repo.update_on_new_message(chat["_id"], "second", 2) is True
    assert await chat_repo.update_on_new_message(chat["_id"], "first", 1) is False
    # replaying the same update is harmless
    assert await chat_repo.update_on_new_message(chat["_id"], "second", 2) is False

    stored = await chat_repo.get_chat(chat["_id"])
    assert stored["lastMessage"] == "second"
    assert stored["lastMessageSeq"] == 2


@pytest.mark.asyncio
async def test_list_for_user_covers_both_roles(chat_repo: ChatRepository):
    as_sender, _ = await chat_repo.get_or_create_one_to_one("u1", "u2")
    as_recipient, _ = await chat_repo.get_or_create_one_to_one("u3", "u1")
    unrelated, _ = await chat_repo.get_or_create_one_to_one("u2", "u3")

    ids = {c["_id"] for c in await chat_repo.list_for_user("u1")}

    assert ids == {as_sender["_id"], as_recipient["_id"]}
    assert unrelated["_id"] not in ids
    assert await chat_repo.list_for_user("nobody") == []


@pytest.mark.asyncio
async def test_self_chat_listed_once(chat_repo: ChatRepository):
    chat, _ = await chat_repo.get_or_create_one_to_one("solo", "solo")

    chats = await chat_repo.list_for_user("solo")

    assert [c["_id"] for c in chats] == [chat["_id"]]


@pytest.mark.asyncio
async def test_list_for_user_most_recently_updated_first(chat_repo: ChatRepository):
    older, _ = await chat_repo.get_or_create_one_to_one("u1", "u2")
    newer, _ = await chat_repo.get_or_create_one_to_one("u1", "u3")
    await chat_repo.collection.update_one({"_id": older["_id"]}, {"$set": {"updatedAt": datetime(2030, 1, 1, tzinfo=timezone.utc)}})
    await chat_repo.collection.update_one({"_id": newer["_id"]}, {"$set": {"updatedAt": datetime(2020, 1, 1, tzinfo=timezone.utc)}})

    chats = await chat_repo.list_for_user("u1")

    assert [c["_id"] for c in chats] == [older["_id"], newer["_id"]]


@pytest.mark.asyncio
async def test_summary_update_restamps_updated_at(chat_repo: ChatRepository):
    chat, _ = await chat_repo.get_or_create_one_to_one("u1", "u2")
    stale = datetime(2000, 1, 1)
    await chat_repo.collection.update_one({"_id": chat["_id"]}, {"$set": {"updatedAt": stale}})

    await chat_repo.update_on_new_message(chat["_id"], "fresh", 1)

    stored = await chat_repo.get_chat(chat["_id"])
    assert stored["updatedAt"].replace(tzinfo=None) > stale
