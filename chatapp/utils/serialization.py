from datetime import datetime, timezone
from typing import Any, Dict, Optional


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Render a timestamp as ISO-8601 UTC with millisecond precision, ``Z`` suffixed."""
    if value is None:
        return None
    if value.tzinfo is None:
        # documents read without tz_aware come back naive but are UTC
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def chat_to_public(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(doc["_id"]),
        "userId1": doc.get("userId1"),
        "userId2": doc.get("userId2"),
        "lastMessage": doc.get("lastMessage", ""),
        "updatedAt": to_iso(doc.get("updatedAt")),
    }


def message_to_public(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(doc["_id"]),
        "chatId": doc.get("chatId"),
        "senderId": doc.get("senderId"),
        "recipientId": doc.get("recipientId"),
        "text": doc.get("text", ""),
        "timestamp": to_iso(doc.get("timestamp")),
    }
