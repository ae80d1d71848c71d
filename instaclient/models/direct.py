"""
Direct Models
=============
Instagram DM thread payload and message models.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator

from .base import InstaModel, require_id


class ThreadPayload(InstaModel):
    """
    Validated snapshot of a raw direct thread.

    `users` holds the raw participant records (viewer excluded, as
    Instagram sends them); the cache turns them into canonical users.
    """
    thread_id: str
    thread_title: Optional[str] = None
    is_group: bool = False
    users: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("thread_id", mode="before")
    @classmethod
    def coerce_thread_id(cls, v: Any) -> str:
        return require_id(v)

    @field_validator("is_group", mode="before")
    @classmethod
    def coerce_is_group(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("users", mode="before")
    @classmethod
    def coerce_users(cls, v: Any) -> List[Dict[str, Any]]:
        return list(v or [])


class Message(InstaModel):
    """Single DM message."""
    item_id: str = ""
    item_type: str = "text"
    text: str = ""
    timestamp: Optional[datetime] = None
    user_id: Optional[str] = None
    thread_id: str = ""

    @field_validator("item_id", "thread_id", mode="before")
    @classmethod
    def coerce_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> Optional[datetime]:
        if v is None or v == "":
            return None
        if isinstance(v, str) and v.isdigit():
            v = int(v)
        if isinstance(v, (int, float)):
            # Instagram DM timestamps are in microseconds
            if v > 1e15:
                v = v / 1_000_000
            return datetime.fromtimestamp(v)
        return v

    @classmethod
    def from_send_response(cls, data: Dict[str, Any], thread_id: str, text: str) -> "Message":
        """
        Build a Message from a broadcast/text/ response.

        Instagram wraps the sent item in "payload"; thread_id and text
        fall back to what was sent.
        """
        payload = data.get("payload") or {}
        return cls(
            item_id=payload.get("item_id", ""),
            item_type="text",
            text=text,
            timestamp=payload.get("timestamp"),
            user_id=payload.get("user_id") or payload.get("client_context_user_id"),
            thread_id=payload.get("thread_id") or thread_id,
        )
