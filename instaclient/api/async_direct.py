"""
Direct Messages API
===================
DM inbox, thread lookup by participant, send text.
"""

from typing import Any, Dict, List, Optional
import json

from ..async_client import AsyncHttpClient


class AsyncDirectAPI:
    """Instagram Direct Message API (implements DirectOps)"""

    def __init__(self, client: AsyncHttpClient):
        self._client = client

    async def get_inbox(
        self,
        cursor: Optional[str] = None,
        limit: int = 20,
    ) -> Dict[str, Any]:
        """
        Inbox threads.

        Args:
            cursor: Pagination cursor
            limit: How many threads to get

        Returns:
            Inbox data (inbox.threads, inbox.oldest_cursor, ...)
        """
        params = {"limit": str(limit)}
        if cursor:
            params["cursor"] = cursor
        return await self._client.get("/direct_v2/inbox/", params=params)

    async def get_by_participants(self, user_ids: List[int | str]) -> Dict[str, Any]:
        """
        Thread with exactly these participants (created server-side if needed).

        Returns:
            dict: {thread: {...}, status}
        """
        return await self._client.get(
            "/direct_v2/threads/get_by_participants/",
            params={"recipient_users": json.dumps([str(uid) for uid in user_ids])},
        )

    async def send_text(self, thread_id: str, text: str) -> Dict[str, Any]:
        """
        Send text message.

        Args:
            thread_id: Thread ID
            text: Message text

        Returns:
            Sent item data ({payload: {item_id, thread_id, timestamp}, status})
        """
        return await self._client.post(
            "/direct_v2/threads/broadcast/text/",
            data={
                "thread_ids": f"[{thread_id}]",
                "text": text,
            },
        )
