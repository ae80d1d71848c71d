"""
Friendships API
===============
Follow, unfollow, block, follow requests, follower removal.
"""

from typing import Any, Dict

from ..async_client import AsyncHttpClient


class AsyncFriendshipsAPI:
    """Instagram Friendships API (implements FriendshipOps)"""

    def __init__(self, client: AsyncHttpClient):
        self._client = client

    async def _action(self, user_id: int | str, action: str) -> Dict[str, Any]:
        return await self._client.post(f"/web/friendships/{user_id}/{action}/")

    async def create(self, user_id: int | str) -> Dict[str, Any]:
        """
        Follow a user.

        Args:
            user_id: User PK
        """
        return await self._action(user_id, "follow")

    async def destroy(self, user_id: int | str) -> Dict[str, Any]:
        """Unfollow a user."""
        return await self._action(user_id, "unfollow")

    async def block(self, user_id: int | str) -> Dict[str, Any]:
        """Block a user."""
        return await self._action(user_id, "block")

    async def unblock(self, user_id: int | str) -> Dict[str, Any]:
        """Unblock a user."""
        return await self._action(user_id, "unblock")

    # ─── FOLLOW REQUESTS ─────────────────────────────────────

    async def approve(self, user_id: int | str) -> Dict[str, Any]:
        """
        Approve follow request.

        Args:
            user_id: PK of user who sent the request
        """
        return await self._action(user_id, "approve")

    async def deny(self, user_id: int | str) -> Dict[str, Any]:
        """
        Reject follow request.

        Args:
            user_id: PK of user who sent the request
        """
        return await self._action(user_id, "ignore")

    # ─── FOLLOWER MANAGEMENT ─────────────────────────────────

    async def remove_follower(self, user_id: int | str) -> Dict[str, Any]:
        """Remove a follower (someone who follows you)."""
        return await self._action(user_id, "remove_follower")
