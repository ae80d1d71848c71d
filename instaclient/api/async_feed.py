"""
Feed API
========
Followers / following feeds with cursor pagination.
"""

from typing import Any, AsyncIterator, Dict, Optional

from ..async_client import AsyncHttpClient
from ..config import FOLLOWERS_PAGE_SIZE


class AsyncFeedAPI:
    """
    Instagram relationship feeds (implements FeedOps).

    account_followers() / account_following() return async iterators
    over raw user records. Each call starts again from the first page.
    """

    def __init__(
        self,
        client: AsyncHttpClient,
        count_per_page: int = FOLLOWERS_PAGE_SIZE,
        max_count: Optional[int] = None,
    ):
        self._client = client
        self._count_per_page = count_per_page
        self._max_count = max_count

    async def get_page(
        self,
        user_id: int | str,
        relation: str,
        max_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        One page of followers or following.

        Args:
            user_id: User PK
            relation: "followers" or "following"
            max_id: Pagination cursor

        Returns:
            Users and pagination
        """
        params = {"count": str(self._count_per_page)}
        if max_id:
            params["max_id"] = max_id
        return await self._client.get(f"/friendships/{user_id}/{relation}/", params=params)

    async def _iterate(self, user_id: int | str, relation: str) -> AsyncIterator[Dict[str, Any]]:
        yielded = 0
        max_id = None

        while True:
            data = await self.get_page(user_id, relation, max_id=max_id)
            for user in data.get("users", []):
                if self._max_count is not None and yielded >= self._max_count:
                    return
                yield user
                yielded += 1

            if self._max_count is not None and yielded >= self._max_count:
                break

            if not data.get("has_more") and not data.get("big_list"):
                break

            max_id = data.get("next_max_id")
            if not max_id:
                break

    def account_followers(self, user_id: int | str) -> AsyncIterator[Dict[str, Any]]:
        """Raw records of users following user_id."""
        return self._iterate(user_id, "followers")

    def account_following(self, user_id: int | str) -> AsyncIterator[Dict[str, Any]]:
        """Raw records of users followed by user_id."""
        return self._iterate(user_id, "following")
