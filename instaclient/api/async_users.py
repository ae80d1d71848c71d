"""
Users API
=========
Profile lookup by user id.
"""

from typing import Any, Dict

from ..async_client import AsyncHttpClient


class AsyncUsersAPI:
    """Instagram Users API"""

    def __init__(self, client: AsyncHttpClient):
        self._client = client

    async def get_info(self, user_id: int | str) -> Dict[str, Any]:
        """
        Full profile of a user.

        Args:
            user_id: User PK

        Returns:
            dict: {user: {...}, status}
        """
        return await self._client.get(f"/users/{user_id}/info/")
