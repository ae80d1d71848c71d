"""
Collaborator Interfaces
=======================
The narrow surface entities use to reach Instagram.

Entities never hold a full client reference; they get a Services
bundle with just the friendship, feed and direct operations they call.
The concrete implementations live in instaclient.api.
"""

from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Protocol


class FriendshipOps(Protocol):
    """Follow-graph mutations, one request per call."""

    async def create(self, user_id: str) -> Any: ...

    async def destroy(self, user_id: str) -> Any: ...

    async def block(self, user_id: str) -> Any: ...

    async def unblock(self, user_id: str) -> Any: ...

    async def approve(self, user_id: str) -> Any: ...

    async def deny(self, user_id: str) -> Any: ...

    async def remove_follower(self, user_id: str) -> Any: ...


class FeedOps(Protocol):
    """Paginated follower/following feeds yielding raw user records."""

    def account_followers(self, user_id: str) -> AsyncIterator[Dict[str, Any]]: ...

    def account_following(self, user_id: str) -> AsyncIterator[Dict[str, Any]]: ...


class DirectOps(Protocol):
    """Direct message sending."""

    async def send_text(self, thread_id: str, text: str) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class Services:
    """Collaborators injected into every User and Chat."""

    friendships: FriendshipOps
    feed: FeedOps
    direct: DirectOps
