"""Async collaborators over the private web API."""

from .async_direct import AsyncDirectAPI
from .async_feed import AsyncFeedAPI
from .async_friendships import AsyncFriendshipsAPI
from .async_users import AsyncUsersAPI

__all__ = ["AsyncDirectAPI", "AsyncFeedAPI", "AsyncFriendshipsAPI", "AsyncUsersAPI"]
