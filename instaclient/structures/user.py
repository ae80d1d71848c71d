"""
User
====
One Instagram account as known to this client.

Users are created and patched by EntityCache.upsert(); the cached
object is the canonical one for its id. A User built directly is a
detached copy and never receives later patches.
"""

import logging
from typing import TYPE_CHECKING, Any, AsyncIterator, Callable, Dict, Optional

from ..exceptions import ConversationNotFound, InvalidEntityData
from ..models.direct import Message
from ..models.user import UserProfile
from ..services import Services

if TYPE_CHECKING:
    from ..cache import EntityCache
    from .chat import Chat

logger = logging.getLogger("instaclient.user")


class User:
    """
    Instagram user entity.

    Profile attributes (username, full_name, follower_count, ...) are
    read from an immutable UserProfile snapshot that patch() replaces
    wholesale.

    Relationship views:
        followers: users following this user, filled by fetch_followers()
        following: users this user follows, filled by fetch_following()

    Views are not kept in sync with Instagram. Call the fetch method
    again to refresh; entries that disappeared server-side stay.
    """

    def __init__(self, data: Any, cache: "EntityCache", services: Services):
        profile = _to_profile(data)
        self._id = profile.pk
        self._profile = profile
        self._cache = cache
        self._services = services
        self.followers: Dict[str, "User"] = {}
        self.following: Dict[str, "User"] = {}

    def patch(self, data: Any) -> "User":
        """
        Overwrite all profile attributes from a raw payload.

        Relationship views and identity are kept. The payload is fully
        validated before anything changes.

        Raises:
            InvalidEntityData: pk missing/empty or different from this user's id
        """
        profile = _to_profile(data)
        if profile.pk != self._id:
            raise InvalidEntityData(
                f"Cannot patch user {self._id} with data for user {profile.pk}",
                response=profile.to_dict(),
            )
        self._profile = profile
        return self

    # ─── PROFILE ────────────────────────────────────────────

    @property
    def id(self) -> str:
        return self._id

    @property
    def profile(self) -> UserProfile:
        """Current profile snapshot."""
        return self._profile

    @property
    def username(self) -> Optional[str]:
        return self._profile.username

    @property
    def full_name(self) -> Optional[str]:
        return self._profile.full_name

    @property
    def biography(self) -> Optional[str]:
        return self._profile.biography

    @property
    def is_private(self) -> Optional[bool]:
        return self._profile.is_private

    @property
    def is_verified(self) -> Optional[bool]:
        return self._profile.is_verified

    @property
    def is_business(self) -> Optional[bool]:
        return self._profile.is_business

    @property
    def media_count(self) -> Optional[int]:
        return self._profile.media_count

    @property
    def avatar_url(self) -> Optional[str]:
        return self._profile.profile_pic_url

    @property
    def follower_count(self) -> Optional[int]:
        return self._profile.follower_count

    @property
    def following_count(self) -> Optional[int]:
        return self._profile.following_count

    @property
    def total_igtv_videos(self) -> Optional[int]:
        return self._profile.total_igtv_videos

    @property
    def private_chat(self) -> Optional["Chat"]:
        """Cached one-to-one chat between the client and this user."""
        return self._cache.find_private_chat(self._id)

    # ─── FRIENDSHIP ACTIONS ─────────────────────────────────

    async def follow(self) -> None:
        """Start following this user."""
        await self._services.friendships.create(self._id)

    async def unfollow(self) -> None:
        """Stop following this user."""
        await self._services.friendships.destroy(self._id)

    async def block(self) -> None:
        """Block this user."""
        await self._services.friendships.block(self._id)

    async def unblock(self) -> None:
        """Unblock this user."""
        await self._services.friendships.unblock(self._id)

    async def approve_follow(self) -> None:
        """Approve this user's follow request."""
        await self._services.friendships.approve(self._id)

    async def deny_follow(self) -> None:
        """Reject this user's follow request."""
        await self._services.friendships.deny(self._id)

    async def remove_follower(self) -> None:
        """Remove this user from your followers."""
        await self._services.friendships.remove_follower(self._id)

    # ─── RELATIONSHIPS ──────────────────────────────────────

    async def fetch_followers(self) -> Dict[str, "User"]:
        """
        Fetch the users that follow this user.

        Returns:
            The followers view, id → canonical User
        """
        return await self._fetch_into("followers", self._services.feed.account_followers, self.followers)

    async def fetch_following(self) -> Dict[str, "User"]:
        """
        Fetch the users this user follows.

        Returns:
            The following view, id → canonical User
        """
        return await self._fetch_into("following", self._services.feed.account_following, self.following)

    async def _fetch_into(
        self,
        relation: str,
        feed: Callable[[str], AsyncIterator[Dict[str, Any]]],
        view: Dict[str, "User"],
    ) -> Dict[str, "User"]:
        count = 0
        async for data in feed(self._id):
            user = self._cache.upsert(data)
            view[user.id] = user
            count += 1
        logger.debug(f"Fetched {relation} of {self._id}: {count} users, view size {len(view)}")
        return view

    # ─── DIRECT ─────────────────────────────────────────────

    async def send(self, content: str) -> Message:
        """
        Send a message in the private chat with this user.

        Raises:
            ConversationNotFound: no private chat with this user is cached
        """
        chat = self.private_chat
        if chat is None:
            raise ConversationNotFound(f"No private chat with user {self._id} in cache")
        return await chat.send(content)

    def __str__(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"User(id={self._id!r}, username={self.username!r})"


def _to_profile(data: Any) -> UserProfile:
    if isinstance(data, UserProfile):
        return data
    return UserProfile.from_payload(data)
