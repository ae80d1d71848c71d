"""
Client: Main Class
==================
Owns one session's entity cache and wires the API collaborators
into every cached User and Chat.

Usage:
    async with Client.from_env(".env") as client:
        user = await client.fetch_user(123456789)
        followers = await user.fetch_followers()
        await user.follow()

        await client.fetch_private_chat(user.id)
        await user.send("hi!")
"""

import logging
from typing import Any, List, Optional

from .api.async_direct import AsyncDirectAPI
from .api.async_feed import AsyncFeedAPI
from .api.async_friendships import AsyncFriendshipsAPI
from .api.async_users import AsyncUsersAPI
from .async_client import AsyncHttpClient
from .cache import EntityCache
from .events import EventEmitter, EventType
from .exceptions import ClientNotStarted, ConversationNotFound, InstagramError, NotFoundError
from .log_config import LogConfig
from .services import Services
from .session import SessionInfo
from .structures.chat import Chat
from .structures.user import User

logger = logging.getLogger("instaclient.client")


class Client:
    """
    Instagram client wrapper.

    The cache exists between start() and close(); using it outside
    that window raises ClientNotStarted. Each start() gets a fresh
    cache, so users from a previous session are detached.
    """

    def __init__(
        self,
        session: SessionInfo,
        http: Optional[AsyncHttpClient] = None,
        log_level: str = "WARNING",
        log_file: Optional[str] = None,
        max_relationship_count: Optional[int] = None,
    ):
        """
        Args:
            session: Cookie session (see SessionInfo.from_env)
            http: Transport override (defaults to a curl_cffi AsyncHttpClient)
            log_level: instaclient log level
            log_file: Optional rotating log file
            max_relationship_count: Cap on users per followers/following fetch
        """
        LogConfig.configure(level=log_level, filename=log_file)

        self._session = session
        self._http = http or AsyncHttpClient(session)
        self._events = EventEmitter()

        self.users = AsyncUsersAPI(self._http)
        self.friendships = AsyncFriendshipsAPI(self._http)
        self.feed = AsyncFeedAPI(self._http, max_count=max_relationship_count)
        self.direct = AsyncDirectAPI(self._http)
        self._services = Services(
            friendships=self.friendships,
            feed=self.feed,
            direct=self.direct,
        )

        self._cache: Optional[EntityCache] = None
        self.me: Optional[User] = None

    @classmethod
    def from_env(cls, env_path: str = ".env", **kwargs) -> "Client":
        """Create a client from SESSION_ID / CSRF_TOKEN / DS_USER_ID in a .env file."""
        return cls(SessionInfo.from_env(env_path), **kwargs)

    # ─── LIFECYCLE ───────────────────────────────────────────

    @property
    def cache(self) -> EntityCache:
        if self._cache is None:
            raise ClientNotStarted("Client is not started. Call start() or use 'async with'.")
        return self._cache

    @property
    def is_started(self) -> bool:
        return self._cache is not None

    async def start(self, fetch_me: bool = True) -> "Client":
        """
        Create the session cache.

        Args:
            fetch_me: Also fetch and cache the logged-in account as `me`

        If fetching `me` fails the client is closed again before the
        error propagates.
        """
        self._cache = EntityCache(self._services, events=self._events)
        logger.info(f"Client started for account {self._session.ds_user_id}")
        if fetch_me:
            try:
                self.me = await self.fetch_user(self._session.ds_user_id)
            except BaseException:
                logger.warning(f"Start failed for account {self._session.ds_user_id}, closing client")
                await self.close()
                raise
        return self

    async def close(self) -> None:
        """Drop the cache and close the transport."""
        if self._cache is not None:
            self._cache.clear()
            self._cache = None
        self.me = None
        await self._http.close()
        logger.info("Client closed")

    async def __aenter__(self):
        return await self.start()

    async def __aexit__(self, *args):
        await self.close()

    # ─── EVENT SYSTEM ────────────────────────────────────────

    def on(self, event_type, callback):
        """Register event listener."""
        self._events.on(event_type, callback)
        return self

    def off(self, event_type, callback):
        """Remove event listener."""
        self._events.off(event_type, callback)
        return self

    # ─── FETCHERS ────────────────────────────────────────────

    async def fetch_user(self, user_id: Any) -> User:
        """
        Fetch a profile and upsert it into the cache.

        Raises:
            NotFoundError: response has no user
        """
        cache = self.cache
        try:
            data = await self.users.get_info(user_id)
            raw = data.get("user") if isinstance(data, dict) else None
            if not raw:
                raise NotFoundError(f"User {user_id} not found", response=data or {})
            return cache.upsert(raw)
        except InstagramError as e:
            self._report_error(e, "fetch_user", user_id)
            raise

    async def fetch_inbox(self, limit: int = 20) -> List[Chat]:
        """Fetch the first inbox page and upsert every thread into the cache."""
        cache = self.cache
        try:
            data = await self.direct.get_inbox(limit=limit)
            threads = (data.get("inbox") or {}).get("threads", [])
            chats = [cache.upsert_chat(thread) for thread in threads]
        except InstagramError as e:
            self._report_error(e, "fetch_inbox")
            raise
        logger.debug(f"Inbox: {len(chats)} threads cached")
        return chats

    async def fetch_private_chat(self, user_id: Any) -> Chat:
        """
        Cached private chat with user_id, fetching it from Instagram if needed.

        Raises:
            ConversationNotFound: Instagram returned no thread
        """
        cache = self.cache
        chat = cache.find_private_chat(user_id)
        if chat is not None:
            return chat

        try:
            data = await self.direct.get_by_participants([user_id])
            thread = data.get("thread") if isinstance(data, dict) else None
            if not thread:
                raise ConversationNotFound(f"No private chat with user {user_id}", response=data or {})
            return cache.upsert_chat(thread)
        except InstagramError as e:
            self._report_error(e, "fetch_private_chat", user_id)
            raise

    def _report_error(self, error: InstagramError, operation: str, target: Any = None) -> None:
        """Log a failed fetch and emit it as an ERROR event."""
        logger.warning(f"{operation} failed: {error}")
        extra = {"operation": operation}
        if target is not None:
            extra["target"] = str(target)
        self._events.emit(EventType.ERROR, error=error, extra=extra)

    def __repr__(self) -> str:
        state = repr(self._cache) if self._cache is not None else "stopped"
        return f"<Client account={self._session.ds_user_id} {state}>"
