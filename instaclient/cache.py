"""
Entity Cache
============
Session-wide store of canonical users and chats.

One EntityCache per Client. Every User/Chat reference handed out by
this package (relationship views, chat participants) is the cached
object for its id, never a copy.
"""

import logging
import threading
from typing import Any, Dict, Optional

from .events import EventEmitter, EventType
from .models.direct import ThreadPayload
from .models.user import UserProfile
from .services import Services
from .structures.chat import Chat
from .structures.user import User

logger = logging.getLogger("instaclient.cache")


class EntityCache:
    """
    id → User and thread id → Chat, with get-or-create upserts.

    Lookup, construction and insertion share one re-entrant lock, so
    concurrent upserts of the same id create exactly one object and
    the last payload wins. The lock is never held across an await.

    No eviction: the cache lives as long as its client session.

    Usage:
        cache = EntityCache(services)
        alice = cache.upsert({"pk": 1, "username": "alice"})
        assert cache.upsert({"pk": "1", "username": "alice2"}) is alice
    """

    def __init__(self, services: Services, events: Optional[EventEmitter] = None):
        self.users: Dict[str, User] = {}
        self.chats: Dict[str, Chat] = {}
        self._services = services
        self._events = events
        self._lock = threading.RLock()

    # ─── USERS ──────────────────────────────────────────────

    def upsert(self, data: Any) -> User:
        """
        Get-or-create the canonical User for a raw payload.

        Existing users are patched in place; new ones are inserted.

        Raises:
            InvalidEntityData: payload has no usable pk
        """
        profile = UserProfile.from_payload(data)
        with self._lock:
            user = self.users.get(profile.pk)
            created = user is None
            if created:
                user = User(profile, self, self._services)
                self.users[user.id] = user
            else:
                user.patch(profile)

        if created:
            logger.debug(f"Cached new user {user.id} ({user.username})")
            self._emit(EventType.USER_CREATE, user)
        else:
            logger.debug(f"Patched user {user.id} ({user.username})")
            self._emit(EventType.USER_UPDATE, user)
        return user

    def get_user(self, user_id: Any) -> Optional[User]:
        """Cached user by id (int or str), or None."""
        return self.users.get(str(user_id))

    # ─── CHATS ──────────────────────────────────────────────

    def upsert_chat(self, data: Any) -> Chat:
        """
        Get-or-create the canonical Chat for a raw thread payload.

        Participants are upserted as users first.
        """
        payload = ThreadPayload.from_payload(data)
        with self._lock:
            chat = self.chats.get(payload.thread_id)
            created = chat is None
            if created:
                chat = Chat(payload, self, self._services)
                self.chats[chat.id] = chat
            else:
                chat.patch(payload)

        if created:
            logger.debug(f"Cached new chat {chat.id} with {len(chat.users)} users")
            self._emit(EventType.CHAT_CREATE, chat)
        else:
            self._emit(EventType.CHAT_UPDATE, chat)
        return chat

    def get_chat(self, thread_id: Any) -> Optional[Chat]:
        """Cached chat by thread id, or None."""
        return self.chats.get(str(thread_id))

    def find_private_chat(self, user_id: Any) -> Optional[Chat]:
        """The cached non-group chat whose only participant is user_id."""
        user_id = str(user_id)
        with self._lock:
            for chat in self.chats.values():
                if chat.is_private and user_id in chat.users:
                    return chat
        return None

    # ─── LIFECYCLE ──────────────────────────────────────────

    def clear(self) -> None:
        """Drop every cached user and chat."""
        with self._lock:
            self.users.clear()
            self.chats.clear()

    def __len__(self) -> int:
        return len(self.users)

    def __contains__(self, user_id: Any) -> bool:
        return str(user_id) in self.users

    def __repr__(self) -> str:
        return f"EntityCache(users={len(self.users)}, chats={len(self.chats)})"

    def _emit(self, event_type: EventType, entity: Any) -> None:
        if self._events is not None:
            self._events.emit(event_type, entity=entity)
