"""
Chat
====
A direct thread as known to this client.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, NamedTuple, Optional

from ..exceptions import InvalidEntityData
from ..models.direct import Message, ThreadPayload
from ..services import Services

if TYPE_CHECKING:
    from ..cache import EntityCache
    from .user import User

logger = logging.getLogger("instaclient.chat")


class _ChatState(NamedTuple):
    payload: ThreadPayload
    users: Dict[str, "User"]


class Chat:
    """
    Direct thread entity.

    `users` maps participant ids (the viewer excluded) to canonical
    cached users. A non-group chat with a single participant is that
    user's private chat.
    """

    def __init__(self, data: Any, cache: "EntityCache", services: Services):
        payload = _to_payload(data)
        self._id = payload.thread_id
        self._cache = cache
        self._services = services
        self._apply(payload)

    def patch(self, data: Any) -> "Chat":
        """Overwrite title, group flag and participants from a raw thread payload."""
        payload = _to_payload(data)
        if payload.thread_id != self._id:
            raise InvalidEntityData(
                f"Cannot patch chat {self._id} with data for chat {payload.thread_id}",
            )
        self._apply(payload)
        return self

    def _apply(self, payload: ThreadPayload) -> None:
        users: Dict[str, "User"] = {}
        for raw in payload.users:
            user = self._cache.upsert(raw)
            users[user.id] = user
        self._state = _ChatState(payload, users)

    @property
    def users(self) -> Dict[str, "User"]:
        return self._state.users

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> Optional[str]:
        return self._state.payload.thread_title

    @property
    def is_group(self) -> bool:
        return self._state.payload.is_group

    @property
    def is_private(self) -> bool:
        """One-to-one chat with a single other user."""
        state = self._state
        return not state.payload.is_group and len(state.users) == 1

    async def send(self, content: str) -> Message:
        """Send a text message to this thread."""
        response = await self._services.direct.send_text(self._id, content)
        logger.debug(f"Sent message to thread {self._id}")
        return Message.from_send_response(response or {}, thread_id=self._id, text=content)

    def __str__(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"Chat(id={self._id!r}, users={list(self.users)!r})"


def _to_payload(data: Any) -> ThreadPayload:
    if isinstance(data, ThreadPayload):
        return data
    return ThreadPayload.from_payload(data)
