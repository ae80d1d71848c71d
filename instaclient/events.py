"""
Event System
=============
Cache event system for instaclient.
Emit events when users and chats are created or patched.
Supports both sync and async callbacks.
"""

import asyncio
import inspect
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


logger = logging.getLogger("instaclient.events")


class EventType(str, Enum):
    """Event types emitted by instaclient."""

    # Cache events
    USER_CREATE = "user_create"
    USER_UPDATE = "user_update"
    CHAT_CREATE = "chat_create"
    CHAT_UPDATE = "chat_update"

    # Error events
    ERROR = "error"


@dataclass
class EventData:
    """
    Event payload passed to callbacks.

    Attributes:
        event_type: Type of event
        timestamp: Unix timestamp when event occurred
        entity: User or Chat the event is about
        error: Exception that caused the event (if error event)
        extra: Additional context data
    """

    event_type: EventType
    timestamp: float = field(default_factory=time.time)
    entity: Any = None
    error: Optional[Exception] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        parts = [f"EventData({self.event_type.value}"]
        if self.entity is not None:
            parts.append(f", entity={self.entity!r}")
        if self.error:
            parts.append(f", error={self.error!r}")
        parts.append(")")
        return "".join(parts)


# Callback type: sync or async function that takes EventData
EventCallback = Callable[[EventData], Any]


class EventEmitter:
    """
    Event emitter for instaclient.

    Usage:
        emitter = EventEmitter()
        emitter.on(EventType.USER_CREATE, lambda e: print(f"New user {e.entity}"))
        emitter.emit(EventType.USER_CREATE, entity=user)

    Async usage:
        async def handler(event: EventData):
            await notify(event.entity)
        emitter.on(EventType.CHAT_CREATE, handler)
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[EventCallback]] = {}
        self._global_listeners: List[EventCallback] = []

    def on(self, event_type: Union[EventType, str], callback: EventCallback) -> "EventEmitter":
        """
        Register a callback for an event type.

        Args:
            event_type: Event to listen for (EventType enum or string)
            callback: Function(EventData) to call. Can be sync or async.

        Returns:
            self (for chaining)
        """
        event_type = EventType(event_type)
        self._listeners.setdefault(event_type, []).append(callback)
        return self

    def on_all(self, callback: EventCallback) -> "EventEmitter":
        """Register a callback for ALL events."""
        self._global_listeners.append(callback)
        return self

    def off(self, event_type: Union[EventType, str], callback: EventCallback) -> "EventEmitter":
        """Remove a callback for an event type."""
        listeners = self._listeners.get(EventType(event_type), [])
        if callback in listeners:
            listeners.remove(callback)
        return self

    def off_all(self, event_type: Optional[Union[EventType, str]] = None) -> "EventEmitter":
        """Remove all callbacks for a given event type, or all events."""
        if event_type is None:
            self._listeners.clear()
            self._global_listeners.clear()
        else:
            self._listeners.pop(EventType(event_type), None)
        return self

    def emit(self, event_type: Union[EventType, str], **kwargs) -> None:
        """
        Emit an event synchronously.

        Creates EventData from kwargs and calls all registered listeners.
        Async callbacks are scheduled if an event loop is running.
        """
        event_type = EventType(event_type)
        event = EventData(event_type=event_type, **kwargs)
        callbacks = self._listeners.get(event_type, []) + self._global_listeners

        for cb in callbacks:
            try:
                if inspect.iscoroutinefunction(cb):
                    try:
                        loop = asyncio.get_running_loop()
                    except RuntimeError:
                        logger.debug(f"Skipped async callback in sync context: {cb.__name__}")
                        continue
                    loop.create_task(cb(event))
                else:
                    cb(event)
            except Exception as e:
                logger.warning(f"Event callback error ({event_type.value}): {e}")

    async def emit_async(self, event_type: Union[EventType, str], **kwargs) -> None:
        """Emit an event, awaiting async callbacks in order."""
        event_type = EventType(event_type)
        event = EventData(event_type=event_type, **kwargs)
        callbacks = self._listeners.get(event_type, []) + self._global_listeners

        for cb in callbacks:
            try:
                if inspect.iscoroutinefunction(cb):
                    await cb(event)
                else:
                    cb(event)
            except Exception as e:
                logger.warning(f"Async event callback error ({event_type.value}): {e}")

    @property
    def listener_count(self) -> int:
        """Total number of registered listeners."""
        return len(self._global_listeners) + sum(len(l) for l in self._listeners.values())

    def has_listeners(self, event_type: Union[EventType, str]) -> bool:
        """Check if any listeners registered for event type."""
        return bool(self._listeners.get(EventType(event_type))) or bool(self._global_listeners)
