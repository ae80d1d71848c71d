"""
instaclient
===========
Cached Instagram entities (users, chats) over the private web API.
"""

from .cache import EntityCache
from .client import Client
from .events import EventData, EventEmitter, EventType
from .exceptions import (
    ClientNotStarted,
    ConversationNotFound,
    InstagramError,
    InvalidEntityData,
    LoginRequired,
    NetworkError,
    NotFoundError,
    PrivateAccountError,
    RateLimitError,
)
from .log_config import LogConfig
from .models import Message, ThreadPayload, UserProfile
from .services import DirectOps, FeedOps, FriendshipOps, Services
from .session import SessionInfo
from .structures import Chat, User

__version__ = "0.1.0"

__all__ = [
    "Chat",
    "Client",
    "ClientNotStarted",
    "ConversationNotFound",
    "DirectOps",
    "EntityCache",
    "EventData",
    "EventEmitter",
    "EventType",
    "FeedOps",
    "FriendshipOps",
    "InstagramError",
    "InvalidEntityData",
    "LogConfig",
    "LoginRequired",
    "Message",
    "NetworkError",
    "NotFoundError",
    "PrivateAccountError",
    "RateLimitError",
    "Services",
    "SessionInfo",
    "ThreadPayload",
    "User",
    "UserProfile",
]
