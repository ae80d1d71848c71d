"""Cached entities: users and chats."""

from .chat import Chat
from .user import User

__all__ = ["Chat", "User"]
