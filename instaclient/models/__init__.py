"""Pydantic payload models."""

from .base import InstaModel
from .direct import Message, ThreadPayload
from .user import UserProfile

__all__ = ["InstaModel", "Message", "ThreadPayload", "UserProfile"]
