"""
User Payload Model
==================
Validated snapshot of a raw Instagram user record
(followers/following feeds, /users/{pk}/info/, direct thread participants).
"""

from typing import Any, Optional
from pydantic import field_validator

from .base import InstaModel, require_id


class UserProfile(InstaModel):
    """
    Immutable profile value object, field names as sent by Instagram.

    A User entity swaps its whole profile on every patch, so readers
    see either the old snapshot or the new one, never a mix.

    Fields:
        pk: User ID (required, coerced to str)
        username: Instagram handle
        full_name: Display name
        biography: Bio text
        is_private, is_verified, is_business
        media_count: Number of posts
        profile_pic_url: Avatar URL
        follower_count, following_count
        total_igtv_videos: IGTV video count
    """
    pk: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    biography: Optional[str] = None
    is_private: Optional[bool] = None
    is_verified: Optional[bool] = None
    is_business: Optional[bool] = None
    media_count: Optional[int] = None
    profile_pic_url: Optional[str] = None
    follower_count: Optional[int] = None
    following_count: Optional[int] = None
    total_igtv_videos: Optional[int] = None

    @field_validator("pk", mode="before")
    @classmethod
    def coerce_pk(cls, v: Any) -> str:
        """Handle pk coming as int or str; reject empty."""
        return require_id(v)
