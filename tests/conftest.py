"""
Pytest fixtures for instaclient tests.
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from instaclient.cache import EntityCache
from instaclient.events import EventEmitter
from instaclient.services import Services


# ─── Fakes ───────────────────────────────────────────────────

class FakeFeed:
    """
    In-memory FeedOps.

    Each call to account_followers/account_following replays the next
    queued list of raw records for that user (or an empty list).
    """

    def __init__(self):
        self.followers: Dict[str, List[List[Dict[str, Any]]]] = {}
        self.following: Dict[str, List[List[Dict[str, Any]]]] = {}
        self.calls: List[tuple] = []
        self.fail_after: int = -1

    def queue_followers(self, user_id: str, records: List[Dict[str, Any]]) -> None:
        self.followers.setdefault(user_id, []).append(records)

    def queue_following(self, user_id: str, records: List[Dict[str, Any]]) -> None:
        self.following.setdefault(user_id, []).append(records)

    async def _replay(self, records):
        for i, record in enumerate(records):
            if i == self.fail_after:
                raise ConnectionError("feed dropped")
            yield record

    def _next(self, queue, user_id):
        pages = queue.get(user_id) or [[]]
        return pages.pop(0) if len(pages) > 1 else pages[0]

    def account_followers(self, user_id):
        self.calls.append(("followers", user_id))
        return self._replay(self._next(self.followers, user_id))

    def account_following(self, user_id):
        self.calls.append(("following", user_id))
        return self._replay(self._next(self.following, user_id))


def make_friendships() -> MagicMock:
    friendships = MagicMock()
    for name in ("create", "destroy", "block", "unblock", "approve", "deny", "remove_follower"):
        setattr(friendships, name, AsyncMock(return_value={"status": "ok"}))
    return friendships


# ─── Collaborators ───────────────────────────────────────────

@pytest.fixture
def feed():
    return FakeFeed()


@pytest.fixture
def friendships():
    return make_friendships()


@pytest.fixture
def direct():
    direct = MagicMock()
    direct.send_text = AsyncMock(return_value={
        "status": "ok",
        "payload": {
            "item_id": "30000000000000000001",
            "thread_id": "340282366841710300949128",
            "timestamp": "1708000000000000",
            "client_context": "abc",
        },
    })
    return direct


@pytest.fixture
def services(friendships, feed, direct):
    return Services(friendships=friendships, feed=feed, direct=direct)


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def cache(services, events):
    return EntityCache(services, events=events)


# ─── Sample Data ─────────────────────────────────────────────

@pytest.fixture
def raw_user():
    """Raw user record as in /users/{pk}/info/ responses."""
    return {
        "pk": 123456789,
        "username": "testuser",
        "full_name": "Test User",
        "biography": "Hello world",
        "is_private": False,
        "is_verified": True,
        "is_business": False,
        "media_count": 42,
        "profile_pic_url": "https://example.com/pic.jpg",
        "follower_count": 1500,
        "following_count": 300,
        "total_igtv_videos": 2,
    }


def user_record(pk, username, **extra) -> Dict[str, Any]:
    """Compact follower-list style record."""
    record = {
        "pk": pk,
        "username": username,
        "full_name": username.title(),
        "is_private": False,
        "is_verified": False,
        "profile_pic_url": f"https://example.com/{username}.jpg",
    }
    record.update(extra)
    return record


@pytest.fixture
def raw_thread():
    """Raw one-to-one direct thread (viewer excluded from users)."""
    return {
        "thread_id": "340282366841710300949128",
        "thread_title": "friend",
        "is_group": False,
        "users": [user_record(555, "friend")],
    }


@pytest.fixture
def raw_group_thread():
    return {
        "thread_id": "340282366841710300949999",
        "thread_title": "group",
        "is_group": True,
        "users": [user_record(555, "friend"), user_record(666, "other")],
    }


@pytest.fixture
def record():
    """Factory for follower-list style records: record(pk, username, **extra)."""
    return user_record
