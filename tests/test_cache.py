"""
Tests for EntityCache: canonical users, chats, events, thread safety.
"""

import threading

import pytest

from instaclient.cache import EntityCache
from instaclient.events import EventType
from instaclient.exceptions import InvalidEntityData
from instaclient.structures.chat import Chat
from instaclient.structures.user import User


class TestUpsert:
    """Get-or-create semantics."""

    def test_creates_and_inserts(self, cache, raw_user):
        user = cache.upsert(raw_user)
        assert isinstance(user, User)
        assert cache.users == {"123456789": user}
        assert "123456789" in cache
        assert 123456789 in cache
        assert len(cache) == 1

    def test_same_id_same_object(self, cache, record):
        first = cache.upsert(record(1, "alice"))
        second = cache.upsert(record("1", "alice_renamed"))
        assert second is first
        assert first.username == "alice_renamed"
        assert len(cache) == 1

    def test_interleaved_ids(self, cache, record):
        seen = {}
        for pk, name in [(1, "a"), (2, "b"), (1, "a2"), (3, "c"), (2, "b2"), (1, "a3")]:
            user = cache.upsert(record(pk, name))
            seen.setdefault(user.id, set()).add(id(user))

        assert all(len(objs) == 1 for objs in seen.values())
        assert len(cache) == 3
        assert cache.get_user(1).username == "a3"
        assert cache.get_user(2).username == "b2"

    def test_invalid_payload_not_inserted(self, cache):
        with pytest.raises(InvalidEntityData):
            cache.upsert({"username": "no_pk"})
        assert len(cache) == 0

    def test_get_user_missing(self, cache):
        assert cache.get_user("404") is None

    def test_fresh_caches_are_isolated(self, services, raw_user):
        a = EntityCache(services)
        b = EntityCache(services)
        assert a.upsert(raw_user) is not b.upsert(raw_user)

    def test_clear(self, cache, raw_user, raw_thread):
        cache.upsert(raw_user)
        cache.upsert_chat(raw_thread)
        cache.clear()
        assert len(cache) == 0
        assert cache.chats == {}

    def test_concurrent_upserts_create_one_object(self, cache):
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def worker(n):
            barrier.wait()
            for i in range(50):
                user = cache.upsert({"pk": "42", "username": f"w{n}_{i}"})
                with lock:
                    results.append(user)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 400
        assert len({id(u) for u in results}) == 1
        assert len(cache) == 1
        assert cache.get_user("42").username.startswith("w")


class TestEvents:
    """Cache emits create/update events."""

    def test_user_create_then_update(self, cache, events, raw_user):
        received = []
        events.on_all(lambda e: received.append((e.event_type, e.entity)))

        user = cache.upsert(raw_user)
        cache.upsert(raw_user)

        assert received == [
            (EventType.USER_CREATE, user),
            (EventType.USER_UPDATE, user),
        ]

    def test_listener_error_does_not_break_upsert(self, cache, events, raw_user):
        events.on(EventType.USER_CREATE, lambda e: 1 / 0)
        user = cache.upsert(raw_user)
        assert cache.get_user(user.id) is user

    def test_chat_create_emits_participants_first(self, cache, events, raw_thread):
        received = []
        events.on_all(lambda e: received.append(e.event_type))
        cache.upsert_chat(raw_thread)
        assert received == [EventType.USER_CREATE, EventType.CHAT_CREATE]

    def test_no_emitter(self, services, raw_user):
        cache = EntityCache(services)
        assert cache.upsert(raw_user).id == "123456789"


class TestChats:
    """Chat upserts and private chat lookup."""

    def test_participants_are_canonical(self, cache, raw_thread, record):
        friend = cache.upsert(record(555, "friend_old"))
        chat = cache.upsert_chat(raw_thread)

        assert isinstance(chat, Chat)
        assert chat.users["555"] is friend
        assert friend.username == "friend"

    def test_same_thread_same_object(self, cache, raw_thread):
        first = cache.upsert_chat(raw_thread)
        second = cache.upsert_chat(dict(raw_thread, thread_title="renamed"))
        assert second is first
        assert first.title == "renamed"
        assert len(cache.chats) == 1

    def test_find_private_chat(self, cache, raw_thread, raw_group_thread):
        cache.upsert_chat(raw_group_thread)
        private = cache.upsert_chat(raw_thread)

        assert cache.find_private_chat(555) is private
        assert cache.find_private_chat("666") is None
        assert cache.get_chat(raw_thread["thread_id"]) is private

    def test_group_members_shared_with_private_chat(self, cache, raw_thread, raw_group_thread):
        group = cache.upsert_chat(raw_group_thread)
        private = cache.upsert_chat(raw_thread)
        assert group.users["555"] is private.users["555"]

    def test_patch_swaps_title_and_participants_together(self, cache, events, raw_thread, record):
        chat = cache.upsert_chat(raw_thread)
        seen = []
        events.on(EventType.USER_CREATE, lambda e: seen.append((chat.title, sorted(chat.users), chat.is_private)))

        chat.patch(dict(raw_thread, thread_title="trio", users=[record(555, "friend"), record(666, "other")]))

        assert seen == [("friend", ["555"], True)]
        assert (chat.title, sorted(chat.users), chat.is_private) == ("trio", ["555", "666"], False)

    def test_failed_patch_keeps_previous_state(self, cache, raw_thread):
        chat = cache.upsert_chat(raw_thread)
        with pytest.raises(InvalidEntityData):
            chat.patch(dict(raw_thread, thread_title="broken", users=[{"username": "no pk"}]))
        assert chat.title == "friend"
        assert list(chat.users) == ["555"]

    def test_invalid_thread(self, cache):
        with pytest.raises(InvalidEntityData):
            cache.upsert_chat({"thread_title": "no id"})
        assert cache.chats == {}

    def test_repr(self, cache, raw_thread):
        cache.upsert_chat(raw_thread)
        assert repr(cache) == "EntityCache(users=1, chats=1)"
