"""
Tests for AsyncHttpClient with a patched curl_cffi AsyncSession.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from curl_cffi import CurlError

from instaclient.async_client import AsyncHttpClient
from instaclient.config import API_BASE, IG_APP_ID
from instaclient.exceptions import NetworkError, RateLimitError
from instaclient.session import SessionInfo


@pytest.fixture
def session():
    return SessionInfo(session_id="sid", csrf_token="csrf", ds_user_id="42", user_agent="TestAgent/1.0")


def make_response(status_code=200, json_data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = ""
    resp.json.return_value = json_data if json_data is not None else {}
    return resp


@pytest.fixture
def curl_session():
    with patch("instaclient.async_client.AsyncSession") as cls:
        instance = MagicMock()
        instance.request = AsyncMock(return_value=make_response(json_data={"status": "ok"}))
        instance.close = AsyncMock()
        cls.return_value = instance
        yield instance


class TestRequests:

    @pytest.mark.asyncio
    async def test_get(self, session, curl_session):
        http = AsyncHttpClient(session)
        result = await http.get("/users/1/info/", params={"a": "b"})

        assert result == {"status": "ok"}
        method, url = curl_session.request.await_args.args
        kwargs = curl_session.request.await_args.kwargs
        assert method == "GET"
        assert url == f"{API_BASE}/users/1/info/"
        assert kwargs["params"] == {"a": "b"}
        assert kwargs["cookies"] == session.cookies
        assert kwargs["headers"]["x-csrftoken"] == "csrf"
        assert kwargs["headers"]["x-ig-app-id"] == IG_APP_ID
        assert kwargs["headers"]["user-agent"] == "TestAgent/1.0"
        assert kwargs["allow_redirects"] is True

    @pytest.mark.asyncio
    async def test_post(self, session, curl_session):
        http = AsyncHttpClient(session)
        await http.post("/web/friendships/1/follow/", data={"x": "1"})

        method, _ = curl_session.request.await_args.args
        kwargs = curl_session.request.await_args.kwargs
        assert method == "POST"
        assert kwargs["data"] == {"x": "1"}
        assert kwargs["allow_redirects"] is False
        assert kwargs["headers"]["content-type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_full_url(self, session, curl_session):
        await AsyncHttpClient(session).get("", full_url="https://www.instagram.com/graphql/query/")
        _, url = curl_session.request.await_args.args
        assert url == "https://www.instagram.com/graphql/query/"

    @pytest.mark.asyncio
    async def test_session_reused(self, session, curl_session):
        http = AsyncHttpClient(session)
        await http.get("/a/")
        await http.get("/b/")
        assert curl_session.request.await_count == 2


class TestErrors:

    @pytest.mark.asyncio
    async def test_transport_error(self, session, curl_session):
        curl_session.request.side_effect = CurlError("connection reset")
        with pytest.raises(NetworkError) as exc_info:
            await AsyncHttpClient(session).get("/users/1/info/")
        assert isinstance(exc_info.value.__cause__, CurlError)

    @pytest.mark.asyncio
    async def test_status_mapped(self, session, curl_session):
        curl_session.request.return_value = make_response(429)
        with pytest.raises(RateLimitError):
            await AsyncHttpClient(session).post("/web/friendships/1/follow/")


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_close(self, session, curl_session):
        async with AsyncHttpClient(session) as http:
            await http.get("/a/")
        curl_session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_requests(self, session, curl_session):
        await AsyncHttpClient(session).close()
        curl_session.close.assert_not_awaited()
