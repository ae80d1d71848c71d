"""
Async HTTP Client
=================
Async transport for the Instagram private web API.
Browser impersonation via curl_cffi; no retries, no rate limiting.
Failures surface to the caller as instaclient exceptions.
"""

import time
import logging
from typing import Any, Dict, Optional

from curl_cffi.requests import AsyncSession
from curl_cffi import CurlError

from .config import (
    API_BASE,
    BASE_URL,
    BROWSER_IMPERSONATION,
    CONNECT_TIMEOUT,
    IG_APP_ID,
    REQUEST_TIMEOUT,
)
from .exceptions import NetworkError
from .response_handler import ResponseHandler
from .session import SessionInfo

logger = logging.getLogger("instaclient.async")


class AsyncHttpClient:
    """
    Async HTTP client for Instagram API.

    Usage:
        async with AsyncHttpClient(SessionInfo.from_env()) as http:
            data = await http.get("/users/123/info/")
    """

    def __init__(
        self,
        session: SessionInfo,
        impersonate: str = BROWSER_IMPERSONATION,
        response_handler: Optional[ResponseHandler] = None,
    ):
        self._session = session
        self._impersonate = impersonate
        self._response_handler = response_handler or ResponseHandler()
        self._async_session: Optional[AsyncSession] = None

    @property
    def session(self) -> SessionInfo:
        return self._session

    def _get_async_session(self) -> AsyncSession:
        """Get or create curl_cffi AsyncSession."""
        if self._async_session is None:
            self._async_session = AsyncSession(impersonate=self._impersonate)
        return self._async_session

    def _build_headers(self, method: str) -> Dict[str, str]:
        headers = {
            "user-agent": self._session.user_agent,
            "x-csrftoken": self._session.csrf_token,
            "x-ig-app-id": IG_APP_ID,
            "x-requested-with": "XMLHttpRequest",
            "referer": f"{BASE_URL}/",
            "origin": BASE_URL,
        }
        if method == "POST":
            headers["content-type"] = "application/x-www-form-urlencoded"
        return headers

    # ─── PUBLIC API ──────────────────────────────────────────

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        full_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send async GET request."""
        return await self._request("GET", full_url or f"{API_BASE}{endpoint}", params=params)

    async def post(
        self,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        full_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send async POST request."""
        return await self._request("POST", full_url or f"{API_BASE}{endpoint}", params=params, data=data)

    # ─── CORE REQUEST ────────────────────────────────────────

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict] = None,
        data: Optional[Dict] = None,
    ) -> Dict[str, Any]:
        kwargs = {
            "headers": self._build_headers(method),
            "cookies": self._session.cookies,
            "timeout": (CONNECT_TIMEOUT, REQUEST_TIMEOUT),
            "allow_redirects": method == "GET",
        }
        if params:
            kwargs["params"] = params
        if data and method == "POST":
            kwargs["data"] = data

        logger.debug(f"{method} {url.replace(BASE_URL, '')}")
        start_time = time.time()
        try:
            response = await self._get_async_session().request(method, url, **kwargs)
        except CurlError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug(f"{response.status_code} {url.replace(BASE_URL, '')} ({elapsed_ms:.0f}ms)")
        return self._response_handler.handle(response)

    async def close(self) -> None:
        """Clean up async resources."""
        if self._async_session:
            await self._async_session.close()
            self._async_session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
