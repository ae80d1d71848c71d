"""
Response Handler
================
HTTP response parsing and error detection for AsyncHttpClient.
Maps status codes and Instagram error bodies to exceptions.
"""

import logging
from typing import Any, Dict

from .exceptions import (
    InstagramError,
    LoginRequired,
    RateLimitError,
    NotFoundError,
    NetworkError,
    PrivateAccountError,
)

logger = logging.getLogger("instaclient.response")


class ResponseHandler:
    """
    Response handler for Instagram API responses.

    Handles:
        - HTTP status code mapping to exceptions
        - Instagram internal error detection (status=fail, require_login)
        - JSON parsing with login-page detection
    """

    @staticmethod
    def _classify_error(msg: str, status_code: int, body: dict) -> None:
        """
        Raise a specific exception for a known error message.
        Shared by HTTP 400/403 and JSON status=fail.
        """
        if not msg:
            return

        msg_lower = msg.lower()

        if "login_required" in msg_lower or "login" in msg_lower:
            raise LoginRequired(msg, status_code=status_code, response=body)

        if "not_found" in msg_lower or "user_not_found" in msg_lower:
            raise NotFoundError(msg, status_code=status_code, response=body)

        if "private" in msg_lower:
            raise PrivateAccountError(msg, status_code=status_code, response=body)

    def handle(self, response) -> Dict[str, Any]:
        """
        Parse HTTP response and detect errors.

        Args:
            response: curl_cffi Response object

        Returns:
            Parsed JSON dict

        Raises:
            LoginRequired, RateLimitError, NotFoundError,
            PrivateAccountError, NetworkError, InstagramError
        """
        status = response.status_code

        # ─── 429 Rate Limit ───────────────────────────────────
        if status == 429:
            logger.warning("Rate limited (429)")
            raise RateLimitError("Rate limit - too many requests", status_code=429)

        # ─── 401 Unauthorized ─────────────────────────────────
        if status == 401:
            logger.warning("Session expired (401)")
            raise LoginRequired("Session expired. New session_id needed.", status_code=401)

        # ─── 404 Not Found ────────────────────────────────────
        if status == 404:
            raise NotFoundError("Resource not found", status_code=404)

        # ─── 400/403 Client Errors ────────────────────────────
        if status in (400, 403):
            try:
                body = response.json()
            except Exception:
                body = {}

            if body.get("require_login") or body.get("message") == "login_required":
                raise LoginRequired("Login required", status_code=status, response=body)

            if body.get("spam"):
                logger.warning(f"Spam detected ({status})")
                raise RateLimitError("Spam detected", status_code=status, response=body)

            msg = body.get("message", "")
            self._classify_error(msg, status_code=status, body=body)

            raise InstagramError(
                f"Instagram error: {msg or body or response.text[:200]}",
                status_code=status,
                response=body,
            )

        # ─── 5xx Server Errors ────────────────────────────────
        if status >= 500:
            raise NetworkError(f"Server error ({status})", status_code=status)

        # ─── Parse JSON ───────────────────────────────────────
        try:
            data = response.json()
        except Exception:
            text = response.text[:200]
            if "login" in text.lower() or "LoginAndSignupPage" in text:
                raise LoginRequired("Instagram redirected to login page", status_code=status)
            raise InstagramError(f"JSON parse error. Status: {status}", status_code=status)

        # ─── Instagram internal errors (status=fail) ──────────
        if isinstance(data, dict):
            if data.get("status") == "fail":
                message = data.get("message", "")
                self._classify_error(message, status_code=status, body=data)
                raise InstagramError(message, status_code=status, response=data)

            if data.get("require_login"):
                raise LoginRequired("require_login flag detected", status_code=status, response=data)

        return data
