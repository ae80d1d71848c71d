"""
Session
=======
Cookie session for the private web API.
Loaded from a .env file (browser cookies copied from DevTools).
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from .config import (
    DEFAULT_USER_AGENT,
    ENV_CSRF_TOKEN,
    ENV_DS_USER_ID,
    ENV_SESSION_ID,
    ENV_USER_AGENT,
)
from .exceptions import LoginRequired

logger = logging.getLogger("instaclient.session")


@dataclass
class SessionInfo:
    """Single Instagram session data"""

    session_id: str
    csrf_token: str
    ds_user_id: str
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def cookies(self) -> Dict[str, str]:
        """Cookies as dict"""
        return {
            "sessionid": self.session_id,
            "csrftoken": self.csrf_token,
            "ds_user_id": self.ds_user_id,
        }

    @classmethod
    def from_env(cls, env_path: Optional[str] = ".env") -> "SessionInfo":
        """
        Load session cookies from environment (and .env file if present).

        Env vars:
            SESSION_ID, CSRF_TOKEN, DS_USER_ID (required)
            USER_AGENT (optional)

        Raises:
            LoginRequired: a required cookie is missing
        """
        if env_path and Path(env_path).exists():
            load_dotenv(env_path, override=True)
            logger.debug(f"Loaded environment from {env_path}")

        session_id = os.getenv(ENV_SESSION_ID, "")
        csrf_token = os.getenv(ENV_CSRF_TOKEN, "")
        ds_user_id = os.getenv(ENV_DS_USER_ID, "")

        missing = [
            name for name, value in (
                (ENV_SESSION_ID, session_id),
                (ENV_CSRF_TOKEN, csrf_token),
                (ENV_DS_USER_ID, ds_user_id),
            ) if not value
        ]
        if missing:
            raise LoginRequired(f"Missing session values: {', '.join(missing)}. Check your .env file.")

        return cls(
            session_id=session_id,
            csrf_token=csrf_token,
            ds_user_id=ds_user_id,
            user_agent=os.getenv(ENV_USER_AGENT, "") or DEFAULT_USER_AGENT,
        )
