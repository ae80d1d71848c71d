"""
instaclient Configuration and Constants
"""

# ============================================================
# API Base
# ============================================================
BASE_URL = "https://www.instagram.com"
API_BASE = f"{BASE_URL}/api/v1"

# Instagram Web App ID (required for all requests)
IG_APP_ID = "1217981644879628"

# ============================================================
# Transport
# ============================================================
# curl_cffi browser impersonation key
BROWSER_IMPERSONATION = "chrome131"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)

# Timeouts (seconds)
CONNECT_TIMEOUT = 10
REQUEST_TIMEOUT = 30

# ============================================================
# Pagination
# ============================================================
# Users per page for followers/following feeds
FOLLOWERS_PAGE_SIZE = 50

# ============================================================
# Environment variable names (.env)
# ============================================================
ENV_SESSION_ID = "SESSION_ID"
ENV_CSRF_TOKEN = "CSRF_TOKEN"
ENV_DS_USER_ID = "DS_USER_ID"
ENV_USER_AGENT = "USER_AGENT"
