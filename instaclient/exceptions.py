"""
instaclient Exception Classes
"""


class InstagramError(Exception):
    """Base Instagram error class"""

    def __init__(self, message: str = "", status_code: int = 0, response: dict = None):
        self.message = message
        self.status_code = status_code
        self.response = response or {}
        super().__init__(self.message)


class InvalidEntityData(InstagramError):
    """Payload cannot be turned into an entity (missing or mismatched identity)"""
    pass


class ClientNotStarted(InstagramError):
    """Client used before start() or after close()"""
    pass


class LoginRequired(InstagramError):
    """Session expired or login required"""
    pass


class RateLimitError(InstagramError):
    """Too many requests - rate limited"""
    pass


class PrivateAccountError(InstagramError):
    """Private account - cannot access info"""
    pass


class NotFoundError(InstagramError):
    """User or resource not found"""
    pass


class ConversationNotFound(NotFoundError):
    """No cached private conversation with the user"""
    pass


class NetworkError(InstagramError):
    """Network error"""
    pass
