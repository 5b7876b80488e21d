# file: src/session_cookie/errors.py

"""
Session cookie exception hierarchy.

All exceptions inherit from SessionCookieError for unified handling.
Callers can tell bad input or configuration apart from a tampered cookie
without matching on message text.
"""


class SessionCookieError(Exception):
    """Base exception for all session cookie errors."""
    pass


class InvalidConfigError(SessionCookieError):
    """Raised when the cipher configuration is missing or unusable."""
    pass


class InvalidPayloadError(SessionCookieError):
    """Raised when session data cannot be encoded."""
    pass


class InvalidInputError(SessionCookieError):
    """Raised when decode receives empty or non-text input."""
    pass


class MalformedFrameError(SessionCookieError):
    """Raised when the cookie frame structure is invalid."""
    pass


class AuthenticationFailureError(SessionCookieError):
    """Raised when authentication tag verification fails."""
    pass


class CorruptPayloadError(SessionCookieError):
    """Raised when decrypted data is not a valid session payload."""
    pass


class EncryptionFailureError(SessionCookieError):
    """Raised when the underlying cipher fails during encryption."""
    pass


class SizeLimitExceededError(SessionCookieError):
    """Raised when the encoded cookie exceeds the byte ceiling."""

    def __init__(self, message: str, length: int = None, limit: int = None):
        super().__init__(message)
        self.length = length
        self.limit = limit
