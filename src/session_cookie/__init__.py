# file: src/session_cookie/__init__.py

"""
Encrypted session cookies.

Encodes structured session data into a single authenticated, encrypted,
base64 string that fits in an HTTP cookie, and reverses it on read.

Public API:
    - encode(payload, config) -> str
    - decode(text, config) -> payload
    - load_config(path=None, *, secret) -> CipherConfig
    - supported_algorithms() -> list of algorithm identifiers
"""

from .cookie import encode, decode
from .config import CipherConfig, MAX_COOKIE_LENGTH, load_config
from .algorithms import supported_algorithms
from .errors import (
    SessionCookieError,
    InvalidConfigError,
    InvalidPayloadError,
    InvalidInputError,
    MalformedFrameError,
    AuthenticationFailureError,
    CorruptPayloadError,
    EncryptionFailureError,
    SizeLimitExceededError,
)

__version__ = "1.0.0"

__all__ = [
    "encode",
    "decode",
    "CipherConfig",
    "MAX_COOKIE_LENGTH",
    "load_config",
    "supported_algorithms",
    "SessionCookieError",
    "InvalidConfigError",
    "InvalidPayloadError",
    "InvalidInputError",
    "MalformedFrameError",
    "AuthenticationFailureError",
    "CorruptPayloadError",
    "EncryptionFailureError",
    "SizeLimitExceededError",
]
