# file: src/session_cookie/validation.py

"""
Structural and size checks applied before and after each pipeline stage.

Each check raises a distinct error type so callers can separate bad input,
misconfiguration and tampered cookies.
"""

from typing import Any, Dict, List, Mapping, Union

from pydantic import ConfigDict, JsonValue, TypeAdapter, ValidationError

from .algorithms import AlgorithmSpec
from .config import MAX_COOKIE_LENGTH, CipherConfig, parse_config
from .errors import (
    InvalidConfigError,
    InvalidInputError,
    InvalidPayloadError,
    MalformedFrameError,
    SizeLimitExceededError,
)


FRAME_DELIMITER = "."
FRAME_COMPONENTS = 3

# A session payload is a structured record: an object with string keys or an
# array. Nested values must be JSON values too, so tuples and non-str keys
# are refused at any depth.
SessionPayload = Union[Dict[str, JsonValue], List[JsonValue]]

_payload_adapter = TypeAdapter(SessionPayload, config=ConfigDict(strict=True))


def is_session_payload(data: Any) -> bool:
    """Return True if data has the shape of a session payload."""
    try:
        _payload_adapter.validate_python(data)
    except ValidationError:
        return False
    return True


def assert_config(config: Any) -> CipherConfig:
    """
    Require algorithm, iv_length and secret to be present and truthy.

    Args:
        config: CipherConfig or mapping with the same fields

    Returns:
        Validated CipherConfig

    Raises:
        InvalidConfigError: If any required field is missing or invalid
    """
    if isinstance(config, CipherConfig):
        return config

    if config is None or not isinstance(config, Mapping):
        raise InvalidConfigError(
            "Cipher config {algorithm, iv_length, secret} is required"
        )

    return parse_config(config)


def assert_cipher_params(algorithm: AlgorithmSpec, config: CipherConfig) -> None:
    """
    Require the IV length and key size to suit the algorithm.

    Raises:
        InvalidConfigError: If iv_length or the secret size is not accepted
    """
    if not algorithm.accepts_iv_length(config.iv_length):
        low, high = algorithm.iv_range
        expected = str(low) if low == high else f"{low}-{high}"
        raise InvalidConfigError(
            f"{algorithm.name} requires an IV of {expected} bytes, got {config.iv_length}"
        )

    key_length = len(config.key_bytes)
    if not algorithm.accepts_key_length(key_length):
        expected = "/".join(str(n) for n in algorithm.key_lengths)
        raise InvalidConfigError(
            f"{algorithm.name} requires a {expected}-byte secret, got {key_length} bytes"
        )


def assert_encodable(data: Any) -> None:
    """
    Require data to be a structured record (dict with str keys, or list).

    Raises:
        InvalidPayloadError: For None, primitives and other containers
    """
    if not is_session_payload(data):
        raise InvalidPayloadError(
            f"Session data is invalid, cannot encrypt {type(data).__name__}"
        )


def assert_decodable(text: Any) -> str:
    """
    Require non-empty cookie text.

    Args:
        text: Encoded cookie as str, or ASCII bytes

    Returns:
        Cookie text as str

    Raises:
        InvalidInputError: If text is missing, empty or not text
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidInputError("Cannot read encrypted cookie, non-ASCII bytes") from e

    if not isinstance(text, str):
        raise InvalidInputError(
            f"Cannot read encrypted cookie, expected str, got {type(text).__name__}"
        )

    if len(text.encode("utf-8")) < 1:
        raise InvalidInputError("Cannot read encrypted cookie, empty data")

    return text


def assert_frame_shape(text: str, requires_tag: bool = True) -> List[str]:
    """
    Require the decoded frame text to hold iv.tag.ciphertext.

    Components past the third are ignored. The tag slot must be filled
    for tag-producing algorithms and empty otherwise.

    Args:
        text: base64-decoded frame text
        requires_tag: Whether the algorithm produces an authentication tag

    Returns:
        The three positional components [iv, tag, ciphertext] as hex text

    Raises:
        MalformedFrameError: If the delimiter or a component is missing
    """
    if FRAME_DELIMITER not in text:
        raise MalformedFrameError("Cannot evaluate encrypted text, missing delimiter")

    components = text.split(FRAME_DELIMITER)
    if len(components) < FRAME_COMPONENTS:
        raise MalformedFrameError(
            f"Cannot evaluate encrypted text, expected {FRAME_COMPONENTS} components, "
            f"got {len(components)}"
        )

    iv_hex, tag_hex, data_hex = components[:FRAME_COMPONENTS]
    if not iv_hex or not data_hex:
        raise MalformedFrameError("Cannot evaluate encrypted text, empty component")

    if requires_tag and not tag_hex:
        raise MalformedFrameError("Cannot evaluate encrypted text, missing auth tag")
    if not requires_tag and tag_hex:
        raise MalformedFrameError("Unexpected auth tag for unauthenticated algorithm")

    return [iv_hex, tag_hex, data_hex]


def assert_size_bound(encoded: str, limit: int = MAX_COOKIE_LENGTH) -> None:
    """
    Require the encoded cookie to fit within the byte ceiling.

    Raises:
        SizeLimitExceededError: If the UTF-8 byte length exceeds limit
    """
    length = len(encoded.encode("utf-8"))
    if length > limit:
        raise SizeLimitExceededError(
            f"Cannot encrypt the session, max cookie length exceeded ({length} > {limit})",
            length=length,
            limit=limit,
        )
