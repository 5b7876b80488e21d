# file: src/session_cookie/cookie.py

"""
Session cookie encoding and decoding.

Main encode/decode functions. Every call is independent: a fresh IV and a
fresh cipher context are built per call and nothing is cached.
"""

import logging
import secrets
from typing import Any, Mapping, Union

from . import ciphers, codec, framing
from .algorithms import resolve_algorithm
from .config import CipherConfig
from .errors import AuthenticationFailureError, MalformedFrameError
from .validation import (
    SessionPayload,
    assert_cipher_params,
    assert_config,
    assert_decodable,
    assert_encodable,
    assert_size_bound,
)

logger = logging.getLogger(__name__)

ConfigLike = Union[CipherConfig, Mapping[str, Any]]


def encode(payload: SessionPayload, config: ConfigLike) -> str:
    """
    Encrypt a session payload into a cookie-safe string.

    Output format (base64 of):
        hex(iv).hex(auth_tag).hex(ciphertext)

    Args:
        payload: Session data (dict with str keys, or list)
        config: CipherConfig or mapping with algorithm, iv_length, secret

    Returns:
        Encoded cookie no longer than config.max_length bytes

    Raises:
        InvalidPayloadError: If payload is not a serializable record
        InvalidConfigError: If the config is missing fields or unusable
        EncryptionFailureError: If the cipher fails
        SizeLimitExceededError: If the cookie would exceed the ceiling

    Example:
        >>> config = {'algorithm': 'aes-256-gcm', 'iv_length': 12, 'secret': key}
        >>> cookie = encode({'user_id': 42}, config)
    """
    assert_encodable(payload)
    config = assert_config(config)

    algorithm = resolve_algorithm(config.algorithm)
    assert_cipher_params(algorithm, config)

    iv = secrets.token_bytes(config.iv_length)
    plaintext = codec.serialize(payload)

    # Tag is read from the finalized context inside the cipher engine
    ciphertext, auth_tag = ciphers.encrypt(algorithm, config.key_bytes, iv, plaintext)

    encoded = framing.join(iv, auth_tag, ciphertext)
    assert_size_bound(encoded, config.max_length)

    logger.debug(
        f"Encoded session with {algorithm.name}: "
        f"{len(plaintext)} plaintext bytes -> {len(encoded)} cookie bytes"
    )
    return encoded


def decode(text: Union[str, bytes], config: ConfigLike) -> SessionPayload:
    """
    Decrypt and authenticate an encoded cookie.

    Args:
        text: Encoded cookie produced by encode()
        config: Cipher configuration (must match encoding)

    Returns:
        The session payload

    Raises:
        InvalidInputError: If text is empty or not text
        InvalidConfigError: If the config is missing fields or unusable
        MalformedFrameError: If the frame structure is invalid
        AuthenticationFailureError: If tag verification fails
        CorruptPayloadError: If the decrypted data is not a session record
    """
    text = assert_decodable(text)
    config = assert_config(config)

    algorithm = resolve_algorithm(config.algorithm)
    assert_cipher_params(algorithm, config)

    frame = framing.split(text, requires_tag=algorithm.produces_tag)
    if len(frame.iv) != config.iv_length:
        raise MalformedFrameError(
            f"IV length mismatch: got {len(frame.iv)} bytes, expected {config.iv_length}"
        )

    try:
        plaintext = ciphers.decrypt(
            algorithm, config.key_bytes, frame.iv, frame.auth_tag, frame.ciphertext
        )
    except AuthenticationFailureError:
        # Could be tampering, a rotated secret, or a cookie from another app
        logger.warning(f"Rejected session cookie: {algorithm.name} tag did not verify")
        raise

    payload = codec.deserialize(plaintext)

    logger.debug(f"Decoded session with {algorithm.name}: {len(plaintext)} plaintext bytes")
    return payload
