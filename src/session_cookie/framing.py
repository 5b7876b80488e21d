# file: src/session_cookie/framing.py

"""
Frame assembly and parsing for encoded session cookies.
"""

import base64
import binascii
from typing import NamedTuple

from .errors import MalformedFrameError
from .validation import FRAME_DELIMITER, assert_frame_shape


class Frame(NamedTuple):
    iv: bytes
    auth_tag: bytes
    ciphertext: bytes


def join(iv: bytes, auth_tag: bytes, ciphertext: bytes) -> str:
    """
    Assemble an encoded cookie from frame components.

    Frame structure (before base64):
        hex(iv) "." hex(auth_tag) "." hex(ciphertext)

    auth_tag is empty for algorithms without a tag, leaving two
    adjacent delimiters.

    Args:
        iv: Initialization vector
        auth_tag: Authentication tag (may be empty)
        ciphertext: Encrypted payload

    Returns:
        base64 string ready for a cookie value
    """
    text = FRAME_DELIMITER.join([iv.hex(), auth_tag.hex(), ciphertext.hex()])
    return base64.b64encode(text.encode("ascii")).decode("ascii")


def split(encoded: str, requires_tag: bool = True) -> Frame:
    """
    Parse an encoded cookie into frame components.

    Args:
        encoded: base64 cookie text
        requires_tag: Whether the algorithm produces an authentication tag

    Returns:
        Frame of (iv, auth_tag, ciphertext)

    Raises:
        MalformedFrameError: If base64, delimiters, components or hex are invalid
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedFrameError(f"Cookie is not valid base64: {e}") from e

    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise MalformedFrameError("Decoded cookie is not ASCII text") from e

    iv_hex, tag_hex, data_hex = assert_frame_shape(text, requires_tag=requires_tag)

    return Frame(
        iv=_from_hex(iv_hex, "iv"),
        auth_tag=_from_hex(tag_hex, "auth tag"),
        ciphertext=_from_hex(data_hex, "ciphertext"),
    )


def _from_hex(text: str, label: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as e:
        raise MalformedFrameError(f"Invalid hex in {label} component: {e}") from e
