# file: src/session_cookie/testing_utils.py

"""
Testing utilities for session cookies.

Provides tamper injection for validation and robustness testing.
Used only in test/evaluation contexts.
"""

import base64
import random
from typing import Optional


SEGMENTS = ("iv", "tag", "ciphertext")


def flip_segment_byte(encoded: str, segment: str, index: int = 0, mask: int = 0x01) -> str:
    """
    Flip bits of one byte inside a frame segment and re-encode the cookie.

    The result is still valid base64 and valid hex, so only the
    cryptographic checks can notice the change.

    Args:
        encoded: Cookie produced by encode()
        segment: 'iv', 'tag' or 'ciphertext'
        index: Byte position within the segment (negative counts from the end)
        mask: Bits to flip (non-zero)

    Returns:
        Tampered cookie

    Example:
        >>> tampered = flip_segment_byte(cookie, "ciphertext", index=-1)
    """
    if segment not in SEGMENTS:
        raise ValueError(f"segment must be one of {SEGMENTS}, got {segment!r}")
    if not 0 < mask <= 0xFF:
        raise ValueError(f"mask must be in [1, 255], got {mask}")

    components = base64.b64decode(encoded).decode("ascii").split(".")
    position = SEGMENTS.index(segment)

    data = bytearray(bytes.fromhex(components[position]))
    if not data:
        raise ValueError(f"{segment} segment is empty")
    data[index] ^= mask
    components[position] = data.hex()

    return base64.b64encode(".".join(components).encode("ascii")).decode("ascii")


def inject_bit_errors(
    encoded: str,
    error_rate: float,
    seed: Optional[int] = None
) -> str:
    """
    Flip random bits across the ciphertext segment of a cookie.

    WARNING: Only for testing/evaluation contexts.

    Args:
        encoded: Cookie produced by encode()
        error_rate: Probability of bit flip (0.0 to 1.0)
        seed: Random seed for reproducibility (optional)

    Returns:
        Cookie with corrupted ciphertext (at least one bit flipped)
    """
    if not 0.0 <= error_rate <= 1.0:
        raise ValueError(f"error_rate must be in [0, 1], got {error_rate}")

    rng = random.Random(seed)

    components = base64.b64decode(encoded).decode("ascii").split(".")
    corrupted = bytearray(bytes.fromhex(components[2]))

    total_bits = len(corrupted) * 8
    num_errors = max(1, int(total_bits * error_rate))

    for pos in rng.sample(range(total_bits), num_errors):
        corrupted[pos // 8] ^= (1 << (pos % 8))

    components[2] = corrupted.hex()
    return base64.b64encode(".".join(components).encode("ascii")).decode("ascii")
