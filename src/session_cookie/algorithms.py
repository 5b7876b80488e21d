# file: src/session_cookie/algorithms.py

"""
Capability table for supported cipher algorithms.

Algorithm identifiers follow the OpenSSL naming used by most web stacks
(e.g. 'aes-256-gcm'). Each identifier resolves to an AlgorithmSpec that
says which mode to build and whether the mode produces an authentication
tag. Lookup is by exact name, never by substring.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import InvalidConfigError


TAG_SIZE = 16
AES_BLOCK_SIZE = 16

AEAD_MODES = ("gcm", "ccm", "ocb", "chacha20-poly1305")


@dataclass(frozen=True)
class AlgorithmSpec:
    """
    Static description of one cipher algorithm.

    Attributes:
        name: Canonical lowercase identifier
        mode: Mode family ('gcm', 'ccm', 'ocb', 'chacha20-poly1305',
              or 'cbc')
        key_lengths: Accepted key sizes in bytes
        iv_range: Inclusive (min, max) IV/nonce length in bytes
        produces_tag: True for authenticated modes
    """
    name: str
    mode: str
    key_lengths: Tuple[int, ...]
    iv_range: Tuple[int, int]
    produces_tag: bool

    def accepts_iv_length(self, length: int) -> bool:
        low, high = self.iv_range
        return low <= length <= high

    def accepts_key_length(self, length: int) -> bool:
        return length in self.key_lengths


# IV ranges match what the cryptography primitives accept for each mode
_AES_IV_RANGES = {
    "gcm": (8, 128),
    "ccm": (7, 13),
    "ocb": (12, 15),
    "cbc": (AES_BLOCK_SIZE, AES_BLOCK_SIZE),
}


def _build_table() -> Dict[str, AlgorithmSpec]:
    table = {}

    for bits in (128, 192, 256):
        for mode, iv_range in _AES_IV_RANGES.items():
            name = f"aes-{bits}-{mode}"
            table[name] = AlgorithmSpec(
                name=name,
                mode=mode,
                key_lengths=(bits // 8,),
                iv_range=iv_range,
                produces_tag=mode in AEAD_MODES,
            )

    table["chacha20-poly1305"] = AlgorithmSpec(
        name="chacha20-poly1305",
        mode="chacha20-poly1305",
        key_lengths=(32,),
        iv_range=(12, 12),
        produces_tag=True,
    )

    return table


ALGORITHMS: Dict[str, AlgorithmSpec] = _build_table()


def resolve_algorithm(name: str) -> AlgorithmSpec:
    """
    Look up the capability descriptor for an algorithm identifier.

    Args:
        name: Algorithm identifier, matched case-insensitively

    Returns:
        AlgorithmSpec for the algorithm

    Raises:
        InvalidConfigError: If the algorithm is not supported
    """
    spec = ALGORITHMS.get(name.strip().lower())
    if spec is None:
        raise InvalidConfigError(f"Unsupported algorithm: {name!r}")
    return spec


def supported_algorithms() -> List[str]:
    """Return the sorted list of supported algorithm identifiers."""
    return sorted(ALGORITHMS)
