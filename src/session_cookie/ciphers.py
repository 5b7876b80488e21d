# file: src/session_cookie/ciphers.py

"""
Uniform encrypt/decrypt over the supported cipher modes.

Every call builds a fresh cipher context bound to one key and one IV.
Authenticated modes return (or verify) a 16-byte tag; CBC returns an
empty tag.
"""

from typing import Tuple

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import (
    AESCCM,
    AESOCB3,
    ChaCha20Poly1305,
)

from .algorithms import AES_BLOCK_SIZE, TAG_SIZE, AlgorithmSpec
from .errors import (
    AuthenticationFailureError,
    CorruptPayloadError,
    EncryptionFailureError,
    InvalidConfigError,
)


_PRIMITIVE_ERRORS = (ValueError, TypeError, OverflowError, UnsupportedAlgorithm)


def encrypt(
    algorithm: AlgorithmSpec,
    key: bytes,
    iv: bytes,
    plaintext: bytes
) -> Tuple[bytes, bytes]:
    """
    Encrypt plaintext under a fresh cipher context.

    Args:
        algorithm: Resolved algorithm descriptor
        key: Key bytes sized for the algorithm
        iv: Initialization vector / nonce
        plaintext: Data to encrypt

    Returns:
        Tuple of (ciphertext, auth_tag). auth_tag is b"" for modes
        that do not produce one.

    Raises:
        EncryptionFailureError: If the underlying primitive fails
    """
    try:
        if algorithm.mode == "gcm":
            return _encrypt_gcm(key, iv, plaintext)
        if algorithm.produces_tag:
            return _encrypt_sealed(algorithm, key, iv, plaintext)
        return _encrypt_cbc(key, iv, plaintext), b""
    except _PRIMITIVE_ERRORS as e:
        raise EncryptionFailureError(
            f"{algorithm.name} encryption failed: {e}"
        ) from e


def decrypt(
    algorithm: AlgorithmSpec,
    key: bytes,
    iv: bytes,
    auth_tag: bytes,
    ciphertext: bytes
) -> bytes:
    """
    Decrypt ciphertext, verifying the tag for authenticated modes.

    Args:
        algorithm: Resolved algorithm descriptor
        key: Key bytes (same as encryption)
        iv: Initialization vector from the frame
        auth_tag: Tag from the frame (b"" for unauthenticated modes)
        ciphertext: Encrypted data

    Returns:
        Decrypted plaintext

    Raises:
        AuthenticationFailureError: If the tag does not verify
        CorruptPayloadError: If CBC decryption or unpadding fails
        InvalidConfigError: If the OpenSSL backend lacks the algorithm
    """
    try:
        if algorithm.produces_tag:
            return _decrypt_authenticated(algorithm, key, iv, auth_tag, ciphertext)

        try:
            return _decrypt_cbc(key, iv, ciphertext)
        except ValueError as e:
            raise CorruptPayloadError(
                f"{algorithm.name} decryption failed: {e}"
            ) from e
    except UnsupportedAlgorithm as e:
        raise InvalidConfigError(
            f"{algorithm.name} is not supported by this OpenSSL build"
        ) from e


def _decrypt_authenticated(
    algorithm: AlgorithmSpec,
    key: bytes,
    iv: bytes,
    auth_tag: bytes,
    ciphertext: bytes
) -> bytes:
    try:
        if algorithm.mode == "gcm":
            return _decrypt_gcm(key, iv, auth_tag, ciphertext)
        return _decrypt_sealed(algorithm, key, iv, auth_tag, ciphertext)
    except InvalidTag as e:
        raise AuthenticationFailureError(
            "Authentication tag verification failed"
        ) from e
    except ValueError as e:
        # Truncated or oversized tag
        raise AuthenticationFailureError(
            f"Authentication tag rejected: {e}"
        ) from e


def _encrypt_gcm(key: bytes, iv: bytes, plaintext: bytes) -> Tuple[bytes, bytes]:
    encryptor = Cipher(algorithms.AES(key), modes.GCM(iv)).encryptor()
    ciphertext = encryptor.update(plaintext) + encryptor.finalize()

    # The tag only exists once the context is finalized
    return ciphertext, encryptor.tag


def _decrypt_gcm(key: bytes, iv: bytes, tag: bytes, ciphertext: bytes) -> bytes:
    decryptor = Cipher(algorithms.AES(key), modes.GCM(iv)).decryptor()
    plaintext = decryptor.update(ciphertext)
    return plaintext + decryptor.finalize_with_tag(tag)


def _sealing_cipher(algorithm: AlgorithmSpec, key: bytes):
    if algorithm.mode == "ccm":
        return AESCCM(key, tag_length=TAG_SIZE)
    if algorithm.mode == "ocb":
        return AESOCB3(key)
    if algorithm.mode == "chacha20-poly1305":
        return ChaCha20Poly1305(key)
    raise ValueError(f"No AEAD primitive for mode {algorithm.mode!r}")


def _encrypt_sealed(
    algorithm: AlgorithmSpec,
    key: bytes,
    iv: bytes,
    plaintext: bytes
) -> Tuple[bytes, bytes]:
    # One-shot AEADs return ciphertext || tag
    sealed = _sealing_cipher(algorithm, key).encrypt(iv, plaintext, None)
    return sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]


def _decrypt_sealed(
    algorithm: AlgorithmSpec,
    key: bytes,
    iv: bytes,
    tag: bytes,
    ciphertext: bytes
) -> bytes:
    if len(tag) != TAG_SIZE:
        raise ValueError(f"expected {TAG_SIZE}-byte tag, got {len(tag)}")
    return _sealing_cipher(algorithm, key).decrypt(iv, ciphertext + tag, None)


def _encrypt_cbc(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
    padded = padder.update(plaintext) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def _decrypt_cbc(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
    return unpadder.update(padded) + unpadder.finalize()
