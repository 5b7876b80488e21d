# file: tests/test_ciphers.py

"""
Unit tests for the cipher engine and algorithm table.

Test coverage:
    - Capability lookup (exact, case-insensitive)
    - Tag produced only by authenticated modes
    - GCM tag read after finalization matches the one-shot AEAD
    - Tag verification and failure mapping
    - Backends missing a primitive
"""

import pytest
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from session_cookie import ciphers
from session_cookie.algorithms import (
    ALGORITHMS,
    TAG_SIZE,
    resolve_algorithm,
    supported_algorithms,
)
from session_cookie.errors import (
    AuthenticationFailureError,
    CorruptPayloadError,
    EncryptionFailureError,
    InvalidConfigError,
)


KEY_32 = bytes(range(32))
IV_12 = bytes(12)
IV_16 = bytes(range(16))
PLAINTEXT = b'{"user_id":42,"roles":["admin"]}'


class TestAlgorithmTable:
    """Test algorithm capability lookup."""

    def test_resolve_case_insensitive(self):
        """Test names are matched ignoring case."""
        spec = resolve_algorithm('AES-256-GCM')

        assert spec.name == 'aes-256-gcm'
        assert spec.mode == 'gcm'
        assert spec.produces_tag is True
        assert spec.key_lengths == (32,)

    @pytest.mark.parametrize('name', ['aes-128-gcm', 'aes-192-ccm', 'aes-256-ocb', 'chacha20-poly1305'])
    def test_authenticated_modes_produce_tag(self, name):
        """Test AEAD modes are flagged as tag-producing."""
        assert resolve_algorithm(name).produces_tag

    @pytest.mark.parametrize('name', ['aes-128-cbc', 'aes-192-cbc', 'aes-256-cbc'])
    def test_unauthenticated_modes_have_no_tag(self, name):
        """Test CBC is not tag-producing."""
        assert not resolve_algorithm(name).produces_tag

    @pytest.mark.parametrize('name', ['gcm', 'aes-256-gcm-x', 'my-ccm-cipher', 'aes-512-gcm'])
    def test_substring_matches_are_rejected(self, name):
        """Test a name merely containing a mode is not accepted."""
        with pytest.raises(InvalidConfigError, match="Unsupported algorithm"):
            resolve_algorithm(name)

    @pytest.mark.parametrize('name', ['aes-128-ctr', 'aes-256-ctr', 'aes-256-cfb', 'aes-256-ofb'])
    def test_stream_modes_not_offered(self, name):
        """Test malleable stream modes are not in the table."""
        with pytest.raises(InvalidConfigError, match="Unsupported algorithm"):
            resolve_algorithm(name)

    def test_supported_algorithms_sorted(self):
        """Test the public list mirrors the table."""
        names = supported_algorithms()

        assert names == sorted(ALGORITHMS)
        assert 'chacha20-poly1305' in names
        assert 'aes-256-cbc' in names

    def test_iv_ranges(self):
        """Test IV acceptance per mode."""
        assert resolve_algorithm('aes-256-gcm').accepts_iv_length(12)
        assert not resolve_algorithm('aes-256-gcm').accepts_iv_length(4)
        assert resolve_algorithm('aes-256-ccm').accepts_iv_length(7)
        assert not resolve_algorithm('aes-256-ccm').accepts_iv_length(14)
        assert resolve_algorithm('aes-256-cbc').accepts_iv_length(16)
        assert not resolve_algorithm('aes-256-cbc').accepts_iv_length(12)


class TestEncrypt:
    """Test ciphers.encrypt."""

    def test_gcm_tag_matches_one_shot_aead(self):
        """Test the tag read after finalize equals AESGCM's appended tag."""
        spec = resolve_algorithm('aes-256-gcm')

        ciphertext, tag = ciphers.encrypt(spec, KEY_32, IV_12, PLAINTEXT)

        assert len(tag) == TAG_SIZE
        assert ciphertext + tag == AESGCM(KEY_32).encrypt(IV_12, PLAINTEXT, None)

    @pytest.mark.parametrize('name,iv', [
        ('aes-256-ccm', bytes(13)),
        ('aes-256-ocb', bytes(12)),
        ('chacha20-poly1305', bytes(12)),
    ])
    def test_sealed_modes_split_tag(self, name, iv):
        """Test one-shot AEADs return ciphertext and a 16-byte tag."""
        ciphertext, tag = ciphers.encrypt(resolve_algorithm(name), KEY_32, iv, PLAINTEXT)

        assert len(tag) == TAG_SIZE
        assert len(ciphertext) == len(PLAINTEXT)

    def test_cbc_pads_and_returns_empty_tag(self):
        """Test CBC ciphertext is block aligned with no tag."""
        ciphertext, tag = ciphers.encrypt(resolve_algorithm('aes-256-cbc'), KEY_32, IV_16, PLAINTEXT)

        assert tag == b''
        assert len(ciphertext) % 16 == 0
        assert len(ciphertext) > len(PLAINTEXT)

    def test_fresh_context_per_call(self):
        """Test identical inputs give identical outputs (no carried state)."""
        spec = resolve_algorithm('aes-256-gcm')

        assert ciphers.encrypt(spec, KEY_32, IV_12, PLAINTEXT) == ciphers.encrypt(spec, KEY_32, IV_12, PLAINTEXT)


class TestDecrypt:
    """Test ciphers.decrypt."""

    @pytest.mark.parametrize('name,iv', [
        ('aes-256-gcm', IV_12),
        ('aes-256-ccm', bytes(13)),
        ('aes-256-ocb', bytes(15)),
        ('chacha20-poly1305', IV_12),
        ('aes-256-cbc', IV_16),
    ])
    def test_roundtrip(self, name, iv):
        """Test decrypt inverts encrypt."""
        spec = resolve_algorithm(name)

        ciphertext, tag = ciphers.encrypt(spec, KEY_32, iv, PLAINTEXT)

        assert ciphers.decrypt(spec, KEY_32, iv, tag, ciphertext) == PLAINTEXT

    @pytest.mark.parametrize('name,iv', [
        ('aes-256-gcm', IV_12),
        ('aes-256-ccm', bytes(13)),
        ('aes-256-ocb', bytes(12)),
        ('chacha20-poly1305', IV_12),
    ])
    def test_tag_mismatch(self, name, iv):
        """Test a wrong tag raises AuthenticationFailureError."""
        spec = resolve_algorithm(name)
        ciphertext, tag = ciphers.encrypt(spec, KEY_32, iv, PLAINTEXT)
        bad_tag = bytes([tag[0] ^ 0xFF]) + tag[1:]

        with pytest.raises(AuthenticationFailureError):
            ciphers.decrypt(spec, KEY_32, iv, bad_tag, ciphertext)

    @pytest.mark.parametrize('name,iv', [
        ('aes-256-gcm', IV_12),
        ('chacha20-poly1305', IV_12),
    ])
    def test_short_tag(self, name, iv):
        """Test a truncated tag raises AuthenticationFailureError."""
        spec = resolve_algorithm(name)
        ciphertext, tag = ciphers.encrypt(spec, KEY_32, iv, PLAINTEXT)

        with pytest.raises(AuthenticationFailureError):
            ciphers.decrypt(spec, KEY_32, iv, tag[:8], ciphertext)

    def test_cbc_bad_length_is_corrupt(self):
        """Test CBC input that is not block aligned."""
        spec = resolve_algorithm('aes-256-cbc')
        ciphertext, _ = ciphers.encrypt(spec, KEY_32, IV_16, PLAINTEXT)

        with pytest.raises(CorruptPayloadError):
            ciphers.decrypt(spec, KEY_32, IV_16, b'', ciphertext[:-1])


class TestMissingBackendSupport:
    """Test OpenSSL builds that lack a primitive."""

    def _unavailable(self, *args, **kwargs):
        raise UnsupportedAlgorithm("OCB3 is not supported by this version of OpenSSL.")

    def test_decrypt_maps_to_config_error(self, monkeypatch):
        """Test a missing AEAD on decrypt is a config error, not a crash."""
        monkeypatch.setattr(ciphers, 'AESOCB3', self._unavailable)

        with pytest.raises(InvalidConfigError, match="not supported by this OpenSSL build"):
            ciphers.decrypt(resolve_algorithm('aes-256-ocb'), KEY_32, IV_12, bytes(TAG_SIZE), PLAINTEXT)

    def test_decrypt_cbc_maps_to_config_error(self, monkeypatch):
        """Test a missing block cipher on decrypt is a config error."""
        monkeypatch.setattr(ciphers, 'Cipher', self._unavailable)

        with pytest.raises(InvalidConfigError, match="aes-256-cbc"):
            ciphers.decrypt(resolve_algorithm('aes-256-cbc'), KEY_32, IV_16, b'', bytes(32))

    def test_encrypt_maps_to_encryption_failure(self, monkeypatch):
        """Test a missing AEAD on encrypt stays an encryption failure."""
        monkeypatch.setattr(ciphers, 'AESOCB3', self._unavailable)

        with pytest.raises(EncryptionFailureError, match="aes-256-ocb"):
            ciphers.encrypt(resolve_algorithm('aes-256-ocb'), KEY_32, IV_12, PLAINTEXT)
