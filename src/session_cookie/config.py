# file: src/session_cookie/config.py

"""
Cipher configuration model and YAML loader.
"""

import os
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfigError


# Practical per-cookie byte ceiling
MAX_COOKIE_LENGTH = 4093

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")


class CipherConfig(BaseModel):
    """
    Per-call cipher configuration.

    Fields
    - algorithm: cipher identifier such as 'aes-256-gcm'.
    - iv_length: IV/nonce size in bytes; must suit the algorithm.
    - secret: key material (bytes, or str used as its UTF-8 bytes).
    - max_length: byte ceiling for the encoded cookie.

    Notes
    - `ivLength` and `maxLength` are accepted as aliases.
    - The secret never appears in repr().
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    algorithm: str = Field(min_length=1, strict=True)
    iv_length: int = Field(gt=0, strict=True, alias="ivLength")
    secret: Union[bytes, str] = Field(repr=False)
    max_length: int = Field(
        default=MAX_COOKIE_LENGTH, gt=0, strict=True, alias="maxLength"
    )

    @field_validator("secret", mode="before")
    @classmethod
    def _check_secret(cls, value: Any) -> Union[bytes, str]:
        if not isinstance(value, (bytes, str)):
            raise ValueError("secret must be bytes or str")
        if not value:
            raise ValueError("secret must not be empty")
        return value

    @property
    def key_bytes(self) -> bytes:
        if isinstance(self.secret, str):
            return self.secret.encode("utf-8")
        return self.secret


def load_config(
    path: Optional[str] = None,
    *,
    secret: Union[bytes, str],
    **overrides: Any
) -> CipherConfig:
    """
    Build a CipherConfig from a YAML file plus a caller-held secret.

    Args:
        path: YAML file with algorithm / iv_length / max_length.
              If None, uses the packaged default_config.yaml.
        secret: Key material. Never read from the file.
        **overrides: Field values that replace those from the file

    Returns:
        Validated CipherConfig

    Raises:
        FileNotFoundError: If an explicit path does not exist
        InvalidConfigError: If the file or resulting values are invalid

    Example:
        >>> config = load_config(secret=os.urandom(32))
        >>> config.algorithm
        'aes-256-gcm'
    """
    config_path = path if path is not None else DEFAULT_CONFIG_PATH

    with open(config_path, "r") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigError(f"Cannot parse config file {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise InvalidConfigError(f"Config file {config_path} must contain a mapping")

    if "secret" in raw:
        raise InvalidConfigError("Secrets must not be stored in config files")

    return parse_config({**raw, **overrides, "secret": secret})


def parse_config(values: Mapping[str, Any]) -> CipherConfig:
    """
    Validate a mapping into a CipherConfig.

    Raises:
        InvalidConfigError: Naming every missing or invalid field
    """
    try:
        return CipherConfig.model_validate(dict(values))
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise InvalidConfigError(
            f"Invalid cipher config, check fields: {', '.join(fields)}"
        ) from e
