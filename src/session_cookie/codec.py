# file: src/session_cookie/codec.py

"""
JSON serialization of session payloads.
"""

import json
from typing import Any

from .errors import CorruptPayloadError, InvalidPayloadError
from .validation import SessionPayload, is_session_payload


def serialize(payload: SessionPayload) -> bytes:
    """
    Serialize a session payload to compact UTF-8 JSON.

    Raises:
        InvalidPayloadError: For circular references, non-JSON values, NaN or Infinity
    """
    try:
        text = json.dumps(
            payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise InvalidPayloadError(f"Session data is not serializable: {e}") from e

    return text.encode("utf-8")


def deserialize(data: bytes) -> SessionPayload:
    """
    Parse decrypted bytes back into a session payload.

    Raises:
        CorruptPayloadError: If the bytes are not UTF-8 JSON, parse to
            nothing, or are not a structured record
    """
    try:
        payload = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise CorruptPayloadError("Cannot convert decoded cookie to valid JSON") from e

    # A parse that succeeds yet yields nothing is still a corrupt cookie
    if payload is None or payload is False or payload == 0 or payload == "":
        raise CorruptPayloadError("Cannot convert decoded cookie to valid JSON")

    if not is_session_payload(payload):
        raise CorruptPayloadError(
            f"Decoded cookie is not a session record: {type(payload).__name__}"
        )

    return payload


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")
