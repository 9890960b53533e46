"""
jwtlab Encoding - base64url framing and deterministic JSON.

Encoding reuses jwcrypto's JOSE helpers so tokens are framed exactly like
other JOSE implementations frame them. Decoding is stricter than jwcrypto's:
characters outside the base64url alphabet are rejected instead of skipped.
"""

import base64
import binascii
import json
import re
from typing import Any, Dict, List, Union

from jwcrypto.common import base64url_encode, json_encode

from jwtlab.errors import InvalidEncoding, InvalidJSON


JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]
JSONObject = Dict[str, Any]

_B64URL_RE = re.compile(r"\A[A-Za-z0-9_-]*={0,2}\Z")


def b64url_encode(data: Union[bytes, str]) -> str:
    """Encode bytes (or UTF-8 text) as unpadded base64url."""
    return base64url_encode(data)


def b64url_decode(segment: str) -> bytes:
    """
    Decode a base64url segment, restoring any missing '=' padding.

    Raises:
        InvalidEncoding: If the segment contains characters outside the
            base64url alphabet or has an impossible length.
    """
    if not isinstance(segment, str) or not _B64URL_RE.match(segment):
        raise InvalidEncoding()

    padded = segment + "=" * (-len(segment) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(f"Invalid base64url encoding: {e}") from e


def canonical_json(obj: JSONObject) -> str:
    """Compact JSON with object keys sorted at every nesting level."""
    try:
        return json_encode(obj)
    except RecursionError as e:
        raise InvalidJSON("JSON value is nested too deeply") from e
    except (TypeError, ValueError) as e:
        raise InvalidJSON(f"Value is not JSON serializable: {e}") from e


def parse_json_object(data: bytes) -> JSONObject:
    """
    Parse UTF-8 bytes as a JSON object.

    Raises:
        InvalidJSON: If the bytes are not UTF-8, not JSON, or not an object.
    """
    try:
        obj = json.loads(data.decode("utf-8"))
    except RecursionError as e:
        raise InvalidJSON("JSON structure is nested too deeply") from e
    except (UnicodeDecodeError, ValueError) as e:
        raise InvalidJSON(f"Invalid JSON structure: {e}") from e

    if not isinstance(obj, dict):
        raise InvalidJSON(f"Expected a JSON object, got {type(obj).__name__}")
    return obj


def pretty_json(obj: JSONValue, indent: int = 2) -> str:
    try:
        return json.dumps(obj, indent=indent, sort_keys=True, ensure_ascii=False)
    except RecursionError as e:
        raise InvalidJSON("JSON structure is nested too deeply") from e
