"""
Encoding helpers for JOSE compact serialization

Base64url here always means the unpadded URL-safe alphabet of RFC 7515
section 2. Decoding is strict: padding, whitespace, characters outside
``A-Z a-z 0-9 - _`` and non-canonical trailing bits are rejected.
"""

import base64
import binascii
import json
import re
from typing import Any, Dict, Union

from .exceptions import MalformedToken

_B64URL_PATTERN = re.compile(r'^[A-Za-z0-9_-]*$')


def b64url_encode(data: Union[str, bytes]) -> str:
    """
    Encode bytes as unpadded base64url text.

    Args:
        data: Bytes to encode (strings are encoded as UTF-8 first)

    Returns:
        str: Base64url text without ``=`` padding
    """
    if isinstance(data, str):
        data = data.encode('utf-8')
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')


def b64url_decode(segment: str) -> bytes:
    """
    Decode unpadded base64url text.

    Args:
        segment: Base64url text

    Returns:
        bytes: Decoded bytes

    Raises:
        MalformedToken: If the text is not valid unpadded base64url
    """
    if not isinstance(segment, str) or not _B64URL_PATTERN.match(segment):
        raise MalformedToken("Segment is not valid base64url text")

    # A single leftover character can never encode a whole byte
    if len(segment) % 4 == 1:
        raise MalformedToken("Segment has an impossible base64url length")

    padded = segment + '=' * (-len(segment) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise MalformedToken(f"Segment is not valid base64url text: {e}") from e

    # Unused low bits of the last character must be zero
    if b64url_encode(decoded) != segment:
        raise MalformedToken("Segment is not canonical base64url text")
    return decoded


def b64url_decode_text(segment: str) -> str:
    """Decode a base64url segment that must carry UTF-8 text."""
    raw = b64url_decode(segment)
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise MalformedToken("Segment does not decode to UTF-8 text") from e


def compact_json(data: Dict[str, Any]) -> str:
    """Serialize a JSON object without insignificant whitespace or NaN/Infinity."""
    return json.dumps(data, separators=(',', ':'), ensure_ascii=False, allow_nan=False)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str) -> Any:
    """
    Parse JSON text from a token segment.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected.

    Raises:
        ValueError: If the text is not valid JSON or nests too deeply
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nesting is too deep") from e
