"""Base64url and JSON codecs for compact token segments."""

import json
import re
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from jwt.utils import base64url_decode, base64url_encode

SEGMENT_SEPARATOR = "."

_SEGMENT_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode_segment(data: bytes) -> str:
    """Base64url encode without padding."""
    return base64url_encode(data).decode("ascii")


def decode_segment(segment: str) -> bytes:
    """Decode an unpadded base64url segment.

    Raises ValueError when the segment holds any character outside the
    base64url alphabet (``=`` padding included) or has an impossible
    length.
    """
    if not _SEGMENT_ALPHABET.fullmatch(segment):
        raise ValueError("segment contains characters outside the base64url alphabet")
    return base64url_decode(segment)


def _json_default(value: object) -> Any:
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def encode_json_segment(obj: Mapping[str, Any]) -> str:
    """Serialize a mapping to compact JSON and base64url encode it."""
    raw = json.dumps(
        obj, separators=(",", ":"), ensure_ascii=False, default=_json_default
    ).encode("utf-8")
    return encode_segment(raw)


def decode_json_segment(
    segment: str, *, use_json_number: bool = False
) -> dict[str, Any]:
    """Decode a base64url segment holding a JSON object.

    With ``use_json_number`` every numeric literal becomes a ``Decimal``
    built from its exact source text. ``NaN`` and ``Infinity`` literals
    are rejected.
    """
    raw = decode_segment(segment)
    number_hooks: dict[str, Any] = {}
    if use_json_number:
        number_hooks = {"parse_float": Decimal, "parse_int": Decimal}
    try:
        decoded = json.loads(raw, parse_constant=_reject_constant, **number_hooks)
    except RecursionError as exc:
        raise ValueError("segment is nested too deeply") from exc
    if not isinstance(decoded, dict):
        raise ValueError("segment is not a JSON object")
    return decoded
