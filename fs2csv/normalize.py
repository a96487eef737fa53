"""Render document values as CSV cell text.

Every value maps to exactly one string. Scalars get a direct textual form;
arrays and maps are first reduced to JSON-compatible plain values and then
serialized as compact JSON.
"""
import re
import json
import math
import base64
from decimal import Decimal
from datetime import datetime, timedelta, timezone
from typing import Any

from .models import DocumentValue, GeoPoint, Reference, Timestamp

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

SHORT_NEGATIVE_EXPONENT = re.compile(r"e-0(\d)$")


def format_float(value: float) -> str:
    """Shortest round-trip decimal, never in exponent notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    # repr() gives the shortest round-trip digits; Decimal removes the exponent
    return "{:f}".format(Decimal(repr(value)).normalize())


def format_json_float(value: float) -> str:
    """Shortest round-trip number token for a finite float inside JSON.

    Fixed-point for 1e-6 <= |x| < 1e21, exponent notation outside of it with a
    single-digit negative exponent written without padding (`1e-7`).
    """
    magnitude = abs(value)
    if magnitude == 0 or 1e-6 <= magnitude < 1e21:
        return format_float(value)
    return SHORT_NEGATIVE_EXPONENT.sub(r"e-\1", repr(value))


def format_timestamp(value: Timestamp) -> str:
    if not value.in_range:
        # Not representable in RFC 3339
        return repr(value)
    moment = EPOCH + timedelta(seconds=value.seconds)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if value.nanos:
        text += "." + f"{value.nanos:09d}".rstrip("0")
    return text + "Z"


def format_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _geo_point(value: GeoPoint) -> dict:
    return {"lat": to_plain(value.latitude), "lng": to_plain(value.longitude)}


def _dump(value: Any) -> str:
    """Compact JSON for a plain value, numbers written by format_json_float."""
    if isinstance(value, float):
        return format_json_float(value)
    if isinstance(value, list):
        return "[" + ",".join(_dump(x) for x in value) + "]"
    if isinstance(value, dict):
        return "{" + ",".join(
            _dump(key) + ":" + _dump(item) for key, item in value.items()
        ) + "}"
    return json.dumps(value, ensure_ascii=False)


def to_plain(value: DocumentValue) -> Any:
    """Convert a value into something json.dumps accepts."""
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        # NaN and infinities are not valid JSON
        return value if math.isfinite(value) else format_float(value)
    if isinstance(value, datetime):
        value = Timestamp.from_datetime(value)
    if isinstance(value, Timestamp):
        return format_timestamp(value)
    if isinstance(value, (bytes, bytearray)):
        return format_bytes(value)
    if isinstance(value, GeoPoint):
        return _geo_point(value)
    if isinstance(value, Reference):
        return value.path
    if isinstance(value, (list, tuple)):
        return [to_plain(x) for x in value]
    if isinstance(value, dict):
        return {str(key): to_plain(item) for key, item in value.items()}
    return str(value)


def format_value(value: DocumentValue) -> str:
    """Render one value as a single CSV cell (without CSV quoting)."""
    if value is None:
        return ""
    # bool must be checked before int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        value = Timestamp.from_datetime(value)
    if isinstance(value, Timestamp):
        return format_timestamp(value)
    if isinstance(value, GeoPoint):
        return _dump(_geo_point(value))
    if isinstance(value, (bytes, bytearray)):
        return format_bytes(value)
    if isinstance(value, Reference):
        return value.path
    if isinstance(value, (list, tuple, dict)):
        return _dump(to_plain(value))
    return str(value)
