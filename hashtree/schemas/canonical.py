"""
Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic serialization of structured records so that they can
be hashed into Merkle leaves. Two records with the same field values must
produce byte-identical output, independent of dict insertion order or
object identity.
"""

import dataclasses
import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# No whitespace between elements
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 in UTC with a Z suffix.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        utc_dt = dt.replace(tzinfo=timezone.utc)
    else:
        utc_dt = dt.astimezone(timezone.utc)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _check_finite(value: float, path: str) -> None:
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively reduce a record to JSON-compatible primitives.

    Supported inputs are primitives, datetimes, enums, bytes (rendered as
    hex), Pydantic models, dataclass instances, dicts, lists and tuples.
    None-valued dict entries are dropped so that an optional field left
    unset and one never declared serialize the same way.

    Raises:
        CanonicalizationException: On NaN/Infinity or an unsupported type.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        _check_finite(value, path)
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, bytes):
        return value.hex()

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        return canonicalize_value(dumped, path)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return canonicalize_value(dataclasses.asdict(value), path)

    if isinstance(value, dict):
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize a record to its canonical JSON string.

    Keys are sorted, there is no whitespace, non-ASCII text is kept as-is.

    Example:
        >>> dumps_canonical({"sender": "foo", "amount": 111, "receiver": "bar"})
        '{"amount":111,"receiver":"bar","sender":"foo"}'
    """
    canonicalized = canonicalize_value(obj)
    try:
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def canonical_equals(obj1: Any, obj2: Any) -> bool:
    """True if both records have identical canonical JSON forms."""
    try:
        return dumps_canonical(obj1) == dumps_canonical(obj2)
    except CanonicalizationException:
        return False
