"""Normalization of selection values into ordered lists of keys.

A selectable field can receive its value in several shapes over its
lifetime: a single scalar from a dropdown post, a list from checkboxes,
the JSON array string the field stores, an older comma-delimited string
written before JSON encoding was adopted, or the records of an ORM
relation. :func:`normalize_selection` collapses all of them into one
canonical form, an ordered list of unique string keys.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Sequence

from formfields.config import get_settings

LEGACY_DELIMITER = ","


def _is_record(item: Any, id_field: str) -> bool:
    if isinstance(item, Mapping):
        return id_field in item
    if isinstance(item, (str, bytes, int, float, bool)):
        return False
    return hasattr(item, id_field)


def _stored_key(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def as_key(value: Any) -> str:
    """Return the string form used to compare ``value`` against option keys."""
    return _stored_key(value).strip()


def record_key(value: Any, id_field: str = "id") -> Any:
    """Return the id of ``value`` when it is a record, otherwise ``value``."""
    if _is_record(value, id_field):
        return _record_id(value, id_field)
    return value


def _unique(keys: Iterable[str]) -> List[str]:
    seen = set()
    result: List[str] = []
    for key in keys:
        if key not in seen:
            seen.add(key)
            result.append(key)
    return result


def _record_id(item: Any, id_field: str) -> Any:
    if isinstance(item, Mapping):
        return item[id_field]
    return getattr(item, id_field)


def _from_items(items: Iterable[Any], id_field: str, trim: bool = True) -> List[str]:
    to_key = as_key if trim else _stored_key
    keys = []
    for item in items:
        if item is None:
            continue
        keys.append(to_key(record_key(item, id_field)))
    return _unique(keys)


def decode_legacy(raw: str, token: Optional[str] = None) -> List[str]:
    """Split a comma-delimited value, restoring escaped commas."""
    token = token or get_settings().legacy_comma_token
    return _unique(part.replace(token, LEGACY_DELIMITER).strip() for part in raw.split(LEGACY_DELIMITER))


def decode_json_array(raw: str) -> Optional[list]:
    """Return the list ``raw`` decodes to, or None when it is not a JSON array."""
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError):
        return None
    return decoded if isinstance(decoded, list) else None


def _from_string(raw: str, id_field: str) -> List[str]:
    decoded = decode_json_array(raw)
    if decoded is not None:
        # stored keys are kept byte for byte
        return _from_items(decoded, id_field, trim=False)
    return decode_legacy(raw)


def normalize_selection(raw: Any, id_field: str = "id") -> List[str]:
    """Return ``raw`` as an ordered list of unique string keys.

    Empty input gives an empty list. Strings are read as a JSON array first
    and as the legacy comma format otherwise; this never raises.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        if not raw.strip():
            return []
        return _from_string(raw, id_field)
    if isinstance(raw, bytes):
        return normalize_selection(raw.decode("utf-8"), id_field)
    if isinstance(raw, Mapping):
        if _is_record(raw, id_field):
            return _from_items([raw], id_field)
        # checkbox posts arrive as {key: value}
        return _from_items(raw.keys(), id_field)
    ids = getattr(raw, "ids", None)
    if callable(ids):
        return _from_items(ids(), id_field)
    column = getattr(raw, "column", None)
    if callable(column):
        return _from_items(column(id_field), id_field)
    if isinstance(raw, Iterable):
        return _from_items(raw, id_field)
    if _is_record(raw, id_field):
        return _from_items([raw], id_field)
    return [as_key(raw)]


def encode_selection(keys: Sequence[Any]) -> str:
    """Encode keys in the canonical JSON array format."""
    return json.dumps([_stored_key(key) for key in keys])


def encode_legacy(keys: Sequence[Any], token: Optional[str] = None) -> str:
    """Encode keys in the comma-delimited format older records still carry."""
    token = token or get_settings().legacy_comma_token
    return LEGACY_DELIMITER.join(as_key(key).replace(LEGACY_DELIMITER, token) for key in keys)


__all__ = [
    "as_key",
    "decode_json_array",
    "decode_legacy",
    "encode_legacy",
    "encode_selection",
    "normalize_selection",
    "record_key",
]
