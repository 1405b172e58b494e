"""Resolution of option sources into ordered ``key -> label`` dicts."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Dict, Optional

from formfields.errors import InvalidSourceType
from formfields.values import as_key

logger = logging.getLogger(__name__)

OptionMap = Dict[str, str]

EMPTY_KEY = ""


def _field_of(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def _has_field(record: Any, name: str) -> bool:
    if isinstance(record, Mapping):
        return name in record
    return hasattr(record, name)


def _label(value: Any) -> str:
    return "" if value is None else str(value)


def resolve_source(
    raw: Any,
    key_field: str = "id",
    label_field: str = "title",
    *,
    field_name: Optional[str] = None,
) -> OptionMap:
    """Resolve ``raw`` into an ordered mapping of option key to label.

    Accepts a mapping, an object exposing ``map(key_field, label_field)``,
    or an iterable of records (mappings or objects) carrying both fields.

    Raises:
        InvalidSourceType: for anything else.
    """
    if isinstance(raw, Mapping):
        return {as_key(key): _label(label) for key, label in raw.items()}

    projector = getattr(raw, "map", None)
    if callable(projector) and not isinstance(raw, (str, bytes)):
        projected = projector(key_field, label_field)
        if isinstance(projected, Mapping):
            return resolve_source(projected, key_field, label_field, field_name=field_name)
        raise InvalidSourceType(projected, field_name=field_name)

    if isinstance(raw, Iterable) and not isinstance(raw, (str, bytes)):
        resolved: OptionMap = {}
        for record in raw:
            if not (_has_field(record, key_field) and _has_field(record, label_field)):
                raise InvalidSourceType(raw, field_name=field_name)
            resolved[as_key(_field_of(record, key_field))] = _label(_field_of(record, label_field))
        return resolved

    raise InvalidSourceType(raw, field_name=field_name)


def with_empty_default(source: Mapping[str, str], placeholder: str) -> OptionMap:
    """Return ``source`` led by an empty-key placeholder option.

    A real option keyed ``""`` is shadowed by the placeholder.
    """
    resolved: OptionMap = {EMPTY_KEY: placeholder}
    for key, label in source.items():
        if key == EMPTY_KEY:
            logger.debug("Empty placeholder shadows source option labelled %r", label)
            continue
        resolved[key] = label
    return resolved


__all__ = ["EMPTY_KEY", "OptionMap", "resolve_source", "with_empty_default"]
