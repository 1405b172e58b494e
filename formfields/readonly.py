"""Projection of selected keys back into human readable labels."""

from __future__ import annotations

from typing import Any, List, Mapping, NamedTuple, Optional, Sequence

from markupsafe import Markup, escape

from formfields.config import get_settings
from formfields.values import decode_json_array

LABEL_SEPARATOR = ", "


def resolved_labels(source: Mapping[str, str], selected: Sequence[str]) -> List[str]:
    """Labels of the selected keys, in selection order; unknown keys are dropped."""
    return [source[key] for key in selected if key in source]


def project_labels(
    source: Mapping[str, str],
    selected: Sequence[str],
    none_marker: Optional[str] = None,
) -> str:
    """Return the selected labels joined by ``", "``, or the none marker.

    The result is raw text; callers embedding it in markup must escape it.
    """
    labels = resolved_labels(source, selected)
    if not labels:
        return none_marker if none_marker is not None else get_settings().none_marker
    return LABEL_SEPARATOR.join(labels)


class LookupDisplay(NamedTuple):
    display: Markup
    input_value: str


def lookup_display(
    source: Mapping[str, str],
    selected: Sequence[str],
    raw_value: Any = None,
    *,
    escape_display: bool = True,
) -> LookupDisplay:
    """Build the escaped display markup and hidden input value of a lookup.

    When no selected key resolves, a string ``raw_value`` is tried as one
    whole key, so keys containing commas still resolve. Failing that it is
    shown as-is, since it may be a generated diff view rather than a key.
    A stored JSON array is never shown raw.
    """
    labels = resolved_labels(source, selected)
    values = list(selected)

    if not labels and isinstance(raw_value, str) and raw_value.strip():
        whole = raw_value.strip()
        if whole in source:
            labels = [source[whole]]
            values = [whole]
        elif decode_json_array(raw_value) is None:
            labels = [whole]
            values = []

    if not labels:
        marker = get_settings().none_marker
        return LookupDisplay(Markup("<i>%s</i>") % marker, "")

    text = LABEL_SEPARATOR.join(labels)
    display = escape(text) if escape_display else Markup(text)
    return LookupDisplay(display, LABEL_SEPARATOR.join(values))


__all__ = [
    "LABEL_SEPARATOR",
    "LookupDisplay",
    "lookup_display",
    "project_labels",
    "resolved_labels",
]
