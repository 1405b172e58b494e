"""Projection of option sources into per-option render records."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Collection, List, Mapping, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from formfields.options import EMPTY_KEY
from formfields.values import as_key, record_key

_HTML_ID_RE = re.compile(r"[^a-zA-Z0-9]")
_CSS_CLASS_RE = re.compile(r"[^a-zA-Z0-9\-_]")


@dataclass(frozen=True)
class OptionRecord:
    key: str
    label: str
    selected: bool
    disabled: bool


def render_options(
    source: Mapping[str, str],
    selected: Collection[str],
    disabled: Collection[str] = (),
    defaults: Collection[str] = (),
    placeholder: Optional[str] = None,
) -> List[OptionRecord]:
    """Build one :class:`OptionRecord` per source entry, in source order.

    Default keys are both selected and disabled. A disabled key labelled
    with ``placeholder`` stays enabled so "none" can always be re-selected.
    """
    selected_keys = set(selected)
    disabled_keys = set(disabled)
    default_keys = set(defaults)
    records = []
    for key, label in source.items():
        is_disabled = key in disabled_keys
        if is_disabled and placeholder is not None and label == placeholder:
            is_disabled = False
        records.append(
            OptionRecord(
                key=key,
                label=label,
                selected=key in selected_keys or key in default_keys,
                disabled=is_disabled or key in default_keys,
            )
        )
    return records


def value_matches(key: str, value: Any, key_field: str = "id") -> bool:
    """Return True when a single-select ``value`` selects option ``key``.

    A record value, such as the target of a many-to-one relation, is
    compared by its ``key_field``.
    """
    value = record_key(value, key_field)
    if key == EMPTY_KEY:
        return value is None or value == ""
    return key == as_key(value)


def single_selection(source: Mapping[str, str], value: Any, key_field: str = "id") -> List[str]:
    return [key for key in source if value_matches(key, value, key_field)]


def html_id(value: Any) -> str:
    return _HTML_ID_RE.sub("", str(value))


def css_class(value: Any) -> str:
    return _CSS_CLASS_RE.sub("_", str(value))


@lru_cache()
def template_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("formfields", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["html_id"] = html_id
    env.filters["css_class"] = css_class
    return env


def render_template(name: str, **context: Any) -> Markup:
    template = template_environment().get_template(name)
    return Markup(template.render(**context).strip())


__all__ = [
    "OptionRecord",
    "css_class",
    "html_id",
    "render_options",
    "render_template",
    "single_selection",
    "template_environment",
    "value_matches",
]
