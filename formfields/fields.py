"""Form field widgets.

Fields that choose from a list of options share :class:`OptionBackedField`,
which owns the option source, the optional empty placeholder and the
disabled keys. Whether a field takes several values is the class flag
``multiple``; it does not change the class hierarchy.

Example::

    topics = CheckboxSetField(
        "Topics",
        "I am interested in the following topics",
        source={"1": "Technology", "2": "Gardening", "3": "Cooking"},
        value=["1"],
    )
    topics.set_default_items(["2"])
    html = topics.render()
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from markupsafe import Markup

from formfields.config import get_settings
from formfields.options import OptionMap, resolve_source, with_empty_default
from formfields.persistence import (
    RelationTarget,
    ScalarFieldTarget,
    resolve_persist_target,
    save_selection,
)
from formfields.readonly import LookupDisplay, lookup_display, resolved_labels
from formfields.rendering import OptionRecord, css_class, render_options, render_template, single_selection
from formfields.values import encode_selection, normalize_selection

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from formfields.forms import Form
    from formfields.validation import RequiredFields


class FormField:
    """A named input bound to a value."""

    template_name = "text.html"

    def __init__(self, name: str, title: Optional[str] = None, value: Any = None, *, form: Optional["Form"] = None) -> None:
        self.name = name
        self.title = name if title is None else title
        self.form = form
        self.value: Any = None
        self.readonly = False
        self.disabled = False
        self.extra_classes: List[str] = []
        self.set_value(value)

    def set_value(self, value: Any, record: Any = None) -> "FormField":
        self.value = value
        return self

    def data_value(self) -> Any:
        return self.value

    def field_type(self) -> str:
        return "text"

    def field_id(self) -> str:
        prefix = f"{self.form.name}_" if self.form is not None and self.form.name else ""
        return css_class(f"{prefix}{self.name}")

    def add_extra_class(self, name: str) -> "FormField":
        self.extra_classes.append(name)
        return self

    def css_classes(self) -> str:
        return " ".join([self.field_type()] + self.extra_classes)

    def validate(self, validator: "RequiredFields") -> bool:
        return True

    def save_into(self, record: Any) -> None:
        target = resolve_persist_target(record, self.name)
        if isinstance(target, ScalarFieldTarget):
            target.assign(self.data_value())

    def readonly_copy(self) -> "FormField":
        field = ReadonlyField(self.name, self.title, self.value, form=self.form)
        field.extra_classes = list(self.extra_classes)
        return field

    def disabled_copy(self) -> "FormField":
        clone = copy.copy(self)
        clone.extra_classes = list(self.extra_classes)
        clone.disabled = True
        return clone

    def render_context(self) -> Dict[str, Any]:
        return {}

    def render(self, **extra: Any) -> Markup:
        context = self.render_context()
        context.update(extra)
        return render_template(self.template_name, field=self, **context)

    def __html__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, value={self.value!r})"


class ReadonlyField(FormField):
    """Plain, non-editable display of a value."""

    template_name = "readonly.html"

    def __init__(self, name: str, title: Optional[str] = None, value: Any = None, *, form: Optional["Form"] = None) -> None:
        super().__init__(name, title, value, form=form)
        self.readonly = True

    def field_type(self) -> str:
        return "readonly"

    def readonly_copy(self) -> "ReadonlyField":
        return copy.copy(self)

    def render_context(self) -> Dict[str, Any]:
        return {"none_marker": get_settings().none_marker}


class OptionBackedField(FormField):
    """A field whose value is chosen from an option source.

    ``source`` may be a mapping, an object with ``map(key_field,
    label_field)`` or an iterable of records; it is resolved as soon as it
    is assigned, so a bad source fails at construction.
    """

    multiple = False
    allows_empty_default = True

    def __init__(
        self,
        name: str,
        title: Optional[str] = None,
        source: Any = None,
        value: Any = None,
        *,
        form: Optional["Form"] = None,
        empty_string: Optional[str] = None,
        key_field: str = "id",
        label_field: str = "title",
    ) -> None:
        self.key_field = key_field
        self.label_field = label_field
        self.source: OptionMap = {}
        self.empty_string = ""
        self._has_empty_default = False
        self.disabled_items: List[str] = []
        super().__init__(name, title, value, form=form)
        self.set_source({} if source is None else source)
        if empty_string is not None:
            self.set_empty_string(empty_string)

    def set_source(self, source: Any) -> "OptionBackedField":
        self.source = resolve_source(source, self.key_field, self.label_field, field_name=self.name)
        return self

    def get_source(self) -> OptionMap:
        """The option source, led by the empty placeholder when enabled."""
        if self.has_empty_default:
            return with_empty_default(self.source, self.empty_string)
        return dict(self.source)

    @property
    def has_empty_default(self) -> bool:
        return self.allows_empty_default and self._has_empty_default

    @has_empty_default.setter
    def has_empty_default(self, flag: bool) -> None:
        self._has_empty_default = bool(flag)

    def set_has_empty_default(self, flag: bool) -> "OptionBackedField":
        self.has_empty_default = flag
        return self

    def set_empty_string(self, label: str) -> "OptionBackedField":
        """Set the placeholder label, e.g. "Select..."; enables the empty default."""
        self.has_empty_default = True
        self.empty_string = label
        return self

    def placeholder(self) -> Optional[str]:
        return self.empty_string if self.has_empty_default else None

    def set_disabled_items(self, items: Sequence[Any]) -> "OptionBackedField":
        self.disabled_items = normalize_selection(list(items))
        return self

    def value_array(self) -> List[str]:
        return normalize_selection(self.value, self.key_field)

    def save_into(self, record: Any) -> None:
        target = resolve_persist_target(record, self.name)
        if isinstance(target, ScalarFieldTarget) and not self.multiple:
            target.assign(self.data_value())
        else:
            save_selection(self.value_array(), target)

    def readonly_copy(self) -> "LookupField":
        field = LookupField(
            self.name,
            self.title,
            self.get_source(),
            self.value,
            form=self.form,
        )
        field.extra_classes = list(self.extra_classes)
        return field


class DropdownField(OptionBackedField):
    """Single selection from a ``<select>`` element.

    Named after a foreign key column (``gallery_id``) the raw value is
    saved; named after a many-to-one relation (``gallery``) the relation is
    set to the selected record.
    """

    template_name = "dropdown.html"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.is_selected = False
        super().__init__(*args, **kwargs)

    def field_type(self) -> str:
        return "dropdown"

    def options(self) -> List[OptionRecord]:
        source = self.get_source()
        selected = single_selection(source, self.value, self.key_field)
        self.is_selected = bool(selected)
        return render_options(source, selected, self.disabled_items, placeholder=self.placeholder())

    def render_context(self) -> Dict[str, Any]:
        return {"options": self.options()}


class CheckboxSetField(OptionBackedField):
    """A group of checkboxes allowing several selections.

    Saving goes to the relation of the same name when the record has one
    (option keys are then record ids); otherwise the JSON array of keys is
    written to the field of that name.
    """

    template_name = "checkbox_set.html"
    multiple = True
    allows_empty_default = False

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.default_items: List[str] = []
        super().__init__(*args, **kwargs)

    def field_type(self) -> str:
        return "optionset checkboxset"

    def set_value(self, value: Any, record: Any = None) -> "CheckboxSetField":
        # Without a value, fall back to the ids linked through the record's relation
        if not value and record is not None:
            target = resolve_persist_target(record, self.name)
            if isinstance(target, RelationTarget):
                value = target.relation.ids()
        self.value = value
        return self

    def set_default_items(self, items: Sequence[Any]) -> "CheckboxSetField":
        """Keys shown checked and locked, whatever the value.

        Disabled items can still be selected by default.
        """
        self.default_items = normalize_selection(list(items))
        return self

    def selected_keys(self) -> List[str]:
        selected = self.value_array()
        if not selected and self.form is not None and self.form.record is not None:
            target = resolve_persist_target(self.form.record, self.name)
            if isinstance(target, RelationTarget):
                selected = target.relation.ids()
        return selected

    def options(self) -> List[OptionRecord]:
        source = self.get_source()
        disabled = list(source) if self.disabled else self.disabled_items
        return render_options(source, self.selected_keys(), disabled, self.default_items)

    def render_context(self) -> Dict[str, Any]:
        return {"options": self.options()}

    def data_value(self) -> str:
        return encode_selection(self.value_array())

    def readonly_copy(self) -> ReadonlyField:
        labels = resolved_labels(self.source, self.value_array())
        field = ReadonlyField(self.name, self.title, ", ".join(labels), form=self.form)
        field.extra_classes = list(self.extra_classes)
        return field


class LookupField(OptionBackedField):
    """Read-only display of the labels of the selected options."""

    template_name = "lookup.html"
    multiple = True
    allows_empty_default = False

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.dont_escape = False
        super().__init__(*args, **kwargs)
        self.readonly = True

    def field_type(self) -> str:
        return "lookup readonly"

    def display(self) -> LookupDisplay:
        return lookup_display(self.get_source(), self.value_array(), self.value, escape_display=not self.dont_escape)

    def render_context(self) -> Dict[str, Any]:
        return {"display": self.display()}

    def readonly_copy(self) -> "LookupField":
        return copy.copy(self)


__all__ = [
    "CheckboxSetField",
    "DropdownField",
    "FormField",
    "LookupField",
    "OptionBackedField",
    "ReadonlyField",
]
