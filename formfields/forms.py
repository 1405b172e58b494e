"""A container binding fields to a record."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional

from markupsafe import Markup

from formfields.fields import FormField
from formfields.rendering import render_template
from formfields.validation import RequiredFields

logger = logging.getLogger(__name__)


class Form:
    """An ordered set of fields, optionally bound to the record being edited."""

    def __init__(self, name: str, fields: Optional[List[FormField]] = None, *, record: Any = None, action: str = "") -> None:
        self.name = name
        self.action = action
        self.record = record
        self._fields: Dict[str, FormField] = {}
        for field in fields or []:
            self.add_field(field)

    def add_field(self, field: FormField) -> "Form":
        if field.name in self._fields:
            logger.warning("Form %s: replacing field %s", self.name, field.name)
        field.form = self
        self._fields[field.name] = field
        return self

    def field(self, name: str) -> FormField:
        return self._fields[name]

    def __iter__(self) -> Iterator[FormField]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def load_data_from(self, record: Any) -> "Form":
        """Bind ``record`` and copy its values into the fields."""
        self.record = record
        for field in self:
            if isinstance(record, Mapping):
                value = record.get(field.name)
            else:
                value = getattr(record, field.name, None)
            field.set_value(value, record)
        return self

    def save_into(self, record: Any) -> None:
        """Save every editable field into ``record``.

        Readonly and disabled fields are skipped.
        """
        for field in self:
            if field.readonly or field.disabled:
                continue
            field.save_into(record)

    def validate(self, validator: Optional[RequiredFields] = None) -> bool:
        validator = validator or RequiredFields()
        results = [field.validate(validator) for field in self]
        if not all(results):
            logger.debug("Form %s failed validation: %s", self.name, validator.messages_by_field())
        return all(results)

    def make_readonly(self) -> "Form":
        fields = [field.readonly_copy() for field in self]
        self._fields = {}
        for field in fields:
            self.add_field(field)
        return self

    def render(self) -> Markup:
        return render_template("form.html", form=self, fields=list(self))
