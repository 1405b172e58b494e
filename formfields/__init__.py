"""
Form field widgets for server-rendered web applications.

The package is organised into a few small modules:

* ``values`` – normalization of whatever a selectable field holds (a
  scalar, a list, a JSON array string, the older comma-delimited string,
  or ORM records) into an ordered list of unique keys.
* ``options`` – resolution of option sources into ordered ``key -> label``
  dicts, with the optional empty placeholder.
* ``rendering`` – per-option render records and the Jinja2 templates
  that turn fields into HTML.
* ``persistence`` – saving selections into SQLAlchemy relations or plain
  fields.
* ``readonly`` – label projection for read-only displays.
* ``fields`` / ``numeric`` / ``forms`` – the widgets themselves and the
  form that binds them to a record.
"""

from .errors import FormFieldError, InvalidLocaleError, InvalidSourceType
from .fields import (
    CheckboxSetField,
    DropdownField,
    FormField,
    LookupField,
    OptionBackedField,
    ReadonlyField,
)
from .forms import Form
from .injector import ServiceConfigurationLocator
from .numeric import NumericField
from .options import resolve_source, with_empty_default
from .persistence import (
    NoTarget,
    RelationTarget,
    ScalarFieldTarget,
    SQLAlchemyRelation,
    resolve_persist_target,
    save_selection,
)
from .readonly import lookup_display, project_labels
from .rendering import OptionRecord, render_options, single_selection
from .validation import RequiredFields
from .values import encode_selection, normalize_selection

__version__ = "0.1.0"

__all__ = [
    "CheckboxSetField",
    "DropdownField",
    "Form",
    "FormField",
    "FormFieldError",
    "InvalidLocaleError",
    "InvalidSourceType",
    "LookupField",
    "NoTarget",
    "NumericField",
    "OptionBackedField",
    "OptionRecord",
    "ReadonlyField",
    "RelationTarget",
    "RequiredFields",
    "SQLAlchemyRelation",
    "ScalarFieldTarget",
    "ServiceConfigurationLocator",
    "encode_selection",
    "lookup_display",
    "normalize_selection",
    "project_labels",
    "render_options",
    "resolve_persist_target",
    "resolve_source",
    "save_selection",
    "single_selection",
    "with_empty_default",
]
