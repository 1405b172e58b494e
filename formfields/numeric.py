"""Locale-aware numeric input.

Every parsing and formatting helper takes the locale as an argument. A
:class:`NumericField` fixes its locale at construction, defaulting to the
configured ``FORMFIELDS_DEFAULT_LOCALE``.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import NumberFormatError, format_decimal, get_group_symbol, parse_decimal

from formfields.config import get_settings
from formfields.errors import InvalidLocaleError
from formfields.fields import FormField

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from formfields.forms import Form
    from formfields.validation import RequiredFields

# Plain machine notation, e.g. "12", "-3.50"
CANONICAL_NUMBER_RE = re.compile(r"^[+-]?\d+(?:\.(\d+))?$")

VALIDATION_MESSAGE = "'{value}' is not a number, only numbers can be accepted for this field"


def check_locale(locale: str) -> str:
    try:
        Locale.parse(locale)
    except (UnknownLocaleError, ValueError, TypeError) as exc:
        raise InvalidLocaleError(str(locale)) from exc
    return locale


def is_canonical_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
        return False
    return CANONICAL_NUMBER_RE.match(str(value).strip()) is not None


def _with_locale_grouping(text: str, locale: str) -> str:
    # Locales grouping with a no-break space also accept a plain one
    group = get_group_symbol(locale)
    if group.isspace() and group != " ":
        return text.replace(" ", group)
    return text


def parse_number(value: Any, locale: str) -> Decimal:
    """Parse ``value`` written in ``locale`` notation.

    Raises:
        NumberFormatError: when ``value`` is not a number in that locale.
    """
    check_locale(locale)
    text = "" if value is None else str(value).strip()
    if not text:
        raise NumberFormatError(f"{value!r} is not a number")
    return parse_decimal(_with_locale_grouping(text, locale), locale=locale, strict=True)


def is_number(value: Any, locale: str) -> bool:
    try:
        parse_number(value, locale)
    except NumberFormatError:
        return False
    return True


def format_number(value: Any, locale: str) -> str:
    """Format a machine-notation number in ``locale`` notation.

    The number of fraction digits given is kept, so ``"12.00"`` becomes
    ``"12,00"`` in ``de_DE``.
    """
    check_locale(locale)
    text = str(value).strip()
    match = CANONICAL_NUMBER_RE.match(text)
    if match is None:
        raise NumberFormatError(f"{value!r} is not in machine notation")
    fraction = match.group(1) or ""
    pattern = "#,##0" + (f".{'0' * len(fraction)}" if fraction else "")
    return format_decimal(Decimal(text), format=pattern, locale=locale)


class NumericField(FormField):
    """Text input accepting numbers written in the field's locale."""

    def __init__(
        self,
        name: str,
        title: Optional[str] = None,
        value: Any = None,
        *,
        form: Optional["Form"] = None,
        locale: Optional[str] = None,
    ) -> None:
        self.locale = check_locale(locale or get_settings().default_locale)
        super().__init__(name, title, value, form=form)

    def field_type(self) -> str:
        return "numeric text"

    def set_value(self, value: Any, record: Any = None) -> "NumericField":
        if is_canonical_number(value):
            # Machine notation is converted into the locale's notation
            self.value = format_number(value, self.locale)
        else:
            # Invalid numbers are kept so validate() can report them
            self.value = "" if value is None or value is False else str(value).strip()
        return self

    def is_numeric(self, value: Any = None) -> bool:
        return is_number(self.value if value is None else value, self.locale)

    def validate(self, validator: "RequiredFields") -> bool:
        if not self.value and not validator.field_is_required(self.name):
            return True
        if self.is_numeric():
            return True
        validator.validation_error(self.name, VALIDATION_MESSAGE.format(value=self.value), "validation")
        return False

    def data_value(self) -> Decimal:
        """The parsed number, or zero when the value is not numeric."""
        if not self.is_numeric():
            return Decimal(0)
        return parse_number(self.value, self.locale)


__all__ = [
    "NumericField",
    "format_number",
    "is_canonical_number",
    "is_number",
    "parse_number",
]
