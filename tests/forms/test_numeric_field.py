"""Tests for locale-aware numeric input."""

from decimal import Decimal

import pytest

from formfields.errors import InvalidLocaleError
from formfields.numeric import NumericField, format_number, is_number, parse_number
from formfields.validation import RequiredFields


class TestNumericFieldValidator:
    """Validation follows the field's locale."""

    def test_en_us(self):
        field = NumericField("Number", locale="en_US")
        validator = RequiredFields("Number")

        field.set_value("12.00")
        assert field.validate(validator)
        assert field.data_value() == Decimal("12.0")

        field.set_value("12,00")
        assert not field.validate(validator)

        # '0' counts as given for the sake of required fields
        field.set_value("0")
        assert field.validate(validator)
        assert field.data_value() == 0

        # required but not given
        field.set_value("")
        assert not field.validate(validator)

        field.set_value(False)
        assert not field.validate(validator)

    def test_de_de(self):
        field = NumericField("Number", locale="de_DE")
        validator = RequiredFields()

        field.set_value("12,00")
        assert field.validate(validator)
        assert field.value == "12,00"
        assert field.data_value() == Decimal("12")

        # machine notation is converted to the locale's decimal comma
        field.set_value("12.00")
        assert field.validate(validator)
        assert field.value == "12,00"
        assert field.data_value() == Decimal("12")

    def test_fi_fi(self):
        field = NumericField("Number", locale="fi_FI")
        validator = RequiredFields()

        field.set_value("12,00")
        assert field.validate(validator)
        assert field.value == "12,00"
        assert field.data_value() == Decimal("12")

        # thousands separator
        field.set_value("21 212,00")
        assert field.validate(validator)
        assert field.value == "21 212,00"
        assert field.data_value() == Decimal("21212")

        field.set_value("12.00")
        assert field.validate(validator)
        assert field.value == "12,00"

        field.set_value("21212,00")
        assert field.validate(validator)
        assert field.data_value() == Decimal("21212")

    def test_error_message(self):
        field = NumericField("Number", "Number", "abc", locale="en_US")
        validator = RequiredFields("Number")
        assert not field.validate(validator)
        assert validator.messages_by_field() == {
            "Number": ["'abc' is not a number, only numbers can be accepted for this field"]
        }

    def test_optional_empty_value_is_valid(self):
        field = NumericField("Number", locale="en_US")
        assert field.validate(RequiredFields())

    def test_invalid_value_saves_as_zero(self):
        field = NumericField("Number", value="abc", locale="en_US")
        assert field.data_value() == 0

    def test_default_locale_from_settings(self, monkeypatch):
        monkeypatch.setenv("FORMFIELDS_DEFAULT_LOCALE", "de_DE")
        field = NumericField("Number", value="1.5")
        assert field.locale == "de_DE"
        assert field.value == "1,5"

    def test_unknown_locale(self):
        with pytest.raises(InvalidLocaleError):
            NumericField("Number", locale="xx_YY")

    def test_render(self):
        html = NumericField("Number", value="3", locale="en_US").render()
        assert html == '<input type="text" name="Number" id="Number" class="numeric text" value="3" />'


class TestNumberHelpers:
    def test_parse_number(self):
        assert parse_number("1,234.5", "en_US") == Decimal("1234.5")
        assert parse_number("1.234,5", "de_DE") == Decimal("1234.5")

    def test_is_number(self):
        assert is_number("12.5", "en_US")
        assert not is_number("", "en_US")
        assert not is_number(None, "en_US")

    def test_format_number_keeps_fraction_digits(self):
        assert format_number("1234.50", "en_US") == "1,234.50"
        assert format_number(7, "de_DE") == "7"
