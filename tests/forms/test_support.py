"""Tests for settings, errors, logging and the service locator."""

import logging

from formfields.config import FieldSettings, get_settings
from formfields.errors import FormFieldError, InvalidLocaleError, InvalidSourceType
from formfields.injector import ServiceConfigurationLocator
from formfields.observability import configure_logging, get_logger, log_field_event


class TestSettings:
    def test_defaults(self):
        settings = FieldSettings()
        assert settings.default_locale == "en_US"
        assert settings.none_marker == "(none)"
        assert settings.legacy_comma_token == "{comma}"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FORMFIELDS_DEFAULT_LOCALE", "fi_FI")
        assert get_settings().default_locale == "fi_FI"

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()

    def test_unrelated_environment_is_ignored(self, monkeypatch):
        monkeypatch.setenv("FORMFIELDS_UNKNOWN_OPTION", "1")
        assert FieldSettings.model_config["env_prefix"] == "FORMFIELDS_"
        assert get_settings().none_marker == "(none)"


class TestErrors:
    def test_format_includes_field_code_and_hint(self):
        error = FormFieldError("Broken", field_name="Country", code="FF999", hint="Fix it.")
        assert error.format() == "Broken (field 'Country'; FF999) Hint: Fix it."

    def test_invalid_source_type(self):
        error = InvalidSourceType(42)
        assert isinstance(error, FormFieldError)
        assert error.source == 42
        assert error.format().startswith("Option source passed in as invalid type: int (FF001)")

    def test_invalid_locale(self):
        error = InvalidLocaleError("xx")
        assert error.code == "FF002"
        assert "xx" in str(error)


class TestServiceConfigurationLocator:
    def test_locates_nothing(self):
        locator = ServiceConfigurationLocator()
        assert locator.locate_config_for("MyService") is None
        assert locator.reset() is None


class TestLogging:
    def test_get_logger_is_cached(self):
        assert get_logger("formfields.test") is get_logger("formfields.test")

    def test_configure_logging_sets_level(self):
        configure_logging("debug")
        assert get_logger().level == logging.DEBUG
        configure_logging("warning")
        assert get_logger().level == logging.WARNING

    def test_field_event_is_structured(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="formfields.events"):
            log_field_event("Replacing relation membership", field="tags", extras={"ids": ["1"]})
        record = caplog.records[-1]
        assert record.getMessage() == "Replacing relation membership (tags)"
        assert record.formfields_event == "Replacing relation membership"
        assert record.formfields_data == {"field": "tags", "ids": ["1"]}
