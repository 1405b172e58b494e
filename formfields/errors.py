"""Error model for form fields."""

from __future__ import annotations

from typing import Any, Optional


class FormFieldError(Exception):
    """Base class for configuration errors raised by form fields."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        field_name: Optional[str] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field_name = field_name
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        if self.field_name:
            meta_parts.append(f"field '{self.field_name}'")
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class InvalidSourceType(FormFieldError):
    """Raised when an option source is neither a mapping nor a list of records."""

    code = "FF001"
    hint = "Pass a mapping of key to label, or records together with key_field/label_field."

    def __init__(self, source: Any, *, field_name: Optional[str] = None) -> None:
        super().__init__(
            f"Option source passed in as invalid type: {type(source).__name__}",
            field_name=field_name,
        )
        self.source = source


class InvalidLocaleError(FormFieldError):
    """Raised when numeric normalization is asked for an unknown locale."""

    code = "FF002"

    def __init__(self, locale: str) -> None:
        super().__init__(f"Unknown locale '{locale}'", hint="Use an identifier such as 'en_US' or 'de_DE'.")
        self.locale = locale


__all__ = [
    "FormFieldError",
    "InvalidSourceType",
    "InvalidLocaleError",
]
