"""Validators collecting field errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass
class ValidationMessage:
    field: str
    message: str
    kind: str = "validation"


class RequiredFields:
    """Validator that knows which fields must be given.

    Fields call :meth:`validation_error` while validating; nothing is raised.
    """

    def __init__(self, *required: str) -> None:
        self.required = list(required)
        self.errors: List[ValidationMessage] = []

    def field_is_required(self, name: str) -> bool:
        return name in self.required

    def validation_error(self, name: str, message: str, kind: str = "validation") -> None:
        self.errors.append(ValidationMessage(field=name, message=message, kind=kind))

    def messages_by_field(self) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def reset(self) -> None:
        self.errors = []
