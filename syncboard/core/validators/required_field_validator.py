"""
RequiredFieldValidator - ensures a field is present and not null/empty.
"""

from typing import Any

from .base_validator import BaseValidator, FieldValidationError


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present and not null/empty.

    Fails if:
    - Field is missing from the submitted fields
    - Field value is None
    - Field value is a blank string (configurable)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.allow_empty_string = self.parameters.get("allow_empty_string", False)

    def validate(self, value: Any, fields: dict[str, Any]) -> None:
        if self.field_name not in fields:
            raise FieldValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field is missing"
            )

        if value is None:
            raise FieldValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field value is null"
            )

        if not self.allow_empty_string and isinstance(value, str) and value.strip() == "":
            raise FieldValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field value is empty"
            )

    @property
    def rule_type(self) -> str:
        return "required_field"
