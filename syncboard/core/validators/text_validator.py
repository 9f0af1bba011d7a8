"""
TextValidator - validates that a field holds free text.
"""

from typing import Any

from .base_validator import BaseValidator, FieldValidationError


class TextValidator(BaseValidator):
    """
    Validates that a field value is a string.

    Numbers and other scalars are rejected rather than coerced, so a title
    of 123 is reported instead of silently becoming "123".

    Parameters:
    - max_length: Optional upper bound on the stripped length
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.max_length = self.parameters.get("max_length")

    def validate(self, value: Any, fields: dict[str, Any]) -> None:
        # Skip validation for None (handled by required_field validator)
        if value is None:
            return

        if not isinstance(value, str):
            raise FieldValidationError(
                rule_name="text",
                field_name=self.field_name,
                message=f"Expected text, got {type(value).__name__}"
            )

        if self.max_length is not None and len(value.strip()) > self.max_length:
            raise FieldValidationError(
                rule_name="text",
                field_name=self.field_name,
                message=f"Text exceeds maximum length of {self.max_length} characters"
            )

    @property
    def rule_type(self) -> str:
        return "text"
