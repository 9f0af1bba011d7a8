"""
ChoiceValidator - validates that a field holds one of a fixed set of values.
"""

from typing import Any

from .base_validator import BaseValidator, FieldValidationError


class ChoiceValidator(BaseValidator):
    """
    Validates that a field value is one of the allowed choices.

    Parameters:
    - choices: Iterable of allowed values (required)

    None is skipped; presence is the job of RequiredFieldValidator.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        choices = self.parameters.get("choices")
        if not choices:
            raise ValueError("ChoiceValidator requires a non-empty 'choices' parameter")
        self.choices = tuple(choices)

    def validate(self, value: Any, fields: dict[str, Any]) -> None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return

        if value not in self.choices:
            raise FieldValidationError(
                rule_name="choice",
                field_name=self.field_name,
                message=f"'{value}' is not one of: {', '.join(map(str, self.choices))}"
            )

    @property
    def rule_type(self) -> str:
        return "choice"
