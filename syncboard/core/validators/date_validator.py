"""
DateValidator - validates and coerces calendar dates.
"""

import datetime as dt
from typing import Any

from syncboard.utils.dates import parse_calendar_date

from .base_validator import BaseValidator, FieldValidationError


class DateValidator(BaseValidator):
    """
    Validates that a field is a calendar date.

    Accepts date objects and ISO strings ("2024-01-31", or a full ISO
    timestamp whose date part is used). datetime values are reduced to
    their date.

    Parameters:
    - coerce: Whether strings may be parsed (default True)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.coerce = self.parameters.get("coerce", True)

    def validate(self, value: Any, fields: dict[str, Any]) -> None:
        # Skip validation for None (handled by required_field validator)
        if value is None or (isinstance(value, str) and not value.strip()):
            return

        if isinstance(value, dt.date):
            return

        if not self.coerce or not isinstance(value, str):
            raise FieldValidationError(
                rule_name="date",
                field_name=self.field_name,
                message=f"Expected a date, got {type(value).__name__}"
            )

        try:
            parse_calendar_date(value)
        except ValueError as e:
            raise FieldValidationError(
                rule_name="date",
                field_name=self.field_name,
                message=f"Cannot parse '{value}' as a date: {e}"
            )

    def clean(self, value: Any) -> Any:
        if isinstance(value, (str, dt.date)):
            return parse_calendar_date(value)
        return value

    @property
    def rule_type(self) -> str:
        return "date"
