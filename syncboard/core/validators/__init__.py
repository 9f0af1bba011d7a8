"""
Field validation rule implementations.

Provides validators for required fields, free text, fixed choices and calendar dates.
"""

from .base_validator import BaseValidator, FieldValidationError
from .choice_validator import ChoiceValidator
from .date_validator import DateValidator
from .required_field_validator import RequiredFieldValidator
from .text_validator import TextValidator

__all__ = [
    "BaseValidator",
    "FieldValidationError",
    "RequiredFieldValidator",
    "ChoiceValidator",
    "DateValidator",
    "TextValidator",
]
