"""
Base validator interface for record field rules.

All validators must inherit from BaseValidator and implement the validate() method.
"""

from abc import ABC, abstractmethod
from typing import Any


class FieldValidationError(Exception):
    """Raised when a single field rule fails."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{rule_name}] {field_name}: {message}")

    def to_dict(self) -> dict[str, str]:
        return {"rule_name": self.rule_name, "field_name": self.field_name, "message": self.message}


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Each validator implements one rule type (required_field, text, choice, date).
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            field_name: Name of the field to validate
            parameters: Rule-specific parameters (e.g., allowed choices)
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def validate(self, value: Any, fields: dict[str, Any]) -> None:
        """
        Validate a value against this rule.

        Args:
            value: The field value to validate
            fields: All submitted fields (for context-dependent validation)

        Raises:
            FieldValidationError: If validation fails
        """
        pass

    def clean(self, value: Any) -> Any:
        """Return the value in its canonical type; only called after validate() passed."""
        return value

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
