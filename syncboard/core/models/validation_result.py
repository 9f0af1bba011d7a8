"""
ValidationResult model representing the outcome of validating record fields (ephemeral).
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of validating a create/edit request (ephemeral, never persisted).

    Attributes:
        passed: Overall validation status
        passed_rules: Rules that succeeded
        failed_rules: Rules that failed
        errors: rule_name, field_name and message for every failed rule
        cleaned: Field values after coercion (e.g. date strings parsed)
    """

    passed: bool
    passed_rules: List[str] = Field(default_factory=list)
    failed_rules: List[str] = Field(default_factory=list)
    errors: List[dict[str, Any]] = Field(default_factory=list)
    cleaned: dict[str, Any] = Field(default_factory=dict)

    @field_validator('failed_rules')
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies failed_rules is empty."""
        if info.data.get('passed') and len(v) > 0:
            raise ValueError("passed=True but failed_rules is not empty")
        return v
