"""
Rule engine for orchestrating validation rules on submitted record fields.

The rule engine builds validators from rule configurations, applies them to
a create/edit request, and produces a validation result.
"""

from typing import Any

from syncboard.core.errors import ValidationError
from syncboard.core.models import ValidationResult
from syncboard.core.validators import (
    BaseValidator,
    ChoiceValidator,
    DateValidator,
    FieldValidationError,
    RequiredFieldValidator,
    TextValidator,
)


class RuleEngine:
    """
    Orchestrates validation rules on record fields.

    Applies every enabled rule in order, collecting all failures rather
    than stopping at the first one, so a caller can report every bad field.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "text": TextValidator,
        "choice": ChoiceValidator,
        "date": DateValidator,
    }

    def __init__(self, rules: list[dict[str, Any]]):
        """
        Initialize the rule engine with validation rules.

        Args:
            rules: List of rule configurations, each containing:
                   - rule_name: str
                   - rule_type: str (required_field, text, choice, date)
                   - field_name: str
                   - parameters: Dict[str, Any] (optional)
                   - enabled: bool (default True)
        """
        self.rules = rules
        self.validators: list[tuple[str, BaseValidator]] = []
        self._build_validators()

    def _build_validators(self) -> None:
        """Build validator instances from rule configurations."""
        for rule in self.rules:
            if not rule.get("enabled", True):
                continue

            rule_name = rule["rule_name"]
            rule_type = rule["rule_type"]

            validator_class = self.VALIDATOR_REGISTRY.get(rule_type)
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule_type}")

            try:
                validator = validator_class(rule["field_name"], rule.get("parameters", {}))
            except ValueError as e:
                raise ValueError(f"Failed to create validator for rule '{rule_name}': {e}") from e
            self.validators.append((rule_name, validator))

    @property
    def field_names(self) -> list[str]:
        """Fields covered by at least one rule, in rule order."""
        names: list[str] = []
        for _, validator in self.validators:
            if validator.field_name not in names:
                names.append(validator.field_name)
        return names

    def validate_fields(self, fields: dict[str, Any]) -> ValidationResult:
        """
        Validate submitted fields against all rules.

        Args:
            fields: Field name to submitted value

        Returns:
            ValidationResult with pass/fail status, per-rule detail and the
            cleaned values of every field that passed all of its rules
        """
        passed_rules = []
        failed_rules = []
        errors = []
        failed_fields: set[str] = set()

        for rule_name, validator in self.validators:
            value = fields.get(validator.field_name)
            try:
                validator.validate(value, fields)
                passed_rules.append(rule_name)
            except FieldValidationError as e:
                failed_rules.append(rule_name)
                errors.append(e.to_dict())
                failed_fields.add(validator.field_name)

        cleaned: dict[str, Any] = {}
        for _, validator in self.validators:
            name = validator.field_name
            if name in failed_fields or name not in fields:
                continue
            cleaned[name] = validator.clean(cleaned.get(name, fields[name]))

        return ValidationResult(
            passed=not failed_rules,
            passed_rules=passed_rules,
            failed_rules=failed_rules,
            errors=errors,
            cleaned=cleaned,
        )

    def validate_or_raise(self, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Validate fields and return their cleaned values.

        Raises:
            ValidationError: If any rule failed
        """
        result = self.validate_fields(fields)
        if not result.passed:
            raise ValidationError(result.errors)
        return result.cleaned

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts by type
        """
        counts: dict[str, int] = {}
        for _, validator in self.validators:
            counts[validator.rule_type] = counts.get(validator.rule_type, 0) + 1
        return {"total_rules": len(self.validators), "rules_by_type": counts}
