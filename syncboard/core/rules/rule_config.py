"""
Rule configuration for record fields.

Provides a builder for rule configurations and the default rule set
applied to every create/edit request.
"""

from typing import Any, Iterable

from syncboard.core.models import CATEGORIES


class RuleConfigBuilder:
    """
    Programmatically build rule configurations.
    """

    def __init__(self):
        self.rules: list[dict[str, Any]] = []

    def add_required_field(self, field_name: str, allow_empty_string: bool = False) -> "RuleConfigBuilder":
        """Add a required field rule."""
        self.rules.append({
            "rule_name": f"{field_name}_required",
            "rule_type": "required_field",
            "field_name": field_name,
            "parameters": {"allow_empty_string": allow_empty_string},
            "enabled": True,
        })
        return self

    def add_text(self, field_name: str, max_length: int | None = None) -> "RuleConfigBuilder":
        """Add a free-text rule."""
        parameters = {} if max_length is None else {"max_length": max_length}
        self.rules.append({
            "rule_name": f"{field_name}_text",
            "rule_type": "text",
            "field_name": field_name,
            "parameters": parameters,
            "enabled": True,
        })
        return self

    def add_choice(self, field_name: str, choices: Iterable[Any]) -> "RuleConfigBuilder":
        """Add a fixed-choice rule."""
        self.rules.append({
            "rule_name": f"{field_name}_choice",
            "rule_type": "choice",
            "field_name": field_name,
            "parameters": {"choices": list(choices)},
            "enabled": True,
        })
        return self

    def add_date(self, field_name: str, coerce: bool = True) -> "RuleConfigBuilder":
        """Add a calendar date rule."""
        self.rules.append({
            "rule_name": f"{field_name}_date",
            "rule_type": "date",
            "field_name": field_name,
            "parameters": {"coerce": coerce},
            "enabled": True,
        })
        return self

    def build(self) -> list[dict[str, Any]]:
        """Build and return the rule configuration."""
        return self.rules


def default_record_rules(categories: Iterable[str] = CATEGORIES) -> list[dict[str, Any]]:
    """Rules every user-authored record must satisfy."""
    return (
        RuleConfigBuilder()
        .add_required_field("title")
        .add_text("title")
        .add_required_field("body")
        .add_text("body")
        .add_required_field("category")
        .add_choice("category", categories)
        .add_required_field("date")
        .add_date("date")
        .build()
    )
