"""
Rule engine and configuration for record field validation.
"""

from .rule_config import RuleConfigBuilder, default_record_rules
from .rule_engine import RuleEngine

__all__ = ["RuleEngine", "RuleConfigBuilder", "default_record_rules"]
