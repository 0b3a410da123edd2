"""
Pattern Rules Package

Data model for pattern rules (ordered per-token linguistic constraints) and a
YAML loader for rule files.
"""

from .types import PatternToken, PatternRule
from .loader import load_rules, parse_rules, RuleDefinitionError

__all__ = [
    'PatternToken',
    'PatternRule',
    'load_rules',
    'parse_rules',
    'RuleDefinitionError',
]
