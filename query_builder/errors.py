"""
Query Builder Errors

Skipping a token and giving up on a whole rule are ordinary outcomes and are
reported through result values (see results.py). The exceptions below are
the named "rule not translatable" condition for callers that prefer to
raise, plus the fatal backend failures.
"""

from typing import Optional


class QueryBuilderError(Exception):
    """Base class for all query builder errors."""


class UnsupportedPatternRuleError(QueryBuilderError):
    """No token of the rule could be turned into an index query."""

    def __init__(self, message: str, rule_id: Optional[str] = None):
        super().__init__(message)
        self.rule_id = rule_id


class RegexSyntaxError(QueryBuilderError, ValueError):
    """A pattern is not valid in the regex dialect it was compiled for."""

    def __init__(self, message: str, pattern: str, position: Optional[int] = None):
        detail = f"{message} in pattern {pattern!r}"
        if position is not None:
            detail += f" at position {position}"
        super().__init__(detail)
        self.pattern = pattern
        self.position = position


class AmbiguousClauseError(QueryBuilderError):
    """A clause expected to wrap exactly one term resolved to a different number of terms."""


class RuleTranslationError(QueryBuilderError):
    """Fatal failure while translating a rule; the cause is chained."""

    def __init__(self, rule_id: str, cause: BaseException):
        super().__init__(f"Could not create query for rule {rule_id}: {cause}")
        self.rule_id = rule_id
        self.cause = cause
