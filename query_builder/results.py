"""
Translation Results

Result values that keep the three outcomes of a translation apart:
a token that is skipped (TokenResolution.SKIP), a rule for which nothing
usable remains (RuleTranslation.UNSUPPORTED), and fatal backend failures,
which are raised as RuleTranslationError instead of being returned.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from patterns.types import PatternToken

from .errors import UnsupportedPatternRuleError
from .queries import BooleanQuery, Clause


class ResolutionStatus(Enum):
    CLAUSE = "clause"
    SKIP = "skip"


@dataclass(frozen=True)
class TokenResolution:
    """Outcome of resolving one pattern token: a clause, or a reason to skip it."""
    status: ResolutionStatus
    clause: Optional[Clause] = None
    reason: str = ""

    @classmethod
    def of(cls, clause: Clause) -> 'TokenResolution':
        return cls(ResolutionStatus.CLAUSE, clause=clause)

    @classmethod
    def skip(cls, reason: str) -> 'TokenResolution':
        return cls(ResolutionStatus.SKIP, reason=reason)

    @property
    def is_skip(self) -> bool:
        return self.status == ResolutionStatus.SKIP


class TranslationStatus(Enum):
    TRANSLATED = "translated"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class SkippedToken:
    index: int
    token: PatternToken
    reason: str


@dataclass(frozen=True)
class RuleTranslation:
    """Outcome of translating one rule."""
    rule_id: str
    status: TranslationStatus
    query: Optional[BooleanQuery] = None
    skipped: Tuple[SkippedToken, ...] = ()
    reason: str = ""

    @property
    def is_translated(self) -> bool:
        return self.status == TranslationStatus.TRANSLATED

    def unwrap(self) -> BooleanQuery:
        """
        The query of a translated rule.

        Raises:
            UnsupportedPatternRuleError: the rule could not be translated
        """
        if self.query is None:
            raise UnsupportedPatternRuleError(self.reason, rule_id=self.rule_id)
        return self.query
