"""
Pattern Rule Query Builder Package

Translates pattern rules into relaxed queries over a one-sentence-per-document
index, so the exact rule matcher only needs to run on candidate sentences.

Usage:
    from query_builder import PatternRuleQueryBuilder

    builder = PatternRuleQueryBuilder(language, index)
    translation = builder.translate(rule)
    if translation.is_translated:
        candidates = index.search(translation.query)
"""

from .builder import PatternRuleQueryBuilder
from .clauses import ClauseResolver
from .errors import (
    QueryBuilderError,
    UnsupportedPatternRuleError,
    RegexSyntaxError,
    AmbiguousClauseError,
    RuleTranslationError,
)
from .positions import PositionCombiner, TermExtractor
from .queries import (
    Term,
    Occur,
    Clause,
    Query,
    MultiTermQuery,
    TermQuery,
    RegexpQuery,
    FallbackRegexQuery,
    SpanQuery,
    SpanTermQuery,
    SpanMultiTermQuery,
    SpanNearQuery,
    BooleanQuery,
)
from .regex_adapter import RegexAdapter, needs_simplification, simplify
from .results import (
    ResolutionStatus,
    TokenResolution,
    TranslationStatus,
    SkippedToken,
    RuleTranslation,
)
from .schema import IndexSchema, FieldRole, get_default_schema

__all__ = [
    # Main interfaces
    'PatternRuleQueryBuilder',
    'IndexSchema',
    'FieldRole',
    'get_default_schema',

    # Components
    'ClauseResolver',
    'PositionCombiner',
    'TermExtractor',
    'RegexAdapter',
    'needs_simplification',
    'simplify',

    # Results and errors
    'ResolutionStatus',
    'TokenResolution',
    'TranslationStatus',
    'SkippedToken',
    'RuleTranslation',
    'QueryBuilderError',
    'UnsupportedPatternRuleError',
    'RegexSyntaxError',
    'AmbiguousClauseError',
    'RuleTranslationError',

    # Query model
    'Term',
    'Occur',
    'Clause',
    'Query',
    'MultiTermQuery',
    'TermQuery',
    'RegexpQuery',
    'FallbackRegexQuery',
    'SpanQuery',
    'SpanTermQuery',
    'SpanMultiTermQuery',
    'SpanNearQuery',
    'BooleanQuery',
]
