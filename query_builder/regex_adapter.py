"""
Regex Adapter

Turns a pattern token's regular expression into a query. The fast,
index-native dialect (lucene_regex) is preferred; patterns it cannot parse,
or would silently read differently from the rule author's Java syntax, go to
the fallback engine (fallback_regex).
"""

import logging

from patterns.types import PatternToken

from .errors import RegexSyntaxError
from .queries import FallbackRegexQuery, Query, RegexpQuery, Term
from .schema import IndexSchema

logger = logging.getLogger(__name__)

_INLINE_FLAG_MARKERS = ('?iu', '?-i')


def needs_simplification(regex: str) -> bool:
    """True if the pattern uses constructs the fast dialect lacks but simplify() can rewrite."""
    return '(?:' in regex or '\\d' in regex or '\\w' in regex


def simplify(regex: str) -> str:
    """Rewrite non-capturing groups and the \\d and \\w shorthands for the fast dialect."""
    return regex.replace('(?:', '(').replace('\\d', '[0-9]').replace('\\w', '[a-zA-Z_0-9]')


def has_inline_flags(regex: str) -> bool:
    return any(marker in regex for marker in _INLINE_FLAG_MARKERS)


def is_misread_by_fast_dialect(regex: str) -> bool:
    """
    True if the fast dialect would accept the pattern but match something else.

    The fast dialect reads an escaped letter or digit as that literal
    character, '(?' as a literal question mark, '^' and '$' outside a class as
    literals, '[' inside a class as a literal bracket and '&&' inside a class
    as two ampersands. Java reads all of them as operators, so such patterns
    must not be run by the fast engine.
    """
    in_class = False
    i = 0
    while i < len(regex):
        char = regex[i]
        if char == '\\':
            if i + 1 < len(regex) and regex[i + 1].isalnum():
                return True
            i += 2
            continue
        if in_class:
            if char == '[' or regex.startswith('&&', i):
                return True
            if char == ']':
                in_class = False
        elif char == '[':
            in_class = True
            # a leading '^' negates, a leading ']' is literal
            if regex.startswith('^', i + 1):
                i += 1
            if regex.startswith(']', i + 1):
                i += 1
        elif char in '^$':
            return True
        elif char == '(' and regex.startswith('?', i + 1):
            return True
        i += 1
    return False


class RegexAdapter:
    """Builds fast-dialect or fallback regex queries for pattern tokens."""

    def __init__(self, schema: IndexSchema):
        self.schema = schema

    def resolve(self, term: Term, raw_pattern: str, token: PatternToken,
                prefix: str = "", suffix: str = "") -> Query:
        """
        Query for a regular expression.

        Args:
            term: The encoded term: field plus (possibly wrapped and lowercased) pattern
            raw_pattern: The pattern exactly as the rule wrote it
            token: The pattern token the pattern belongs to
            prefix, suffix: The wrapping applied to `term`, reused by the fallback
        """
        if has_inline_flags(raw_pattern):
            logger.debug(f"Inline flags in {raw_pattern!r}, using fallback regex engine")
            return self.fallback(raw_pattern, token, prefix, suffix)
        if is_misread_by_fast_dialect(simplify(raw_pattern)):
            logger.debug(f"Fast dialect would misread {raw_pattern!r}, using fallback regex engine")
            return self.fallback(raw_pattern, token, prefix, suffix)
        try:
            if needs_simplification(raw_pattern):
                return RegexpQuery(Term(term.field, simplify(term.text)))
            return RegexpQuery(term)
        except RegexSyntaxError as e:
            # e.g. "\p{Punct}" is not valid in the fast dialect
            logger.debug(f"{e}; using fallback regex engine")
            return self.fallback(raw_pattern, token, prefix, suffix)

    def fallback(self, raw_pattern: str, token: PatternToken,
                 prefix: str = "", suffix: str = "") -> FallbackRegexQuery:
        """
        Query for the complete regex engine.

        The pattern body is not lowercased, so '\\p{Punct}' keeps its meaning.
        The fallback engine always matches case-insensitively, also for
        case-sensitive tokens.
        """
        field = self.schema.field_for(token.case_sensitive)
        if not token.case_sensitive:
            prefix, suffix = prefix.lower(), suffix.lower()
        return FallbackRegexQuery(Term(field, prefix + raw_pattern + suffix))

