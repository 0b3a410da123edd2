"""
Position Combiner

When a pattern token constrains both the surface string and the POS tag,
both terms are stored at the same index position, so the two clauses are
merged into one span query requiring them at the same offset.
"""

import logging
from typing import Optional, Protocol, Set

from .errors import AmbiguousClauseError
from .queries import (
    Clause, MultiTermQuery, Occur, Query, SpanMultiTermQuery, SpanNearQuery,
    SpanQuery, SpanTermQuery, Term,
)
from .results import TokenResolution

logger = logging.getLogger(__name__)


class TermExtractor(Protocol):
    """Read-only index handle able to list the terms a query is made of."""

    def extract_terms(self, query: Query) -> Set[Term]:
        ...


class PositionCombiner:
    """Merges the term and POS clauses of one pattern token."""

    def __init__(self, index: TermExtractor):
        self.index = index

    def combine(self, term_clause: Optional[Clause], pos_clause: Optional[Clause]) -> TokenResolution:
        if term_clause is not None and pos_clause is not None:
            if term_clause.is_required and pos_clause.is_required:
                spans = (self.as_span(term_clause), self.as_span(pos_clause))
                return TokenResolution.of(Clause(SpanNearQuery(spans, slop=0, in_order=False), Occur.MUST))
            # every clause built here is required, so this is not reached in practice
            return TokenResolution.skip(
                f"Term/POS combination not supported: {term_clause} / {pos_clause}"
            )
        if term_clause is not None:
            return TokenResolution.of(term_clause)
        if pos_clause is not None:
            return TokenResolution.of(pos_clause)
        return TokenResolution.skip("Neither POS tag nor term usable")

    def as_span(self, clause: Clause) -> SpanQuery:
        """
        Positional form of a clause.

        Raises:
            AmbiguousClauseError: a fixed-term clause does not wrap exactly one term
        """
        query = clause.query
        if isinstance(query, MultiTermQuery):
            return SpanMultiTermQuery(query)
        terms = self.index.extract_terms(query)
        if len(terms) != 1:
            raise AmbiguousClauseError(
                f"Expected term set of size 1: {sorted(str(t) for t in terms)}"
            )
        return SpanTermQuery(next(iter(terms)))
