"""
Whoosh Query Translation

Turns the backend-neutral query model into whoosh.query objects at the
search boundary. Regular expressions become whole-term Regex queries, one
per compiled pattern of the query. Inside span queries a multi-term clause is expanded against the reader into a
SpanOr of its terms, because span matchers work on the positions of single
terms.

Whoosh measures span distance from the end of one span to the start of the
next, so ordered clauses that must be adjacent have distance 1. Slop is
applied between neighbouring clauses, not summed over the whole query.
"""

import re
from typing import List, Pattern

from whoosh import query as wq
from whoosh.query.spans import SpanNear2, SpanOr

from query_builder.queries import (
    BooleanQuery, MultiTermQuery, Occur, Query, SpanMultiTermQuery, SpanNearQuery,
    SpanQuery, SpanTermQuery, TermQuery,
)

_FLAG_LETTERS = ((re.IGNORECASE, 'i'), (re.DOTALL, 's'))


def whole_term_regex(pattern: Pattern) -> str:
    """Regex query source accepting exactly the terms `pattern` fullmatches."""
    flags = ''.join(letter for flag, letter in _FLAG_LETTERS if pattern.flags & flag)
    return f"(?{flags}:{pattern.pattern})\\Z" if flags else f"(?:{pattern.pattern})\\Z"


def regex_queries(query: MultiTermQuery) -> List[wq.Regex]:
    return [wq.Regex(query.field, whole_term_regex(p)) for p in query.patterns]


def regex_query(query: MultiTermQuery) -> wq.Query:
    regexes = regex_queries(query)
    return regexes[0] if len(regexes) == 1 else wq.Or(regexes)


def _text(btext) -> str:
    return btext.decode('utf-8') if isinstance(btext, bytes) else btext


class WhooshQueryTranslator:
    """
    Translates queries for one reader. Multi-term expansion sees the terms of
    that reader only.
    """

    def __init__(self, reader):
        self.reader = reader

    def translate(self, query: Query) -> wq.Query:
        if isinstance(query, BooleanQuery):
            return self._boolean(query)
        if isinstance(query, TermQuery):
            return wq.Term(query.term.field, query.term.text)
        if isinstance(query, MultiTermQuery):
            return regex_query(query)
        if isinstance(query, SpanQuery):
            return self.span(query)
        raise TypeError(f"Unsupported query type: {type(query).__name__}")

    def _boolean(self, query: BooleanQuery) -> wq.Query:
        required = [self.translate(q) for q in query.required_queries()]
        optional = [self.translate(c.query) for c in query.clauses if c.occur == Occur.SHOULD]
        prohibited = [self.translate(c.query) for c in query.clauses if c.occur == Occur.MUST_NOT]
        if required:
            positive = wq.And(required)
        elif optional:
            positive = wq.Or(optional)
        else:
            # a purely negative query matches nothing
            return wq.NullQuery
        if prohibited:
            return wq.AndNot(positive, wq.Or(prohibited))
        return positive

    def span(self, query: SpanQuery) -> wq.Query:
        if isinstance(query, SpanTermQuery):
            return wq.Term(query.term.field, query.term.text)
        if isinstance(query, SpanMultiTermQuery):
            terms = self.expand(query.query)
            if not terms:
                return wq.NullQuery
            return SpanOr([wq.Term(query.field, text) for text in terms])
        if isinstance(query, SpanNearQuery):
            clauses = [self.span(c) for c in query.clauses]
            if query.in_order:
                return SpanNear2(clauses, slop=query.slop + 1, ordered=True, mindist=1)
            return SpanNear2(clauses, slop=query.slop, ordered=False, mindist=0)
        raise TypeError(f"Unsupported span query type: {type(query).__name__}")

    def expand(self, query: MultiTermQuery) -> List[str]:
        """Terms of the reader a multi-term query accepts, sorted."""
        if query.field not in self.reader.schema:
            return []
        texts = set()
        for regex in regex_queries(query):
            texts.update(_text(text) for _, text in regex.expanded_terms(self.reader))
        return sorted(texts)
