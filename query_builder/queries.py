"""
Query Model
Backend-neutral query objects handed to the sentence index search API, which
runs them as Whoosh queries (see sentence_index.whoosh_query).

Leaf queries match terms of one field. Multi-term queries (fast-dialect and
fallback regular expressions) match every term their pattern accepts and can
be wrapped into span queries directly; a TermQuery needs term extraction to
become a span.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Pattern, Set, Tuple

from .fallback_regex import compile_case_exact_regex, compile_fallback_regex
from .lucene_regex import compile_lucene_regex


@dataclass(frozen=True, order=True)
class Term:
    """A field and the exact text stored in it."""
    field: str
    text: str

    def __str__(self) -> str:
        return f"{self.field}:{self.text}"


class Occur(Enum):
    MUST = "+"
    SHOULD = ""
    MUST_NOT = "-"


class Query:
    """Base class of all queries."""

    @property
    def is_multi_term(self) -> bool:
        return False

    def extract_terms(self) -> Set[Term]:
        """Terms of a query that matches fixed terms only."""
        raise TypeError(f"{type(self).__name__} does not consist of fixed terms")


class MultiTermQuery(Query):
    """A query over all terms of a field accepted by `accepts`."""
    term: Term

    @property
    def field(self) -> str:
        return self.term.field

    @property
    def is_multi_term(self) -> bool:
        return True

    @property
    def patterns(self) -> Tuple[Pattern, ...]:
        """Compiled patterns; a term is accepted if it fullmatches any of them."""
        raise NotImplementedError

    def accepts(self, text: str) -> bool:
        return any(p.fullmatch(text) is not None for p in self.patterns)


@dataclass(frozen=True)
class TermQuery(Query):
    term: Term

    @property
    def field(self) -> str:
        return self.term.field

    def extract_terms(self) -> Set[Term]:
        return {self.term}

    def __str__(self) -> str:
        return str(self.term)


@dataclass(frozen=True)
class RegexpQuery(MultiTermQuery):
    """
    Regular expression in the fast, index-native dialect (see lucene_regex).

    Raises RegexSyntaxError on construction when the pattern is not valid in
    that dialect.
    """
    term: Term
    _compiled: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_compiled', compile_lucene_regex(self.term.text))

    @property
    def patterns(self) -> Tuple[Pattern, ...]:
        return (self._compiled,)

    def __str__(self) -> str:
        return f"{self.term.field}:/{self.term.text}/"


@dataclass(frozen=True)
class FallbackRegexQuery(MultiTermQuery):
    """
    Regular expression run by the complete (slow) engine, Python's re.

    Matching is always case-insensitive; see fallback_regex. A term the
    pattern matches under its own case rules is accepted as well:
    case-insensitive matching narrows negated classes such as [^a-z].
    """
    term: Term
    _compiled: Tuple[Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_compiled', (compile_fallback_regex(self.term.text),
                                                compile_case_exact_regex(self.term.text)))

    @property
    def case_insensitive(self) -> bool:
        return True

    @property
    def patterns(self) -> Tuple[Pattern, ...]:
        return self._compiled

    def __str__(self) -> str:
        return f"{self.term.field}:re/{self.term.text}/i"


class SpanQuery(Query):
    """A query matching token positions, not just documents."""

    @property
    def field(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class SpanTermQuery(SpanQuery):
    term: Term

    @property
    def field(self) -> str:
        return self.term.field

    def extract_terms(self) -> Set[Term]:
        return {self.term}

    def __str__(self) -> str:
        return str(self.term)


@dataclass(frozen=True)
class SpanMultiTermQuery(SpanQuery):
    """Positions of every term accepted by the wrapped multi-term query."""
    query: MultiTermQuery

    @property
    def field(self) -> str:
        return self.query.field

    def __str__(self) -> str:
        return f"SpanMultiTermQueryWrapper({self.query})"


@dataclass(frozen=True)
class SpanNearQuery(SpanQuery):
    """
    Positions where every clause matches within `slop` positions of each other.

    With slop 0 and in_order False all clauses must match the same position.
    """
    clauses: Tuple[SpanQuery, ...]
    slop: int = 0
    in_order: bool = False

    def __post_init__(self):
        if not self.clauses:
            raise ValueError("SpanNearQuery needs at least one clause")
        if self.slop < 0:
            raise ValueError(f"slop must not be negative: {self.slop}")
        fields = {c.field for c in self.clauses}
        if len(fields) != 1:
            raise ValueError(f"Clauses must have same field: {sorted(fields)}")

    @property
    def field(self) -> str:
        return self.clauses[0].field

    def __str__(self) -> str:
        inner = ', '.join(str(c) for c in self.clauses)
        return f"spanNear([{inner}], {self.slop}, {str(self.in_order).lower()})"


@dataclass(frozen=True)
class Clause:
    """A query and how it must occur in a matching document."""
    query: Query
    occur: Occur = Occur.MUST

    @property
    def is_required(self) -> bool:
        return self.occur == Occur.MUST

    def __str__(self) -> str:
        return f"{self.occur.value}{self.query}"


@dataclass(frozen=True)
class BooleanQuery(Query):
    clauses: Tuple[Clause, ...] = ()

    def required_queries(self) -> List[Query]:
        return [c.query for c in self.clauses if c.occur == Occur.MUST]

    def extract_terms(self) -> Set[Term]:
        terms: Set[Term] = set()
        for clause in self.clauses:
            if clause.occur != Occur.MUST_NOT:
                terms |= clause.query.extract_terms()
        return terms

    def __str__(self) -> str:
        return ' '.join(str(c) for c in self.clauses)
