"""
Unit tests for the translation of index queries into Whoosh queries.
"""

import re

import pytest
from whoosh import query as wq
from whoosh.query.spans import SpanNear2, SpanOr

from query_builder.queries import (
    BooleanQuery, Clause, FallbackRegexQuery, Occur, RegexpQuery, SpanMultiTermQuery,
    SpanNearQuery, SpanTermQuery, Term, TermQuery,
)
from sentence_index.whoosh_query import WhooshQueryTranslator, whole_term_regex


def lower(text):
    return Term("fieldLowercase", text)


@pytest.fixture
def translator(corpus_index):
    with corpus_index.ix.searcher() as searcher:
        yield WhooshQueryTranslator(searcher.reader())


class TestWholeTermRegex:

    def test_anchored_with_flags(self):
        assert whole_term_regex(re.compile("ab", re.DOTALL)) == "(?s:ab)\\Z"
        assert whole_term_regex(re.compile("ab", re.IGNORECASE)) == "(?i:ab)\\Z"
        assert whole_term_regex(re.compile("ab")) == "(?:ab)\\Z"

    def test_prefix_match_is_not_enough(self):
        source = whole_term_regex(RegexpQuery(lower("ru.")).patterns[0])
        assert re.match(source, "run")
        assert not re.match(source, "running")

    def test_alternation_stays_whole_term(self):
        source = whole_term_regex(RegexpQuery(lower("a|bc")).patterns[0])
        assert re.match(source, "a")
        assert not re.match(source, "abc")


class TestTranslation:

    def test_term(self, translator):
        assert translator.translate(TermQuery(lower("of"))) == wq.Term("fieldLowercase", "of")

    def test_regexps_become_regex_queries(self, translator):
        fast = translator.translate(RegexpQuery(lower("ru.*")))
        assert isinstance(fast, wq.Regex)
        assert fast.fieldname == "fieldLowercase"
        fallback = translator.translate(FallbackRegexQuery(lower(r"\p{Punct}")))
        assert isinstance(fallback, wq.Or)
        case_insensitive, case_exact = fallback.subqueries
        assert case_insensitive.text.startswith("(?i:")
        assert case_exact.text.startswith("(?:")

    def test_fallback_expansion_keeps_case_exact_matches(self, translator):
        # re.IGNORECASE keeps "T" out of [^a-z]
        query = FallbackRegexQuery(Term("field", r"\P{Lower}he"))
        assert translator.expand(query) == ["She", "The"]

    def test_boolean(self, translator):
        query = BooleanQuery((Clause(TermQuery(lower("is"))),
                              Clause(TermQuery(lower("their")), Occur.MUST_NOT)))
        translated = translator.translate(query)
        assert isinstance(translated, wq.AndNot)

    def test_purely_negative(self, translator):
        query = BooleanQuery((Clause(TermQuery(lower("the")), Occur.MUST_NOT),))
        assert translator.translate(query) is wq.NullQuery

    def test_span_multi_term_is_expanded(self, translator):
        translated = translator.span(SpanMultiTermQuery(RegexpQuery(lower("ru.*"))))
        assert isinstance(translated, SpanOr)
        assert sorted(q.text for q in translated.subqs) == ["run", "running", "runs"]

    def test_span_multi_term_without_terms(self, translator):
        assert translator.span(SpanMultiTermQuery(RegexpQuery(lower("zz.*")))) is wq.NullQuery

    def test_near_distances(self, translator):
        clauses = (SpanTermQuery(lower("could")), SpanTermQuery(lower("of")))
        ordered = translator.span(SpanNearQuery(clauses, 0, True))
        assert isinstance(ordered, SpanNear2)
        assert (ordered.slop, ordered.ordered, ordered.mindist) == (1, True, 1)
        same_position = translator.span(SpanNearQuery(clauses))
        assert (same_position.slop, same_position.ordered, same_position.mindist) == (0, False, 0)

    def test_expand_unknown_field(self, translator):
        assert translator.expand(RegexpQuery(Term("lemma", "a.*"))) == []
