"""
Unit tests for the per-token clause resolver.
"""

import pytest

from patterns.types import PatternToken
from query_builder.clauses import ClauseResolver
from query_builder.positions import PositionCombiner
from query_builder.queries import (
    Occur, RegexpQuery, SpanMultiTermQuery, SpanNearQuery, SpanTermQuery, Term, TermQuery,
)


@pytest.fixture
def resolver(language, schema, corpus_index):
    return ClauseResolver(language, schema, PositionCombiner(corpus_index))


@pytest.fixture
def bare_resolver(bare_language, schema, corpus_index):
    return ClauseResolver(bare_language, schema, PositionCombiner(corpus_index))


class TestSkippedTokens:

    def test_negated_string(self, resolver):
        token = PatternToken(string="the", negation=True)
        assert resolver.term_clause(token) is None
        assert resolver.resolve(token).is_skip

    def test_optional_token(self, resolver):
        token = PatternToken(string="really", pos_tag="RB", min_occurrence=0)
        assert resolver.term_clause(token) is None
        assert resolver.pos_clause(token) is None
        assert resolver.resolve(token).reason == "Neither POS tag nor term usable"

    def test_empty_token(self, resolver):
        assert resolver.resolve(PatternToken()).is_skip

    def test_backreference(self, resolver):
        resolution = resolver.resolve(PatternToken(string="\\1"))
        assert resolution.is_skip
        assert "match references" in resolution.reason

    def test_backreference_inside_longer_string_is_kept(self, resolver):
        resolution = resolver.resolve(PatternToken(string="x\\1"))
        assert resolution.clause.query == TermQuery(Term("fieldLowercase", "x\\1"))

    def test_or_group(self, resolver):
        resolution = resolver.resolve(PatternToken(string="a", or_group=True))
        assert resolution.is_skip
        assert "<or>" in resolution.reason

    def test_unification(self, resolver):
        resolution = resolver.resolve(PatternToken(string="a", unified=True))
        assert resolution.is_skip
        assert "unification" in resolution.reason

    def test_negated_pos_keeps_string(self, resolver):
        resolution = resolver.resolve(PatternToken(string="is", pos_tag="NN", pos_negation=True))
        assert resolution.clause.query == TermQuery(Term("fieldLowercase", "is"))


class TestTermClause:

    def test_literal_is_lowercased(self, resolver):
        clause = resolver.term_clause(PatternToken(string="Could"))
        assert clause.query == TermQuery(Term("fieldLowercase", "could"))
        assert clause.occur == Occur.MUST

    def test_case_sensitive_literal(self, resolver):
        clause = resolver.term_clause(PatternToken(string="Their", case_sensitive=True))
        assert clause.query == TermQuery(Term("field", "Their"))

    def test_inflected_expands_synthesized_forms(self, resolver, synthesizer):
        clause = resolver.term_clause(PatternToken(string="run", inflected=True))
        assert isinstance(clause.query, RegexpQuery)
        assert clause.query.term == Term("fieldLowercase", "run|runs|ran|running")
        assert synthesizer.calls == ["run"]

    def test_inflected_without_forms_uses_base_form(self, resolver):
        clause = resolver.term_clause(PatternToken(string="cat", inflected=True))
        assert clause.query == TermQuery(Term("fieldLowercase", "cat"))

    def test_inflected_without_synthesizer_is_skipped(self, bare_resolver):
        token = PatternToken(string="run", inflected=True)
        assert bare_resolver.term_clause(token) is None
        assert bare_resolver.resolve(token).is_skip

    def test_inflected_regex_matches_lemma_terms(self, resolver):
        clause = resolver.term_clause(PatternToken(string="ri.e", regexp=True, inflected=True))
        assert clause.query.term == Term("fieldLowercase", "_lemma_(ri.e)")
        assert clause.query.accepts("_lemma_rise")
        assert not clause.query.accepts("rise")


class TestPosClause:

    def test_pos_tag(self, resolver):
        clause = resolver.pos_clause(PatternToken(pos_tag="MD"))
        assert clause.query == TermQuery(Term("fieldLowercase", "_pos_md"))

    def test_case_sensitive_pos_tag(self, resolver):
        clause = resolver.pos_clause(PatternToken(pos_tag="MD", case_sensitive=True))
        assert clause.query == TermQuery(Term("field", "_POS_MD"))

    def test_pos_regex(self, resolver):
        clause = resolver.pos_clause(PatternToken(pos_tag="VB.*", pos_regexp=True))
        assert clause.query.term == Term("fieldLowercase", "_pos_(vb.*)")
        assert clause.query.accepts("_pos_vbz")

    def test_negated_pos(self, resolver):
        assert resolver.pos_clause(PatternToken(pos_tag="NN", pos_negation=True)) is None


class TestCombinedToken:

    def test_string_and_pos_regex_give_one_positional_clause(self, resolver):
        token = PatternToken(string="run", pos_tag="VB.*", pos_regexp=True)
        resolution = resolver.resolve(token)
        query = resolution.clause.query
        assert isinstance(query, SpanNearQuery)
        assert query.slop == 0
        assert not query.in_order
        assert query.clauses[0] == SpanTermQuery(Term("fieldLowercase", "run"))
        assert isinstance(query.clauses[1], SpanMultiTermQuery)

    def test_inflected_string_and_pos_regex(self, resolver):
        token = PatternToken(string="run", inflected=True, pos_tag="VB.*", pos_regexp=True)
        query = resolver.resolve(token).clause.query
        assert all(isinstance(c, SpanMultiTermQuery) for c in query.clauses)
        assert str(query) == (
            "spanNear([SpanMultiTermQueryWrapper(fieldLowercase:/run|runs|ran|running/), "
            "SpanMultiTermQueryWrapper(fieldLowercase:/_pos_(vb.*)/)], 0, false)"
        )
