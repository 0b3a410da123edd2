"""
Per-Token Clause Resolver

Turns one pattern token into at most one term clause and at most one POS
clause. Only positive evidence becomes a clause: negations and optional
tokens are dropped instead of translated, because a query may return too
many sentences but never too few.
"""

import logging
from typing import Optional

from language.types import Language
from patterns.types import PatternToken

from .lucene_regex import alternation
from .positions import PositionCombiner
from .queries import Clause, Occur, RegexpQuery, TermQuery
from .regex_adapter import RegexAdapter, simplify
from .results import TokenResolution
from .schema import IndexSchema

logger = logging.getLogger(__name__)


class ClauseResolver:
    """
    Resolves pattern tokens into required clauses.

    Args:
        language: Language whose synthesizer capability, if any, expands inflected tokens
        schema: Field contract of the index
        combiner: Merges term and POS clauses of the same token
    """

    def __init__(self, language: Language, schema: IndexSchema, combiner: PositionCombiner):
        self.language = language
        self.schema = schema
        self.combiner = combiner
        self.regex_adapter = RegexAdapter(schema)

    def resolve(self, token: PatternToken) -> TokenResolution:
        reason = self.unsupported_reason(token)
        if reason:
            return TokenResolution.skip(reason)
        term_clause = self.term_clause(token)
        pos_clause = self.pos_clause(token)
        return self.combiner.combine(term_clause, pos_clause)

    def unsupported_reason(self, token: PatternToken) -> Optional[str]:
        """Why a token cannot be translated at all, or None."""
        if token.or_group:
            return "<or> groups are not supported"
        if token.unified:
            return "Tokens with unification are not supported"
        if token.is_backreference_only:
            return "Tokens with only match references (e.g. \\1) are not supported"
        return None

    def term_clause(self, token: PatternToken) -> Optional[Clause]:
        term_str = token.string
        if not term_str:
            return None
        if token.negation or token.is_optional:
            # negation, if any, would have to hold at the same position
            return None

        if token.inflected and token.regexp:
            prefix, suffix = self.schema.lemma_prefix + "(", ")"
            lemma_term = self.schema.wrapped_term(prefix, simplify(term_str), suffix, token.case_sensitive)
            query = self.regex_adapter.resolve(lemma_term, term_str, token, prefix, suffix)
            return Clause(query, Occur.MUST)

        if token.inflected:
            return self._inflected_clause(token, term_str)

        term = self.schema.term_for(term_str, token.case_sensitive)
        if token.regexp:
            return Clause(self.regex_adapter.resolve(term, term_str, token), Occur.MUST)
        return Clause(TermQuery(term), Occur.MUST)

    def _inflected_clause(self, token: PatternToken, base_form: str) -> Optional[Clause]:
        # Matching the lemma term directly misses sentences whose tagger
        # assigned a different lemma, so inflect the base form instead.
        synthesizer = self.language.synthesizer
        if synthesizer is None:
            logger.debug(f"No synthesizer for {self.language}, ignoring inflected token {token}")
            return None
        forms = synthesizer.synthesize(base_form, ".*")
        if not forms:
            return Clause(TermQuery(self.schema.term_for(base_form, token.case_sensitive)), Occur.MUST)
        # the base form itself may be missing from the synthesized forms
        alternatives = list(dict.fromkeys([base_form] + list(forms)))
        pattern_term = self.schema.term_for(alternation(alternatives), token.case_sensitive)
        return Clause(RegexpQuery(pattern_term), Occur.MUST)

    def pos_clause(self, token: PatternToken) -> Optional[Clause]:
        pos = token.pos_tag
        if not pos:
            return None
        if token.pos_negation or token.is_optional:
            return None
        if token.pos_regexp:
            prefix, suffix = self.schema.pos_prefix + "(", ")"
            pos_term = self.schema.wrapped_term(prefix, pos, suffix, token.case_sensitive)
            return Clause(self.regex_adapter.resolve(pos_term, pos, token, prefix, suffix), Occur.MUST)
        pos_term = self.schema.wrapped_term(self.schema.pos_prefix, pos, "", token.case_sensitive)
        return Clause(TermQuery(pos_term), Occur.MUST)
