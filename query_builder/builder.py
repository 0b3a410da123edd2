"""
Pattern Rule Query Builder

Builds an index query from a pattern rule. The index must hold one sentence
per document. The query returns potential matches only: the exact rule
matcher still has to run over them to confirm there is an error.
"""

import logging
from typing import List, Optional

from language.types import Language
from patterns.types import PatternRule

from .clauses import ClauseResolver
from .errors import RuleTranslationError
from .positions import PositionCombiner, TermExtractor
from .queries import BooleanQuery
from .results import RuleTranslation, SkippedToken, TranslationStatus
from .schema import IndexSchema, get_default_schema

logger = logging.getLogger(__name__)


class PatternRuleQueryBuilder:
    """
    Factory for relaxed index queries built from pattern rules.

    Holds no per-rule state, so one builder may translate rules from several
    threads as long as the index handle supports concurrent reads.

    Args:
        language: Language providing optional capabilities (synthesizer)
        index: Read-only index handle used for term extraction
        schema: Field contract shared with the indexer; the configured default if omitted
    """

    def __init__(self, language: Language, index: TermExtractor, schema: Optional[IndexSchema] = None):
        self.language = language
        self.index = index
        self.schema = schema or get_default_schema()
        self.resolver = ClauseResolver(language, self.schema, PositionCombiner(index))

    def translate(self, rule: PatternRule) -> RuleTranslation:
        """
        Iterate over all tokens, skip those not supported, AND the others together.

        Raises:
            RuleTranslationError: a backend failure (term extraction, synthesizer,
                a regex even the fallback engine cannot parse)
        """
        clauses = []
        skipped: List[SkippedToken] = []
        for index, token in enumerate(rule.tokens):
            try:
                resolution = self.resolver.resolve(token)
            except Exception as e:
                raise RuleTranslationError(rule.full_id, e) from e
            if resolution.is_skip:
                # too broad matches are fine, so ignoring the token is safe
                logger.debug(f"Ignoring token {index} of {rule.full_id} ({token}): {resolution.reason}")
                skipped.append(SkippedToken(index, token, resolution.reason))
                continue
            clauses.append(resolution.clause)

        if not clauses:
            reason = f"No items found in rule that can be used to build a search query: {rule}"
            logger.info(f"Rule {rule.full_id} cannot be translated into an index query")
            return RuleTranslation(rule.full_id, TranslationStatus.UNSUPPORTED,
                                   skipped=tuple(skipped), reason=reason)

        query = BooleanQuery(tuple(clauses))
        logger.debug(f"Query for {rule.full_id}: {query}")
        return RuleTranslation(rule.full_id, TranslationStatus.TRANSLATED, query=query,
                               skipped=tuple(skipped))

    def build(self, rule: PatternRule) -> BooleanQuery:
        """
        Relaxed query for a rule.

        Raises:
            UnsupportedPatternRuleError: no token of the rule could be used;
                run the exact matcher over the whole corpus instead
            RuleTranslationError: see translate()
        """
        return self.translate(rule).unwrap()
