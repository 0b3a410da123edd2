"""
Candidate Searcher
Search-then-verify front end: finds the sentences an exact rule matcher
has to look at for a given pattern rule.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from patterns.types import PatternRule
from query_builder.builder import PatternRuleQueryBuilder
from query_builder.queries import BooleanQuery

from .index import SentenceIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateResult:
    """
    Candidate sentences for one rule.

    `full_scan` is True when the rule could not be translated and every
    document is a candidate.
    """
    rule_id: str
    doc_ids: List[int]
    query: Optional[BooleanQuery] = None
    full_scan: bool = False

    def __len__(self) -> int:
        return len(self.doc_ids)


class CandidateSearcher:
    def __init__(self, builder: PatternRuleQueryBuilder, index: SentenceIndex):
        self.builder = builder
        self.index = index

    def find_candidates(self, rule: PatternRule) -> CandidateResult:
        """
        Raises:
            RuleTranslationError: translating the rule failed in the backend
        """
        translation = self.builder.translate(rule)
        if not translation.is_translated:
            logger.info(f"Rule {rule.full_id} not translatable, all {len(self.index)} sentences are candidates")
            return CandidateResult(rule.full_id, self.index.doc_ids(), full_scan=True)
        doc_ids = self.index.search(translation.query)
        logger.debug(f"Rule {rule.full_id}: {len(doc_ids)} of {len(self.index)} sentences are candidates")
        return CandidateResult(rule.full_id, doc_ids, query=translation.query)
