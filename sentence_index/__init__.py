"""
Sentence Index Package

Whoosh-backed one-sentence-per-document positional index and the candidate
searcher that pairs it with the query builder.
"""

from .index import SentenceIndex, IndexedSentence
from .searcher import CandidateSearcher, CandidateResult

__all__ = [
    'SentenceIndex',
    'IndexedSentence',
    'CandidateSearcher',
    'CandidateResult',
]
