"""
N-gram Package

Probability threshold rule over trigram windows, scored by an external
language model.
"""

from .probability_rule import NgramProbabilityRule, DEFAULT_MIN_PROBABILITY
from .tokens import ngram_tokens
from .types import LanguageModel, NgramToken, Probability, RuleMatch, SENTENCE_START

__all__ = [
    'NgramProbabilityRule',
    'DEFAULT_MIN_PROBABILITY',
    'ngram_tokens',
    'LanguageModel',
    'NgramToken',
    'Probability',
    'RuleMatch',
    'SENTENCE_START',
]
