"""
N-gram Types
"""
from dataclasses import dataclass
from typing import List, Protocol, runtime_checkable

# Sentence start marker as used by n-gram corpora
SENTENCE_START = "_START_"


@dataclass(frozen=True)
class Probability:
    """Pseudo-probability of an n-gram plus how much of it the corpus covered."""
    prob: float
    coverage: float = 1.0
    occurrences: int = 0


@runtime_checkable
class LanguageModel(Protocol):
    def get_pseudo_probability(self, context: List[str]) -> Probability:
        ...


@dataclass(frozen=True)
class NgramToken:
    """A token with its character offsets in the sentence."""
    token: str
    start_pos: int
    end_pos: int

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class RuleMatch:
    """A flagged character range of a sentence."""
    rule_id: str
    from_pos: int
    to_pos: int
    message: str
