"""
Language Capability Types
A language is a value exposing optional capabilities (tokenizer, tagger,
chunker, synthesizer). Callers ask for a capability and handle its absence;
there is no per-language subclassing.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class AnalyzedToken:
    """One reading of a token: surface form plus POS tag and lemma (either may be unknown)."""
    token: str
    pos_tag: Optional[str] = None
    lemma: Optional[str] = None


@dataclass
class AnalyzedTokenReadings:
    """All readings of the token at one position of a sentence."""
    token: str
    readings: List[AnalyzedToken] = field(default_factory=list)
    start_pos: int = 0

    @classmethod
    def single(cls, token: str, pos_tag: Optional[str] = None, lemma: Optional[str] = None,
               start_pos: int = 0) -> 'AnalyzedTokenReadings':
        return cls(token, [AnalyzedToken(token, pos_tag, lemma)], start_pos)

    @property
    def end_pos(self) -> int:
        return self.start_pos + len(self.token)


@runtime_checkable
class WordTokenizer(Protocol):
    """Splits text into tokens; whitespace is kept as tokens so offsets can be summed."""

    def tokenize(self, text: str) -> List[str]:
        ...


@runtime_checkable
class Tagger(Protocol):
    """Tokenizes and tags a sentence, whitespace excluded."""

    def tag(self, text: str) -> List[AnalyzedTokenReadings]:
        ...


@runtime_checkable
class Chunker(Protocol):
    def add_chunk_tags(self, tokens: List[AnalyzedTokenReadings]) -> None:
        ...


@runtime_checkable
class Synthesizer(Protocol):
    """Produces inflected surface forms of a base form."""

    def synthesize(self, lemma: str, pos_tag_regex: str = ".*") -> List[str]:
        ...


CAPABILITIES = ('word_tokenizer', 'tagger', 'chunker', 'synthesizer')


@dataclass(frozen=True)
class Language:
    """A language and the capabilities available for it."""
    code: str
    name: str = ""
    word_tokenizer: Optional[WordTokenizer] = None
    tagger: Optional[Tagger] = None
    chunker: Optional[Chunker] = None
    synthesizer: Optional[Synthesizer] = None

    def has(self, capability: str) -> bool:
        if capability not in CAPABILITIES:
            raise ValueError(f"Unknown language capability: {capability}")
        return getattr(self, capability) is not None

    def __str__(self) -> str:
        return self.name or self.code
