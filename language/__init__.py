"""
Language Capabilities Package

A Language exposes optional capabilities (word tokenizer, tagger, chunker,
synthesizer) that callers query by presence.

Usage:
    from language import english

    lang = english()
    if lang.has('synthesizer'):
        forms = lang.synthesizer.synthesize('run')
"""

from typing import Optional

from .types import (
    AnalyzedToken,
    AnalyzedTokenReadings,
    Language,
    WordTokenizer,
    Tagger,
    Chunker,
    Synthesizer,
)
from .tokenizers import RegexWordTokenizer, SpacyWordTokenizer


def english(nlp=None, model_name: Optional[str] = None) -> Language:
    """
    English with spaCy tokenizer and tagger plus the pyinflect synthesizer.

    Args:
        nlp: An already loaded spaCy pipeline; loaded from config when omitted
        model_name: spaCy model to load, defaults to Config.SPACY_MODEL
    """
    from config import Config
    from .spacy_backend import SpacyTagger, load_pipeline
    from .synthesizer import PyInflectSynthesizer

    if nlp is None:
        nlp = load_pipeline(model_name or Config.SPACY_MODEL)
    return Language(
        code='en',
        name='English',
        word_tokenizer=SpacyWordTokenizer(nlp),
        tagger=SpacyTagger(nlp),
        synthesizer=PyInflectSynthesizer(),
    )


__all__ = [
    'AnalyzedToken',
    'AnalyzedTokenReadings',
    'Language',
    'WordTokenizer',
    'Tagger',
    'Chunker',
    'Synthesizer',
    'RegexWordTokenizer',
    'SpacyWordTokenizer',
    'english',
]
