"""
spaCy Language Backend
Loads spaCy pipelines and exposes them as tagger capabilities.
"""

import logging
import threading
from typing import Dict, List

import spacy

from .types import AnalyzedToken, AnalyzedTokenReadings

logger = logging.getLogger(__name__)

_PIPELINES: Dict[str, object] = {}
_PIPELINES_LOCK = threading.Lock()


def load_pipeline(model_name: str):
    """Load a spaCy pipeline once per process and share it."""
    with _PIPELINES_LOCK:
        nlp = _PIPELINES.get(model_name)
        if nlp is None:
            logger.info(f"Loading spaCy model '{model_name}'")
            # only the tagger, lemmatizer and their dependencies are needed
            nlp = spacy.load(model_name, exclude=['ner', 'parser'])
            _PIPELINES[model_name] = nlp
        return nlp


class SpacyTagger:
    """
    Tagger capability backed by spaCy.

    Each non-whitespace token gets exactly one reading carrying the
    fine-grained (Penn Treebank style) tag and the lemma.
    """

    def __init__(self, nlp):
        self.nlp = nlp

    def tag(self, text: str) -> List[AnalyzedTokenReadings]:
        doc = self.nlp(text)
        readings = []
        for token in doc:
            if token.is_space:
                continue
            analyzed = AnalyzedToken(token.text, token.tag_ or None, token.lemma_ or None)
            readings.append(AnalyzedTokenReadings(token.text, [analyzed], token.idx))
        return readings
