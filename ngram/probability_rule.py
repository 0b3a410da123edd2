"""
N-gram Probability Rule
Flags trigrams that occur so rarely in the n-gram reference corpus that they
are probably an error.
"""

import logging
from typing import List, Optional

from language.tokenizers import RegexWordTokenizer
from language.types import Language, WordTokenizer

from .tokens import ngram_tokens
from .types import LanguageModel, RuleMatch

logger = logging.getLogger(__name__)

DEFAULT_MIN_PROBABILITY = 1e-15


class NgramProbabilityRule:
    """
    Probability check over a sliding trigram window.

    For every token with two predecessors and a successor, the trigram of
    the previous, current and next token is scored by the language model;
    a probability strictly below the minimum is reported as a match from
    the start of the previous token to the end of the next one.

    The rule keeps no state between sentences.
    """

    RULE_ID = "NGRAM_RULE"

    def __init__(self, language_model: LanguageModel, language: Language,
                 min_probability: Optional[float] = None):
        if language_model is None:
            raise ValueError("language_model is required")
        if language is None:
            raise ValueError("language is required")
        self.lm = language_model
        self.language = language
        if min_probability is None:
            from config import Config
            min_probability = Config.NGRAM_MIN_PROBABILITY
        self.min_probability = min_probability

    def get_id(self) -> str:
        return self.RULE_ID

    def get_description(self) -> str:
        return "Assume errors for ngrams that occur rarely in the reference index"

    def set_min_probability(self, min_probability: float):
        self.min_probability = min_probability

    def match(self, text: str) -> List[RuleMatch]:
        tokens = ngram_tokens(text, True, self._word_tokenizer())
        matches = []
        prev_prev_token = None
        prev_token = None
        for i, token in enumerate(tokens):
            if prev_prev_token is not None and prev_token is not None and i < len(tokens) - 1:
                next_token = tokens[i + 1]
                trigram = [prev_token.token, token.token, next_token.token]
                probability = self.lm.get_pseudo_probability(trigram)
                if probability.prob < self.min_probability:
                    ngram = ' '.join(trigram)
                    logger.debug(f"P={probability.prob} for '{ngram}' is below {self.min_probability}")
                    matches.append(RuleMatch(
                        self.RULE_ID,
                        prev_token.start_pos,
                        next_token.end_pos,
                        f"ngram '{ngram}' rarely occurs in ngram reference corpus",
                    ))
            prev_prev_token = prev_token
            prev_token = token
        return matches

    def reset(self):
        pass

    def _word_tokenizer(self) -> WordTokenizer:
        if self.language.word_tokenizer is not None:
            return self.language.word_tokenizer
        logger.debug(f"No word tokenizer for {self.language}, using the regex tokenizer")
        return RegexWordTokenizer()
