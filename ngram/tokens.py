"""
N-gram Tokenization
Splits a sentence the way n-gram corpora are tokenized, keeping offsets.
"""

from typing import List

from language.types import WordTokenizer

from .types import SENTENCE_START, NgramToken


def ngram_tokens(sentence: str, add_start_token: bool, tokenizer: WordTokenizer) -> List[NgramToken]:
    """
    Non-whitespace tokens of a sentence with character offsets.

    Args:
        sentence: The sentence text
        add_start_token: Prepend the zero-width sentence start marker
        tokenizer: Lossless word tokenizer (whitespace is returned as tokens)
    """
    result = []
    if add_start_token:
        result.append(NgramToken(SENTENCE_START, 0, 0))
    start_pos = 0
    for token in tokenizer.tokenize(sentence):
        if token.strip():
            result.append(NgramToken(token, start_pos, start_pos + len(token)))
        start_pos += len(token)
    return result
