"""
Word Tokenizers
Lossless tokenizers: joining the returned tokens gives back the input text.
"""

import re
from typing import List

# words, runs of whitespace, or single punctuation characters
_TOKEN_PATTERN = re.compile(r"\w+(?:['’]\w+)*|\s+|[^\w\s]", re.UNICODE)


class RegexWordTokenizer:
    """Dependency-free tokenizer used when no spaCy pipeline is configured."""

    def tokenize(self, text: str) -> List[str]:
        tokens = _TOKEN_PATTERN.findall(text)
        # findall skips nothing for this pattern, but guard against drift
        if ''.join(tokens) != text:
            raise ValueError(f"Tokenizer lost characters for input: {text!r}")
        return tokens


class SpacyWordTokenizer:
    """Tokenizer backed by a spaCy pipeline's tokenizer."""

    def __init__(self, nlp):
        self.nlp = nlp

    def tokenize(self, text: str) -> List[str]:
        tokens = []
        doc = self.nlp.make_doc(text)
        position = 0
        for token in doc:
            if token.idx > position:
                # leading whitespace spaCy does not attach to a token
                tokens.append(text[position:token.idx])
            tokens.append(token.text)
            if token.whitespace_:
                tokens.append(token.whitespace_)
            position = token.idx + len(token.text) + len(token.whitespace_)
        if position < len(text):
            tokens.append(text[position:])
        return tokens
