"""
Fast Regex Dialect

The automaton-friendly regular expression syntax of Lucene's RegExp, used by
RegexpQuery. It is parsed here with the same recursive descent rules and
translated to an equivalent Python pattern for whole-term matching, which
the sentence index hands to Whoosh:

    union      ::= concat ( '|' union )?
    concat     ::= repeat concat?          (stops before ')' and '|')
    repeat     ::= simple ( '?' | '*' | '+' | '{n}' | '{n,}' | '{n,m}' )*
    simple     ::= '.' | '(' ')' | '(' union ')' | class | char
    class      ::= '[' '^'? ( char ( '-' char )? )+ ']'
    char       ::= '\\'? <any character>

Notable consequences of the grammar:
- an escaped character is always literal, so '\\d' means 'd' and '\\w' means 'w';
- an operator in atom position is literal, so '(?:ab)' matches the text '?:ab';
- there are no anchors, lookarounds, shorthand classes or inline flags;
- '\\p{Punct}' fails because '{' must start a numeric repetition.

This dialect runs with RegExp's optional operators switched off, so '&'
(intersection), '~' (complement), '<' and '>' (numeric intervals), '@' (any
string), '"' (quoted strings) and '#' (empty language) are literal
characters. That holds for this backend only: Lucene's RegexpQuery enables
all of them by default, and a pattern using them reads differently there.
"""

import re
from typing import List, Pattern

from .errors import RegexSyntaxError

_REPEAT_CHARS = '?*+{'
_CLASS_SPECIALS = '\\]^-[&~|'

# Python pattern that never matches, for repetitions with min > max
_EMPTY_LANGUAGE = '(?!)'


class _LuceneRegexParser:
    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0

    def parse(self) -> str:
        if not self.pattern:
            return ''
        result = self._union()
        if self.pos < len(self.pattern):
            self._error("end-of-string expected")
        return result

    # Helpers

    def _error(self, message: str):
        raise RegexSyntaxError(message, self.pattern, self.pos)

    def _more(self) -> bool:
        return self.pos < len(self.pattern)

    def _peek(self, chars: str) -> bool:
        return self._more() and self.pattern[self.pos] in chars

    def _match(self, char: str) -> bool:
        if self._more() and self.pattern[self.pos] == char:
            self.pos += 1
            return True
        return False

    def _next(self) -> str:
        if not self._more():
            self._error("unexpected end-of-string")
        char = self.pattern[self.pos]
        self.pos += 1
        return char

    # Grammar

    def _union(self) -> str:
        left = self._concat()
        if self._match('|'):
            right = self._union()
            return f"(?:{left}|{right})"
        return left

    def _concat(self) -> str:
        parts = [self._repeat()]
        while self._more() and not self._peek(')|'):
            parts.append(self._repeat())
        return ''.join(parts)

    def _repeat(self) -> str:
        expr = self._class_or_simple()
        while self._peek(_REPEAT_CHARS):
            if self._match('?'):
                expr = f"(?:{expr})?"
            elif self._match('*'):
                expr = f"(?:{expr})*"
            elif self._match('+'):
                expr = f"(?:{expr})+"
            elif self._match('{'):
                expr = self._bounded_repeat(expr)
        return expr

    def _bounded_repeat(self, expr: str) -> str:
        minimum = self._integer()
        if minimum is None:
            self._error("integer expected")
        maximum = minimum
        if self._match(','):
            maximum = self._integer()
        if not self._match('}'):
            self._error("expected '}'")
        if maximum is None:
            return f"(?:{expr}){{{minimum},}}"
        if minimum > maximum:
            return _EMPTY_LANGUAGE
        return f"(?:{expr}){{{minimum},{maximum}}}"

    def _integer(self):
        start = self.pos
        while self._peek('0123456789'):
            self.pos += 1
        if start == self.pos:
            return None
        return int(self.pattern[start:self.pos])

    def _class_or_simple(self) -> str:
        if not self._match('['):
            return self._simple()
        negate = self._match('^')
        items = [self._class_item()]
        while self._more() and not self._peek(']'):
            items.append(self._class_item())
        if not self._match(']'):
            self._error("expected ']'")
        return '[' + ('^' if negate else '') + ''.join(items) + ']'

    def _class_item(self) -> str:
        start = self._char()
        if self._match('-'):
            end = self._char()
            if start > end:
                self._error(f"invalid range: from ({start}) cannot be > to ({end})")
            return f"{_class_escape(start)}-{_class_escape(end)}"
        return _class_escape(start)

    def _simple(self) -> str:
        if self._match('.'):
            return '.'
        if self._match('('):
            if self._match(')'):
                return '(?:)'
            inner = self._union()
            if not self._match(')'):
                self._error("expected ')'")
            return f"(?:{inner})"
        return re.escape(self._char())

    def _char(self) -> str:
        self._match('\\')
        return self._next()


def _class_escape(char: str) -> str:
    return '\\' + char if char in _CLASS_SPECIALS else char


def translate_lucene_regex(pattern: str) -> str:
    """Translate a fast-dialect pattern into an equivalent Python pattern."""
    return _LuceneRegexParser(pattern).parse()


def compile_lucene_regex(pattern: str) -> Pattern:
    """
    Compile a fast-dialect pattern for whole-term matching.

    Raises:
        RegexSyntaxError: the pattern is not valid in the fast dialect
    """
    return re.compile(translate_lucene_regex(pattern), re.DOTALL)


def escape_lucene_regex(text: str) -> str:
    """Escape text so the fast dialect matches it literally."""
    return ''.join(c if c.isalnum() else '\\' + c for c in text)


def is_valid_lucene_regex(pattern: str) -> bool:
    try:
        translate_lucene_regex(pattern)
    except RegexSyntaxError:
        return False
    return True


def alternation(literals: List[str]) -> str:
    """Fast-dialect pattern matching any of the given literal strings."""
    return '|'.join(escape_lucene_regex(literal) for literal in literals)
