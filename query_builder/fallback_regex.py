"""
Fallback Regex Engine

Rule patterns are written in Java regex syntax. Patterns the fast dialect
cannot express are run by Python's re instead, after a small compatibility
pass for the Java constructs re lacks:

- POSIX and Unicode property classes (\\p{Punct}, \\p{Lu}, \\P{Alpha}, ...);
- inline flag toggles such as (?iu) or (?-i) in the middle of a pattern,
  which re only accepts as scoped groups; each toggle is rescoped to the rest
  of its enclosing group, alternatives included;
- nested classes and class intersection ([a-z&&[^aeiou]]), rewritten as
  alternatives and lookaheads; a negated class negates its whole content;
- \\Q...\\E quoting and the \\z anchor.

Matching is always case-insensitive, whatever the pattern token declares,
and a (?-i) toggle is dropped: the engine may run over the lowercased field.
compile_case_exact_regex gives the pattern with its own case rules, for
callers that also accept what it matches that way.
"""

import logging
import re
import string
from typing import List, Pattern

from .errors import RegexSyntaxError

logger = logging.getLogger(__name__)

FALLBACK_FLAGS = re.IGNORECASE

_ASCII_PUNCT = re.escape(string.punctuation)

# Java property name -> contents of a character class
_CLASS_PROPERTIES = {
    'Punct': _ASCII_PUNCT,
    'Alpha': 'a-zA-Z',
    'Digit': '0-9',
    'Alnum': 'a-zA-Z0-9',
    'Upper': 'A-Z',
    'Lower': 'a-z',
    'Space': ' \\t\\n\\x0b\\f\\r',
    'XDigit': '0-9a-fA-F',
    'ASCII': '\\x00-\\x7f',
    'Blank': ' \\t',
    'Graph': '!-~',
    'Print': ' -~',
    'Cntrl': '\\x00-\\x1f\\x7f',
    'Nd': '\\d',
    'IsDigit': '\\d',
    'IsWhite_Space': '\\s',
}

# Unicode letter properties have no class-content form in re; only usable outside [...]
_LETTER_PROPERTIES = {'L', 'Lu', 'Ll', 'Lt', 'IsL', 'IsLu', 'IsLl', 'IsAlphabetic', 'IsLetter',
                      'IsUppercase', 'IsLowercase', 'javaLetter', 'javaUpperCase', 'javaLowerCase'}
_LETTER_CLASS = '[^\\W\\d_]'
_NON_LETTER_CLASS = '[\\W\\d_]'

# flags re can scope; Java's u, U and d have no effect on str patterns here
_SCOPABLE_FLAGS = set('imsx')

_FLAG_GROUP = re.compile(r'\(\?([a-zA-Z]*)(?:-([a-zA-Z]*))?([:)])')
_NAMED_GROUP = re.compile(r'\(\?<[a-zA-Z]')


class _JavaRegexTranslator:
    def __init__(self, pattern: str, case_toggles: bool = True):
        self.pattern = pattern
        self.case_toggles = case_toggles
        self.pos = 0
        self.out: List[str] = []
        # one entry per open group: the flag scopes opened inside it
        self.scopes: List[List[str]] = [[]]

    def translate(self) -> str:
        while self.pos < len(self.pattern):
            char = self.pattern[self.pos]
            if char == '\\':
                self.out.append(self._escape(in_class=False))
            elif char == '[':
                self.out.append(self._char_class())
            elif char == '(':
                self._open_group()
            elif char == ')':
                self._close_group()
            elif char == '|':
                self._alternative()
            else:
                self.out.append(char)
                self.pos += 1
        if len(self.scopes) != 1:
            self._error("missing ')'")
        self.out.append(')' * len(self.scopes[0]))
        return ''.join(self.out)

    def _error(self, message: str):
        raise RegexSyntaxError(message, self.pattern, self.pos)

    def _escape(self, in_class: bool) -> str:
        if self.pos + 1 >= len(self.pattern):
            self._error("trailing backslash")
        code = self.pattern[self.pos + 1]
        if code in 'pP' and self.pos + 2 < len(self.pattern) and self.pattern[self.pos + 2] == '{':
            end = self.pattern.find('}', self.pos + 3)
            if end == -1:
                self._error("unclosed property class")
            name = self.pattern[self.pos + 3:end]
            self.pos = end + 1
            return self._property(name, negated=(code == 'P'), in_class=in_class)
        if code == 'Q':
            end = self.pattern.find('\\E', self.pos + 2)
            if end == -1:
                end = len(self.pattern)
            quoted = self.pattern[self.pos + 2:end]
            self.pos = min(end + 2, len(self.pattern))
            return re.escape(quoted)
        escaped = self.pattern[self.pos:self.pos + 2]
        self.pos += 2
        if code == 'z' and not in_class:
            return '\\Z'
        return escaped

    def _property(self, name: str, negated: bool, in_class: bool) -> str:
        if name.startswith('Is') and name[2:] in _CLASS_PROPERTIES:
            name = name[2:]
        if name in _CLASS_PROPERTIES:
            content = _CLASS_PROPERTIES[name]
            if in_class:
                if negated:
                    self._error(f"negated property \\P{{{name}}} inside a character class")
                return content
            return f"[{'^' if negated else ''}{content}]"
        if name in _LETTER_PROPERTIES:
            if in_class:
                self._error(f"Unicode property \\p{{{name}}} inside a character class")
            return _NON_LETTER_CLASS if negated else _LETTER_CLASS
        self._error(f"unsupported property class \\p{{{name}}}")

    def _char_class(self) -> str:
        """
        Python form of the class starting at the current '['.

        A plain class is copied. Nested classes are unions and '&&' separates
        intersection operands: [a[bc]] becomes (?:[a]|[bc]) and
        [a-z&&[^aeiou]] becomes (?:(?=[a-z])[^aeiou]).
        """
        self.pos += 1
        negated = self._skip('^')
        operands: List[str] = []
        content: List[str] = []
        nested: List[str] = []
        plain = True
        # a leading ']' is literal
        if self._skip(']'):
            content.append('\\]')
        while self.pos < len(self.pattern):
            char = self.pattern[self.pos]
            if char == '\\':
                content.append(self._escape(in_class=True))
            elif char == '[':
                nested.append(self._char_class())
                plain = False
            elif self.pattern.startswith('&&', self.pos):
                operands.extend(_union(content, nested))
                content, nested = [], []
                plain = False
                self.pos += 2
            elif char == ']':
                self.pos += 1
                if plain:
                    return f"[{'^' if negated else ''}{''.join(content)}]"
                operands.extend(_union(content, nested))
                return self._combined_class(operands, negated)
            else:
                content.append(char)
                self.pos += 1
        self._error("unclosed character class")

    def _combined_class(self, operands: List[str], negated: bool) -> str:
        if not operands:
            self._error("empty character class")
        lookaheads = ''.join(f"(?={operand})" for operand in operands[:-1])
        expression = lookaheads + operands[-1]
        if negated:
            return f"(?:(?!{expression})[\\s\\S])"
        if lookaheads:
            return f"(?:{expression})"
        return expression

    def _skip(self, char: str) -> bool:
        if self.pos < len(self.pattern) and self.pattern[self.pos] == char:
            self.pos += 1
            return True
        return False

    def _open_group(self):
        flag_group = _FLAG_GROUP.match(self.pattern, self.pos)
        if flag_group is None:
            if _NAMED_GROUP.match(self.pattern, self.pos):
                # Java (?<name>...) is (?P<name>...) in re
                self.out.append('(?P<')
                self.pos += 3
            else:
                self.out.append('(')
                self.pos += 1
            self.scopes.append([])
            return
        enabled, disabled, terminator = flag_group.groups()
        disabled = disabled or ''
        if not self.case_toggles:
            disabled = disabled.replace('i', '')
        prefix = _scoped_flags(enabled, disabled)
        self.pos = flag_group.end()
        if terminator == ':':
            self.out.append(prefix)
            self.scopes.append([])
        else:
            # toggle: applies to the rest of the enclosing group
            self.out.append(prefix)
            self.scopes[-1].append(prefix)

    def _close_group(self):
        if len(self.scopes) == 1:
            self._error("unbalanced ')'")
        toggles = self.scopes.pop()
        self.out.append(')' * len(toggles))
        self.out.append(')')
        self.pos += 1

    def _alternative(self):
        toggles = self.scopes[-1]
        self.out.append(')' * len(toggles))
        self.out.append('|')
        self.out.extend(toggles)
        self.pos += 1


def _union(content: List[str], nested: List[str]) -> List[str]:
    """The class operand made of plain content and nested classes, if any."""
    alternatives = ([f"[{''.join(content)}]"] if content else []) + nested
    if not alternatives:
        return []
    if len(alternatives) == 1:
        return alternatives
    return [f"(?:{'|'.join(alternatives)})"]


def _scoped_flags(enabled: str, disabled: str) -> str:
    on = ''.join(f for f in enabled if f in _SCOPABLE_FLAGS)
    off = ''.join(f for f in disabled if f in _SCOPABLE_FLAGS)
    if off:
        return f"(?{on}-{off}:"
    if on:
        return f"(?{on}:"
    return "(?:"


def translate_java_regex(pattern: str, case_toggles: bool = True) -> str:
    """
    Translate a Java-syntax pattern into one Python's re accepts.

    With case_toggles False, (?-i) no longer switches case-insensitive
    matching off.
    """
    return _JavaRegexTranslator(pattern, case_toggles).translate()


def compile_fallback_regex(pattern: str) -> Pattern:
    """
    Compile a pattern for the fallback engine: whole-term, case-insensitive.

    Raises:
        RegexSyntaxError: the pattern cannot be parsed even by the fallback engine
    """
    translated = translate_java_regex(pattern, case_toggles=False)
    if translated != pattern:
        logger.debug(f"Fallback regex {pattern!r} rewritten as {translated!r}")
    try:
        return re.compile(translated, FALLBACK_FLAGS)
    except re.error as e:
        raise RegexSyntaxError(f"fallback engine cannot parse pattern: {e}", pattern) from e


def compile_case_exact_regex(pattern: str) -> Pattern:
    """
    Compile a pattern with the case rules it states itself: case-sensitive
    unless switched on with (?i), and (?-i) honoured.

    Raises:
        RegexSyntaxError: the pattern cannot be parsed even by the fallback engine
    """
    try:
        return re.compile(translate_java_regex(pattern))
    except re.error as e:
        raise RegexSyntaxError(f"fallback engine cannot parse pattern: {e}", pattern) from e
