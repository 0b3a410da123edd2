"""
Pattern Rule Types
Core data structures describing pattern rules and their per-position token constraints.
"""
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

# e.g. "\1" - a reference to an earlier token's match, with no literal content
BACKREFERENCE_PATTERN = re.compile(r'\\\d+')


@dataclass(frozen=True)
class PatternToken:
    """
    One position's constraint within a pattern rule.

    The surface string and the POS tag are matched independently: `regexp`
    applies to the string, `pos_regexp` to the POS tag.
    """
    string: str = ""
    pos_tag: Optional[str] = None
    case_sensitive: bool = False
    regexp: bool = False
    pos_regexp: bool = False
    inflected: bool = False
    negation: bool = False
    pos_negation: bool = False
    min_occurrence: int = 1
    max_occurrence: int = 1
    or_group: bool = False
    unified: bool = False

    @property
    def is_backreference_only(self) -> bool:
        """True if the whole string is a match reference such as '\\1'."""
        return bool(self.string) and BACKREFERENCE_PATTERN.fullmatch(self.string) is not None

    @property
    def is_optional(self) -> bool:
        return self.min_occurrence == 0

    def __str__(self) -> str:
        parts = []
        if self.string:
            prefix = '!' if self.negation else ''
            marker = '/' if self.regexp else ''
            parts.append(f"{prefix}{marker}{self.string}{marker}")
        if self.pos_tag:
            prefix = '!' if self.pos_negation else ''
            marker = '/' if self.pos_regexp else ''
            parts.append(f"{prefix}{marker}{self.pos_tag}{marker}")
        text = '/'.join(parts) if parts else '<any>'
        if self.inflected:
            text += '(inflected)'
        if self.is_optional:
            text += '?'
        return text


@dataclass(frozen=True)
class PatternRule:
    """An ordered sequence of token constraints describing one grammar or style error."""
    id: str
    tokens: Tuple[PatternToken, ...] = field(default_factory=tuple)
    sub_id: Optional[str] = None
    description: str = ""
    message: str = ""

    @property
    def full_id(self) -> str:
        if self.sub_id:
            return f"{self.id}[{self.sub_id}]"
        return self.id

    def __str__(self) -> str:
        return f"{self.full_id}: {' '.join(str(t) for t in self.tokens)}"
