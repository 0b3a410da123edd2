"""
Index Schema

Explicit descriptor of the per-sentence index fields, shared by the indexer
(which turns analyzed tokens into terms) and the query builder (which turns
pattern tokens into terms). Both sides encode through this class so the two
cannot drift apart.

Lemma and POS terms are stored in the surface fields, at the same position as
the surface token, behind a marker prefix. In the normalized field the
whole term, marker included, is lowercased.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

import yaml

from .queries import Term

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / 'config' / 'index_schema.yaml'


class FieldRole(Enum):
    EXACT_SURFACE = "exact_surface"
    NORMALIZED_SURFACE = "normalized_surface"
    LEMMA = "lemma"
    POS = "pos"


@dataclass(frozen=True)
class IndexSchema:
    """Field names and term markers of a sentence index."""
    exact_field: str = "field"
    normalized_field: str = "fieldLowercase"
    source_field: str = "source"
    lemma_prefix: str = "_LEMMA_"
    pos_prefix: str = "_POS_"

    @classmethod
    def default(cls) -> 'IndexSchema':
        return cls.from_yaml(DEFAULT_SCHEMA_PATH)

    @classmethod
    def from_config(cls) -> 'IndexSchema':
        """Schema from Config.INDEX_SCHEMA_PATH, or the shipped default."""
        from config import Config
        if Config.INDEX_SCHEMA_PATH:
            return cls.from_yaml(Config.INDEX_SCHEMA_PATH)
        return cls.default()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'IndexSchema':
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        fields = data.get('fields', {})
        markers = data.get('markers', {})
        schema = cls(
            exact_field=fields.get(FieldRole.EXACT_SURFACE.value, cls.exact_field),
            normalized_field=fields.get(FieldRole.NORMALIZED_SURFACE.value, cls.normalized_field),
            source_field=fields.get('source', cls.source_field),
            lemma_prefix=markers.get('lemma_prefix', cls.lemma_prefix),
            pos_prefix=markers.get('pos_prefix', cls.pos_prefix),
        )
        schema.validate()
        logger.debug(f"Loaded index schema from {path}: {schema}")
        return schema

    def validate(self) -> None:
        if self.exact_field == self.normalized_field:
            raise ValueError("exact and normalized surface fields must differ")
        if not self.lemma_prefix or not self.pos_prefix:
            raise ValueError("lemma and POS markers must not be empty")
        if self.lemma_prefix.lower() == self.pos_prefix.lower():
            raise ValueError("lemma and POS markers must differ")
        # markers end up inside regular expressions
        for marker in (self.lemma_prefix, self.pos_prefix):
            if not re.fullmatch(r'\w+', marker):
                raise ValueError(f"marker {marker!r} must consist of word characters only")

    def field_for(self, case_sensitive: bool) -> str:
        return self.exact_field if case_sensitive else self.normalized_field

    def marker(self, role: FieldRole) -> str:
        if role == FieldRole.LEMMA:
            return self.lemma_prefix
        if role == FieldRole.POS:
            return self.pos_prefix
        return ""

    # Query side

    def term_for(self, text: str, case_sensitive: bool) -> Term:
        """Surface term: exact text for case-sensitive tokens, lowercased otherwise."""
        if case_sensitive:
            return Term(self.exact_field, text)
        return Term(self.normalized_field, text.lower())

    def wrapped_term(self, prefix: str, text: str, suffix: str, case_sensitive: bool) -> Term:
        """Term with prefix/suffix wrapping applied before lowercasing."""
        return self.term_for(prefix + text + suffix, case_sensitive)

    # Index side

    def index_terms(self, token, case_sensitive: bool) -> List[str]:
        """
        Terms stored at one token position.

        Args:
            token: AnalyzedTokenReadings of the position
            case_sensitive: True for the exact field, False for the normalized one
        """
        def encode(text: str) -> str:
            return text if case_sensitive else text.lower()

        terms = [encode(token.token)]
        for reading in token.readings:
            if reading.pos_tag:
                terms.append(encode(self.pos_prefix + reading.pos_tag))
            if reading.lemma:
                terms.append(encode(self.lemma_prefix + reading.lemma))
        # de-duplicate, keep order
        return list(dict.fromkeys(terms))

    def surface_fields(self) -> List[str]:
        return [self.exact_field, self.normalized_field]


_default_schema: Optional[IndexSchema] = None


def get_default_schema() -> IndexSchema:
    """Process-wide schema, read once from configuration."""
    global _default_schema
    if _default_schema is None:
        _default_schema = IndexSchema.from_config()
    return _default_schema
