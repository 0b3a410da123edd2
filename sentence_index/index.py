"""
Sentence Index

Whoosh index with one sentence per document, held in RAM. Terms are produced
through the shared IndexSchema, so queries built by PatternRuleQueryBuilder
address exactly the terms stored here: the surface token plus its POS and
lemma terms, all at the token's position, once in the exact field and once
lowercased in the normalized field. The sentence text is kept in the source
field.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from whoosh.analysis import Token, Tokenizer
from whoosh.fields import ID, STORED, TEXT, Schema
from whoosh.filedb.filestore import RamStorage

from language.types import AnalyzedTokenReadings, Tagger
from query_builder.queries import BooleanQuery, MultiTermQuery, Occur, Query, Term
from query_builder.schema import IndexSchema, get_default_schema

from .whoosh_query import WhooshQueryTranslator

logger = logging.getLogger(__name__)

DOC_ID_FIELD = "doc_id"
TOKENS_FIELD = "tokens"

# separators of the pre-encoded surface field values
POSITION_SEPARATOR = "\x1e"
TERM_SEPARATOR = "\x1f"


class StackedTermTokenizer(Tokenizer):
    """
    Yields the terms of a pre-encoded sentence: positions are separated by
    POSITION_SEPARATOR, the terms stacked at one position by TERM_SEPARATOR.
    All terms of a position get the same token position.
    """

    def __call__(self, value, positions=False, chars=False, keeporiginal=False,
                 removestops=True, start_pos=0, start_char=0, tokenize=True,
                 mode='', **kwargs):
        if not value:
            return
        t = Token(positions, chars, removestops=removestops, mode=mode, **kwargs)
        for offset, stacked in enumerate(value.split(POSITION_SEPARATOR)):
            for text in stacked.split(TERM_SEPARATOR):
                t.text = text
                t.boost = 1.0
                t.stopped = False
                if keeporiginal:
                    t.original = text
                if positions:
                    t.pos = start_pos + offset
                yield t


def build_whoosh_schema(schema: IndexSchema) -> Schema:
    names = schema.surface_fields() + [schema.source_field]
    if len(set(names) | {DOC_ID_FIELD, TOKENS_FIELD}) != len(names) + 2:
        raise ValueError(f"Index field names must be unique and differ from "
                         f"{DOC_ID_FIELD!r} and {TOKENS_FIELD!r}: {names}")
    fields = {name: TEXT(analyzer=StackedTermTokenizer(), phrase=True)
              for name in schema.surface_fields()}
    fields[schema.source_field] = TEXT(stored=True)
    fields[DOC_ID_FIELD] = ID(stored=True, unique=True)
    fields[TOKENS_FIELD] = STORED
    return Schema(**fields)


@dataclass
class IndexedSentence:
    """A stored document: the sentence source and its analyzed tokens."""
    doc_id: int
    text: str
    tokens: List[AnalyzedTokenReadings] = field(default_factory=list)


class SentenceIndex:
    """
    Positional index over sentences.

    Writes are serialized; every search opens a searcher on the last
    committed state.
    """

    def __init__(self, schema: Optional[IndexSchema] = None):
        self.schema = schema or get_default_schema()
        self.ix = RamStorage().create_index(build_whoosh_schema(self.schema))
        self._lock = threading.Lock()

    @classmethod
    def from_texts(cls, texts: Iterable[str], tagger: Tagger,
                   schema: Optional[IndexSchema] = None) -> 'SentenceIndex':
        index = cls(schema)
        index.add_sentences((tagger.tag(text), text) for text in texts)
        return index

    # Indexing

    def add_text(self, text: str, tagger: Tagger) -> int:
        """Tag a sentence with the tagger capability and index it."""
        return self.add_sentence(tagger.tag(text), text)

    def add_sentence(self, tokens: List[AnalyzedTokenReadings], text: Optional[str] = None) -> int:
        """Index one sentence and return its document id."""
        return self.add_sentences([(tokens, text)])[0]

    def add_sentences(self, sentences: Iterable[Tuple[List[AnalyzedTokenReadings], Optional[str]]]) -> List[int]:
        """Index sentences in one commit and return their document ids."""
        doc_ids = []
        with self._lock:
            next_id = self.ix.doc_count_all()
            writer = self.ix.writer()
            try:
                for tokens, text in sentences:
                    if text is None:
                        text = ' '.join(t.token for t in tokens)
                    writer.add_document(**self._document(next_id, list(tokens), text))
                    logger.debug(f"Indexed document {next_id}: {text!r}")
                    doc_ids.append(next_id)
                    next_id += 1
            except Exception:
                writer.cancel()
                raise
            writer.commit()
        return doc_ids

    def _document(self, doc_id: int, tokens: List[AnalyzedTokenReadings], text: str) -> dict:
        doc = {
            self.schema.source_field: text,
            DOC_ID_FIELD: str(doc_id),
            TOKENS_FIELD: tokens,
        }
        for case_sensitive in (True, False):
            doc[self.schema.field_for(case_sensitive)] = POSITION_SEPARATOR.join(
                TERM_SEPARATOR.join(self.schema.index_terms(token, case_sensitive))
                for token in tokens
            )
        return doc

    # Reading

    def __len__(self) -> int:
        return self.ix.doc_count_all()

    def doc_ids(self) -> List[int]:
        return list(range(len(self)))

    def document(self, doc_id: int) -> IndexedSentence:
        with self.ix.searcher() as searcher:
            stored = searcher.document(**{DOC_ID_FIELD: str(doc_id)})
        if stored is None:
            raise IndexError(f"No document {doc_id}")
        return IndexedSentence(doc_id, stored[self.schema.source_field], stored[TOKENS_FIELD])

    def terms(self, field_name: str) -> List[str]:
        if field_name not in self.ix.schema:
            return []
        with self.ix.searcher() as searcher:
            return sorted(searcher.reader().field_terms(field_name))

    def extract_terms(self, query: Query) -> Set[Term]:
        """
        Terms a query consists of. Multi-term queries are expanded to the
        terms of this index they accept.
        """
        if isinstance(query, MultiTermQuery):
            with self.ix.searcher() as searcher:
                texts = WhooshQueryTranslator(searcher.reader()).expand(query)
            return {Term(query.field, text) for text in texts}
        if isinstance(query, BooleanQuery):
            terms: Set[Term] = set()
            for clause in query.clauses:
                if clause.occur != Occur.MUST_NOT:
                    terms |= self.extract_terms(clause.query)
            return terms
        return query.extract_terms()

    def search(self, query: Query) -> List[int]:
        """Ids of all documents matching the query, in index order."""
        with self.ix.searcher() as searcher:
            whoosh_query = WhooshQueryTranslator(searcher.reader()).translate(query)
            logger.debug(f"Whoosh query: {whoosh_query}")
            results = searcher.search(whoosh_query, limit=None)
            return sorted(int(hit[DOC_ID_FIELD]) for hit in results)
