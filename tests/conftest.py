"""Shared fixtures for the test suite."""

import pytest

from language.types import Language
from query_builder.builder import PatternRuleQueryBuilder
from query_builder.schema import IndexSchema
from sentence_index.index import SentenceIndex

from tests.support.corpus import CORPUS, ENGLISH_FORMS, DictionarySynthesizer, readings, text_of


@pytest.fixture
def schema():
    return IndexSchema()


@pytest.fixture
def synthesizer():
    return DictionarySynthesizer(ENGLISH_FORMS)


@pytest.fixture
def language(synthesizer):
    return Language(code='en', name='English', synthesizer=synthesizer)


@pytest.fixture
def bare_language():
    """A language without any capability."""
    return Language(code='xx', name='Demo')


@pytest.fixture
def corpus_index(schema):
    index = SentenceIndex(schema)
    index.add_sentences((readings(sentence), text_of(sentence)) for sentence in CORPUS)
    return index


@pytest.fixture
def builder(language, corpus_index, schema):
    return PatternRuleQueryBuilder(language, corpus_index, schema)
