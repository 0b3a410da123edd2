"""
Unit tests for language capabilities: tokenizers, the spaCy tagger and the
pyinflect synthesizer.
"""

import pytest

from language import Language, RegexWordTokenizer
from language.types import Synthesizer, Tagger, WordTokenizer
from patterns.types import PatternRule, PatternToken
from query_builder.builder import PatternRuleQueryBuilder
from sentence_index.index import SentenceIndex

try:
    import spacy
    SPACY_AVAILABLE = True
    try:
        nlp = spacy.load("en_core_web_sm")
    except OSError:
        SPACY_AVAILABLE = False
except ImportError:
    SPACY_AVAILABLE = False

requires_spacy = pytest.mark.skipif(not SPACY_AVAILABLE, reason="SpaCy model not available")


class TestLanguage:

    def test_capabilities_by_presence(self):
        tokenizer = RegexWordTokenizer()
        language = Language('en', 'English', word_tokenizer=tokenizer)
        assert language.has('word_tokenizer')
        assert not language.has('synthesizer')
        assert not language.has('tagger')
        assert not language.has('chunker')

    def test_unknown_capability(self):
        with pytest.raises(ValueError):
            Language('en').has('spellchecker')

    def test_str(self):
        assert str(Language('en', 'English')) == 'English'
        assert str(Language('de')) == 'de'


class TestRegexWordTokenizer:

    def test_lossless(self):
        text = "Don't stop,  now!\tOK"
        tokens = RegexWordTokenizer().tokenize(text)
        assert ''.join(tokens) == text
        assert "Don't" in tokens
        assert "  " in tokens

    def test_punctuation_is_split(self):
        assert RegexWordTokenizer().tokenize("a.b") == ["a", ".", "b"]

    def test_satisfies_protocol(self):
        assert isinstance(RegexWordTokenizer(), WordTokenizer)


class TestPyInflectSynthesizer:

    @pytest.fixture
    def synthesizer(self):
        pytest.importorskip("pyinflect")
        from language.synthesizer import PyInflectSynthesizer
        return PyInflectSynthesizer()

    def test_all_forms(self, synthesizer):
        forms = synthesizer.synthesize("run")
        assert {"ran", "runs", "running"} <= set(forms)
        assert len(forms) == len(set(forms))

    def test_forms_filtered_by_tag(self, synthesizer):
        assert synthesizer.synthesize("run", "VBD") == ["ran"]

    def test_unknown_word(self, synthesizer):
        assert synthesizer.synthesize("qwxzv", "VB.*") == []

    def test_satisfies_protocol(self, synthesizer):
        assert isinstance(synthesizer, Synthesizer)


@requires_spacy
class TestSpacyCapabilities:

    def test_tagger(self):
        from language.spacy_backend import SpacyTagger
        tagger = SpacyTagger(nlp)
        assert isinstance(tagger, Tagger)
        tokens = tagger.tag("He runs home.")
        assert [t.token for t in tokens] == ["He", "runs", "home", "."]
        runs = tokens[1]
        assert runs.start_pos == 3
        assert runs.readings[0].pos_tag == "VBZ"
        assert runs.readings[0].lemma == "run"

    def test_word_tokenizer_is_lossless(self):
        from language.tokenizers import SpacyWordTokenizer
        text = "  Hello  world, again "
        assert ''.join(SpacyWordTokenizer(nlp).tokenize(text)) == text

    def test_load_pipeline_is_cached(self):
        from language.spacy_backend import load_pipeline
        assert load_pipeline("en_core_web_sm") is load_pipeline("en_core_web_sm")

    def test_english_end_to_end(self, schema):
        pytest.importorskip("pyinflect")
        from language import english
        language = english(nlp)
        assert language.has('tagger') and language.has('synthesizer')
        assert not language.has('chunker')

        index = SentenceIndex.from_texts(
            ["She ran to the station.", "The run was long.", "They walk home."],
            language.tagger, schema,
        )
        builder = PatternRuleQueryBuilder(language, index, schema)
        rule = PatternRule("RUN_VERB", (
            PatternToken(string="run", inflected=True, pos_tag="VB.*", pos_regexp=True),
        ))
        assert index.search(builder.build(rule)) == [0]
