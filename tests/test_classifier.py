# tests/test_classifier.py
"""Tests for the NLTK-backed token classifier."""
import pytest

from bionic_subtitles.core.interfaces import Tag, Token
from bionic_subtitles.nlp import classifier as classifier_module
from bionic_subtitles.nlp.classifier import NltkClassifier, penn_to_tags, tokenize


def test_tokenize_keeps_attached_punctuation():
    """Test surfaces include punctuation glued to words."""
    assert tokenize('"Hello," she said.') == [('"Hello,"', 0), ("she", 9), ("said.", 13)]


def test_tokenize_skips_bare_punctuation():
    """Test lone dashes and quotes are left in the gaps."""
    assert tokenize("Wait — now - \" go") == [("Wait", 0), ("now", 7), ("go", 15)]


def test_tokenize_empty():
    """Test blank text has no tokens."""
    assert tokenize("   ") == []


@pytest.mark.parametrize("penn, expected", [
    ("NNP", {Tag.PROPER_NOUN, Tag.NOUN}),
    ("NNPS", {Tag.PROPER_NOUN, Tag.NOUN}),
    ("NN", {Tag.NOUN}),
    ("NNS", {Tag.NOUN}),
    ("VBD", {Tag.VERB}),
    ("MD", {Tag.VERB}),
    ("JJR", {Tag.ADJECTIVE}),
    ("PRP", {Tag.OTHER}),
    ("DT", {Tag.OTHER}),
])
def test_penn_mapping(penn, expected):
    """Test Penn Treebank tags map onto the engine tag set."""
    assert penn_to_tags(penn) == frozenset(expected)


def test_classify_with_tagger(monkeypatch):
    """Test words are tagged without their punctuation."""
    seen = []

    def fake_pos_tag(words, lang="eng"):
        seen.extend(words)
        return [(w, "NNP" if w[0].isupper() else "VBD") for w in words]

    monkeypatch.setattr(classifier_module, "ensure_tagger", lambda download=True: True)
    monkeypatch.setattr(classifier_module, "pos_tag", fake_pos_tag)

    tokens = NltkClassifier().classify("Mike arrived.")
    assert seen == ["Mike", "arrived"]
    assert [t.text for t in tokens] == ["Mike", "arrived."]
    assert [t.offset for t in tokens] == [0, 5]
    assert tokens[0].is_proper_noun
    assert tokens[1].tags == frozenset({Tag.VERB})


def test_classify_without_tagger(monkeypatch):
    """Test every token is tagged Other when no model is available."""
    monkeypatch.setattr(classifier_module, "ensure_tagger", lambda download=True: False)

    tokens = NltkClassifier(download=False).classify("Mike arrived.")
    assert [t.tags for t in tokens] == [frozenset({Tag.OTHER})] * 2


def test_classify_empty():
    """Test empty text is not sent to the tagger."""
    assert NltkClassifier().classify("") == []


def test_token_cores():
    """Test the letter-only and letter-apostrophe forms of a token."""
    token = Token("don't!", 0)
    assert token.core == "dont"
    assert token.word == "don't"
    assert token.end == 6


@pytest.fixture
def fresh_tagger_state(monkeypatch):
    """Reset the remembered tagger lookup results."""
    monkeypatch.setattr(classifier_module, "_tagger_ready", False)
    monkeypatch.setattr(classifier_module, "_tagger_failures", {})


def test_ensure_tagger_downloads_missing_model(monkeypatch, fresh_tagger_state):
    """Test a missing model is downloaded and then found."""
    downloaded = []

    def fake_find(path):
        if path.endswith("_eng") and downloaded:
            return path
        raise LookupError(path)

    def fake_download(name, quiet=True):
        downloaded.append(name)
        return True

    monkeypatch.setattr(classifier_module.nltk.data, "find", fake_find)
    monkeypatch.setattr(classifier_module.nltk, "download", fake_download)

    assert classifier_module.ensure_tagger()
    assert downloaded == ["averaged_perceptron_tagger_eng"]


def test_ensure_tagger_retries_after_failure(monkeypatch, fresh_tagger_state):
    """Test a failed lookup is retried once the retry interval has passed."""
    now = [0.0]
    available = [False]
    lookups = []

    def fake_find(path):
        lookups.append(path)
        if available[0]:
            return path
        raise LookupError(path)

    monkeypatch.setattr(classifier_module.nltk.data, "find", fake_find)
    clock = lambda: now[0]

    assert not classifier_module.ensure_tagger(download=False, clock=clock)
    attempts = len(lookups)

    # Within the interval the failure is reused
    now[0] = 10.0
    assert not classifier_module.ensure_tagger(download=False, clock=clock)
    assert len(lookups) == attempts

    available[0] = True
    now[0] = classifier_module.TAGGER_RETRY_SECONDS + 1
    assert classifier_module.ensure_tagger(download=False, clock=clock)

    # Success is kept without further lookups
    lookups.clear()
    assert classifier_module.ensure_tagger(download=False, clock=clock)
    assert lookups == []
