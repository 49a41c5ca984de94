# tests/conftest.py
"""
Shared test fixtures.
"""
import pytest
from typing import Dict, FrozenSet, List

from bionic_subtitles.core.interfaces import Tag, Token
from bionic_subtitles.nlp.classifier import tokenize

N = frozenset({Tag.NOUN})
V = frozenset({Tag.VERB})
ADJ = frozenset({Tag.ADJECTIVE})
PN = frozenset({Tag.PROPER_NOUN, Tag.NOUN})

LEXICON: Dict[str, FrozenSet[Tag]] = {
    # names
    "mike": PN, "donovan": PN, "sarah": PN, "chen": PN, "paris": PN,
    # nouns
    "yesterday": N, "engineer": N, "fox": N, "dog": N, "world": N,
    "walls": N, "house": N, "lead": ADJ, "captain": N, "ship": N,
    "intensity": N, "door": N, "coffee": N, "morning": N, "minutes": N,
    # verbs
    "arrived": V, "jumps": V, "said": V, "think": V, "knows": V,
    "walk": V, "wait": V, "stop": V, "go": V, "run": V, "testing": V,
    "running": V, "slams": V, "sighs": V, "need": V, "make": V,
    "drink": V, "going": V, "is": V, "are": V,
    # adjectives
    "quick": ADJ, "brown": ADJ, "lazy": ADJ, "heavily": ADJ, "big": ADJ,
    "strong": ADJ, "cold": ADJ,
}


class LexiconClassifier:
    """Deterministic classifier: tags come from a fixed word list."""

    def __init__(self, lexicon: Dict[str, FrozenSet[Tag]] = None):
        self.lexicon = lexicon if lexicon is not None else LEXICON
        self.calls: List[str] = []

    def classify(self, text: str) -> List[Token]:
        self.calls.append(text)
        return [
            Token(
                text=surface,
                offset=offset,
                tags=self.lexicon.get(Token(surface, offset).word.lower(), frozenset({Tag.OTHER}))
            )
            for surface, offset in tokenize(text)
        ]


@pytest.fixture
def classifier():
    """Lexicon-backed token classifier."""
    return LexiconClassifier()


@pytest.fixture
def sample_srt():
    """Two-cue SRT document."""
    return """1
00:00:01,000 --> 00:00:03,000
Mike Donovan arrived yesterday.

2
00:00:04,000 --> 00:00:06,000
Sarah Chen is the lead engineer."""
