# bionic_subtitles/emphasis/calm.py
"""
Calm mode: emphasize at most two whole words per line.
"""
import re
from dataclasses import dataclass
from typing import List, Optional

from ..core.interfaces import EmphasisDecision, Token, TokenClassifier
from .focus import is_stage_direction
from .lexicon import STOPWORDS
from .render import Renderer, MarkupRenderer

_SPEAKER_LABEL = re.compile(r"^[A-Z][a-z]+:")

MAX_EMPHASIZED = 2
PROPER_NOUN_BONUS = 10


@dataclass
class Candidate:
    """A token eligible for whole-word emphasis."""
    index: int
    token: Token
    is_proper: bool

    @property
    def score(self) -> int:
        return (PROPER_NOUN_BONUS if self.is_proper else 0) + len(self.token.word)


class CalmProcessor:
    """
    Low-density emphasis: proper nouns and long content words become anchors.

    Args:
        classifier: Source of tokens and grammatical tags
        renderer: Emphasis encoding (markup by default)
    """
    def __init__(
        self,
        classifier: TokenClassifier,
        renderer: Optional[Renderer] = None
    ):
        self.classifier = classifier
        self.renderer = renderer or MarkupRenderer()

    def __call__(self, line: str) -> str:
        return self.process_line(line)

    def process_line(self, line: str) -> str:
        """
        Emphasize up to two words of a line.

        Tokens are re-joined with single spaces, so original spacing between
        words is not kept.
        """
        trimmed = line.strip()
        if not trimmed or is_stage_direction(trimmed) or _SPEAKER_LABEL.match(trimmed):
            return line

        tokens = self.classifier.classify(line)
        decisions = self.decide(tokens)
        return " ".join(self.render(decision) for decision in decisions)

    def decide(self, tokens: List[Token]) -> List[EmphasisDecision]:
        """Pick the highest scoring distinct candidates."""
        candidates = self.candidates(tokens)
        # sorted() is stable, so equal scores keep line order
        ranked = sorted(candidates, key=lambda c: c.score, reverse=True)

        chosen = set()
        seen = set()
        for candidate in ranked:
            if len(chosen) >= MAX_EMPHASIZED:
                break
            normalized = candidate.token.word.lower()
            if normalized in seen:
                continue
            chosen.add(candidate.index)
            seen.add(normalized)

        return [
            EmphasisDecision(
                token=token,
                emphasized=index in chosen,
                whole_word=index in chosen
            )
            for index, token in enumerate(tokens)
        ]

    def candidates(self, tokens: List[Token]) -> List[Candidate]:
        min_length = 3 if len(tokens) == 1 else 4
        result = []
        for index, token in enumerate(tokens):
            if token.text.startswith(("<", "(")):
                continue
            word = token.word
            if len(word) < min_length:
                continue
            if token.is_proper_noun:
                result.append(Candidate(index, token, is_proper=True))
            elif word.lower() in STOPWORDS:
                continue
            elif token.is_content_word:
                result.append(Candidate(index, token, is_proper=False))
        return result

    def render(self, decision: EmphasisDecision) -> str:
        if not decision.whole_word:
            return decision.token.text
        return self.renderer.whole_word(decision.token.text)
