# bionic_subtitles/emphasis/focus.py
"""
Focus mode: emphasize a leading fragment of each salient word.
"""
import math
import re
from typing import List, Optional, Tuple
from loguru import logger

from ..core.interfaces import EmphasisDecision, Token, TokenClassifier
from .lexicon import ARTICLES, CONNECTORS, PRONOUNS
from .render import Renderer, MarkupRenderer

# A gap ending in a quote, hyphen or em-dash suppresses the next word
_SUPPRESSING_GAP = re.compile(r"[\"—\-]\s*$")
_QUOTES = ('"', "'")


def is_stage_direction(line: str) -> bool:
    """Check whether a line is entirely bracketed, e.g. "[door slams]"."""
    trimmed = line.strip()
    return (
        (trimmed.startswith("[") and trimmed.endswith("]"))
        or (trimmed.startswith("(") and trimmed.endswith(")"))
    )


def align_tokens(
    line: str,
    tokens: List[Token]
) -> Tuple[List[Tuple[str, Token]], str]:
    """
    Locate tokens in a line by scanning left to right from a cursor.

    Args:
        line: Text the tokens were produced from
        tokens: Classifier output, in order
    Returns:
        (gap, token) pairs and the text after the last token
    """
    segments = []
    cursor = 0
    for token in tokens:
        index = line.find(token.text, cursor)
        if index < 0:
            logger.debug(f"Token {token.text!r} not found after offset {cursor}")
            continue
        segments.append((line[cursor:index], token))
        cursor = index + len(token.text)
    return segments, line[cursor:]


class FocusProcessor:
    """
    Partial-word emphasis driven by word class and intensity.

    Args:
        classifier: Source of tokens and grammatical tags
        intensity: Emphasis strength in [0.1, 1.0]
        renderer: Emphasis encoding (markup by default)
    """
    def __init__(
        self,
        classifier: TokenClassifier,
        intensity: float = 0.5,
        renderer: Optional[Renderer] = None
    ):
        self.classifier = classifier
        self.intensity = intensity
        self.renderer = renderer or MarkupRenderer()

    def __call__(self, line: str) -> str:
        return self.process_line(line)

    def process_line(self, line: str) -> str:
        """Emphasize one content span, preserving every original character."""
        if is_stage_direction(line):
            return line

        segments, trailing = align_tokens(line, self.classifier.classify(line))
        decisions = self.decide(segments)

        parts = []
        for (gap, _), decision in zip(segments, decisions):
            parts.append(gap)
            parts.append(self.render(decision))
        parts.append(trailing)
        return "".join(parts)

    def decide(self, segments: List[Tuple[str, Token]]) -> List[EmphasisDecision]:
        """Choose a split point for every token that should be emphasized."""
        count = len(segments)
        density_factor = 0.8 if count > 7 else 1.0
        skip_next = False
        prev_text = ""
        decisions = []

        for gap, token in segments:
            if gap and _SUPPRESSING_GAP.search(gap):
                skip_next = True

            split_at = None
            if self._is_word(token, count):
                if skip_next or prev_text.endswith(_QUOTES):
                    skip_next = False
                elif not self._is_filler(token, count):
                    split_at = self.split_point(token, density_factor)

            decisions.append(EmphasisDecision(
                token=token,
                emphasized=split_at is not None,
                split_at=split_at
            ))
            prev_text = token.text

        return decisions

    def split_point(self, token: Token, density_factor: float = 1.0) -> int:
        """Number of leading letters to emphasize."""
        core = token.core
        lower = core.lower()
        is_pronoun = lower in PRONOUNS
        is_connector = lower in CONNECTORS

        if token.is_content_word:
            class_factor = 0.6
        elif is_pronoun:
            class_factor = 0.15
        elif is_connector:
            class_factor = 0.25
        else:
            class_factor = 0.4

        base_factor = class_factor * density_factor
        split_at = max(1, math.ceil(len(core) * (base_factor * self.intensity + 0.2)))

        if not is_connector and not is_pronoun and len(core) >= 4 and split_at < 3:
            split_at = 3
        if is_connector or is_pronoun:
            split_at = min(split_at, 2)
        return split_at

    def render(self, decision: EmphasisDecision) -> str:
        if not decision.emphasized:
            return decision.token.text
        return self.renderer.prefix(decision.token.text, decision.split_at)

    def _is_word(self, token: Token, count: int) -> bool:
        core = token.core
        if not core or not token.text[0].isascii() or not token.text[0].isalpha():
            return False
        # Very short words only count when they are alone on the line
        return len(core) >= 3 or count == 1

    def _is_filler(self, token: Token, count: int) -> bool:
        """Low-salience words dropped from dense lines."""
        lower = token.core.lower()
        if lower in PRONOUNS and count >= 6:
            return True
        if lower in ARTICLES and count >= 6:
            return True
        return lower in CONNECTORS and len(token.core) <= 3 and count >= 7
