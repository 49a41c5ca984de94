# bionic_subtitles/core/interfaces.py
"""
Core interfaces for subtitle emphasis processing.
"""
import re
from typing import Protocol, List, FrozenSet, Optional, Union
from dataclasses import dataclass
from enum import Enum


class SubtitleFormat(Enum):
    """Supported subtitle containers."""
    SRT = "srt"
    VTT = "vtt"
    ASS = "ass"
    PLAIN = "plain"


class Mode(Enum):
    """Emphasis selection algorithms."""
    FOCUS = "focus"
    CALM = "calm"


class EmphasisMode(Enum):
    """How emphasis is encoded in the output text."""
    MARKUP = "markup"
    UNICODE = "unicode"

    @classmethod
    def _missing_(cls, value):
        # Older clients send "html" for inline markup
        if value == "html":
            return cls.MARKUP
        return None


class LineKind(Enum):
    """Classification of a single document line."""
    STRUCTURAL = "structural"
    BLANK = "blank"
    TEXTUAL = "textual"


class SpanKind(Enum):
    """Classification of a substring of a textual line."""
    MARKUP = "markup"
    CONTENT = "content"


class Tag(Enum):
    """Grammatical categories reported by a token classifier."""
    NOUN = "Noun"
    VERB = "Verb"
    ADJECTIVE = "Adjective"
    PROPER_NOUN = "ProperNoun"
    OTHER = "Other"


CONTENT_TAGS = frozenset({Tag.NOUN, Tag.VERB, Tag.ADJECTIVE, Tag.PROPER_NOUN})

_NON_LETTER = re.compile(r"[^a-zA-Z]")
_NON_WORD = re.compile(r"[^a-zA-Z']")


@dataclass(frozen=True)
class Token:
    """
    A word-like unit inside a content span.

    Args:
        text: Exact surface text, punctuation included
        offset: Position of the surface text within the classified span
        tags: Grammatical tags supplied by the classifier
    """
    text: str
    offset: int
    tags: FrozenSet[Tag] = frozenset({Tag.OTHER})

    @property
    def core(self) -> str:
        """Letters only."""
        return _NON_LETTER.sub("", self.text)

    @property
    def word(self) -> str:
        """Letters and apostrophes."""
        return _NON_WORD.sub("", self.text)

    @property
    def end(self) -> int:
        return self.offset + len(self.text)

    @property
    def is_content_word(self) -> bool:
        return bool(self.tags & CONTENT_TAGS)

    @property
    def is_proper_noun(self) -> bool:
        return Tag.PROPER_NOUN in self.tags


@dataclass
class Line:
    """A single line of a subtitle document."""
    text: str
    kind: LineKind


@dataclass
class TextSpan:
    """A markup run or a content run inside a textual line."""
    text: str
    kind: SpanKind


@dataclass
class EmphasisDecision:
    """Outcome of emphasis selection for one token."""
    token: Token
    emphasized: bool = False
    split_at: Optional[int] = None
    whole_word: bool = False


@dataclass
class ProcessOptions:
    """Options for a single processing call."""
    text: str
    format: Union[SubtitleFormat, str]
    mode: Union[Mode, str]
    intensity: float = 0.5
    emphasis_mode: Optional[Union[EmphasisMode, str]] = None


@dataclass
class ProcessResult:
    """Result of a processing call."""
    processed_text: str


class TokenClassifier(Protocol):
    """Protocol for part-of-speech token classifiers."""
    def classify(self, text: str) -> List[Token]: ...


class LineProcessor(Protocol):
    """Protocol for functions that emphasize a content span."""
    def __call__(self, line: str) -> str: ...
