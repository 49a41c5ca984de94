# bionic_subtitles/emphasis/render.py
"""
Emphasis encodings: inline markup and Unicode bold substitution.
"""
import re
import string
from typing import Union

from ..core.interfaces import EmphasisMode


# Mathematical Bold capitals start at U+1D400, small letters at U+1D41A
BOLD_MAP = {
    **{c: chr(0x1D400 + i) for i, c in enumerate(string.ascii_uppercase)},
    **{c: chr(0x1D41A + i) for i, c in enumerate(string.ascii_lowercase)},
}
_BOLD_TABLE = str.maketrans(BOLD_MAP)

_WORD_RUN = re.compile(r"[a-zA-Z']+")


def to_unicode_bold(text: str) -> str:
    """Map ASCII letters to their bold counterparts; leave everything else."""
    return text.translate(_BOLD_TABLE)


class Renderer:
    """Base class for emphasis encodings."""
    mode: EmphasisMode

    def prefix(self, text: str, split_at: int) -> str:
        """Emphasize the leading part of a word."""
        raise NotImplementedError

    def whole_word(self, text: str) -> str:
        """Emphasize every letter of a word."""
        raise NotImplementedError


class MarkupRenderer(Renderer):
    """Wraps emphasized spans in bold tags."""
    mode = EmphasisMode.MARKUP

    def __init__(self, open_tag: str = "<b>", close_tag: str = "</b>"):
        self.open_tag = open_tag
        self.close_tag = close_tag

    def bold(self, text: str) -> str:
        return f"{self.open_tag}{text}{self.close_tag}"

    def prefix(self, text: str, split_at: int) -> str:
        return self.bold(text[:split_at]) + text[split_at:]

    def whole_word(self, text: str) -> str:
        # Contractions stay in one run so "don't" becomes a single bold span
        return _WORD_RUN.sub(lambda m: self.bold(m.group(0)), text)


class UnicodeRenderer(Renderer):
    """Substitutes letters with Mathematical Bold code points."""
    mode = EmphasisMode.UNICODE

    def prefix(self, text: str, split_at: int) -> str:
        out = []
        letters = 0
        for char in text:
            if char in BOLD_MAP and letters < split_at:
                out.append(BOLD_MAP[char])
                letters += 1
            else:
                out.append(char)
        return "".join(out)

    def whole_word(self, text: str) -> str:
        return to_unicode_bold(text)


def get_renderer(mode: Union[EmphasisMode, str]) -> Renderer:
    """Get the renderer for an emphasis mode."""
    if EmphasisMode(mode) == EmphasisMode.UNICODE:
        return UnicodeRenderer()
    return MarkupRenderer()
