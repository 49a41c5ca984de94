# bionic_subtitles/__init__.py
"""
Bionic reading emphasis for subtitle documents.
"""
from .__about__ import __version__

from .core.exceptions import (
    BionicError,
    InvalidEmphasisMode,
    InvalidFormat,
    InvalidMode,
    UnsupportedFormat,
)
from .core.interfaces import (
    EmphasisMode,
    Mode,
    ProcessOptions,
    ProcessResult,
    SubtitleFormat,
    Tag,
    Token,
    TokenClassifier,
)
from .core.processor import SubtitleProcessor, process_subtitles, resolve_emphasis_mode

__all__ = [
    "__version__",
    "BionicError",
    "InvalidEmphasisMode",
    "InvalidFormat",
    "InvalidMode",
    "UnsupportedFormat",
    "EmphasisMode",
    "Mode",
    "ProcessOptions",
    "ProcessResult",
    "SubtitleFormat",
    "Tag",
    "Token",
    "TokenClassifier",
    "SubtitleProcessor",
    "process_subtitles",
    "resolve_emphasis_mode",
]
