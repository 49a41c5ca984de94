# bionic_subtitles/nlp/classifier.py
"""
Part-of-speech token classification backed by NLTK.
"""
import re
import threading
import time
from typing import Callable, Dict, FrozenSet, List, Tuple

import nltk
from nltk.tag import pos_tag
from loguru import logger

from ..core.interfaces import Tag, Token

# A token is a whitespace-delimited run holding at least one letter or digit;
# bare punctuation such as a lone dash stays in the gap between tokens
_TOKEN_PATTERN = re.compile(r"\S*[^\W_]\S*")

_TAGGER_RESOURCES = [
    ("taggers/averaged_perceptron_tagger_eng", "averaged_perceptron_tagger_eng"),
    ("taggers/averaged_perceptron_tagger", "averaged_perceptron_tagger"),
]

_OTHER = frozenset({Tag.OTHER})


def tokenize(text: str) -> List[Tuple[str, int]]:
    """Split text into (surface, offset) pairs."""
    return [(m.group(0), m.start()) for m in _TOKEN_PATTERN.finditer(text)]


def penn_to_tags(penn: str) -> FrozenSet[Tag]:
    """Map a Penn Treebank tag onto the engine's tag set."""
    if penn in ("NNP", "NNPS"):
        return frozenset({Tag.PROPER_NOUN, Tag.NOUN})
    if penn.startswith("NN"):
        return frozenset({Tag.NOUN})
    if penn.startswith("VB") or penn == "MD":
        return frozenset({Tag.VERB})
    if penn.startswith("JJ"):
        return frozenset({Tag.ADJECTIVE})
    return _OTHER


# Seconds to wait before looking for the tagger again after a failure
TAGGER_RETRY_SECONDS = 300.0

_tagger_ready = False
_tagger_failures: Dict[bool, float] = {}
_tagger_lock = threading.Lock()


def _find_tagger(download: bool) -> bool:
    for resource_path, download_name in _TAGGER_RESOURCES:
        try:
            nltk.data.find(resource_path)
            return True
        except LookupError:
            if not download:
                continue
        logger.info(f"Downloading NLTK resource {download_name}")
        nltk.download(download_name, quiet=True)
        try:
            nltk.data.find(resource_path)
            return True
        except LookupError:
            continue
    return False


def ensure_tagger(
    download: bool = True,
    clock: Callable[[], float] = time.monotonic
) -> bool:
    """
    Make sure the perceptron tagger model is available.

    Success is remembered for the life of the process. A failure is only
    remembered for TAGGER_RETRY_SECONDS, so a service started offline picks
    the model up once it can be fetched.
    """
    global _tagger_ready
    with _tagger_lock:
        if _tagger_ready:
            return True
        failed_at = _tagger_failures.get(download)
        if failed_at is not None and clock() - failed_at < TAGGER_RETRY_SECONDS:
            return False
        if _find_tagger(download):
            _tagger_ready = True
            _tagger_failures.clear()
            return True
        _tagger_failures[download] = clock()
    logger.warning("NLTK tagger unavailable; all tokens will be tagged Other")
    return False


class NltkClassifier:
    """
    Token classifier using NLTK's averaged perceptron tagger.

    Args:
        download: Fetch the tagger model on first use when it is missing
    """
    def __init__(self, download: bool = True):
        self.download = download

    def classify(self, text: str) -> List[Token]:
        pieces = tokenize(text)
        if not pieces:
            return []

        tags = self._tag([self._taggable(surface) for surface, _ in pieces])
        return [
            Token(text=surface, offset=offset, tags=tag_set)
            for (surface, offset), tag_set in zip(pieces, tags)
        ]

    def _taggable(self, surface: str) -> str:
        # Tag the bare word so trailing punctuation does not skew the model
        word = re.sub(r"[^\w']", "", surface)
        return word or surface

    def _tag(self, words: List[str]) -> List[FrozenSet[Tag]]:
        if not ensure_tagger(self.download):
            return [_OTHER] * len(words)
        try:
            tagged = pos_tag(words, lang="eng")
        except LookupError as e:
            logger.warning(f"NLTK tagging failed: {e}")
            return [_OTHER] * len(words)
        return [penn_to_tags(penn) for _, penn in tagged]
