# bionic_subtitles/core/processor.py
"""
Core subtitle processing: resolve options and dispatch to a format adapter.
"""
from typing import Optional, Union
from loguru import logger

from .interfaces import (
    EmphasisMode,
    LineProcessor,
    Mode,
    ProcessOptions,
    ProcessResult,
    SubtitleFormat,
    TokenClassifier,
)
from .exceptions import (
    InvalidEmphasisMode,
    InvalidFormat,
    InvalidMode,
    UnsupportedFormat,
)
from .formats import (
    AssAdapter,
    FormatAdapter,
    PlainAdapter,
    SrtAdapter,
    VttAdapter,
)
from ..emphasis.calm import CalmProcessor
from ..emphasis.focus import FocusProcessor
from ..emphasis.render import get_renderer
from ..nlp.classifier import NltkClassifier

DEFAULT_INTENSITY = 0.5

# SRT and ASS players often strip inline tags but display bold glyphs
DEFAULT_EMPHASIS = {
    SubtitleFormat.VTT: EmphasisMode.MARKUP,
    SubtitleFormat.PLAIN: EmphasisMode.MARKUP,
    SubtitleFormat.SRT: EmphasisMode.UNICODE,
    SubtitleFormat.ASS: EmphasisMode.UNICODE,
}


def resolve_emphasis_mode(
    format: Union[SubtitleFormat, str],
    override: Optional[Union[EmphasisMode, str]] = None
) -> EmphasisMode:
    """
    Pick the emphasis encoding for a format.

    Args:
        format: Subtitle format
        override: Explicit encoding requested by the caller
    Returns:
        The override when given, otherwise the format's default
    """
    if override is not None:
        try:
            return EmphasisMode(override)
        except ValueError:
            raise InvalidEmphasisMode(override) from None
    try:
        return DEFAULT_EMPHASIS[SubtitleFormat(format)]
    except (ValueError, KeyError):
        raise UnsupportedFormat(format) from None


class SubtitleProcessor:
    """
    Applies bionic emphasis to subtitle documents.

    Args:
        classifier: Token classifier; NLTK-backed when omitted
    """
    def __init__(self, classifier: Optional[TokenClassifier] = None):
        self.classifier = classifier or NltkClassifier()

    def process(self, options: ProcessOptions) -> ProcessResult:
        """
        Process a document according to the given options.

        Raises:
            InvalidFormat: format is not srt, vtt, ass or plain
            InvalidMode: mode is not focus or calm
        """
        fmt = self._parse_format(options.format)
        mode = self._parse_mode(options.mode)
        emphasis_mode = resolve_emphasis_mode(fmt, options.emphasis_mode)

        logger.debug(
            f"Processing {fmt.value} document in {mode.value} mode "
            f"({emphasis_mode.value}, intensity={options.intensity})"
        )

        line_processor = self._build_line_processor(mode, options.intensity, emphasis_mode)
        adapter = self._get_adapter_impl(fmt)
        return ProcessResult(processed_text=adapter.adapt(options.text, line_processor))

    def _build_line_processor(
        self,
        mode: Mode,
        intensity: float,
        emphasis_mode: EmphasisMode
    ) -> LineProcessor:
        renderer = get_renderer(emphasis_mode)
        if mode == Mode.FOCUS:
            return FocusProcessor(self.classifier, intensity, renderer)
        return CalmProcessor(self.classifier, renderer)

    def _get_adapter_impl(self, fmt: SubtitleFormat) -> FormatAdapter:
        """Get concrete format adapter."""
        if fmt == SubtitleFormat.SRT:
            return SrtAdapter()
        elif fmt == SubtitleFormat.VTT:
            return VttAdapter()
        elif fmt == SubtitleFormat.ASS:
            return AssAdapter()
        else:
            return PlainAdapter()

    def _parse_format(self, value: Union[SubtitleFormat, str]) -> SubtitleFormat:
        try:
            return SubtitleFormat(value)
        except ValueError:
            raise InvalidFormat(value) from None

    def _parse_mode(self, value: Union[Mode, str]) -> Mode:
        try:
            return Mode(value)
        except ValueError:
            raise InvalidMode(value) from None


def process_subtitles(
    text: str,
    format: Union[SubtitleFormat, str],
    mode: Union[Mode, str],
    intensity: float = DEFAULT_INTENSITY,
    emphasis_mode: Optional[Union[EmphasisMode, str]] = None,
    classifier: Optional[TokenClassifier] = None
) -> ProcessResult:
    """Process subtitle text in one call. See SubtitleProcessor.process."""
    options = ProcessOptions(
        text=text,
        format=format,
        mode=mode,
        intensity=intensity,
        emphasis_mode=emphasis_mode
    )
    return SubtitleProcessor(classifier).process(options)
