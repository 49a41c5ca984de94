# bionic_subtitles/core/formats.py
"""
Format adapters: separate structure and markup from emphasis-eligible text.
"""
import re
from typing import Callable, List, Tuple
from loguru import logger

from .interfaces import (
    Line,
    LineKind,
    LineProcessor,
    SpanKind,
    TextSpan,
)

_TAG_RUN = re.compile(r"(<[^>]+>)")
# ASS also carries override blocks and hard breaks inside dialogue text
_ASS_MARKUP_RUN = re.compile(r"(<[^>]+>|\{[^}]*\}|\\[Nnh])")

TIMING_ARROW = "-->"
ASS_DIALOGUE_PREFIX = "Dialogue:"
ASS_LEADING_FIELDS = 9
VTT_HEADER = "WEBVTT"
BOM = "\ufeff"

LinePredicate = Tuple[Callable[[str], bool], LineKind]


def is_blank(line: str) -> bool:
    return line.strip() == ""


def is_cue_index(line: str) -> bool:
    stripped = line.strip()
    return stripped.isascii() and stripped.isdigit()


def is_timing(line: str) -> bool:
    return TIMING_ARROW in line


class FormatAdapter:
    """Base class for format adapters."""

    # Ordered (predicate, kind) pairs; the first match classifies a line
    line_rules: List[LinePredicate] = []
    markup_pattern = _TAG_RUN

    def adapt(self, text: str, process_fn: LineProcessor) -> str:
        """
        Walk a document line by line and emphasize its content spans.

        Args:
            text: Raw document text
            process_fn: Function applied to each content span
        Returns:
            Reassembled document
        """
        output = []
        for line in text.split("\n"):
            output.extend(self.adapt_line(line, process_fn))
        return "\n".join(output)

    def adapt_line(self, line: str, process_fn: LineProcessor) -> List[str]:
        """Process one line; returns the lines to emit in its place."""
        classified = self.classify_line(line)
        if classified.kind != LineKind.TEXTUAL:
            return [line]
        return [self.process_text(line, process_fn)]

    def classify_line(self, line: str) -> Line:
        for predicate, kind in self.line_rules:
            if predicate(line):
                return Line(line, kind)
        return Line(line, LineKind.TEXTUAL)

    def split_spans(self, text: str) -> List[TextSpan]:
        """Split text into markup runs and content runs."""
        spans = []
        for part in self.markup_pattern.split(text):
            if not part:
                continue
            kind = SpanKind.MARKUP if self.markup_pattern.fullmatch(part) else SpanKind.CONTENT
            spans.append(TextSpan(part, kind))
        return spans

    def process_text(self, text: str, process_fn: LineProcessor) -> str:
        return "".join(
            span.text if span.kind == SpanKind.MARKUP else self._apply(process_fn, span.text)
            for span in self.split_spans(text)
        )

    def _apply(self, process_fn: LineProcessor, text: str) -> str:
        try:
            return process_fn(text)
        except Exception as e:
            logger.error(f"Error processing span {text!r}: {e}")
            return text


class SrtAdapter(FormatAdapter):
    """SubRip: cue indices, timing lines and blank separators are structural."""
    line_rules = [
        (is_blank, LineKind.BLANK),
        (is_cue_index, LineKind.STRUCTURAL),
        (is_timing, LineKind.STRUCTURAL),
    ]


class VttAdapter(FormatAdapter):
    """WebVTT: header kept, numeric cue ids dropped."""
    line_rules = [
        (is_cue_index, LineKind.STRUCTURAL),
        (is_timing, LineKind.STRUCTURAL),
        (is_blank, LineKind.BLANK),
    ]

    def adapt(self, text: str, process_fn: LineProcessor) -> str:
        lines = text.split("\n")
        output = []

        start = 0
        if lines[0].lstrip(BOM).startswith(VTT_HEADER):
            # Header block runs up to and including the first blank line,
            # and never reaches into a cue id or timing line
            while (
                start < len(lines)
                and not is_blank(lines[start])
                and not is_cue_index(lines[start])
                and not is_timing(lines[start])
            ):
                output.append(lines[start])
                start += 1
            if start < len(lines) and is_blank(lines[start]):
                output.append(lines[start])
                start += 1

        for line in lines[start:]:
            output.extend(self.adapt_line(line, process_fn))
        return "\n".join(output)

    def adapt_line(self, line: str, process_fn: LineProcessor) -> List[str]:
        if is_cue_index(line):
            return []
        return super().adapt_line(line, process_fn)


class AssAdapter(FormatAdapter):
    """Advanced SubStation Alpha: only Dialogue text is processed."""
    markup_pattern = _ASS_MARKUP_RUN

    def classify_line(self, line: str) -> Line:
        if not line.startswith(ASS_DIALOGUE_PREFIX):
            return Line(line, LineKind.STRUCTURAL)
        if line.count(",") < ASS_LEADING_FIELDS:
            logger.debug(f"Malformed dialogue line left unchanged: {line!r}")
            return Line(line, LineKind.STRUCTURAL)
        return Line(line, LineKind.TEXTUAL)

    def adapt_line(self, line: str, process_fn: LineProcessor) -> List[str]:
        if self.classify_line(line).kind != LineKind.TEXTUAL:
            return [line]
        parts = line.split(",")
        fields = parts[:ASS_LEADING_FIELDS]
        # Dialogue text may itself contain commas
        dialogue = ",".join(parts[ASS_LEADING_FIELDS:])
        return [",".join(fields + [self.process_text(dialogue, process_fn)])]


class PlainAdapter(FormatAdapter):
    """Plain text: the whole input is one content span."""

    def adapt(self, text: str, process_fn: LineProcessor) -> str:
        return self._apply(process_fn, text)
