# bionic_subtitles/limits.py
"""
Free-tier truncation of subtitle documents.
"""
from dataclasses import dataclass
from typing import Optional, Union

from .core.formats import ASS_DIALOGUE_PREFIX, is_timing
from .core.interfaces import SubtitleFormat

FREE_TIER_LIMIT = 75


@dataclass
class TruncationResult:
    """
    Outcome of truncating a document to a cue budget.

    Args:
        text: Possibly shortened document
        truncated: Whether anything was removed
        lines_processed: The limit when truncated, None otherwise
    """
    text: str
    truncated: bool
    lines_processed: Optional[int] = None


def _is_dialogue(line: str) -> bool:
    return line.startswith(ASS_DIALOGUE_PREFIX)


def truncate_subtitles(
    text: str,
    format: Union[SubtitleFormat, str],
    limit: int = FREE_TIER_LIMIT
) -> TruncationResult:
    """
    Keep at most `limit` cues of a document.

    Plain text is cut by line, ASS by Dialogue line and SRT/VTT by timing line.
    Everything before the first cue over the limit is kept verbatim.
    """
    lines = text.split("\n")
    fmt = SubtitleFormat(format)

    if fmt == SubtitleFormat.PLAIN:
        truncated = len(lines) > limit
        return TruncationResult(
            text="\n".join(lines[:limit]),
            truncated=truncated,
            lines_processed=limit if truncated else None
        )

    is_cue = _is_dialogue if fmt == SubtitleFormat.ASS else is_timing

    kept = []
    count = 0
    for line in lines:
        if is_cue(line):
            count += 1
            if count > limit:
                break
        kept.append(line)

    truncated = count > limit
    return TruncationResult(
        text="\n".join(kept),
        truncated=truncated,
        lines_processed=limit if truncated else None
    )
