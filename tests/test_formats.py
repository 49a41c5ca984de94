# tests/test_formats.py
"""Tests for format adapters."""
import pytest

from bionic_subtitles.core.formats import (
    AssAdapter,
    PlainAdapter,
    SrtAdapter,
    VttAdapter,
)
from bionic_subtitles.core.interfaces import LineKind, SpanKind


def shout(line: str) -> str:
    return line.upper()


def test_srt_structure_untouched():
    """Test indices, timings and blank lines pass through byte-identical."""
    text = "1\n00:00:01,000 --> 00:00:03,000\nHello there\n\n2\n00:00:04,000 --> 00:00:06,000\nbye\n"
    result = SrtAdapter().adapt(text, shout)
    assert result == "1\n00:00:01,000 --> 00:00:03,000\nHELLO THERE\n\n2\n00:00:04,000 --> 00:00:06,000\nBYE\n"


def test_srt_markup_preserved():
    """Test inline tags are not passed to the line processor."""
    seen = []

    def record(span):
        seen.append(span)
        return span.upper()

    result = SrtAdapter().adapt('<i>Hello</i> there <font color="red">friend</font>', record)
    assert result == '<i>HELLO</i> THERE <font color="red">FRIEND</font>'
    assert seen == ["Hello", " there ", "friend"]


@pytest.mark.parametrize("line, kind", [
    ("", LineKind.BLANK),
    ("   ", LineKind.BLANK),
    ("12", LineKind.STRUCTURAL),
    (" 7 ", LineKind.STRUCTURAL),
    ("00:00:01,000 --> 00:00:03,000", LineKind.STRUCTURAL),
    ("Route 66", LineKind.TEXTUAL),
])
def test_srt_line_classification(line, kind):
    """Test SRT line predicates."""
    assert SrtAdapter().classify_line(line).kind == kind


def test_split_spans():
    """Test markup and content runs alternate in order."""
    spans = SrtAdapter().split_spans("<b>Hi</b> a < b")
    assert [(s.text, s.kind) for s in spans] == [
        ("<b>", SpanKind.MARKUP),
        ("Hi", SpanKind.CONTENT),
        ("</b>", SpanKind.MARKUP),
        (" a < b", SpanKind.CONTENT),
    ]


def test_vtt_header_and_cue_ids():
    """Test the header is kept and numeric cue ids are dropped."""
    text = "WEBVTT\n\n1\n00:00:01.000 --> 00:00:03.000\nHello world.\n\n2\n00:00:04.000 --> 00:00:05.000\n<v Bob>Bye"
    result = VttAdapter().adapt(text, shout)
    assert result == (
        "WEBVTT\n\n00:00:01.000 --> 00:00:03.000\nHELLO WORLD.\n\n"
        "00:00:04.000 --> 00:00:05.000\n<v Bob>BYE"
    )


def test_vtt_header_metadata_kept():
    """Test header metadata lines are not processed."""
    text = "WEBVTT - Episode 1\nKind: captions\n\n00:00:01.000 --> 00:00:02.000\nhi"
    result = VttAdapter().adapt(text, shout)
    assert result == "WEBVTT - Episode 1\nKind: captions\n\n00:00:01.000 --> 00:00:02.000\nHI"


def test_vtt_header_without_blank_line():
    """Test cues right after the header line are still processed."""
    text = "WEBVTT\n00:00:01.000 --> 00:00:03.000\nHello world."
    result = VttAdapter().adapt(text, shout)
    assert result == "WEBVTT\n00:00:01.000 --> 00:00:03.000\nHELLO WORLD."

    result = VttAdapter().adapt("WEBVTT\n1\n00:00:01.000 --> 00:00:03.000\nhi", shout)
    assert result == "WEBVTT\n00:00:01.000 --> 00:00:03.000\nHI"


def test_vtt_header_with_bom():
    """Test a byte order mark does not hide the header."""
    text = "\ufeffWEBVTT\n\n00:00:01.000 --> 00:00:02.000\nhi"
    result = VttAdapter().adapt(text, shout)
    assert result == "\ufeffWEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHI"


def test_vtt_without_header():
    """Test no header is invented."""
    result = VttAdapter().adapt("00:00:01.000 --> 00:00:02.000\nhi", shout)
    assert result == "00:00:01.000 --> 00:00:02.000\nHI"


def test_ass_dialogue_fields():
    """Test only the text field of a dialogue line is processed."""
    text = (
        "[Events]\n"
        "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text\n"
        "Dialogue: 0,0:00:01.00,0:00:03.00,Default,,0,0,0,,Hello, world"
    )
    result = AssAdapter().adapt(text, shout)
    assert result.splitlines()[:2] == text.splitlines()[:2]
    assert result.splitlines()[2] == "Dialogue: 0,0:00:01.00,0:00:03.00,Default,,0,0,0,,HELLO, WORLD"


def test_ass_override_blocks_preserved():
    """Test override tags and hard breaks are treated as markup."""
    line = r"Dialogue: 0,0:00:01.00,0:00:03.00,Default,,0,0,0,,{\an8}Hello\Nthere <i>you</i>"
    result = AssAdapter().adapt(line, shout)
    assert result == r"Dialogue: 0,0:00:01.00,0:00:03.00,Default,,0,0,0,,{\an8}HELLO\NTHERE <i>YOU</i>"


def test_ass_malformed_dialogue_unchanged():
    """Test dialogue lines without enough fields pass through."""
    line = "Dialogue: 0,broken,line"
    assert AssAdapter().adapt(line, shout) == line


def test_plain_single_span():
    """Test plain text is handed over whole."""
    seen = []

    def record(span):
        seen.append(span)
        return span.upper()

    assert PlainAdapter().adapt("one\ntwo <b>x</b>", record) == "ONE\nTWO <B>X</B>"
    assert seen == ["one\ntwo <b>x</b>"]


@pytest.mark.parametrize("adapter", [SrtAdapter(), VttAdapter(), AssAdapter(), PlainAdapter()])
def test_empty_document(adapter):
    """Test empty input stays empty."""
    assert adapter.adapt("", lambda line: line) == ""


def test_failing_processor_degrades():
    """Test a span that cannot be processed is emitted unchanged."""
    def explode(span):
        raise RuntimeError("boom")

    text = "1\n00:00:01,000 --> 00:00:02,000\nHello"
    assert SrtAdapter().adapt(text, explode) == text
