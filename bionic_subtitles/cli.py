# bionic_subtitles/cli.py
"""
Command line entry point.

  bionic-subtitles process episode.srt -o episode.bionic.srt --mode calm
  bionic-subtitles serve --port 8000
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional
from loguru import logger

from .config import ServiceConfig
from .core.exceptions import BionicError
from .core.interfaces import EmphasisMode, Mode, SubtitleFormat
from .core.processor import DEFAULT_INTENSITY, process_subtitles
from .nlp.classifier import NltkClassifier
from .service import run_server

SUFFIX_FORMATS = {
    ".srt": SubtitleFormat.SRT,
    ".vtt": SubtitleFormat.VTT,
    ".ass": SubtitleFormat.ASS,
    ".ssa": SubtitleFormat.ASS,
    ".txt": SubtitleFormat.PLAIN,
}


def infer_format(path: str) -> str:
    """Guess the subtitle format from a file suffix; plain text otherwise."""
    return SUFFIX_FORMATS.get(Path(path).suffix.lower(), SubtitleFormat.PLAIN).value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bionic-subtitles",
        description="Bionic reading emphasis for subtitle files",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser("process", help="Process a subtitle file")
    process.add_argument("input", help="Input file, or - for stdin")
    process.add_argument("-o", "--output", help="Output file (default: stdout)")
    process.add_argument("--format", dest="format", help="srt, vtt, ass or plain (default: from suffix)")
    process.add_argument("--mode", default=Mode.FOCUS.value, help="focus or calm")
    process.add_argument("--intensity", type=float, default=DEFAULT_INTENSITY)
    process.add_argument(
        "--emphasis",
        choices=[m.value for m in EmphasisMode],
        help="markup or unicode (default depends on format)",
    )
    process.add_argument("--no-download", action="store_true", help="Never download the NLTK tagger")

    serve = subparsers.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    return parser


def _run_process(args: argparse.Namespace) -> int:
    if args.input == "-":
        text = sys.stdin.read()
        fmt = args.format or SubtitleFormat.PLAIN.value
    else:
        text = Path(args.input).read_text(encoding="utf-8")
        fmt = args.format or infer_format(args.input)

    try:
        result = process_subtitles(
            text,
            fmt,
            args.mode,
            intensity=args.intensity,
            emphasis_mode=args.emphasis,
            classifier=NltkClassifier(download=not args.no_download),
        )
    except BionicError as e:
        logger.error(str(e))
        return 2

    if args.output:
        Path(args.output).write_text(result.processed_text, encoding="utf-8")
        logger.info(f"Wrote {args.output}")
    else:
        sys.stdout.write(result.processed_text)
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    config = ServiceConfig.from_env()
    if args.host:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    run_server(config)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "process":
        return _run_process(args)
    return _run_serve(args)


if __name__ == "__main__":
    sys.exit(main())
