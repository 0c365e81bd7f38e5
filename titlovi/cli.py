"""Command-line interface for titlovi.

WHY: Editors and batch jobs need to turn saved recogniser output into
subtitle files, or re-script/re-layout an existing subtitle file, without
writing Python. The CLI wires the loader, pipeline and formatters behind
one command.

HOW: argparse reads the input path (or "-" for stdin), layout options
(--aspect, --max-chars, --max-lines), the output format and target
script. JSON input goes through load_transcription() and build_cues();
.srt/.vtt input (or --convert-only) is parsed, script-converted and
optionally re-laid-out. The result goes to --output or stdout.

RULES:
- Usage:
    titlovi transcript.json -o out.srt --aspect 9:16
    titlovi transcript.json --format vtt --script latin
    titlovi old.srt --convert-only -o new.srt
    cat transcript.json | titlovi - --format json
- Exit codes: 0 = success, 1 = error.
- Status messages go to stderr; file content goes to stdout when no
  --output is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from titlovi import __version__
from titlovi.config import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_FORMAT,
    DEFAULT_LANGUAGE,
    DEFAULT_TARGET_SCRIPT,
    LOG_LEVEL,
)
from titlovi.core.ir import AspectRatio, Cue
from titlovi.core.layout import resolve_layout
from titlovi.core.script import Script, ScriptMapper
from titlovi.core.timing import normalize_timing
from titlovi.errors import TitloviError
from titlovi.formatters import FORMATTERS, get_formatter
from titlovi.models import cues_to_json
from titlovi.pipeline import build_cues, convert_script, optimize_cues
from titlovi.transcription import load_transcription_text

OUTPUT_FORMATS = sorted(FORMATTERS.keys()) + ["json"]


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="titlovi",
        description="Build Serbian subtitles from speech-recognition timing, "
                    "or convert an existing subtitle file.",
    )
    parser.add_argument("input", help="Transcription JSON, .srt or .vtt file ('-' for stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument(
        "--aspect", default=None, choices=[r.value for r in AspectRatio],
        help="Target aspect ratio (default: {})".format(DEFAULT_ASPECT_RATIO),
    )
    parser.add_argument("--max-chars", type=int, default=None,
                        help="Override max characters per line")
    parser.add_argument("--max-lines", type=int, default=None,
                        help="Override max lines per cue")
    parser.add_argument(
        "--format", dest="fmt", default=None, choices=OUTPUT_FORMATS,
        help="Output format (default: output file extension, else {})".format(DEFAULT_FORMAT),
    )
    parser.add_argument(
        "--script", default=DEFAULT_TARGET_SCRIPT, choices=[s.value for s in Script],
        help="Target script (default: {})".format(DEFAULT_TARGET_SCRIPT),
    )
    parser.add_argument("--ascii-digraphs", action="store_true",
                        help="Treat 'dj' and 'dz' as đ and dž when converting to Cyrillic")
    parser.add_argument("--convert-only", action="store_true",
                        help="Input is a subtitle file: convert script and timing only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    return parser


def _input_format(path: str, convert_only: bool) -> Optional[str]:
    """Return "srt"/"vtt" for subtitle input, None for transcription JSON."""
    suffix = Path(path).suffix.lower().lstrip(".")
    if suffix in FORMATTERS:
        return suffix
    if convert_only:
        return "srt"
    return None


def _output_format(args: argparse.Namespace) -> str:
    if args.fmt:
        return args.fmt
    if args.output:
        suffix = Path(args.output).suffix.lower().lstrip(".")
        if suffix in OUTPUT_FORMATS:
            return suffix
    return DEFAULT_FORMAT if DEFAULT_FORMAT in OUTPUT_FORMATS else "srt"


def _render(cues: List[Cue], fmt: str) -> str:
    if fmt == "json":
        return cues_to_json(cues, language=DEFAULT_LANGUAGE) + "\n"
    return get_formatter(fmt).serialize(cues)


def run(args: argparse.Namespace) -> int:
    """Execute one CLI invocation. Returns the process exit code."""
    if args.input == "-":
        raw = sys.stdin.read()
    else:
        with open(args.input, "r", encoding="utf-8-sig") as f:
            raw = f.read()

    layout = resolve_layout(
        aspect_ratio=args.aspect or DEFAULT_ASPECT_RATIO,
        max_chars_per_line=args.max_chars,
        max_lines=args.max_lines,
    )
    in_fmt = _input_format(args.input, args.convert_only)

    if in_fmt is not None:
        cues = get_formatter(in_fmt).parse(raw)
        if not cues:
            _status("Error: No cues found in input")
            return 1
        mapper = ScriptMapper(Script(args.script), ascii_digraphs=args.ascii_digraphs)
        cues = convert_script(cues, mapper)
        if args.aspect or args.max_chars or args.max_lines:
            cues = optimize_cues(cues, layout)
        else:
            cues = normalize_timing(sorted(cues, key=lambda c: c.start))
    else:
        transcription = load_transcription_text(raw)
        cues = build_cues(
            transcription,
            layout=layout,
            target_script=args.script,
            ascii_digraphs=args.ascii_digraphs,
        )
        if not cues:
            _status("Error: No words found in input")
            return 1

    out_fmt = _output_format(args)
    content = _render(cues, out_fmt)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(content)
        _status("Wrote {} cues ({}, {}x{}) to {}".format(
            len(cues), out_fmt, layout.max_chars_per_line, layout.max_lines, args.output
        ))
    else:
        sys.stdout.write(content)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Run the titlovi CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        code = run(args)
    except (TitloviError, OSError) as e:
        _status("Error: {}".format(e))
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
