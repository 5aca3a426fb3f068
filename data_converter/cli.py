"""Command-line interface for the data converter.

WHY: Users need a quick way to convert files (or piped text) between
JSON, XML, CSV and YAML, and to prettify or minify JSON and XML, from
the terminal or from shell scripts.

HOW: argparse with three subcommands:
  convert  — read a file or stdin, convert, write a file or stdout
  format   — prettify or minify JSON/XML
  formats  — list supported formats
Formats may be given explicitly (--from/--to, --format) or are inferred
from the input/output file extensions. Status and error messages go to
stderr so stdout can be piped.

RULES:
- Input defaults to stdin ("-" also means stdin); output defaults to stdout
- Input files are read as UTF-8; a leading byte-order mark is dropped
- Existing output files are never overwritten: a numeric suffix is
  added instead (data.yaml → data-2.yaml)
- Exit code 1 for conversion and file errors, 2 for usage errors
- Messages are printed as "Error: <message>"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from data_converter import __version__, config
from data_converter.core.converter import convert, detect_format, resolve_format
from data_converter.core.errors import ConversionError
from data_converter.core.pretty import minify_json, minify_xml, prettify_json, prettify_xml
from data_converter.formats import CODECS
from data_converter.formats.base import CodecOptions, DataFormat

logger = logging.getLogger(__name__)

_FORMAT_CHOICES = sorted(f.value for f in DataFormat) + ["yml"]


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> NoReturn:
    _status("Error: {}".format(msg))
    sys.exit(1)


def _read_input(input_file: Optional[str]) -> str:
    if input_file is None or input_file == "-":
        return sys.stdin.read()
    path = Path(input_file)
    if not path.is_file():
        _fail("File not found: {}".format(path))
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        _fail("Cannot read {} as UTF-8: {}".format(path, exc))


def _resolve_output_path(path: Path) -> Path:
    """Return ``path``, or the first free ``{stem}-N{suffix}`` next to it.

    RULES:
    - First attempt: the path as given
    - Conflict: counter inserted before the extension, starting at 2
    """
    if not path.exists():
        return path

    counter = 2
    while True:
        candidate = path.with_name("{}-{}{}".format(path.stem, counter, path.suffix))
        if not candidate.exists():
            return candidate
        counter += 1


def _write_output(content: str, output_file: Optional[str]) -> None:
    if output_file is None or output_file == "-":
        sys.stdout.write(content)
        if content and not content.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
        return

    target = Path(output_file)
    if not target.parent.is_dir():
        _fail("Output directory does not exist: {}".format(target.parent))
    path = _resolve_output_path(target)
    path.write_text(content, encoding="utf-8")
    _status("Saved: {}".format(path))


def _pick_format(explicit: Optional[str], path: Optional[str], role: str) -> DataFormat:
    """Use the explicit format if given, else infer it from the file name."""
    if explicit:
        return resolve_format(explicit)
    if path and path != "-":
        detected = detect_format(path)
        if detected is not None:
            return detected
    _fail(
        "Cannot determine the {} format; pass --{} (one of: {}).".format(
            role, "from" if role == "input" else "to", ", ".join(_FORMAT_CHOICES),
        )
    )


def _run_convert(args: argparse.Namespace) -> None:
    try:
        source = _pick_format(args.from_format, args.input_file, "input")
        target = _pick_format(args.to_format, args.output, "output")
        options = CodecOptions(
            json_indent=args.json_indent,
            yaml_indent=args.yaml_indent,
            csv_quoting=args.csv_quoting,
            xml_indent=args.xml_indent,
        )
        text = _read_input(args.input_file)
        output = convert(text, source, target, options)
    except ConversionError as exc:
        _fail(str(exc))
    logger.info("Converted %s -> %s", source.label, target.label)
    _write_output(output, args.output)


def _run_format(args: argparse.Namespace) -> None:
    try:
        fmt = _pick_format(args.format, args.input_file, "input")
        if fmt not in (DataFormat.JSON, DataFormat.XML):
            _fail("Only JSON and XML can be formatted, got {}.".format(fmt.label))
        text = _read_input(args.input_file)
        if fmt is DataFormat.JSON:
            output = minify_json(text) if args.minify else prettify_json(text, args.indent)
        else:
            output = minify_xml(text) if args.minify else prettify_xml(text, args.indent)
    except ConversionError as exc:
        _fail(str(exc))
    _write_output(output, args.output)


def _run_formats(args: argparse.Namespace) -> None:
    for fmt, codec_cls in CODECS.items():
        codec = codec_cls()
        print("{:<6} {:<6} {:<18} {}".format(
            fmt.value, codec.name, codec.media_type, " ".join(codec.extensions),
        ))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running anything.
    """
    parser = argparse.ArgumentParser(
        prog="data-converter",
        description="Convert structured data between JSON, XML, CSV and YAML.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    # convert
    conv = subparsers.add_parser(
        "convert",
        help="Convert a document from one format to another.",
        description="Convert a document. Formats are inferred from file "
                    "extensions when --from/--to are omitted.",
    )
    conv.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="Input file (default: stdin).",
    )
    conv.add_argument(
        "--from",
        dest="from_format",
        choices=_FORMAT_CHOICES,
        type=str.lower,
        default=None,
        help="Input format (default: from the input file extension).",
    )
    conv.add_argument(
        "--to",
        dest="to_format",
        choices=_FORMAT_CHOICES,
        type=str.lower,
        default=None,
        help="Output format (default: from the output file extension).",
    )
    conv.add_argument(
        "-o", "--output",
        default=None,
        help="Output file (default: stdout). Existing files are not overwritten.",
    )
    conv.add_argument(
        "--json-indent",
        type=int,
        default=config.DEFAULT_JSON_INDENT,
        help="JSON indent in spaces, 0 for compact (default: %(default)s).",
    )
    conv.add_argument(
        "--yaml-indent",
        type=int,
        default=config.DEFAULT_YAML_INDENT,
        help="YAML indent in spaces (default: %(default)s).",
    )
    conv.add_argument(
        "--csv-quoting",
        choices=config.CSV_QUOTING_MODES,
        default=config.DEFAULT_CSV_QUOTING,
        help="Quote every CSV field, or only those that need it (default: %(default)s).",
    )
    conv.add_argument(
        "--xml-indent",
        type=int,
        default=config.DEFAULT_XML_INDENT,
        help="Pretty-print XML output with this many spaces (default: compact).",
    )
    conv.set_defaults(handler=_run_convert)

    # format
    fmt = subparsers.add_parser(
        "format",
        help="Prettify or minify a JSON or XML document.",
    )
    fmt.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="Input file (default: stdin).",
    )
    fmt.add_argument(
        "--format",
        choices=["json", "xml"],
        type=str.lower,
        default=None,
        help="Document format (default: from the input file extension).",
    )
    fmt.add_argument(
        "--minify",
        action="store_true",
        help="Remove insignificant whitespace instead of indenting.",
    )
    fmt.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indent in spaces when prettifying (default: %(default)s).",
    )
    fmt.add_argument(
        "-o", "--output",
        default=None,
        help="Output file (default: stdout).",
    )
    fmt.set_defaults(handler=_run_format)

    # formats
    lst = subparsers.add_parser("formats", help="List supported formats.")
    lst.set_defaults(handler=_run_formats)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    args.handler(args)


if __name__ == "__main__":
    main()
