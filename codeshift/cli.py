"""CLI entrypoints for codeshift commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from .config import ConfigError, load_config
from .errors import CodeshiftError
from .logging import configure_logging
from .session import ConverterSession


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_input_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="File to read (defaults to standard input).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeshift",
        description="Detect the language of a snippet and convert it to another language.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .codeshift.yml or the directory containing it.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect_parser = subparsers.add_parser(
        "detect",
        help="Print the detected language of the input.",
    )
    _add_verbose_option(detect_parser, suppress_default=True)
    _add_input_argument(detect_parser)
    detect_parser.add_argument(
        "--scores",
        action="store_true",
        help="Also print the per-language match scores.",
    )

    suggest_parser = subparsers.add_parser(
        "suggest",
        help="List the conversions offered for the input.",
    )
    _add_verbose_option(suggest_parser, suppress_default=True)
    _add_input_argument(suggest_parser)
    suggest_parser.add_argument(
        "--from",
        dest="source",
        default=None,
        help="Source language tag (detected when omitted).",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert the input to another language.",
    )
    _add_verbose_option(convert_parser, suppress_default=True)
    _add_input_argument(convert_parser)
    convert_parser.add_argument(
        "--to",
        dest="target",
        required=True,
        help="Target language tag.",
    )
    convert_parser.add_argument(
        "--from",
        dest="source",
        default=None,
        help="Source language tag (detected when omitted).",
    )
    convert_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the result to this file instead of standard output.",
    )

    languages_parser = subparsers.add_parser(
        "languages",
        help="List the languages known to the classifier.",
    )
    _add_verbose_option(languages_parser, suppress_default=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codeshift commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.quiet, log_file=args.log_file)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    session = ConverterSession(config)

    if args.command == "serve":
        from .service import run_service

        run_service(args.host, args.port, session_factory=lambda: session)
        return

    if args.command == "languages":
        for info in session.languages():
            family = info.family or "other"
            print(f"{info.tag:<12} {info.name:<20} {family}")
        return

    try:
        text = _read_input(args.path, sys.stdin)
    except OSError as exc:
        parser.exit(1, f"Cannot read input: {exc}\n")

    try:
        if args.command == "detect":
            analysis = session.analyze(text)
            if analysis.language is None:
                parser.exit(1, "Could not detect the input language\n")
            print(analysis.language)
            if args.scores:
                for tag, value in analysis.scores.items():
                    print(f"  {tag}: {value}")
        elif args.command == "suggest":
            source = args.source.lower() if args.source else session.analyze(text).language
            suggestions = session.suggest(source, text)
            if not suggestions:
                parser.exit(1, "No conversions available for this input\n")
            for suggestion in suggestions:
                print(f"{suggestion.id:<24} {suggestion.name}")
        elif args.command == "convert":
            source = args.source or session.analyze(text).language
            if not source:
                parser.exit(1, "Could not detect the input language; pass --from\n")
            outcome = session.convert_pair(text, source, args.target)
            if args.output is not None:
                args.output.write_text(outcome.result, encoding="utf-8")
                print(f"Wrote {outcome.entry.conversion_label} result to {args.output}")
            else:
                sys.stdout.write(outcome.result)
                if not outcome.result.endswith("\n"):
                    sys.stdout.write("\n")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except CodeshiftError as exc:
        parser.exit(1, f"codeshift {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _read_input(path: str, stdin: TextIO) -> str:
    if path == "-":
        return stdin.read()
    return Path(path).expanduser().read_text(encoding="utf-8")


if __name__ == "__main__":
    main(sys.argv[1:])
