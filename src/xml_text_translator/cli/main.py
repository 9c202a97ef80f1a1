"""Main CLI entry point for the xml-text-translator command-line tool.

Provides escaping and unescaping of files or standard input, codepoint
inspection and a throughput benchmark.
"""

import argparse
import codecs
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from xml_text_translator import __version__
from xml_text_translator.shared.config import (
    ConfigError,
    TranslationConfig,
    TranslationMode,
    UnescapeOption,
)
from xml_text_translator.shared.logging import configure_logging, get_logger
from xml_text_translator.translation.presets import build_translator
from xml_text_translator.translation.translator import (
    codepoint_at,
    codepoint_width,
    hex_of,
)


class TranslationRunner:
    """Streams files or standard input through a configured translator."""

    def __init__(self, config: TranslationConfig):
        self.config = config
        self.translator = build_translator(config)
        self.logger = get_logger(__name__, config.correlation_id, "cli_runner")

    def read_input(self, path: Optional[Path]) -> str:
        """Read one input, standard input when ``path`` is None."""
        if path is None:
            stream = getattr(sys.stdin, "buffer", None)
            if stream is None:
                return sys.stdin.read()
            # decode the raw bytes so the configured codec and handler apply
            reader = codecs.getreader(self.config.input_encoding)
            return reader(stream, self.config.input_errors).read()
        with path.open(
            encoding=self.config.input_encoding,
            errors=self.config.input_errors,
            newline="",
        ) as handle:
            return handle.read()

    def open_output(
        self, path: Optional[Path]
    ) -> Union[TextIO, codecs.StreamWriter]:
        """Open the output sink, standard output when ``path`` is None.

        Standard output is written as raw bytes in the configured encoding,
        without newline translation, and is never closed.
        """
        if path is None:
            stream = getattr(sys.stdout, "buffer", None)
            if stream is None:
                return sys.stdout
            sys.stdout.flush()
            writer = codecs.getwriter(self.config.output_encoding)
            return writer(stream, self.config.output_errors)
        return path.open(
            "w",
            encoding=self.config.output_encoding,
            errors=self.config.output_errors,
            newline="",
        )

    def run(self, paths: List[Path], output: Optional[Path] = None) -> int:
        """Translate every input onto a single output.

        Returns:
            Process exit code
        """
        sources: List[Optional[Path]] = list(paths) or [None]
        try:
            sink = self.open_output(output)
        except OSError as e:
            print(f"Error opening output: {e}", file=sys.stderr)
            return 1

        try:
            for source in sources:
                name = str(source) if source is not None else "<stdin>"
                try:
                    text = self.read_input(source)
                except (OSError, UnicodeDecodeError) as e:
                    self.logger.warning(
                        "Failed to read input", extra={"file": name}
                    )
                    print(f"Error reading {name}: {e}", file=sys.stderr)
                    return 1

                try:
                    self.translator.translate_to(text, sink)
                    sink.flush()
                except (OSError, UnicodeEncodeError) as e:
                    self.logger.error(
                        "Failed to write translation",
                        extra={"file": name},
                        exc_info=True,
                    )
                    print(f"Error writing output: {e}", file=sys.stderr)
                    return 1

                self.logger.debug(
                    "Translated input",
                    extra={"file": name, "characters": len(text)},
                )
        finally:
            if output is not None:
                sink.close()

        return 0


def describe_codepoints(text: str) -> List[str]:
    """Return ``U+<hex>`` for every codepoint of ``text``."""
    described = []
    pos = 0
    while pos < len(text):
        described.append(f"U+{hex_of(codepoint_at(text, pos))}")
        pos += codepoint_width(text, pos)
    return described


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-text-translator",
        description="Escape and unescape text for XML documents"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Escape command
    escape_parser = subparsers.add_parser("escape", help="Escape text for XML")
    escape_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files to escape (default: stdin)"
    )
    escape_parser.add_argument(
        "--xml11",
        action="store_true",
        help="Escape for XML 1.1 instead of XML 1.0"
    )
    escape_parser.add_argument(
        "--keep-surrogates",
        action="store_true",
        help="Do not remove unpaired surrogates"
    )

    # Unescape command
    unescape_parser = subparsers.add_parser(
        "unescape", help="Resolve XML entities and character references"
    )
    unescape_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files to unescape (default: stdin)"
    )
    unescape_parser.add_argument(
        "--semicolon-optional",
        action="store_true",
        help="Also decode numeric references without a trailing ';'"
    )

    for command_parser in (escape_parser, unescape_parser):
        command_parser.add_argument(
            "--output", "-o",
            type=Path,
            help="Output file (default: stdout)"
        )
        command_parser.add_argument(
            "--config", "-c",
            type=Path,
            help="Configuration file path"
        )

    # Hex command
    hex_parser = subparsers.add_parser("hex", help="Show the codepoints of text")
    hex_parser.add_argument("text", help="Text to inspect")

    # Benchmark command
    benchmark_parser = subparsers.add_parser(
        "benchmark", help="Measure translation throughput"
    )
    benchmark_parser.add_argument(
        "--runs",
        type=int,
        default=5,
        help="Measured runs per translator and case (default: 5)"
    )
    benchmark_parser.add_argument(
        "--warmup",
        type=int,
        default=1,
        help="Unmeasured warmup runs (default: 1)"
    )
    benchmark_parser.add_argument(
        "--no-baselines",
        action="store_true",
        help="Skip the xml.sax.saxutils baselines"
    )
    benchmark_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def load_config(args: argparse.Namespace) -> TranslationConfig:
    """Load configuration from ``--config`` and apply command-line overrides."""
    config = TranslationConfig()
    if getattr(args, "config", None) is not None:
        config = TranslationConfig.from_file(args.config)

    if args.command == "escape":
        mode = TranslationMode.ESCAPE_XML11 if args.xml11 else config.mode
        if mode is TranslationMode.UNESCAPE_XML:
            mode = TranslationMode.ESCAPE_XML10
        config = config.override(mode=mode)
        if args.keep_surrogates:
            config = config.override(remove_unpaired_surrogates=False)
    elif args.command == "unescape":
        config = config.override(mode=TranslationMode.UNESCAPE_XML)
        if args.semicolon_optional:
            config = config.override(semicolon=UnescapeOption.SEMICOLON_OPTIONAL)

    return config


def format_report(report: Dict[str, Any], format_type: str) -> str:
    """Format a benchmark report for output."""
    if format_type == "json":
        return json.dumps(report, indent=2)

    lines = [f"{report['suite_name']}: {report['total_results']} runs"]
    lines.append("-" * 60)
    for name, summary in report["summary"].items():
        throughput = summary["characters_per_second"]
        mean_rate = throughput.get("mean", 0.0)
        lines.append(
            f"{name:<20} {mean_rate:>14,.0f} chars/s  "
            f"success {summary['success_rate']:.0%}"
        )
    return "\n".join(lines)


def cmd_translate(args: argparse.Namespace) -> int:
    """Handle escape and unescape commands."""
    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if not (args.verbose or args.quiet):
        configure_logging(config.logging_level)

    runner = TranslationRunner(config)
    return runner.run(args.paths, args.output)


def cmd_hex(args: argparse.Namespace) -> int:
    """Handle hex command."""
    print(" ".join(describe_codepoints(args.text)))
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    """Handle benchmark command."""
    from xml_text_translator.translation.benchmarks import TranslationBenchmark

    try:
        benchmark = TranslationBenchmark(
            warmup_runs=args.warmup, benchmark_runs=args.runs
        )
    except ValueError as e:
        print(f"Invalid benchmark options: {e}", file=sys.stderr)
        return 1

    suite = benchmark.run(include_baselines=not args.no_baselines)
    print(format_report(suite.generate_report(), args.format))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    # Route to appropriate command handler
    try:
        if args.command in ("escape", "unescape"):
            return cmd_translate(args)
        elif args.command == "hex":
            return cmd_hex(args)
        elif args.command == "benchmark":
            return cmd_benchmark(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
