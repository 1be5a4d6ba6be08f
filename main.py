"""logscope — parse, filter, and export log files of unknown format."""

import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError
from datetime import date
from itertools import islice

from logscope.config import OUTPUT_FORMATS, load_config
from logscope.export import write_export
from logscope.filters import apply_filters
from logscope.formatter import get_formatter
from logscope.parser import parse_log_file
from logscope.reader import LogFileError, read_log_file
from logscope.stats import compute_stats, format_stats_json, format_stats_text

logger = logging.getLogger("logscope")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid count {value!r}, expected an integer")
    if number < 0:
        raise ArgumentTypeError(f"invalid count {value!r}, must not be negative")
    return number


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="logscope",
        description="Parse a log file of unknown format, then filter, summarize or export it.",
    )
    parser.add_argument("file", help="Log file path")
    parser.add_argument("--level", help="Keep only this level (TRACE, DEBUG, INFO, WARN, ERROR, FATAL)")
    parser.add_argument("--search", help="Keep entries whose message contains this text (case-insensitive)")
    parser.add_argument("--module", help="Keep entries whose metadata module equals this value")
    parser.add_argument("--feature", help="Keep entries whose metadata feature equals this value")
    parser.add_argument("--user", help="Keep entries whose metadata user.login equals this value")
    parser.add_argument("--date-from", type=_parse_date, help="Keep entries on or after this date (YYYY-MM-DD)")
    parser.add_argument("--date-to", type=_parse_date, help="Keep entries on or before this date (YYYY-MM-DD)")
    parser.add_argument("--output", choices=OUTPUT_FORMATS, help="Output format (default from config: text)")
    parser.add_argument("--color", action="store_true", default=None, help="Colorize output by level (ANSI)")
    parser.add_argument("--stats", action="store_true", help="Show statistics instead of entries")
    parser.add_argument(
        "--export",
        nargs="?",
        const="",
        metavar="DIR",
        help="Write the filtered raw lines to DIR/filtered-<file> (default DIR from config)",
    )
    parser.add_argument("--limit", type=_non_negative_int, help="Print at most N entries")
    parser.add_argument("--config", help="YAML config file (or set LOGSCOPE_CONFIG)")
    return parser


def run(args) -> int:
    """Execute one CLI invocation. Returns the process exit status."""
    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s [LOGSCOPE] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        content, filename = read_log_file(args.file)
    except LogFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parsed = parse_log_file(content, filename)
    records = apply_filters(parsed.entries, args)
    logger.info("%d of %d entries match filters", len(records), len(parsed.entries))

    if args.export is not None:
        target = write_export(records, filename, args.export or config.export_dir)
        print(f"Exported {len(records)} entries to {target}", file=sys.stderr)

    output = args.output or config.output
    if args.stats:
        stats = compute_stats(records)
        if output == "json":
            print(format_stats_json(stats, parsed.detected_format))
        else:
            print(format_stats_text(stats, parsed.detected_format))
        return 0

    color = config.color if args.color is None else args.color
    formatter = get_formatter(output_format=output, color=color)
    shown = islice(records, args.limit) if args.limit is not None else records
    for record in shown:
        print(formatter(record))
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
