"""Command line entry point."""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from bills import __version__
from bills.config.settings import get_settings
from bills.config.options import ReportOptions
from bills.ledger.parser import LedgerParser, cutoff_date, filter_recent, today_in
from bills.ledger.aggregator import Aggregator
from bills.report.renderer import ReportRenderer
from bills.utils.logger import configure_logging, get_logger, set_ledger_context
from bills.utils.exceptions import BillsError, ConfigError

logger = get_logger()

# Ledger read from the working directory when --all is given without --csv
DEFAULT_LEDGER = "costs.csv"


class UsageExitParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on bad arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser. Defaults left as None come from settings."""
    parser = UsageExitParser(
        prog="bills-report",
        description="Read an expense ledger CSV and print totals by source and month."
    )
    parser.add_argument(
        "--csv",
        help=f"CSV file to read. With --all it defaults to {DEFAULT_LEDGER} in the working directory."
    )
    parser.add_argument("--location", help="Time zone location (default: from settings).")
    parser.add_argument(
        "--days-back",
        type=int,
        help="Number of days back to include in the report. Entries older than this will be ignored."
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Report the entire file, ignoring --days-back."
    )
    parser.add_argument(
        "--no-records",
        action="store_true",
        help="Omit the per-entry listing."
    )
    parser.add_argument("--config", type=Path, help="Settings YAML file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _describe_validation_error(error: ValidationError) -> str:
    """One-line summary of pydantic validation failures."""
    parts = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)


def _build_options(args: argparse.Namespace) -> ReportOptions:
    settings = get_settings(args.config)
    configure_logging(
        settings.log_level,
        settings.log_file,
        settings.log_max_file_size_mb,
        settings.log_backup_count
    )

    return ReportOptions(
        csv_path=args.csv if args.csv is not None else (DEFAULT_LEDGER if args.all else None),
        location=args.location if args.location is not None else settings.location,
        days_back=args.days_back if args.days_back is not None else settings.days_back,
        include_all=args.all,
        show_records=not args.no_records
    )


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run one report.

    Args:
        argv: Command line arguments, defaults to sys.argv[1:]

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = _build_options(args)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid arguments: {_describe_validation_error(e)}")
        parser.print_usage(sys.stderr)
        return 1

    set_ledger_context(options.csv_path.name)

    try:
        records = LedgerParser().read_file(options.csv_path)
        if options.window is not None:
            cutoff = cutoff_date(today_in(options.zone), options.window)
            records = filter_recent(records, cutoff)
        summary = Aggregator().aggregate(records)
    except BillsError as e:
        logger.error(f"Unable to read costs: {e}")
        return 1

    ReportRenderer(show_records=options.show_records).emit(summary)
    return 0


def main():
    """Main entry point for the bills report."""
    try:
        status = run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        status = 1
    except Exception as e:
        logger.critical(f"Fatal error: {e}")
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    main()
