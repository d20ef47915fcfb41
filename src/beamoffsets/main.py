"""
Application Entry
=================
Parses the command line, sets up logging and runs one command against the
host session.

With no arguments this is the load-time behaviour of the script: fix every
beam element once.
"""
import argparse
import logging
from typing import Optional, Sequence

from beamoffsets.commands import analyze_beams, fix_beam, run_on_load
from beamoffsets.config import FixOptions
from beamoffsets.errors import HostUnavailableError
from beamoffsets.host.base import ElementHost
from beamoffsets.host.hypermesh import session_host
from beamoffsets.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beamoffsets",
        description="Fix beam element offsets after Abaqus to OptiStruct conversion",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--analyze", action="store_true", help="Report OFFT and offsets without changing anything")
    action.add_argument("--element", type=int, metavar="ID", help="Fix a single element by id")
    parser.add_argument("--quiet", action="store_true", help="Suppress console lines")
    parser.add_argument("--debug", action="store_true", help="Print per-element errors")
    parser.add_argument("--no-round", dest="round_offsets", action="store_false",
                        help="Keep sub-millimetre offsets (fewer shared offset groups)")
    parser.add_argument("--report-csv", metavar="PATH", help="With --analyze: write the table to a CSV file")
    parser.add_argument("--log-file", metavar="PATH", help="Also write the log to a file")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.report_csv and not args.analyze:
        parser.error("--report-csv requires --analyze")

    # Environment flags are merged here so bad values are usage errors too
    try:
        env = FixOptions.from_env()
    except ValueError as e:
        parser.error(str(e))
    args.options = FixOptions(
        debug=args.debug or env.debug,
        quiet=args.quiet or env.quiet,
        round_offsets=args.round_offsets and env.round_offsets,
    )
    return args


def main(argv: Optional[Sequence[str]] = None, host: Optional[ElementHost] = None) -> int:
    args = parse_args(argv)
    options: FixOptions = args.options
    setup_logging(level=logging.DEBUG if options.debug else logging.WARNING, log_file=args.log_file)

    try:
        host = session_host(host)
    except HostUnavailableError as e:
        logger.error(str(e))
        return 1

    if args.analyze:
        report = analyze_beams(host, options)
        if args.report_csv:
            report.write_csv(args.report_csv)
    elif args.element is not None:
        fix_beam(args.element, host, options)
    else:
        run_on_load(host, options)
    return 0
