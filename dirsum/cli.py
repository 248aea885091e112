"""CLI with subcommands: sum, copy."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from .core.config import (
    RunConfig,
    Operation,
    DEFAULT_WORKERS,
    DEFAULT_ALGORITHM,
    MAX_WORKERS,
)
from . import __version__
from .core.errors import DirsumError
from .core.protocols import ProgressReporter
from .logging.rich_logger import RichProgressReporter, QuietProgressReporter


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="dirsum",
        description="Hash or copy-and-hash the files of a directory in parallel.",
    )

    # Global options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    # Options shared by both commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-w", "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Number of parallel workers (default: {DEFAULT_WORKERS}, max: {MAX_WORKERS})",
    )
    common.add_argument(
        "--algorithm",
        type=str,
        default=DEFAULT_ALGORITHM,
        help=f"Digest algorithm (default: {DEFAULT_ALGORITHM})",
    )
    common.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on stderr",
    )
    common.add_argument(
        "--stats",
        action="store_true",
        help="Print a summary table when done",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ============ SUM command ============
    sum_parser = subparsers.add_parser(
        "sum",
        parents=[common],
        help="Print the digest of every file in a directory",
    )
    sum_parser.add_argument(
        "directory",
        type=Path,
        help="Directory whose top-level files are hashed",
    )

    # ============ COPY command ============
    copy_parser = subparsers.add_parser(
        "copy",
        parents=[common],
        help="Copy every file of a directory to an existing directory while hashing",
    )
    copy_parser.add_argument(
        "source",
        type=Path,
        help="Source directory",
    )
    copy_parser.add_argument(
        "dest",
        type=Path,
        help="Destination directory (must exist)",
    )

    return parser


# ============ Command Handlers ============

def build_config(args: argparse.Namespace) -> RunConfig:
    """Build the run configuration for a parsed command line."""
    if args.command == "copy":
        return RunConfig(
            source=args.source,
            destination=args.dest,
            operation=Operation.COPY,
            workers=args.workers,
            algorithm=args.algorithm,
        )
    return RunConfig(
        source=args.directory,
        operation=Operation.HASH,
        workers=args.workers,
        algorithm=args.algorithm,
    )


def cmd_run(args: argparse.Namespace, reporter: ProgressReporter, out: TextIO) -> int:
    """Handle the sum and copy commands."""
    from .services.runner import DirectoryRunner

    config = build_config(args)

    reporter.debug(f"NumCPU: {os.cpu_count()}")
    if config.was_clamped:
        reporter.warning(f"{config.workers} specified; max is {config.max_workers}")
    reporter.debug(f"Number of workers: {config.effective_workers}")

    if args.verbose:
        reporter.print_header(f"dirsum {__version__}")
        reporter.print_config({
            "Operation": config.operation.value,
            "Source": str(config.source),
            "Destination": str(config.destination) if config.destination else "-",
            "Algorithm": config.algorithm,
            "Workers": config.effective_workers,
        })

    runner = DirectoryRunner(config)
    runner.check_preconditions()
    names = runner.list_files()
    reporter.debug(f"Found {len(names)} files in {config.source}")

    if args.progress:
        reporter.start_phase(config.operation.value, total=len(names))
    try:
        for result in runner.process(names):
            out.write(result.format_line() + "\n")
            reporter.advance_phase()
    finally:
        reporter.end_phase()
    out.flush()

    if args.stats:
        reporter.print_stats(runner.stats)
    if args.verbose:
        verb = "copied" if config.operation == Operation.COPY else "hashed"
        reporter.success(f"{runner.stats.processed} files {verb}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Create reporter
    if getattr(args, "quiet", False):
        reporter = QuietProgressReporter()
    else:
        reporter = RichProgressReporter(verbose=getattr(args, "verbose", False))

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(threadName)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # No command specified - show help
    if not args.command:
        parser.print_help()
        return 0

    try:
        return cmd_run(args, reporter, sys.stdout)
    except KeyboardInterrupt:
        # Clean exit on Ctrl+C - no stack trace
        return 130
    except DirsumError as e:
        reporter.error(str(e))
        if getattr(args, "verbose", False):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
