"""Command-line interface for seedreport."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from seedreport.commands import COMMAND_REGISTRY, get_command
from seedreport.config import ReportConfig
from seedreport.errors import SeedReportError
from seedreport.logging import get_logger, set_global_log_level
from seedreport.render import FORMATS, render

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seedreport",
        description="Summarize function mappings and subsystem roles in a CoreSEED data directory.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    names = sorted(COMMAND_REGISTRY)
    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{" + ",".join(names) + "}",
        help="Available commands",
    )

    for name in names:
        command_cls = COMMAND_REGISTRY[name]
        sub = subparsers.add_parser(name, help=command_cls.help)
        sub.add_argument("core_dir", type=Path, help="CoreSEED data directory")
        sub.add_argument(
            "--config",
            "-c",
            type=Path,
            default=None,
            help="YAML file overriding file and column names",
        )
        sub.add_argument(
            "--format",
            "-f",
            choices=FORMATS,
            default="text",
            help="Output format (default: text)",
        )
        sub.add_argument(
            "--output",
            "-o",
            type=Path,
            default=None,
            help="Write the report to this file instead of stdout",
        )
        command_cls.add_arguments(sub)

    return parser


def _generate(args: argparse.Namespace) -> str:
    config = ReportConfig.from_yaml(args.config) if args.config else ReportConfig()
    command = get_command(args.command).from_args(args, config)
    report = command.execute()
    return render(report, args.format)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``seedreport`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = _build_parser()

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        output = _generate(args)
        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output, encoding="utf-8")
            logger.info(f"Report written to {args.output}")
        else:
            sys.stdout.write(output)
    except (SeedReportError, OSError, ValueError) as e:
        logger.error(f"Failed to generate report: {type(e).__name__}: {e}")
        print(f"❌ ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
