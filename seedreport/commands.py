"""Report commands and their registry.

Each command is a small dataclass that builds one report from a CoreSEED
data directory. Commands register themselves under a name with
`register_command`, and the CLI dispatches through `COMMAND_REGISTRY`.
`ReportCommand.execute()` wraps `run()` with timing and logging and re-raises
failures.
"""

from __future__ import annotations

import argparse
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Dict, Optional, Type

from seedreport.config import ReportConfig
from seedreport.functions import FunctionMap
from seedreport.logging import get_logger, run_logger
from seedreport.reports.base import Report
from seedreport.reports.function_mapping import FunctionMappingReport
from seedreport.reports.subsystem_roles import SubsystemRoleReport

logger = get_logger(__name__)

# Registry for report command classes
COMMAND_REGISTRY: Dict[str, Type["ReportCommand"]] = {}


def register_command(name: str):
    """Return a decorator that registers a `ReportCommand` subclass.

    Args:
        name: Command name used on the command line.

    Returns:
        A class decorator that adds the class to `COMMAND_REGISTRY`.
    """

    def decorator(cls: Type["ReportCommand"]) -> Type["ReportCommand"]:
        if name in COMMAND_REGISTRY:
            raise ValueError(f"Command '{name}' is already registered")
        cls.command_name = name
        COMMAND_REGISTRY[name] = cls
        return cls

    return decorator


def get_command(name: str) -> Type["ReportCommand"]:
    """Return the command class registered under `name`.

    Raises:
        ValueError: If no command has that name.
    """
    try:
        return COMMAND_REGISTRY[name]
    except KeyError:
        valid = ", ".join(sorted(COMMAND_REGISTRY))
        raise ValueError(f"Invalid command '{name}'. Valid commands are: {valid}") from None


@dataclass
class ReportCommand(ABC):
    """Base class for all report commands.

    Attributes:
        core_dir: CoreSEED data directory.
        config: File and column layout.
        function_map: Identity map to use; a fresh one per run when None.
        log: Logger passed to the aggregator; the command's run logger
            (`seedreport.run.<command>`) when None.
    """

    command_name: ClassVar[str] = ""
    help: ClassVar[str] = ""

    core_dir: Path
    config: ReportConfig = field(default_factory=ReportConfig)
    function_map: Optional[FunctionMap] = None
    log: Optional[logging.Logger] = None

    def execute(self) -> Report:
        """Run the command with timing and logging.

        Raises:
            Exception: Re-raises any exception raised by `run()` after logging
                duration and context.
        """
        name = self.command_name or self.__class__.__name__
        logger.info(f"Starting command: {name} on {self.core_dir}")
        start_time = time.time()
        try:
            report = self.run()
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"Failed command: {name} after {duration:.3f} seconds - "
                f"{type(e).__name__}: {e}"
            )
            raise
        duration = time.time() - start_time
        logger.info(
            f"Completed command: {name} in {duration:.3f} seconds ({len(report)} rows)"
        )
        return report

    @property
    def run_log(self) -> logging.Logger:
        """Logger handed to the aggregator during `run()`."""
        if self.log is not None:
            return self.log
        return run_logger(self.command_name or self.__class__.__name__)

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add command-specific options to a subcommand parser."""

    @classmethod
    def from_args(
        cls, args: argparse.Namespace, config: ReportConfig
    ) -> "ReportCommand":
        """Build the command from parsed command-line arguments."""
        return cls(core_dir=args.core_dir, config=config)

    @abstractmethod
    def run(self) -> Report:
        """Build the report. Called by `execute()`."""
        pass


@register_command("show-map")
@dataclass
class ShowMapCommand(ReportCommand):
    """PATRIC functions that map onto a different CoreSEED function."""

    help: ClassVar[str] = "List PATRIC functions mapped to different CoreSEED functions"

    def run(self) -> Report:
        aggregator = FunctionMappingReport(self.function_map, self.run_log)
        aggregator.load_core_dir(self.core_dir, self.config)
        return aggregator.report()


@register_command("subsystem-roles")
@dataclass
class SubsystemRolesCommand(ReportCommand):
    """Roles in active variants of public subsystems.

    Attributes:
        workers: Spreadsheet reader threads; ``config.workers`` when None.
    """

    help: ClassVar[str] = "List roles with the public subsystems that use them"

    workers: Optional[int] = None

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--workers",
            "-w",
            type=int,
            default=None,
            help="Threads used to read subsystem spreadsheets (default: from config)",
        )

    @classmethod
    def from_args(
        cls, args: argparse.Namespace, config: ReportConfig
    ) -> "ReportCommand":
        return cls(core_dir=args.core_dir, config=config, workers=args.workers)

    def run(self) -> Report:
        aggregator = SubsystemRoleReport(self.function_map, self.run_log)
        aggregator.load_directory(self.core_dir, self.config, workers=self.workers)
        return aggregator.report()
