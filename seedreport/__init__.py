"""seedreport: summary reports over CoreSEED annotation data.

seedreport canonicalizes free-text function and role descriptions and builds
two reports from a CoreSEED data directory.

Primary API:
    FunctionMap - Canonical identity map for function/role text
    FunctionMappingReport - PATRIC -> CoreSEED function mapping report
    SubsystemRoleReport - Role -> subsystem report over public subsystems
    render() - Format a Report as text, TSV, CSV or JSON

Example:
    from seedreport import FunctionMappingReport, render

    mapping = FunctionMappingReport()
    mapping.add_all([
        ("funcA", "funcB", 10, True),
        ("funcC", "funcB", 3, True),
    ])
    print(render(mapping.report()))
"""

from __future__ import annotations

from seedreport import cli, logging
from seedreport._version import __version__
from seedreport.commands import COMMAND_REGISTRY, ReportCommand, register_command
from seedreport.config import ReportConfig
from seedreport.errors import (
    MalformedValueError,
    MissingFieldError,
    SeedReportError,
    SubsystemFormatError,
    UnknownFunctionError,
)
from seedreport.functions import CanonicalFunction, FunctionMap
from seedreport.io.tabbed import TabbedLineReader
from seedreport.render import render
from seedreport.reports import (
    ColSpec,
    FunctionMappingReport,
    MappingRow,
    Report,
    RoleRow,
    SubsystemRoleReport,
)
from seedreport.subsystems import SubsystemData, load_subsystem

__all__ = [
    # Version
    "__version__",
    # Identity
    "CanonicalFunction",
    "FunctionMap",
    # Reports
    "FunctionMappingReport",
    "SubsystemRoleReport",
    "Report",
    "ColSpec",
    "MappingRow",
    "RoleRow",
    "render",
    # Inputs
    "TabbedLineReader",
    "SubsystemData",
    "load_subsystem",
    "ReportConfig",
    # Commands
    "COMMAND_REGISTRY",
    "ReportCommand",
    "register_command",
    # Errors
    "SeedReportError",
    "UnknownFunctionError",
    "MissingFieldError",
    "MalformedValueError",
    "SubsystemFormatError",
    # Utilities
    "cli",
    "logging",
]
