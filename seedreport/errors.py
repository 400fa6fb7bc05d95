"""Exception hierarchy for report generation.

Every failure aborts the whole report; there is no partial-success mode.
I/O errors from the filesystem are not wrapped and propagate as ``OSError``.
"""

from __future__ import annotations

from typing import Optional


class SeedReportError(Exception):
    """Base class for all seedreport failures."""


class UnknownFunctionError(SeedReportError, LookupError):
    """A canonical function ID was queried that was never inserted."""

    def __init__(self, function_id: str) -> None:
        self.function_id = function_id
        super().__init__(f"Unknown function ID: {function_id!r}")


class MissingFieldError(SeedReportError):
    """An expected column is absent from a tabular input header."""

    def __init__(self, field: str, source: str = "<input>") -> None:
        self.field = field
        self.source = source
        super().__init__(f"Field '{field}' not found in {source}")


class MalformedValueError(SeedReportError, ValueError):
    """A record holds a value that cannot be used, such as a non-numeric count.

    Args:
        message: Description of the problem.
        source: Name of the file or stream the record came from.
        line_number: 1-based line number of the record, when known.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        self.source = source
        self.line_number = line_number
        location = ""
        if source is not None:
            location = f"{source}"
            if line_number is not None:
                location += f", line {line_number}"
            location += ": "
        super().__init__(f"{location}{message}")


class SubsystemFormatError(MalformedValueError):
    """A subsystem spreadsheet could not be parsed."""

    def __init__(
        self, subsystem_id: str, message: str, line_number: Optional[int] = None
    ) -> None:
        self.subsystem_id = subsystem_id
        super().__init__(
            message, source=f"subsystem {subsystem_id}", line_number=line_number
        )
