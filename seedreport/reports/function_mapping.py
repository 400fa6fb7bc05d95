"""Function-mapping report: PATRIC functions that map onto a different core function.

The mapping table (``protMapping.tbl`` in the core directory) has one line per
PATRIC function with the columns ``patric_function``, ``core_function``,
``count`` (occurrences of the PATRIC function) and ``good`` (whether the
mapping is trusted). Only good mappings that actually change the function
are reported. Each row shows the cumulative count of its core function, so
PATRIC functions that collapse onto the same core function are grouped.

Duplicate PATRIC functions are resolved last-writer-wins: the later record
replaces the earlier one, but counts already added to the earlier core
function are kept.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from seedreport.config import DEFAULT_CONFIG, ReportConfig
from seedreport.errors import MalformedValueError
from seedreport.functions import FunctionMap
from seedreport.io.tabbed import TabbedLineReader
from seedreport.logging import get_logger
from seedreport.reports.base import ColSpec, Report
from seedreport.reports.ordering import sort_patric_ids

COLUMNS = [
    ColSpec("core_function"),
    ColSpec("patric_function"),
    ColSpec("patric_count", "num"),
]

LEGEND = (
    "Each PATRIC function is mapped to a single CoreSEED function. The count "
    "is the total number of PATRIC occurrences of all functions mapped to the "
    "CoreSEED function in the first column."
)


@dataclass(frozen=True, slots=True)
class MappingRecord:
    """A PATRIC function that maps onto a different core function."""

    patric_id: str
    core_id: str
    count: int


@dataclass(frozen=True, slots=True)
class MappingRow:
    """One output row of the function-mapping report.

    Attributes:
        core_function: Core function display text; renderers may turn it into
            a search link.
        patric_function: PATRIC function display text.
        count: Final cumulative count of the core function.
        core_id: Canonical ID of the core function.
        patric_id: Canonical ID of the PATRIC function.
    """

    core_function: str
    patric_function: str
    count: int
    core_id: str
    patric_id: str

    def values(self) -> List[Any]:
        return [self.core_function, self.patric_function, self.count]


def _check_count(count: Any) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise MalformedValueError(f"count must be an integer: {count!r}")
    if count < 0:
        raise MalformedValueError(f"count must be non-negative: {count!r}")
    return count


class FunctionMappingReport:
    """Accumulate PATRIC -> core function mappings and order them for output.

    Args:
        function_map: Identity map to canonicalize function text. A fresh map
            is created when omitted; pass one in to share IDs with another
            report in the same run.
        logger: Logger for progress messages; defaults to this module's logger.
    """

    def __init__(
        self,
        function_map: Optional[FunctionMap] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.function_map = function_map if function_map is not None else FunctionMap()
        self.logger = logger if logger is not None else get_logger(__name__)
        self._records: Dict[str, MappingRecord] = {}
        self._core_counts: Counter[str] = Counter()

    @property
    def records(self) -> Mapping[str, MappingRecord]:
        """Read-only view of PATRIC function ID -> mapping record."""
        return MappingProxyType(self._records)

    @property
    def core_counts(self) -> Mapping[str, int]:
        """Read-only view of core function ID -> cumulative count."""
        return MappingProxyType(self._core_counts)

    def add(self, patric_text: str, core_text: str, count: int, good: bool = True) -> bool:
        """Fold one mapping into the report.

        Args:
            patric_text: PATRIC function description.
            core_text: Core function description.
            count: Occurrences of the PATRIC function.
            good: Whether the mapping is trusted; untrusted mappings are ignored.

        Returns:
            True if the mapping was kept, False if it was skipped as untrusted
            or as a no-op.

        Raises:
            MalformedValueError: If `good` is not a bool or `count` is not a
                non-negative integer.
        """
        if not isinstance(good, bool):
            raise MalformedValueError(f"good must be True or False: {good!r}")
        if not good:
            return False
        count = _check_count(count)
        for label, text in (("PATRIC function", patric_text), ("core function", core_text)):
            if not isinstance(text, str):
                raise MalformedValueError(f"{label} must be a string: {text!r}")
        patric = self.function_map.find_or_insert(patric_text)
        core = self.function_map.find_or_insert(core_text)
        if patric.id == core.id:
            return False
        previous = self._records.get(patric.id)
        if previous is not None:
            self.logger.debug(
                "PATRIC function %s remapped from %s to %s; earlier count %d stays with %s",
                patric.id,
                previous.core_id,
                core.id,
                previous.count,
                previous.core_id,
            )
        self._records[patric.id] = MappingRecord(patric.id, core.id, count)
        self._core_counts[core.id] += count
        return True

    def add_all(self, records: Iterable[Sequence[Any]], source: str = "<records>") -> int:
        """Fold a sequence of ``(patric, core, count, good)`` tuples.

        Returns:
            Number of mappings kept.

        Raises:
            MalformedValueError: If a record has the wrong shape or a bad
                count; the message names the 1-based record number.
        """
        kept = 0
        for number, record in enumerate(records, start=1):
            if len(record) != 4:
                raise MalformedValueError(
                    f"expected 4 fields (patric, core, count, good), got {len(record)}",
                    source=source,
                    line_number=number,
                )
            try:
                kept += self.add(*record)
            except MalformedValueError as exc:
                raise MalformedValueError(
                    str(exc), source=source, line_number=number
                ) from exc
        return kept

    def load_file(
        self, path: Union[str, Path], config: ReportConfig = DEFAULT_CONFIG
    ) -> int:
        """Fold every line of a mapping table.

        Returns:
            Number of data lines read.

        Raises:
            MissingFieldError: If a required column is absent.
            MalformedValueError: If a good line has a missing column or a bad
                count.
        """
        self.logger.info("Processing mappings in %s.", path)
        lines = 0
        with TabbedLineReader(path) as reader:
            core_idx = reader.find_field(config.core_function_field)
            patric_idx = reader.find_field(config.patric_function_field)
            count_idx = reader.find_field(config.count_field)
            good_idx = reader.find_field(config.good_field)
            for line in reader:
                lines += 1
                if not line.get_flag(good_idx):
                    continue
                count = line.get_int(count_idx)
                if count < 0:
                    raise MalformedValueError(
                        f"count must be non-negative: {count}",
                        source=line.source,
                        line_number=line.line_number,
                    )
                self.add(line.get(patric_idx), line.get(core_idx), count, True)
        self.logger.info(
            "%d mappings found in %d input lines, targeting %d CoreSEED functions.",
            len(self._records),
            lines,
            len(self._core_counts),
        )
        return lines

    def load_core_dir(
        self, core_dir: Union[str, Path], config: ReportConfig = DEFAULT_CONFIG
    ) -> int:
        """Fold the mapping table of a CoreSEED data directory."""
        return self.load_file(Path(core_dir) / config.mapping_file, config)

    def sorted_patric_ids(self) -> List[str]:
        return sort_patric_ids(self._records, self._core_counts, self.function_map)

    def rows(self) -> List[MappingRow]:
        """Return the report rows in output order."""
        self.logger.info("Sorting output.")
        rows = []
        for patric_id in self.sorted_patric_ids():
            record = self._records[patric_id]
            rows.append(
                MappingRow(
                    core_function=self.function_map.get_name(record.core_id),
                    patric_function=self.function_map.get_name(patric_id),
                    count=self._core_counts[record.core_id],
                    core_id=record.core_id,
                    patric_id=patric_id,
                )
            )
        return rows

    def report(self) -> Report:
        return Report(title="Function Mapping", columns=COLUMNS, rows=self.rows(), legend=LEGEND)
