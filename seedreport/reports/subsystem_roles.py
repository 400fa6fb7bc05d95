"""Subsystem-role report: which public subsystems use each role in an active variant.

A role counts for a subsystem when at least one active row has a non-empty
cell in the role's column. Each subsystem is counted at most once per role.
Private subsystems are skipped entirely.

Role discovery for one subsystem (`active_role_texts`) reads only the
subsystem itself. Canonicalizing roles and merging them into the aggregate
happens in `SubsystemRoleReport.add_subsystem`, one subsystem at a time, so a
threaded load gives the same result as a serial one.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Set, Tuple, Union

from seedreport.config import DEFAULT_CONFIG, ReportConfig
from seedreport.functions import FunctionMap
from seedreport.logging import get_logger
from seedreport.reports.base import ColSpec, Report
from seedreport.subsystems import (
    SubsystemData,
    is_private,
    list_subsystem_ids,
    load_subsystem,
)

COLUMNS = [
    ColSpec("role"),
    ColSpec("subsystems", "num"),
    ColSpec("subsystem_names"),
]

LEGEND = (
    "The count shows the number of public subsystems in which the role "
    "occurs in an active variant."
)

SUBSYSTEM_SEPARATOR = "; "


@dataclass(frozen=True, slots=True)
class RoleRow:
    """One output row of the subsystem-role report."""

    role: str
    role_id: str
    subsystems: Tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.subsystems)

    def values(self) -> List[Any]:
        return [self.role, self.count, SUBSYSTEM_SEPARATOR.join(self.subsystems)]


def active_role_texts(subsystem: SubsystemData) -> List[str]:
    """Return the role text of every column filled in some active row.

    Columns are returned in index order, each at most once.
    """
    columns: Set[int] = set()
    for row in subsystem.rows:
        if not row.is_active():
            continue
        for i in range(subsystem.width):
            if not row.get_cell(i).is_empty():
                columns.add(i)
    return [subsystem.get_role(i) for i in sorted(columns)]


class SubsystemRoleReport:
    """Aggregate role -> subsystem-name sets over many subsystems.

    Args:
        function_map: Identity map to canonicalize role text. A fresh map is
            created when omitted.
        logger: Logger for progress messages; defaults to this module's logger.
    """

    def __init__(
        self,
        function_map: Optional[FunctionMap] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.function_map = function_map if function_map is not None else FunctionMap()
        self.logger = logger if logger is not None else get_logger(__name__)
        self._role_subsystems: Dict[str, Set[str]] = {}
        self.subsystems_processed = 0
        self.subsystems_skipped = 0

    @property
    def role_subsystems(self) -> Mapping[str, FrozenSet[str]]:
        """Read-only snapshot of role ID -> names of subsystems using the role."""
        return MappingProxyType(
            {role_id: frozenset(names) for role_id, names in self._role_subsystems.items()}
        )

    def add_subsystem(self, subsystem: SubsystemData, private: bool = False) -> Set[str]:
        """Merge one subsystem's active roles into the aggregate.

        Args:
            subsystem: Loaded subsystem.
            private: True if the subsystem is private; it then contributes nothing.

        Returns:
            The role IDs found active in this subsystem.
        """
        if private:
            self.subsystems_skipped += 1
            self.logger.debug("Skipping private subsystem %s.", subsystem.name)
            return set()
        found = {
            self.function_map.find_or_insert(text).id
            for text in active_role_texts(subsystem)
        }
        for role_id in sorted(found):
            self._role_subsystems.setdefault(role_id, set()).add(subsystem.name)
        self.subsystems_processed += 1
        self.logger.info("%d roles active in %s.", len(found), subsystem.name)
        return found

    def load_directory(
        self,
        core_dir: Union[str, Path],
        config: ReportConfig = DEFAULT_CONFIG,
        workers: Optional[int] = None,
    ) -> int:
        """Load and merge every public subsystem under a CoreSEED directory.

        Spreadsheets may be read by a thread pool, but they are merged in
        sorted subsystem-ID order.

        Args:
            core_dir: CoreSEED data directory.
            config: File layout.
            workers: Reader threads; defaults to ``config.workers``.

        Returns:
            Number of public subsystems merged.

        Raises:
            FileNotFoundError: If the subsystem directory is missing.
            SubsystemFormatError: If a spreadsheet cannot be parsed.
        """
        workers = workers if workers is not None else config.workers
        if workers < 1:
            raise ValueError(f"workers must be a positive integer: {workers!r}")
        subsystem_ids = list_subsystem_ids(core_dir, config)
        self.logger.info("%d subsystem directories found.", len(subsystem_ids))
        public_ids = []
        for subsystem_id in subsystem_ids:
            if is_private(core_dir, subsystem_id, config):
                self.subsystems_skipped += 1
                self.logger.debug("Skipping private subsystem %s.", subsystem_id)
            else:
                public_ids.append(subsystem_id)

        def _load(subsystem_id: str) -> SubsystemData:
            return load_subsystem(core_dir, subsystem_id, config)

        if workers > 1 and len(public_ids) > 1:
            self.logger.debug("Reading %d subsystems with %d threads.", len(public_ids), workers)
            with ThreadPoolExecutor(max_workers=workers) as executor:
                for subsystem in executor.map(_load, public_ids):
                    self.add_subsystem(subsystem)
        else:
            for subsystem_id in public_ids:
                self.add_subsystem(_load(subsystem_id))

        self.logger.info(
            "%d distinct roles found in active variants of %d public subsystems.",
            len(self._role_subsystems),
            len(public_ids),
        )
        return len(public_ids)

    def rows(self) -> List[RoleRow]:
        """Return one row per role, ordered by role text then role ID."""
        rows = [
            RoleRow(
                role=self.function_map.get_name(role_id),
                role_id=role_id,
                subsystems=tuple(sorted(names)),
            )
            for role_id, names in self._role_subsystems.items()
        ]
        rows.sort(key=lambda r: (r.role, r.role_id))
        return rows

    def report(self) -> Report:
        return Report(title="Roles in Subsystems", columns=COLUMNS, rows=self.rows(), legend=LEGEND)
