"""Subsystem spreadsheets from a CoreSEED data directory.

Each subsystem lives in ``<core>/Subsystems/<ID>/``. The ``spreadsheet`` file
holds three sections separated by ``//`` lines:

1. one ``abbreviation<TAB>role`` line per column,
2. subset definitions (not used here),
3. one ``genome<TAB>variant<TAB>cell...`` line per row, where each cell is a
   comma-separated list of features and an empty string means an empty cell.

A subsystem is public only when its ``EXCHANGABLE`` file exists and starts
with ``1``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from seedreport.config import DEFAULT_CONFIG, ReportConfig
from seedreport.errors import SubsystemFormatError
from seedreport.logging import get_logger

logger = get_logger(__name__)

SECTION_MARKER = "//"


@dataclass(frozen=True, slots=True)
class CellData:
    """Features assigned to one role in one row."""

    features: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not self.features

    @classmethod
    def parse(cls, text: str) -> "CellData":
        return cls(tuple(f.strip() for f in text.split(",") if f.strip()))


@dataclass(slots=True)
class RowData:
    """One genome's row in a subsystem spreadsheet."""

    genome_id: str
    variant_code: str
    cells: List[CellData] = field(default_factory=list)

    def is_active(self) -> bool:
        """Return True if the row's variant counts as biologically valid.

        Variant codes ``0``, ``-1`` and other negative or empty codes mark
        inactive rows. A leading ``*`` (curator mark) is ignored.
        """
        code = self.variant_code.strip().lstrip("*")
        return bool(code) and code != "0" and not code.startswith("-")

    def get_cell(self, index: int) -> CellData:
        """Return the cell in column `index`; missing trailing cells are empty."""
        if index < len(self.cells):
            return self.cells[index]
        return CellData()


@dataclass(slots=True)
class SubsystemData:
    """A loaded subsystem: role columns plus spreadsheet rows."""

    id: str
    name: str
    roles: List[str] = field(default_factory=list)
    rows: List[RowData] = field(default_factory=list)

    @property
    def width(self) -> int:
        """Number of role columns."""
        return len(self.roles)

    def get_role(self, index: int) -> str:
        return self.roles[index]


def subsystem_name(subsystem_id: str) -> str:
    """Return the display name for a subsystem directory ID."""
    return subsystem_id.replace("_", " ")


def subsystem_root(core_dir: Union[str, Path], config: ReportConfig = DEFAULT_CONFIG) -> Path:
    return Path(core_dir) / config.subsystems_dir


def list_subsystem_ids(
    core_dir: Union[str, Path], config: ReportConfig = DEFAULT_CONFIG
) -> List[str]:
    """Return the sorted IDs of all subsystem directories holding a spreadsheet.

    Raises:
        FileNotFoundError: If the subsystem directory does not exist.
    """
    root = subsystem_root(core_dir, config)
    if not root.is_dir():
        raise FileNotFoundError(f"Subsystem directory not found: {root}")
    return sorted(
        p.name
        for p in root.iterdir()
        if p.is_dir() and (p / config.spreadsheet_file).is_file()
    )


def is_private(
    core_dir: Union[str, Path],
    subsystem_id: str,
    config: ReportConfig = DEFAULT_CONFIG,
) -> bool:
    """Return True unless the subsystem is marked exchangeable."""
    marker = subsystem_root(core_dir, config) / subsystem_id / config.exchangable_file
    if not marker.is_file():
        return True
    tokens = marker.read_text(encoding="utf-8").split()
    return not tokens or tokens[0] != "1"


def parse_spreadsheet(subsystem_id: str, text: str) -> SubsystemData:
    """Parse spreadsheet text into a `SubsystemData`.

    Raises:
        SubsystemFormatError: If a role line or row line is malformed, or a
            row has more cells than there are roles.
    """
    roles: List[str] = []
    rows: List[RowData] = []
    section = 0
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip("\r\n")
        if line.strip() == SECTION_MARKER:
            section += 1
            continue
        if not line.strip():
            continue
        parts = line.split("\t")
        if section == 0:
            if len(parts) < 2 or not parts[1].strip():
                raise SubsystemFormatError(
                    subsystem_id, "role line needs an abbreviation and a role", line_number
                )
            roles.append(parts[1].strip())
        elif section == 2:
            if len(parts) < 2:
                raise SubsystemFormatError(
                    subsystem_id, "row line needs a genome and a variant code", line_number
                )
            cell_texts = parts[2:]
            while len(cell_texts) > len(roles) and not cell_texts[-1].strip():
                cell_texts.pop()
            if len(cell_texts) > len(roles):
                raise SubsystemFormatError(
                    subsystem_id,
                    f"row has {len(cell_texts)} cells but only {len(roles)} roles",
                    line_number,
                )
            rows.append(
                RowData(
                    genome_id=parts[0].strip(),
                    variant_code=parts[1].strip(),
                    cells=[CellData.parse(c) for c in cell_texts],
                )
            )
        elif section > 2:
            raise SubsystemFormatError(
                subsystem_id, "unexpected data after the row section", line_number
            )
    return SubsystemData(
        id=subsystem_id, name=subsystem_name(subsystem_id), roles=roles, rows=rows
    )


def load_subsystem(
    core_dir: Union[str, Path],
    subsystem_id: str,
    config: ReportConfig = DEFAULT_CONFIG,
) -> SubsystemData:
    """Read and parse one subsystem spreadsheet.

    I/O errors propagate unchanged.
    """
    path = subsystem_root(core_dir, config) / subsystem_id / config.spreadsheet_file
    logger.debug("Loading subsystem %s from %s", subsystem_id, path)
    return parse_spreadsheet(subsystem_id, path.read_text(encoding="utf-8"))
