"""Shared fixtures: small CoreSEED data directories built under ``tmp_path``."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

MAPPING_HEADER = "patric_function\tcore_function\tcount\tgood"

MAPPING_LINES = [
    "funcA\tfuncB\t10\t1",
    "funcB\tfuncB\t5\t1",
    "funcC\tfuncB\t3\t1",
    "funcD\tfuncE\t20\t0",
    "Hypothetical protein X\tEnzyme Y (EC 1.1.1.1)\t7\tTRUE",
]

Row = Tuple[str, str, Sequence[str]]


def write_subsystem(
    core_dir: Path,
    subsystem_id: str,
    roles: Sequence[str],
    rows: Sequence[Row],
    exchangable: Optional[str] = "1",
) -> Path:
    """Write a subsystem spreadsheet and, unless None, its EXCHANGABLE marker."""
    ss_dir = core_dir / "Subsystems" / subsystem_id
    ss_dir.mkdir(parents=True, exist_ok=True)
    lines: List[str] = [f"R{i + 1}\t{role}" for i, role in enumerate(roles)]
    lines.append("//")
    lines.append("all\tR1")
    lines.append("//")
    for genome, variant, cells in rows:
        lines.append("\t".join([genome, variant, *cells]))
    (ss_dir / "spreadsheet").write_text("\n".join(lines) + "\n", encoding="utf-8")
    if exchangable is not None:
        (ss_dir / "EXCHANGABLE").write_text(exchangable + "\n", encoding="utf-8")
    return ss_dir


@pytest.fixture
def subsystem_writer() -> Callable[..., Path]:
    return write_subsystem


@pytest.fixture
def core_dir(tmp_path: Path) -> Path:
    """CoreSEED directory with a mapping table and three subsystems.

    Public "Glycolysis_core" and "TCA_cycle" share Enolase; the pyruvate
    kinase cell of Glycolysis_core sits in an inactive row. "Secret_stuff"
    is private and "Scratch" has no spreadsheet.
    """
    core = tmp_path / "CoreSEED"
    core.mkdir()
    (core / "protMapping.tbl").write_text(
        "\n".join([MAPPING_HEADER, *MAPPING_LINES]) + "\n", encoding="utf-8"
    )
    write_subsystem(
        core,
        "Glycolysis_core",
        [
            "Phosphoglycerate kinase (EC 2.7.2.3)",
            "Enolase (EC 4.2.1.11)",
            "Pyruvate kinase (EC 2.7.1.40)",
        ],
        [
            ("83333.1", "1", ["peg.1", "peg.2", ""]),
            ("224308.1", "*1", ["peg.10", "", ""]),
            ("1280.1", "-1", ["", "", "peg.9"]),
        ],
    )
    write_subsystem(
        core,
        "TCA_cycle",
        ["enolase", "Citrate synthase (EC 2.3.3.1)"],
        [("83333.1", "2", ["peg.3", "peg.4,peg.5"])],
    )
    write_subsystem(
        core,
        "Secret_stuff",
        ["Secret role"],
        [("83333.1", "1", ["peg.1"])],
        exchangable=None,
    )
    (core / "Subsystems" / "Scratch").mkdir()
    return core
