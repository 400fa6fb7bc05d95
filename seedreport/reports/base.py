"""Report containers shared by all aggregators.

A `Report` is the hand-off point between aggregation and rendering: it holds
the ordered rows plus the column specifications a renderer needs, and knows
nothing about output formats.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Protocol, Sequence

import pandas as pd

ColumnKind = Literal["text", "num"]


@dataclass(frozen=True, slots=True)
class ColSpec:
    """Column label plus formatting hint.

    Args:
        name: Column label.
        kind: ``"text"`` for plain text, ``"num"`` for right-aligned numbers.
    """

    name: str
    kind: ColumnKind = "text"

    def __post_init__(self) -> None:
        if self.kind not in ("text", "num"):
            raise ValueError(f"Invalid column kind '{self.kind}'. Valid kinds: text, num")


class ReportRow(Protocol):
    """Anything that can lay itself out as one table row."""

    def values(self) -> List[Any]: ...


@dataclass
class Report:
    """Ordered report rows with their column layout."""

    title: str
    columns: List[ColSpec]
    rows: Sequence[ReportRow] = field(default_factory=list)
    legend: str = ""

    def table_rows(self) -> List[List[Any]]:
        """Return each row as a list of values in column order."""
        width = len(self.columns)
        table = []
        for row in self.rows:
            values = row.values()
            if len(values) != width:
                raise ValueError(
                    f"Row has {len(values)} values but report has {width} columns"
                )
            table.append(values)
        return table

    def to_dataframe(self) -> pd.DataFrame:
        """Return the rows as a DataFrame with one column per `ColSpec`."""
        return pd.DataFrame(self.table_rows(), columns=[c.name for c in self.columns])

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        names = [c.name for c in self.columns]
        return {
            "title": self.title,
            "legend": self.legend,
            "columns": [{"name": c.name, "kind": c.kind} for c in self.columns],
            "rows": [dict(zip(names, values)) for values in self.table_rows()],
        }

    def __len__(self) -> int:
        return len(self.rows)
