"""Ordering of function-mapping report rows.

Rows are ordered by the cumulative count of their core function (highest
first), then by the core function's display text, then by the PATRIC
function ID. PATRIC IDs are unique map keys, so the order is total.

All state is passed in explicitly; nothing here reads aggregator attributes.
"""

from __future__ import annotations

from typing import List, Mapping, Protocol, Tuple

from seedreport.functions import FunctionMap


class HasCoreId(Protocol):
    """Any record that names the core function it maps to."""

    core_id: str


def mapping_sort_key(
    patric_id: str,
    records: Mapping[str, HasCoreId],
    core_counts: Mapping[str, int],
    function_map: FunctionMap,
) -> Tuple[int, str, str]:
    """Return the sort key for one PATRIC function ID.

    Args:
        patric_id: Key into `records`.
        records: PATRIC function ID -> record naming its core function.
        core_counts: Core function ID -> cumulative occurrence count.
        function_map: Map used to look up core display text.

    Returns:
        ``(-count, core_display_text, patric_id)``.
    """
    core_id = records[patric_id].core_id
    return (-core_counts.get(core_id, 0), function_map.get_name(core_id), patric_id)


def sort_patric_ids(
    records: Mapping[str, HasCoreId],
    core_counts: Mapping[str, int],
    function_map: FunctionMap,
) -> List[str]:
    """Return the PATRIC function IDs of `records` in report order."""
    return sorted(
        records,
        key=lambda pid: mapping_sort_key(pid, records, core_counts, function_map),
    )
