"""Aggregators that turn annotation data into ordered report rows."""

from seedreport.reports.base import ColSpec, Report
from seedreport.reports.function_mapping import (
    FunctionMappingReport,
    MappingRecord,
    MappingRow,
)
from seedreport.reports.ordering import mapping_sort_key, sort_patric_ids
from seedreport.reports.subsystem_roles import (
    RoleRow,
    SubsystemRoleReport,
    active_role_texts,
)

__all__ = [
    "ColSpec",
    "Report",
    "FunctionMappingReport",
    "MappingRecord",
    "MappingRow",
    "RoleRow",
    "SubsystemRoleReport",
    "active_role_texts",
    "mapping_sort_key",
    "sort_patric_ids",
]
