"""Configuration classes for seedreport components."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml


@dataclass
class ReportConfig:
    """File names and column names used to locate report inputs.

    Defaults match the layout of a CoreSEED data directory. Any field can be
    overridden from a YAML mapping with the same keys:

        ```yaml
        mapping_file: protMapping.tbl
        count_field: count
        workers: 4
        ```
    """

    # Function mapping table, relative to the core directory
    mapping_file: str = "protMapping.tbl"

    # Column names in the mapping table
    core_function_field: str = "core_function"
    patric_function_field: str = "patric_function"
    count_field: str = "count"
    good_field: str = "good"

    # Subsystem layout, relative to the core directory
    subsystems_dir: str = "Subsystems"
    spreadsheet_file: str = "spreadsheet"
    exchangable_file: str = "EXCHANGABLE"

    # Threads used to read subsystem spreadsheets
    workers: int = 1

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "workers":
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    raise ValueError(f"workers must be a positive integer: {value!r}")
            elif not isinstance(value, str) or not value.strip():
                raise ValueError(f"{f.name} must be a non-empty string: {value!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportConfig":
        """Build a config from a mapping of overrides.

        Raises:
            ValueError: If the mapping holds keys that are not config fields.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if str(k) not in known)
        if unknown:
            raise ValueError(
                f"Unknown configuration keys: {', '.join(unknown)}. "
                f"Valid keys are: {', '.join(sorted(known))}"
            )
        return cls(**{str(k): v for k, v in data.items()})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ReportConfig":
        """Load overrides from a YAML file.

        An empty file yields the defaults.

        Raises:
            ValueError: If the file is not valid YAML, is not a mapping, or
                holds unknown keys.
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a mapping at top-level.")
        return cls.from_dict(data)


# Default configuration instance
DEFAULT_CONFIG = ReportConfig()
