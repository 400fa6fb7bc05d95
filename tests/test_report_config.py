"""Tests for configuration loading."""

from pathlib import Path

import pytest

from seedreport.config import DEFAULT_CONFIG, ReportConfig


def test_defaults():
    assert DEFAULT_CONFIG.mapping_file == "protMapping.tbl"
    assert DEFAULT_CONFIG.subsystems_dir == "Subsystems"
    assert DEFAULT_CONFIG.exchangable_file == "EXCHANGABLE"
    assert DEFAULT_CONFIG.workers == 1


def test_from_yaml_overrides(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("mapping_file: map.tsv\ncount_field: n\nworkers: 4\n", encoding="utf-8")
    config = ReportConfig.from_yaml(path)
    assert config.mapping_file == "map.tsv"
    assert config.count_field == "n"
    assert config.workers == 4
    assert config.good_field == "good"


def test_from_yaml_empty_file(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert ReportConfig.from_yaml(path) == ReportConfig()


def test_from_yaml_rejects_non_mapping(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a mapping"):
        ReportConfig.from_yaml(path)


def test_from_yaml_syntax_error_is_value_error(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("mapping_file: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid YAML in .*config.yaml"):
        ReportConfig.from_yaml(path)


def test_unknown_keys_rejected():
    with pytest.raises(ValueError, match="Unknown configuration keys: colour"):
        ReportConfig.from_dict({"colour": "blue"})


@pytest.mark.parametrize(
    "overrides",
    [
        {"workers": 0},
        {"workers": True},
        {"workers": "2"},
        {"mapping_file": ""},
        {"count_field": 3},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValueError):
        ReportConfig.from_dict(overrides)
