"""Tests for the pure mapping-order functions."""

from seedreport.functions import FunctionMap
from seedreport.reports.function_mapping import MappingRecord
from seedreport.reports.ordering import mapping_sort_key, sort_patric_ids


def _setup():
    fmap = FunctionMap()
    core_a = fmap.find_or_insert("Alpha core").id
    core_z = fmap.find_or_insert("Zeta core").id
    pids = [fmap.find_or_insert(t).id for t in ("p one", "p two", "p three")]
    records = {
        pids[0]: MappingRecord(pids[0], core_z, 1),
        pids[1]: MappingRecord(pids[1], core_a, 1),
        pids[2]: MappingRecord(pids[2], core_z, 1),
    }
    counts = {core_a: 3, core_z: 3}
    return fmap, records, counts, pids


def test_sort_key_uses_explicit_state():
    fmap, records, counts, pids = _setup()
    assert mapping_sort_key(pids[1], records, counts, fmap) == (-3, "Alpha core", pids[1])


def test_missing_core_count_sorts_as_zero():
    fmap, records, counts, pids = _setup()
    assert mapping_sort_key(pids[0], records, {}, fmap)[0] == 0


def test_sort_patric_ids_orders_and_does_not_mutate():
    fmap, records, counts, pids = _setup()
    before_records = dict(records)
    before_counts = dict(counts)
    ordered = sort_patric_ids(records, counts, fmap)
    assert ordered[0] == pids[1]
    assert ordered[1:] == sorted([pids[0], pids[2]])
    assert records == before_records
    assert counts == before_counts


def test_higher_counts_first():
    fmap, records, counts, pids = _setup()
    counts = dict(counts)
    counts[records[pids[0]].core_id] = 10
    ordered = sort_patric_ids(records, counts, fmap)
    assert ordered[-1] == pids[1]
