"""Tests for canonical function identity."""

import pytest

from seedreport.errors import UnknownFunctionError
from seedreport.functions import (
    BLANK_ID,
    CanonicalFunction,
    FunctionMap,
    canonical_text,
    clean_function,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Enolase (EC 4.2.1.11)", "Enolase"),
        ("  Enolase   ", "Enolase"),
        ("Enolase # fragment", "Enolase"),
        ("Enolase ! truncated", "Enolase"),
        ("Sodium transporter (TC 2.A.1.1) subunit A", "Sodium transporter subunit A"),
        ("Kinase (EC 2.7.1.1) / Phosphatase (EC 3.1.3.1)", "Kinase / Phosphatase"),
    ],
)
def test_clean_function(raw, expected):
    assert clean_function(raw) == expected


def test_canonical_text_is_case_insensitive():
    assert canonical_text("ENOLASE") == canonical_text("enolase") == "enolase"


def test_find_or_insert_is_idempotent():
    fmap = FunctionMap()
    first = fmap.find_or_insert("Phosphoglycerate kinase (EC 2.7.2.3)")
    second = fmap.find_or_insert("Phosphoglycerate kinase (EC 2.7.2.3)")
    assert first == second
    assert first.id == "PhosKina"
    assert len(fmap) == 1


def test_variants_share_id_and_keep_first_display_text():
    fmap = FunctionMap()
    a = fmap.find_or_insert("Phosphoglycerate kinase (EC 2.7.2.3)")
    b = fmap.find_or_insert("phosphoglycerate  KINASE # comment")
    assert a.id == b.id
    assert fmap.get_name(b.id) == "Phosphoglycerate kinase"


def test_distinct_texts_get_distinct_ids_on_collision():
    fmap = FunctionMap()
    a = fmap.find_or_insert("funcA")
    b = fmap.find_or_insert("funcB")
    c = fmap.find_or_insert("funcC")
    assert [a.id, b.id, c.id] == ["Func", "Func2", "Func3"]
    assert fmap.get_name("Func2") == "funcB"


def test_collision_suffix_skips_existing_ids():
    fmap = FunctionMap()
    fmap.find_or_insert("func 2")  # base "Func2"
    fmap.find_or_insert("function")  # base "Func"
    third = fmap.find_or_insert("funky")  # base "Funk"
    fourth = fmap.find_or_insert("functional")  # base "Func" taken, "Func2" taken
    assert third.id == "Funk"
    assert fourth.id == "Func3"


def test_ids_use_at_most_six_words():
    fmap = FunctionMap()
    fun = fmap.find_or_insert("alpha beta gamma delta epsilon zeta eta theta")
    assert fun.id == "AlphBetaGammDeltEpsiZeta"


def test_blank_text_gets_blank_id():
    fmap = FunctionMap()
    fun = fmap.find_or_insert("   ")
    assert fun.id == BLANK_ID
    assert fun.display_text == ""


def test_get_name_unknown_id_raises_lookup_error():
    fmap = FunctionMap()
    fmap.find_or_insert("Enolase")
    with pytest.raises(LookupError):
        fmap.get_name("NoSuchId")
    with pytest.raises(UnknownFunctionError, match="NoSuchId"):
        fmap.get("NoSuchId")


def test_non_string_text_rejected():
    with pytest.raises(TypeError):
        FunctionMap().find_or_insert(None)  # type: ignore[arg-type]


def test_container_protocol():
    fmap = FunctionMap()
    enolase = fmap.find_or_insert("Enolase")
    fmap.find_or_insert("Citrate synthase")
    assert enolase.id in fmap
    assert "Missing" not in fmap
    assert [f.display_text for f in fmap] == ["Enolase", "Citrate synthase"]


def test_canonical_function_is_immutable():
    fun = CanonicalFunction("Enol", "Enolase")
    with pytest.raises(AttributeError):
        fun.id = "Other"  # type: ignore[misc]
