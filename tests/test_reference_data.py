import pandas as pd
import pytest

from drug_insight.exceptions import ReferenceDataError
from drug_insight.models import DrugEntry, InteractionRule, ReferenceTables, SideEffectRule
from drug_insight.reference_data import (
    BUILTIN_TABLES,
    load_reference_tables,
    save_reference_tables,
    split_names,
)


def test_builtin_tables():
    assert len(BUILTIN_TABLES.drugs) == 10
    assert len(BUILTIN_TABLES.interactions) == 5
    assert len(BUILTIN_TABLES.side_effects) == 10
    assert BUILTIN_TABLES.drugs[0] == DrugEntry("Aspirin", ("acetylsalicylic acid", "ASA"), "NSAID")


def test_tables_are_immutable():
    with pytest.raises(AttributeError):
        BUILTIN_TABLES.drugs[0].name = "Changed"


@pytest.mark.parametrize(
    "build",
    [
        lambda: DrugEntry("", (), "NSAID"),
        lambda: DrugEntry("Aspirin", ("ASA", " "), "NSAID"),
        lambda: InteractionRule(("Warfarin",), "only one participant", "high"),
        lambda: InteractionRule(("Warfarin", "Aspirin"), "bleeding", "severe"),
        lambda: InteractionRule(("Warfarin", "Aspirin"), "", "high"),
        lambda: SideEffectRule("Nausea", ("Metformin",), "Often"),
        lambda: ReferenceTables((DrugEntry("Aspirin"), DrugEntry("aspirin")), (), ()),
    ],
)
def test_invalid_entries_are_rejected(build):
    with pytest.raises(ReferenceDataError):
        build()


def test_split_names():
    assert split_names("coumadin; jantoven ;") == ["coumadin", "jantoven"]
    assert split_names("") == []


def test_csv_round_trip(tmp_path):
    written = save_reference_tables(BUILTIN_TABLES, tmp_path)

    assert sorted(path.name for path in written) == ["drugs.csv", "interactions.csv", "side_effects.csv"]
    assert load_reference_tables(tmp_path) == BUILTIN_TABLES


def test_partial_override_keeps_other_builtins(tmp_path):
    pd.DataFrame(
        [{"name": "Heparin", "aliases": "", "category": "Anticoagulant"}]
    ).to_csv(tmp_path / "drugs.csv", index=False)

    tables = load_reference_tables(tmp_path)

    assert tables.drugs == (DrugEntry("Heparin", (), "Anticoagulant"),)
    assert tables.interactions == BUILTIN_TABLES.interactions
    assert tables.side_effects == BUILTIN_TABLES.side_effects


def test_csv_values_are_normalized(tmp_path):
    pd.DataFrame(
        [{"effect": "Nausea", "drugs": "Metformin;Digoxin", "frequency": "common"}]
    ).to_csv(tmp_path / "side_effects.csv", index=False)
    pd.DataFrame(
        [{"drugs": "Warfarin;Aspirin", "description": "Bleeding", "severity": "HIGH"}]
    ).to_csv(tmp_path / "interactions.csv", index=False)

    tables = load_reference_tables(tmp_path)

    assert tables.side_effects == (SideEffectRule("Nausea", ("Metformin", "Digoxin"), "Common"),)
    assert tables.interactions == (InteractionRule(("Warfarin", "Aspirin"), "Bleeding", "high"),)


def test_missing_columns(tmp_path):
    pd.DataFrame([{"name": "Heparin"}]).to_csv(tmp_path / "drugs.csv", index=False)

    with pytest.raises(ReferenceDataError, match="aliases"):
        load_reference_tables(tmp_path)


def test_missing_directory_falls_back_to_builtins(tmp_path):
    assert load_reference_tables(tmp_path / "nope") is BUILTIN_TABLES
    assert load_reference_tables(None) is BUILTIN_TABLES
