import copy

import pytest

from drug_insight.analyzer import analyze, summarize, validate_input
from drug_insight.demo import get_sample_article
from drug_insight.exceptions import EmptyInputError
from drug_insight.models import AnalysisResult, DetectedInteraction, DetectedSideEffect, Summary

from .conftest import SAMPLE_TEXTS


@pytest.mark.parametrize("text", ["", "   ", "\n\t ", None])
def test_blank_input_gives_empty_result(tables, text):
    result = analyze(text, tables)

    assert result == AnalysisResult()
    assert result.summary == Summary(0, 0, 0)
    assert result.is_empty()


def test_strict_mode_rejects_blank_input(tables):
    with pytest.raises(EmptyInputError):
        analyze("  ", tables, strict=True)

    with pytest.raises(EmptyInputError):
        validate_input("")

    assert validate_input("aspirin") == "aspirin"


def test_single_drug_example(tables):
    result = analyze("Aspirin 500mg prescribed", tables)

    assert [(drug.name, drug.confidence) for drug in result.drugs] == [("Aspirin", 1.0)]
    assert not result.is_empty()
    assert result.interactions == []
    assert result.side_effects == []
    assert result.summary == Summary(total_drugs=1, critical_interactions=0, major_side_effects=0)


def test_warfarin_aspirin_example(tables):
    result = analyze("warfarin aspirin", tables)

    assert len(result.interactions) == 1
    assert result.interactions[0].severity == "high"
    assert result.interactions[0].confidence == pytest.approx(0.8)
    assert result.summary.critical_interactions == 1


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_confidence_bounds_and_ordering(tables, text):
    result = analyze(text, tables)

    for items in (result.drugs, result.interactions, result.side_effects):
        confidences = [item.confidence for item in items]
        assert all(0.0 <= value <= 1.0 for value in confidences)
        assert confidences == sorted(confidences, reverse=True)


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_repeated_runs_are_identical(tables, text):
    before = copy.deepcopy(tables)

    first = analyze(text, tables)
    second = analyze(text, tables)

    assert first == second
    assert first is not second
    assert tables == before


def test_summary_counts():
    interactions = [DetectedInteraction("a", "high", 0.9), DetectedInteraction("b", "low", 0.8)]
    side_effects = [
        DetectedSideEffect("x", "Common", 0.9),
        DetectedSideEffect("y", "Common", 0.7),
        DetectedSideEffect("z", "Rare", 0.6),
    ]

    summary = summarize([], interactions, side_effects)

    assert summary == Summary(total_drugs=0, critical_interactions=1, major_side_effects=2)


def test_substitute_tables(small_tables):
    result = analyze("Lipitor and clarithromycin; patient has muscle pain", small_tables)

    assert [drug.name for drug in result.drugs] == ["Clarithromycin", "Atorvastatin"]
    assert [item.description for item in result.interactions] == [
        "Clarithromycin may increase statin levels and the risk of myopathy"
    ]
    assert [item.effect for item in result.side_effects] == ["Muscle pain"]
    assert result.side_effects[0].confidence == pytest.approx(0.9)


def test_sample_article(tables):
    result = analyze(get_sample_article("Anticoagulation case report"), tables)

    assert {"Warfarin", "Aspirin"} <= set(result.drug_names)
    assert result.interactions[0].severity == "high"
    assert result.side_effects[0].effect == "Gastrointestinal bleeding"
    assert result.side_effects[0].confidence == pytest.approx(1.0)


def test_to_dict_uses_client_field_names(tables):
    data = analyze("warfarin aspirin", tables).to_dict()

    assert set(data) == {"drugs", "interactions", "sideEffects", "summary", "demo"}
    assert data["interactions"][0]["interaction"].startswith("Increased bleeding risk")
    assert data["summary"] == {"totalDrugs": 2, "criticalInteractions": 1, "majorSideEffects": 0}
    assert data["demo"] is False


def test_default_tables_are_used(tables):
    assert analyze("warfarin aspirin") == analyze("warfarin aspirin", tables)
