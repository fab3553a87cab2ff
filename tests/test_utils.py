import csv
from io import StringIO

from drug_insight.models import AnalysisResult, DetectedDrug, DetectedInteraction, DetectedSideEffect, Summary
from drug_insight.utils import (
    clamp_confidence,
    clean_text_for_pdf,
    format_results_text,
    generate_pdf_report,
    save_results_csv,
    sort_by_confidence,
)


def make_result(demo=False):
    return AnalysisResult(
        drugs=[DetectedDrug("Warfarin", 1.0), DetectedDrug("Aspirin", 0.8)],
        interactions=[
            DetectedInteraction("Increased bleeding risk due to combined anticoagulant effects", "high", 0.8)
        ],
        side_effects=[DetectedSideEffect("Gastrointestinal bleeding", "Common", 0.9)],
        summary=Summary(total_drugs=2, critical_interactions=1, major_side_effects=1),
        demo=demo,
    )


def test_format_results_text():
    expected = """Drug Insight Analysis Results
============================

SUMMARY:
- Total Drugs Found: 2
- Critical Interactions: 1
- Major Side Effects: 1

DRUGS IDENTIFIED:
• Warfarin (100.0% confidence)
• Aspirin (80.0% confidence)

DRUG INTERACTIONS:
• Increased bleeding risk due to combined anticoagulant effects (HIGH severity)

SIDE EFFECTS:
• Gastrointestinal bleeding (Common)
"""
    assert format_results_text(make_result()) == expected


def test_format_results_text_flags_demo():
    assert format_results_text(make_result(demo=True)).startswith("[DEMO MODE")


def test_format_empty_result():
    text = format_results_text(AnalysisResult())

    assert "- Total Drugs Found: 0" in text
    assert "DRUGS IDENTIFIED:\n\nDRUG INTERACTIONS:" in text


def test_save_results_csv():
    rows = list(csv.reader(StringIO(save_results_csv(make_result(), timestamp="2024-01-15T10:00:00"))))

    assert rows[0] == ["Analysis Date", "2024-01-15T10:00:00"]
    assert ["Warfarin", "1.000"] in rows
    assert ["Increased bleeding risk due to combined anticoagulant effects", "high", "0.800"] in rows
    assert ["Gastrointestinal bleeding", "Common", "0.900"] in rows


def test_save_results_csv_without_findings():
    rows = list(csv.reader(StringIO(save_results_csv(AnalysisResult()))))

    assert ["No significant interactions found"] in rows
    assert ["No side effects found"] in rows


def test_generate_pdf_report():
    pdf_bytes = generate_pdf_report(make_result(), timestamp="2024-01-15 10:00")

    assert isinstance(pdf_bytes, bytes)
    assert pdf_bytes.startswith(b"%PDF")


def test_clean_text_for_pdf():
    assert clean_text_for_pdf("• Warfarin ↔ Aspirin — 5 mg") == "- Warfarin <-> Aspirin - 5 mg"
    assert clean_text_for_pdf("") == ""


def test_clamp_and_sort():
    assert clamp_confidence(1.3) == 1.0
    assert clamp_confidence(-0.1) == 0.0

    items = [DetectedDrug("A", 0.8), DetectedDrug("B", 0.9), DetectedDrug("C", 0.8)]
    assert [item.name for item in sort_by_confidence(items)] == ["B", "A", "C"]
