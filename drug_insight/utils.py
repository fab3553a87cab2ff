import csv
import logging
from datetime import datetime
from io import StringIO
from typing import Iterable, List, Optional, TypeVar

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .models import AnalysisResult

# Set up logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


def normalize_text(text: Optional[str]) -> str:
    """
    Lowercase text for case-insensitive substring matching
    """
    if not text:
        return ""
    return text.lower()


def fuzzy_match(name_a: str, name_b: str) -> bool:
    """
    Case-insensitive bidirectional substring containment

    "NSAIDs" matches "nsaid", and "Statin" matches "Atorvastatin". Blank
    names never match anything.
    """
    a = normalize_text(name_a).strip()
    b = normalize_text(name_b).strip()
    if not a or not b:
        return False
    return a in b or b in a


def matches_any(name: str, candidates: Iterable[str]) -> bool:
    return any(fuzzy_match(name, candidate) for candidate in candidates)


def clamp_confidence(value: float) -> float:
    return max(0.0, min(value, 1.0))


def sort_by_confidence(items: Iterable[T]) -> List[T]:
    """Sort descending by confidence; ties keep their input order"""
    return sorted(items, key=lambda item: item.confidence, reverse=True)


def format_confidence(confidence: float, decimals: int = 1) -> str:
    return f"{confidence * 100:.{decimals}f}%"


def format_results_text(result: AnalysisResult) -> str:
    """
    Plain-text export of an analysis, as copied to the clipboard
    """
    summary = result.summary
    drug_lines = [f"• {drug.name} ({format_confidence(drug.confidence)} confidence)" for drug in result.drugs]
    interaction_lines = [
        f"• {item.description} ({item.severity.upper()} severity)" for item in result.interactions
    ]
    side_effect_lines = [f"• {item.effect} ({item.frequency})" for item in result.side_effects]

    lines = [
        "Drug Insight Analysis Results",
        "============================",
        "",
        "SUMMARY:",
        f"- Total Drugs Found: {summary.total_drugs}",
        f"- Critical Interactions: {summary.critical_interactions}",
        f"- Major Side Effects: {summary.major_side_effects}",
        "",
        "DRUGS IDENTIFIED:",
        *drug_lines,
        "",
        "DRUG INTERACTIONS:",
        *interaction_lines,
        "",
        "SIDE EFFECTS:",
        *side_effect_lines,
    ]
    if result.demo:
        lines[:0] = ["[DEMO MODE - synthetic results, not derived from the text]", ""]
    return "\n".join(lines) + "\n"


def save_results_csv(result: AnalysisResult, timestamp: Optional[str] = None) -> str:
    """
    Save analysis results to CSV format
    """
    summary = result.summary
    rows = [
        ["Analysis Date", timestamp or datetime.now().isoformat()],
        [""],
        ["Summary"],
        ["Total Drugs", summary.total_drugs],
        ["Critical Interactions", summary.critical_interactions],
        ["Major Side Effects", summary.major_side_effects],
        [""],
        ["Drugs Identified"],
        ["Drug Name", "Confidence"],
    ]
    rows.extend([drug.name, f"{drug.confidence:.3f}"] for drug in result.drugs)

    rows.extend([[""], ["Drug Interactions"]])
    if result.interactions:
        rows.append(["Description", "Severity", "Confidence"])
        rows.extend([item.description, item.severity, f"{item.confidence:.3f}"] for item in result.interactions)
    else:
        rows.append(["No significant interactions found"])

    rows.extend([[""], ["Side Effects"]])
    if result.side_effects:
        rows.append(["Effect", "Frequency", "Confidence"])
        rows.extend([item.effect, item.frequency, f"{item.confidence:.3f}"] for item in result.side_effects)
    else:
        rows.append(["No side effects found"])

    output = StringIO()
    writer = csv.writer(output)
    writer.writerows(rows)
    return output.getvalue()


def clean_text_for_pdf(text: str) -> str:
    """
    Clean text for PDF generation by replacing characters the core fonts lack
    """
    if not text:
        return ""

    unicode_replacements = {
        '•': '-',
        '·': '-',
        '↔': '<->',
        '→': '->',
        '–': '-',
        '—': '-',
        '“': '"',
        '”': '"',
        '‘': "'",
        '’': "'",
        '…': '...',
        '±': '+/-',
        '≤': '<=',
        '≥': '>=',
        'μ': 'micro',
    }
    for unicode_char, ascii_replacement in unicode_replacements.items():
        text = text.replace(unicode_char, ascii_replacement)

    # Remove any remaining non-ASCII characters
    text = ''.join(char if ord(char) < 128 else '?' for char in text)

    return ' '.join(text.split())


def _pdf_line(pdf: FPDF, height: float, text: str, align: str = "L"):
    pdf.multi_cell(0, height, clean_text_for_pdf(text), align=align, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def generate_pdf_report(result: AnalysisResult, timestamp: Optional[str] = None) -> bytes:
    """
    Generate a PDF report from analysis results

    Args:
        result: The analysis to render
        timestamp: Date line for the header, defaults to now

    Returns:
        PDF document as bytes
    """
    pdf = FPDF()
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 16)
    _pdf_line(pdf, 10, "Drug Insight Analysis Report", align="C")
    pdf.ln(5)

    pdf.set_font("Helvetica", "", 12)
    _pdf_line(pdf, 8, f"Analysis Date: {timestamp or datetime.now().strftime('%Y-%m-%d %H:%M')}")
    if result.demo:
        _pdf_line(pdf, 8, "DEMO MODE: synthetic results, not derived from the text")
    summary = result.summary
    _pdf_line(pdf, 8, f"Total Drugs Found: {summary.total_drugs}")
    _pdf_line(pdf, 8, f"Critical Interactions: {summary.critical_interactions}")
    _pdf_line(pdf, 8, f"Major Side Effects: {summary.major_side_effects}")
    pdf.ln(5)

    pdf.set_font("Helvetica", "B", 14)
    _pdf_line(pdf, 10, "Drugs Identified:")
    pdf.set_font("Helvetica", "", 11)
    if result.drugs:
        for i, drug in enumerate(result.drugs, 1):
            _pdf_line(pdf, 6, f"{i}. {drug.name} ({format_confidence(drug.confidence)} confidence)")
    else:
        _pdf_line(pdf, 6, "No drugs identified.")
    pdf.ln(5)

    pdf.set_font("Helvetica", "B", 14)
    _pdf_line(pdf, 10, "Drug Interactions:")
    pdf.set_font("Helvetica", "", 11)
    if result.interactions:
        for i, item in enumerate(result.interactions, 1):
            _pdf_line(pdf, 6, f"{i}. {item.description} ({item.severity.upper()} severity)")
    else:
        _pdf_line(pdf, 6, "No significant drug interactions found.")
    pdf.ln(5)

    pdf.set_font("Helvetica", "B", 14)
    _pdf_line(pdf, 10, "Side Effects:")
    pdf.set_font("Helvetica", "", 11)
    if result.side_effects:
        for i, item in enumerate(result.side_effects, 1):
            _pdf_line(pdf, 6, f"{i}. {item.effect} ({item.frequency}, {format_confidence(item.confidence)})")
    else:
        _pdf_line(pdf, 6, "No side effects found.")

    pdf.ln(10)
    pdf.set_font("Helvetica", "I", 10)
    _pdf_line(pdf, 6, "DISCLAIMER: Findings come from keyword matching and are for educational purposes only.", align="C")
    _pdf_line(pdf, 6, "Always consult healthcare professionals before making medication changes.", align="C")

    return bytes(pdf.output())
