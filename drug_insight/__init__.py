"""
Drug Insight - Core Processing Modules

This package contains the rule-based medical text analysis pipeline:
- Drug mention detection with alias resolution
- Drug-drug interaction matching
- Side-effect matching
- Summary aggregation and result export
- Text extraction from uploaded documents
"""

__version__ = "1.0.0"
__author__ = "Drug Insight Team"

# Import main functions for easy access
from .analyzer import analyze, summarize, validate_input
from .drugs import detect_drugs
from .interactions import find_interactions, get_interaction_summary
from .side_effects import find_side_effects
from .reference_data import BUILTIN_TABLES, get_default_tables, load_reference_tables
from .models import (
    AnalysisResult,
    DetectedDrug,
    DetectedInteraction,
    DetectedSideEffect,
    DrugEntry,
    InteractionRule,
    ReferenceTables,
    SideEffectRule,
    Summary,
)
from .exceptions import (
    DrugInsightError,
    EmptyInputError,
    ExtractionError,
    FileReadError,
    FileTooLargeError,
    ReferenceDataError,
    UnsupportedFileTypeError,
)
from .utils import format_results_text, generate_pdf_report, save_results_csv

__all__ = [
    "analyze",
    "summarize",
    "validate_input",
    "detect_drugs",
    "find_interactions",
    "get_interaction_summary",
    "find_side_effects",
    "BUILTIN_TABLES",
    "get_default_tables",
    "load_reference_tables",
    "AnalysisResult",
    "DetectedDrug",
    "DetectedInteraction",
    "DetectedSideEffect",
    "DrugEntry",
    "InteractionRule",
    "ReferenceTables",
    "SideEffectRule",
    "Summary",
    "DrugInsightError",
    "EmptyInputError",
    "ExtractionError",
    "FileReadError",
    "FileTooLargeError",
    "ReferenceDataError",
    "UnsupportedFileTypeError",
    "format_results_text",
    "generate_pdf_report",
    "save_results_csv",
]
