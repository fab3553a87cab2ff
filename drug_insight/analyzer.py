"""
Analysis pipeline: drug detection, interaction matching, side-effect matching
and the summary that ties them together.
"""

import logging
from typing import List, Optional

from .drugs import DrugDetector
from .exceptions import EmptyInputError
from .interactions import InteractionMatcher
from .models import (
    AnalysisResult,
    DetectedDrug,
    DetectedInteraction,
    DetectedSideEffect,
    ReferenceTables,
    Summary,
)
from .reference_data import get_default_tables
from .side_effects import SideEffectMatcher

# Set up logging
logger = logging.getLogger(__name__)


def validate_input(text: Optional[str]) -> str:
    """
    Return text unchanged, or raise EmptyInputError if it is blank
    """
    if text is None or not text.strip():
        raise EmptyInputError()
    return text


def summarize(
    drugs: List[DetectedDrug],
    interactions: List[DetectedInteraction],
    side_effects: List[DetectedSideEffect],
) -> Summary:
    return Summary(
        total_drugs=len(drugs),
        critical_interactions=sum(1 for item in interactions if item.severity == "high"),
        major_side_effects=sum(1 for item in side_effects if item.frequency == "Common"),
    )


def analyze(text: Optional[str], tables: Optional[ReferenceTables] = None, strict: bool = False) -> AnalysisResult:
    """
    Run the full annotation pipeline over one piece of text

    Args:
        text: Raw medical text from any source
        tables: Reference tables; defaults to the process-wide tables
        strict: Raise EmptyInputError for blank text instead of returning
            an empty result

    Returns:
        A new AnalysisResult owned by the caller
    """
    if strict:
        validate_input(text)
    if tables is None:
        tables = get_default_tables()

    if text is None or not text.strip():
        return AnalysisResult()

    drugs = DrugDetector(tables.drugs).detect(text)
    drug_names = [drug.name for drug in drugs]

    # Both matchers only depend on the detected drugs, not on each other
    interactions = InteractionMatcher(tables.interactions).match(drug_names)
    side_effects = SideEffectMatcher(tables.side_effects).match(text, drug_names)

    summary = summarize(drugs, interactions, side_effects)
    logger.info(
        f"✅ Analysis complete: {summary.total_drugs} drugs, "
        f"{summary.critical_interactions} critical interactions, "
        f"{summary.major_side_effects} major side effects"
    )
    return AnalysisResult(drugs=drugs, interactions=interactions, side_effects=side_effects, summary=summary)
