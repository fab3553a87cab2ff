"""
Demo mode: sample articles and synthetic results for presentations.

Nothing here is used by analyze(). Results from generate_demo_result are
random picks from the reference tables and are flagged with demo=True.
"""

import logging
import random
from typing import Optional

from .analyzer import summarize
from .models import (
    AnalysisResult,
    DetectedDrug,
    DetectedInteraction,
    DetectedSideEffect,
    ReferenceTables,
)
from .reference_data import get_default_tables

# Set up logging
logger = logging.getLogger(__name__)

# Keep-probabilities are 1 - threshold: a row is kept when rng.random() > threshold
DRUG_KEEP_THRESHOLD = 0.6
INTERACTION_KEEP_THRESHOLD = 0.5
SIDE_EFFECT_KEEP_THRESHOLD = 0.4
DEMO_CONFIDENCE = 1.0

SAMPLE_ARTICLES = {
    "Anticoagulation case report": """
A 72-year-old man on long-term warfarin (Coumadin) 5 mg daily for atrial
fibrillation was prescribed aspirin 81 mg after a transient ischemic attack.
Two weeks later he presented with melena. Endoscopy confirmed upper
gastrointestinal bleeding. INR was 4.2. The adverse reaction was attributed
to the combined antiplatelet and anticoagulant treatment; aspirin was
stopped and the warfarin dose reduced.
""",
    "Diabetes management note": """
Patient with type 2 diabetes continues metformin 1000 mg twice daily. Basal
insulin (Novolog for meals) was added last month. She reports occasional
nausea after the morning tablet and two episodes of hypoglycemia overnight.
Atenolol is also administered for hypertension.
Review dose timing and monitor for side effects.
""",
    "Hypertension follow-up": """
Follow-up for hypertension treated with lisinopril (Zestril) 20 mg. The
patient started ibuprofen (Advil) 400 mg for knee pain. Complains of a dry
cough and mild dizziness. Serum potassium is at the upper limit; watch for
hyperkalemia and renal complication with NSAIDs.
""",
}


def get_sample_article(title: Optional[str] = None, rng: Optional[random.Random] = None) -> str:
    """
    Return a sample article by title, or a random one
    """
    if title is None:
        title = (rng or random).choice(sorted(SAMPLE_ARTICLES))
    return SAMPLE_ARTICLES[title].strip()


def generate_demo_result(tables: Optional[ReferenceTables] = None, rng: Optional[random.Random] = None) -> AnalysisResult:
    """
    Build a synthetic AnalysisResult by randomly keeping table rows

    Args:
        tables: Reference tables to draw from
        rng: Random source; pass a seeded random.Random for repeatable output

    Returns:
        AnalysisResult with demo=True
    """
    tables = tables or get_default_tables()
    rng = rng or random.Random()

    drugs = [
        DetectedDrug(name=entry.name, confidence=DEMO_CONFIDENCE)
        for entry in tables.drugs
        if rng.random() > DRUG_KEEP_THRESHOLD
    ]
    interactions = [
        DetectedInteraction(description=rule.description, severity=rule.severity, confidence=DEMO_CONFIDENCE)
        for rule in tables.interactions
        if rng.random() > INTERACTION_KEEP_THRESHOLD
    ]
    side_effects = [
        DetectedSideEffect(effect=rule.effect, frequency=rule.frequency, confidence=DEMO_CONFIDENCE)
        for rule in tables.side_effects
        if rng.random() > SIDE_EFFECT_KEEP_THRESHOLD
    ]

    logger.info("Generated synthetic demo result")
    return AnalysisResult(
        drugs=drugs,
        interactions=interactions,
        side_effects=side_effects,
        summary=summarize(drugs, interactions, side_effects),
        demo=True,
    )
