import pytest

from drug_insight.models import DrugEntry, InteractionRule, ReferenceTables, SideEffectRule
from drug_insight.reference_data import BUILTIN_TABLES


@pytest.fixture
def tables():
    return BUILTIN_TABLES


@pytest.fixture
def small_tables():
    """Substitute tables, to show the pipeline only reads what it is given"""
    return ReferenceTables(
        drugs=(
            DrugEntry("Atorvastatin", ("lipitor",), "Statin"),
            DrugEntry("Clarithromycin", ("biaxin",), "Macrolide"),
        ),
        interactions=(
            InteractionRule(
                ("Statin", "Clarithromycin"),
                "Clarithromycin may increase statin levels and the risk of myopathy",
                "high",
            ),
        ),
        side_effects=(
            SideEffectRule("Muscle pain", ("Statin",), "Common"),
            SideEffectRule("Taste disturbance", ("Macrolides",), "Uncommon"),
        ),
    )


SAMPLE_TEXTS = [
    "",
    "Aspirin 500mg prescribed",
    "warfarin and aspirin",
    "Patient on Coumadin and ASA reported an adverse reaction with nausea and dizziness.",
    "Metformin 1000 mg and insulin dose increased; hypoglycemia and weight gain noted. "
    "Lisinopril (zestril) with ibuprofen, advil, motrin. Digoxin toxicity, rash, dry cough.",
    "Nothing relevant in this sentence at all.",
]
