import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from . import config
from .exceptions import ReferenceDataError
from .models import DrugEntry, InteractionRule, ReferenceTables, SideEffectRule

# Set up logging
logger = logging.getLogger(__name__)

# Separator for multi-valued CSV columns (aliases, participant drugs)
LIST_SEPARATOR = ";"

DRUGS_FILE = "drugs.csv"
INTERACTIONS_FILE = "interactions.csv"
SIDE_EFFECTS_FILE = "side_effects.csv"

DRUG_TABLE = (
    DrugEntry("Aspirin", ("acetylsalicylic acid", "ASA"), "NSAID"),
    DrugEntry("Metformin", ("glucophage",), "Antidiabetic"),
    DrugEntry("Lisinopril", ("prinivil", "zestril"), "ACE Inhibitor"),
    DrugEntry("Atorvastatin", ("lipitor",), "Statin"),
    DrugEntry("Warfarin", ("coumadin",), "Anticoagulant"),
    DrugEntry("Digoxin", ("lanoxin",), "Cardiac Glycoside"),
    DrugEntry("Insulin", ("humalog", "novolog"), "Hormone"),
    DrugEntry("Amoxicillin", ("amoxil",), "Antibiotic"),
    DrugEntry("Prednisone", ("deltasone",), "Corticosteroid"),
    DrugEntry("Ibuprofen", ("advil", "motrin"), "NSAID"),
)

INTERACTION_TABLE = (
    InteractionRule(
        ("Warfarin", "Aspirin"),
        "Increased bleeding risk due to combined anticoagulant effects",
        "high",
    ),
    InteractionRule(
        ("Metformin", "Contrast agents"),
        "Risk of lactic acidosis, especially in patients with kidney dysfunction",
        "high",
    ),
    InteractionRule(
        ("Digoxin", "Diuretics"),
        "Risk of digitalis toxicity due to potassium depletion",
        "medium",
    ),
    InteractionRule(
        ("ACE Inhibitors", "NSAIDs"),
        "Reduced antihypertensive effect and potential kidney damage",
        "medium",
    ),
    InteractionRule(
        ("Insulin", "Beta-blockers"),
        "Masking of hypoglycemic symptoms",
        "medium",
    ),
)

SIDE_EFFECT_TABLE = (
    SideEffectRule("Gastrointestinal bleeding", ("Aspirin", "NSAIDs"), "Common"),
    SideEffectRule("Hypoglycemia", ("Insulin", "Metformin"), "Common"),
    SideEffectRule("Hyperkalemia", ("ACE Inhibitors", "Lisinopril"), "Uncommon"),
    SideEffectRule("Muscle weakness", ("Statins",), "Rare"),
    SideEffectRule("Nausea", ("Metformin", "Digoxin"), "Common"),
    SideEffectRule("Dizziness", ("ACE Inhibitors", "Diuretics"), "Common"),
    SideEffectRule("Headache", ("Vasodilators",), "Common"),
    SideEffectRule("Rash", ("Antibiotics", "Amoxicillin"), "Uncommon"),
    SideEffectRule("Weight gain", ("Corticosteroids", "Insulin"), "Common"),
    SideEffectRule("Dry cough", ("ACE Inhibitors",), "Common"),
)

BUILTIN_TABLES = ReferenceTables(DRUG_TABLE, INTERACTION_TABLE, SIDE_EFFECT_TABLE)


def split_names(value) -> List[str]:
    """Split a ';'-separated CSV cell into a list of stripped names"""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return [part.strip() for part in str(value).split(LIST_SEPARATOR) if part.strip()]


def join_names(names: Iterable[str]) -> str:
    return LIST_SEPARATOR.join(names)


def _read_table(path: Path, required_columns: List[str]) -> pd.DataFrame:
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except Exception as e:
        logger.error(f"Error reading reference table {path}: {e}")
        raise ReferenceDataError(f"Cannot read {path}: {e}") from e

    missing = [column for column in required_columns if column not in df.columns]
    if missing:
        raise ReferenceDataError(f"{path.name} is missing columns: {', '.join(missing)}")
    return df


def load_drug_table(path: Union[str, Path]) -> tuple:
    df = _read_table(Path(path), ["name", "aliases", "category"])
    return tuple(
        DrugEntry(row["name"].strip(), tuple(split_names(row["aliases"])), row["category"].strip())
        for _, row in df.iterrows()
    )


def load_interaction_table(path: Union[str, Path]) -> tuple:
    df = _read_table(Path(path), ["drugs", "description", "severity"])
    return tuple(
        InteractionRule(tuple(split_names(row["drugs"])), row["description"].strip(), row["severity"].strip().lower())
        for _, row in df.iterrows()
    )


def load_side_effect_table(path: Union[str, Path]) -> tuple:
    df = _read_table(Path(path), ["effect", "drugs", "frequency"])
    return tuple(
        SideEffectRule(row["effect"].strip(), tuple(split_names(row["drugs"])), row["frequency"].strip().capitalize())
        for _, row in df.iterrows()
    )


def load_reference_tables(data_dir: Optional[Union[str, Path]] = None) -> ReferenceTables:
    """
    Load reference tables, preferring CSV files in data_dir

    Any of drugs.csv, interactions.csv and side_effects.csv found in data_dir
    replaces the matching built-in table; missing files keep the built-in one.

    Args:
        data_dir: Directory holding the CSV overrides, or None for built-ins

    Returns:
        ReferenceTables ready to pass into analyze()
    """
    if data_dir is None:
        return BUILTIN_TABLES

    data_path = Path(data_dir)
    if not data_path.is_dir():
        logger.warning(f"Reference data directory not found at {data_path}, using built-in tables")
        return BUILTIN_TABLES

    drugs = DRUG_TABLE
    interactions = INTERACTION_TABLE
    side_effects = SIDE_EFFECT_TABLE

    if (data_path / DRUGS_FILE).exists():
        drugs = load_drug_table(data_path / DRUGS_FILE)
    if (data_path / INTERACTIONS_FILE).exists():
        interactions = load_interaction_table(data_path / INTERACTIONS_FILE)
    if (data_path / SIDE_EFFECTS_FILE).exists():
        side_effects = load_side_effect_table(data_path / SIDE_EFFECTS_FILE)

    tables = ReferenceTables(drugs, interactions, side_effects)
    logger.info(
        f"✅ Loaded {len(tables.drugs)} drugs, {len(tables.interactions)} interaction rules "
        f"and {len(tables.side_effects)} side-effect rules from {data_path}"
    )
    return tables


@lru_cache(maxsize=1)
def get_default_tables() -> ReferenceTables:
    """Tables used when a caller does not pass its own; loaded once per process"""
    return load_reference_tables(config.REFERENCE_DATA_DIR)


def tables_to_frames(tables: ReferenceTables) -> dict:
    """Convert tables to DataFrames in the CSV layout load_reference_tables reads"""
    return {
        DRUGS_FILE: pd.DataFrame(
            [
                {"name": entry.name, "aliases": join_names(entry.aliases), "category": entry.category}
                for entry in tables.drugs
            ],
            columns=["name", "aliases", "category"],
        ),
        INTERACTIONS_FILE: pd.DataFrame(
            [
                {"drugs": join_names(rule.drugs), "description": rule.description, "severity": rule.severity}
                for rule in tables.interactions
            ],
            columns=["drugs", "description", "severity"],
        ),
        SIDE_EFFECTS_FILE: pd.DataFrame(
            [
                {"effect": rule.effect, "drugs": join_names(rule.drugs), "frequency": rule.frequency}
                for rule in tables.side_effects
            ],
            columns=["effect", "drugs", "frequency"],
        ),
    }


def save_reference_tables(tables: ReferenceTables, data_dir: Union[str, Path]) -> List[Path]:
    """Write tables as CSV files into data_dir, returning the written paths"""
    data_path = Path(data_dir)
    data_path.mkdir(parents=True, exist_ok=True)

    written = []
    for file_name, df in tables_to_frames(tables).items():
        path = data_path / file_name
        df.to_csv(path, index=False)
        written.append(path)
    logger.info(f"✅ Saved reference tables to {data_path}")
    return written
