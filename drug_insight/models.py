from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Literal, Tuple

from .exceptions import ReferenceDataError

Severity = Literal["low", "medium", "high"]
Frequency = Literal["Rare", "Uncommon", "Common"]

SEVERITY_LEVELS: Tuple[str, ...] = ("low", "medium", "high")
FREQUENCY_LEVELS: Tuple[str, ...] = ("Rare", "Uncommon", "Common")


def _require_text(value: Any, field_name: str, owner: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ReferenceDataError(f"{owner}: {field_name} must be a non-empty string")


def _as_name_tuple(values, field_name: str, owner: str) -> Tuple[str, ...]:
    if isinstance(values, str):
        values = (values,)
    names = tuple(values)
    for name in names:
        _require_text(name, field_name, owner)
    return names


# Static reference data

@dataclass(frozen=True)
class DrugEntry:
    """A drug the detector knows about"""
    name: str
    aliases: Tuple[str, ...] = ()
    category: str = ""

    def __post_init__(self):
        _require_text(self.name, "name", "DrugEntry")
        object.__setattr__(self, "aliases", _as_name_tuple(self.aliases, "alias", f"DrugEntry {self.name!r}"))


@dataclass(frozen=True)
class InteractionRule:
    """An interaction between two or more drugs or drug categories"""
    drugs: Tuple[str, ...]
    description: str
    severity: Severity

    def __post_init__(self):
        owner = "InteractionRule"
        object.__setattr__(self, "drugs", _as_name_tuple(self.drugs, "participant", owner))
        if len(self.drugs) < 2:
            raise ReferenceDataError(f"{owner}: needs at least two participants, got {list(self.drugs)}")
        _require_text(self.description, "description", owner)
        if self.severity not in SEVERITY_LEVELS:
            raise ReferenceDataError(f"{owner}: unknown severity {self.severity!r}")


@dataclass(frozen=True)
class SideEffectRule:
    """A side effect and the drugs or categories associated with it"""
    effect: str
    drugs: Tuple[str, ...]
    frequency: Frequency

    def __post_init__(self):
        owner = "SideEffectRule"
        _require_text(self.effect, "effect", owner)
        object.__setattr__(self, "drugs", _as_name_tuple(self.drugs, "drug", f"{owner} {self.effect!r}"))
        if self.frequency not in FREQUENCY_LEVELS:
            raise ReferenceDataError(f"{owner}: unknown frequency {self.frequency!r}")


@dataclass(frozen=True)
class ReferenceTables:
    """The three static tables every analysis run reads from"""
    drugs: Tuple[DrugEntry, ...]
    interactions: Tuple[InteractionRule, ...]
    side_effects: Tuple[SideEffectRule, ...]

    def __post_init__(self):
        object.__setattr__(self, "drugs", tuple(self.drugs))
        object.__setattr__(self, "interactions", tuple(self.interactions))
        object.__setattr__(self, "side_effects", tuple(self.side_effects))
        names = [entry.name.lower() for entry in self.drugs]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ReferenceDataError(f"Duplicate drug names in table: {duplicates}")


# Per-run results

@dataclass
class DetectedDrug:
    name: str
    confidence: float


@dataclass
class DetectedInteraction:
    description: str
    severity: Severity
    confidence: float


@dataclass
class DetectedSideEffect:
    effect: str
    frequency: Frequency
    confidence: float


@dataclass
class Summary:
    total_drugs: int = 0
    critical_interactions: int = 0
    major_side_effects: int = 0


@dataclass
class AnalysisResult:
    """Findings for one piece of text, ordered by descending confidence"""
    drugs: List[DetectedDrug] = field(default_factory=list)
    interactions: List[DetectedInteraction] = field(default_factory=list)
    side_effects: List[DetectedSideEffect] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    demo: bool = False

    @property
    def drug_names(self) -> List[str]:
        return [drug.name for drug in self.drugs]

    def is_empty(self) -> bool:
        return not (self.drugs or self.interactions or self.side_effects)

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-friendly representation using the web client's field names
        """
        return {
            "drugs": [asdict(drug) for drug in self.drugs],
            "interactions": [
                {
                    "interaction": item.description,
                    "severity": item.severity,
                    "confidence": item.confidence,
                }
                for item in self.interactions
            ],
            "sideEffects": [asdict(item) for item in self.side_effects],
            "summary": {
                "totalDrugs": self.summary.total_drugs,
                "criticalInteractions": self.summary.critical_interactions,
                "majorSideEffects": self.summary.major_side_effects,
            },
            "demo": self.demo,
        }
