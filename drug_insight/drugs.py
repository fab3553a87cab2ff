import logging
from typing import Iterable, List

from .models import DetectedDrug, DrugEntry
from .utils import clamp_confidence, normalize_text, sort_by_confidence

# Set up logging
logger = logging.getLogger(__name__)


class DrugDetector:
    """
    Find drug mentions by substring matching names and aliases
    """

    NAME_SCORE = 0.9
    ALIAS_SCORE = 0.8
    CONTEXT_SCORE = 0.1
    THRESHOLD = 0.5

    # Words that suggest the surrounding text is about dosing a drug
    CONTEXT_KEYWORDS = ("mg", "dose", "tablet", "prescribed", "administered", "treatment")

    def __init__(self, drug_table: Iterable[DrugEntry]):
        self.drug_table = tuple(drug_table)

    def score(self, entry: DrugEntry, normalized_text: str) -> float:
        """
        Confidence that entry is mentioned in already-lowercased text

        Matching is plain substring containment, so a short name inside an
        unrelated word still counts.
        """
        confidence = 0.0
        name = entry.name.lower()
        name_found = name in normalized_text

        if name_found:
            confidence += self.NAME_SCORE

        for alias in entry.aliases:
            if alias.lower() in normalized_text:
                confidence += self.ALIAS_SCORE

        if name_found:
            for keyword in self.CONTEXT_KEYWORDS:
                if keyword in normalized_text:
                    confidence += self.CONTEXT_SCORE

        return clamp_confidence(confidence)

    def detect(self, text: str) -> List[DetectedDrug]:
        normalized_text = normalize_text(text)
        if not normalized_text.strip():
            return []

        detected = []
        for entry in self.drug_table:
            confidence = self.score(entry, normalized_text)
            if confidence > self.THRESHOLD:
                detected.append(DetectedDrug(name=entry.name, confidence=confidence))

        logger.debug(f"Detected drugs: {[drug.name for drug in detected]}")
        return sort_by_confidence(detected)


def detect_drugs(text: str, drug_table: Iterable[DrugEntry]) -> List[DetectedDrug]:
    """
    Main function to detect drug mentions in text

    Args:
        text: Raw medical text
        drug_table: Drug reference entries

    Returns:
        DetectedDrug list sorted by descending confidence
    """
    return DrugDetector(drug_table).detect(text)
