import logging
from typing import Iterable, List

from .models import DetectedSideEffect, SideEffectRule
from .utils import clamp_confidence, matches_any, normalize_text, sort_by_confidence

# Set up logging
logger = logging.getLogger(__name__)


class SideEffectMatcher:
    """
    Score side effects by effect wording in the text and related detected drugs
    """

    MENTION_SCORE = 0.6
    RELATED_DRUG_SCORE = 0.3
    ADVERSE_CONTEXT_SCORE = 0.1
    THRESHOLD = 0.4

    ADVERSE_KEYWORDS = ("side effect", "adverse", "reaction", "toxicity", "complication")

    def __init__(self, side_effect_table: Iterable[SideEffectRule]):
        self.side_effect_table = tuple(side_effect_table)

    def is_mentioned(self, rule: SideEffectRule, normalized_text: str) -> bool:
        # A single word of the effect is enough ("bleeding" for "Gastrointestinal bleeding")
        return any(word in normalized_text for word in rule.effect.lower().split())

    def has_adverse_context(self, normalized_text: str) -> bool:
        return any(keyword in normalized_text for keyword in self.ADVERSE_KEYWORDS)

    def score(self, rule: SideEffectRule, normalized_text: str, drug_names: List[str], adverse_context: bool) -> float:
        confidence = 0.0
        if self.is_mentioned(rule, normalized_text):
            confidence += self.MENTION_SCORE
        if any(matches_any(drug, drug_names) for drug in rule.drugs):
            confidence += self.RELATED_DRUG_SCORE
        if adverse_context:
            confidence += self.ADVERSE_CONTEXT_SCORE
        return clamp_confidence(confidence)

    def match(self, text: str, drug_names: Iterable[str]) -> List[DetectedSideEffect]:
        normalized_text = normalize_text(text)
        drug_names = list(drug_names)
        adverse_context = self.has_adverse_context(normalized_text)

        found = []
        for rule in self.side_effect_table:
            confidence = self.score(rule, normalized_text, drug_names, adverse_context)
            if confidence > self.THRESHOLD:
                found.append(DetectedSideEffect(effect=rule.effect, frequency=rule.frequency, confidence=confidence))

        logger.info(f"Found {len(found)} side effects")
        return sort_by_confidence(found)


def find_side_effects(text: str, drug_names: Iterable[str], side_effect_table: Iterable[SideEffectRule]) -> List[DetectedSideEffect]:
    """
    Find side effects mentioned in text or implied by detected drugs

    Args:
        text: Raw medical text
        drug_names: Names of detected drugs
        side_effect_table: Side-effect rules to check

    Returns:
        DetectedSideEffect list sorted by descending confidence
    """
    return SideEffectMatcher(side_effect_table).match(text, drug_names)
