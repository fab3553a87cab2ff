import logging
from typing import Any, Dict, Iterable, List

from .models import SEVERITY_LEVELS, DetectedInteraction, InteractionRule
from .utils import clamp_confidence, matches_any, sort_by_confidence

# Set up logging
logger = logging.getLogger(__name__)


class InteractionMatcher:
    """
    Drug-drug interaction checker over a static rule table

    Rule participants may be exact drug names ("Warfarin") or categories
    ("NSAIDs"); either is matched against detected names by fuzzy_match.
    """

    BASE_CONFIDENCE = 0.8
    EXTRA_PARTICIPANT_CONFIDENCE = 0.1
    MIN_PARTICIPANTS = 2

    def __init__(self, interaction_table: Iterable[InteractionRule]):
        self.interaction_table = tuple(interaction_table)

    def count_participants(self, rule: InteractionRule, drug_names: List[str]) -> int:
        return sum(1 for participant in rule.drugs if matches_any(participant, drug_names))

    def confidence_for(self, matched: int) -> float:
        extra = matched - self.MIN_PARTICIPANTS
        return clamp_confidence(self.BASE_CONFIDENCE + self.EXTRA_PARTICIPANT_CONFIDENCE * extra)

    def match(self, drug_names: Iterable[str]) -> List[DetectedInteraction]:
        # One detected name may match several participants, e.g. a drug and its category
        drug_names = list(drug_names)
        found = []
        for rule in self.interaction_table:
            matched = self.count_participants(rule, drug_names)
            if matched >= self.MIN_PARTICIPANTS:
                found.append(
                    DetectedInteraction(
                        description=rule.description,
                        severity=rule.severity,
                        confidence=self.confidence_for(matched),
                    )
                )

        logger.info(f"Found {len(found)} interactions among drugs: {drug_names}")
        return sort_by_confidence(found)


def find_interactions(drug_names: Iterable[str], interaction_table: Iterable[InteractionRule]) -> List[DetectedInteraction]:
    """
    Find all interaction rules that fire for a list of detected drug names

    Args:
        drug_names: Names of detected drugs
        interaction_table: Interaction rules to check

    Returns:
        DetectedInteraction list sorted by descending confidence
    """
    return InteractionMatcher(interaction_table).match(drug_names)


def get_interaction_summary(interactions: List[DetectedInteraction]) -> Dict[str, Any]:
    """
    Get summary statistics of interactions
    """
    severity_counts = {level: 0 for level in SEVERITY_LEVELS}
    for interaction in interactions:
        severity_counts[interaction.severity] += 1

    max_severity = 'none'
    for level in SEVERITY_LEVELS:
        if severity_counts[level] > 0:
            max_severity = level

    return {
        'total': len(interactions),
        'high_severity': severity_counts['high'],
        'medium_severity': severity_counts['medium'],
        'low_severity': severity_counts['low'],
        'max_severity': max_severity
    }
