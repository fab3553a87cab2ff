"""
Display helpers for interaction severity and side-effect frequency
"""

from typing import Dict, List

from .models import FREQUENCY_LEVELS, SEVERITY_LEVELS, DetectedInteraction, DetectedSideEffect

SEVERITY_COLORS = {
    'low': '#28a745',      # Green
    'medium': '#ffc107',   # Yellow/Orange
    'high': '#dc3545'      # Red
}

SEVERITY_ICONS = {
    'low': '🟢',
    'medium': '🟡',
    'high': '🔴'
}

FREQUENCY_COLORS = {
    'Rare': '#6c757d',
    'Uncommon': '#ffc107',
    'Common': '#dc3545'
}


def get_severity_color(severity: str) -> str:
    """
    Get color code for severity level
    """
    return SEVERITY_COLORS.get(severity.lower(), '#6c757d')


def get_severity_icon(severity: str) -> str:
    return SEVERITY_ICONS.get(severity.lower(), '⚪')


def get_frequency_color(frequency: str) -> str:
    return FREQUENCY_COLORS.get(frequency.capitalize(), '#6c757d')


def severity_rank(severity: str) -> int:
    """0 for low up to 2 for high; unknown values rank below low"""
    try:
        return SEVERITY_LEVELS.index(severity.lower())
    except ValueError:
        return -1


def sort_by_severity(interactions: List[DetectedInteraction]) -> List[DetectedInteraction]:
    """Most severe first; ties keep their confidence order"""
    return sorted(interactions, key=lambda item: severity_rank(item.severity), reverse=True)


def group_side_effects_by_frequency(side_effects: List[DetectedSideEffect]) -> Dict[str, List[DetectedSideEffect]]:
    """
    Bucket side effects by frequency, most frequent bucket first
    """
    groups = {level: [] for level in reversed(FREQUENCY_LEVELS)}
    for item in side_effects:
        groups[item.frequency].append(item)
    return groups
