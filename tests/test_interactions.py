import pytest

from drug_insight.interactions import InteractionMatcher, find_interactions, get_interaction_summary
from drug_insight.models import DetectedInteraction, InteractionRule
from drug_insight.utils import fuzzy_match


def test_warfarin_aspirin_fires_once(tables):
    interactions = find_interactions(["Aspirin", "Warfarin"], tables.interactions)

    assert len(interactions) == 1
    assert interactions[0].severity == "high"
    assert interactions[0].description.startswith("Increased bleeding risk")
    assert interactions[0].confidence == pytest.approx(0.8)


def test_single_builtin_drug_fires_nothing(tables):
    assert find_interactions([], tables.interactions) == []
    assert find_interactions(["Warfarin"], tables.interactions) == []


def test_one_drug_matching_two_participants_fires():
    rules = [InteractionRule(("Statin", "Atorvastatin"), "Duplicate statin therapy", "medium")]

    interactions = find_interactions(["Atorvastatin"], rules)

    assert len(interactions) == 1
    assert interactions[0].confidence == pytest.approx(0.8)


def test_participant_contained_in_detected_name():
    rules = [InteractionRule(("Statin", "Warfarin"), "Statin and warfarin", "medium")]

    interactions = find_interactions(["Atorvastatin", "Warfarin"], rules)

    assert len(interactions) == 1


def test_detected_name_contained_in_participant():
    rules = [InteractionRule(("Aspirin 81", "Warfarin sodium"), "Low dose aspirin with warfarin", "high")]

    interactions = find_interactions(["Aspirin", "Warfarin"], rules)

    assert len(interactions) == 1


def test_fuzzy_match_is_symmetric_and_case_insensitive():
    assert fuzzy_match("NSAID", "nsaids")
    assert fuzzy_match("nsaids", "NSAID")
    assert not fuzzy_match("Aspirin", "NSAIDs")
    assert not fuzzy_match("", "Aspirin")


def test_extra_participants_raise_confidence():
    rules = [
        InteractionRule(("Alpha", "Beta"), "two", "low"),
        InteractionRule(("Alpha", "Beta", "Gamma"), "three", "medium"),
    ]

    interactions = find_interactions(["Alpha", "Beta", "Gamma"], rules)

    assert [item.description for item in interactions] == ["three", "two"]
    assert interactions[0].confidence == pytest.approx(0.9)
    assert interactions[1].confidence == pytest.approx(0.8)


def test_confidence_is_clamped():
    participants = ("Alpha", "Beta", "Gamma", "Delta", "Epsilon")
    rules = [InteractionRule(participants, "five-way", "high")]

    interactions = find_interactions(list(participants), rules)

    assert interactions[0].confidence == 1.0


def test_one_participant_matching_twice_counts_once():
    matcher = InteractionMatcher([InteractionRule(("Aspirin", "Warfarin"), "pair", "high")])

    assert matcher.match(["Aspirin", "Aspirin low dose"]) == []


def test_interaction_summary():
    interactions = [
        DetectedInteraction("a", "high", 0.8),
        DetectedInteraction("b", "medium", 0.8),
        DetectedInteraction("c", "medium", 0.8),
    ]

    summary = get_interaction_summary(interactions)

    assert summary == {
        'total': 3,
        'high_severity': 1,
        'medium_severity': 2,
        'low_severity': 0,
        'max_severity': 'high'
    }
    assert get_interaction_summary([])['max_severity'] == 'none'
