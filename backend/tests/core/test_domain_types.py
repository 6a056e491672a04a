"""Domain Types — enum values are the exact strings stored and sent over the wire."""

from gym_tracker.core.domain_types import EquipmentType, MuscleGroup, StatsPeriod


def test_multi_word_values_keep_spaces():
    assert MuscleGroup.FULL_BODY.value == "Full Body"
    assert EquipmentType.RESISTANCE_BAND.value == "Resistance Band"


def test_stats_periods():
    assert [p.value for p in StatsPeriod] == ["4weeks", "12weeks", "6months", "all"]
