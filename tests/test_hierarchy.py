"""Tests for the facility tier ordering."""

from __future__ import annotations

import pytest

from healthref.services.hierarchy import (
    HIERARCHY,
    FacilityTier,
    UnknownTierError,
    is_terminal,
    tier_for,
    tiers_above,
)

LABELS = ["SUB_CEN", "PHC", "CHC", "S_T_H", "District Hospital", "Medical College"]


def test_hierarchy_order_lowest_first():
    assert [t.label for t in HIERARCHY] == LABELS


def test_ranks_are_strictly_increasing():
    ranks = [int(t) for t in HIERARCHY]
    assert ranks == sorted(set(ranks))


@pytest.mark.parametrize("label", LABELS)
def test_tier_for_round_trips_label(label):
    assert tier_for(label).label == label


@pytest.mark.parametrize("label", ["Clinic", "phc", "", "District hospital"])
def test_tier_for_unknown_label(label):
    with pytest.raises(UnknownTierError) as excinfo:
        tier_for(label)
    assert excinfo.value.label == label


def test_unknown_tier_error_is_lookup_error():
    with pytest.raises(LookupError):
        tier_for("Ayurvedic Dispensary")


def test_tiers_above_phc():
    assert [t.label for t in tiers_above(FacilityTier.PHC)] == LABELS[2:]


def test_tiers_above_lowest_is_everything_else():
    assert tiers_above(FacilityTier.SUB_CEN) == HIERARCHY[1:]


def test_tiers_above_top_tier_is_empty():
    assert tiers_above(FacilityTier.MEDICAL_COLLEGE) == ()
    assert is_terminal(FacilityTier.MEDICAL_COLLEGE)
    assert not is_terminal(FacilityTier.DISTRICT_HOSPITAL)


def test_tiers_above_never_include_self_or_lower():
    for tier in HIERARCHY:
        assert all(higher > tier for higher in tiers_above(tier))
