"""Facility care-level hierarchy.

The ranking is fixed at import time: ``SUB_CEN`` is the lowest tier and
``Medical College`` the highest.  A facility type outside this list is an
error, never an implicit lowest tier.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType


class FacilityTier(IntEnum):
    SUB_CEN = 0
    PHC = 1
    CHC = 2
    S_T_H = 3
    DISTRICT_HOSPITAL = 4
    MEDICAL_COLLEGE = 5

    @property
    def label(self) -> str:
        """Type string as stored in the ``FacilityType`` column."""
        return _LABELS[self]


class UnknownTierError(LookupError):
    """Raised when a facility type is not part of the hierarchy."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(label)


_LABELS: MappingProxyType[FacilityTier, str] = MappingProxyType(
    {
        FacilityTier.SUB_CEN: "SUB_CEN",
        FacilityTier.PHC: "PHC",
        FacilityTier.CHC: "CHC",
        FacilityTier.S_T_H: "S_T_H",
        FacilityTier.DISTRICT_HOSPITAL: "District Hospital",
        FacilityTier.MEDICAL_COLLEGE: "Medical College",
    }
)

_BY_LABEL: MappingProxyType[str, FacilityTier] = MappingProxyType(
    {label: tier for tier, label in _LABELS.items()}
)

# Lowest to highest.
HIERARCHY: tuple[FacilityTier, ...] = tuple(sorted(FacilityTier))


def tier_for(label: str) -> FacilityTier:
    """Return the tier for a stored type string or raise :class:`UnknownTierError`."""
    try:
        return _BY_LABEL[label]
    except (KeyError, TypeError):
        raise UnknownTierError(label) from None


def tiers_above(tier: FacilityTier) -> tuple[FacilityTier, ...]:
    """All tiers strictly above *tier*, lowest first.  Empty for the top tier."""
    return HIERARCHY[tier + 1:]


def is_terminal(tier: FacilityTier) -> bool:
    return not tiers_above(tier)
