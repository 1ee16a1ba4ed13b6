"""Coefficient tables for the ethical pricing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

AT_MOST = "at_most"
AT_LEAST = "at_least"


@dataclass(frozen=True)
class StepTable:
    """Ordered (threshold, multiplier) pairs with an explicit clamp.

    ``at_most`` scans thresholds ascending and picks the first one the value is
    ``<=``; ``at_least`` scans descending and picks the first one the value is
    ``>=``. A value that matches nothing takes the last entry in scan order, so
    out-of-range inputs clamp to the table edge instead of falling through.
    """

    steps: tuple[tuple[float, float], ...]
    mode: str = AT_MOST

    def __post_init__(self) -> None:
        if self.mode not in (AT_MOST, AT_LEAST):
            raise ValueError(f"Unknown step table mode: {self.mode!r}")
        if not self.steps:
            raise ValueError("Step table needs at least one entry")
        ordered = sorted(
            ((float(t), float(m)) for t, m in self.steps),
            key=lambda s: s[0],
            reverse=self.mode == AT_LEAST,
        )
        object.__setattr__(self, "steps", tuple(ordered))

    @classmethod
    def from_mapping(cls, mapping: Mapping[float, float], mode: str = AT_MOST) -> "StepTable":
        return cls(tuple(mapping.items()), mode)

    def lookup(self, value: float) -> float:
        for threshold, multiplier in self.steps:
            if self.mode == AT_MOST and value <= threshold:
                return multiplier
            if self.mode == AT_LEAST and value >= threshold:
                return multiplier
        return self.steps[-1][1]


# Monthly base price per sqft by property type
BASE_RATES: dict[str, float] = {
    "apartment": 1.2,
    "house": 1.0,
    "studio": 1.5,
    "room": 2.0,
    "duplex": 1.3,
    "penthouse": 2.5,
    "couchsurfing": 0.0,
    "roommates": 1.8,
    "coliving": 1.6,
    "hostel": 0.8,
    "guesthouse": 1.4,
    "campsite": 0.3,
    "boat": 1.7,
    "treehouse": 1.9,
    "yurt": 0.6,
    "other": 1.0,
}

HOUSING_TYPE_MULTIPLIERS: dict[str, float] = {
    "private": 1.0,
    "public": 0.8,
}

# Cost-of-living factors, matched on city then state
LOCATION_MULTIPLIERS: dict[str, float] = {
    "New York": 2.5,
    "San Francisco": 2.3,
    "Los Angeles": 2.0,
    "Boston": 1.8,
    "Seattle": 1.7,
    "Washington": 1.6,
    "Chicago": 1.5,
    "Denver": 1.4,
    "Austin": 1.3,
    "Portland": 1.3,
    "Atlanta": 1.2,
    "Dallas": 1.1,
    "Houston": 1.0,
    "Phoenix": 1.0,
    "Las Vegas": 1.0,
    "Orlando": 1.0,
    "Tampa": 1.0,
    "Miami": 1.2,
}

# Flat monthly additions for entries in ``amenities``
AMENITY_VALUES: dict[str, float] = {
    "wifi": 30,
    "parking": 50,
    "gym": 40,
    "pool": 60,
    "laundry": 25,
    "dishwasher": 20,
    "air_conditioning": 35,
    "heating": 30,
    "balcony": 25,
    "garden": 20,
}

# Flat monthly additions for boolean features; parking_spaces is per extra space
FEATURE_VALUES: dict[str, float] = {
    "elevator": 15,
    "furnished": 100,
    "pet_friendly": 20,
    "utilities_included": 80,
    "proximity_transport": 25,
    "proximity_schools": 15,
    "proximity_shopping": 10,
    "parking_spaces": 30,
}

BEDROOM_ADJUSTMENTS = StepTable.from_mapping(
    {0: 0.8, 1: 1.0, 2: 1.3, 3: 1.6, 4: 1.9, 5: 2.2, 6: 2.5, 7: 2.8, 8: 3.1},
    AT_LEAST,
)

BATHROOM_ADJUSTMENTS = StepTable.from_mapping(
    {1: 1.0, 1.5: 1.1, 2: 1.15, 2.5: 1.2, 3: 1.25, 3.5: 1.3, 4: 1.35, 4.5: 1.4, 5: 1.45},
    AT_LEAST,
)

# Small units carry a per-sqft premium, large ones a discount
SIZE_EFFICIENCY = StepTable.from_mapping(
    {200: 1.2, 400: 1.1, 600: 1.05, 800: 1.0, 1000: 0.98, 1200: 0.95, 1500: 0.92, 2000: 0.9},
    AT_MOST,
)

QUALITY_BY_YEAR = StepTable.from_mapping(
    {2020: 1.15, 2015: 1.1, 2010: 1.05, 2005: 1.0, 2000: 0.95, 1995: 0.9, 1990: 0.85, 1985: 0.8, 1980: 0.75},
    AT_LEAST,
)

FLOOR_ADJUSTMENTS = StepTable.from_mapping(
    {1: 0.95, 2: 1.0, 3: 1.02, 4: 1.05, 5: 1.08, 6: 1.1, 7: 1.12, 8: 1.15, 9: 1.18, 10: 1.2},
    AT_MOST,
)


@dataclass(frozen=True)
class WarningThresholds:
    """Limits for the post-pipeline caution checks."""

    min_square_footage: float = 200
    max_bedrooms: int = 5
    max_location_multiplier: float = 2.0
    min_year_built: int = 1980
    max_floor: int = 10
    max_amenity_share: float = 0.3


@dataclass(frozen=True)
class PricingTables:
    """Every coefficient the engine reads, injected at construction time."""

    base_rates: Mapping[str, float] = field(default_factory=lambda: dict(BASE_RATES))
    housing_type_multipliers: Mapping[str, float] = field(
        default_factory=lambda: dict(HOUSING_TYPE_MULTIPLIERS)
    )
    location_multipliers: Mapping[str, float] = field(
        default_factory=lambda: dict(LOCATION_MULTIPLIERS)
    )
    amenity_values: Mapping[str, float] = field(default_factory=lambda: dict(AMENITY_VALUES))
    feature_values: Mapping[str, float] = field(default_factory=lambda: dict(FEATURE_VALUES))
    bedroom_adjustments: StepTable = BEDROOM_ADJUSTMENTS
    bathroom_adjustments: StepTable = BATHROOM_ADJUSTMENTS
    size_efficiency: StepTable = SIZE_EFFICIENCY
    quality_by_year: StepTable = QUALITY_BY_YEAR
    floor_adjustments: StepTable = FLOOR_ADJUSTMENTS
    room_base_price: float = 800
    default_location_multiplier: float = 1.0
    band_below: float = 0.15
    band_above: float = 0.15
    warnings: WarningThresholds = field(default_factory=WarningThresholds)

    def location_multiplier(self, city: str, state: str) -> float:
        """City match first, then state, then the default."""
        if city in self.location_multipliers:
            return self.location_multipliers[city]
        if state in self.location_multipliers:
            return self.location_multipliers[state]
        return self.default_location_multiplier


DEFAULT_PRICING_TABLES = PricingTables()

