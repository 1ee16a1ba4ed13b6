"""Data models for property characteristics and pricing recommendations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class PropertyType(str, Enum):
    """Accommodation categories with a base per-sqft rate."""

    APARTMENT = "apartment"
    HOUSE = "house"
    ROOM = "room"
    STUDIO = "studio"
    DUPLEX = "duplex"
    PENTHOUSE = "penthouse"
    COUCHSURFING = "couchsurfing"
    ROOMMATES = "roommates"
    COLIVING = "coliving"
    HOSTEL = "hostel"
    GUESTHOUSE = "guesthouse"
    CAMPSITE = "campsite"
    BOAT = "boat"
    TREEHOUSE = "treehouse"
    YURT = "yurt"
    OTHER = "other"


class HousingType(str, Enum):
    """Private (market-rate) or public (subsidized) housing."""

    PRIVATE = "private"
    PUBLIC = "public"


@dataclass(frozen=True)
class Location:
    """City/state pair used for the cost-of-living lookup."""

    city: str
    state: str


@dataclass(frozen=True)
class PropertyCharacteristics:
    """Input to the pricing engine (source-agnostic)."""

    type: PropertyType
    bedrooms: int
    bathrooms: float
    square_footage: float
    location: Location
    amenities: frozenset[str] = field(default_factory=frozenset)
    housing_type: HousingType | None = None
    floor: int | None = None
    has_elevator: bool = False
    parking_spaces: int | None = None
    year_built: int | None = None
    is_furnished: bool = False
    utilities_included: bool = False
    pet_friendly: bool = False
    has_balcony: bool = False
    has_garden: bool = False
    proximity_to_transport: bool = False
    proximity_to_schools: bool = False
    proximity_to_shopping: bool = False

    def __post_init__(self) -> None:
        # Plain strings are coerced; values outside the enums raise ValueError here,
        # before the engine ever sees them.
        object.__setattr__(self, "type", PropertyType(self.type))
        if self.housing_type is not None:
            object.__setattr__(self, "housing_type", HousingType(self.housing_type))
        # Accept any iterable of amenity ids; order and duplicates don't matter.
        if not isinstance(self.amenities, frozenset):
            object.__setattr__(self, "amenities", frozenset(_as_iterable(self.amenities)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "housing_type": self.housing_type.value if self.housing_type else None,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "square_footage": self.square_footage,
            "amenities": sorted(self.amenities),
            "city": self.location.city,
            "state": self.location.state,
            "floor": self.floor,
            "has_elevator": self.has_elevator,
            "parking_spaces": self.parking_spaces,
            "year_built": self.year_built,
            "is_furnished": self.is_furnished,
            "utilities_included": self.utilities_included,
            "pet_friendly": self.pet_friendly,
            "has_balcony": self.has_balcony,
            "has_garden": self.has_garden,
            "proximity_to_transport": self.proximity_to_transport,
            "proximity_to_schools": self.proximity_to_schools,
            "proximity_to_shopping": self.proximity_to_shopping,
        }


def _as_iterable(value: Iterable[str] | str | None) -> Iterable[str]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return value


@dataclass(frozen=True)
class PricingBreakdown:
    """Dollar delta introduced by each pipeline stage (not running totals)."""

    base_price: int
    location_adjustment: int
    size_adjustment: int
    room_adjustment: int
    amenity_adjustment: int
    quality_adjustment: int
    utility_adjustment: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_price": self.base_price,
            "location_adjustment": self.location_adjustment,
            "size_adjustment": self.size_adjustment,
            "room_adjustment": self.room_adjustment,
            "amenity_adjustment": self.amenity_adjustment,
            "quality_adjustment": self.quality_adjustment,
            "utility_adjustment": self.utility_adjustment,
        }


@dataclass(frozen=True)
class PricingRecommendation:
    """Suggested rent, ethical band and itemised reasoning for one property."""

    suggested_rent: int
    min_rent: int
    max_rent: int
    is_within_ethical_range: bool
    reasoning: tuple[str, ...]
    warnings: tuple[str, ...]
    breakdown: PricingBreakdown

    def to_dict(self) -> dict[str, Any]:
        return {
            "suggested_rent": self.suggested_rent,
            "min_rent": self.min_rent,
            "max_rent": self.max_rent,
            "is_within_ethical_range": self.is_within_ethical_range,
            "reasoning": list(self.reasoning),
            "warnings": list(self.warnings),
            "breakdown": self.breakdown.to_dict(),
        }


@dataclass(frozen=True)
class PricingQuote:
    """A recommendation for one property, with the asking rent when known."""

    property_id: str
    characteristics: PropertyCharacteristics
    recommendation: PricingRecommendation
    proposed_rent: float | None = None

    @property
    def is_speculative(self) -> bool:
        return self.proposed_rent is not None and not self.recommendation.is_within_ethical_range

    def to_dict(self) -> dict[str, Any]:
        return {
            "property_id": self.property_id,
            "property": self.characteristics.to_dict(),
            "proposed_rent": self.proposed_rent,
            "is_speculative": self.is_speculative,
            "recommendation": self.recommendation.to_dict(),
        }
