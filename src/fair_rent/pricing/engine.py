"""Ethical rent pricing engine."""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from ..models import (
    HousingType,
    PricingBreakdown,
    PricingRecommendation,
    PropertyCharacteristics,
    PropertyType,
)
from ..config import get_pricing_tables, load_config
from ..tables import DEFAULT_PRICING_TABLES, PricingTables

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class EthicalPricingEngine:
    """
    Rule-based rent calculator.
    Base rate, then multiplicative adjustments, then flat amenity additions,
    then the housing-type multiplier. Stateless once constructed.
    """

    def __init__(
        self,
        tables: PricingTables | None = None,
        config: dict | None = None,
    ) -> None:
        if tables is not None:
            self.tables = tables
        elif config is not None:
            self.tables = get_pricing_tables(config)
        else:
            self.tables = DEFAULT_PRICING_TABLES

    @classmethod
    def from_config_file(cls, config_path=None) -> "EthicalPricingEngine":
        return cls(config=load_config(config_path))

    def calculate_ethical_rent(self, prop: PropertyCharacteristics) -> PricingRecommendation:
        """Run the full pricing pipeline on a property."""
        t = self.tables
        reasoning: list[str] = []
        warnings: list[str] = []
        type_key = prop.type.value

        # Base price
        if prop.type == PropertyType.ROOM:
            base_price = float(t.room_base_price)
            reasoning.append(f"Base room price: ${_fmt(base_price)}")
        else:
            rate = t.base_rates.get(type_key)
            if rate is None:
                rate = t.base_rates.get(PropertyType.OTHER.value, 1.0)
                logger.warning("No base rate for type %r, using %s", type_key, rate)
                warnings.append(f"No base rate for {type_key} - priced at the default rate")
            base_price = prop.square_footage * rate
            reasoning.append(
                f"{type_key} base price: ${_fmt(rate)}/sqft × {_fmt(prop.square_footage)}sqft"
                f" = ${round_half_up(base_price)}"
            )

        location_multiplier = t.location_multiplier(prop.location.city, prop.location.state)
        location_price = base_price * location_multiplier
        reasoning.append(
            f"Location adjustment ({_fmt(location_multiplier)}x): ${round_half_up(location_price)}"
        )

        bedroom_multiplier = t.bedroom_adjustments.lookup(prop.bedrooms)
        bedroom_price = location_price * bedroom_multiplier
        reasoning.append(
            f"Bedroom adjustment ({_fmt(bedroom_multiplier)}x): ${round_half_up(bedroom_price)}"
        )

        bathroom_multiplier = t.bathroom_adjustments.lookup(prop.bathrooms)
        bathroom_price = bedroom_price * bathroom_multiplier
        reasoning.append(
            f"Bathroom adjustment ({_fmt(bathroom_multiplier)}x): ${round_half_up(bathroom_price)}"
        )

        size_multiplier = t.size_efficiency.lookup(prop.square_footage)
        size_price = bathroom_price * size_multiplier
        reasoning.append(
            f"Size efficiency adjustment ({_fmt(size_multiplier)}x): ${round_half_up(size_price)}"
        )

        quality_price = size_price
        if prop.year_built:
            quality_multiplier = t.quality_by_year.lookup(prop.year_built)
            quality_price = size_price * quality_multiplier
            reasoning.append(
                f"Quality adjustment ({_fmt(quality_multiplier)}x, built {prop.year_built}):"
                f" ${round_half_up(quality_price)}"
            )

        floor_price = quality_price
        if prop.floor and prop.floor > 0:
            floor_multiplier = t.floor_adjustments.lookup(prop.floor)
            floor_price = quality_price * floor_multiplier
            reasoning.append(
                f"Floor adjustment ({_fmt(floor_multiplier)}x, floor {prop.floor}):"
                f" ${round_half_up(floor_price)}"
            )

        amenity_value, amenity_items = self._amenity_additions(prop)

        housing_type = prop.housing_type or HousingType.PRIVATE
        housing_multiplier = t.housing_type_multipliers.get(housing_type.value, 1.0)
        final_price = (floor_price + amenity_value) * housing_multiplier
        suggested_rent = round_half_up(final_price)

        if amenity_value > 0:
            reasoning.append(f"Amenities added: +${_fmt(amenity_value)} ({', '.join(amenity_items)})")
        if housing_type == HousingType.PUBLIC:
            reasoning.append(
                f"Public housing discount ({_fmt(housing_multiplier)}x): ${round_half_up(final_price)}"
            )
        reasoning.append(f"Final suggested rent: ${suggested_rent}")

        min_rent = round_half_up(suggested_rent * (1 - t.band_below))
        max_rent = round_half_up(suggested_rent * (1 + t.band_above))

        warnings.extend(self._warnings(prop, location_multiplier, amenity_value, suggested_rent))

        logger.debug(
            "Priced %s in %s: suggested=%s band=[%s, %s]",
            type_key,
            prop.location.city,
            suggested_rent,
            min_rent,
            max_rent,
        )

        return PricingRecommendation(
            suggested_rent=suggested_rent,
            min_rent=min_rent,
            max_rent=max_rent,
            is_within_ethical_range=True,
            reasoning=tuple(reasoning),
            warnings=tuple(warnings),
            breakdown=PricingBreakdown(
                base_price=round_half_up(base_price),
                location_adjustment=round_half_up(location_price - base_price),
                size_adjustment=round_half_up(size_price - bathroom_price),
                room_adjustment=round_half_up(bedroom_price - location_price),
                amenity_adjustment=round_half_up(amenity_value),
                quality_adjustment=round_half_up(quality_price - size_price),
                utility_adjustment=round_half_up(floor_price - quality_price),
            ),
        )

    def validate_ethical_pricing(
        self, proposed_rent: float, prop: PropertyCharacteristics
    ) -> PricingRecommendation:
        """Check a proposed rent against the ethical maximum (no lower bound)."""
        recommendation = self.calculate_ethical_rent(prop)
        within = proposed_rent <= recommendation.max_rent
        warnings = recommendation.warnings
        if not within:
            warnings = warnings + (
                f"Rent exceeds ethical maximum (${recommendation.max_rent}) - may be speculative",
            )
            logger.debug("Proposed rent %s above max %s", proposed_rent, recommendation.max_rent)
        return replace(recommendation, is_within_ethical_range=within, warnings=warnings)

    def is_speculative_pricing(self, proposed_rent: float, prop: PropertyCharacteristics) -> bool:
        """True when the proposed rent is above the ethical band."""
        return proposed_rent > self.calculate_ethical_rent(prop).max_rent

    def _amenity_additions(self, prop: PropertyCharacteristics) -> tuple[float, list[str]]:
        """Sum flat dollar additions and describe each one."""
        amenity_values = self.tables.amenity_values
        features = self.tables.feature_values
        total = 0.0
        items: list[str] = []

        for amenity in sorted(prop.amenities):
            value = amenity_values.get(amenity)
            if value:
                total += value
                items.append(f"{amenity}: +${_fmt(value)}")

        flags = [
            (prop.has_elevator, "elevator", "elevator"),
            (prop.is_furnished, "furnished", "furnished"),
            (prop.pet_friendly, "pet_friendly", "pet friendly"),
            (prop.utilities_included, "utilities_included", "utilities included"),
            (prop.proximity_to_transport, "proximity_transport", "near transport"),
            (prop.proximity_to_schools, "proximity_schools", "near schools"),
            (prop.proximity_to_shopping, "proximity_shopping", "near shopping"),
        ]
        for present, key, label in flags:
            value = features.get(key, 0)
            if present and value:
                total += value
                items.append(f"{label}: +${_fmt(value)}")

        if prop.parking_spaces and prop.parking_spaces > 1:
            extra = prop.parking_spaces - 1
            parking_value = extra * features.get("parking_spaces", 0)
            total += parking_value
            items.append(f"additional parking ({extra}): +${_fmt(parking_value)}")

        return total, items

    def _warnings(
        self,
        prop: PropertyCharacteristics,
        location_multiplier: float,
        amenity_value: float,
        suggested_rent: int,
    ) -> list[str]:
        """Independent heuristic checks run after the pipeline."""
        limits = self.tables.warnings
        out: list[str] = []
        if prop.square_footage < limits.min_square_footage and prop.type != PropertyType.ROOM:
            out.append("Very small property - consider if this is suitable for rental")
        if prop.bedrooms > limits.max_bedrooms:
            out.append("Large property - ensure pricing reflects actual market value")
        if location_multiplier > limits.max_location_multiplier:
            out.append("High-cost area - ensure pricing is justified by location benefits")
        if prop.year_built and prop.year_built < limits.min_year_built:
            out.append("Very old property - consider renovation costs and maintenance")
        if prop.floor and prop.floor > limits.max_floor:
            out.append("Very high floor - ensure elevator access and emergency procedures")
        if amenity_value > suggested_rent * limits.max_amenity_share:
            out.append("High amenity value - ensure amenities justify the premium")
        return out


_default_engine = EthicalPricingEngine()


def calculate_ethical_rent(prop: PropertyCharacteristics) -> PricingRecommendation:
    """Price a property with the built-in tables."""
    return _default_engine.calculate_ethical_rent(prop)


def validate_ethical_pricing(
    proposed_rent: float, prop: PropertyCharacteristics
) -> PricingRecommendation:
    """Validate a proposed rent with the built-in tables."""
    return _default_engine.validate_ethical_pricing(proposed_rent, prop)


def is_speculative_pricing(proposed_rent: float, prop: PropertyCharacteristics) -> bool:
    return _default_engine.is_speculative_pricing(proposed_rent, prop)
