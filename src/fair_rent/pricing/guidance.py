"""Human-readable guidance text built on top of the pricing engine."""

from __future__ import annotations

from ..models import PropertyCharacteristics
from .engine import EthicalPricingEngine, _default_engine


def get_pricing_guidance(
    prop: PropertyCharacteristics,
    engine: EthicalPricingEngine | None = None,
) -> str:
    """One-paragraph guidance shown next to the rent field of a listing form."""
    rec = (engine or _default_engine).calculate_ethical_rent(prop)
    return (
        f"Based on your property characteristics, we recommend a rent up to ${rec.max_rent} per month. "
        f"Our suggested price is ${rec.suggested_rent}/month. "
        "You can set a lower price to make it more affordable."
    )


def get_pricing_breakdown(
    prop: PropertyCharacteristics,
    engine: EthicalPricingEngine | None = None,
) -> str:
    """Itemised breakdown, one bullet per pipeline stage."""
    rec = (engine or _default_engine).calculate_ethical_rent(prop)
    b = rec.breakdown
    lines = [
        "Pricing Breakdown:",
        f"• Base Price: ${b.base_price}",
        f"• Location Adjustment: ${b.location_adjustment}",
        f"• Room Adjustment: ${b.room_adjustment}",
        f"• Size Adjustment: ${b.size_adjustment}",
        f"• Quality Adjustment: ${b.quality_adjustment}",
        f"• Utility Adjustment: ${b.utility_adjustment}",
        f"• Amenities: ${b.amenity_adjustment}",
        f"• Total Suggested: ${rec.suggested_rent}",
    ]
    return "\n".join(lines)
