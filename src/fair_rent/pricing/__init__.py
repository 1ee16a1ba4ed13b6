"""Ethical rent pricing engine and guidance helpers."""

from .engine import (
    EthicalPricingEngine,
    calculate_ethical_rent,
    is_speculative_pricing,
    round_half_up,
    validate_ethical_pricing,
)
from .guidance import get_pricing_breakdown, get_pricing_guidance

__all__ = [
    "EthicalPricingEngine",
    "calculate_ethical_rent",
    "validate_ethical_pricing",
    "is_speculative_pricing",
    "round_half_up",
    "get_pricing_guidance",
    "get_pricing_breakdown",
]
