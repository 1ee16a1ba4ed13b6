"""Pytest fixtures."""

import pytest

from fair_rent.models import Location, PropertyCharacteristics, PropertyType


@pytest.fixture
def houston_apartment() -> PropertyCharacteristics:
    """1BR/1BA 500 sqft apartment in an average-cost city."""
    return PropertyCharacteristics(
        type=PropertyType.APARTMENT,
        bedrooms=1,
        bathrooms=1,
        square_footage=500,
        amenities=frozenset(),
        location=Location(city="Houston", state="Texas"),
    )


@pytest.fixture
def large_apartment() -> PropertyCharacteristics:
    """1000 sqft apartment: 1200 base, 0.98 size factor -> 1176 before extras."""
    return PropertyCharacteristics(
        type=PropertyType.APARTMENT,
        bedrooms=1,
        bathrooms=1,
        square_footage=1000,
        location=Location(city="Houston", state="Texas"),
    )


@pytest.fixture
def property_documents() -> list[dict]:
    """Store-shaped documents: one speculative, one without rent, one invalid."""
    return [
        {
            "_id": "p-1",
            "type": "apartment",
            "bedrooms": 1,
            "bathrooms": 1,
            "squareFootage": 500,
            "amenities": [],
            "address": {"city": "Houston", "state": "Texas"},
            "rent": {"amount": 900, "currency": "USD", "paymentFrequency": "monthly"},
        },
        {
            "_id": "p-2",
            "type": "studio",
            "bedrooms": 0,
            "bathrooms": 1,
            "squareFootage": 400,
            "amenities": ["wifi"],
            "address": {"city": "Austin", "state": "Texas"},
        },
        {
            "_id": "p-3",
            "type": "castle",
            "bedrooms": 12,
            "bathrooms": 6,
            "squareFootage": 9000,
            "address": {"city": "Houston", "state": "Texas"},
        },
    ]
