"""Map property documents to pricing inputs and pre-check their shape.

The pricing engine never rejects input; callers run these checks first.
Documents come from listing forms or the property store, so both the
store's camelCase keys and snake_case keys are accepted.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from .errors import InvalidPropertyError
from .models import HousingType, Location, PropertyCharacteristics, PropertyType

logger = logging.getLogger(__name__)

_MIN_YEAR_BUILT = 1800

_TRUE_STRINGS = {"true", "yes", "y", "1", "on"}
_FALSE_STRINGS = {"false", "no", "n", "0", "off", ""}

# Boolean features: (model field, accepted document keys)
_FLAG_KEYS: list[tuple[str, tuple[str, ...]]] = [
    ("has_elevator", ("hasElevator", "has_elevator")),
    ("utilities_included", ("utilitiesIncluded", "utilities_included")),
    ("pet_friendly", ("petFriendly", "pet_friendly")),
    ("has_balcony", ("hasBalcony", "has_balcony")),
    ("has_garden", ("hasGarden", "has_garden")),
    ("proximity_to_transport", ("proximityToTransport", "proximity_to_transport")),
    ("proximity_to_schools", ("proximityToSchools", "proximity_to_schools")),
    ("proximity_to_shopping", ("proximityToShopping", "proximity_to_shopping")),
]


def _first(doc: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if doc.get(key) is not None:
            return doc[key]
    return None


def _optional_int(value: Any, name: str, problems: list[str]) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, float) and not value.is_integer():
        problems.append(f"{name} must be an integer, got {value!r}")
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        problems.append(f"{name} must be an integer, got {value!r}")
        return None


def _number(value: Any, name: str, problems: list[str], default: float = 0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        problems.append(f"{name} must be a number, got {value!r}")
        return default


def _flag(value: Any, name: str, problems: list[str]) -> bool:
    """Read a boolean feature; form payloads send "true"/"false" strings."""
    if value is None:
        return False
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        problems.append(f"{name} must be true or false, got {value!r}")
        return False
    if isinstance(value, (bool, int, float)):
        return bool(value)
    problems.append(f"{name} must be true or false, got {value!r}")
    return False


def _is_furnished(doc: dict[str, Any], problems: list[str]) -> bool:
    flag = _first(doc, "isFurnished", "is_furnished")
    if flag is not None:
        return _flag(flag, "isFurnished", problems)
    return doc.get("furnishedStatus") == "furnished"


def property_id(doc: dict[str, Any]) -> str | None:
    value = _first(doc, "id", "_id")
    return str(value) if value is not None else None


def property_from_document(doc: dict[str, Any], strict: bool = True) -> PropertyCharacteristics:
    """Build PropertyCharacteristics from a listing/store document.

    Raises InvalidPropertyError when the type or housing type is not known,
    when a number does not parse, or (with ``strict``) when check_property
    finds a problem.
    """
    problems: list[str] = []
    pid = property_id(doc)

    raw_type = _first(doc, "type", "propertyType", "property_type")
    try:
        ptype = PropertyType(str(raw_type).strip().lower())
    except ValueError:
        problems.append(f"unknown property type {raw_type!r}")
        ptype = None

    raw_housing = _first(doc, "housingType", "housing_type")
    housing: HousingType | None = None
    if raw_housing is not None:
        try:
            housing = HousingType(str(raw_housing).strip().lower())
        except ValueError:
            problems.append(f"unknown housing type {raw_housing!r}")

    place = _first(doc, "location", "address") or {}
    if not isinstance(place, dict):
        problems.append("address must be a mapping with city and state")
        place = {}
    city = str(_first(place, "city") or _first(doc, "city") or "")
    state = str(_first(place, "state") or _first(doc, "state") or "")

    amenities = doc.get("amenities") or []
    if isinstance(amenities, str):
        amenities = [a.strip() for a in amenities.split(",") if a.strip()]
    elif not isinstance(amenities, (list, tuple, set, frozenset)):
        problems.append(f"amenities must be a list of names, got {amenities!r}")
        amenities = []
    elif not all(isinstance(a, str) for a in amenities):
        problems.append(f"amenities must be a list of names, got {list(amenities)!r}")
        amenities = []

    bedrooms = _optional_int(doc.get("bedrooms"), "bedrooms", problems) or 0
    bathrooms = _number(doc.get("bathrooms"), "bathrooms", problems)
    square_footage = _number(_first(doc, "squareFootage", "square_footage", "sqft"), "squareFootage", problems)
    floor = _optional_int(doc.get("floor"), "floor", problems)
    parking = _optional_int(_first(doc, "parkingSpaces", "parking_spaces"), "parkingSpaces", problems)
    year_built = _optional_int(_first(doc, "yearBuilt", "year_built"), "yearBuilt", problems)
    flags = {field: _flag(_first(doc, *keys), keys[0], problems) for field, keys in _FLAG_KEYS}
    is_furnished = _is_furnished(doc, problems)

    if problems:
        raise InvalidPropertyError(problems, pid)

    prop = PropertyCharacteristics(
        type=ptype,
        housing_type=housing,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        square_footage=square_footage,
        amenities=frozenset(amenities),
        location=Location(city=city, state=state),
        floor=floor,
        parking_spaces=parking,
        year_built=year_built,
        is_furnished=is_furnished,
        **flags,
    )
    if strict:
        found = check_property(prop)
        if found:
            raise InvalidPropertyError(found, pid)
    return prop


def proposed_rent_from_document(doc: dict[str, Any]) -> float | None:
    """The listing's asking rent (``rent.amount`` or a flat ``rent``), if any."""
    rent = doc.get("rent")
    if isinstance(rent, dict):
        rent = rent.get("amount")
    if rent is None or rent == "":
        return None
    try:
        value = float(rent)
    except (TypeError, ValueError):
        raise InvalidPropertyError([f"rent must be a number, got {rent!r}"], property_id(doc)) from None
    return value if value > 0 else None


def check_property(prop: PropertyCharacteristics) -> list[str]:
    """Return shape problems the engine does not guard against (empty = OK)."""
    problems: list[str] = []
    if not math.isfinite(prop.square_footage):
        problems.append("squareFootage must be a finite number")
    elif prop.square_footage < 0:
        problems.append("squareFootage cannot be negative")
    elif prop.type != PropertyType.ROOM and prop.square_footage == 0:
        problems.append("squareFootage must be greater than 0")
    if prop.bedrooms < 0:
        problems.append("bedrooms cannot be negative")
    if not math.isfinite(prop.bathrooms):
        problems.append("bathrooms must be a finite number")
    elif prop.bathrooms < 1:
        problems.append("bathrooms must be at least 1")
    if prop.floor is not None and prop.floor < 0:
        problems.append("floor cannot be negative")
    if prop.parking_spaces is not None and prop.parking_spaces < 0:
        problems.append("parkingSpaces cannot be negative")
    if prop.year_built is not None:
        if prop.year_built < _MIN_YEAR_BUILT:
            problems.append("yearBuilt seems too old")
        elif prop.year_built > date.today().year + 2:
            problems.append("yearBuilt cannot be in the future")
    return problems


def load_documents(path: Path | str) -> list[dict[str, Any]]:
    """Read a YAML or JSON file holding one document or a list of them."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Property file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidPropertyError([f"{path} is not valid YAML/JSON: {e}"]) from e
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("properties", [data])
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise InvalidPropertyError([f"{path} must hold a mapping or a list of mappings"])
    logger.debug("Read %d property documents from %s", len(data), path)
    return data
