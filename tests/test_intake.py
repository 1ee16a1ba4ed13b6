"""Tests for document intake and caller-side checks."""

from pathlib import Path

import pytest

from fair_rent.errors import InvalidPropertyError
from fair_rent.intake import (
    check_property,
    load_documents,
    property_from_document,
    proposed_rent_from_document,
)
from fair_rent.models import HousingType, Location, PropertyCharacteristics, PropertyType


class TestPropertyFromDocument:
    """Mapping store/form documents to engine input."""

    def test_store_document(self) -> None:
        doc = {
            "_id": "abc",
            "type": "Apartment",
            "housingType": "public",
            "bedrooms": 2,
            "bathrooms": 1.5,
            "squareFootage": 850,
            "amenities": ["wifi", "gym", "wifi"],
            "address": {"street": "1 Main St", "city": "Denver", "state": "Colorado"},
            "floor": 3,
            "hasElevator": True,
            "parkingSpaces": 2,
            "yearBuilt": 2012,
            "furnishedStatus": "furnished",
            "petFriendly": True,
            "proximityToTransport": True,
        }
        prop = property_from_document(doc)
        assert prop.type == PropertyType.APARTMENT
        assert prop.housing_type == HousingType.PUBLIC
        assert prop.bathrooms == 1.5
        assert prop.amenities == frozenset({"wifi", "gym"})
        assert prop.location == Location(city="Denver", state="Colorado")
        assert prop.is_furnished is True
        assert prop.has_elevator is True
        assert prop.pet_friendly is True
        assert prop.proximity_to_transport is True
        assert prop.utilities_included is False
        assert prop.parking_spaces == 2
        assert prop.year_built == 2012

    def test_snake_case_and_flat_location(self) -> None:
        doc = {
            "type": "room",
            "bedrooms": 1,
            "bathrooms": 1,
            "square_footage": 0,
            "city": "Austin",
            "state": "Texas",
            "amenities": "wifi, laundry",
            "is_furnished": True,
        }
        prop = property_from_document(doc)
        assert prop.type == PropertyType.ROOM
        assert prop.location.city == "Austin"
        assert prop.amenities == frozenset({"wifi", "laundry"})
        assert prop.is_furnished is True

    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidPropertyError) as exc:
            property_from_document({"_id": "x", "type": "castle", "bathrooms": 1, "squareFootage": 10})
        assert exc.value.property_id == "x"
        assert "unknown property type 'castle'" in exc.value.problems

    def test_unknown_housing_type(self) -> None:
        with pytest.raises(InvalidPropertyError):
            property_from_document(
                {"type": "house", "housingType": "military", "bathrooms": 1, "squareFootage": 900}
            )

    def test_bad_number(self) -> None:
        with pytest.raises(InvalidPropertyError) as exc:
            property_from_document({"type": "house", "bathrooms": 1, "squareFootage": "big"})
        assert exc.value.problems == ["squareFootage must be a number, got 'big'"]

    def test_strict_runs_shape_checks(self) -> None:
        doc = {"type": "apartment", "bedrooms": 1, "bathrooms": 1, "squareFootage": 0}
        with pytest.raises(InvalidPropertyError):
            property_from_document(doc)
        assert property_from_document(doc, strict=False).square_footage == 0

    @pytest.mark.parametrize("amenities", [5, {"wifi": True}, [1, 2]])
    def test_amenities_must_be_names(self, amenities: object) -> None:
        doc = {"type": "house", "bathrooms": 1, "squareFootage": 900, "amenities": amenities}
        with pytest.raises(InvalidPropertyError) as exc:
            property_from_document(doc)
        assert exc.value.problems[0].startswith("amenities must be a list of names")

    def test_string_booleans(self) -> None:
        doc = {
            "type": "apartment",
            "bathrooms": 1,
            "squareFootage": 500,
            "hasElevator": "false",
            "petFriendly": "True",
            "isFurnished": "no",
        }
        prop = property_from_document(doc)
        assert prop.has_elevator is False
        assert prop.pet_friendly is True
        assert prop.is_furnished is False

    def test_unreadable_boolean(self) -> None:
        doc = {"type": "apartment", "bathrooms": 1, "squareFootage": 500, "hasElevator": "maybe"}
        with pytest.raises(InvalidPropertyError) as exc:
            property_from_document(doc)
        assert exc.value.problems == ["hasElevator must be true or false, got 'maybe'"]

    def test_fractional_counts_rejected(self) -> None:
        doc = {"type": "apartment", "bedrooms": 2.7, "bathrooms": 1, "squareFootage": 500, "floor": 3.0}
        with pytest.raises(InvalidPropertyError) as exc:
            property_from_document(doc)
        assert exc.value.problems == ["bedrooms must be an integer, got 2.7"]

    def test_whole_float_counts_accepted(self) -> None:
        doc = {"type": "apartment", "bedrooms": 2.0, "bathrooms": 1, "squareFootage": 500, "floor": 3.0}
        prop = property_from_document(doc)
        assert prop.bedrooms == 2
        assert prop.floor == 3

    @pytest.mark.parametrize("sqft", ["nan", "inf", "-inf"])
    def test_non_finite_area_rejected(self, sqft: str) -> None:
        with pytest.raises(InvalidPropertyError) as exc:
            property_from_document({"type": "apartment", "bathrooms": 1, "squareFootage": sqft})
        assert exc.value.problems == ["squareFootage must be a finite number"]


class TestCheckProperty:
    """Shape checks the engine itself does not perform."""

    def _prop(self, **kwargs) -> PropertyCharacteristics:
        fields = dict(
            type=PropertyType.APARTMENT,
            bedrooms=1,
            bathrooms=1,
            square_footage=500,
            location=Location(city="Houston", state="Texas"),
        )
        fields.update(kwargs)
        return PropertyCharacteristics(**fields)

    def test_valid(self) -> None:
        assert check_property(self._prop()) == []

    def test_room_without_area_is_valid(self) -> None:
        assert check_property(self._prop(type=PropertyType.ROOM, square_footage=0)) == []

    def test_problems(self) -> None:
        problems = check_property(
            self._prop(square_footage=-5, bedrooms=-1, bathrooms=0.5, floor=-2, parking_spaces=-1, year_built=1700)
        )
        assert problems == [
            "squareFootage cannot be negative",
            "bedrooms cannot be negative",
            "bathrooms must be at least 1",
            "floor cannot be negative",
            "parkingSpaces cannot be negative",
            "yearBuilt seems too old",
        ]

    def test_future_year(self) -> None:
        assert check_property(self._prop(year_built=3000)) == ["yearBuilt cannot be in the future"]

    def test_non_finite_numbers(self) -> None:
        problems = check_property(self._prop(square_footage=float("nan"), bathrooms=float("inf")))
        assert problems == [
            "squareFootage must be a finite number",
            "bathrooms must be a finite number",
        ]


class TestProposedRent:
    """Asking rent extraction."""

    def test_nested_amount(self) -> None:
        assert proposed_rent_from_document({"rent": {"amount": 1200, "currency": "USD"}}) == 1200

    def test_flat_rent(self) -> None:
        assert proposed_rent_from_document({"rent": "950"}) == 950

    def test_missing_or_zero(self) -> None:
        assert proposed_rent_from_document({}) is None
        assert proposed_rent_from_document({"rent": {"amount": 0}}) is None

    def test_not_a_number(self) -> None:
        with pytest.raises(InvalidPropertyError):
            proposed_rent_from_document({"_id": "r", "rent": {"amount": "ask"}})


class TestLoadDocuments:
    """Reading YAML/JSON property files."""

    def test_yaml_list(self, tmp_path: Path) -> None:
        path = tmp_path / "props.yaml"
        path.write_text("- type: house\n  squareFootage: 900\n- type: room\n")
        assert len(load_documents(path)) == 2

    def test_json_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "props.json"
        path.write_text('{"properties": [{"type": "studio"}]}')
        assert load_documents(path) == [{"type": "studio"}]

    def test_single_document(self, tmp_path: Path) -> None:
        path = tmp_path / "one.yaml"
        path.write_text("type: yurt\n")
        assert load_documents(path) == [{"type": "yurt"}]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_documents(path) == []

    def test_scalar_list_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidPropertyError):
            load_documents(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_documents(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("- {type: apartment\n")
        with pytest.raises(InvalidPropertyError) as exc:
            load_documents(path)
        assert "is not valid YAML/JSON" in str(exc.value)


class TestPropertyModel:
    """Coercion in PropertyCharacteristics."""

    def test_plain_strings_coerced(self) -> None:
        prop = PropertyCharacteristics(
            type="house",
            housing_type="public",
            bedrooms=3,
            bathrooms=2,
            square_footage=1200,
            location=Location(city="Dallas", state="Texas"),
            amenities=["pool", "pool"],
        )
        assert prop.type is PropertyType.HOUSE
        assert prop.housing_type is HousingType.PUBLIC
        assert prop.amenities == frozenset({"pool"})
        assert prop.to_dict()["amenities"] == ["pool"]

    def test_unknown_type_rejected_at_construction(self) -> None:
        with pytest.raises(ValueError):
            PropertyCharacteristics(
                type="castle",
                bedrooms=1,
                bathrooms=1,
                square_footage=100,
                location=Location(city="", state=""),
            )
