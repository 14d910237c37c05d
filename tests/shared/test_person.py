"""Tests for the Person model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from peoplecache.shared.errors import ErrorCode, RecordValidationError
from peoplecache.shared.models.person import Person


class TestPersonFromPayload:
    """Test cases for Person.from_payload validation."""

    def test_valid_payload(self, person_payload) -> None:
        # Given
        payload = person_payload(
            4,
            address="1 Main St",
            city="Springfield",
            state="IL",
            zipCode="62701",
            phoneNumber="555-0100",
        )

        # When
        person = Person.from_payload(payload)

        # Then
        assert person.id == "p4"
        assert person.first_name == "First4"
        assert person.last_name == "Last4"
        assert person.email == "person4@example.com"
        assert person.username == "user4"
        assert person.friend_count == 1
        assert person.city == "Springfield"
        assert person.zip_code == "62701"
        assert person.phone_number == "555-0100"
        assert person.image_url == "https://images.test/p4.png"

    @pytest.mark.parametrize("field", ["id", "firstName", "lastName", "email", "username"])
    def test_missing_required_field_is_rejected(self, person_payload, field) -> None:
        payload = person_payload(1)
        del payload[field]

        with pytest.raises(RecordValidationError) as exc_info:
            Person.from_payload(payload)

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
        assert exc_info.value.field == field
        assert isinstance(exc_info.value.original_error, ValidationError)

    @pytest.mark.parametrize("value", [42, None, ["p1"], True])
    def test_non_string_id_is_rejected(self, person_payload, value) -> None:
        with pytest.raises(RecordValidationError):
            Person.from_payload(person_payload(1, id=value))

    @pytest.mark.parametrize("payload", [None, "p1", 3, ["id"]])
    def test_non_object_payload_is_rejected(self, payload) -> None:
        with pytest.raises(RecordValidationError):
            Person.from_payload(payload)

    @pytest.mark.parametrize("value", ["7", 2.5, None, True, {"n": 1}])
    def test_non_integer_friend_count_becomes_zero(self, person_payload, value) -> None:
        person = Person.from_payload(person_payload(1, friendCount=value))
        assert person.friend_count == 0

    @pytest.mark.parametrize(("value", "expected"), [(3.0, 3), (0.0, 0)])
    def test_integral_float_friend_count_is_kept(self, person_payload, value, expected) -> None:
        person = Person.from_payload(person_payload(1, friendCount=value))
        assert person.friend_count == expected

    def test_missing_friend_count_defaults_to_zero(self, person_payload) -> None:
        payload = person_payload(1)
        del payload["friendCount"]
        assert Person.from_payload(payload).friend_count == 0

    def test_non_string_optional_field_becomes_none(self, person_payload) -> None:
        person = Person.from_payload(person_payload(1, city=12, imageURL=["x"]))
        assert person.city is None
        assert person.image_url is None

    def test_python_field_names_do_not_replace_wire_keys(self) -> None:
        # Given a payload keyed by attribute names instead of wire names
        payload = {
            "id": "p1",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "username": "ada",
        }

        # When / Then
        with pytest.raises(RecordValidationError) as exc_info:
            Person.from_payload(payload)
        assert exc_info.value.field == "firstName"

    def test_unknown_keys_are_ignored(self, person_payload) -> None:
        person = Person.from_payload(person_payload(1, favouriteColour="teal"))
        assert not hasattr(person, "favouriteColour")

    def test_person_is_immutable(self, make_person) -> None:
        person = make_person(1)
        with pytest.raises(ValidationError):
            person.first_name = "Changed"


class TestPersonPresentation:
    """Test cases for the display helpers."""

    def test_display_and_full_name(self, make_person) -> None:
        person = make_person(1, firstName="Ada", lastName="Lovelace")
        assert person.display_name == "Lovelace, Ada"
        assert person.full_name == "Ada Lovelace"

    @pytest.mark.parametrize(
        ("count", "label"),
        [(0, None), (1, "1 friend"), (2, "2 friends"), (250, "250 friends")],
    )
    def test_friend_count_label(self, make_person, count, label) -> None:
        assert make_person(1, friendCount=count).friend_count_label == label

    def test_has_image_url(self, make_person) -> None:
        assert make_person(1).has_image_url
        assert not make_person(1, image=False).has_image_url
        assert not make_person(1, imageURL="").has_image_url
