"""Person record model.

This module defines the immutable Pydantic model for a person as returned
by the people and friends endpoints. Validation happens at the external
API boundary: a payload either becomes a complete Person or is rejected
with RecordValidationError.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from peoplecache.shared.constants import PersonFields
from peoplecache.shared.errors import RecordValidationError


class Person(BaseModel):
    """A person from the remote people collection.

    Required string fields must be present and be strings. Optional
    fields degrade instead of failing: a friendCount that is not an
    integer (an integral float like 3.0 counts) becomes 0 and an
    optional value that is not a string becomes None. Fields are read
    by their wire names only. Unknown keys are ignored.

    Attributes:
        id: Globally unique person identifier
        first_name: Given name
        last_name: Family name
        email: Email address
        username: Account name
        friend_count: Number of friends reported with the record (may be stale)
        address: Street address
        city: City
        state: State or region
        zip_code: Postal code
        phone_number: Phone number
        image_url: Server supplied avatar URL

    Example:
        >>> person = Person.from_payload({
        ...     "id": "p1",
        ...     "firstName": "Ada",
        ...     "lastName": "Lovelace",
        ...     "email": "ada@example.com",
        ...     "username": "ada",
        ... })
        >>> person.display_name
        'Lovelace, Ada'
        >>> person.friend_count
        0
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Required fields
    id: StrictStr = Field(..., alias=PersonFields.ID)
    first_name: StrictStr = Field(..., alias=PersonFields.FIRST_NAME)
    last_name: StrictStr = Field(..., alias=PersonFields.LAST_NAME)
    email: StrictStr = Field(..., alias=PersonFields.EMAIL)
    username: StrictStr = Field(..., alias=PersonFields.USERNAME)

    # Optional fields
    friend_count: int = Field(0, alias=PersonFields.FRIEND_COUNT)
    address: str | None = Field(None, alias=PersonFields.ADDRESS)
    city: str | None = Field(None, alias=PersonFields.CITY)
    state: str | None = Field(None, alias=PersonFields.STATE)
    zip_code: str | None = Field(None, alias=PersonFields.ZIP_CODE)
    phone_number: str | None = Field(None, alias=PersonFields.PHONE_NUMBER)
    image_url: str | None = Field(None, alias=PersonFields.IMAGE_URL)

    @field_validator("friend_count", mode="before")
    @classmethod
    def _friend_count_or_zero(cls, value: Any) -> int:
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        # JSON numbers such as 3.0 still count as integers
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return 0

    @field_validator(
        "address",
        "city",
        "state",
        "zip_code",
        "phone_number",
        "image_url",
        mode="before",
    )
    @classmethod
    def _string_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @classmethod
    def from_payload(cls, payload: Any) -> Person:
        """Build a Person from an untyped JSON object.

        Args:
            payload: Decoded JSON value for one person

        Returns:
            The validated Person

        Raises:
            RecordValidationError: If payload is not a mapping or a required
                field is missing or not a string
        """
        if not isinstance(payload, Mapping):
            msg = f"Person payload must be an object, got {type(payload).__name__}"
            raise RecordValidationError(msg)

        try:
            return cls.model_validate(dict(payload))
        except ValidationError as e:
            first = e.errors()[0]
            field = str(first["loc"][0]) if first.get("loc") else None
            msg = f"Invalid person payload: {first['msg']}"
            raise RecordValidationError(msg, field=field, original_error=e) from e

    @property
    def display_name(self) -> str:
        """Name as shown in the people list ("Last, First")."""
        return f"{self.last_name}, {self.first_name}"

    @property
    def full_name(self) -> str:
        """Name as shown in the detail title ("First Last")."""
        return f"{self.first_name} {self.last_name}"

    @property
    def friend_count_label(self) -> str | None:
        """Friend count text for a list row, None when there are no friends."""
        if self.friend_count == 0:
            return None
        if self.friend_count == 1:
            return "1 friend"
        return f"{self.friend_count} friends"

    @property
    def has_image_url(self) -> bool:
        """True when the record carries a non-empty avatar URL."""
        return bool(self.image_url)
