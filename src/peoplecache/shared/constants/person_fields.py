"""
Person Field Constants

Wire keys of a person payload as returned by the people and friends
endpoints.
"""


class PersonFields:
    """Person payload key constants."""

    # Required
    ID = "id"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    USERNAME = "username"

    # Optional
    FRIEND_COUNT = "friendCount"
    ADDRESS = "address"
    CITY = "city"
    STATE = "state"
    ZIP_CODE = "zipCode"
    PHONE_NUMBER = "phoneNumber"
    IMAGE_URL = "imageURL"
