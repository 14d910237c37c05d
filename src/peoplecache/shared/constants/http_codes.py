"""HTTP Status Code Constants.

This module contains HTTP status code constants for clear and
type-safe handling of API responses and network operations.
"""


class HTTPStatusCodes:
    """HTTP status code constants."""

    # 2xx Success
    OK = 200
    NON_AUTHORITATIVE_INFORMATION = 203

    # 4xx Client Errors
    BAD_REQUEST = 400

    # The people API only treats 200..203 as a usable response
    ACCEPTED_MIN = OK
    ACCEPTED_MAX = NON_AUTHORITATIVE_INFORMATION

    @staticmethod
    def is_accepted(code: int) -> bool:
        """Check if status code is inside the accepted 200..203 range."""
        return HTTPStatusCodes.ACCEPTED_MIN <= code <= HTTPStatusCodes.ACCEPTED_MAX


class HTTPHeaders:
    """Common HTTP header names."""

    ACCEPT = "Accept"
    USER_AGENT = "User-Agent"


class ContentTypes:
    """Common content type values."""

    JSON = "application/json"
