"""Decoding of people API response bodies."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import orjson

from peoplecache.shared.errors import MalformedPayloadError, RecordValidationError
from peoplecache.shared.models.person import Person

logger = logging.getLogger(__name__)


def decode_item_list(body: bytes, key: str, url: str, operation: str) -> list[Any]:
    """Return the array stored under key in a JSON object body.

    Raises:
        MalformedPayloadError: If body is not JSON, not an object, or the
            key is missing or does not hold an array
    """
    try:
        document = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        raise MalformedPayloadError(url, "body is not valid JSON", operation, e) from e

    if not isinstance(document, dict):
        raise MalformedPayloadError(
            url,
            f"top-level value is {type(document).__name__}, expected object",
            operation,
        )

    items = document.get(key)
    if not isinstance(items, list):
        raise MalformedPayloadError(url, f"missing '{key}' array", operation)
    return items


def iter_valid_people(items: list[Any], operation: str) -> Iterator[tuple[int, Person]]:
    """Yield (position, person) for each payload that validates.

    Invalid payloads are skipped without affecting the position of the
    entries that follow them.
    """
    for position, payload in enumerate(items):
        try:
            person = Person.from_payload(payload)
        except RecordValidationError as e:
            logger.debug(
                "Skipping invalid person payload at position %d: %s",
                position,
                e.message,
                extra={"operation": operation, "context": e.context.safe_dict()},
            )
            continue
        yield position, person
