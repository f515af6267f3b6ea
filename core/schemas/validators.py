"""Reusable field validators for request schemas."""

import re
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.constants import (
    METADATA_KEY_PATTERN,
    METADATA_MAX_ENTRIES,
    METADATA_MAX_KEY_LENGTH,
    METADATA_MAX_STRING_LENGTH,
)

_METADATA_KEY_RE = re.compile(METADATA_KEY_PATTERN)


def validate_timezone(value: str) -> str:
    """Ensure value names an IANA time zone.

    Raises:
        ValueError: If the zone is unknown.
    """
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown IANA time zone: {value}") from e
    return value


def validate_metadata(value: dict[str, Any]) -> dict[str, Any]:
    """Enforce the bounded flat key/value shape of notification metadata.

    Value types are checked by the field annotation; this adds the size
    limits and the key alphabet.

    Raises:
        ValueError: If a bound is exceeded or a key is malformed.
    """
    if len(value) > METADATA_MAX_ENTRIES:
        raise ValueError(f"metadata may hold at most {METADATA_MAX_ENTRIES} entries")

    for key, item in value.items():
        if not key or len(key) > METADATA_MAX_KEY_LENGTH:
            raise ValueError(
                f"metadata keys must be 1-{METADATA_MAX_KEY_LENGTH} characters"
            )
        if not _METADATA_KEY_RE.match(key):
            raise ValueError(
                f"metadata key {key!r} may only contain letters, digits, '_', '.', '-'"
            )
        if isinstance(item, str) and len(item) > METADATA_MAX_STRING_LENGTH:
            raise ValueError(
                f"metadata value for {key!r} exceeds "
                f"{METADATA_MAX_STRING_LENGTH} characters"
            )

    return value
