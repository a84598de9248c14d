"""Random (version 4) UUID helpers."""

import re
import uuid

UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def random_uuid() -> uuid.UUID:
    """Generate a random RFC 4122 UUID (version 4) from the OS random source."""
    return uuid.uuid4()


def is_uuid(value: str) -> bool:
    """Tell whether a string has the canonical 8-4-4-4-12 UUID form."""
    return UUID_PATTERN.fullmatch(value) is not None
