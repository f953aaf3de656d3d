"""
Cache key construction and parsing.

Keys follow the ``{service}:{resource}:{id}[:{field}]`` naming convention.
"""

from shared.errors import KeyFormatError, KeyValidationError
from ..models import CacheKeyComponents

KEY_DELIMITER = ":"
MIN_SEGMENTS = 3
MAX_SEGMENTS = 4
GLOB_SPECIAL = frozenset("\\*?[]")


def build_key(components: CacheKeyComponents) -> str:
    """Build a cache key from its components."""
    if not components.service or not components.resource or not components.id:
        raise KeyValidationError(details={
            "service": components.service,
            "resource": components.resource,
            "id": components.id,
        })

    parts = [components.service, components.resource, components.id]
    if components.field:
        parts.append(components.field)

    for part in parts:
        if KEY_DELIMITER in part:
            raise KeyValidationError(
                f"Cache key segment must not contain '{KEY_DELIMITER}'",
                {"segment": part}
            )

    return KEY_DELIMITER.join(parts)


def parse_key(key: str) -> CacheKeyComponents:
    """Parse a cache key into its components."""
    parts = key.split(KEY_DELIMITER)

    if len(parts) < MIN_SEGMENTS or len(parts) > MAX_SEGMENTS or not all(parts):
        raise KeyFormatError(details={"key": key})

    return CacheKeyComponents(
        service=parts[0],
        resource=parts[1],
        id=parts[2],
        field=parts[3] if len(parts) == MAX_SEGMENTS else None,
    )


def is_valid_key(key: str) -> bool:
    """Check whether a key follows the naming convention."""
    try:
        parse_key(key)
        return True
    except KeyFormatError:
        return False


def escape_glob(segment: str) -> str:
    """Escape Redis glob metacharacters so a segment only matches itself."""
    return "".join("\\" + char if char in GLOB_SPECIAL else char for char in segment)
