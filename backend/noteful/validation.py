"""
Noteful Backend: Input Validation Helpers
===========================================

Shared checks used by every resource service before any database call.
Identifiers are UUIDs; anything `uuid.UUID()` cannot parse is malformed.
"""

import uuid
from typing import Any, Iterable, List, Optional

from noteful.exceptions import ValidationError


def is_valid_id(value: Any) -> bool:
    """Return True if `value` is a well-formed identifier. Never raises."""
    if isinstance(value, uuid.UUID):
        return True
    if not isinstance(value, str) or not value:
        return False
    try:
        uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        return False
    return True


def parse_id(value: Any, field: str = "id") -> uuid.UUID:
    """Convert a caller-supplied identifier, or raise a 400 for `field`."""
    if not is_valid_id(value):
        raise ValidationError.invalid_id(field)
    return value if isinstance(value, uuid.UUID) else uuid.UUID(value)


def parse_optional_id(value: Optional[str], field: str) -> Optional[uuid.UUID]:
    """Like parse_id, but None and "" mean "no reference"."""
    if value is None or value == "":
        return None
    return parse_id(value, field)


def parse_id_list(values: Iterable[Any], field: str) -> List[uuid.UUID]:
    """Validate every entry; duplicates collapse, first occurrence order kept."""
    parsed: List[uuid.UUID] = []
    for value in values:
        try:
            item = parse_id(value, field)
        except ValidationError as e:
            raise ValidationError(
                message=f"The `{field}` array contains an invalid `id`",
                field=field,
            ) from e
        if item not in parsed:
            parsed.append(item)
    return parsed


def require_text(value: Optional[str], field: str) -> str:
    """Reject missing, empty or whitespace-only required string fields."""
    if value is None or not value.strip():
        raise ValidationError.missing(field)
    return value
