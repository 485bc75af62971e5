"""
Wardrobe Backend — Request Validation Helpers
==============================================

What:  Small guards shared by every service: id format and required fields.
Why:   All id-accepting endpoints must reject a malformed id with 400 before
       any query runs. Path ids arrive as strings so the check lives here
       rather than in FastAPI's int coercion (which would answer 422).
"""

import re
from typing import Any, Optional

from wardrobe.exceptions import NotFoundError, ValidationError

_ID_PATTERN = re.compile(r"[0-9]+")

# Upper bound of the Integer primary keys; larger ids cannot name a row
MAX_ID = 2**31 - 1
_MAX_ID_DIGITS = len(str(MAX_ID))


def parse_id(raw: Any, resource: str, field: Optional[str] = None, bounded: bool = False) -> int:
    """
    Convert a path or body id into an int.

    Accepts non-negative integers and strings of ASCII digits only:
    "12" → 12, 12 → 12; "-1", "1.5", "abc", "", True and None are rejected.

    A well-formed id beyond MAX_ID names no row and cannot be bound by the
    drivers. By default it is returned as MAX_ID + 1 and the existence
    predicates answer False for it. With bounded=True it raises NotFoundError
    here, for callers that query by id directly.

    Raises:
        ValidationError naming the resource whose id was malformed.
        NotFoundError   for an out-of-range id when bounded is set.
    """
    value = None
    if isinstance(raw, bool):
        pass
    elif isinstance(raw, int) and raw >= 0:
        value = raw
    elif isinstance(raw, str) and _ID_PATTERN.fullmatch(raw):
        digits = raw.lstrip("0") or "0"
        value = int(digits) if len(digits) <= _MAX_ID_DIGITS else MAX_ID + 1

    if value is None:
        raise ValidationError(
            message=f"Invalid {resource} ID format. The ID must be a non-negative integer.",
            field=field or "id",
            context={"value": repr(raw)[:50]},
        )

    if value > MAX_ID:
        if bounded:
            raise NotFoundError(resource=resource, resource_id=str(raw)[:50])
        return MAX_ID + 1
    return value


def id_in_range(value: int) -> bool:
    return 0 <= value <= MAX_ID


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(resource: str, **fields: Any) -> None:
    """
    Raise a single ValidationError listing every missing field.

    Example:
        require_fields("label", name=body.name, category=body.category)
    """
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise ValidationError(
            message=f"Missing data for {resource}: {', '.join(missing)}.",
            field=missing[0],
            context={"missing": missing},
        )


def require_choice(value: str, choices, field: str) -> str:
    """Reject values outside a fixed vocabulary (logical type, category, role)."""
    if value not in choices:
        raise ValidationError(
            message=f"Invalid {field} '{value}'. Allowed values: {', '.join(choices)}",
            field=field,
            context={"allowed": list(choices)},
        )
    return value
