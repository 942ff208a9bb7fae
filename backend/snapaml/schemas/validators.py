"""Reusable Pydantic validators for wizard and profile input.

- E-mail validation
- Option membership for select fields
- Lenient date input (accepts the ISO datetimes browsers send, read in UTC)
"""

import re
from datetime import date, datetime, timezone
from typing import Any

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def validate_email(value: str) -> str:
    """Validate email address.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email is invalid
    """
    if not value:
        raise ValueError("Email is required")

    value = value.strip().lower()

    if len(value) > 254:  # RFC 5321
        raise ValueError("Email address too long")

    if not EMAIL_REGEX.match(value):
        raise ValueError("Invalid email address")

    return value


def validate_choice(value: str, allowed: list[str], label: str) -> str:
    """Ensure a select field holds one of its offered values."""
    if value not in allowed:
        raise ValueError(f"{label} must be one of: {', '.join(allowed)}")
    return value


def coerce_date(value: Any) -> Any:
    """Accept `YYYY-MM-DD` as well as a full ISO datetime such as
    `2020-04-30T23:00:00.000Z`.

    Datetimes carrying an offset are converted to UTC before the calendar
    date is taken, so `2020-05-01T01:00:00+02:00` becomes 2020-04-30.
    Naive datetimes keep their own date. Anything else is left to Pydantic.
    """
    if isinstance(value, str) and len(value) > 10 and value[10] == "T":
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def canonical_date(value: date | datetime) -> str:
    """Render a date as the canonical `YYYY-MM-DD` string."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
