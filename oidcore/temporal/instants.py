"""Creation-time helpers shared by construction and comparison.

An ObjectId stores its creation time as an unsigned 32-bit count of seconds
since the Unix epoch, so only whole seconds in [0, 2**32 - 1] can be
embedded. Timestamps read back from an ObjectId are timezone-aware UTC.
"""

import math
from datetime import datetime, timezone
from numbers import Integral, Real
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MAX_EPOCH_SECONDS = 2**32 - 1


def is_instant(value: Any) -> bool:
    """Check whether value is a datetime (naive or aware) holding a time.

    pandas NaT subclasses datetime but is not an instant.
    """
    # NaT never equals itself
    return isinstance(value, datetime) and value == value


def as_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def epoch_seconds(value: Any) -> int | None:
    """Convert a number to embeddable epoch seconds.

    Rules:
    - bool is not a number here
    - integers must lie in [0, 2**32 - 1]
    - NaN maps to 0, the epoch
    - other finite floats are truncated toward zero, then range-checked
    - infinities and non-numbers are rejected

    Returns:
        Epoch seconds, or None if value cannot be embedded

    Examples:
        >>> epoch_seconds(0)
        0
        >>> epoch_seconds(float("nan"))
        0
        >>> epoch_seconds(1672531200.9)
        1672531200
        >>> epoch_seconds(-1) is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        seconds = int(value)
    elif isinstance(value, Real):
        number = float(value)
        if math.isnan(number):
            return 0
        if math.isinf(number):
            return None
        seconds = int(number)
    else:
        return None

    if 0 <= seconds <= MAX_EPOCH_SECONDS:
        return seconds
    return None


def from_epoch_seconds(seconds: int) -> datetime:
    """Build the aware UTC datetime for whole epoch seconds."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)
