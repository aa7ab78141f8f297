"""Per-call failure policies for identifier construction.

There is no global mode switch: every call chooses its own posture, either
through keyword arguments or by passing one of these frozen policies.
"""

from dataclasses import dataclass
from typing import Any


class _Missing:
    """Marker for an argument the caller did not pass at all."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class CoercionPolicy:
    """Failure policy for single-value construction.

    Attributes:
        fallback: Returned when a lenient call gets a non-coercible value
        strict: Raise NotCoercibleError instead of returning fallback
    """

    fallback: Any = None
    strict: bool = False


@dataclass(frozen=True)
class BatchPolicy:
    """Failure policy for batch construction.

    Attributes:
        valid_only: Skip non-coercible elements instead of raising
    """

    valid_only: bool = True

