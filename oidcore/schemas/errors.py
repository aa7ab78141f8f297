"""Error taxonomy for identifier normalization.

Lenient calls never raise these for ordinary bad input; they surface only
where a caller opts into strict behavior (``strict=True`` or
``valid_only=False``) or passes the wrong container type.
"""

from typing import Any

MSG_NOT_COERCIBLE = "Value cannot be converted to an ObjectId"
MSG_INVALID_ARGUMENT = "Argument must be a sequence of values"
MSG_NOT_AN_IDENTIFIER = "Argument must be an ObjectId instance"
MSG_INVALID_COMPARISON = "Arguments must be ObjectId instances or datetime objects"


class IdentifierError(Exception):
    """Base class for all identifier normalization errors."""


class NotCoercibleError(IdentifierError, ValueError):
    """Value's shape cannot produce an identifier.

    Attributes:
        value: The rejected input
    """

    def __init__(self, value: Any, message: str = MSG_NOT_COERCIBLE) -> None:
        super().__init__(f"{message}: {value!r}")
        self.value = value


class InvalidArgumentError(IdentifierError, TypeError):
    """A container argument was not an ordered sequence, or lacked a column."""

    def __init__(self, value: Any, message: str | None = None) -> None:
        if message is None:
            message = f"{MSG_INVALID_ARGUMENT}, got {type(value).__name__}"
        super().__init__(message)
        self.value = value


class NotAnIdentifierError(IdentifierError, TypeError):
    """A strict accessor received something other than an identifier."""

    def __init__(self, value: Any) -> None:
        super().__init__(MSG_NOT_AN_IDENTIFIER)
        self.value = value


class InvalidComparisonError(IdentifierError, TypeError):
    """A strict comparator received an operand with no creation time.

    Attributes:
        values: Both operands as passed by the caller
    """

    def __init__(self, *values: Any) -> None:
        super().__init__(MSG_INVALID_COMPARISON)
        self.values = values
