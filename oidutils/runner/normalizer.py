"""ObjectId normalization facade.

Coerces heterogeneous input into identifiers, deduplicates collections,
renders canonical text and orders identifiers by creation time. All
identifier-specific work goes through an IdentifierBackend.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from oidcore.ids.canonical import (
    as_items,
    as_ordered,
    to_display_text,
    unique_by_key,
)
from oidcore.schemas.errors import (
    InvalidComparisonError,
    NotAnIdentifierError,
    NotCoercibleError,
)
from oidcore.schemas.policy import MISSING, BatchPolicy, CoercionPolicy
from oidcore.temporal.instants import as_utc, is_instant
from oidutils.backends.base import IdentifierBackend

logger = logging.getLogger(__name__)


class IdentifierNormalizer:
    """Stateless facade over an identifier backend.

    Failure policy is chosen per call:
    - Lenient calls (the default) resolve bad input to a fallback or False
    - Strict calls raise from the IdentifierError family instead

    The normalizer holds nothing but its backend and can be shared freely.
    """

    def __init__(self, backend: IdentifierBackend) -> None:
        """Initialize normalizer.

        Args:
            backend: Identifier library used for construction and rendering
        """
        self._backend = backend

    @property
    def backend(self) -> IdentifierBackend:
        """The identifier backend in use."""
        return self._backend

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def new_id(
        self,
        value: Any = MISSING,
        *,
        fallback: Any = None,
        strict: bool = False,
        policy: CoercionPolicy | None = None,
    ) -> Any:
        """Coerce one value into an identifier.

        Args:
            value: Hex text, 12 raw bytes, epoch seconds or an identifier.
                   Omit to generate a fresh identifier.
            fallback: Returned by lenient calls for non-coercible values
            strict: Raise instead of returning fallback
            policy: Overrides fallback and strict when given

        Returns:
            Identifier, or fallback for a lenient call on bad input

        Raises:
            NotCoercibleError: If strict and value cannot become an identifier
        """
        if value is MISSING:
            return self._backend.generate()

        if policy is not None:
            fallback, strict = policy.fallback, policy.strict

        if strict:
            try:
                return self._backend.construct(value)
            except NotCoercibleError:
                logger.debug("Strict construction rejected %r", value)
                raise

        # 0 and NaN are valid epoch seconds; only None and "" short-circuit
        if value is None or (isinstance(value, str) and not value):
            return fallback

        if not self.can_be_id(value):
            logger.debug("Falling back for non-coercible %s", type(value).__name__)
            return fallback

        return self._backend.construct(value)

    def new_ids(
        self,
        values: Sequence[Any] = (),
        *,
        valid_only: bool = True,
        policy: BatchPolicy | None = None,
    ) -> list[Any]:
        """Coerce a sequence of values into identifiers, preserving order.

        Args:
            values: Ordered values to convert
            valid_only: Skip non-coercible values instead of raising
            policy: Overrides valid_only when given

        Returns:
            List of identifiers, never longer than values

        Raises:
            InvalidArgumentError: If values is not an ordered sequence
            NotCoercibleError: If not valid_only and any value is non-coercible
        """
        values = as_ordered(values)
        if policy is not None:
            valid_only = policy.valid_only

        if valid_only:
            source = [value for value in values if self.can_be_id(value)]
            dropped = len(values) - len(source)
            if dropped:
                logger.debug("Skipped %d of %d non-coercible values", dropped, len(values))
        else:
            source = values

        # Built in full before returning: a failure leaves no partial result
        return [self._backend.construct(value) for value in source]

    # -------------------------------------------------------------------------
    # Deduplication
    # -------------------------------------------------------------------------

    def unique_ids(self, items: Iterable[Any] = ()) -> list[Any]:
        """Keep the first occurrence of each identifier.

        Items may be any iterable and are walked once. Non-identifier items
        are dropped silently. Identifiers are keyed by their canonical text.
        Never raises.
        """
        return unique_by_key(
            as_items(items),
            key=self._backend.text_of,
            keep=self.is_id,
        )

    def unique_values(self, items: Iterable[Any] = ()) -> list[Any]:
        """Keep the first occurrence of each value, keyed by display text.

        Every kind of value is retained. An identifier and its hex string
        render identically and therefore count as duplicates. Never raises.
        """
        return unique_by_key(as_items(items), key=to_display_text)

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def can_be_id(self, value: Any) -> bool:
        """Return True if value can be converted to an identifier."""
        return self._backend.is_valid(value)

    def is_id(self, value: Any) -> bool:
        """Return True if value is already an identifier instance."""
        return self._backend.is_identifier(value)

    def is_same_id(self, first: Any, second: Any) -> bool:
        """Return True if both values are identifiers with equal bytes."""
        if not self.is_id(first) or not self.is_id(second):
            return False
        return self._backend.text_of(first) == self._backend.text_of(second)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def to_datetime(self, value: Any, fallback: Any = None, *, strict: bool = False) -> Any:
        """Return an identifier's creation time as an aware UTC datetime.

        Raises:
            NotAnIdentifierError: If strict and value is not an identifier
        """
        if not self.is_id(value):
            if strict:
                raise NotAnIdentifierError(value)
            return fallback
        return self._backend.timestamp_of(value)

    def to_text(self, value: Any, fallback: Any = None, *, strict: bool = False) -> Any:
        """Return an identifier's 24-character lowercase hex form.

        Raises:
            NotAnIdentifierError: If strict and value is not an identifier
        """
        if not self.is_id(value):
            if strict:
                raise NotAnIdentifierError(value)
            return fallback
        return self._backend.text_of(value)

    def to_display_text(self, value: Any) -> str:
        """Render any value with str(); performs no validation."""
        return to_display_text(value)

    # -------------------------------------------------------------------------
    # Comparators
    # -------------------------------------------------------------------------

    def is_after(self, first: Any, second: Any, *, strict: bool = False) -> bool:
        """Return True if first was created strictly after second.

        Each operand may be an identifier or a datetime.

        Raises:
            InvalidComparisonError: If strict and an operand has no time
        """
        instants = self._resolve_pair(first, second, strict)
        if instants is None:
            return False
        return instants[0] > instants[1]

    def is_before(self, first: Any, second: Any, *, strict: bool = False) -> bool:
        """Return True if first was created strictly before second.

        Each operand may be an identifier or a datetime.

        Raises:
            InvalidComparisonError: If strict and an operand has no time
        """
        instants = self._resolve_pair(first, second, strict)
        if instants is None:
            return False
        return instants[0] < instants[1]

    def _resolve_pair(
        self, first: Any, second: Any, strict: bool
    ) -> tuple[datetime, datetime] | None:
        """Resolve both operands to aware UTC datetimes.

        Returns:
            Pair of datetimes, or None for a lenient call on bad operands
        """
        resolved = [
            self._backend.timestamp_of(value) if self.is_id(value) else value
            for value in (first, second)
        ]
        if not all(is_instant(value) for value in resolved):
            if strict:
                raise InvalidComparisonError(first, second)
            return None
        return as_utc(resolved[0]), as_utc(resolved[1])
