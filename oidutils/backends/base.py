"""Backend ABC for ObjectId normalization.

The normalizer never touches an identifier's byte layout; it only uses the
capabilities declared here.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any


class IdentifierBackend(ABC):
    """Abstract base class for identifier libraries.

    Backends own construction, validity rules and rendering. This
    abstraction allows:
    - BsonBackend for real ObjectIds from pymongo's bson package
    - MockBackend for deterministic identifiers in tests
    """

    @abstractmethod
    def generate(self) -> Any:
        """Create a fresh identifier from the clock and an entropy source."""
        pass

    @abstractmethod
    def construct(self, value: Any) -> Any:
        """Create an identifier from a candidate value.

        Args:
            value: Hex text, raw bytes, epoch seconds or an existing identifier

        Returns:
            Identifier with the value's bytes

        Raises:
            NotCoercibleError: If value's shape does not match
        """
        pass

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """Return True if construct() would accept value. Never raises."""
        pass

    @abstractmethod
    def is_identifier(self, value: Any) -> bool:
        """Return True if value is already an identifier instance."""
        pass

    @abstractmethod
    def timestamp_of(self, identifier: Any) -> datetime:
        """Return the embedded creation time as an aware UTC datetime."""
        pass

    @abstractmethod
    def text_of(self, identifier: Any) -> str:
        """Return the 24-character lowercase hex form."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend name (e.g., "bson", "mock")."""
        pass
