"""Mock backend for testing ObjectId normalization.

Produces deterministic identifiers without pymongo, so normalizer behavior
can be checked independently of bson's clock and random bytes.
"""

import struct
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from oidcore.ids.canonical import RAW_LENGTH, is_canonical_hex
from oidcore.schemas.errors import NotCoercibleError
from oidcore.temporal.instants import epoch_seconds, from_epoch_seconds
from oidutils.backends.base import IdentifierBackend


@dataclass(frozen=True)
class MockIdentifier:
    """Immutable 12-byte identifier used by MockBackend.

    Attributes:
        raw: The 12 identifier bytes; the first 4 are big-endian epoch seconds
    """

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != RAW_LENGTH:
            raise ValueError(f"MockIdentifier needs {RAW_LENGTH} bytes, got {len(self.raw)}")

    @property
    def seconds(self) -> int:
        """Embedded creation time in epoch seconds."""
        return struct.unpack(">I", self.raw[:4])[0]

    def __str__(self) -> str:
        return self.raw.hex()


class MockBackend(IdentifierBackend):
    """Mock backend with a fake clock and a counter.

    Each generate() call advances the clock by ``step`` seconds and puts the
    call number in the trailing bytes, so identifiers are unique and ordered.

    Example:
        backend = MockBackend(start=1_700_000_000)
        first = backend.generate()
        second = backend.generate()
        # second's timestamp is one second after first's
    """

    def __init__(self, start: int = 1_700_000_000, step: int = 1) -> None:
        """Initialize mock backend.

        Args:
            start: Epoch seconds embedded in the first generated identifier
            step: Seconds the fake clock advances per generate() call
        """
        self._start = start
        self._step = step
        self._generated: list[MockIdentifier] = []

    @property
    def generated(self) -> list[MockIdentifier]:
        """Identifiers produced by generate(), oldest first."""
        return list(self._generated)

    def generate(self) -> MockIdentifier:
        """Return the next identifier from the fake clock and record it."""
        count = len(self._generated)
        seconds = self._start + count * self._step
        identifier = MockIdentifier(struct.pack(">IQ", seconds, count + 1))
        self._generated.append(identifier)
        return identifier

    def construct(self, value: Any) -> MockIdentifier:
        """Build a mock identifier; epoch seconds get zero trailing bytes.

        Raises:
            NotCoercibleError: If value has no accepted shape
        """
        if isinstance(value, MockIdentifier):
            return value

        if isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
            if len(raw) != RAW_LENGTH:
                raise NotCoercibleError(value)
            return MockIdentifier(raw)

        if isinstance(value, str):
            if not is_canonical_hex(value):
                raise NotCoercibleError(value)
            return MockIdentifier(bytes.fromhex(value))

        seconds = epoch_seconds(value)
        if seconds is None:
            raise NotCoercibleError(value)
        return MockIdentifier(struct.pack(">IQ", seconds, 0))

    def is_valid(self, value: Any) -> bool:
        """Return True if construct() would succeed."""
        try:
            self.construct(value)
        except NotCoercibleError:
            return False
        return True

    def is_identifier(self, value: Any) -> bool:
        """Return True for MockIdentifier instances."""
        return isinstance(value, MockIdentifier)

    def timestamp_of(self, identifier: MockIdentifier) -> datetime:
        """Return the embedded seconds as an aware UTC datetime."""
        return from_epoch_seconds(identifier.seconds)

    def text_of(self, identifier: MockIdentifier) -> str:
        """Return the lowercase hex form."""
        return str(identifier)

    @property
    def name(self) -> str:
        """Return mock backend name."""
        return "mock"
