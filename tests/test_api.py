"""Tests for the module-level bson helpers.

Exit Criteria:
- Every helper is bound to the default bson-backed normalizer
- Documented usage examples hold for real ObjectIds
"""

import time
from datetime import datetime, timezone

import pytest
from bson import ObjectId

from oidcore.schemas.errors import (
    InvalidComparisonError,
    NotAnIdentifierError,
    NotCoercibleError,
)
from oidutils import api as ou
from oidutils.backends.bson_backend import BsonBackend

HEX = "507f1f77bcf86cd799439011"


class TestDefaultNormalizer:
    """Tests for the shared normalizer."""

    def test_uses_bson(self) -> None:
        """Default backend is bson."""
        assert isinstance(ou.default_normalizer.backend, BsonBackend)

    def test_is_valid_alias(self) -> None:
        """is_valid and can_be_id are the same check."""
        assert ou.is_valid is ou.can_be_id

    def test_exports(self) -> None:
        """Every exported name exists."""
        for name in ou.__all__:
            assert hasattr(ou, name)


class TestNew:
    """Tests for new_id and new_ids with real ObjectIds."""

    def test_without_parameters(self) -> None:
        """Fresh ObjectId with 24-character text."""
        oid = ou.new_id()
        assert isinstance(oid, ObjectId)
        assert len(str(oid)) == 24

    def test_from_string(self) -> None:
        """Hex string round-trips."""
        assert str(ou.new_id(HEX)) == HEX

    def test_from_timestamp(self) -> None:
        """Epoch seconds set the creation time."""
        seconds = int(datetime(2023, 1, 1, tzinfo=timezone.utc).timestamp())
        assert ou.to_datetime(ou.new_id(seconds)).timestamp() == seconds

    def test_fallback_defaults(self) -> None:
        """None, "" and bad text give None unless a fallback is set."""
        assert ou.new_id(None) is None
        assert ou.new_id("") is None
        assert ou.new_id(None, fallback="X") == "X"
        assert ou.new_id("invalid") is None

    def test_strict(self) -> None:
        """Strict construction raises NotCoercibleError."""
        with pytest.raises(NotCoercibleError):
            ou.new_id("invalid", strict=True)

    def test_batch(self) -> None:
        """Default batch skips invalid values; strict batch raises."""
        assert ou.new_ids([HEX, "invalid"]) == [ObjectId(HEX)]
        with pytest.raises(NotCoercibleError):
            ou.new_ids([HEX, "invalid"], valid_only=False)


class TestIsValid:
    """Tests for the validity check."""

    def test_valid_string(self) -> None:
        assert ou.is_valid(HEX) is True

    def test_invalid_strings(self) -> None:
        assert ou.is_valid("invalid") is False
        assert ou.is_valid("123") is False
        assert ou.is_valid("") is False

    def test_zero(self) -> None:
        assert ou.can_be_id(0) is True


class TestUnique:
    """Tests for deduplication helpers."""

    def test_unique_ids(self) -> None:
        """Duplicates by value are removed, order kept."""
        a, b, c = ObjectId(), ObjectId(), ObjectId()
        assert ou.unique_ids([a, b, ObjectId(str(a)), c, b]) == [a, b, c]

    def test_unique_values(self) -> None:
        """Mixed values deduplicated by display text."""
        oid = ObjectId(HEX)
        assert ou.unique_values([oid, HEX, "x", "x"]) == [oid, "x"]

    def test_generator_input(self) -> None:
        """Generators are deduplicated without raising."""
        a, b = ObjectId(), ObjectId()
        assert ou.unique_ids(x for x in [a, b, a]) == [a, b]
        assert ou.unique_values(str(x) for x in [a, a]) == [str(a)]


class TestConversions:
    """Tests for to_datetime and to_text."""

    def test_to_datetime(self) -> None:
        """ObjectId gives an aware datetime."""
        assert isinstance(ou.to_datetime(ou.new_id()), datetime)

    def test_to_datetime_strict(self) -> None:
        """Strict conversion rejects non-ObjectIds."""
        with pytest.raises(NotAnIdentifierError, match="Argument must be an ObjectId instance"):
            ou.to_datetime("invalid", strict=True)

    def test_to_text(self) -> None:
        """Text is 24 characters."""
        assert len(ou.to_text(ou.new_id())) == 24

    def test_to_text_strict(self) -> None:
        """Strict text conversion rejects non-ObjectIds."""
        with pytest.raises(NotAnIdentifierError):
            ou.to_text("invalid", strict=True)

    def test_to_display_text(self) -> None:
        """Display text never validates."""
        assert ou.to_display_text(None) == "None"


class TestComparison:
    """Tests for is_after and is_before with real ObjectIds."""

    def test_is_after_ids(self) -> None:
        """Later ObjectId is after the earlier one."""
        now = int(time.time())
        earlier = ou.new_id(now - 10)
        later = ou.new_id(now)
        assert ou.is_after(later, earlier) is True
        assert ou.is_before(earlier, later) is True
        assert ou.is_after(earlier, later) is False

    def test_mixed_with_datetime(self) -> None:
        """Fresh ObjectIds are after 2020 and before 2100."""
        oid = ou.new_id()
        assert ou.is_after(oid, datetime(2020, 1, 1, tzinfo=timezone.utc))
        assert ou.is_before(oid, datetime(2100, 1, 1))
        assert not ou.is_after(datetime(2020, 1, 1), oid)

    def test_invalid_arguments(self) -> None:
        """Lenient comparisons return False; strict ones raise."""
        assert ou.is_after("invalid", "invalid") is False
        assert ou.is_before("invalid", "invalid") is False
        with pytest.raises(InvalidComparisonError):
            ou.is_after("invalid", "invalid", strict=True)
