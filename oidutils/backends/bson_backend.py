"""ObjectId backend built on pymongo's bson package."""

from datetime import datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from oidcore.ids.canonical import RAW_LENGTH, is_canonical_hex
from oidcore.schemas.errors import NotCoercibleError
from oidcore.temporal.instants import epoch_seconds, from_epoch_seconds
from oidutils.backends.base import IdentifierBackend


class BsonBackend(IdentifierBackend):
    """Backend producing ``bson.ObjectId`` values.

    Accepted shapes:
    - an existing ObjectId (returned as is; ObjectIds are immutable)
    - 24 hex characters, either case
    - exactly 12 bytes (bytes, bytearray or memoryview)
    - epoch seconds in [0, 2**32 - 1]; the other 8 bytes are zero

    bson itself would accept a 24-character string with embedded
    whitespace (``bytes.fromhex`` skips it) and yield a short id, so text is
    shape-checked here before it reaches ``ObjectId``.
    """

    def generate(self) -> ObjectId:
        """Return a fresh ObjectId from bson's clock and counter."""
        return ObjectId()

    def construct(self, value: Any) -> ObjectId:
        """Build an ObjectId from one of the accepted shapes.

        Raises:
            NotCoercibleError: If value has no accepted shape
        """
        if isinstance(value, ObjectId):
            return value

        if isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
            if len(raw) != RAW_LENGTH:
                raise NotCoercibleError(value)
            return ObjectId(raw)

        if isinstance(value, str):
            if not is_canonical_hex(value):
                raise NotCoercibleError(value)
            try:
                return ObjectId(value)
            except (InvalidId, TypeError) as e:
                raise NotCoercibleError(value) from e

        seconds = epoch_seconds(value)
        if seconds is None:
            raise NotCoercibleError(value)
        return ObjectId.from_datetime(from_epoch_seconds(seconds))

    def is_valid(self, value: Any) -> bool:
        """Return True if construct() would succeed."""
        try:
            self.construct(value)
        except NotCoercibleError:
            return False
        return True

    def is_identifier(self, value: Any) -> bool:
        """Return True for ObjectId instances."""
        return isinstance(value, ObjectId)

    def timestamp_of(self, identifier: ObjectId) -> datetime:
        """Return the aware UTC creation time bson reports."""
        return identifier.generation_time

    def text_of(self, identifier: ObjectId) -> str:
        """Return the lowercase 24-character hex form."""
        return str(identifier)

    @property
    def name(self) -> str:
        """Return backend name."""
        return "bson"
