"""Module-level ObjectId helpers backed by bson.

Usage:
    from oidutils import api as ou

    oid = ou.new_id("507f1f77bcf86cd799439011")
    ou.new_id("not an id")                       # None
    ou.new_id("not an id", fallback="n/a")       # "n/a"
    ou.new_id("not an id", strict=True)          # raises NotCoercibleError
    ou.is_after(oid, datetime(2012, 1, 1))       # True

For another identifier library, build an IdentifierNormalizer directly.
"""

from oidutils.backends.bson_backend import BsonBackend
from oidutils.runner.normalizer import IdentifierNormalizer

default_normalizer = IdentifierNormalizer(BsonBackend())

# Construction
new_id = default_normalizer.new_id
new_ids = default_normalizer.new_ids
unique_ids = default_normalizer.unique_ids
unique_values = default_normalizer.unique_values

# Type checking
can_be_id = default_normalizer.can_be_id
is_valid = can_be_id
is_id = default_normalizer.is_id
is_same_id = default_normalizer.is_same_id

# Conversion
to_datetime = default_normalizer.to_datetime
to_text = default_normalizer.to_text
to_display_text = default_normalizer.to_display_text

# Comparison
is_after = default_normalizer.is_after
is_before = default_normalizer.is_before

__all__ = [
    "default_normalizer",
    "new_id",
    "new_ids",
    "unique_ids",
    "unique_values",
    "can_be_id",
    "is_valid",
    "is_id",
    "is_same_id",
    "to_datetime",
    "to_text",
    "to_display_text",
    "is_after",
    "is_before",
]
