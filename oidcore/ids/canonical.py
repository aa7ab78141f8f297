"""Canonical text rules and ordered deduplication for ObjectIds.

Canonical text form:
- Exactly 24 hexadecimal characters (12 bytes, big-endian)
- First 8 characters encode the creation time in epoch seconds
- Lowercase on output; input is accepted in either case

Display text is different: any value rendered with ``str()``, with no
validation at all.
"""

import re
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Any, TypeVar

from oidcore.schemas.errors import InvalidArgumentError

HEX_LENGTH = 24
RAW_LENGTH = 12

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

T = TypeVar("T")


def is_canonical_hex(value: Any) -> bool:
    """Check whether value is a 24-character hex string.

    Examples:
        >>> is_canonical_hex("507f1f77bcf86cd799439011")
        True
        >>> is_canonical_hex("507F1F77BCF86CD799439011")
        True
        >>> is_canonical_hex("507f1f77bcf86cd79943901")
        False
    """
    return isinstance(value, str) and _HEX_PATTERN.fullmatch(value) is not None


def to_display_text(value: Any) -> str:
    """Render any value as text, including None and non-identifiers.

    Examples:
        >>> to_display_text(None)
        'None'
        >>> to_display_text(42)
        '42'
    """
    return str(value)


def as_ordered(values: Any) -> Sequence[Any]:
    """Return values as a sequence, rejecting strings and non-sequences.

    Strings and byte buffers are sequences too, but a caller passing one
    almost certainly meant a single value rather than a batch.

    Raises:
        InvalidArgumentError: If values is not an ordered sequence
    """
    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Sequence):
        raise InvalidArgumentError(values)
    return values


def as_items(values: Any) -> Iterable[Any]:
    """Return values as something to walk once, never raising.

    None means no items. Strings, byte buffers and non-iterables are a
    single item rather than a container.

    Examples:
        >>> list(as_items(None))
        []
        >>> list(as_items("abc"))
        ['abc']
        >>> list(as_items((1, 2)))
        [1, 2]
    """
    if values is None:
        return ()
    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Iterable):
        return (values,)
    return values


def unique_by_key(
    items: Iterable[T],
    key: Callable[[T], Hashable],
    keep: Callable[[T], bool] | None = None,
) -> list[T]:
    """Deduplicate items while preserving first-occurrence order.

    Args:
        items: Items to walk once, in order
        key: Maps an item to its dedup key
        keep: Optional filter; items it rejects are dropped before keying

    Returns:
        New list with the first item for each distinct key
    """
    seen: set[Hashable] = set()
    unique = []
    for item in items:
        if keep is not None and not keep(item):
            continue
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        unique.append(item)
    return unique
