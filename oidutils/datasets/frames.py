"""DataFrame helpers for identifier columns.

Applies construction, deduplication and timestamp extraction to a single
column of a pandas DataFrame. Inputs are never modified; every helper
returns a new frame.

Missing cells (None, NaN, NaT) are treated as cells without a value: they
always become the fallback, even in strict mode. This differs from scalar
construction, where NaN is accepted as epoch second 0.
"""

import logging
from typing import Any

import pandas as pd

from oidcore.ids.canonical import unique_by_key
from oidcore.schemas.errors import InvalidArgumentError
from oidutils.api import default_normalizer
from oidutils.runner.normalizer import IdentifierNormalizer

logger = logging.getLogger(__name__)


def _resolve(normalizer: IdentifierNormalizer | None) -> IdentifierNormalizer:
    return normalizer if normalizer is not None else default_normalizer


def _require_column(frame: pd.DataFrame, column: str) -> None:
    if column not in frame.columns:
        raise InvalidArgumentError(column, f"Column not found in frame: {column!r}")


def _is_missing(cell: Any) -> bool:
    return pd.api.types.is_scalar(cell) and bool(pd.isna(cell))


def coerce_id_column(
    frame: pd.DataFrame,
    column: str,
    *,
    fallback: Any = None,
    strict: bool = False,
    normalizer: IdentifierNormalizer | None = None,
) -> pd.DataFrame:
    """Coerce every cell of a column into an identifier.

    Args:
        frame: Source frame (not modified)
        column: Name of the column to coerce
        fallback: Value for missing and non-coercible cells
        strict: Raise on non-coercible cells instead of using fallback
        normalizer: Normalizer to use (default: bson-backed)

    Returns:
        Copy of frame with the column replaced by an object-dtype Series

    Raises:
        InvalidArgumentError: If column is not in frame
        NotCoercibleError: If strict and a present cell is non-coercible
    """
    normalizer = _resolve(normalizer)
    _require_column(frame, column)

    coerced = []
    fallbacks = 0
    for cell in frame[column]:
        if _is_missing(cell):
            coerced.append(fallback)
            fallbacks += 1
            continue
        value = normalizer.new_id(cell, fallback=fallback, strict=strict)
        if not normalizer.is_id(value):
            fallbacks += 1
        coerced.append(value)

    logger.debug(
        "Coerced column %r: %d rows, %d fallbacks", column, len(coerced), fallbacks
    )

    result = frame.copy()
    result[column] = pd.Series(coerced, index=frame.index, dtype=object)
    return result


def drop_duplicate_ids(
    frame: pd.DataFrame,
    column: str,
    *,
    normalizer: IdentifierNormalizer | None = None,
) -> pd.DataFrame:
    """Keep rows holding the first occurrence of each identifier.

    Rows whose cell is not an identifier are dropped. Row order and index
    labels are preserved.

    Raises:
        InvalidArgumentError: If column is not in frame
    """
    normalizer = _resolve(normalizer)
    _require_column(frame, column)

    cells = list(frame[column])
    positions = unique_by_key(
        range(len(cells)),
        key=lambda i: normalizer.to_text(cells[i]),
        keep=lambda i: normalizer.is_id(cells[i]),
    )
    return frame.iloc[positions].copy()


def add_created_at(
    frame: pd.DataFrame,
    column: str,
    *,
    target: str = "created_at",
    normalizer: IdentifierNormalizer | None = None,
) -> pd.DataFrame:
    """Add a column with each identifier's creation time.

    Cells that are not identifiers get None.

    Raises:
        InvalidArgumentError: If column is not in frame
    """
    normalizer = _resolve(normalizer)
    _require_column(frame, column)

    result = frame.copy()
    result[target] = pd.Series(
        [normalizer.to_datetime(cell) for cell in frame[column]],
        index=frame.index,
        dtype=object,
    )
    return result
