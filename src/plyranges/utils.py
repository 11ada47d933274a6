from typing import Any, Optional, Sequence, Union

import numpy as np

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"

#: Suffix appended to subject metadata columns whose name is already used by the query.
JOIN_SUFFIX = ".y"

STRAND_CODES = ("+", "-", "*")
ANCHORS = ("start", "end", "center", "5p", "3p")
PREDICATES = ("overlaps", "precedes", "follows", "nearest")
SELECTIONS = ("all", "best")
STRAND_MODES = ("ignore", "aware")


def normalize_array(
    x: Optional[Union[int, float, np.number, Sequence, np.ndarray]], length: int, dtype: np.dtype = np.int32
) -> np.ma.MaskedArray:
    """Normalize input to a masked array of the expected length and type.

    Args:
        x:
            Input value (scalar, sequence, array or None).

        length:
            Expected length of the output array.
            Scalars and shorter inputs are recycled.

        dtype:
            Expected numpy dtype.

    Returns:
        Normalized masked array, fully masked if ``x`` is None.
    """
    if x is None:
        return np.ma.masked_array(np.zeros(length, dtype=dtype), mask=True)

    if np.isscalar(x):
        return np.ma.masked_array([x] * length, dtype=dtype, mask=False)

    if not isinstance(x, np.ndarray):
        x = np.asarray(x, dtype=dtype)

    if len(x) == 0 and length > 0:
        raise ValueError("cannot recycle a zero-length input")

    if len(x) < length:
        repeats = length // len(x) + (1 if length % len(x) else 0)
        x = np.tile(x, repeats)[:length]
    elif len(x) > length:
        raise ValueError(f"input length {len(x)} exceeds expected length {length}")

    return np.ma.masked_array(x, dtype=dtype, mask=False)


def normalize_strand(strand: Optional[Sequence[str]], length: int) -> Optional[np.ndarray]:
    """Coerce strand codes into a string array.

    ``None`` is kept as-is, marking a collection without strand information.
    ``"."`` and missing values are read as ``"*"``.
    """
    if strand is None:
        return None

    if isinstance(strand, str):
        strand = [strand] * length

    arr = np.array(["*" if s is None or s == "." else str(s) for s in strand], dtype=str)
    if len(arr) != length:
        raise ValueError("'strand' must have the same length as 'start'")

    bad = ~np.isin(arr, STRAND_CODES)
    if bad.any():
        raise ValueError(f"'strand' values must be one of {', '.join(STRAND_CODES)}")

    return arr


def is_numeric_column(col: Any) -> bool:
    """Whether a metadata column holds numbers (booleans included)."""
    if isinstance(col, np.ndarray):
        return col.dtype.kind in "biuf"

    values = [v for v in col if v is not None]
    if len(values) == 0:
        return False
    return all(isinstance(v, (bool, int, float, np.number, np.bool_)) for v in values)


def take_with_missing(col: Any, idx: np.ndarray) -> Any:
    """Subset a column by position, filling ``-1`` positions with the missing-value marker.

    Numeric numpy columns become masked arrays, everything else becomes a
    list with ``None`` in the missing slots.
    """
    idx = np.asarray(idx, dtype=np.int64)
    missing = idx < 0

    if isinstance(col, np.ndarray):
        safe = np.where(missing, 0, idx)
        if len(col) == 0:
            values = np.zeros(len(idx), dtype=col.dtype)
        else:
            values = col[safe]

        if not missing.any():
            return values

        if col.dtype.kind in "biuf":
            return np.ma.masked_array(values, mask=missing)
        return [None if m else v for v, m in zip(values.tolist(), missing)]

    return [None if i < 0 else col[i] for i in idx]


def calc_gap(q_start: np.ndarray, q_end: np.ndarray, s_start: np.ndarray, s_end: np.ndarray) -> np.ndarray:
    """Gap between paired intervals.

    Zero when the intervals overlap, otherwise the coordinate difference
    between the facing ends, so that adjacent intervals have a gap of 1.
    """
    right = s_start - q_end
    left = q_start - s_end
    return np.maximum(np.maximum(right, left), 0)
