from typing import Literal, Sequence, Tuple, Union

import numpy as np

from .exceptions import InvalidWidthError, MissingStrandError
from .Ranges import Ranges
from .utils import ANCHORS, normalize_array

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"


class AnchoredRanges:
    """A :py:class:`~plyranges.Ranges.Ranges` object paired with an anchor.

    The anchor is the coordinate held fixed by :py:func:`resize` and
    :py:func:`stretch`:

    - "start": the start of every range.
    - "end": the end of every range.
    - "center": the midpoint, ``floor((start + end) / 2)``.
    - "5p": the start on ``"+"``/``"*"`` ranges, the end on ``"-"`` ranges.
    - "3p": the end on ``"+"``/``"*"`` ranges, the start on ``"-"`` ranges.

    Ranges without strand information count as ``"*"``. The arithmetic verbs
    consume the anchor and return a plain ``Ranges``.

    Args:
        ranges:
            Ranges to anchor.

        anchor:
            One of the anchors listed above.
    """

    def __init__(self, ranges: Ranges, anchor: Literal["start", "end", "center", "5p", "3p"] = "start"):
        if isinstance(ranges, AnchoredRanges):
            ranges = ranges.get_ranges()

        if not isinstance(ranges, Ranges):
            raise TypeError("'ranges' is not a `Ranges` object.")

        if anchor not in ANCHORS:
            raise ValueError(f"'anchor' must be one of {', '.join(ANCHORS)}.")

        self._ranges = ranges
        self._anchor = anchor

    def get_ranges(self) -> Ranges:
        return self._ranges

    @property
    def ranges(self) -> Ranges:
        return self.get_ranges()

    def get_anchor(self) -> str:
        return self._anchor

    @property
    def anchor(self) -> str:
        return self.get_anchor()

    def __len__(self) -> int:
        return len(self._ranges)

    def __repr__(self) -> str:
        return f"AnchoredRanges(anchor={self._anchor!r}, ranges={self._ranges!r})"

    def __str__(self) -> str:
        return f"Anchored by: {self._anchor}\n" + str(self._ranges)


def anchor_start(x: Ranges) -> AnchoredRanges:
    return AnchoredRanges(x, "start")


def anchor_end(x: Ranges) -> AnchoredRanges:
    return AnchoredRanges(x, "end")


def anchor_center(x: Ranges) -> AnchoredRanges:
    return AnchoredRanges(x, "center")


def anchor_5p(x: Ranges) -> AnchoredRanges:
    return AnchoredRanges(x, "5p")


def anchor_3p(x: Ranges) -> AnchoredRanges:
    return AnchoredRanges(x, "3p")


def unanchor(x: Union[Ranges, AnchoredRanges]) -> Ranges:
    """Drop the anchor, if any."""
    if isinstance(x, AnchoredRanges):
        return x.get_ranges()
    return x


def _unwrap(x, anchor) -> Tuple[Ranges, str]:
    if isinstance(x, AnchoredRanges):
        return x.get_ranges(), x.get_anchor()

    if not isinstance(x, Ranges):
        raise TypeError("'x' is not a `Ranges` or `AnchoredRanges` object.")

    if anchor not in ANCHORS:
        raise ValueError(f"'anchor' must be one of {', '.join(ANCHORS)}.")

    return x, anchor


def _fixed_points(x: Ranges, anchor: str) -> np.ndarray:
    """Resolve an anchor into one of "start", "end" or "center" per range."""
    if anchor in ("start", "end", "center"):
        return np.full(len(x), anchor)

    minus = x.get_strand() == "-" if x.has_strand() else np.zeros(len(x), dtype=bool)
    if anchor == "5p":
        return np.where(minus, "end", "start")
    return np.where(minus, "start", "end")


def _as_vector(values, length: int, name: str) -> np.ndarray:
    arr = normalize_array(values, length, dtype=np.int64)
    if arr.mask.any():
        raise ValueError(f"'{name}' cannot contain NAs")
    return arr.data


def _extend(x: Ranges, extend: np.ndarray, anchor: str) -> Ranges:
    fixed = _fixed_points(x, anchor)
    start = x.get_start().astype(np.int64)
    end = x.get_end().astype(np.int64)

    new_start = start.copy()
    new_end = end.copy()

    at_start = fixed == "start"
    new_end[at_start] += extend[at_start]

    at_end = fixed == "end"
    new_start[at_end] -= extend[at_end]

    # the odd position always goes to the end side
    at_center = fixed == "center"
    half = extend[at_center] // 2
    new_start[at_center] -= half
    new_end[at_center] += extend[at_center] - half

    return x.set_bounds(new_start, new_end)


def resize(
    x: Union[Ranges, AnchoredRanges],
    width: Union[int, Sequence[int], np.ndarray],
    anchor: Literal["start", "end", "center", "5p", "3p"] = "start",
) -> Ranges:
    """Set the width of each range, keeping its anchor fixed.

    With the "center" anchor, ``width - current width`` is split between
    both sides as in :py:func:`stretch`.

    Args:
        x:
            Ranges to resize. If anchored, its anchor overrides ``anchor``.

        width:
            New width, a scalar or one value per range.

        anchor:
            Coordinate to keep fixed, see :py:class:`AnchoredRanges`.
            Defaults to "start".

    Raises:
        InvalidWidthError:
            If any requested width is negative.

    Returns:
        A new ``Ranges`` object.
    """
    ranges, anchor = _unwrap(x, anchor)
    width_arr = _as_vector(width, len(ranges), "width")

    bad = np.where(width_arr < 0)[0]
    if len(bad):
        raise InvalidWidthError("'width' must be non-negative", rows=bad)

    return _extend(ranges, width_arr - ranges.get_width(), anchor)


def stretch(
    x: Union[Ranges, AnchoredRanges],
    extend: Union[int, Sequence[int], np.ndarray] = 0,
    anchor: Literal["start", "end", "center", "5p", "3p"] = "center",
) -> Ranges:
    """Grow (or shrink) each range by ``extend`` positions around its anchor.

    - "start" anchor: the end moves by ``extend``.
    - "end" anchor: the start moves by ``-extend``.
    - "center" anchor: the start moves by ``-floor(extend / 2)`` and the end
      by ``ceil(extend / 2)``. For even ``extend`` the midpoint is unchanged;
      for odd ``extend`` the extra position is added to (or, when shrinking,
      kept on) the end side.

    Args:
        x:
            Ranges to stretch. If anchored, its anchor overrides ``anchor``.

        extend:
            Number of positions to add, a scalar or one value per range.
            Negative values shrink the ranges.

        anchor:
            Coordinate to keep fixed, see :py:class:`AnchoredRanges`.
            Defaults to "center".

    Raises:
        InvalidWidthError:
            If a range would end up with a negative width.

    Returns:
        A new ``Ranges`` object.
    """
    ranges, anchor = _unwrap(x, anchor)
    extend_arr = _as_vector(extend, len(ranges), "extend")

    bad = np.where(ranges.get_width() + extend_arr < 0)[0]
    if len(bad):
        raise InvalidWidthError("stretching would produce negative widths", rows=bad)

    return _extend(ranges, extend_arr, anchor)


def shift_left(x: Union[Ranges, AnchoredRanges], shift: Union[int, Sequence[int], np.ndarray]) -> Ranges:
    """Move each range ``shift`` positions towards lower coordinates, regardless of strand."""
    ranges = unanchor(x)
    return ranges.shift(-_as_vector(shift, len(ranges), "shift"))


def shift_right(x: Union[Ranges, AnchoredRanges], shift: Union[int, Sequence[int], np.ndarray]) -> Ranges:
    """Move each range ``shift`` positions towards higher coordinates, regardless of strand."""
    ranges = unanchor(x)
    return ranges.shift(_as_vector(shift, len(ranges), "shift"))


def _strand_direction(ranges: Ranges, verb: str) -> np.ndarray:
    if not ranges.has_strand():
        raise MissingStrandError(f"'{verb}' requires ranges with strand information.")
    return np.where(ranges.get_strand() == "-", 1, -1)


def shift_upstream(x: Union[Ranges, AnchoredRanges], shift: Union[int, Sequence[int], np.ndarray]) -> Ranges:
    """Move each range ``shift`` positions upstream.

    Upstream is towards lower coordinates on the ``"+"`` and ``"*"`` strands,
    and towards higher coordinates on the ``"-"`` strand.

    Raises:
        MissingStrandError:
            If ``x`` has no strand information.

    Returns:
        A new ``Ranges`` object.
    """
    ranges = unanchor(x)
    direction = _strand_direction(ranges, "shift_upstream")
    return ranges.shift(direction * _as_vector(shift, len(ranges), "shift"))


def shift_downstream(x: Union[Ranges, AnchoredRanges], shift: Union[int, Sequence[int], np.ndarray]) -> Ranges:
    """Move each range ``shift`` positions downstream, the opposite of :py:func:`shift_upstream`."""
    ranges = unanchor(x)
    direction = _strand_direction(ranges, "shift_downstream")
    return ranges.shift(-direction * _as_vector(shift, len(ranges), "shift"))


def mid(x: Union[Ranges, AnchoredRanges]) -> np.ndarray:
    """Midpoint of each range, ``floor((start + end) / 2)``."""
    return unanchor(x).mid()
