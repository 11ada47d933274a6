from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .Ranges import Ranges

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"

_EMPTY = np.empty(0, dtype=np.int64)


class _Partition:
    """Rows of one sequence (and strand), sorted by start and by end."""

    def __init__(self, rows: np.ndarray, starts: np.ndarray, ends: np.ndarray):
        by_start = np.argsort(starts[rows], kind="stable")
        self.rows_by_start = rows[by_start]
        self.sorted_starts = starts[self.rows_by_start]

        by_end = np.argsort(ends[rows], kind="stable")
        self.rows_by_end = rows[by_end]
        self.sorted_ends = ends[self.rows_by_end]

        self.ends = ends
        widths = ends[rows] - starts[rows] + 1
        self.max_width = int(widths.max()) if len(widths) else 0

    def overlapping(self, start: int, end: int, slack: int) -> np.ndarray:
        lo = np.searchsorted(self.sorted_starts, start - slack - self.max_width + 1, side="left")
        hi = np.searchsorted(self.sorted_starts, end + slack, side="right")
        cand = self.rows_by_start[lo:hi]
        return cand[self.ends[cand] >= start - slack]

    def starting_after(self, pos: int, closest: bool) -> Tuple[np.ndarray, Optional[int]]:
        lo = np.searchsorted(self.sorted_starts, pos, side="right")
        if lo == len(self.sorted_starts):
            return _EMPTY, None

        if not closest:
            return self.rows_by_start[lo:], None

        first = self.sorted_starts[lo]
        hi = np.searchsorted(self.sorted_starts, first, side="right")
        return self.rows_by_start[lo:hi], int(first)

    def ending_before(self, pos: int, closest: bool) -> Tuple[np.ndarray, Optional[int]]:
        hi = np.searchsorted(self.sorted_ends, pos, side="left")
        if hi == 0:
            return _EMPTY, None

        if not closest:
            return self.rows_by_end[:hi], None

        last = self.sorted_ends[hi - 1]
        lo = np.searchsorted(self.sorted_ends, last, side="left")
        return self.rows_by_end[lo:hi], int(last)


class RangesIndex:
    """Sorted index over a :py:class:`~plyranges.Ranges.Ranges` object.

    Rows are partitioned by sequence name, and by strand when
    ``by_strand = True``. Within a partition rows are kept sorted by start
    and by end, so every query is a pair of binary searches plus a scan over
    the candidates. All queries return row indices in ascending order, i.e.
    in the traversal order of the indexed object.

    Args:
        ranges:
            Ranges to index.

        by_seqname:
            Whether to partition by sequence name. If False, or if
            ``ranges`` has no sequence names, queries use None as the
            sequence name.

        by_strand:
            Whether to also partition by strand. Ignored if ``ranges`` has
            no strand information.
    """

    def __init__(self, ranges: Ranges, by_seqname: bool = True, by_strand: bool = False):
        if not isinstance(ranges, Ranges):
            raise TypeError("'ranges' is not a `Ranges` object.")

        starts = ranges.get_start().astype(np.int64)
        ends = ranges.get_end().astype(np.int64)

        seqnames = ranges.get_seqnames() if by_seqname else None
        strand = ranges.get_strand() if by_strand else None

        groups: Dict[tuple, list] = {}
        for i in range(len(ranges)):
            key = (
                seqnames[i] if seqnames is not None else None,
                strand[i] if strand is not None else None,
            )
            groups.setdefault(key, []).append(i)

        self._by_strand = strand is not None
        self._partitions = {
            key: _Partition(np.asarray(rows, dtype=np.int64), starts, ends) for key, rows in groups.items()
        }

    def __len__(self) -> int:
        return len(self._partitions)

    def _select(self, seqname: Optional[str], strands: Optional[Sequence[str]]):
        if not self._by_strand or strands is None:
            return [p for (s, _), p in self._partitions.items() if s == seqname]

        return [self._partitions[(seqname, st)] for st in strands if (seqname, st) in self._partitions]

    def overlapping(
        self,
        seqname: Optional[str],
        start: int,
        end: int,
        max_gap: int = -1,
        strands: Optional[Sequence[str]] = None,
    ) -> np.ndarray:
        """Find indexed rows overlapping ``[start, end]``.

        Args:
            seqname:
                Sequence to search, None for unnamed sequences.

            start:
                Start of the query interval.

            end:
                Inclusive end of the query interval.

            max_gap:
                Largest gap still counted as an overlap.
                Defaults to -1 (a shared position is required).

            strands:
                Strand partitions to search, all if None.

        Returns:
            Sorted row indices.
        """
        parts = self._select(seqname, strands)
        hits = [p.overlapping(start, end, max_gap + 1) for p in parts]
        return _merge(hits)

    def starting_after(
        self,
        seqname: Optional[str],
        pos: int,
        strands: Optional[Sequence[str]] = None,
        closest: bool = False,
    ) -> np.ndarray:
        """Find indexed rows with ``start > pos``.

        If ``closest = True``, only the rows with the smallest such start
        are reported.
        """
        found = [p.starting_after(pos, closest) for p in self._select(seqname, strands)]
        if closest:
            found = _keep_extreme(found, pick=min)
        return _merge([rows for rows, _ in found])

    def ending_before(
        self,
        seqname: Optional[str],
        pos: int,
        strands: Optional[Sequence[str]] = None,
        closest: bool = False,
    ) -> np.ndarray:
        """Find indexed rows with ``end < pos``.

        If ``closest = True``, only the rows with the largest such end
        are reported.
        """
        found = [p.ending_before(pos, closest) for p in self._select(seqname, strands)]
        if closest:
            found = _keep_extreme(found, pick=max)
        return _merge([rows for rows, _ in found])


def _keep_extreme(found, pick):
    found = [(rows, value) for rows, value in found if value is not None]
    if len(found) == 0:
        return []

    best = pick(value for _, value in found)
    return [(rows, value) for rows, value in found if value == best]


def _merge(hits) -> np.ndarray:
    hits = [h for h in hits if len(h)]
    if len(hits) == 0:
        return _EMPTY
    if len(hits) == 1:
        return np.sort(hits[0])
    return np.sort(np.concatenate(hits))
