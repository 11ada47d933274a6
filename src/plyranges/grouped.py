from typing import Callable, Dict, List, Sequence, Union

import numpy as np
from biocframe import BiocFrame

from .joins import resolve
from .matches import find_matches
from .Ranges import Ranges
from .rangeslist import CompressedRangesList

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"

_RANGE_KEYS = ("seqnames", "strand")


class GroupedRanges:
    """A :py:class:`~plyranges.Ranges.Ranges` object partitioned by one or more keys.

    Keys are metadata column names, or ``"seqnames"`` / ``"strand"``. The
    grouping only scopes :py:meth:`filter`, :py:meth:`mutate`,
    :py:meth:`summarise` and :py:meth:`split`; it never changes the ranges.
    Groups are listed in order of first appearance.

    Args:
        ranges:
            Ranges to group.

        keys:
            Grouping keys.
    """

    def __init__(self, ranges: Ranges, keys: Sequence[str]):
        if not isinstance(ranges, Ranges):
            raise TypeError("'ranges' is not a `Ranges` object.")

        if isinstance(keys, str):
            keys = [keys]
        keys = list(keys)
        if len(keys) == 0:
            raise ValueError("at least one grouping key is required")

        columns = set(ranges.get_mcols().get_column_names())
        for k in keys:
            if k not in columns and k not in _RANGE_KEYS:
                raise ValueError(f"grouping key '{k}' is not a metadata column, 'seqnames' or 'strand'.")
            if k == "seqnames" and ranges.get_seqnames() is None:
                raise ValueError("cannot group by 'seqnames' of ranges without sequence names.")

        self._ranges = ranges
        self._keys = keys

    def get_ranges(self) -> Ranges:
        return self._ranges

    @property
    def ranges(self) -> Ranges:
        return self.get_ranges()

    def get_keys(self) -> List[str]:
        return self._keys

    @property
    def keys(self) -> List[str]:
        return self.get_keys()

    def __len__(self) -> int:
        return len(self._ranges)

    def __repr__(self) -> str:
        return f"GroupedRanges(keys={self._keys!r}, ranges={self._ranges!r})"

    def __str__(self) -> str:
        return f"Groups: {', '.join(self._keys)} [{len(self.groups())}]\n" + str(self._ranges)

    def _key_values(self, key: str) -> list:
        if key == "seqnames":
            return self._ranges.get_seqnames().tolist()

        if key == "strand":
            if not self._ranges.has_strand():
                return ["*"] * len(self._ranges)
            return self._ranges.get_strand().tolist()

        col = self._ranges.get_mcols().column(key)
        if isinstance(col, np.ndarray):
            return col.tolist()
        return list(col)

    def group_indices(self) -> Dict[tuple, np.ndarray]:
        """Row indices of each group.

        Returns:
            Dictionary mapping key tuples to sorted row indices, in order of
            first appearance.
        """
        values = [self._key_values(k) for k in self._keys]
        groups: Dict[tuple, list] = {}
        for i, key in enumerate(zip(*values)):
            groups.setdefault(key, []).append(i)

        return {k: np.asarray(v, dtype=np.int64) for k, v in groups.items()}

    def groups(self) -> List[tuple]:
        """Key tuples of all groups, in order of first appearance."""
        return list(self.group_indices().keys())

    def ungroup(self) -> Ranges:
        """Drop the grouping."""
        return self._ranges

    def filter(self, fn: Callable[[Ranges], Union[bool, Sequence[bool]]]) -> "GroupedRanges":
        """Keep rows selected within each group.

        Args:
            fn:
                Function receiving the ranges of one group and returning
                one boolean per range, or a single boolean for the whole group.

        Returns:
            A new ``GroupedRanges`` with the same keys; kept rows retain
            their original order.
        """
        kept = []
        for idx in self.group_indices().values():
            mask = np.asarray(fn(self._ranges[idx]), dtype=bool)
            if mask.ndim == 0:
                mask = np.full(len(idx), bool(mask))
            elif len(mask) != len(idx):
                raise ValueError("'fn' must return one value per range in the group")
            kept.append(idx[mask])

        rows = np.sort(np.concatenate(kept)) if len(kept) else np.empty(0, dtype=np.int64)
        return GroupedRanges(self._ranges[rows], self._keys)

    def mutate(self, **fns: Callable[[Ranges], object]) -> "GroupedRanges":
        """Add or replace metadata columns, computed within each group.

        Functions are applied in order, so later ones see the columns added
        by earlier ones.

        Args:
            fns:
                Column name to function. Each function receives the ranges of
                one group and returns either a scalar (recycled over the group)
                or one value per range.

        Returns:
            A new ``GroupedRanges`` with the same keys.
        """
        ranges = self._ranges
        for name, fn in fns.items():
            grouped = GroupedRanges(ranges, self._keys)
            values = [None] * len(ranges)
            for idx in grouped.group_indices().values():
                res = fn(ranges[idx])
                if np.isscalar(res) or res is None:
                    res = [res] * len(idx)
                elif len(res) != len(idx):
                    raise ValueError(f"'{name}' must return a scalar or one value per range in the group")
                for i, v in zip(idx, res):
                    values[i] = v

            column = _as_column(values)
            ranges = ranges.set_mcols(ranges.get_mcols().set_column(name, column))

        return GroupedRanges(ranges, self._keys)

    def summarise(self, **fns: Callable[[Ranges], object]) -> BiocFrame:
        """Summarise each group into a single row.

        Args:
            fns:
                Column name to function. Each function receives the ranges of
                one group and returns a scalar.

        Returns:
            A ``BiocFrame`` with one row per group: the key columns, then one
            column per function.
        """
        indices = self.group_indices()
        data = {}
        for j, key in enumerate(self._keys):
            data[key] = _as_column([k[j] for k in indices.keys()])

        for name, fn in fns.items():
            data[name] = _as_column([fn(self._ranges[idx]) for idx in indices.values()])

        return BiocFrame(data, number_of_rows=len(indices))

    def split(self) -> CompressedRangesList:
        """Split into one ``Ranges`` per group.

        Returns:
            A ``CompressedRangesList`` whose element names join the key
            values of each group with ``"/"``; the typed key values are
            available from
            :py:meth:`~plyranges.rangeslist.CompressedRangesList.get_group_keys`.
        """
        return CompressedRangesList.from_groups(self._ranges, self.group_indices(), self._keys)


def _as_column(values: list):
    if len(values) and all(isinstance(v, (bool, int, float, np.number, np.bool_)) for v in values):
        return np.asarray(values)
    return values


def group_by(x: Union[Ranges, GroupedRanges], *keys: str) -> GroupedRanges:
    """Group ranges by metadata columns, ``"seqnames"`` or ``"strand"``.

    Regrouping an already grouped object replaces its keys.
    """
    if isinstance(x, GroupedRanges):
        x = x.ungroup()
    return GroupedRanges(x, keys)


def ungroup(x: Union[Ranges, GroupedRanges]) -> Ranges:
    """Drop the grouping, if any."""
    if isinstance(x, GroupedRanges):
        return x.ungroup()
    return x


def group_by_overlaps(x: Ranges, y: Ranges, max_gap: int = -1, min_overlap: int = 0) -> GroupedRanges:
    """Group ranges of ``y`` by the range of ``x`` they overlap.

    Performs an inner overlap join of ``x`` with ``y`` and records the
    index of the ``x`` range in a ``"query"`` column, which is used as the
    grouping key.

    Args:
        x:
            Query ranges.

        y:
            Subject ranges.

        max_gap:
            Largest gap still counted as an overlap.

        min_overlap:
            Minimum number of shared positions.

    Returns:
        A ``GroupedRanges`` keyed by ``"query"``.
    """
    for obj, label in ((x, "x"), (y, "y")):
        if "query" in obj.get_mcols().get_column_names():
            raise ValueError(f"'{label}' already has a 'query' column.")

    hits = find_matches(x, y, "overlaps", max_gap=max_gap, min_overlap=min_overlap)
    joined = resolve(x, y, hits, "inner")
    query = np.asarray(hits.get_column("query_hits"), dtype=np.int64)
    joined = joined.set_mcols(joined.get_mcols().set_column("query", query))
    return GroupedRanges(joined, ["query"])
