from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

import biocutils as ut
import numpy as np
from biocframe import BiocFrame
from compressed_lists import CompressedList, Partitioning
from compressed_lists.split_generic import _generic_register_helper, splitAsCompressedList

from .Ranges import Ranges, _combine_Ranges

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"


class CompressedRangesList(CompressedList):
    """A list of :py:class:`~plyranges.Ranges.Ranges`, stored back to back.

    Usually the result of splitting grouped ranges, one element per group.
    In that case the grouping keys of each element are kept, with their
    original types, as element metadata (see :py:meth:`get_group_keys`).

    Args:
        unlist_data:
            All ranges, element after element.

        partitioning:
            Element boundaries within ``unlist_data``.

        element_metadata:
            One row per element, e.g. the grouping keys.

        metadata:
            Additional metadata.
    """

    def __init__(
        self,
        unlist_data: Ranges,
        partitioning: Partitioning,
        element_metadata: Optional[BiocFrame] = None,
        metadata: Optional[dict] = None,
        **kwargs,
    ):
        if not isinstance(unlist_data, Ranges):
            raise TypeError("'unlist_data' is not a `Ranges` object.")

        super().__init__(
            unlist_data, partitioning, element_type=Ranges, element_metadata=element_metadata, metadata=metadata
        )

    @classmethod
    def from_list(
        cls,
        lst: List[Ranges],
        names: Optional[Sequence[str]] = None,
        element_metadata: Optional[BiocFrame] = None,
        metadata: Optional[dict] = None,
    ) -> CompressedRangesList:
        """Concatenate ``Ranges`` objects sharing the same metadata columns into a list."""
        unlist_data = _combine_Ranges(*lst) if len(lst) else Ranges.empty()
        partitioning = Partitioning.from_list(lst, names)
        return cls(unlist_data, partitioning, element_metadata=element_metadata, metadata=metadata)

    @classmethod
    def from_groups(
        cls,
        ranges: Ranges,
        groups: Dict[tuple, np.ndarray],
        keys: Sequence[str],
    ) -> CompressedRangesList:
        """Split ``ranges`` into one element per group.

        Args:
            ranges:
                Ranges to split.

            groups:
                Key tuple to row indices, in the order the elements should
                appear.

            keys:
                Name of each position in the key tuples.

        Returns:
            A ``CompressedRangesList``. Element names join the key values
            with ``"/"``; the key values themselves are stored in a
            ``BiocFrame`` with one column per key.
        """
        names = ["/".join(str(v) for v in k) for k in groups.keys()]
        key_frame = BiocFrame(
            {key: [k[j] for k in groups.keys()] for j, key in enumerate(keys)},
            number_of_rows=len(groups),
        )
        return cls.from_list(
            [ranges[idx] for idx in groups.values()],
            names=names,
            element_metadata=key_frame,
        )

    def get_group_keys(self) -> BiocFrame:
        """Grouping keys of each element, one column per key."""
        return self._element_metadata

    def extract_range(self, start: int, end: int) -> Ranges:
        return self._unlist_data[range(start, end)]

    def __repr__(self) -> str:
        output = f"CompressedRangesList(number_of_elements={len(self)}"
        output += f", number_of_ranges={len(self._unlist_data)}"
        if self._element_metadata is not None and self._element_metadata.shape[1] > 0:
            output += ", group_keys=" + ut.print_truncated_list(list(self._element_metadata.get_column_names()))
        output += ")"
        return output

    def __str__(self) -> str:
        lengths = list(self.get_element_lengths())
        output = f"CompressedRangesList of {len(self)} element(s), {len(self._unlist_data)} range(s)\n"
        output += "element lengths: " + ut.print_truncated_list(lengths) + "\n"
        if len(self._metadata) > 0:
            output += "metadata: " + ut.print_truncated_dict(self._metadata) + "\n"
        return output


@splitAsCompressedList.register
def _split_Ranges(
    data: Ranges,
    groups_or_partitions: Union[list, Partitioning],
    names: Optional[Sequence[str]] = None,
    metadata: Optional[dict] = None,
) -> CompressedRangesList:
    """Split a ``Ranges`` object by a per-range group vector or a ``Partitioning``."""
    parts, partitioning = _generic_register_helper(data=data, groups_or_partitions=groups_or_partitions, names=names)

    if not isinstance(parts, Ranges):
        parts = _combine_Ranges(*parts) if len(parts) else Ranges.empty()

    return CompressedRangesList(unlist_data=parts, partitioning=partitioning, metadata=metadata)
