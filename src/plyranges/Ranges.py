from copy import deepcopy
from typing import Optional, Sequence, Union
from warnings import warn

import biocutils as ut
import numpy as np
from biocframe import BiocFrame
from biocutils import Names, combine_rows, combine_sequences, show_as_cell

from .exceptions import SchemaMismatchError
from .utils import is_numeric_column, normalize_array, normalize_strand

__author__ = "Aaron Lun, Jayaram Kancherla"
__copyright__ = "LTLA, jkanche"
__license__ = "MIT"


class RangesIter:
    """An iterator to :py:class:`~plyranges.Ranges.Ranges`.

    Args:
        obj:
            Object to iterate.
    """

    def __init__(self, obj: "Ranges") -> None:
        """Initialize the iterator.

        Args:
            obj:
                Source object to iterate.
        """
        self._ranges = obj
        self._current_index = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self._current_index < len(self._ranges):
            iter_row_index = self._ranges.names[self._current_index] if self._ranges.names is not None else None

            iter_slice = self._ranges.get_row(self._current_index)
            self._current_index += 1
            return (iter_row_index, iter_slice)

        raise StopIteration


class Ranges:
    """A collection of integer ranges, optionally placed on named sequences and strands.

    Each range consists of a start position and a width; ends are inclusive,
    so ``end = start + width - 1`` and an empty range has ``end = start - 1``.
    Sequence names and strands are optional: a collection without them behaves
    like a plain ``IRanges``, one with them like a ``GRanges``. Rows on
    different sequences never match each other in the join verbs.

    Objects are values; every method returns a new object unless ``in_place``
    is requested explicitly.
    """

    def __init__(
        self,
        start: Sequence[int] = [],
        width: Sequence[int] = [],
        seqnames: Optional[Sequence[str]] = None,
        strand: Optional[Union[str, Sequence[str]]] = None,
        names: Optional[Sequence[str]] = None,
        mcols: Optional[BiocFrame] = None,
        metadata: Optional[dict] = None,
        validate: bool = True,
    ):
        """
        Args:
            start:
                Sequence of integers containing the start position for each
                range. All values should fall within the range that can be
                represented by a 32-bit signed integer.

            width:
                Sequence of integers containing the width for each range. This
                should be of the same length as ``start``. All values should be
                non-negative.

            seqnames:
                Sequence of strings naming the sequence (e.g. chromosome) of
                each range. If None, all ranges are on the same, unnamed sequence.

            strand:
                Sequence of strand codes, each of ``"+"``, ``"-"`` or ``"*"``.
                A single string is recycled. If None, the collection carries no
                strand information.

            names:
                Sequence of strings containing the name for each range.

            mcols:
                A data frame containing additional metadata columns for each range.
                This should have number of rows equal to the length of ``start``.
                If None, defaults to a zero-column data frame.

            metadata:
                Additional metadata. If None, defaults to an empty dictionary.

            validate:
                Whether to validate the arguments, internal use only.
        """

        self._start = self._sanitize_start(start)
        self._width = self._sanitize_width(width)
        self._seqnames = self._sanitize_seqnames(seqnames)
        self._strand = normalize_strand(strand, len(self._start))
        self._names = self._sanitize_names(names)
        self._mcols = self._sanitize_mcols(mcols)
        self._metadata = self._sanitize_metadata(metadata)

        if validate:
            self._validate_width()
            self._validate_seqnames()
            self._validate_names()
            self._validate_mcols()
            self._validate_metadata()

    def _sanitize_start(self, start):
        arr = np.array(start, dtype=np.int32)
        if arr.ndim != 1:
            raise ValueError("'start' must be a 1-dimensional array")
        return arr

    def _sanitize_width(self, width):
        arr = np.array(width, dtype=np.int32)
        if arr.ndim != 1:
            raise ValueError("'width' must be a 1-dimensional array")
        return arr

    def _validate_width(self):
        if len(self._start) != len(self._width):
            raise ValueError("'width' should have the same length as 'start'")

        if np.any(self._width < 0):
            raise ValueError("'width' values must be non-negative")

        end = self._start.astype(np.int64) + self._width
        if np.any(end > np.iinfo(np.int32).max) or np.any(end < np.iinfo(np.int32).min):
            raise ValueError("end position should fit in a 32-bit signed integer")

    def _sanitize_seqnames(self, seqnames):
        if seqnames is None:
            return None

        if isinstance(seqnames, str):
            seqnames = [seqnames] * len(self._start)

        return np.array([str(s) for s in seqnames], dtype=str)

    def _validate_seqnames(self):
        if self._seqnames is None:
            return None

        if len(self._seqnames) != len(self._start):
            raise ValueError("'seqnames' must have the same length as 'start'")

    def _sanitize_names(self, names):
        if names is None:
            return None
        elif not isinstance(names, list):
            names = Names(names)

        return names

    def _validate_names(self):
        if self._names is None:
            return None

        if not ut.is_list_of_type(self._names, str):
            raise ValueError("'names' should be a list of strings")

        if len(self._names) != len(self._start):
            raise ValueError("'names' must have the same length as 'start'")

    def _sanitize_mcols(self, mcols):
        if mcols is None:
            return BiocFrame({}, number_of_rows=len(self._start))
        else:
            return mcols

    def _validate_mcols(self):
        if not isinstance(self._mcols, BiocFrame):
            raise TypeError("'mcols' should be a BiocFrame")

        if self._mcols.shape[0] != len(self._start):
            raise ValueError("Number of rows in 'mcols' must be equal to the length of 'start'")

    def _sanitize_metadata(self, metadata):
        if metadata is None:
            return {}
        elif not isinstance(metadata, dict):
            metadata = dict(metadata)

        return metadata

    def _validate_metadata(self):
        if not isinstance(self._metadata, dict):
            raise TypeError("'metadata' must be a dictionary")

    ########################
    #### Getter/setters ####
    ########################

    def get_start(self) -> np.ndarray:
        """Get start positions.

        Returns:
            NumPy array of 32-bit signed integers containing the start
            positions for all ranges.
        """
        return self._start

    def set_start(self, start: Sequence[int], in_place: bool = False) -> "Ranges":
        """Modify start positions, keeping widths.

        Args:
            start:
                Sequence of start positions, see the constructor for details.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified start positions. Otherwise, the current object is directly
            modified and a reference to it is returned.
        """
        output = self._define_output(in_place)
        if len(start) != len(output._start):
            raise ValueError("length of 'start' should be equal to 'length(<Ranges>)'")

        output._start = output._sanitize_start(start)
        output._validate_width()
        return output

    @property
    def start(self) -> np.ndarray:
        """Alias for :py:meth:`get_start`."""
        return self.get_start()

    @start.setter
    def start(self, start: Sequence[int]):
        """Alias for :py:meth:`set_start` with ``in_place = True``.

        As this mutates the original object, a warning is raised.
        """
        warn(
            "Setting property 'start' is an in-place operation, use 'set_start' instead",
            UserWarning,
        )
        self.set_start(start, in_place=True)

    def get_width(self) -> np.ndarray:
        """Get widths.

        Returns:
            NumPy array of 32-bit signed integers containing the widths for all
            ranges.
        """
        return self._width

    def set_width(self, width: Sequence[int], in_place: bool = False) -> "Ranges":
        """
        Args:
            width:
                Sequence of widths, see the constructor for details.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified widths. Otherwise, the current object is directly modified
            and a reference to it is returned.
        """
        output = self._define_output(in_place)
        if len(width) != len(output._width):
            raise ValueError("length of 'width' should be equal to 'length(<Ranges>)'")

        output._width = output._sanitize_width(width)
        output._validate_width()
        return output

    @property
    def width(self) -> np.ndarray:
        """Alias for :py:meth:`get_width`."""
        return self.get_width()

    @width.setter
    def width(self, width: Sequence[int]):
        """Alias for :py:meth:`set_width` with ``in_place = True``.

        As this mutates the original object, a warning is raised.
        """
        warn(
            "Setting property 'width' is an in-place operation, use 'set_width' instead",
            UserWarning,
        )
        self.set_width(width, in_place=True)

    def get_end(self) -> np.ndarray:
        """Get end positions (inclusive).

        Returns:
            NumPy array of 32-bit signed integers containing the end position
            for all ranges.
        """
        return self._start + self._width - 1

    @property
    def end(self) -> np.ndarray:
        """Alias for :py:meth:`get_end`."""
        return self.get_end()

    def set_bounds(self, start: Sequence[int], end: Sequence[int], in_place: bool = False) -> "Ranges":
        """Replace both coordinates at once.

        Args:
            start:
                New start positions.

            end:
                New (inclusive) end positions.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified coordinates. Otherwise, the current object is directly
            modified and a reference to it is returned.
        """
        start = np.asarray(start, dtype=np.int64)
        end = np.asarray(end, dtype=np.int64)
        if len(start) != len(self) or len(end) != len(self):
            raise ValueError("length of 'start' and 'end' should be equal to 'length(<Ranges>)'")

        output = self._define_output(in_place)
        output._start = output._sanitize_start(start)
        output._width = output._sanitize_width(end - start + 1)
        output._validate_width()
        return output

    def get_seqnames(self) -> Optional[np.ndarray]:
        """Get sequence names.

        Returns:
            NumPy array of strings, or None if the ranges are not placed
            on named sequences.
        """
        return self._seqnames

    def set_seqnames(self, seqnames: Optional[Sequence[str]], in_place: bool = False) -> "Ranges":
        """
        Args:
            seqnames:
                Sequence names or None, see the constructor for details.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified sequence names. Otherwise, the current object is directly
            modified and a reference to it is returned.
        """
        output = self._define_output(in_place)
        output._seqnames = output._sanitize_seqnames(seqnames)
        output._validate_seqnames()
        return output

    @property
    def seqnames(self) -> Optional[np.ndarray]:
        """Alias for :py:meth:`get_seqnames`."""
        return self.get_seqnames()

    @seqnames.setter
    def seqnames(self, seqnames: Optional[Sequence[str]]):
        """Alias for :py:meth:`set_seqnames` with ``in_place = True``.

        As this mutates the original object, a warning is raised.
        """
        warn(
            "Setting property 'seqnames' is an in-place operation, use 'set_seqnames' instead",
            UserWarning,
        )
        self.set_seqnames(seqnames, in_place=True)

    def get_strand(self) -> Optional[np.ndarray]:
        """Get strand codes.

        Returns:
            NumPy array of ``"+"``, ``"-"`` or ``"*"`` codes, or None if the
            collection has no strand information.
        """
        return self._strand

    def set_strand(self, strand: Optional[Union[str, Sequence[str]]], in_place: bool = False) -> "Ranges":
        """
        Args:
            strand:
                Strand codes or None, see the constructor for details.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified strands. Otherwise, the current object is directly
            modified and a reference to it is returned.
        """
        output = self._define_output(in_place)
        output._strand = normalize_strand(strand, len(output))
        return output

    @property
    def strand(self) -> Optional[np.ndarray]:
        """Alias for :py:meth:`get_strand`."""
        return self.get_strand()

    @strand.setter
    def strand(self, strand: Optional[Union[str, Sequence[str]]]):
        """Alias for :py:meth:`set_strand` with ``in_place = True``.

        As this mutates the original object, a warning is raised.
        """
        warn(
            "Setting property 'strand' is an in-place operation, use 'set_strand' instead",
            UserWarning,
        )
        self.set_strand(strand, in_place=True)

    def has_strand(self) -> bool:
        """Whether this collection carries strand information."""
        return self._strand is not None

    def get_names(self) -> Optional[Names]:
        """Get range names.

        Returns:
            List containing the names for all ranges, or None if no names are
            present.
        """
        return self._names

    def set_names(self, names: Optional[Sequence[str]], in_place: bool = False) -> "Ranges":
        """
        Args:
            names:
                Sequence of names or None, see the constructor for details.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified names. Otherwise, the current object is directly modified
            and a reference to it is returned.
        """
        output = self._define_output(in_place)
        output._names = output._sanitize_names(names)
        output._validate_names()
        return output

    @property
    def names(self) -> Optional[Names]:
        """Alias for :py:meth:`get_names`."""
        return self.get_names()

    @names.setter
    def names(self, names: Optional[Sequence[str]]):
        """Alias for :py:meth:`set_names` with ``in_place = True``.

        As this mutates the original object, a warning is raised.
        """
        warn(
            "Setting property 'names' is an in-place operation, use 'set_names' instead",
            UserWarning,
        )
        self.set_names(names, in_place=True)

    def get_mcols(self) -> BiocFrame:
        """Get metadata about ranges.

        Returns:
            Data frame containing additional metadata columns for all ranges.
        """
        return self._mcols

    def set_mcols(self, mcols: Optional[BiocFrame], in_place: bool = False) -> "Ranges":
        """Set new metadata about ranges.

        Args:
            mcols:
                Data frame of additional columns, see the constructor for
                details.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified metadata columns. Otherwise, the current object is
            directly modified and a reference to it is returned.
        """
        output = self._define_output(in_place)
        output._mcols = output._sanitize_mcols(mcols)
        output._validate_mcols()
        return output

    @property
    def mcols(self) -> BiocFrame:
        """Alias for :py:meth:`get_mcols`."""
        return self.get_mcols()

    @mcols.setter
    def mcols(self, mcols: Optional[BiocFrame]):
        """Alias for :py:meth:`set_mcols` with ``in_place = True``.

        As this mutates the original object, a warning is raised.
        """
        warn(
            "Setting property 'mcols' is an in-place operation, use 'set_mcols' instead",
            UserWarning,
        )
        self.set_mcols(mcols, in_place=True)

    def get_metadata(self) -> dict:
        """Get additional metadata.

        Returns:
            Dictionary containing additional metadata.
        """
        return self._metadata

    def set_metadata(self, metadata: Optional[dict], in_place: bool = False) -> "Ranges":
        """Set or replace metadata.

        Args:
            metadata:
                Additional metadata.

            in_place:
                Whether to modify the object in place.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            modified metadata. Otherwise, the current object is directly
            modified and a reference to it is returned.
        """
        output = self._define_output(in_place)
        output._metadata = output._sanitize_metadata(metadata)
        output._validate_metadata()
        return output

    @property
    def metadata(self) -> dict:
        """Alias for :py:meth:`get_metadata`."""
        return self.get_metadata()

    @metadata.setter
    def metadata(self, metadata: Optional[dict]):
        """Alias for :py:meth:`set_metadata` with ``in_place = True``.

        As this mutates the original object, a warning is raised.
        """
        warn(
            "Setting property 'metadata' is an in-place operation, use 'set_metadata' instead",
            UserWarning,
        )
        self.set_metadata(metadata, in_place=True)

    #########################
    #### Getitem/setitem ####
    #########################

    def __len__(self) -> int:
        """
        Returns:
            Length of this object.
        """
        return len(self._start)

    def __getitem__(self, subset: Union[Sequence, int, str, bool, slice, range]) -> "Ranges":
        """Subset the ranges.

        Args:
            subset:
                Integer indices, a boolean filter, or (if the current object is
                named) names specifying the ranges to be extracted, see
                :py:meth:`~biocutils.normalize_subscript.normalize_subscript`.

        Returns:
            A new ``Ranges`` object containing the ranges of interest.
        """
        idx, _ = ut.normalize_subscript(subset, len(self), self._names)
        idx = np.asarray(idx, dtype=np.int64)
        return type(self)(
            start=self._start[idx],
            width=self._width[idx],
            seqnames=self._seqnames[idx] if self._seqnames is not None else None,
            strand=self._strand[idx] if self._strand is not None else None,
            names=ut.subset(self._names, idx.tolist()) if self._names is not None else None,
            mcols=self._mcols[idx.tolist(), :],
            metadata=self._metadata,
            validate=False,
        )

    def get_row(self, index_or_name: Union[str, int]) -> "Ranges":
        """Access a row by index or row name.

        Args:
            index_or_name:
                Integer index of the row to access.

                Alternatively, you may provide a string specifying the row name to access,
                only if :py:attr:`~plyranges.Ranges.Ranges.names` are available.

        Raises:
            TypeError:
                If ``index_or_name`` is neither a string nor an integer.

        Returns:
            A single-row ``Ranges``.
        """

        if not isinstance(index_or_name, (int, str)):
            raise TypeError("`index_or_name` must be either an integer index or name.")

        return self[index_or_name]

    def __iter__(self) -> RangesIter:
        """Iterator over ranges."""
        return RangesIter(self)

    ##################
    #### Printing ####
    ##################

    def __repr__(self) -> str:
        with np.printoptions(threshold=50, edgeitems=3):
            message = "Ranges(start=" + repr(self._start)
            message += ", width=" + repr(self._width)
            if self._seqnames is not None:
                message += ", seqnames=" + repr(self._seqnames)
            if self._strand is not None:
                message += ", strand=" + repr(self._strand)
            if self._names:
                message += ", names=" + ut.print_truncated_list(self._names)

            if self._mcols.shape[1] > 0:
                message += ", mcols=" + repr(self._mcols)

            if len(self._metadata):
                message += ", metadata=" + ut.print_truncated_dict(self._metadata)

            message += ")"

        return message

    def __str__(self) -> str:
        nranges = len(self)
        nmcols = self._mcols.shape[1]
        output = (
            "Ranges object with "
            + str(nranges)
            + " range"
            + ("" if nranges == 1 else "s")
            + " and "
            + str(nmcols)
            + " metadata column"
            + ("" if nmcols == 1 else "s")
            + "\n"
        )

        added_table = False
        if nranges:
            if nranges <= 10:
                indices = list(range(nranges))
                insert_ellipsis = False
            else:
                indices = [0, 1, 2, nranges - 3, nranges - 2, nranges - 1]
                insert_ellipsis = True

            raw_floating = ut.create_floating_names(self._names, indices)
            if insert_ellipsis:
                raw_floating = raw_floating[:3] + [""] + raw_floating[3:]
            floating = ["", ""] + raw_floating

            columns = []

            sub_start = self._start[indices]
            sub_width = self._width[indices]
            sub_end = sub_start + sub_width - 1

            props = []
            if self._seqnames is not None:
                props.append(("seqnames", self._seqnames[indices].tolist(), "str"))
            props += [
                ("start", sub_start, ut.print_type(sub_start)),
                ("end", sub_end, ut.print_type(sub_end)),
                ("width", sub_width, ut.print_type(sub_width)),
            ]
            if self._strand is not None:
                props.append(("strand", self._strand[indices].tolist(), "str"))

            for prop, val, kind in props:
                header = [prop, "<" + kind + ">"]
                showed = show_as_cell(val, range(len(val)))
                if insert_ellipsis:
                    showed = showed[:3] + ["..."] + showed[3:]
                columns.append(header + showed)

            if self._mcols.shape[1] > 0:
                spacer = ["|"] * (len(indices) + insert_ellipsis)
                columns.append(["", ""] + spacer)

                for col in self._mcols.get_column_names():
                    data = self._mcols.column(col)
                    showed = show_as_cell(data, indices)
                    header = [col, "<" + ut.print_type(data) + ">"]
                    showed = ut.truncate_strings(showed, width=max(40, len(header[0]), len(header[1])))
                    if insert_ellipsis:
                        showed = showed[:3] + ["..."] + showed[3:]
                    columns.append(header + showed)

            output += ut.print_wrapped_table(columns, floating_names=floating)
            added_table = True

        footer = []
        if len(self._metadata):
            footer.append(
                "metadata("
                + str(len(self._metadata))
                + "): "
                + ut.print_truncated_list(
                    list(self._metadata.keys()),
                    sep=" ",
                    include_brackets=False,
                    transform=lambda y: y,
                )
            )
        if len(footer):
            if added_table:
                output += "\n------\n"
            output += "\n".join(footer)

        return output

    #################
    #### Copying ####
    #################

    def _define_output(self, in_place):
        if in_place:
            return self
        else:
            return self.__copy__()

    def __copy__(self) -> "Ranges":
        """Shallow copy of the object.

        Returns:
            Same type as the caller, a shallow copy of this object.
        """
        return type(self)(
            start=self._start,
            width=self._width,
            seqnames=self._seqnames,
            strand=self._strand,
            names=self._names,
            mcols=self._mcols,
            metadata=self._metadata,
            validate=False,
        )

    def __deepcopy__(self, memo) -> "Ranges":
        """Deep copy of the object.

        Args:
            memo: Passed to internal :py:meth:`~deepcopy` calls.

        Returns:
            Same type as the caller, a deep copy of this object.
        """
        return type(self)(
            start=deepcopy(self._start, memo),
            width=deepcopy(self._width, memo),
            seqnames=deepcopy(self._seqnames, memo),
            strand=deepcopy(self._strand, memo),
            names=deepcopy(self._names, memo),
            mcols=deepcopy(self._mcols, memo),
            metadata=deepcopy(self._metadata, memo),
            validate=False,
        )

    ########################
    #### simple helpers ####
    ########################

    def mid(self) -> np.ndarray:
        """Midpoint of each range, ``floor((start + end) / 2)``.

        Returns:
            NumPy vector of midpoints.
        """
        return (self._start.astype(np.int64) + self.get_end()) // 2

    def order(self, decreasing: bool = False) -> np.ndarray:
        """Get the order of indices for sorting.

        Ranges are ordered by sequence name, then start, then end. Ties keep
        their original relative order.

        Args:
            decreasing:
                Whether to sort in descending order. Defaults to False.

        Returns:
            NumPy vector containing index positions in the sorted order.
        """
        keys = [self.get_end(), self._start]
        if self._seqnames is not None:
            keys.append(self._seqnames)

        order = np.lexsort(keys)
        if decreasing:
            return order[::-1]

        return order

    def sort(self, decreasing: bool = False) -> "Ranges":
        """Sort the ranges.

        Args:
            decreasing:
                Whether to sort in descending order.
                Defaults to False.

        Returns:
            A new ``Ranges`` with the sorted ranges.
        """
        return self[self.order(decreasing=decreasing)]

    def shift(self, shift: Union[int, Sequence[int], np.ndarray], in_place: bool = False) -> "Ranges":
        """Shift ranges by specified amount, towards higher coordinates for positive values.

        Args:
            shift:
                Amount to shift by, a scalar or one value per range.

            in_place:
                Whether to modify the object in place. Defaults to False.

        Returns:
            If ``in_place = False``, a new ``Ranges`` is returned with the
            shifted ranges. Otherwise, the current object is directly
            modified and a reference to it is returned.
        """
        output = self._define_output(in_place)

        shift_arr = normalize_array(shift, len(output), dtype=np.int64)
        if shift_arr.mask.any():
            raise ValueError("'shift' cannot contain NAs")

        output._start = output._sanitize_start(output._start + shift_arr.data)
        output._validate_width()
        return output

    ########################
    #### pandas interop ####
    ########################

    def to_pandas(self):
        """Convert this ``Ranges`` object to a :py:class:`~pandas.DataFrame`.

        Returns:
            A :py:class:`~pandas.DataFrame` object.
        """
        import pandas as pd

        data = {}
        if self._seqnames is not None:
            data["seqnames"] = self._seqnames
        data["start"] = self._start
        data["end"] = self.get_end()
        data["width"] = self._width
        if self._strand is not None:
            data["strand"] = self._strand

        output = pd.DataFrame(data)

        if self._mcols is not None and self._mcols.shape[1] > 0:
            output = pd.concat([output, self._mcols.to_pandas().reset_index(drop=True)], axis=1)

        if self._names is not None:
            output.index = self._names

        return output

    @classmethod
    def from_pandas(cls, input) -> "Ranges":
        """Create a ``Ranges`` object from a :py:class:`~pandas.DataFrame`.

        Args:
            input:
                Input data must contain column 'start' and one of
                'width' or 'end'. Optional 'seqnames' and 'strand' columns
                are used as such; all other columns become metadata columns.

        Returns:
            A ``Ranges`` object.
        """

        from pandas import DataFrame, RangeIndex

        if not isinstance(input, DataFrame):
            raise TypeError("`input` is not a pandas `DataFrame` object.")

        data = {col: input[col].tolist() for col in input.columns}
        names = None
        if not isinstance(input.index, RangeIndex):
            names = [str(i) for i in input.index.to_list()]

        return cls._from_columns(data, list(input.columns), names)

    ########################
    #### polars interop ####
    ########################

    def to_polars(self):
        """Convert this ``Ranges`` object to a :py:class:`~polars.DataFrame`.

        Returns:
            A :py:class:`~polars.DataFrame` object.
        """
        import polars as pl

        data = {}
        if self._seqnames is not None:
            data["seqnames"] = self._seqnames.tolist()
        data["start"] = self._start
        data["end"] = self.get_end()
        data["width"] = self._width
        if self._strand is not None:
            data["strand"] = self._strand.tolist()

        output = pl.DataFrame(data)

        if self._mcols is not None and self._mcols.shape[1] > 0:
            output = pl.concat([output, self._mcols.to_polars()], how="horizontal")

        if self._names is not None:
            output = output.with_columns(names=pl.Series(list(self._names)))

        return output

    @classmethod
    def from_polars(cls, input) -> "Ranges":
        """Create a ``Ranges`` object from a :py:class:`~polars.DataFrame`.

        Args:
            input:
                Input data, see :py:meth:`from_pandas` for the expected columns.

        Returns:
            A ``Ranges`` object.
        """

        from polars import DataFrame

        if not isinstance(input, DataFrame):
            raise TypeError("`input` is not a polars `DataFrame` object.")

        data = {col: input[col].to_list() for col in input.columns}
        return cls._from_columns(data, list(input.columns), None)

    @classmethod
    def _from_columns(cls, data: dict, columns: list, names: Optional[list]) -> "Ranges":
        if "start" not in data:
            raise ValueError("'input' must contain column 'start'.")
        start = np.asarray(data["start"], dtype=np.int64)

        if "width" in data:
            width = np.asarray(data["width"], dtype=np.int64)
        elif "end" in data:
            width = np.asarray(data["end"], dtype=np.int64) - start + 1
        else:
            raise ValueError("'input' must contain column 'width' or 'end'.")

        reserved = {"start", "end", "width", "seqnames", "strand"}
        mcol_names = [c for c in columns if c not in reserved]

        mcols = None
        if len(mcol_names) > 0:
            mcols = BiocFrame({c: data[c] for c in mcol_names}, number_of_rows=len(start))

        return cls(
            start=start,
            width=width,
            seqnames=data.get("seqnames"),
            strand=data.get("strand"),
            names=names,
            mcols=mcols,
        )

    ##############
    #### misc ####
    ##############

    @classmethod
    def empty(cls):
        """Create an zero-length ``Ranges`` object.

        Returns:
            Same type as caller, in this case a ``Ranges``.
        """
        return cls([], [])

    #############################
    #### combine ops wrapper ####
    #############################

    def combine(self, *other: "Ranges") -> "Ranges":
        """Combine multiple range objects into one.

        Wrapper around :py:func:`~biocutils.combine_sequences`.

        Returns:
            A ``Ranges`` containing all the combined ranges.
        """
        return _combine_Ranges(self, *other)


def check_column_compatibility(left: BiocFrame, right: BiocFrame):
    """Check that same-named columns of two frames agree on being numeric.

    Raises:
        SchemaMismatchError:
            If a shared column is numeric on one side only.
    """
    right_names = set(right.get_column_names())
    for col in left.get_column_names():
        if col not in right_names:
            continue

        lval = left.column(col)
        rval = right.column(col)
        if len(lval) == 0 or len(rval) == 0:
            continue

        if is_numeric_column(lval) != is_numeric_column(rval):
            raise SchemaMismatchError(f"column '{col}' has incompatible types on both sides.", column=col)


@combine_sequences.register
def _combine_Ranges(*x: Ranges) -> Ranges:
    has_names = any(y._names is not None for y in x)

    all_names = None
    if has_names:
        all_names = []
        for y in x:
            if y._names is not None:
                all_names += y._names
            else:
                all_names += [""] * len(y)

    with_seqnames = [y._seqnames is not None for y in x]
    all_seqnames = None
    if all(with_seqnames):
        all_seqnames = np.concatenate([y._seqnames for y in x])
    elif any(with_seqnames):
        raise ValueError("cannot combine ranges with and without 'seqnames'")

    all_strand = None
    if any(y._strand is not None for y in x):
        all_strand = np.concatenate([y._strand if y._strand is not None else np.full(len(y), "*") for y in x])

    for y in x[1:]:
        check_column_compatibility(x[0]._mcols, y._mcols)

    return Ranges(
        start=combine_sequences(*[y._start for y in x]),
        width=combine_sequences(*[y._width for y in x]),
        seqnames=all_seqnames,
        strand=all_strand,
        names=all_names,
        mcols=combine_rows(*[y._mcols for y in x]),
        metadata=x[0]._metadata,
        validate=False,
    )
