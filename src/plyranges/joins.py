import logging
from typing import Literal, Tuple

import numpy as np
from biocframe import BiocFrame

from .matches import filter_directed, find_matches, unmatched
from .Ranges import Ranges, check_column_compatibility
from .utils import JOIN_SUFFIX, calc_gap, take_with_missing

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"

logger = logging.getLogger(__name__)

JOIN_TYPES = ("inner", "left", "intersect")


def _hit_indices(hits: BiocFrame) -> Tuple[np.ndarray, np.ndarray]:
    qh = np.asarray(hits.get_column("query_hits"), dtype=np.int64)
    sh = np.asarray(hits.get_column("subject_hits"), dtype=np.int64)
    return qh, sh


def _disambiguate(name: str, taken: set, suffix: str) -> str:
    if name not in taken:
        return name

    candidate = name + suffix
    counter = 1
    while candidate in taken:
        candidate = f"{name}{suffix}.{counter}"
        counter += 1

    return candidate


def _merge_mcols(left: BiocFrame, right: BiocFrame, right_idx: np.ndarray, suffix: str) -> BiocFrame:
    columns = {}
    for col in left.get_column_names():
        columns[col] = left.column(col)

    taken = set(columns.keys())
    for col in right.get_column_names():
        name = _disambiguate(col, taken, suffix)
        columns[name] = take_with_missing(right.column(col), right_idx)
        taken.add(name)

    return BiocFrame(columns, number_of_rows=len(right_idx))


def resolve(
    query: Ranges,
    subject: Ranges,
    hits: BiocFrame,
    join_type: Literal["inner", "left", "intersect"] = "inner",
    suffix: str = JOIN_SUFFIX,
) -> Ranges:
    """Build the joined ranges for a set of hits.

    Output rows follow the query order: all hits of query range 0 (in
    subject order), then all hits of query range 1, and so on. Coordinates,
    sequence names, strands and names come from the query ranges. Metadata
    columns are the query's, followed by the subject's; a subject column
    whose name is already used is renamed by appending ``suffix``
    (``"score"`` becomes ``"score.y"``, then ``"score.y.1"`` if that is
    taken as well). Query values are never overwritten.

    Args:
        query:
            Query ranges.

        subject:
            Subject ranges.

        hits:
            Hits as returned by :py:func:`~plyranges.matches.find_matches`.

        join_type:
            How to turn hits into rows.

            - "inner": one row per hit, with the query coordinates.
            - "left": as "inner", plus one row for every query range without
              hits, kept at its original position. Subject columns are
              missing in these rows (masked for numeric columns, None
              otherwise).
            - "intersect": one row per hit, restricted to the positions shared
              by the query and subject ranges. Hits without shared positions
              are dropped and their positions in ``hits`` are listed in the
              ``"dropped_hits"`` entry of the output metadata.

            Defaults to "inner".

        suffix:
            Suffix used to rename colliding subject columns.
            Defaults to ``".y"``.

    Raises:
        SchemaMismatchError:
            If a column present on both sides is numeric on one side only.

    Returns:
        A new ``Ranges`` object.
    """
    if not isinstance(query, Ranges):
        raise TypeError("'query' is not a `Ranges` object.")

    if not isinstance(subject, Ranges):
        raise TypeError("'subject' is not a `Ranges` object.")

    if join_type not in JOIN_TYPES:
        raise ValueError(f"'join_type' must be one of {', '.join(JOIN_TYPES)}.")

    check_column_compatibility(query.get_mcols(), subject.get_mcols())

    q_idx, s_idx = _hit_indices(hits)
    positions = np.arange(len(q_idx), dtype=np.int64)

    if join_type == "left":
        missing = unmatched(hits, len(query))
        q_idx = np.concatenate([q_idx, missing])
        s_idx = np.concatenate([s_idx, np.full(len(missing), -1, dtype=np.int64)])
        positions = np.concatenate([positions, np.full(len(missing), -1, dtype=np.int64)])

    order = np.lexsort((s_idx, q_idx))
    q_idx = q_idx[order]
    s_idx = s_idx[order]
    positions = positions[order]

    output = query[q_idx]
    output = output.set_mcols(_merge_mcols(output.get_mcols(), subject.get_mcols(), s_idx, suffix))
    metadata = dict(query.get_metadata())

    if join_type == "intersect":
        new_start = np.maximum(query.get_start()[q_idx], subject.get_start()[s_idx]).astype(np.int64)
        new_end = np.minimum(query.get_end()[q_idx], subject.get_end()[s_idx]).astype(np.int64)

        keep = new_end >= new_start - 1
        dropped = np.sort(positions[~keep])
        if len(dropped):
            logger.debug("intersect join dropped %d hit(s) without shared positions", len(dropped))
            kept = np.where(keep)[0]
            output = output[kept]
            new_start = new_start[kept]
            new_end = new_end[kept]

        output = output.set_bounds(new_start, new_end)
        metadata["dropped_hits"] = dropped

    return output.set_metadata(metadata)


def _with_column(x: Ranges, name: str, values, suffix: str) -> Ranges:
    mcols = x.get_mcols()
    name = _disambiguate(name, set(mcols.get_column_names()), suffix)
    return x.set_mcols(mcols.set_column(name, values))


#######################
#### overlap joins ####
#######################


def _overlap_join(x, y, join_type, within, directed, max_gap, min_overlap, suffix):
    hits = find_matches(x, y, "overlaps", within=within, max_gap=max_gap, min_overlap=min_overlap)
    if directed:
        hits = filter_directed(hits, x, y)
    return resolve(x, y, hits, join_type, suffix=suffix)


def join_overlap_inner(x: Ranges, y: Ranges, max_gap: int = -1, min_overlap: int = 0, suffix: str = JOIN_SUFFIX):
    """Join ranges in ``x`` with the ranges in ``y`` they overlap.

    Args:
        x:
            Query ranges.

        y:
            Subject ranges.

        max_gap:
            Largest gap still counted as an overlap.
            Defaults to -1 (a shared position is required).

        min_overlap:
            Minimum number of shared positions.

        suffix:
            Suffix for colliding subject column names.

    Returns:
        A ``Ranges`` with one row per overlapping pair, keeping the
        coordinates of ``x`` and the metadata columns of both.
    """
    return _overlap_join(x, y, "inner", False, False, max_gap, min_overlap, suffix)


def join_overlap_inner_within(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    """As :py:func:`join_overlap_inner`, keeping only ranges of ``x`` contained in the range of ``y``."""
    return _overlap_join(x, y, "inner", True, False, max_gap, min_overlap, suffix)


def join_overlap_inner_directed(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    """As :py:func:`join_overlap_inner`, dropping pairs on opposite strands."""
    return _overlap_join(x, y, "inner", False, True, max_gap, min_overlap, suffix)


def join_overlap_inner_within_directed(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    return _overlap_join(x, y, "inner", True, True, max_gap, min_overlap, suffix)


def join_overlap_left(x: Ranges, y: Ranges, max_gap: int = -1, min_overlap: int = 0, suffix: str = JOIN_SUFFIX):
    """Left outer overlap join.

    Every range of ``x`` is kept; ranges without an overlap appear once,
    at their original position, with missing values in the columns
    coming from ``y``.

    Returns:
        A ``Ranges`` object.
    """
    return _overlap_join(x, y, "left", False, False, max_gap, min_overlap, suffix)


def join_overlap_left_within(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    return _overlap_join(x, y, "left", True, False, max_gap, min_overlap, suffix)


def join_overlap_left_directed(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    return _overlap_join(x, y, "left", False, True, max_gap, min_overlap, suffix)


def join_overlap_intersect(
    x: Ranges, y: Ranges, max_gap: int = -1, min_overlap: int = 0, suffix: str = JOIN_SUFFIX
):
    """Intersect overlapping pairs.

    As :py:func:`join_overlap_inner`, but the coordinates of each row are
    restricted to the positions shared by both ranges.

    Returns:
        A ``Ranges`` object.
    """
    return _overlap_join(x, y, "intersect", False, False, max_gap, min_overlap, suffix)


def join_overlap_intersect_within(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    return _overlap_join(x, y, "intersect", True, False, max_gap, min_overlap, suffix)


def join_overlap_intersect_directed(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    return _overlap_join(x, y, "intersect", False, True, max_gap, min_overlap, suffix)


def join_overlap_intersect_within_directed(x, y, max_gap=-1, min_overlap=0, suffix=JOIN_SUFFIX):
    return _overlap_join(x, y, "intersect", True, True, max_gap, min_overlap, suffix)


def find_overlaps(x: Ranges, y: Ranges, max_gap: int = -1, min_overlap: int = 0, suffix: str = JOIN_SUFFIX):
    """Inner overlap join that also reports the coordinates of the matched ranges in ``y``.

    The coordinates are stored as ``"start" + suffix`` and ``"end" + suffix``
    metadata columns. If either name is already taken, ``suffix`` is
    appended again, so no existing column is replaced.

    Returns:
        A ``Ranges`` object.
    """
    hits = find_matches(x, y, "overlaps", max_gap=max_gap, min_overlap=min_overlap)
    output = resolve(x, y, hits, "inner", suffix=suffix)

    _, sh = _hit_indices(hits)
    output = _with_column(output, "start" + suffix, y.get_start()[sh], suffix)
    return _with_column(output, "end" + suffix, y.get_end()[sh], suffix)


###########################
#### directional joins ####
###########################


def _directional_join(x, y, predicate, strand_mode, selection, closest=True, distance=False, suffix=JOIN_SUFFIX):
    hits = find_matches(x, y, predicate, strand_mode=strand_mode, selection=selection, closest=closest)
    output = resolve(x, y, hits, "inner", suffix=suffix)

    if distance:
        qh, sh = _hit_indices(hits)
        gaps = calc_gap(
            x.get_start()[qh].astype(np.int64),
            x.get_end()[qh].astype(np.int64),
            y.get_start()[sh].astype(np.int64),
            y.get_end()[sh].astype(np.int64),
        )
        output = _with_column(output, "distance", gaps, suffix)

    return output


def join_nearest(x: Ranges, y: Ranges, distance: bool = False, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Join each range in ``x`` with its nearest neighbour in ``y``, ignoring strand.

    Overlapping ranges are nearest. Among equally near ranges the one with
    the lowest start is chosen, then the one with the lowest index.

    Args:
        x:
            Query ranges.

        y:
            Subject ranges.

        distance:
            Whether to add a ``"distance"`` column: 0 for overlapping
            ranges, otherwise the difference between the facing coordinates
            (1 for adjacent ranges). Named ``"distance" + suffix`` if ``x`` or
            ``y`` already has a ``"distance"`` column.

        suffix:
            Suffix for colliding subject column names.

    Returns:
        A ``Ranges`` with at most one row per range in ``x``; ranges without
        any neighbour are dropped.
    """
    return _directional_join(x, y, "nearest", "ignore", "best", distance=distance, suffix=suffix)


def join_nearest_left(x: Ranges, y: Ranges, distance: bool = False, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Join each range in ``x`` with the nearest range in ``y`` lying entirely to its left."""
    return _directional_join(x, y, "follows", "ignore", "best", distance=distance, suffix=suffix)


def join_nearest_right(x: Ranges, y: Ranges, distance: bool = False, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Join each range in ``x`` with the nearest range in ``y`` lying entirely to its right."""
    return _directional_join(x, y, "precedes", "ignore", "best", distance=distance, suffix=suffix)


def join_nearest_upstream(x: Ranges, y: Ranges, distance: bool = False, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Join each range in ``x`` with the nearest compatible-strand range upstream of it in ``y``.

    Upstream is to the left for ranges on ``"+"`` or ``"*"`` and to the right
    for ranges on ``"-"``.
    """
    return _directional_join(x, y, "follows", "aware", "best", distance=distance, suffix=suffix)


def join_nearest_downstream(x: Ranges, y: Ranges, distance: bool = False, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Join each range in ``x`` with the nearest compatible-strand range downstream of it in ``y``."""
    return _directional_join(x, y, "precedes", "aware", "best", distance=distance, suffix=suffix)


def join_follow(x: Ranges, y: Ranges, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Find the range in ``y`` that each range in ``x`` follows.

    The matched range is the closest one lying entirely to the left of the
    ``x`` range; strand is ignored. Ranges of ``x`` with nothing to their left
    are dropped, so the result may be empty.

    Returns:
        A ``Ranges`` with the coordinates of ``x`` and the metadata columns
        of both objects.
    """
    return _directional_join(x, y, "follows", "ignore", "best", suffix=suffix)


def join_follow_left(x: Ranges, y: Ranges, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Find all ranges in ``y`` lying entirely to the left of each range in ``x``, ignoring strand."""
    return _directional_join(x, y, "follows", "ignore", "all", closest=False, suffix=suffix)


def join_follow_upstream(x: Ranges, y: Ranges, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Find all compatible-strand ranges in ``y`` upstream of each range in ``x``.

    On the ``"+"`` strand these lie to the left of the ``x`` range, on the
    ``"-"`` strand to its right.
    """
    return _directional_join(x, y, "follows", "aware", "all", closest=False, suffix=suffix)


def join_precede(x: Ranges, y: Ranges, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Find the range in ``y`` that each range in ``x`` precedes.

    The matched range is the closest one lying entirely to the right of the
    ``x`` range; strand is ignored. Ranges of ``x`` with nothing to their
    right are dropped, so the result may be empty.
    """
    return _directional_join(x, y, "precedes", "ignore", "best", suffix=suffix)


def join_precede_right(x: Ranges, y: Ranges, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Find all ranges in ``y`` lying entirely to the right of each range in ``x``, ignoring strand."""
    return _directional_join(x, y, "precedes", "ignore", "all", closest=False, suffix=suffix)


def join_precede_downstream(x: Ranges, y: Ranges, suffix: str = JOIN_SUFFIX) -> Ranges:
    """Find all compatible-strand ranges in ``y`` downstream of each range in ``x``."""
    return _directional_join(x, y, "precedes", "aware", "all", closest=False, suffix=suffix)
