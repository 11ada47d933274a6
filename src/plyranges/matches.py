import logging
from typing import List, Literal

import numpy as np
from biocframe import BiocFrame

from .index import RangesIndex
from .Ranges import Ranges
from .utils import PREDICATES, SELECTIONS, STRAND_MODES

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"

logger = logging.getLogger(__name__)

_COMPATIBLE_STRANDS = {"+": ("+", "*"), "-": ("-", "*"), "*": None}


def _hits_frame(query_hits, subject_hits) -> BiocFrame:
    return BiocFrame(
        data={
            "query_hits": np.asarray(query_hits, dtype=np.int64),
            "subject_hits": np.asarray(subject_hits, dtype=np.int64),
        }
    )


def empty_hits() -> BiocFrame:
    """An empty hit set.

    Returns:
        A ``BiocFrame`` with zero rows and ``query_hits``, ``subject_hits`` columns.
    """
    return _hits_frame([], [])


def find_matches(
    query: Ranges,
    subject: Ranges,
    predicate: Literal["overlaps", "precedes", "follows", "nearest"] = "overlaps",
    strand_mode: Literal["ignore", "aware"] = "ignore",
    selection: Literal["all", "best"] = "all",
    within: bool = False,
    min_overlap: int = 0,
    max_gap: int = -1,
    closest: bool = True,
) -> BiocFrame:
    """Match each range in ``query`` against the ranges in ``subject``.

    Ranges on different sequences never match. Sequence names are only
    compared if both objects have them.

    Args:
        query:
            Query ranges.

        subject:
            Subject ranges.

        predicate:
            Spatial relationship a subject must have with the query range.

            - "overlaps": the two ranges share at least one position.
            - "precedes": the subject lies entirely to the right of the query.
            - "follows": the subject lies entirely to the left of the query.
            - "nearest": the subject with the smallest gap in either
              direction, overlapping subjects having a gap of zero.

            Defaults to "overlaps".

        strand_mode:
            Either "ignore" (all ranges are treated as unstranded) or
            "aware". In "aware" mode, strands must be equal or one of them
            must be "*", and for queries on the "-" strand the meaning of
            left and right is swapped for "precedes", "follows" and "nearest".

            Defaults to "ignore".

        selection:
            Either "all" to report every qualifying subject, or "best" to
            report at most one subject per query range. For "overlaps",
            "precedes" and "follows" this is the lowest-indexed qualifying
            subject. For "nearest", equally near subjects are resolved in
            favour of the upstream one (lower start, or higher end for "-"
            queries in "aware" mode), then the lowest subject index.

            Defaults to "all".

        within:
            Only for "overlaps": require the subject to contain the query range.

        min_overlap:
            Only for "overlaps": minimum number of shared positions.

        max_gap:
            Only for "overlaps": largest gap between two ranges that still
            counts as an overlap. Defaults to -1 (no gap allowed).

        closest:
            Only for "precedes" and "follows". If True, only the subjects
            closest to the query range qualify; if False, every subject on
            that side does.

    Returns:
        A ``BiocFrame`` with integer columns ``query_hits`` and
        ``subject_hits``, ordered by query index, then subject index.
    """
    if not isinstance(query, Ranges):
        raise TypeError("'query' is not a `Ranges` object.")

    if not isinstance(subject, Ranges):
        raise TypeError("'subject' is not a `Ranges` object.")

    if predicate not in PREDICATES:
        raise ValueError(f"'predicate' must be one of {', '.join(PREDICATES)}.")

    if strand_mode not in STRAND_MODES:
        raise ValueError(f"'strand_mode' must be one of {', '.join(STRAND_MODES)}.")

    if selection not in SELECTIONS:
        raise ValueError(f"'selection' must be one of {', '.join(SELECTIONS)}.")

    if max_gap < -1:
        raise ValueError("'max_gap' must be >= -1")

    if min_overlap < 0:
        raise ValueError("'min_overlap' cannot be negative.")

    if max_gap != -1 and min_overlap != 0:
        raise ValueError("at least one of 'max_gap' and 'min_overlap' must be set to its default value")

    if predicate != "overlaps" and (within or min_overlap != 0 or max_gap != -1):
        raise ValueError("'within', 'min_overlap' and 'max_gap' only apply to the 'overlaps' predicate")

    if not closest and predicate not in ("precedes", "follows"):
        raise ValueError("'closest' only applies to the 'precedes' and 'follows' predicates")

    if len(query) == 0 or len(subject) == 0:
        return empty_hits()

    aware = strand_mode == "aware"
    use_seqnames = query.get_seqnames() is not None and subject.get_seqnames() is not None
    index = RangesIndex(subject, by_seqname=use_seqnames, by_strand=aware and subject.has_strand())

    q_start = query.get_start().astype(np.int64)
    q_end = query.get_end().astype(np.int64)
    q_seq = query.get_seqnames() if use_seqnames else None
    q_strand = query.get_strand() if aware and query.has_strand() else None

    s_start = subject.get_start().astype(np.int64)
    s_end = subject.get_end().astype(np.int64)

    best = selection == "best"
    query_hits = []
    subject_hits = []
    for i in range(len(query)):
        seq = q_seq[i] if q_seq is not None else None
        strand = q_strand[i] if q_strand is not None else "*"
        strands = _COMPATIBLE_STRANDS[strand]
        minus = strand == "-"
        qs = int(q_start[i])
        qe = int(q_end[i])

        if predicate == "overlaps":
            rows = index.overlapping(seq, qs, qe, max_gap=max_gap, strands=strands)
            if within:
                rows = rows[(s_start[rows] <= qs) & (s_end[rows] >= qe)]
            if min_overlap > 0:
                shared = np.minimum(s_end[rows], qe) - np.maximum(s_start[rows], qs) + 1
                rows = rows[shared >= min_overlap]
        elif predicate == "nearest":
            rows = _nearest_rows(index, seq, qs, qe, strands, s_start, s_end)
        else:
            rightward = (predicate == "precedes") != minus
            if rightward:
                rows = index.starting_after(seq, qe, strands=strands, closest=closest)
            else:
                rows = index.ending_before(seq, qs, strands=strands, closest=closest)

        if len(rows) == 0:
            continue

        if best and len(rows) > 1:
            rows = _upstream_first(rows, s_start, s_end, minus) if predicate == "nearest" else rows[:1]

        query_hits.append(np.full(len(rows), i, dtype=np.int64))
        subject_hits.append(rows)

    if len(query_hits) == 0:
        return empty_hits()

    hits = _hits_frame(np.concatenate(query_hits), np.concatenate(subject_hits))
    logger.debug("'%s' matched %d hit(s) for %d query range(s)", predicate, hits.shape[0], len(query))
    return hits


def _nearest_rows(index, seq, qs, qe, strands, s_start, s_end) -> np.ndarray:
    overlapping = index.overlapping(seq, qs, qe, strands=strands)
    if len(overlapping):
        return overlapping

    left = index.ending_before(seq, qs, strands=strands, closest=True)
    right = index.starting_after(seq, qe, strands=strands, closest=True)
    if len(left) == 0:
        return right
    if len(right) == 0:
        return left

    left_gap = qs - s_end[left[0]]
    right_gap = s_start[right[0]] - qe
    if left_gap < right_gap:
        return left
    if right_gap < left_gap:
        return right
    return np.sort(np.concatenate([left, right]))


def _upstream_first(rows: np.ndarray, s_start: np.ndarray, s_end: np.ndarray, minus: bool) -> np.ndarray:
    key = -s_end[rows] if minus else s_start[rows]
    return rows[np.lexsort((rows, key))[:1]]


def filter_directed(hits: BiocFrame, query: Ranges, subject: Ranges) -> BiocFrame:
    """Drop hits between ranges on opposite strands.

    Ranges on ``"*"`` are compatible with either strand, and objects without
    strand information count as ``"*"`` throughout.

    Args:
        hits:
            Hits as returned by :py:func:`find_matches`.

        query:
            Query ranges used to compute ``hits``.

        subject:
            Subject ranges used to compute ``hits``.

    Returns:
        A ``BiocFrame`` with the retained hits, in their original order.
    """
    if not query.has_strand() or not subject.has_strand() or hits.shape[0] == 0:
        return hits

    qh = np.asarray(hits.get_column("query_hits"))
    sh = np.asarray(hits.get_column("subject_hits"))
    qs = query.get_strand()[qh]
    ss = subject.get_strand()[sh]
    keep = (qs == ss) | (qs == "*") | (ss == "*")
    return _hits_frame(qh[keep], sh[keep])


def count_overlaps(
    x: Ranges,
    y: Ranges,
    max_gap: int = -1,
    min_overlap: int = 0,
    strand_mode: Literal["ignore", "aware"] = "ignore",
) -> np.ndarray:
    """Count the ranges in ``y`` overlapping each range in ``x``.

    Returns:
        NumPy vector with one count per range in ``x``.
    """
    hits = find_matches(x, y, "overlaps", strand_mode=strand_mode, max_gap=max_gap, min_overlap=min_overlap)
    return np.bincount(np.asarray(hits.get_column("query_hits"), dtype=np.int64), minlength=len(x))


def _overlap_mask(x: Ranges, y: Ranges, **kwargs) -> np.ndarray:
    return count_overlaps(x, y, **kwargs) > 0


def filter_by_overlaps(x: Ranges, y: Ranges, max_gap: int = -1, min_overlap: int = 0) -> Ranges:
    """Keep the ranges in ``x`` that overlap at least one range in ``y``."""
    return x[np.where(_overlap_mask(x, y, max_gap=max_gap, min_overlap=min_overlap))[0]]


def filter_by_non_overlaps(x: Ranges, y: Ranges, max_gap: int = -1, min_overlap: int = 0) -> Ranges:
    """Keep the ranges in ``x`` that overlap no range in ``y``."""
    return x[np.where(~_overlap_mask(x, y, max_gap=max_gap, min_overlap=min_overlap))[0]]


def hit_pairs(hits: BiocFrame) -> List[tuple]:
    """List the hits as ``(query, subject)`` index pairs."""
    qh = np.asarray(hits.get_column("query_hits")).tolist()
    sh = np.asarray(hits.get_column("subject_hits")).tolist()
    return list(zip(qh, sh))


def unmatched(hits: BiocFrame, n_query: int) -> np.ndarray:
    """Indices of query ranges without any hit."""
    counts = np.bincount(np.asarray(hits.get_column("query_hits"), dtype=np.int64), minlength=n_query)
    return np.where(counts == 0)[0]
