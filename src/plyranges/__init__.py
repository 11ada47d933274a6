from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

try:
    # Change here if project is renamed and does not equal the package name
    dist_name = "plyranges"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

from .anchored import (
    AnchoredRanges,
    anchor_3p,
    anchor_5p,
    anchor_center,
    anchor_end,
    anchor_start,
    mid,
    resize,
    shift_downstream,
    shift_left,
    shift_right,
    shift_upstream,
    stretch,
    unanchor,
)
from .exceptions import InvalidWidthError, MissingStrandError, SchemaMismatchError
from .grouped import GroupedRanges, group_by, group_by_overlaps, ungroup
from .index import RangesIndex
from .joins import (
    find_overlaps,
    join_follow,
    join_follow_left,
    join_follow_upstream,
    join_nearest,
    join_nearest_downstream,
    join_nearest_left,
    join_nearest_right,
    join_nearest_upstream,
    join_overlap_inner,
    join_overlap_inner_directed,
    join_overlap_inner_within,
    join_overlap_inner_within_directed,
    join_overlap_intersect,
    join_overlap_intersect_directed,
    join_overlap_intersect_within,
    join_overlap_intersect_within_directed,
    join_overlap_left,
    join_overlap_left_directed,
    join_overlap_left_within,
    join_precede,
    join_precede_downstream,
    join_precede_right,
    resolve,
)
from .matches import count_overlaps, filter_by_non_overlaps, filter_by_overlaps, filter_directed, find_matches
from .Ranges import Ranges
from .rangeslist import CompressedRangesList
from .utils import JOIN_SUFFIX
