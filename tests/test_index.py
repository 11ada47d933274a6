import numpy as np

from plyranges import Ranges, RangesIndex

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"


def test_index_overlapping():
    # [1, 3], [5, 7], [10, 12], [3, 12]
    subject = Ranges([1, 5, 10, 3], [3, 3, 3, 10])
    index = RangesIndex(subject)

    assert index.overlapping(None, 4, 6).tolist() == [1, 3]
    assert index.overlapping(None, 13, 20).tolist() == []
    assert index.overlapping(None, 4, 4, max_gap=0).tolist() == [0, 1, 3]
    assert index.overlapping(None, 14, 20, max_gap=1).tolist() == [2, 3]


def test_index_directional():
    subject = Ranges([1, 5, 10, 3], [3, 3, 3, 10])
    index = RangesIndex(subject)

    assert index.starting_after(None, 7).tolist() == [2]
    assert index.starting_after(None, 2).tolist() == [1, 2, 3]
    assert index.starting_after(None, 2, closest=True).tolist() == [3]
    assert index.starting_after(None, 10).tolist() == []

    assert index.ending_before(None, 10).tolist() == [0, 1]
    assert index.ending_before(None, 10, closest=True).tolist() == [1]
    assert index.ending_before(None, 3).tolist() == []


def test_index_ties():
    subject = Ranges([5, 1, 5], [2, 2, 4])
    index = RangesIndex(subject)

    assert index.starting_after(None, 3, closest=True).tolist() == [0, 2]
    assert index.ending_before(None, 10, closest=True).tolist() == [2]


def test_index_partitions():
    x = Ranges([1, 1, 1], [5, 5, 5], seqnames=["a", "b", "a"], strand=["+", "-", "*"])

    index = RangesIndex(x)
    assert index.overlapping("a", 1, 2).tolist() == [0, 2]
    assert index.overlapping("b", 1, 2).tolist() == [1]
    assert index.overlapping("c", 1, 2).tolist() == []

    index = RangesIndex(x, by_seqname=False, by_strand=True)
    assert index.overlapping(None, 2, 3).tolist() == [0, 1, 2]
    assert index.overlapping(None, 2, 3, strands=("+", "*")).tolist() == [0, 2]
    assert index.starting_after(None, 0, strands=("-",), closest=True).tolist() == [1]


def test_index_empty():
    index = RangesIndex(Ranges.empty())
    assert len(index) == 0

    res = index.overlapping(None, 1, 2)
    assert isinstance(res, np.ndarray)
    assert len(res) == 0
    assert len(index.starting_after(None, 0, closest=True)) == 0
