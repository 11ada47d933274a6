import numpy as np
import pytest
from compressed_lists import splitAsCompressedList

from plyranges import CompressedRangesList, Ranges

__author__ = "Jayaram Kancherla"
__copyright__ = "Jayaram Kancherla"
__license__ = "MIT"


@pytest.fixture
def range_data():
    range1 = Ranges(start=[1, 2, 3], width=[5, 2, 8], strand="+")
    range2 = Ranges(start=[15, 45, 20, 1], width=[15, 100, 80, 5], strand="-")
    return range1, range2


def test_creation(range_data):
    range_list = CompressedRangesList.from_list([range_data[0], range_data[1]], names=["a", "b"])

    assert isinstance(range_list, CompressedRangesList)
    assert len(range_list) == 2
    assert isinstance(range_list.unlist_data, Ranges)
    assert len(range_list.get_unlist_data()) == 7
    assert list(range_list.get_element_lengths()) == [3, 4]
    assert np.allclose(range_list[0].get_start(), [1, 2, 3])
    assert range_list[1].get_strand().tolist() == ["-", "-", "-", "-"]


def test_split_ranges(range_data):
    range_list = CompressedRangesList.from_list([range_data[0], range_data[1]], names=["a", "b"])

    clist = splitAsCompressedList(range_list.unlist_data, groups_or_partitions=[0, 1, 2, 0, 0, 1, 1])

    assert isinstance(clist, CompressedRangesList)
    assert len(clist) == 3

    assert isinstance(repr(clist), str)
    assert isinstance(str(clist), str)


def test_from_groups(range_data):
    ranges = CompressedRangesList.from_list(list(range_data)).unlist_data
    groups = {(1,): np.array([0, 3]), (0,): np.array([1, 2, 4, 5, 6])}

    range_list = CompressedRangesList.from_groups(ranges, groups, ["cluster"])
    assert len(range_list) == 2
    assert list(range_list.get_element_lengths()) == [2, 5]
    assert range_list.get_group_keys().column("cluster") == [1, 0]
    assert range_list[0].get_start().tolist() == [1, 15]
    assert "cluster" in repr(range_list)
