import copy

import numpy as np
import pytest
from biocframe import BiocFrame
from biocutils import combine_sequences

from plyranges import Ranges, SchemaMismatchError

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"


def test_Ranges_basic():
    starts = [1, 2, 3, 4]
    widths = [4, 5, 6, 7]
    x = Ranges(starts, widths)

    assert (x.get_start() == np.array(starts)).all()
    assert (x.get_width() == np.array(widths)).all()
    assert (x.get_end() == np.array([4, 6, 8, 10])).all()
    assert len(x) == 4
    assert x.get_seqnames() is None
    assert x.get_strand() is None
    assert not x.has_strand()

    y = x.set_start([0, 1, 2, 3])
    assert (y.get_start() == np.array([0, 1, 2, 3])).all()
    assert (x.get_start() == np.array(starts)).all()

    y = x.set_width([1, 1, 1, 1])
    assert (y.get_end() == y.get_start()).all()

    y = x.set_bounds([1, 1, 1, 1], [0, 1, 2, 3])
    assert (y.get_width() == np.array([0, 1, 2, 3])).all()

    with pytest.raises(ValueError) as ex:
        Ranges([], [1])
    assert str(ex.value).find("should have the same length") >= 0

    with pytest.raises(ValueError) as ex:
        x.set_start([1])
    assert str(ex.value).find("should be equal to") >= 0

    with pytest.raises(ValueError) as ex:
        Ranges([1], [-1])
    assert str(ex.value).find("non-negative") >= 0

    with pytest.raises(ValueError) as ex:
        Ranges([1], [2**31 - 1])
    assert str(ex.value).find("32-bit signed integer") >= 0


def test_Ranges_property_setters():
    x = Ranges([1, 2, 3, 4], [4, 5, 6, 7])

    with pytest.warns(UserWarning):
        x.start = [5, 6, 7, 8]
    assert (x.get_start() == np.array([5, 6, 7, 8])).all()

    with pytest.warns(UserWarning):
        x.strand = "-"
    assert x.get_strand().tolist() == ["-", "-", "-", "-"]


def test_Ranges_names():
    x = Ranges([1, 2, 3, 4], [4, 5, 6, 7], names=["a", "b", "c", "d"])
    assert x.get_names() == ["a", "b", "c", "d"]

    y = x.set_names(None)
    assert y.get_names() is None
    assert x.get_names() is not None

    with pytest.raises(ValueError) as ex:
        x.set_names(["a"])
    assert str(ex.value).find("same length") >= 0


def test_Ranges_seqnames_strand():
    x = Ranges([1, 5, 9], [3, 3, 3], seqnames=["chr1", "chr1", "chr2"], strand=["+", "-", "."])

    assert x.get_seqnames().tolist() == ["chr1", "chr1", "chr2"]
    assert x.get_strand().tolist() == ["+", "-", "*"]
    assert x.has_strand()

    y = x.set_strand(None)
    assert not y.has_strand()
    assert x.has_strand()

    y = x.set_strand("-")
    assert y.get_strand().tolist() == ["-", "-", "-"]

    with pytest.raises(ValueError) as ex:
        Ranges([1], [1], strand=["x"])
    assert str(ex.value).find("must be one of") >= 0

    with pytest.raises(ValueError):
        Ranges([1, 2], [1, 1], seqnames=["chr1"])


def test_Ranges_mcols():
    x = Ranges([1, 2, 3, 4], [4, 5, 6, 7])
    assert x.get_mcols().shape == (4, 0)

    y = x.set_mcols(BiocFrame({"ok": [True, False, True, False]}))
    assert y.get_mcols().column("ok") == [True, False, True, False]
    assert x.get_mcols().shape[1] == 0

    with pytest.raises(TypeError) as ex:
        x.set_mcols({})
    assert str(ex.value).find("should be a BiocFrame") >= 0

    with pytest.raises(ValueError) as ex:
        x.set_mcols(BiocFrame({}, number_of_rows=3))
    assert str(ex.value).find("Number of rows") >= 0

    y = x.set_metadata({"source": "test"})
    assert y.get_metadata() == {"source": "test"}
    assert x.get_metadata() == {}


def test_Ranges_getitem():
    x = Ranges(
        [1, 2, 3, 4],
        [4, 5, 6, 7],
        strand=["+", "-", "*", "+"],
        names=["a", "b", "c", "d"],
        mcols=BiocFrame({"foo": ["A", "B", "C", "D"]}),
    )

    y = x[1:3]
    assert len(y) == 2
    assert (y.get_start() == np.array([2, 3])).all()
    assert y.get_names() == ["b", "c"]
    assert y.get_strand().tolist() == ["-", "*"]
    assert y.get_mcols().column("foo") == ["B", "C"]

    y = x[::-1]
    assert (y.get_start() == np.array([4, 3, 2, 1])).all()
    assert y.get_mcols().column("foo") == ["D", "C", "B", "A"]

    y = x[np.array([3, 0])]
    assert y.get_names() == ["d", "a"]

    y = x[[]]
    assert len(y) == 0

    rows = list(x)
    assert len(rows) == 4
    assert rows[2][0] == "c"
    assert len(rows[2][1]) == 1
    assert x.get_row("d").get_start().tolist() == [4]


def test_Ranges_mid_order_sort():
    x = Ranges([1, 2], [4, 5])
    assert (x.mid() == np.array([2, 4])).all()

    x = Ranges([5, 1, 1], [1, 3, 2], seqnames=["b", "a", "a"])
    assert list(x.order()) == [2, 1, 0]

    y = x.sort()
    assert y.get_seqnames().tolist() == ["a", "a", "b"]
    assert (y.get_end() == np.array([2, 3, 5])).all()


def test_Ranges_shift():
    x = Ranges([1, 2, 3, 4], [4, 5, 6, 7])

    y = x.shift(-3)
    assert (y.get_start() == np.array([-2, -1, 0, 1])).all()
    assert (y.get_width() == x.get_width()).all()

    y = x.shift([1, 2, 3, 4])
    assert (y.get_start() == np.array([2, 4, 6, 8])).all()


def test_Ranges_print():
    x = Ranges([1, 2, 3, 4], [4, 5, 6, 7], seqnames=["a", "a", "b", "b"], strand="+")
    assert repr(x).startswith("Ranges(")
    assert str(x).startswith("Ranges object with 4 ranges")


def test_Ranges_copy():
    starts = [1, 2, 3, 4]
    widths = [4, 5, 6, 7]
    x = Ranges(starts, widths)

    shallow = copy.copy(x)
    shallow.set_start([4, 3, 2, 1], in_place=True)
    assert x.get_start()[0] == 1
    assert shallow.get_start()[0] == 4

    deep = copy.deepcopy(x)
    deep.get_start()[0] = 2
    assert x.get_start()[0] == 1
    assert deep.get_start()[0] == 2


def test_Ranges_combine():
    starts = [1, 2, 3, 4]
    widths = [4, 5, 6, 7]
    starts2 = [10, 20, 30, 40]
    widths2 = [50, 60, 70, 80]

    x = Ranges(starts, widths)
    y = Ranges(starts2, widths2)
    comb = combine_sequences(x, y)
    assert (comb.get_start() == np.array([1, 2, 3, 4, 10, 20, 30, 40])).all()
    assert (comb.get_width() == np.array([4, 5, 6, 7, 50, 60, 70, 80])).all()
    assert comb.get_names() is None
    assert comb.get_strand() is None

    x = Ranges(starts, widths, mcols=BiocFrame({"foo": ["a", "b", "c", "d"]}))
    y = Ranges(starts2, widths2, mcols=BiocFrame({"foo": ["A", "B", "C", "D"]}))
    comb = x.combine(y)
    assert comb.get_mcols().column("foo") == ["a", "b", "c", "d", "A", "B", "C", "D"]

    x = Ranges(starts, widths)
    y = Ranges(starts2, widths2, names=["A", "B", "C", "D"])
    comb = combine_sequences(x, y)
    assert comb.get_names() == ["", "", "", "", "A", "B", "C", "D"]

    x = Ranges([1], [2], strand="+")
    y = Ranges([5], [2])
    comb = combine_sequences(x, y)
    assert comb.get_strand().tolist() == ["+", "*"]

    x = Ranges([1], [2], seqnames=["chr1"])
    with pytest.raises(ValueError):
        combine_sequences(x, y)

    x = Ranges([1], [1], mcols=BiocFrame({"a": [1]}))
    y = Ranges([2], [1], mcols=BiocFrame({"a": ["x"]}))
    with pytest.raises(SchemaMismatchError) as ex:
        combine_sequences(x, y)
    assert ex.value.column == "a"


def test_empty():
    r = Ranges.empty()

    assert r is not None
    assert isinstance(r, Ranges)
    assert len(r) == 0

    subset = r[0:10]
    assert subset is not None
    assert isinstance(subset, Ranges)
