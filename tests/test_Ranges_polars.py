import numpy as np
import polars as pl
from biocframe import BiocFrame

from plyranges import Ranges

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"


def test_from_polars():
    df = pl.DataFrame({"start": [1, 2, 3, 4], "width": [4, 5, 6, 7]})

    x = Ranges.from_polars(df)
    assert (x.get_start() == np.array(df["start"])).all()
    assert (x.get_width() == np.array(df["width"])).all()
    assert isinstance(x.mcols, BiocFrame)


def test_from_polars_genomic_columns():
    df = pl.DataFrame(
        {
            "seqnames": ["chr1", "chr1", "chr2"],
            "start": [1, 10, 3],
            "end": [5, 12, 3],
            "strand": ["+", "*", "-"],
            "gene": ["g1", "g2", "g3"],
        }
    )

    x = Ranges.from_polars(df)
    assert (x.get_width() == np.array([5, 3, 1])).all()
    assert x.get_strand().tolist() == ["+", "*", "-"]
    assert x.get_mcols().column("gene") == ["g1", "g2", "g3"]


def test_to_polars_export():
    x = Ranges([1, 2, 3, 4], [4, 5, 6, 7])

    y = x.to_polars()
    assert isinstance(y, pl.DataFrame)
    assert y.columns == ["start", "end", "width"]
    assert y["end"].to_list() == [4, 6, 8, 10]


def test_to_polars_names():
    x = Ranges([1, 2, 3, 4], [4, 5, 6, 7], names=["range1", "range2", "range3", "range4"])

    y = x.to_polars()
    assert isinstance(y, pl.DataFrame)
    assert set(y.columns) == {"start", "end", "width", "names"}
