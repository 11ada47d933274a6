import numpy as np
import pandas as pd
import pytest
from biocframe import BiocFrame

from plyranges import Ranges

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"


def test_pandas():
    df = pd.DataFrame({"start": [1, 2, 3, 4], "width": [4, 5, 6, 7]})

    x = Ranges.from_pandas(df)
    assert (x.get_start() == np.array(df["start"])).all()
    assert (x.get_width() == np.array(df["width"])).all()
    assert isinstance(x.mcols, BiocFrame)
    assert x.get_seqnames() is None
    assert not x.has_strand()


def test_pandas_genomic_columns():
    df = pd.DataFrame(
        {
            "seqnames": ["chr1", "chr2"],
            "start": [1, 10],
            "end": [5, 12],
            "strand": ["+", "-"],
            "score": [1.5, 2.5],
        },
        index=["a", "b"],
    )

    x = Ranges.from_pandas(df)
    assert (x.get_width() == np.array([5, 3])).all()
    assert x.get_seqnames().tolist() == ["chr1", "chr2"]
    assert x.get_strand().tolist() == ["+", "-"]
    assert x.get_names() == ["a", "b"]
    assert list(x.get_mcols().get_column_names()) == ["score"]
    assert x.get_mcols().column("score") == [1.5, 2.5]


def test_pandas_missing_columns():
    with pytest.raises(ValueError):
        Ranges.from_pandas(pd.DataFrame({"width": [1, 2]}))

    with pytest.raises(ValueError):
        Ranges.from_pandas(pd.DataFrame({"start": [1, 2]}))

    with pytest.raises(TypeError):
        Ranges.from_pandas({"start": [1], "width": [1]})


def test_pandas_export():
    x = Ranges(
        [1, 2, 3, 4],
        [4, 5, 6, 7],
        seqnames="chr1",
        strand=["+", "-", "*", "+"],
        mcols=BiocFrame({"score": [1, 2, 3, 4]}),
    )

    y = x.to_pandas()
    assert isinstance(y, pd.DataFrame)
    assert y.columns.tolist() == ["seqnames", "start", "end", "width", "strand", "score"]
    assert y["end"].tolist() == [4, 6, 8, 10]
    assert y["strand"].tolist() == ["+", "-", "*", "+"]
