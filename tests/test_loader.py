"""Tests for the dataset loaders."""

import pandas as pd
import pytest

from ltr.data import dataset_from_frame, load_svmlight, make_synthetic_dataset
from ltr.errors import DataFormatError

SVMLIGHT = """\
1 qid:10 1:21.00 2:2.30 3:4.50 # desc
0 qid:10 1:1.0 3:0.5
2 qid:11 2:7.0
0 qid:11 1:3.0 2:1.0
"""


def test_load_svmlight_groups_by_query(tmp_path):
    path = tmp_path / "train.txt"
    path.write_text(SVMLIGHT)

    dataset = load_svmlight(path)

    assert len(dataset) == 2
    assert [len(rl) for rl in dataset] == [2, 2]
    assert [rl.query_id for rl in dataset] == [10, 11]

    first = dataset[0].get(0)
    assert first.label == 1
    assert first.num_features == 3
    assert first.get_feature(1) == pytest.approx(21.0)
    assert first.get_feature(2) == pytest.approx(2.3)
    assert first.get_feature(3) == pytest.approx(4.5)

    # Absent features are zero
    assert dataset[0].get(1).get_feature(2) == 0.0
    assert dataset[1].get(0).label == 2
    assert dataset[1].get(0).get_feature(1) == 0.0


def test_load_svmlight_new_list_on_query_change(tmp_path):
    path = tmp_path / "train.txt"
    path.write_text("1 qid:1 1:1\n0 qid:2 1:2\n1 qid:1 1:3\n")

    dataset = load_svmlight(path)

    assert [rl.query_id for rl in dataset] == [1, 2, 1]


def test_load_svmlight_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_svmlight(tmp_path / "missing.txt")


def test_load_svmlight_malformed(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("not a valid line\n")

    with pytest.raises(DataFormatError):
        load_svmlight(path)


def test_load_svmlight_rejects_fractional_labels(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("0.5 qid:1 1:1.0\n")

    with pytest.raises(DataFormatError):
        load_svmlight(path)


def test_dataset_from_frame():
    df = pd.DataFrame({
        "qid": [5, 5, 3, 3, 5],
        "rel": [1, 0, 0, 2, 0],
        "bm25": [1.5, 0.5, 0.2, 3.0, 0.1],
        "pagerank": [0.1, 0.2, 0.3, 0.4, 0.5],
        "doc": ["a", "b", "c", "d", "e"],
    })

    dataset = dataset_from_frame(df, "rel", "qid", ["bm25", "pagerank"], description_col="doc")

    assert [rl.query_id for rl in dataset] == [5, 3]
    assert [dp.description for dp in dataset[0]] == ["a", "b", "e"]
    assert dataset[1].labels == [0, 2]
    assert dataset[1].get(1).get_feature(1) == pytest.approx(3.0)
    assert dataset[1].get(1).get_feature(2) == pytest.approx(0.4)


def test_dataset_from_frame_missing_column():
    df = pd.DataFrame({"qid": [1], "rel": [1]})

    with pytest.raises(DataFormatError):
        dataset_from_frame(df, "rel", "qid", ["bm25"])


def test_synthetic_dataset_is_reproducible():
    a = make_synthetic_dataset(num_queries=4, docs_per_query=5, num_features=3, seed=1)
    b = make_synthetic_dataset(num_queries=4, docs_per_query=5, num_features=3, seed=1)

    assert len(a) == 4
    assert all(len(rl) == 5 for rl in a)
    assert all(dp.num_features == 3 for rl in a for dp in rl)
    assert [rl.labels for rl in a] == [rl.labels for rl in b]
    assert a[0].get(0).get_feature(2) == b[0].get(0).get_feature(2)


def test_synthetic_dataset_needs_features():
    with pytest.raises(ValueError):
        make_synthetic_dataset(num_queries=1, docs_per_query=1, num_features=0)
