"""
Dataset loaders.

Builds DataSets (lists of RankLists) from the sources the toolkit is fed with:
- SVM-light / LETOR text files (parsed with scikit-learn)
- pandas DataFrames with one row per (query, document) pair
- Reproducible synthetic data for examples and smoke tests

The learner has no opinion on where a DataSet comes from; these helpers only
shape the data into the expected structure.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd
from sklearn.datasets import load_svmlight_file

from ..errors import DataFormatError
from .datapoint import DataPoint
from .ranklist import DataSet, RankList

logger = logging.getLogger(__name__)


def _check_labels(labels: np.ndarray) -> np.ndarray:
    """Labels must be integral relevance grades that fit in a byte."""
    if labels.size and (
        np.any(labels < 0) or np.any(labels > 255) or np.any(np.mod(labels, 1) != 0)
    ):
        raise DataFormatError("Labels must be integer relevance grades in [0, 255]")
    return labels.astype(np.int64)


def load_svmlight(path: Union[str, Path], n_features: Optional[int] = None) -> DataSet:
    """
    Load an SVM-light / LETOR file.

    Expected line format:
        <label> qid:<qid> <index>:<value> ... # <comment>

    Consecutive lines with the same qid form one RankList; a change of qid
    starts a new list. Feature indices start at 1 and absent features are 0.0.
    Trailing comments are discarded by the parser.

    Args:
        path: Path to the text file
        n_features: Force the feature count (useful to align train and
            validation files); inferred from the file when None

    Returns:
        DataSet with one RankList per query block

    Raises:
        FileNotFoundError: If the file does not exist
        DataFormatError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    logger.info(f"Loading SVM-light data from {path}...")
    try:
        X, y, qid = load_svmlight_file(
            str(path),
            n_features=n_features,
            dtype=np.float32,
            zero_based=False,
            query_id=True,
        )
    except ValueError as e:
        raise DataFormatError(f"Invalid SVM-light file {path}: {e}") from e

    labels = _check_labels(np.asarray(y))
    dense = X.toarray()

    dataset: DataSet = []
    current: List[DataPoint] = []
    current_qid = None
    for row, (label, query_id) in enumerate(zip(labels, qid)):
        if current and query_id != current_qid:
            dataset.append(RankList(current))
            current = []
        current_qid = query_id
        current.append(DataPoint(int(label), int(query_id), dense[row]))
    if current:
        dataset.append(RankList(current))

    logger.info(f"Loaded {len(dataset):,} queries, {len(labels):,} documents, {dense.shape[1]} features")
    return dataset


def dataset_from_frame(
    df: pd.DataFrame,
    label_col: str,
    query_col: str,
    feature_cols: Sequence[str],
    description_col: Optional[str] = None,
) -> DataSet:
    """
    Build a DataSet from a DataFrame with one row per (query, document).

    Lists follow the order in which each query first appears; rows keep
    their relative order inside a list. feature_cols[0] becomes feature 1.

    Args:
        df: Source DataFrame
        label_col: Column with integer relevance grades
        query_col: Column with query identifiers
        feature_cols: Feature columns, in feature-index order
        description_col: Optional column copied into DataPoint.description

    Returns:
        DataSet with one RankList per query
    """
    missing = [c for c in [label_col, query_col, *feature_cols] if c not in df.columns]
    if description_col is not None and description_col not in df.columns:
        missing.append(description_col)
    if missing:
        raise DataFormatError(f"Missing columns: {missing}")

    _check_labels(df[label_col].to_numpy(dtype=np.float64))

    dataset: DataSet = []
    for query_id, query_df in df.groupby(query_col, sort=False):
        features = query_df[list(feature_cols)].to_numpy(dtype=np.float32)
        descriptions = (
            query_df[description_col].astype(str).tolist()
            if description_col is not None
            else [None] * len(query_df)
        )
        points = [
            DataPoint(int(label), int(query_id), row, description)
            for label, row, description in zip(query_df[label_col], features, descriptions)
        ]
        dataset.append(RankList(points))

    logger.debug(f"Built {len(dataset)} rank lists from DataFrame with {len(df):,} rows")
    return dataset


def make_synthetic_dataset(
    num_queries: int,
    docs_per_query: int,
    num_features: int,
    max_label: int = 1,
    noise: float = 0.5,
    seed: int = 42,
) -> DataSet:
    """
    Generate a reproducible random DataSet.

    Feature 1 carries signal (label plus Gaussian noise scaled by ``noise``);
    all other features are uniform noise in [0, 1).

    Args:
        num_queries: Number of RankLists
        docs_per_query: Documents per RankList
        num_features: Features per document (at least 1)
        max_label: Labels are drawn uniformly from 0..max_label
        noise: Standard deviation of the noise added to feature 1
        seed: Random seed

    Returns:
        Synthetic DataSet
    """
    if num_features < 1:
        raise ValueError(f"num_features must be >= 1, got {num_features}")

    rng = np.random.default_rng(seed)
    dataset: DataSet = []
    for query_id in range(1, num_queries + 1):
        labels = rng.integers(0, max_label + 1, size=docs_per_query)
        features = rng.random((docs_per_query, num_features))
        features[:, 0] = labels + noise * rng.standard_normal(docs_per_query)
        dataset.append(
            RankList(
                DataPoint(int(label), query_id, row, f"q{query_id}-d{doc}")
                for doc, (label, row) in enumerate(zip(labels, features))
            )
        )
    return dataset
