"""
Data model for learning to rank.

Modules:
    datapoint: DataPoint, a labeled and featurized (query, document) pair
    ranklist: RankList, the per-query list that rankers reorder, and DataSet
    loader: SVM-light, pandas and synthetic DataSet builders
"""

from .datapoint import DataPoint
from .loader import dataset_from_frame, load_svmlight, make_synthetic_dataset
from .ranklist import DataSet, RankList

__all__ = [
    "DataPoint",
    "RankList",
    "DataSet",
    "load_svmlight",
    "dataset_from_frame",
    "make_synthetic_dataset",
]
