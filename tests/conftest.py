"""Shared fixtures for the test suite."""

from typing import List, Sequence, Tuple

import pytest

from ltr.data import DataPoint, RankList, make_synthetic_dataset
from ltr.evaluation import Evaluator


def make_ranklist(query_id: int, rows: Sequence[Tuple[int, List[float]]]) -> RankList:
    """Build a RankList from (label, features) rows."""
    return RankList(
        DataPoint(label, query_id, features, f"q{query_id}-d{i}")
        for i, (label, features) in enumerate(rows)
    )


class ConstantEvaluator(Evaluator):
    """Evaluator returning the same value for every list."""

    name = "CONST"

    def __init__(self, value: float):
        self.value = value

    def evaluate_ranklist(self, ranklist: RankList) -> float:
        return self.value


@pytest.fixture
def doc_ranklist() -> RankList:
    return RankList([
        DataPoint(0, 9, [10.0, 1.2, 4.3, 5.4], "doc1"),
        DataPoint(1, 9, [11.0, 2.2, 4.5, 5.6], "doc2"),
        DataPoint(0, 9, [12.0, 2.5, 4.7, 5.2], "doc3"),
    ])


@pytest.fixture
def separable_dataset() -> List[RankList]:
    """
    Three queries where feature 1 ranks every list perfectly, feature 2 ranks
    relevant items last and feature 3 is constant. Relevant items are stored
    last so the original order is a bad ranking.
    """
    return [
        make_ranklist(1, [(0, [0.1, 0.9, 1.0]), (0, [0.2, 0.8, 1.0]), (1, [0.8, 0.2, 1.0]), (1, [0.9, 0.1, 1.0])]),
        make_ranklist(2, [(0, [0.3, 0.7, 1.0]), (0, [0.1, 0.6, 1.0]), (1, [0.6, 0.1, 1.0]), (0, [0.2, 0.5, 1.0])]),
        make_ranklist(3, [(0, [0.4, 0.9, 1.0]), (1, [0.7, 0.3, 1.0]), (0, [0.1, 0.8, 1.0]), (1, [0.5, 0.4, 1.0])]),
    ]


@pytest.fixture
def small_dataset() -> List[RankList]:
    """3 queries x 4 documents, binary labels, 3 features."""
    return [
        make_ranklist(1, [(1, [0.5, 0.1, 3.0]), (0, [0.7, 0.4, 1.0]), (0, [0.2, 0.9, 2.0]), (1, [0.9, 0.3, 0.5])]),
        make_ranklist(2, [(0, [0.3, 0.8, 2.5]), (1, [0.6, 0.2, 1.5]), (0, [0.1, 0.6, 0.2]), (0, [0.4, 0.5, 3.1])]),
        make_ranklist(3, [(0, [0.8, 0.7, 0.4]), (0, [0.2, 0.1, 1.1]), (1, [0.5, 0.3, 2.2]), (1, [0.7, 0.2, 1.7])]),
    ]


@pytest.fixture
def synthetic_train() -> List[RankList]:
    return make_synthetic_dataset(num_queries=20, docs_per_query=8, num_features=5, noise=1.0, seed=7)


@pytest.fixture
def synthetic_validation() -> List[RankList]:
    return make_synthetic_dataset(num_queries=10, docs_per_query=8, num_features=5, noise=1.0, seed=11)
