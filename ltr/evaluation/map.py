"""
Mean Average Precision.

Any item with label > 0 is relevant. Average precision for a list is the mean,
over the (1-indexed) positions of relevant items, of the precision at that
position. MAP over a dataset is the mean of the per-list values.
"""

from ..data import RankList
from .base import Evaluator


class MAP(Evaluator):
    """Mean Average Precision with binary relevance (label > 0)."""

    name = "MAP"

    def evaluate_ranklist(self, ranklist: RankList) -> float:
        average_precision = 0.0
        num_relevant = 0
        for position, dp in enumerate(ranklist, start=1):
            if dp.label > 0:
                num_relevant += 1
                average_precision += num_relevant / position

        if num_relevant == 0:
            return 0.0
        return average_precision / num_relevant

    def __repr__(self) -> str:
        return "MAP()"
