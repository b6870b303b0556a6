"""
Ranker interface.

A Ranker scores single DataPoints; ranking a list means sorting its items by
predicted score (highest first) and applying that order as a permutation.

Tie-break policy: the sort is stable on the current position, so among items
with equal scores the one that appears first in the list stays first.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

import numpy as np

from ..data import DataPoint, RankList


class Ranker(ABC):
    """
    Anything that can score a DataPoint.

    Subclasses implement predict(); ranking of lists and datasets is derived
    from it.
    """

    @abstractmethod
    def predict(self, datapoint: DataPoint) -> float:
        """
        Score a single DataPoint (higher means more relevant).

        Args:
            datapoint: Item to score

        Returns:
            Predicted relevance score
        """
        pass

    def ranking_permutation(self, ranklist: RankList) -> List[int]:
        """
        Compute the ranked order without touching the list.

        Returns:
            Permutation P such that P[i] is the current position of the item
            that should be ranked at position i
        """
        scores = np.fromiter(
            (self.predict(dp) for dp in ranklist), dtype=np.float64, count=len(ranklist)
        )
        return np.argsort(-scores, kind="stable").tolist()

    def rank(self, ranklist: RankList) -> RankList:
        """
        Reorder a RankList in place by descending predicted score.

        Returns:
            The same RankList, for chaining
        """
        ranklist.permute(self.ranking_permutation(ranklist))
        return ranklist

    def rank_dataset(self, dataset: Iterable[RankList]) -> Iterable[RankList]:
        """Rank every list of a dataset in place, one after the other."""
        for ranklist in dataset:
            self.rank(ranklist)
        return dataset
