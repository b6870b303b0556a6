"""
Precision at K.

Fraction of the first K positions holding a relevant item. Relevance here is
an exact match on label == 1, narrower than the label > 0 rule used by MAP.
Lists shorter than K are not padded: the denominator is always K.
"""

from ..data import RankList
from .base import Evaluator


class Precision(Evaluator):
    """
    Precision@K.

    Attributes:
        limit: Cutoff K; a cutoff of 0 always scores 0.0
    """

    def __init__(self, limit: int = 10):
        self.limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    @limit.setter
    def limit(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Precision cutoff must be >= 0, got {value}")
        self._limit = int(value)

    @property
    def name(self) -> str:
        return f"P@{self._limit}"

    def evaluate_ranklist(self, ranklist: RankList) -> float:
        if self._limit == 0:
            return 0.0

        hits = 0
        for position, dp in enumerate(ranklist):
            if position >= self._limit:
                break
            if dp.label == 1:
                hits += 1
        return hits / self._limit

    def __repr__(self) -> str:
        return f"Precision(limit={self._limit})"
