"""
Evaluator interface.

An Evaluator scores a RankList that has already been ordered by a ranker
(most relevant prediction first). Dataset-level scores are the arithmetic
mean over all lists.

Implementations only need evaluate_ranklist(); they must depend on nothing
but the sequence of labels in ranked order.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..data import RankList
from ..errors import EvaluationError


class Evaluator(ABC):
    """
    Abstract ranking metric.

    Subclasses implement evaluate_ranklist() and expose a short name used in
    progress reports (e.g. "MAP", "P@10").
    """

    name: str = "metric"

    @abstractmethod
    def evaluate_ranklist(self, ranklist: RankList) -> float:
        """
        Evaluate a RankList previously ordered by predicted relevance.

        Args:
            ranklist: The ordered list

        Returns:
            Metric value for this list
        """
        pass

    def evaluate_dataset(self, dataset: Sequence[RankList]) -> float:
        """
        Mean of evaluate_ranklist() over every list.

        Raises:
            EvaluationError: If the dataset is empty
        """
        if len(dataset) == 0:
            raise EvaluationError(f"Cannot evaluate {self.name} on an empty dataset")
        return sum(self.evaluate_ranklist(ranklist) for ranklist in dataset) / len(dataset)

    def __str__(self) -> str:
        return self.name
