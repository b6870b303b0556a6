"""
Learner interface: a Ranker that is fitted on a training DataSet.
"""

from abc import abstractmethod

from ..model import Ranker


class Learner(Ranker):
    """
    Trainable ranker.

    Learners are constructed with their training data and metric; fit()
    builds the model, after which predict()/rank() use it.
    """

    @abstractmethod
    def fit(self) -> None:
        """
        Train the model.

        Raises:
            NoRankersError: If training produced no model
        """
        pass

    @abstractmethod
    def score(self) -> float:
        """Training-set metric of the fitted model."""
        pass

    @abstractmethod
    def validation_score(self) -> float:
        """Validation-set metric of the fitted model (0.0 without validation data)."""
        pass
