"""
AdaRank: a boosting algorithm for information retrieval.

AdaRank repeatedly builds "weak rankers" (here: single-feature rankers) on
reweighted training queries and combines them linearly. Instead of a
surrogate loss it directly optimizes the evaluation metric (MAP, P@K, ...).
See Xu & Li, "AdaRank: A Boosting Algorithm for Information Retrieval",
SIGIR 2007.

One boosting round:
1. Selection: score every non-saturated candidate feature as a weak ranker,
   weighting each query by its sample weight; keep the best
2. Amount to say: weight of the new weak ranker,
   alpha = 0.5 * log10(sum((1 + s_i) * w_i) / sum((1 - s_i) * w_i))
3. Append the weak ranker to the ensemble
4. Re-rank the training data with the whole ensemble and evaluate it
5. Progress check: roll back and stop if the score did not improve
   (up to the tolerance)
6. Saturation: a feature selected too many times in a row is excluded
7. Validation checkpoint: keep the ensemble with the best validation score
8. Record the round
9. Reweight the queries for the next round

Numerical policy for step 2: numerator and denominator are taken in absolute
value and clamped to at least EPSILON before the division, so alpha is always
finite. A weak ranker that is perfect on every query (denominator 0) gets a
large but finite weight instead of inf/NaN.
"""

import logging
import math
import threading
from typing import Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np
import pandas as pd

from ..data import DataPoint, DataSet
from ..errors import EvaluationError, FeatureIndexOutOfBoundsError, NoRankersError
from ..evaluation import Evaluator
from ..model import WeakRanker
from .config import AdaRankConfig
from .learner import Learner
from .progress import IterationRecord, IterationStatus, ProgressSink

logger = logging.getLogger(__name__)

EPSILON = 1e-10


class AdaRank(Learner):
    """
    AdaRank learner over single-feature weak rankers.

    Every call to fit() starts from scratch: sample weights, ensemble,
    saturated features and history are reset, so a learner can be refitted
    (e.g. after changing the candidate features).

    Training lists are reordered in place while fitting.

    Attributes:
        training_dataset: Lists used to fit the ensemble
        validation_dataset: Optional lists used for checkpoint selection
        evaluator: Metric being optimized
        iterations: Maximum number of boosting rounds
        max_consecutive_selections: Consecutive re-selections before a
            feature is saturated
        tolerance: Slack added to the training score in the progress check
        features: Candidate feature indices (1-based)
        sinks: Progress receivers, called once per round

    Example:
        >>> learner = AdaRank(train, MAP(), iterations=20, validation_dataset=val,
        ...                   sinks=[LoggingProgressSink()])
        >>> learner.fit()
        >>> learner.score(), learner.validation_score()
    """

    def __init__(
        self,
        training_dataset: DataSet,
        evaluator: Evaluator,
        iterations: int = 50,
        max_consecutive_selections: int = 3,
        tolerance: float = 0.003,
        features: Optional[Sequence[int]] = None,
        validation_dataset: Optional[DataSet] = None,
        sinks: Optional[Iterable[ProgressSink]] = None,
    ):
        if len(training_dataset) == 0:
            raise ValueError("AdaRank needs a non-empty training dataset")
        if iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {iterations}")
        if max_consecutive_selections < 1:
            raise ValueError(
                f"max_consecutive_selections must be >= 1, got {max_consecutive_selections}"
            )
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}")

        self.training_dataset = training_dataset
        self.validation_dataset = validation_dataset
        self.evaluator = evaluator
        self.iterations = iterations
        self.max_consecutive_selections = max_consecutive_selections
        self.tolerance = tolerance
        self.features: List[int] = (
            list(features) if features is not None else self._default_features(training_dataset)
        )
        self.sinks: List[ProgressSink] = list(sinks) if sinks is not None else []

        self.score_training = 0.0
        self.score_validation = 0.0
        self._reset()

    @classmethod
    def from_config(
        cls,
        config: AdaRankConfig,
        training_dataset: DataSet,
        validation_dataset: Optional[DataSet] = None,
        sinks: Optional[Iterable[ProgressSink]] = None,
    ) -> "AdaRank":
        """Build a learner from an AdaRankConfig."""
        return cls(
            training_dataset,
            config.build_evaluator(),
            iterations=config.iterations,
            max_consecutive_selections=config.max_consecutive_selections,
            tolerance=config.tolerance,
            features=config.features,
            validation_dataset=validation_dataset,
            sinks=sinks,
        )

    @staticmethod
    def _default_features(dataset: DataSet) -> List[int]:
        """Every feature index present in the first training list."""
        num_features = max((dp.num_features for dp in dataset[0]), default=0)
        return list(range(1, num_features + 1))

    def _reset(self) -> None:
        """Initialize the training state."""
        num_lists = len(self.training_dataset)
        self._sample_weights = np.full(num_lists, 1.0 / num_lists)

        self._rankers: List[WeakRanker] = []
        self._ranker_weights: List[float] = []
        self._best_rankers: List[WeakRanker] = []
        self._best_weights: List[float] = []
        self._best_validation_score = 0.0

        self._saturated: Set[int] = set()
        self._previous_feature: Optional[int] = None
        self._consecutive_selections = 0

        self._previous_training_score = 0.0
        self._previous_validation_score = 0.0
        self._history: List[IterationRecord] = []

    @property
    def ensemble(self) -> List[Tuple[int, float]]:
        """Fitted model as (feature_id, weight) pairs, in selection order."""
        return [(r.feature_id, w) for r, w in zip(self._rankers, self._ranker_weights)]

    @property
    def sample_weights(self) -> np.ndarray:
        """Copy of the current per-list sample weights."""
        return self._sample_weights.copy()

    @property
    def saturated_features(self) -> Set[int]:
        return set(self._saturated)

    def history(self) -> List[IterationRecord]:
        """Per-round records of the last fit, in order."""
        return list(self._history)

    def history_frame(self) -> pd.DataFrame:
        """History of the last fit as a DataFrame (one row per round)."""
        columns = ["iteration", "feature", "train_score", "train_delta",
                   "val_score", "val_delta", "status"]
        return pd.DataFrame([r.to_dict() for r in self._history], columns=columns)

    def _evaluate_weak_ranker(self, ranker: WeakRanker) -> float:
        """Sample-weighted metric of a weak ranker over the training lists."""
        score = 0.0
        for ranklist, weight in zip(self.training_dataset, self._sample_weights):
            score += self.evaluator.evaluate_ranklist(ranker.rank(ranklist)) * weight
        return score

    def _select_weak_ranker(self) -> Optional[WeakRanker]:
        """
        Pick the best non-saturated candidate feature.

        Ties keep the first candidate seen. Returns None when no candidate
        reaches a non-negative weighted score (or none is left).
        """
        best_score = -1.0
        best_feature = None

        for feature in self.features:
            if feature in self._saturated:
                continue
            score = self._evaluate_weak_ranker(WeakRanker(feature))
            if score > best_score:
                best_score = score
                best_feature = feature

        if best_feature is None or best_score < 0.0:
            return None
        return WeakRanker(best_feature)

    def _amount_to_say(self, ranker: WeakRanker) -> float:
        """Ensemble weight of a weak ranker (see module docstring for clamping)."""
        numerator = 0.0
        denominator = 0.0
        for ranklist, weight in zip(self.training_dataset, self._sample_weights):
            score = self.evaluator.evaluate_ranklist(ranker.rank(ranklist))
            numerator += (1.0 + score) * weight
            denominator += (1.0 - score) * weight

        ratio = max(abs(numerator), EPSILON) / max(abs(denominator), EPSILON)
        return 0.5 * math.log10(ratio)

    def _evaluate_ensemble(self) -> Tuple[float, np.ndarray]:
        """
        Rank every training list with the current ensemble.

        Returns:
            Tuple of (mean training score, per-list exp(-score))
        """
        scores = np.array(
            [self.evaluator.evaluate_ranklist(self.rank(ranklist))
             for ranklist in self.training_dataset],
            dtype=np.float64,
        )
        return float(scores.mean()), np.exp(-scores)

    def _has_validation(self) -> bool:
        return self.validation_dataset is not None and len(self.validation_dataset) > 0

    def _evaluate_validation(self) -> float:
        """Validation metric of the current ensemble; 0.0 if unavailable."""
        if not self._has_validation():
            return 0.0
        try:
            return self.evaluator.evaluate_dataset(self.rank_dataset(self.validation_dataset))
        except EvaluationError as e:
            logger.error(f"Error evaluating validation dataset: {e}")
            return 0.0

    def _update_sample_weights(self, alpha: float, exp_scores: np.ndarray, total_score: float) -> None:
        """
        Reweight the training lists.

        w_i <- w_i * exp(-alpha * exp(-s_i)) / total_score, then the vector is
        renormalized to sum to 1. A degenerate result (underflow to zero or a
        non-finite value) falls back to uniform weights.
        """
        updated = self._sample_weights * np.exp(-alpha * exp_scores) / total_score
        norm = updated.sum()
        if not np.isfinite(norm) or norm <= 0.0:
            logger.warning("Sample weights degenerated; resetting to uniform")
            updated = np.full(len(updated), 1.0 / len(updated))
        else:
            updated /= norm
        self._sample_weights = updated

    def _track_saturation(self, feature: int) -> bool:
        """
        Count consecutive selections of the same feature.

        Returns:
            True if the feature just became saturated
        """
        saturated = False
        if feature == self._previous_feature:
            self._consecutive_selections += 1
            if self._consecutive_selections >= self.max_consecutive_selections:
                self._consecutive_selections = 0
                self._saturated.add(feature)
                saturated = True
                logger.debug(f"Feature {feature} saturated")
        else:
            self._consecutive_selections = 0
        self._previous_feature = feature
        return saturated

    def _learn(self, cancel_event: Optional[threading.Event] = None) -> None:
        """Run the boosting rounds."""
        for iteration in range(self.iterations):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Training cancelled before iteration {iteration}")
                break

            # Step 1: select a weak ranker
            ranker = self._select_weak_ranker()
            if ranker is None:
                logger.error("No weak ranker selected, stopping")
                break

            # Steps 2-3: amount to say, append to the ensemble
            alpha = self._amount_to_say(ranker)
            self._rankers.append(ranker)
            self._ranker_weights.append(alpha)

            # Step 4: evaluate the whole ensemble on the training data
            training_score, exp_scores = self._evaluate_ensemble()
            total_score = float(exp_scores.sum())

            # Step 5: progress check
            delta = training_score + self.tolerance - self._previous_training_score
            accepted = delta > 0.0
            status = IterationStatus.OK if accepted else IterationStatus.BAD

            # Step 6: saturation (takes precedence over OK/BAD)
            if self._track_saturation(ranker.feature_id):
                status = IterationStatus.SATURATED

            # Step 7: validation checkpoint, taken before a rollback
            val_score = self._evaluate_validation()
            if self._has_validation() and val_score > self._best_validation_score:
                self._best_validation_score = val_score
                self._best_rankers = list(self._rankers)
                self._best_weights = list(self._ranker_weights)

            # Step 8: record
            record = IterationRecord(
                iteration=iteration,
                feature=ranker.feature_id,
                train_score=training_score,
                train_delta=training_score - self._previous_training_score,
                val_score=val_score,
                val_delta=val_score - self._previous_validation_score,
                status=status,
            )
            self._history.append(record)
            for sink in self.sinks:
                sink.on_iteration(record)

            if not accepted:
                self._rankers.pop()
                self._ranker_weights.pop()
                break

            # Step 9: reweight the queries
            self._previous_training_score = training_score
            self._previous_validation_score = val_score
            self._update_sample_weights(alpha, exp_scores, total_score)

    def fit(self, cancel_event: Optional[threading.Event] = None) -> None:
        """
        Fit the ensemble.

        When a validation checkpoint exists it replaces the final ensemble.

        Args:
            cancel_event: Optional event checked before every round; once set,
                training stops and keeps the ensemble built so far

        Raises:
            NoRankersError: If no weak ranker was accepted
        """
        self._reset()
        logger.info(
            f"Fitting AdaRank ({self.evaluator.name}): {len(self.training_dataset)} training lists, "
            f"{len(self.features)} candidate features, up to {self.iterations} rounds"
        )
        for sink in self.sinks:
            sink.on_start(self.evaluator.name)

        self._learn(cancel_event)

        if self._best_rankers:
            self._rankers = self._best_rankers
            self._ranker_weights = self._best_weights
            self._best_rankers = []
            self._best_weights = []

        if not self._rankers:
            raise NoRankersError()

        self.score_training = self.evaluator.evaluate_dataset(self.rank_dataset(self.training_dataset))
        if self.validation_dataset is not None:
            try:
                self.score_validation = self.evaluator.evaluate_dataset(
                    self.rank_dataset(self.validation_dataset)
                )
            except EvaluationError as e:
                logger.error(f"Error evaluating validation dataset: {e}")
                self.score_validation = 0.0
        else:
            self.score_validation = 0.0

        logger.info(f"AdaRank fitted with {len(self._rankers)} weak rankers")
        for sink in self.sinks:
            sink.on_finish(self.score_training, self.score_validation)

    def score(self) -> float:
        if not self._rankers:
            raise NoRankersError()
        return self.score_training

    def validation_score(self) -> float:
        if not self._rankers:
            raise NoRankersError()
        return self.score_validation

    def log_results(self) -> None:
        """Log the final scores and the fitted ensemble."""
        name = self.evaluator.name
        logger.info(f"Training {name}:   {self.score():.5f}")
        logger.info(f"Validation {name}: {self.validation_score():.5f}")
        logger.info("Ensemble (feature: weight):")
        for feature, weight in self.ensemble:
            logger.info(f"  {feature}: {weight:.5f}")

    def predict(self, datapoint: DataPoint) -> float:
        """Weighted sum of the ensemble's feature values (missing features count 0.0)."""
        score = 0.0
        for ranker, weight in zip(self._rankers, self._ranker_weights):
            try:
                value = datapoint.get_feature(ranker.feature_id)
            except FeatureIndexOutOfBoundsError as e:
                logger.debug(f"Error getting feature value: {e}")
                value = 0.0
            score += value * weight
        return score

    def __repr__(self) -> str:
        return (
            f"AdaRank(metric={self.evaluator.name}, iterations={self.iterations}, "
            f"rankers={len(self._rankers)})"
        )
