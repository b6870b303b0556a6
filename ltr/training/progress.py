"""
Per-iteration progress reporting for boosting learners.

The learner emits one IterationRecord per boosting round to every injected
ProgressSink and never touches global logging/formatting state itself. Two
sinks are provided:

- LoggingProgressSink: renders a fixed-width table through `logging`
- MLflowProgressSink: logs train/validation scores as MLflow metrics,
  stepped by iteration (the caller owns the active run)
"""

import logging
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

import mlflow

logger = logging.getLogger(__name__)


class IterationStatus(Enum):
    """Outcome of one boosting round."""

    OK = "OK"
    BAD = "BAD"  # no progress; the round's weak ranker was rolled back
    SATURATED = "SATURATED"  # feature excluded from further selection


@dataclass(frozen=True)
class IterationRecord:
    """
    Statistics of one boosting round.

    Attributes:
        iteration: 0-based round index
        feature: Feature selected in this round
        train_score: Training metric of the ensemble after this round
        train_delta: Change of train_score from the previous accepted round
        val_score: Validation metric (0.0 when no validation set)
        val_delta: Change of val_score from the previous accepted round
        status: Round outcome
    """

    iteration: int
    feature: int
    train_score: float
    train_delta: float
    val_score: float
    val_delta: float
    status: IterationStatus

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (status as its string value)."""
        return {
            "iteration": self.iteration,
            "feature": self.feature,
            "train_score": self.train_score,
            "train_delta": self.train_delta,
            "val_score": self.val_score,
            "val_delta": self.val_delta,
            "status": self.status.value,
        }


class ProgressSink(ABC):
    """
    Receiver of training progress.

    All hooks default to no-ops so sinks only override what they need.
    """

    def on_start(self, metric_name: str) -> None:
        """Called once before the first round."""
        pass

    def on_iteration(self, record: IterationRecord) -> None:
        """Called once per round, including rolled-back rounds."""
        pass

    def on_finish(self, train_score: float, val_score: float) -> None:
        """Called after a successful fit with the final scores."""
        pass


class LoggingProgressSink(ProgressSink):
    """
    Logs progress as a fixed-width table.

    Example output (INFO level):
        | #Iter | Feature |  MAP-T  | Improve-T |  MAP-V  | Improve-V |  Status  |
        |   0   |    3    | 0.61250 |  0.61250  | 0.00000 |  0.00000  |    OK    |
    """

    COLUMN_WIDTHS = (7, 9, 9, 11, 9, 11, 11)

    def __init__(self, level: int = logging.INFO, log: Optional[logging.Logger] = None):
        self.level = level
        self.log = log or logger
        self.metric_name = "metric"

    def _row(self, cells: Sequence[str], widths: Sequence[int] = COLUMN_WIDTHS) -> str:
        return "|" + "|".join(f"{cell:^{width}}" for cell, width in zip(cells, widths)) + "|"

    def on_start(self, metric_name: str) -> None:
        self.metric_name = metric_name
        self.log.log(
            self.level,
            self._row([
                "#Iter",
                "Feature",
                f"{metric_name}-T",
                "Improve-T",
                f"{metric_name}-V",
                "Improve-V",
                "Status",
            ]),
        )

    def on_iteration(self, record: IterationRecord) -> None:
        self.log.log(
            self.level,
            self._row([
                str(record.iteration),
                str(record.feature),
                f"{record.train_score:.5f}",
                f"{record.train_delta:.5f}",
                f"{record.val_score:.5f}",
                f"{record.val_delta:.5f}",
                record.status.value,
            ]),
        )

    def on_finish(self, train_score: float, val_score: float) -> None:
        widths = (11, 11)
        self.log.log(self.level, self._row([f"{self.metric_name}-T", f"{self.metric_name}-V"], widths))
        self.log.log(self.level, self._row([f"{train_score:.5f}", f"{val_score:.5f}"], widths))


class MLflowProgressSink(ProgressSink):
    """
    Logs progress to the active MLflow run.

    Metric names are prefixed (default "adarank_") and "@" is replaced with
    "_at_" for MLflow compatibility (e.g. "P@10" -> "P_at_10").
    """

    def __init__(self, prefix: str = "adarank_"):
        self.prefix = prefix
        self.metric_key = "metric"

    def on_start(self, metric_name: str) -> None:
        self.metric_key = metric_name.replace("@", "_at_")

    def on_iteration(self, record: IterationRecord) -> None:
        step = record.iteration
        mlflow.log_metric(f"{self.prefix}train_{self.metric_key}", record.train_score, step=step)
        mlflow.log_metric(f"{self.prefix}val_{self.metric_key}", record.val_score, step=step)
        mlflow.log_metric(f"{self.prefix}feature", record.feature, step=step)

    def on_finish(self, train_score: float, val_score: float) -> None:
        mlflow.log_metrics({
            f"{self.prefix}final_train_{self.metric_key}": train_score,
            f"{self.prefix}final_val_{self.metric_key}": val_score,
        })

