"""
AdaRank training package.

This package contains the boosting learner, its configuration and the
progress reporting hooks it emits to.

Modules:
    config: AdaRankConfig dataclass (YAML loadable)
    learner: Learner interface (fit, score, validation_score)
    adarank: AdaRank boosting learner
    progress: Iteration records and progress sinks (logging, MLflow)
    train_adarank: CLI entry point

CLI Usage:
    python -m ltr.training.train_adarank --train train.txt --validation vali.txt
    python -m ltr.training.train_adarank --train train.txt --metric precision --k 5
"""

from .adarank import AdaRank
from .config import AdaRankConfig
from .learner import Learner
from .progress import (
    IterationRecord,
    IterationStatus,
    LoggingProgressSink,
    MLflowProgressSink,
    ProgressSink,
)

__all__ = [
    "AdaRank",
    "AdaRankConfig",
    "Learner",
    "IterationRecord",
    "IterationStatus",
    "ProgressSink",
    "LoggingProgressSink",
    "MLflowProgressSink",
]
