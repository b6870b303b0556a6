"""
Configuration dataclass for AdaRank training.

The defaults match the values commonly used on LETOR benchmarks
(50 rounds, saturation after 3 consecutive selections, tolerance 0.003).
A configuration can be loaded from YAML:

    iterations: 100
    max_consecutive_selections: 5
    tolerance: 0.002
    features: [1, 2, 5, 7]
    metric: precision
    precision_k: 5
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..evaluation import MAP, Evaluator, Precision

SUPPORTED_METRICS = ("map", "precision")


@dataclass
class AdaRankConfig:
    """
    Configuration for an AdaRank fit.

    Attributes:
        iterations: Maximum number of boosting rounds (T)
        max_consecutive_selections: Consecutive re-selections of the same
            feature before it is saturated (S)
        tolerance: Non-negative slack added to the training score when
            checking progress (tau)
        features: Candidate feature indices (1-based); None uses every
            feature present in the first training list
        metric: "map" or "precision"
        precision_k: Cutoff K when metric is "precision"
        mlflow_tracking_uri: MLflow tracking URI used by the CLI
        mlflow_experiment: MLflow experiment name used by the CLI
        run_name: Optional MLflow run name
    """

    iterations: int = 50
    max_consecutive_selections: int = 3
    tolerance: float = 0.003
    features: Optional[List[int]] = None

    # Metric
    metric: str = "map"
    precision_k: int = 10

    # MLflow
    mlflow_tracking_uri: str = "file:./mlruns"
    mlflow_experiment: str = "adarank"
    run_name: Optional[str] = None

    def __post_init__(self):
        """Validate configuration."""
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        if self.max_consecutive_selections < 1:
            raise ValueError(
                f"max_consecutive_selections must be >= 1, got {self.max_consecutive_selections}"
            )
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")
        if self.features is not None:
            self.features = [int(f) for f in self.features]
            invalid = [f for f in self.features if f < 1]
            if invalid:
                raise ValueError(f"Feature indices start at 1, got {invalid}")
        self.metric = self.metric.lower()
        if self.metric not in SUPPORTED_METRICS:
            raise ValueError(f"Unknown metric: {self.metric}. Supported: {SUPPORTED_METRICS}")
        if self.precision_k < 0:
            raise ValueError(f"precision_k must be >= 0, got {self.precision_k}")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "AdaRankConfig":
        """
        Load configuration from a YAML file.

        Args:
            yaml_path: Path to YAML config file

        Returns:
            AdaRankConfig instance

        Raises:
            ValueError: On unknown keys or invalid values
        """
        with open(yaml_path) as f:
            config_dict = yaml.safe_load(f) or {}

        if not isinstance(config_dict, dict):
            raise ValueError(f"Expected a mapping in {yaml_path}, got {type(config_dict).__name__}")

        valid_keys = {f.name for f in fields(cls)}
        unknown = set(config_dict) - valid_keys
        if unknown:
            raise ValueError(
                f"Invalid config keys: {sorted(unknown)}. Valid keys: {sorted(valid_keys)}"
            )
        return cls(**config_dict)

    def build_evaluator(self) -> Evaluator:
        """Instantiate the configured metric."""
        if self.metric == "precision":
            return Precision(self.precision_k)
        return MAP()

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for logging."""
        return asdict(self)
