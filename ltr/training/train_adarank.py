#!/usr/bin/env python
"""
CLI entry point for AdaRank training.

Usage:
    # Train on an SVM-light file with MAP (default settings)
    python -m ltr.training.train_adarank --train Fold1/train.txt

    # Validation-based model selection and Precision@5
    python -m ltr.training.train_adarank --train train.txt --validation vali.txt \
        --metric precision --k 5

    # Settings from YAML, tracked in MLflow
    python -m ltr.training.train_adarank --train train.txt --config adarank.yaml --mlflow
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import mlflow

from ..data import load_svmlight
from ..errors import LtrError
from .adarank import AdaRank
from .config import SUPPORTED_METRICS, AdaRankConfig
from .progress import LoggingProgressSink, MLflowProgressSink, ProgressSink


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the training script."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fit an AdaRank ensemble of single-feature rankers.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default settings
  python -m ltr.training.train_adarank --train train.txt

  # 100 rounds, restricted to features 1-10
  python -m ltr.training.train_adarank --train train.txt --iterations 100 --features 1-10

  # Verbose output
  python -m ltr.training.train_adarank --train train.txt -v
        """,
    )

    # Data
    parser.add_argument("--train", type=Path, required=True, help="Training file (SVM-light format)")
    parser.add_argument("--validation", type=Path, default=None, help="Validation file (SVM-light format)")

    # Settings (command line overrides the YAML config)
    parser.add_argument("--config", type=Path, default=None, help="YAML file with AdaRankConfig fields")
    parser.add_argument("--metric", choices=SUPPORTED_METRICS, default=None, help="Metric to optimize (default: map)")
    parser.add_argument("--k", type=int, default=None, help="Cutoff for --metric precision (default: 10)")
    parser.add_argument("--iterations", type=int, default=None, help="Maximum boosting rounds (default: 50)")
    parser.add_argument(
        "--max-consecutive",
        type=int,
        default=None,
        help="Consecutive selections before a feature is saturated (default: 3)",
    )
    parser.add_argument("--tolerance", type=float, default=None, help="Progress tolerance (default: 0.003)")
    parser.add_argument(
        "--features",
        type=str,
        default=None,
        help="Candidate features, e.g. '1,3,5-9' (default: all features)",
    )

    parser.add_argument("--mlflow", action="store_true", help="Track the run in MLflow")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    return parser


def parse_features(value: str) -> List[int]:
    """
    Parse a feature list such as "1,3,5-9".

    Raises:
        ValueError: On malformed entries or reversed ranges
    """
    features: List[int] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, end = (int(x) for x in part.split("-", 1))
            if end < start:
                raise ValueError(f"Invalid feature range: {part}")
            features.extend(range(start, end + 1))
        else:
            features.append(int(part))
    return features


def build_config(args: argparse.Namespace) -> AdaRankConfig:
    """Merge the YAML config (if any) with command line overrides."""
    config = AdaRankConfig.from_yaml(args.config) if args.config else AdaRankConfig()
    overrides = {
        "metric": args.metric,
        "precision_k": args.k,
        "iterations": args.iterations,
        "max_consecutive_selections": args.max_consecutive,
        "tolerance": args.tolerance,
        "features": parse_features(args.features) if args.features else None,
    }
    merged = config.to_dict()
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return AdaRankConfig(**merged)


def mlflow_params(config: AdaRankConfig) -> Dict[str, Any]:
    """
    Config as MLflow params.

    The candidate feature list can be arbitrarily long, so only its size is
    logged ("all" when every feature is a candidate).
    """
    params = config.to_dict()
    features = params.pop("features")
    params["num_features"] = len(features) if features is not None else "all"
    return params


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the training script."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = build_config(args)
        train = load_svmlight(args.train)
        validation = load_svmlight(args.validation) if args.validation is not None else None
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except (LtrError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        return 1

    if not train:
        logger.error(f"No queries found in {args.train}")
        return 1

    sinks: List[ProgressSink] = [LoggingProgressSink()]
    if args.mlflow:
        mlflow.set_tracking_uri(config.mlflow_tracking_uri)
        mlflow.set_experiment(config.mlflow_experiment)
        mlflow.start_run(run_name=config.run_name)
        mlflow.log_params(mlflow_params(config))
        sinks.append(MLflowProgressSink())

    learner = AdaRank.from_config(config, train, validation_dataset=validation, sinks=sinks)

    try:
        learner.fit()
        learner.log_results()
        return 0
    except LtrError as e:
        logger.error(f"Training failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Training failed: {e}")
        return 1
    finally:
        if args.mlflow:
            mlflow.end_run()


if __name__ == "__main__":
    sys.exit(main())
