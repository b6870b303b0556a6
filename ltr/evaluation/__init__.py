"""
Ranking metrics.

Modules:
    base: Evaluator interface (per-list metric, dataset mean)
    map: Mean Average Precision
    precision: Precision@K
"""

from .base import Evaluator
from .map import MAP
from .precision import Precision

__all__ = ["Evaluator", "MAP", "Precision"]
