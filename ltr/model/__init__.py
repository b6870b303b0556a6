"""
Ranking models.

Modules:
    ranker: Ranker interface (predict, rank a list, rank a dataset)
    weak: WeakRanker, scores items by a single feature
"""

from .ranker import Ranker
from .weak import WeakRanker

__all__ = ["Ranker", "WeakRanker"]
