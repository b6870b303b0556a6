"""
Single-feature weak ranker used as the building block of AdaRank.
"""

from dataclasses import dataclass

from ..data import DataPoint
from ..errors import FeatureIndexOutOfBoundsError
from .ranker import Ranker


@dataclass(frozen=True)
class WeakRanker(Ranker):
    """
    Ranker that scores an item by the raw value of one feature.

    A missing or out-of-range feature scores 0.0 instead of raising, so a
    single malformed item cannot abort a ranking pass.

    Attributes:
        feature_id: 1-based index of the feature used for scoring
    """

    feature_id: int

    def predict(self, datapoint: DataPoint) -> float:
        try:
            return datapoint.get_feature(self.feature_id)
        except FeatureIndexOutOfBoundsError:
            return 0.0
