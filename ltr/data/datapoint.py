"""
Labeled, featurized item belonging to a query.

A DataPoint mirrors one line of an SVM-light / LETOR file:

    <label> qid:<query_id> 1:<value_1> 2:<value_2> ... n:<value_n> # <description>

Features are indexed from 1 (as in the file format), so index 0 is always
invalid and index i maps to position i - 1 of the underlying vector.
"""

from typing import Iterable, Optional

import numpy as np

from ..errors import FeatureIndexOutOfBoundsError


class DataPoint:
    """
    A single training instance: an (item, query) pair with a relevance grade.

    Comparison is deliberately partial:
    - Equality only looks at (label, query_id), so two points with the same
      label and query but different features compare equal.
    - Ordering only looks at the label, which gives the "perfect" ranking
      when a list is sorted in descending order.

    Attributes:
        label: Relevance grade (0-255)
        query_id: Identifier of the query the item belongs to
        features: float32 feature vector (position 0 holds feature 1)
        description: Optional free text (e.g. document id)

    Example:
        >>> dp = DataPoint(1, 10, [21.0, 2.3, 4.5], "doc-7")
        >>> dp.get_feature(1)
        21.0
    """

    __hash__ = None  # mutable and compared on a subset of fields

    def __init__(
        self,
        label: int = 0,
        query_id: int = 0,
        features: Optional[Iterable[float]] = None,
        description: Optional[str] = None,
    ):
        self.label = label
        self.query_id = query_id
        self.features = features if features is not None else []
        self.description = description

    @property
    def label(self) -> int:
        return self._label

    @label.setter
    def label(self, value: int) -> None:
        value = int(value)
        if not 0 <= value <= 255:
            raise ValueError(f"label must fit in an unsigned byte, got {value}")
        self._label = value

    @property
    def query_id(self) -> int:
        return self._query_id

    @query_id.setter
    def query_id(self, value: int) -> None:
        value = int(value)
        if value < 0:
            raise ValueError(f"query_id must be non-negative, got {value}")
        self._query_id = value

    @property
    def features(self) -> np.ndarray:
        return self._features

    @features.setter
    def features(self, values: Iterable[float]) -> None:
        if not isinstance(values, np.ndarray):
            values = list(values)
        self._features = np.array(values, dtype=np.float32).reshape(-1)

    @property
    def num_features(self) -> int:
        return int(self._features.shape[0])

    def get_feature(self, index: int) -> float:
        """
        Get a feature value by its 1-based index.

        Args:
            index: Feature index, starting at 1

        Returns:
            The feature value

        Raises:
            FeatureIndexOutOfBoundsError: If index is 0 or beyond the feature count
        """
        if index < 1 or index > self.num_features:
            raise FeatureIndexOutOfBoundsError(index)
        return float(self._features[index - 1])

    def set_feature(self, index: int, value: float) -> None:
        """Overwrite an existing feature (1-based index)."""
        if index < 1 or index > self.num_features:
            raise FeatureIndexOutOfBoundsError(index)
        self._features[index - 1] = value

    def add_feature(self, value: float) -> None:
        """Append a feature; it gets index num_features + 1."""
        self._features = np.append(self._features, np.float32(value))

    def set_features(self, values: Iterable[float]) -> None:
        self.features = values

    def set_description(self, description: str) -> None:
        self.description = description

    def copy(self) -> "DataPoint":
        """Return an independent copy (the feature vector is duplicated)."""
        return DataPoint(self._label, self._query_id, self._features.copy(), self.description)

    def __getitem__(self, index: int) -> float:
        return self.get_feature(index)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DataPoint):
            return NotImplemented
        return self._label == other._label and self._query_id == other._query_id

    def __lt__(self, other) -> bool:
        if not isinstance(other, DataPoint):
            return NotImplemented
        return self._label < other._label

    def __le__(self, other) -> bool:
        if not isinstance(other, DataPoint):
            return NotImplemented
        return self._label <= other._label

    def __gt__(self, other) -> bool:
        if not isinstance(other, DataPoint):
            return NotImplemented
        return self._label > other._label

    def __ge__(self, other) -> bool:
        if not isinstance(other, DataPoint):
            return NotImplemented
        return self._label >= other._label

    def __str__(self) -> str:
        features = ", ".join(f"{value:g}" for value in self._features.tolist())
        return (
            f"DataPoint: label={self._label}, query_id={self._query_id}, "
            f"features=[{features}], description={self.description!r}"
        )

    def __repr__(self) -> str:
        return (
            f"DataPoint(label={self._label}, query_id={self._query_id}, "
            f"num_features={self.num_features})"
        )
