"""
Ranked lists and datasets.

A RankList holds the DataPoints returned for one query, in the order a
ranker (or the ground truth) put them. Reordering is always in place, so
every holder of the list sees the new order. Callers that need the order
without touching the list should ask a Ranker for its permutation instead
(see Ranker.ranking_permutation).

A DataSet is simply an ordered list of RankLists, one per query.
"""

from typing import Iterable, Iterator, List, Optional, Sequence

from ..errors import RankListIndexOutOfBoundsError
from .datapoint import DataPoint


class RankList:
    """
    Ordered collection of DataPoints for a single query.

    The query id is not enforced: loaders are responsible for grouping
    points of the same query together.

    Example:
        >>> rl = RankList([DataPoint(0, 9, [10.0]), DataPoint(1, 9, [11.0])])
        >>> rl.rank()
        >>> rl.get(0).label
        1
    """

    def __init__(self, data_points: Optional[Iterable[DataPoint]] = None):
        self._data_points: List[DataPoint] = list(data_points) if data_points is not None else []

    def __len__(self) -> int:
        return len(self._data_points)

    def __iter__(self) -> Iterator[DataPoint]:
        return iter(self._data_points)

    def __getitem__(self, index: int) -> DataPoint:
        return self.get(index)

    def __setitem__(self, index: int, data_point: DataPoint) -> None:
        self.set(index, data_point)

    @property
    def query_id(self) -> Optional[int]:
        """Query id of the first point, or None for an empty list."""
        return self._data_points[0].query_id if self._data_points else None

    @property
    def labels(self) -> List[int]:
        """Labels in the current order."""
        return [dp.label for dp in self._data_points]

    def get(self, index: int) -> DataPoint:
        """
        Get the DataPoint at a position.

        Raises:
            RankListIndexOutOfBoundsError: If index is not in 0..len-1
        """
        if not 0 <= index < len(self._data_points):
            raise RankListIndexOutOfBoundsError(index)
        return self._data_points[index]

    def set(self, index: int, data_point: DataPoint) -> None:
        """Replace the DataPoint at a position."""
        if not 0 <= index < len(self._data_points):
            raise RankListIndexOutOfBoundsError(index)
        self._data_points[index] = data_point

    def rank(self) -> None:
        """Sort by label, most relevant first (the ground-truth order)."""
        self._data_points.sort(key=lambda dp: dp.label, reverse=True)

    def rank_by_feature(self, feature_index: int) -> None:
        """
        Sort by one feature, highest value first.

        Raises:
            FeatureIndexOutOfBoundsError: If any point lacks the feature
        """
        self._data_points.sort(key=lambda dp: dp.get_feature(feature_index), reverse=True)

    def permute(self, permutation: Sequence[int]) -> None:
        """
        Reorder the list so that position i holds the item previously at
        permutation[i].

        Args:
            permutation: A bijection over 0..len-1

        Raises:
            RankListIndexOutOfBoundsError: If permutation is not a bijection.
                The list is left untouched.
        """
        size = len(self._data_points)
        if len(permutation) != size:
            raise RankListIndexOutOfBoundsError(min(len(permutation), size))

        seen = [False] * size
        for raw in permutation:
            index = int(raw)
            if not 0 <= index < size or seen[index]:
                raise RankListIndexOutOfBoundsError(index)
            seen[index] = True

        self._data_points = [self._data_points[int(i)] for i in permutation]

    def copy(self) -> "RankList":
        """Deep copy: the new list owns copies of every DataPoint."""
        return RankList(dp.copy() for dp in self._data_points)

    def __str__(self) -> str:
        return f"RankList object with {len(self._data_points)} data points"

    def __repr__(self) -> str:
        return f"RankList(query_id={self.query_id}, size={len(self._data_points)})"


# One RankList per query, in load order.
DataSet = List[RankList]
