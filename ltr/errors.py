"""
Exception hierarchy for the learning-to-rank toolkit.

Only structural misuse is surfaced as an exception: an empty ensemble, an
invalid permutation, or an invalid index passed to a direct accessor.
Feature lookups performed while scoring are recovered locally by the rankers
(treated as 0.0) and never reach the caller.
"""


class LtrError(Exception):
    """Base class for all errors raised by the toolkit."""


class NoRankersError(LtrError):
    """Raised when a learner has no weak rankers to score with."""

    def __init__(self, message: str = "No rankers were built"):
        super().__init__(message)


class FeatureIndexOutOfBoundsError(LtrError, IndexError):
    """
    Raised when a feature index is zero or beyond the feature count.

    Attributes:
        index: The offending 1-based feature index
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Feature index out of bounds: {index}")


class RankListIndexOutOfBoundsError(LtrError, IndexError):
    """
    Raised on a bad positional access or a non-bijective permutation.

    Attributes:
        index: The offending 0-based position
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"RankList index out of bounds: {index}")


class EvaluationError(LtrError):
    """Raised when a metric cannot be computed (e.g. empty dataset)."""


class DataFormatError(LtrError, ValueError):
    """Raised by loaders when the input does not describe a valid dataset."""
