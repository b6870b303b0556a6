"""Tests for DataPoint."""

import pytest

from ltr.data import DataPoint
from ltr.errors import FeatureIndexOutOfBoundsError


def test_accessors_and_formatting():
    dp = DataPoint(1, 2, [1.2, 3.4, 5.6], "This is a test")

    assert dp.label == 1
    assert dp.query_id == 2
    assert dp.num_features == 3
    assert dp.description == "This is a test"
    assert str(dp) == (
        "DataPoint: label=1, query_id=2, features=[1.2, 3.4, 5.6], description='This is a test'"
    )


def test_features_are_one_indexed():
    dp = DataPoint(0, 1, [10.0, 20.0])

    assert dp.get_feature(1) == 10.0
    assert dp[2] == 20.0

    with pytest.raises(FeatureIndexOutOfBoundsError) as exc_info:
        dp.get_feature(0)
    assert exc_info.value.index == 0

    with pytest.raises(FeatureIndexOutOfBoundsError):
        dp.get_feature(3)


def test_equality_ignores_features_and_description():
    a = DataPoint(1, 2, [1.2, 3.4, 5.6], "a")
    b = DataPoint(1, 2, [0.0], "b")
    c = DataPoint(2, 4, [1.2, 3.4, 5.6], "a")

    assert a == b
    assert a != c


def test_ordering_uses_label_only():
    low = DataPoint(0, 1, [9.0])
    high = DataPoint(2, 7, [1.0])

    assert low < high
    assert high > low
    assert sorted([high, low], reverse=True)[0] is high


def test_update_features():
    dp = DataPoint(1, 2, [1.2, 3.4, 5.6])
    dp.add_feature(20.0)
    assert dp.get_feature(4) == 20.0

    snapshot = dp.copy()
    dp.set_feature(4, 21.0)

    assert dp.get_feature(4) == 21.0
    assert snapshot.get_feature(4) == 20.0
    assert dp == snapshot  # same label and query

    with pytest.raises(FeatureIndexOutOfBoundsError):
        dp.set_feature(5, 1.0)

    dp.label = 2
    assert dp > snapshot


def test_setters_validate_ranges():
    dp = DataPoint()
    assert dp.num_features == 0

    with pytest.raises(ValueError):
        dp.label = 256
    with pytest.raises(ValueError):
        dp.query_id = -1

    dp.set_features([1.0, 2.0])
    dp.set_description("desc")
    assert dp.num_features == 2
    assert dp.description == "desc"


def test_features_stored_as_float32():
    dp = DataPoint(0, 1, [0.1])
    assert dp.features.dtype.name == "float32"
    assert dp.get_feature(1) == pytest.approx(0.1, rel=1e-6)
