"""Tests for MAP and Precision@K."""

import pytest

from ltr.data import DataPoint, RankList
from ltr.errors import EvaluationError
from ltr.evaluation import MAP, Precision


def ranklist_with_labels(labels, features=None):
    return RankList(
        DataPoint(label, 1, [features[i] if features else float(i)]) for i, label in enumerate(labels)
    )


class TestMAP:
    def test_average_precision(self):
        # Relevant at positions 1 and 3: (1/1 + 2/3) / 2
        assert MAP().evaluate_ranklist(ranklist_with_labels([1, 0, 1, 0])) == pytest.approx(5 / 6)

    def test_graded_labels_count_as_relevant(self):
        assert MAP().evaluate_ranklist(ranklist_with_labels([0, 2, 3])) == pytest.approx((1 / 2 + 2 / 3) / 2)

    def test_no_relevant_items(self):
        assert MAP().evaluate_ranklist(ranklist_with_labels([0, 0, 0])) == 0.0
        assert MAP().evaluate_ranklist(RankList()) == 0.0

    def test_perfect_ranking(self):
        assert MAP().evaluate_ranklist(ranklist_with_labels([1, 1, 0, 0])) == 1.0

    def test_name(self):
        assert MAP().name == "MAP"
        assert str(MAP()) == "MAP"


class TestPrecision:
    def test_counts_only_label_one(self):
        assert Precision(2).evaluate_ranklist(ranklist_with_labels([1, 2, 1])) == pytest.approx(0.5)

    def test_short_list_keeps_k_denominator(self):
        assert Precision(5).evaluate_ranklist(ranklist_with_labels([1, 1, 0])) == pytest.approx(0.4)

    def test_zero_cutoff(self):
        assert Precision(0).evaluate_ranklist(ranklist_with_labels([1, 1])) == 0.0

    def test_negative_cutoff_rejected(self):
        with pytest.raises(ValueError):
            Precision(-1)

    def test_name(self):
        p = Precision(10)
        assert p.name == "P@10"
        p.limit = 3
        assert p.name == "P@3"


@pytest.mark.parametrize("evaluator", [MAP(), Precision(3)])
def test_evaluate_dataset_is_mean(evaluator):
    dataset = [ranklist_with_labels([1, 0, 1]), ranklist_with_labels([0, 1, 0]), ranklist_with_labels([0, 0])]
    expected = sum(evaluator.evaluate_ranklist(rl) for rl in dataset) / 3

    assert evaluator.evaluate_dataset(dataset) == pytest.approx(expected)


@pytest.mark.parametrize("evaluator", [MAP(), Precision(3)])
def test_evaluate_empty_dataset_fails(evaluator):
    with pytest.raises(EvaluationError):
        evaluator.evaluate_dataset([])


@pytest.mark.parametrize("evaluator", [MAP(), Precision(2)])
def test_metrics_depend_only_on_labels(evaluator):
    labels = [0, 1, 1, 0]
    a = ranklist_with_labels(labels, features=[1.0, 2.0, 3.0, 4.0])
    b = ranklist_with_labels(labels, features=[-7.0, 0.0, 100.0, 0.5])

    assert evaluator.evaluate_ranklist(a) == evaluator.evaluate_ranklist(b)
