"""
Learning to rank with AdaRank.

This package fits a linear ensemble of single-feature rankers with AdaRank,
directly optimizing an IR metric (MAP or Precision@K) over query-grouped
data.

Subpackages:
    data: DataPoint, RankList, DataSet and loaders
    evaluation: Evaluator interface, MAP, Precision@K
    model: Ranker interface and the single-feature WeakRanker
    training: AdaRank learner, configuration, progress sinks and CLI

Usage:
    from ltr.data import load_svmlight
    from ltr.evaluation import MAP
    from ltr.training import AdaRank, LoggingProgressSink

    train = load_svmlight("Fold1/train.txt")
    learner = AdaRank(train, MAP(), iterations=50, sinks=[LoggingProgressSink()])
    learner.fit()
    print(learner.score(), learner.ensemble)
"""

__version__ = "1.0.0"
