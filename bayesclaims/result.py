# -*- coding: utf-8 -*-
from typing import Optional, Tuple

import numpy as np
import pandas

from .utils import stationary_distribution


def posterior_model_probabilities(transitionMatrix: np.ndarray) -> np.ndarray:
    """
    Estimate the posterior model probabilities as the stationary distribution
    of the (row-normalised) transition matrix. Row m of the matrix sums the
    normalised model weights over the iterations spent in model m.

    The stationary distribution only describes the models the chain has
    visited, and is only unique when those models communicate. When some
    weight went to a model that was never visited, or the visited models
    split into closed classes, the estimate is instead the average of the
    normalised weights over all iterations (the column sums of the matrix).
    """
    M = transitionMatrix.shape[0]
    visited = np.sum(transitionMatrix, axis=1) > 0
    probs = np.zeros(M)
    if not np.any(visited):
        return probs

    meanWeights = np.sum(transitionMatrix, axis=0)
    meanWeights = meanWeights / np.sum(meanWeights)
    if np.any(meanWeights[~visited] > 0):
        return meanWeights

    P = transitionMatrix[visited][:, visited]
    P = P / np.sum(P, axis=1)[:, None]

    if np.sum(np.abs(np.linalg.eigvals(P) - 1) < 1e-10) > 1:
        return meanWeights

    probs[visited] = stationary_distribution(P)
    return probs


class RJResult:
    """
    An RJResult object stores the output of a post-processing RJMCMC run:
    the sequence of models the chain visited, the accumulated transition
    matrix between models (from which the posterior model probabilities
    and Bayes factors are estimated), the estimates of the model
    probabilities as the chain progressed, and optionally the posterior,
    likelihood and prior values of every model at every iteration.
    """

    def __init__(
        self, models, transitionMatrix, modelPrior, snapshots, snapshotIters, densities=None, labels=None
    ) -> None:
        self.models = np.asarray(models, dtype=np.int64)
        self.transitionMatrix = np.asarray(transitionMatrix, dtype=np.float64)
        self.modelPrior = np.asarray(modelPrior, dtype=np.float64)
        self.snapshots = np.asarray(snapshots, dtype=np.float64)
        self.snapshotIters = np.asarray(snapshotIters, dtype=np.int64)
        self.densities: Optional[pandas.DataFrame] = densities
        self.M = len(self.modelPrior)
        if labels is None:
            labels = tuple(f"M{j + 1}" for j in range(self.M))
        self.labels = tuple(labels)

    def size(self) -> int:
        return len(self.models)

    def model_visits(self) -> Tuple[int, ...]:
        return tuple(int(np.sum(self.models == m)) for m in range(self.M))

    def model_probabilities(self) -> np.ndarray:
        return posterior_model_probabilities(self.transitionMatrix)

    def bayes_factors(self, reference: int = 0) -> np.ndarray:
        """
        Bayes factors of each model against the reference model, i.e. the
        ratio of posterior odds to prior odds.
        """
        probs = self.model_probabilities()
        with np.errstate(divide="ignore", invalid="ignore"):
            posteriorOdds = probs / probs[reference]
            priorOdds = self.modelPrior / self.modelPrior[reference]
            return posteriorOdds / priorOdds

    def log_bayes_factors(self, base: float = np.e, reference: int = 0) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.log(self.bayes_factors(reference)) / np.log(base)

    def summary(self) -> pandas.DataFrame:
        return pandas.DataFrame(
            {
                "Prior": self.modelPrior,
                "Visits": self.model_visits(),
                "Posterior": self.model_probabilities(),
                "Bayes Factor": self.bayes_factors(),
                "ln Bayes Factor": self.log_bayes_factors(),
                "log10 Bayes Factor": self.log_bayes_factors(10),
            },
            index=list(self.labels),
        )

    def __repr__(self) -> str:
        probs = np.round(self.model_probabilities(), 3)
        return f"RJResult(iterations={self.size()}, model probabilities={dict(zip(self.labels, probs))})"
