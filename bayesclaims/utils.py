# -*- coding: utf-8 -*-
from typing import Optional

import numpy as np
import numpy.random as rnd
from numba import float64, int64, njit, void  # type: ignore


@njit(void(int64), nogil=True)
def numba_seed(seed):
    rnd.seed(seed)


@njit(int64(float64[:]), nogil=True)
def sample_discrete_dist(weights):
    u = rnd.random()
    cdf_i = 0.0
    maxIndex = len(weights) - 1
    for i in range(maxIndex):
        cdf_i += weights[i]
        if u < cdf_i:
            return i
    return maxIndex


def validate_obs(obs) -> np.ndarray:
    obs = np.atleast_1d(np.asarray(obs).squeeze())
    if obs.ndim != 1:
        raise ValueError(f"Observations must be one dimensional, got shape {obs.shape}")
    if obs.size and (np.any(obs < 0) or np.any(obs != np.round(obs))):
        raise ValueError("Claim counts must be non-negative integers")
    return obs.astype(np.int64)


def validate_model_prior(modelPrior: Optional[np.ndarray], M: int) -> np.ndarray:
    if modelPrior is None:
        return np.ones(M) / M

    modelPrior = np.asarray(modelPrior, dtype=np.float64)
    if modelPrior.shape != (M,):
        raise ValueError(f"Model prior has {modelPrior.size} entries but there are {M} models")
    if np.any(modelPrior <= 0) or np.abs(np.sum(modelPrior) - 1) > 1e-8:
        raise ValueError("Model prior must be strictly positive and sum to one")
    return modelPrior


def stationary_distribution(P: np.ndarray) -> np.ndarray:
    """
    Find the stationary distribution of a row-stochastic matrix, i.e. the
    left eigenvector of P for the eigenvalue 1, normalised to sum to one.
    """
    eigvals, eigvecs = np.linalg.eig(P.T)
    v = np.real(eigvecs[:, np.argmin(np.abs(eigvals - 1))])
    v = np.abs(v)
    return v / np.sum(v)


def print_header(M: int, numDraws: tuple, chainLength: int):
    potentialPlural = "models" if M > 1 else "model"
    print(
        f"Starting RJMCMC post-processing of {M} {potentialPlural} "
        + f"(posterior sample sizes {numDraws}) with a chain length of {chainLength}."
    )


def print_update(t: int, elapsed: float, visits: np.ndarray, probs: np.ndarray):
    """
    Every so often print out how many times each model was visited so far,
    and the current estimate of the posterior model probabilities.
    """
    update = f"Finished RJMCMC iteration {t}, "
    elapsedMins = np.round(elapsed / 60, 1)
    update += f"time = {np.round(elapsed)}s / {elapsedMins}m, "
    update += f"model visits = {tuple(int(v) for v in visits)}, "
    update += f"model probabilities = {np.round(probs, 3)}"
    print(update)
