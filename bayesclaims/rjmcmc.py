# -*- coding: utf-8 -*-
"""
Reversible jump MCMC as a post-processing step (Barker & Link, 2013).

Each competing model is first fitted on its own, then a single chain moves
between the models using only those posterior draws and the models'
likelihood and prior functions. Every model is mapped to a common
'universal' parameter psi by a bijection; here the default one which
standardises each model's posterior draws by their mean and Cholesky
factor of their covariance, and pads the smaller models with independent
standard normal auxiliary variables up to the largest dimension.

On iteration t with the chain in model k, we
  1. take a random posterior draw theta_k of model k, and auxiliary
     variables u_k ~ N(0, I),
  2. map them to psi = g_k(theta_k, u_k),
  3. map psi back into every model j, (theta_j, u_j) = g_j^{-1}(psi), and
     evaluate the full conditional weight of model j,
        L_j(theta_j) + p_j(theta_j) + log phi(u_j) + log|det J_j| + log pi_j,
  4. sample the next model from these (normalised) weights.

The likelihood and prior functions are treated as log-densities. The
weights from step 3 are added to the row of model k in a transition
matrix, whose stationary distribution estimates the posterior model
probabilities (a Rao-Blackwellised estimate with much lower variance than
just counting visits).
"""
from __future__ import annotations

import warnings
from time import time
from typing import Callable, Optional, Sequence

import numpy as np
import pandas
from numba import float64, njit  # type: ignore
from numba.core.errors import NumbaPerformanceWarning  # type: ignore
from numpy.random import SeedSequence, default_rng  # type: ignore
from tqdm.auto import tqdm  # type: ignore

from .result import RJResult, posterior_model_probabilities
from .utils import numba_seed, print_header, print_update, sample_discrete_dist, validate_model_prior

# Suppress a numba.PerformanceWarning
warnings.filterwarnings("ignore", category=NumbaPerformanceWarning)

Evaluator = Callable[[np.ndarray], float]

LOG_SQRT_2PI = 0.5 * np.log(2 * np.pi)


@njit(float64(float64[:]), nogil=True)
def std_normal_logpdf(u):
    logpdf = 0.0
    for i in range(len(u)):
        logpdf -= 0.5 * u[i] * u[i] + LOG_SQRT_2PI
    return logpdf


class DefaultBijection:
    """
    The map from a model's parameters theta (and auxiliary variables u) to
    the universal parameter psi = (L^{-1} (theta - mean), u), where L is the
    Cholesky factor of the covariance of the model's posterior draws.
    """

    def __init__(self, draws: np.ndarray, p: int) -> None:
        self.d = draws.shape[1]
        self.p = p
        self.mean = draws.mean(axis=0)
        cov = np.atleast_2d(np.cov(draws, rowvar=False))
        self.L = np.linalg.cholesky(cov)
        self.Linv = np.linalg.inv(self.L)
        # log |det| of the Jacobian of g^{-1}
        self.logDetJacobian = np.sum(np.log(np.diag(self.L)))

    def to_psi(self, theta: np.ndarray, u: np.ndarray) -> np.ndarray:
        return np.concatenate([self.Linv @ (theta - self.mean), u])

    def from_psi(self, psi: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        theta = self.mean + self.L @ psi[: self.d]
        return theta, psi[self.d :]


def validate_posteriors(posteriors) -> list[np.ndarray]:
    validated = []
    for i, draws in enumerate(posteriors):
        draws = np.asarray(draws, dtype=np.float64)
        if draws.ndim == 1:
            draws = draws.reshape(-1, 1)
        if draws.ndim != 2 or draws.shape[0] < 2:
            raise ValueError(f"Posterior draws of model {i + 1} must be a matrix with at least two rows")
        validated.append(draws)
    return validated


def normalise_log_weights(logWeights: np.ndarray, current: int) -> np.ndarray:
    """
    Turn log weights into probabilities. Non-finite log weights (e.g. a
    parameter mapped outside of a model's support) get probability zero;
    if every model is non-finite, the chain stays where it is.
    """
    ok = np.isfinite(logWeights)
    probs = np.zeros(len(logWeights))
    if not np.any(ok):
        probs[current] = 1.0
        return probs

    probs[ok] = np.exp(logWeights[ok] - np.max(logWeights[ok]))
    return probs / np.sum(probs)


def rjmcmc_post(
    posteriors: Sequence[np.ndarray],
    likelihoods: Sequence[Evaluator],
    priors: Sequence[Evaluator],
    modelPrior: Optional[np.ndarray] = None,
    chainLength: int = 10000,
    transitionThin: Optional[int] = None,
    saveAll: bool = True,
    seed: Optional[int] = None,
    labels: Optional[Sequence[str]] = None,
    verbose: bool = False,
    showProgressBar: bool = False,
) -> RJResult:
    posteriors = validate_posteriors(posteriors)
    M = len(posteriors)
    if len(likelihoods) != M or len(priors) != M:
        raise ValueError(
            f"Got {M} posteriors but {len(likelihoods)} likelihoods and {len(priors)} priors, they must match"
        )
    if chainLength < 1:
        raise ValueError("The chain length must be positive")

    modelPrior = validate_model_prior(modelPrior, M)
    logModelPrior = np.log(modelPrior)

    if transitionThin is None:
        transitionThin = max(chainLength // 10, 1)
    if transitionThin < 1:
        raise ValueError("transitionThin must be a positive number of iterations")
    if labels is None:
        labels = tuple(f"M{j + 1}" for j in range(M))

    p = max(draws.shape[1] for draws in posteriors)
    bijections = [DefaultBijection(draws, p) for draws in posteriors]

    sg = SeedSequence(seed)
    rg = default_rng(sg)
    numba_seed(int(sg.generate_state(1)[0]))

    if verbose:
        print_header(M, tuple(len(draws) for draws in posteriors), chainLength)

    models = np.empty(chainLength, np.int64)
    transitionMatrix = np.zeros((M, M))
    snapshots = []
    snapshotIters = []

    if saveAll:
        logPosts = np.empty((chainLength, M))
        likes = np.empty((chainLength, M))
        priorVals = np.empty((chainLength, M))

    logPost = np.empty(M)
    like = np.empty(M)
    prior = np.empty(M)

    startTime = time()
    m = sample_discrete_dist(modelPrior)

    iters = range(chainLength)
    if showProgressBar:
        iters = tqdm(iters, position=0, leave=False)

    t = 0
    try:
        for t in iters:
            draws = posteriors[m]
            theta = draws[rg.integers(len(draws))]
            u = rg.standard_normal(p - bijections[m].d)
            psi = bijections[m].to_psi(theta, u)

            for j in range(M):
                theta_j, u_j = bijections[j].from_psi(psi)
                like[j] = likelihoods[j](theta_j)
                prior[j] = priors[j](theta_j)
                logPost[j] = (
                    like[j]
                    + prior[j]
                    + std_normal_logpdf(u_j)
                    + bijections[j].logDetJacobian
                    + logModelPrior[j]
                )

            probs = normalise_log_weights(logPost, m)
            transitionMatrix[m] += probs
            models[t] = m

            if saveAll:
                logPosts[t] = logPost
                likes[t] = like
                priorVals[t] = prior

            if (t + 1) % transitionThin == 0:
                snapshots.append(posterior_model_probabilities(transitionMatrix))
                snapshotIters.append(t + 1)
                if verbose:
                    visits = np.bincount(models[: t + 1], minlength=M)
                    print_update(t + 1, time() - startTime, visits, snapshots[-1])

            m = sample_discrete_dist(probs)
        t = chainLength
    except KeyboardInterrupt:
        if t == 0:
            print("A running bayesclaims.rjmcmc_post(..) call was cancelled.")
            raise
        print(f"A running bayesclaims.rjmcmc_post(..) call was cancelled, returning the first {t} iterations.")

    if showProgressBar:
        iters.close()

    densities = None
    if saveAll:
        densities = densities_frame(logPosts[:t], likes[:t], priorVals[:t], labels)

    return RJResult(
        models[:t],
        transitionMatrix,
        modelPrior,
        np.array(snapshots).reshape(-1, M),
        np.array(snapshotIters, dtype=np.int64),
        densities,
        tuple(labels),
    )


def densities_frame(logPosts, likes, priorVals, labels) -> pandas.DataFrame:
    columns = {}
    for name, values in (("Posterior", logPosts), ("Likelihood", likes), ("Prior", priorVals)):
        for j, label in enumerate(labels):
            columns[f"{name}.{label}"] = values[:, j]
    densities = pandas.DataFrame(columns, index=np.arange(1, len(logPosts) + 1))
    densities.index.name = "iter"
    return densities
