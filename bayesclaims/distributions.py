# -*- coding: utf-8 -*-
"""
Generalized Poisson distribution, in the (lambda, omega) parameterisation

    P(X = x) = (1-omega) lambda ((1-omega) lambda + omega x)^(x-1)
                 exp(-((1-omega) lambda + omega x)) / x!

for x = 0, 1, 2, ... with lambda > 0 and 0 <= omega < 1. Setting omega = 0
recovers the Poisson distribution, larger omega gives overdispersion.
"""
import math

import numpy as np
import pytensor.tensor as pt
from numba import float64, int64, njit  # type: ignore


@njit(float64[:](int64[:], float64, float64), nogil=True)
def gpois_logpmf(x, lam, omega):
    logpmf = np.empty(len(x), np.float64)

    # Outside the parameter space, everything is undefined.
    if not (lam > 0) or not (omega >= 0 and omega <= 1):
        logpmf[:] = np.nan
        return logpmf

    a = (1 - omega) * lam
    if a == 0:
        logpmf[:] = -np.inf
        return logpmf

    logA = np.log(a)
    for i in range(len(x)):
        if x[i] < 0:
            logpmf[i] = -np.inf
            continue
        mu = a + omega * x[i]
        logpmf[i] = logA + (x[i] - 1) * np.log(mu) - mu - math.lgamma(x[i] + 1)

    return logpmf


@njit(float64[:](int64[:], float64, float64), nogil=True)
def gpois_pmf(x, lam, omega):
    return np.exp(gpois_logpmf(x, lam, omega))


def gpois_mean(lam, omega):
    return lam


def gpois_var(lam, omega):
    return lam / (1 - omega) ** 2


def gpois_logp_tensor(y, lam, omega):
    """
    Symbolic (pytensor) version of `gpois_logpmf`, summed over the
    observations, for use as a potential inside a PyMC model.
    """
    a = (1 - omega) * lam
    mu = a + omega * y
    return pt.sum(pt.log(a) + (y - 1) * pt.log(mu) - mu - pt.gammaln(y + 1))

