# -*- coding: utf-8 -*-
import numpy as np

from .distributions import gpois_mean, gpois_pmf, gpois_var


def sample_gpois(rg, lam, omega, size):
    # Inverse CDF sampling on a truncated support, fine for the moderate
    # means of claim-count data.
    u = rg.uniform(size=size)
    sd = np.sqrt(gpois_var(lam, omega))
    maxX = int(np.ceil(gpois_mean(lam, omega) + 20 * sd + 20))
    support = np.arange(maxX + 1, dtype=np.int64)
    cdf = np.cumsum(gpois_pmf(support, float(lam), float(omega)))
    return np.minimum(np.searchsorted(cdf, u), maxX).astype(np.int64)


def simulate_claim_counts(rg, T, freq, theta):
    # T = number of policies observed
    # freq = claim frequency distribution to be chosen in ("poisson",
    # "negative binomial", "generalized poisson")
    # theta = parameters of the claim frequency distribution, in the same
    # order as the corresponding CountModel
    if freq == "poisson":
        lam = theta[0]
        freqs = rg.poisson(lam, size=T)
    elif freq == "negative binomial":
        lam, size = theta[0:2]
        freqs = rg.negative_binomial(size, size / (size + lam), size=T)
    elif freq == "generalized poisson":
        lam, omega = theta[0:2]
        freqs = sample_gpois(rg, lam, omega, T)
    else:
        raise Exception(f"Unknown frequency distribution: {freq}")

    return np.asarray(freqs, dtype=np.int64)
