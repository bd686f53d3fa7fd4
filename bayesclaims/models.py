# -*- coding: utf-8 -*-
"""
The three competing claim frequency models. Each one knows how to build
its PyMC model for some observed claim counts, and supplies the closed-form
likelihood and prior evaluators which the RJMCMC post-processing needs.

The likelihoods are the sum (not the product) of the probability masses of
each observation, and the priors of the two-parameter models only return
the density of lambda; both exactly reproduce the analysis these models
were first fitted with.
"""
from typing import Callable

import numpy as np
import pymc as pm
import scipy.stats as st

from .distributions import gpois_logp_tensor, gpois_pmf
from .utils import validate_obs

# Vague gamma prior on the mean number of claims lambda (shape and rate).
GAMMA_SHAPE = 0.0001
GAMMA_RATE = 0.0001

Evaluator = Callable[[np.ndarray], float]


class CountModel:
    def __init__(self, freq, name, label, paramNames, builder, likelihood, prior):
        self.freq = freq
        self.name = name
        self.label = label
        self.paramNames = tuple(paramNames)
        self.builder = builder
        self.likelihood = likelihood
        self.prior = prior

    @property
    def dim(self) -> int:
        return len(self.paramNames)

    @property
    def title(self) -> str:
        return f"{self.label}: {self.name}"

    def build(self, obs) -> pm.Model:
        """Create the PyMC model of the claim counts obs."""
        return self.builder(validate_obs(obs))

    def likelihood_fn(self, obs) -> Evaluator:
        return self.likelihood(validate_obs(obs))

    def __repr__(self):
        return f"CountModel({self.freq!r}, params={self.paramNames})"


def lambda_prior(name="lambda"):
    return pm.Gamma(name, alpha=GAMMA_SHAPE, beta=GAMMA_RATE)


def lambda_prior_pdf(lam):
    return st.gamma.pdf(lam, GAMMA_SHAPE, scale=1 / GAMMA_RATE)


# M1: Poisson
def build_poisson(obs):
    with pm.Model() as model:
        lam = lambda_prior()
        pm.Poisson("y", mu=lam, observed=obs)
    return model


def poisson_likelihood(obs) -> Evaluator:
    def likelihood(theta):
        return np.sum(st.poisson.pmf(obs, theta[0]))

    return likelihood


def poisson_prior(theta):
    return lambda_prior_pdf(theta[0])


# M2: Negative binomial, with size theta and success probability
# theta / (theta + lambda), so that lambda is the mean.
def negbin_size(lam, omega):
    return lam * (1 - omega) * (1 - omega) / (omega * (2 - omega))


def build_negbin(obs):
    with pm.Model() as model:
        omega = pm.Beta("omega", alpha=1, beta=1)
        lam = lambda_prior()
        theta = pm.Deterministic("theta", negbin_size(lam, omega))
        pm.NegativeBinomial("y", n=theta, p=theta / (theta + lam), observed=obs)
    return model


def negbin_likelihood(obs) -> Evaluator:
    def likelihood(theta):
        lam, size = theta[0], theta[1]
        return np.sum(st.nbinom.pmf(obs, size, size / (size + lam)))

    return likelihood


def negbin_size_prior_pdf(lam, size):
    return 0.5 * lam * size**-2 * (1 + lam / size) ** -1.5


def negbin_prior(theta):
    density = lambda_prior_pdf(theta[0])
    # Evaluated, but not part of the returned density.
    negbin_size_prior_pdf(theta[0], theta[1])
    return density


# M3: Generalized Poisson
def build_genpois(obs):
    with pm.Model() as model:
        omega = pm.Beta("omega", alpha=1, beta=1)
        lam = lambda_prior()
        pm.Potential("loglike", gpois_logp_tensor(obs, lam, omega))
    return model


def genpois_likelihood(obs) -> Evaluator:
    def likelihood(theta):
        return np.sum(gpois_pmf(obs, float(theta[0]), float(theta[1])))

    return likelihood


def genpois_prior(theta):
    density = lambda_prior_pdf(theta[0])
    # Evaluated, but not part of the returned density.
    st.beta.pdf(theta[1], 1, 1)
    return density


POISSON = CountModel("poisson", "Poisson", "M1", ("lambda",), build_poisson, poisson_likelihood, poisson_prior)
NEGATIVE_BINOMIAL = CountModel(
    "negative binomial", "Negative binomial", "M2", ("lambda", "theta"), build_negbin, negbin_likelihood, negbin_prior
)
GENERALIZED_POISSON = CountModel(
    "generalized poisson",
    "Generalized Poisson",
    "M3",
    ("lambda", "omega"),
    build_genpois,
    genpois_likelihood,
    genpois_prior,
)


def get_model(freq: str) -> CountModel:
    # freq = claim frequency distribution, choose from ("poisson",
    # "negative binomial", "generalized poisson")
    for model in default_models():
        if model.freq == freq:
            return model
    raise Exception(f"Unknown frequency distribution: {freq}")


def default_models() -> tuple:
    return (POISSON, NEGATIVE_BINOMIAL, GENERALIZED_POISSON)
