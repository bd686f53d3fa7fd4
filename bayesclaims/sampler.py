# -*- coding: utf-8 -*-
"""
Drawing from the posterior of each claim frequency model with PyMC.

The workflow has three steps: compile a model for the data (choosing
the number of chains and of adaptation iterations), run it for some
burn-in iterations, and then record the requested parameters for a
number of iterations.
"""
from __future__ import annotations

from dataclasses import dataclass
from time import time
from typing import Any, Optional, Sequence

import arviz as az  # type: ignore
import numpy as np
import pymc as pm

from .models import CountModel
from .utils import validate_obs


@dataclass
class PosteriorDraws:
    """
    Posterior draws of one model, stored as an array of shape
    (numChains, numIter, dim) with the burn-in already thrown away.
    """

    model: CountModel
    paramNames: tuple
    samples: np.ndarray
    idata: Any = None

    @property
    def numChains(self) -> int:
        return self.samples.shape[0]

    @property
    def numIter(self) -> int:
        return self.samples.shape[1]

    def chain(self, i: int = 0) -> np.ndarray:
        return self.samples[i]

    def means(self, i: int = 0) -> dict[str, float]:
        return dict(zip(self.paramNames, self.chain(i).mean(axis=0)))


class CompiledModel:
    def __init__(self, model: CountModel, obs, numChains: int = 3, numAdapt: int = 500):
        if numChains < 1:
            raise ValueError("Need at least one chain")
        if numAdapt < 0:
            raise ValueError("The number of adaptation iterations can't be negative")

        self.model = model
        self.obs = validate_obs(obs)
        self.N = len(self.obs)
        self.pymcModel = model.build(self.obs)
        self.numChains = numChains
        self.numAdapt = numAdapt
        self.numBurn = 0

    def update(self, numBurn: int) -> None:
        """
        Advance the chains by numBurn iterations whose values are thrown
        away. They are run at the start of the next call to `sample`.
        """
        if numBurn < 0:
            raise ValueError("The number of burn-in iterations can't be negative")
        self.numBurn += numBurn

    def sample(
        self,
        varNames: Optional[Sequence[str]] = None,
        numIter: int = 1000,
        seed: Optional[int] = None,
        showProgressBar: bool = False,
    ) -> PosteriorDraws:
        if varNames is None:
            varNames = self.model.paramNames
        varNames = tuple(varNames)

        with self.pymcModel:
            idata = pm.sample(
                draws=self.numBurn + numIter,
                tune=self.numAdapt,
                chains=self.numChains,
                cores=1,
                random_seed=seed,
                progressbar=showProgressBar,
                compute_convergence_checks=False,
            )

        idata = idata.sel(draw=slice(self.numBurn, None))
        samples = np.stack([idata.posterior[name].values for name in varNames], axis=-1)

        return PosteriorDraws(self.model, varNames, samples.astype(np.float64), idata)


def compile_model(model: CountModel, obs, numChains: int = 3, numAdapt: int = 500) -> CompiledModel:
    return CompiledModel(model, obs, numChains, numAdapt)


def fit_model(
    model: CountModel,
    obs,
    numChains: int = 3,
    numAdapt: int = 500,
    numBurn: int = 1000,
    numIter: int = 10000,
    seed: Optional[int] = None,
    verbose: bool = False,
    showProgressBar: bool = False,
) -> PosteriorDraws:
    startTime = time()

    compiled = compile_model(model, obs, numChains, numAdapt)
    compiled.update(numBurn)
    draws = compiled.sample(model.paramNames, numIter, seed, showProgressBar)

    if verbose:
        elapsed = time() - startTime
        print(
            f"Finished sampling {model.title} with {numChains} chains of {numIter} iterations "
            + f"(after {numAdapt} adaptation and {numBurn} burn-in iterations), time = {np.round(elapsed)}s"
        )

    return draws


def summarise(draws: PosteriorDraws):
    """Summary statistics and convergence diagnostics (ESS, R-hat) over all chains."""
    return az.summary(draws.idata, var_names=list(draws.paramNames))
