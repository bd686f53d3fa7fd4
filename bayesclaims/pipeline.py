# -*- coding: utf-8 -*-
"""
The full model comparison: fit every claim frequency model with PyMC,
then run the RJMCMC post-processing on their posterior draws to get the
posterior model probabilities and Bayes factors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from numpy.random import SeedSequence

from .data import frequency_table
from .models import CountModel, default_models
from .plot import DENSITY_KINDS, plot_chains, plot_density_traces, plot_model_probabilities
from .result import RJResult
from .rjmcmc import rjmcmc_post
from .sampler import PosteriorDraws, fit_model, summarise
from .utils import validate_obs


@dataclass
class AnalysisConfig:
    numChains: int = 3
    numAdapt: int = 500
    numBurn: int = 1000
    numIter: int = 10000
    chainLength: int = 10000
    transitionThin: Optional[int] = None
    modelPrior: Optional[np.ndarray] = None
    saveAll: bool = True
    seed: Optional[int] = 1
    verbose: bool = False
    showProgressBar: bool = False


@dataclass
class Analysis:
    obs: np.ndarray
    models: tuple
    draws: tuple
    result: RJResult
    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    def chain_means(self) -> dict[str, float]:
        """Posterior means from the first chain of each model, e.g. 'm2_theta'."""
        means = {}
        for draws in self.draws:
            for name, value in draws.means().items():
                means[f"{draws.model.label.lower()}_{name}"] = value
        return means


def spawn_seeds(seed: Optional[int], n: int) -> list[int]:
    return [int(s.generate_state(1)[0]) for s in SeedSequence(seed).spawn(n)]


def fit_models(obs, models: Sequence[CountModel], config: AnalysisConfig, seeds: Sequence[int]) -> tuple:
    return tuple(
        fit_model(
            model,
            obs,
            config.numChains,
            config.numAdapt,
            config.numBurn,
            config.numIter,
            seed=seed,
            verbose=config.verbose,
            showProgressBar=config.showProgressBar,
        )
        for model, seed in zip(models, seeds)
    )


def post_process(obs, draws: Sequence[PosteriorDraws], config: AnalysisConfig, seed: Optional[int]) -> RJResult:
    # Only the first chain of each model feeds into the RJMCMC.
    return rjmcmc_post(
        posteriors=[d.chain(0) for d in draws],
        likelihoods=[d.model.likelihood_fn(obs) for d in draws],
        priors=[d.model.prior for d in draws],
        modelPrior=config.modelPrior,
        chainLength=config.chainLength,
        transitionThin=config.transitionThin,
        saveAll=config.saveAll,
        seed=seed,
        labels=[d.model.label for d in draws],
        verbose=config.verbose,
        showProgressBar=config.showProgressBar,
    )


def run_analysis(obs, models: Optional[Sequence[CountModel]] = None, config: Optional[AnalysisConfig] = None):
    if models is None:
        models = default_models()
    if config is None:
        config = AnalysisConfig()

    obs = validate_obs(obs)
    if len(obs) == 0:
        raise ValueError("No claim counts to fit")

    *modelSeeds, rjSeed = spawn_seeds(config.seed, len(models) + 1)

    draws = fit_models(obs, models, config, modelSeeds)
    result = post_process(obs, draws, config, rjSeed)

    return Analysis(obs, tuple(models), draws, result, config)


def print_report(analysis: Analysis) -> None:
    print(f"Fitted {len(analysis.models)} models to {len(analysis.obs)} policies, with claim counts:")
    print(frequency_table(analysis.obs).to_string())

    for draws in analysis.draws:
        print(f"\n{draws.model.title}")
        print(summarise(draws).to_string())

    print("\nPosterior means (first chain):")
    for name, value in analysis.chain_means().items():
        print(f"\t{name} = {value:.4f}")

    print("\nRJMCMC post-processing:")
    print(analysis.result.summary().to_string())

    print("\nln Bayes factors")
    print(analysis.result.log_bayes_factors())

    print("\nlog10 Bayes factors")
    print(analysis.result.log_bayes_factors(10))


def plot_report(analysis: Analysis, outputDir=None, show: bool = False) -> list:
    legendLabels = [model.title for model in analysis.models]
    figs = []

    fig, ax = plt.subplots()
    plot_model_probabilities(analysis.result, legendLabels, ax=ax)
    figs.append(("model_probabilities", fig))

    if analysis.result.densities is not None:
        for kind in DENSITY_KINDS:
            fig, ax = plt.subplots()
            plot_density_traces(analysis.result, kind, legendLabels, ax=ax)
            figs.append((f"{kind.lower()}_trace", fig))

    for draws in analysis.draws:
        axs = plot_chains(draws)
        figs.append((f"chains_{draws.model.label.lower()}", axs[0].get_figure()))

    if outputDir is not None:
        outputDir = Path(outputDir)
        outputDir.mkdir(parents=True, exist_ok=True)
        for name, fig in figs:
            fig.savefig(outputDir / f"{name}.png", bbox_inches="tight")

    if show:
        plt.show()

    return [fig for _, fig in figs]
