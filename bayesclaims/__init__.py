# -*- coding: utf-8 -*-
"""
Bayesian model comparison of claim frequency distributions
"""
__version__ = "0.1.0"

from .data import expand_frequencies, frequency_table, load_claim_counts, load_frequency_table
from .distributions import gpois_logpmf, gpois_pmf
from .models import GENERALIZED_POISSON, NEGATIVE_BINOMIAL, POISSON, CountModel, default_models, get_model
from .pipeline import Analysis, AnalysisConfig, plot_report, print_report, run_analysis
from .plot import plot_chains, plot_density_traces, plot_model_probabilities, plot_posteriors
from .result import RJResult
from .rjmcmc import rjmcmc_post
from .sampler import CompiledModel, PosteriorDraws, compile_model, fit_model, summarise
from .simulate import simulate_claim_counts
