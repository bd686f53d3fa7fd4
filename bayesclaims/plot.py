# -*- coding: utf-8 -*-
import matplotlib.pyplot as plt
import numpy as np
from scipy.stats import gaussian_kde  # type: ignore

DENSITY_KINDS = ("Posterior", "Likelihood", "Prior")


def plot_model_probabilities(result, legendLabels=None, ax=None):
    """
    Show how the estimated posterior model probabilities settle down as
    the RJMCMC chain gets longer.
    """
    if not ax:
        ax = plt.gca()
    if legendLabels is None:
        legendLabels = result.labels

    for j in range(result.M):
        ax.plot(result.snapshotIters, result.snapshots[:, j], marker="o", label=legendLabels[j])

    ax.set_xlabel("Iteration")
    ax.set_ylabel("Posterior model probability")
    ax.set_ylim([-0.05, 1.05])
    ax.legend(title="Models")
    seaborn_despine(ax=ax)
    return ax


def plot_density_traces(result, kind="Posterior", legendLabels=None, ax=None):
    """
    Trace plot of the posterior, likelihood or prior values which were
    computed for every model at every iteration of the RJMCMC chain.
    """
    if kind not in DENSITY_KINDS:
        raise ValueError(f"Unknown density '{kind}', choose from {DENSITY_KINDS}")
    if result.densities is None:
        raise ValueError("The densities were not saved, rerun the RJMCMC with saveAll=True")

    if not ax:
        ax = plt.gca()
    if legendLabels is None:
        legendLabels = result.labels

    iters = result.densities.index.to_numpy()
    for j, label in enumerate(result.labels):
        ax.plot(iters, result.densities[f"{kind}.{label}"].to_numpy(), label=legendLabels[j], lw=0.5)

    ax.set_xlabel("iter")
    ax.set_ylabel(kind)
    ax.legend(title="Models")
    seaborn_despine(ax=ax)
    return ax


def plot_chains(draws, figsize=(5.0, 2.0), dpi=150):
    """One trace plot per parameter, with every chain overlaid."""
    fig, axs = plt.subplots(len(draws.paramNames), 1, figsize=figsize, dpi=dpi, squeeze=False, tight_layout=True)

    for i, name in enumerate(draws.paramNames):
        ax = axs[i, 0]
        for c in range(draws.numChains):
            ax.plot(draws.samples[c, :, i], lw=0.5, alpha=0.75)
        ax.set_ylabel(name)
        ax.set_title(draws.model.title if i == 0 else "")

    axs[-1, 0].set_xlabel("Iteration")
    seaborn_despine(fig=fig)
    return axs[:, 0]


def plot_posteriors(draws, refLines=None, figsize=(5.0, 2.0), dpi=150, refStyle={"color": "black", "linestyle": "--"}):
    numThetas = len(draws.paramNames)
    fig, axs = plt.subplots(1, numThetas, tight_layout=True, figsize=figsize, dpi=dpi, squeeze=False)

    samples = draws.samples.reshape(-1, numThetas)
    for i, name in enumerate(draws.paramNames):
        ax = axs[0, i]
        xs = np.linspace(samples[:, i].min(), samples[:, i].max(), 200)

        (line,) = ax.plot(xs, gaussian_kde(samples[:, i])(xs))
        ax.hist(samples[:, i], bins=30, density=True, color=line.get_color(), alpha=0.2)
        ax.axvline(samples[:, i].mean(), color="r")

        if refLines is not None:
            ax.axvline(refLines[i], **refStyle)

        ax.set_title(name)
        ax.set_yticks([])

    seaborn_despine(fig=fig, left=True)
    return axs[0]


# Adapted from https://github.com/mwaskom/seaborn/blob/77e3b6b03763d24cc99a8134ee9a6f43b32b8e7b/seaborn/utils.py#L291
def seaborn_despine(fig=None, ax=None, top=True, right=True, left=False, bottom=False):
    """Remove the top and right spines from plot(s).
    fig : matplotlib figure, optional
        Figure to despine all axes of, defaults to the current figure.
    ax : matplotlib axes, optional
        Specific axes object to despine. Ignored if fig is provided.
    top, right, left, bottom : boolean, optional
        If True, remove that spine.
    """
    if fig is None and ax is None:
        axes = plt.gcf().axes
    elif fig is not None:
        axes = fig.axes
    else:
        axes = [ax]

    hide = {"top": top, "right": right, "left": left, "bottom": bottom}
    for ax_i in axes:
        for side, hidden in hide.items():
            ax_i.spines[side].set_visible(not hidden)
