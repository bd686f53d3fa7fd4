# -*- coding: utf-8 -*-
"""
Loading claim-count data which is stored as a frequency table, i.e. a CSV
file whose rows are indexed by a number of claims and whose columns count
how many policies (in some portfolio or year) had that many claims.
"""
import numpy as np
import pandas


def load_frequency_table(path) -> pandas.DataFrame:
    return pandas.read_csv(path, index_col=0)


def expand_frequencies(counts, freqs) -> np.ndarray:
    """
    Turn a frequency table into the raw observations it summarises, so
    that the claim count counts[i] appears freqs[i] times (in order).
    """
    counts = np.asarray(counts)
    freqs = np.asarray(freqs)

    if counts.shape != freqs.shape:
        raise ValueError("counts and freqs must be the same length")
    if np.any(pandas.isna(freqs)) or np.any(freqs < 0) or np.any(freqs != np.round(freqs)):
        raise ValueError("Frequencies must be non-negative integers")

    return np.repeat(counts.astype(np.int64), freqs.astype(np.int64))


def load_claim_counts(path, series: str) -> np.ndarray:
    """
    Read the frequency table at path and expand the column named series
    into one claim count per policy.
    """
    table = load_frequency_table(path)
    if series not in table.columns:
        raise KeyError(f"Column '{series}' not found in {path}, options are {list(table.columns)}")

    try:
        labels = table.index.to_numpy().astype(np.float64)
    except (TypeError, ValueError):
        raise ValueError(f"Row labels of {path} must be claim counts, got {list(table.index)}")
    if np.any(np.isnan(labels)) or np.any(labels != np.round(labels)):
        raise ValueError(f"Row labels of {path} must be integer claim counts, got {list(table.index)}")
    counts = labels.astype(np.int64)

    return expand_frequencies(counts, table[series].to_numpy())


def frequency_table(obs) -> pandas.Series:
    """
    The reverse of the expansion: count how many policies had each number
    of claims, including the counts in between which never occurred.
    """
    obs = np.asarray(obs, dtype=np.int64)
    maxCount = obs.max() if len(obs) > 0 else -1
    return pandas.Series(np.bincount(obs, minlength=maxCount + 1), name="frequency").rename_axis("claims")
