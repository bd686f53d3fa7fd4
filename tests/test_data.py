import bayesclaims as bc
import numpy as np
import numpy.random as rnd
import pandas as pd
import pytest

# A small portfolio of 100 policies
counts = np.arange(4)
freqs = np.array([50, 30, 15, 5])


def write_table(path, columns):
    table = pd.DataFrame(columns, index=pd.Index(np.arange(len(freqs)), name="claims"))
    table.to_csv(path)
    return path


def test_expansion_size():
    obs = bc.expand_frequencies(counts, freqs)
    assert len(obs) == 100
    assert obs.dtype == np.int64
    for k, n in zip(counts, freqs):
        assert np.sum(obs == k) == n


def test_expansion_is_ordered():
    obs = bc.expand_frequencies(counts, freqs)
    assert np.all(np.diff(obs) >= 0)
    assert obs[0] == 0 and obs[-1] == 3


def test_zero_frequency():
    obs = bc.expand_frequencies(np.arange(5), np.array([3, 0, 2, 0, 0]))
    np.testing.assert_array_equal(obs, [0, 0, 0, 2, 2])


def test_random_tables():
    rg = rnd.default_rng(1)
    for _ in range(20):
        K = rg.integers(1, 10)
        tableFreqs = rg.integers(0, 100, size=K)
        obs = bc.expand_frequencies(np.arange(K), tableFreqs)
        assert len(obs) == tableFreqs.sum()
        np.testing.assert_array_equal(np.bincount(obs, minlength=K), tableFreqs)


def test_invalid_frequencies():
    with pytest.raises(ValueError):
        bc.expand_frequencies(counts, np.array([50, -1, 15, 5]))
    with pytest.raises(ValueError):
        bc.expand_frequencies(counts, np.array([50, 1.5, 15, 5]))
    with pytest.raises(ValueError):
        bc.expand_frequencies(counts, freqs[:3])


def test_frequency_table():
    obs = bc.expand_frequencies(counts, freqs)
    table = bc.frequency_table(obs)
    np.testing.assert_array_equal(table.index, counts)
    np.testing.assert_array_equal(table.to_numpy(), freqs)


def test_load_claim_counts(tmp_path):
    path = write_table(tmp_path / "claims.csv", {"Switzerland_1961": freqs, "Other": [1, 1, 1, 1]})

    obs = bc.load_claim_counts(path, "Switzerland_1961")
    assert len(obs) == 100
    np.testing.assert_array_equal(np.bincount(obs), freqs)

    other = bc.load_claim_counts(path, "Other")
    np.testing.assert_array_equal(other, counts)


def test_load_uses_row_labels(tmp_path):
    table = pd.DataFrame({"series": [2, 1]}, index=pd.Index([1, 3], name="claims"))
    table.to_csv(tmp_path / "claims.csv")
    obs = bc.load_claim_counts(tmp_path / "claims.csv", "series")
    np.testing.assert_array_equal(obs, [1, 1, 3])


def test_missing_column(tmp_path):
    path = write_table(tmp_path / "claims.csv", {"Switzerland_1961": freqs})
    with pytest.raises(KeyError):
        bc.load_claim_counts(path, "Belgium_1958")


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        bc.load_claim_counts(tmp_path / "no-such-file.csv", "Switzerland_1961")


def test_non_integer_row_labels(tmp_path):
    table = pd.DataFrame({"series": [2, 1]}, index=pd.Index(["none", "some"], name="claims"))
    table.to_csv(tmp_path / "claims.csv")
    with pytest.raises(ValueError):
        bc.load_claim_counts(tmp_path / "claims.csv", "series")

    table = pd.DataFrame({"series": [2, 1]}, index=pd.Index([0.5, 1.7], name="claims"))
    table.to_csv(tmp_path / "fractional.csv")
    with pytest.raises(ValueError):
        bc.load_claim_counts(tmp_path / "fractional.csv", "series")
