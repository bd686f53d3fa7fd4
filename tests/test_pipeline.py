import matplotlib

matplotlib.use("Agg")

import bayesclaims as bc
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

config = bc.AnalysisConfig(numChains=2, numAdapt=200, numBurn=100, numIter=300, chainLength=500, seed=1)


@pytest.fixture(scope="module")
def claims_file(tmp_path_factory):
    path = tmp_path_factory.mktemp("data") / "00_Data_ClaimData.csv"
    table = pd.DataFrame(
        {"Switzerland_1961": [50, 30, 15, 5], "Other": [10, 0, 0, 0]},
        index=pd.Index(np.arange(4), name="claims"),
    )
    table.to_csv(path)
    return path


@pytest.fixture(scope="module")
def analysis(claims_file):
    obs = bc.load_claim_counts(claims_file, "Switzerland_1961")
    return bc.run_analysis(obs, config=config)


def test_observations(analysis):
    assert len(analysis.obs) == 100
    np.testing.assert_array_equal(np.bincount(analysis.obs), [50, 30, 15, 5])


def test_posterior_draws(analysis):
    assert len(analysis.draws) == 3
    for draws, model in zip(analysis.draws, bc.default_models()):
        assert draws.model is model
        assert draws.samples.shape == (config.numChains, config.numIter, model.dim)


def test_chain_means(analysis):
    means = analysis.chain_means()
    assert set(means) == {"m1_lambda", "m2_lambda", "m2_theta", "m3_lambda", "m3_omega"}
    assert np.abs(means["m1_lambda"] - 0.75) < 0.05


def test_bayes_factors(analysis):
    result = analysis.result
    assert result.size() == config.chainLength
    assert result.labels == ("M1", "M2", "M3")
    assert np.abs(np.sum(result.model_probabilities()) - 1) < 1e-10
    assert result.bayes_factors()[0] == 1
    assert result.densities.shape == (config.chainLength, 9)


def test_same_seed_is_deterministic(analysis):
    again = bc.run_analysis(analysis.obs, config=config)
    for draws1, draws2 in zip(analysis.draws, again.draws):
        np.testing.assert_array_equal(draws1.samples, draws2.samples)
    np.testing.assert_array_equal(analysis.result.bayes_factors(), again.result.bayes_factors())


def test_print_report(analysis, capsys):
    bc.print_report(analysis)
    out = capsys.readouterr().out
    assert "m1_lambda" in out
    assert "ln Bayes factors" in out
    assert "log10 Bayes factors" in out
    assert "M3: Generalized Poisson" in out


def test_plot_report(analysis, tmp_path):
    figs = bc.plot_report(analysis, outputDir=tmp_path)
    assert len(figs) == 1 + 3 + 3
    for name in ("model_probabilities", "posterior_trace", "likelihood_trace", "prior_trace", "chains_m2"):
        assert (tmp_path / f"{name}.png").exists()

    legend = figs[1].axes[0].get_legend()
    labels = [text.get_text() for text in legend.get_texts()]
    assert labels == ["M1: Poisson", "M2: Negative binomial", "M3: Generalized Poisson"]
    plt.close("all")


def test_plot_unknown_density(analysis):
    with pytest.raises(ValueError):
        bc.plot_density_traces(analysis.result, "Evidence")


def test_empty_data():
    with pytest.raises(ValueError):
        bc.run_analysis(np.array([], dtype=np.int64), config=config)


def test_plot_posteriors(analysis):
    axs = bc.plot_posteriors(analysis.draws[2], refLines=(0.75, 0.1))
    assert [ax.get_title() for ax in axs] == ["lambda", "omega"]
    plt.close("all")
