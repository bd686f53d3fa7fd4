import bayesclaims as bc
import matplotlib.pyplot as plt

plt.rcParams["figure.figsize"] = (7.0, 3.0)
plt.rcParams["figure.dpi"] = 150
plt.rcParams["savefig.bbox"] = "tight"

# Load the number of claims per policy for the Swiss portfolio from 1961
obsData = bc.load_claim_counts("00_Data_ClaimData.csv", "Switzerland_1961")

# M1: Poisson, M2: negative binomial, M3: generalized Poisson
models = bc.default_models()

config = bc.AnalysisConfig(
    numChains=3,  # The number of MCMC chains per model
    numAdapt=500,  # The number of adaptation iterations
    numBurn=1000,  # The number of burn-in iterations thrown away
    numIter=10000,  # The number of posterior draws kept per chain
    chainLength=10000,  # The length of the RJMCMC post-processing chain
    modelPrior=[1 / 3, 1 / 3, 1 / 3],
    saveAll=True,
    seed=1,
    verbose=True,
)

analysis = bc.run_analysis(obsData, models, config)

bc.print_report(analysis)
bc.plot_report(analysis, outputDir="plots", show=True)
