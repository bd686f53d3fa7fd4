import pathlib
from setuptools import setup

HERE = pathlib.Path(__file__).parent
README = (HERE / "README.md").read_text()

setup(
    name="bayesclaims",
    version="0.1.0",
    description="Bayesian model comparison of claim frequency distributions with post-processing RJMCMC",
    long_description=README,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Intended Audience :: Science/Research",
    ],
    packages=["bayesclaims"],
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "numba",
        "numpy>=1.17",
        "scipy>=1.4",
        "pandas",
        "matplotlib",
        "tqdm",
        "pymc>=5,<6",
        "pytensor",
        "arviz",
    ],
    extras_require={"test": ["pytest"]},
)
