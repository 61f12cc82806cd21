# gapjax/__init__.py
"""
Kernels and likelihoods for Gaussian Process regression in JAX.

Every positive hyperparameter is stored and optimised in log-space; each
component provides closed-form derivatives of its covariance / log-density
with respect to those log-parameters.
"""
from .errors import ParameterCountError, DimensionMismatch
from .gp.kernels import Polynomial, PairwiseStatisticsCache, DataKind
from .gp.likelihoods import GaussianLikelihood, PoissonLikelihood
from .gp import get_kernel, get_likelihood

__version__ = "0.1.0"

__all__ = [
    "ParameterCountError",
    "DimensionMismatch",
    "Polynomial",
    "PairwiseStatisticsCache",
    "DataKind",
    "GaussianLikelihood",
    "PoissonLikelihood",
    "get_kernel",
    "get_likelihood",
]
