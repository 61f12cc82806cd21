# gapjax/gp/__init__.py
"""
Gaussian Process components.

This package provides:
  - kernels: covariance functions and cached pairwise statistics
  - likelihoods: observation models with analytic derivatives
  - params: flat log-parameter vectors across several components
"""
from .kernels import get as get_kernel
from .likelihoods import get as get_likelihood
from .params import get_params, set_params, num_params, get_param_names, with_params

__all__ = [
    "get_kernel",
    "get_likelihood",
    "get_params",
    "set_params",
    "num_params",
    "get_param_names",
    "with_params",
]
