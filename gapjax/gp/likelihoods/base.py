# gapjax/gp/likelihoods/base.py
from __future__ import annotations

import jax.numpy as jnp

from ...errors import DimensionMismatch
from ..params import as_param_vector

_LIKELIHOOD_REGISTRY = {}


def register(name, likelihood):
    """
    Register a likelihood class or factory under a string key.
    """
    if name in _LIKELIHOOD_REGISTRY:
        raise KeyError(f"Likelihood '{name}' already registered.")
    _LIKELIHOOD_REGISTRY[name] = likelihood


def get(name):
    """
    Retrieve a likelihood by name.
    """
    try:
        return _LIKELIHOOD_REGISTRY[name]
    except KeyError:
        raise KeyError(
            f"Unknown likelihood '{name}'. "
            f"Available: {list(_LIKELIHOOD_REGISTRY.keys())}"
        )


class Likelihood:
    """
    Base class for observation models p(y | f).

    The density factorises over observations, so every method works
    elementwise on equal-length vectors f (latent values) and y
    (observations) and returns a vector of the same length.
    """

    param_names: tuple[str, ...] = ()

    def __init__(self):
        # prior specifications, interpreted elsewhere
        self.priors = []

    def num_params(self) -> int:
        return len(self.param_names)

    def get_param_names(self) -> list[str]:
        return list(self.param_names)

    def get_params(self) -> jnp.ndarray:
        raise NotImplementedError

    def set_params(self, hyp) -> None:
        self._set_params(as_param_vector(type(self).__name__, hyp, self.num_params()))

    def _set_params(self, hyp: jnp.ndarray) -> None:
        raise NotImplementedError

    @staticmethod
    def _check_pair(a, b, names=("f", "y")):
        a = jnp.asarray(a)
        b = jnp.asarray(b)
        if a.shape != b.shape:
            raise DimensionMismatch(
                f"{names[0]} and {names[1]} must have the same shape, got {a.shape} and {b.shape}."
            )
        return a, b

    def log_density(self, f, y) -> jnp.ndarray:
        raise NotImplementedError

    def dlog_density_df(self, f, y) -> jnp.ndarray:
        raise NotImplementedError

    def dlog_density_dtheta(self, f, y) -> jnp.ndarray:
        raise NotImplementedError(f"{type(self).__name__} has no free parameters.")

    def mean(self, f) -> jnp.ndarray:
        raise NotImplementedError

    def variance(self, f) -> jnp.ndarray:
        raise NotImplementedError

    def predict_obs(self, fmean, fvar):
        raise NotImplementedError
