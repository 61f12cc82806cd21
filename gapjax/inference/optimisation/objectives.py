# gapjax/inference/optimisation/objectives.py
"""
Energies over log-parameter vectors, ready for TypeII.
"""
from __future__ import annotations

from typing import Callable

import jax.numpy as jnp

from ...gp.params import as_param_vector, with_params


def make_likelihood_objective(likelihood, f, y) -> Callable:
    """
    Negative data-fit term -sum_i log p(y_i | f_i, theta) with its analytic gradient.

    The latent values f are held fixed; only the likelihood's own
    log-parameters move. Use with `TypeIICFG(analytic_grad=True)`.

    Returns:
        energy(theta) -> (value, grad), grad of shape (num_params,)
    """
    f = jnp.asarray(f)
    y = jnp.asarray(y)
    n = likelihood.num_params()

    def energy(theta):
        theta = as_param_vector(type(likelihood).__name__, theta, n)
        lik = with_params(likelihood, theta)
        value = -jnp.sum(lik.log_density(f, y))
        if n == 0:
            return value, jnp.zeros((0,))
        # (N,) for one parameter, (P, N) otherwise
        dtheta = jnp.atleast_2d(lik.dlog_density_dtheta(f, y))
        grad = -jnp.sum(dtheta, axis=-1)
        return value, grad

    return energy


def make_likelihood_energy(likelihood, f, y) -> Callable:
    """Scalar version of `make_likelihood_objective`, for autodiff."""
    f = jnp.asarray(f)
    y = jnp.asarray(y)

    def energy(theta):
        return -jnp.sum(with_params(likelihood, theta).log_density(f, y))

    return energy
