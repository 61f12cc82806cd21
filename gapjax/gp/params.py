# gapjax/gp/params.py
"""
Flat log-parameter vectors across several components.

A GP has one kernel and one likelihood (and possibly more); an optimiser sees
them as a single vector. Components are laid out in the order given, each
contributing `num_params()` consecutive entries.
"""
from __future__ import annotations

from typing import Sequence

import jax.numpy as jnp
from jax.tree_util import tree_flatten, tree_unflatten

from ..core.typing import Parametrised
from ..errors import ParameterCountError


def as_param_vector(owner: str, hyp, expected: int) -> jnp.ndarray:
    """Flatten `hyp` and check it has exactly `expected` entries."""
    hyp = jnp.ravel(jnp.asarray(hyp))
    if hyp.shape[0] != expected:
        raise ParameterCountError(owner, expected, hyp.shape[0])
    return hyp


def num_params(*components: Parametrised) -> int:
    return sum(c.num_params() for c in components)


def get_params(*components: Parametrised) -> jnp.ndarray:
    if not components:
        return jnp.zeros((0,))
    return jnp.concatenate([jnp.ravel(jnp.asarray(c.get_params())) for c in components])


def get_param_names(*components: Parametrised) -> list[str]:
    """Names as '<position>.<name>', e.g. '0.lc', '1.lsigma'."""
    return [
        f"{k}.{name}"
        for k, c in enumerate(components)
        for name in c.get_param_names()
    ]


def set_params(components: Sequence[Parametrised], theta) -> None:
    """
    Split theta and hand each component its slice.

    The total length is checked first, so a wrong-sized vector leaves
    every component untouched.
    """
    theta = as_param_vector("components", theta, num_params(*components))
    start = 0
    for c in components:
        n = c.num_params()
        c.set_params(theta[start:start + n])
        start += n


def with_params(component, theta):
    """
    Copy of `component` carrying log-parameters `theta`; the original is untouched.

    Works with traced arrays, so it can sit inside `jax.jit` or `jax.grad`.
    Priors are carried over; a bare pytree rebuild starts with none.
    """
    leaves, treedef = tree_flatten(component)
    clone = tree_unflatten(treedef, leaves)
    clone.priors = list(component.priors)
    clone.set_params(theta)
    return clone


__all__ = [
    "as_param_vector",
    "num_params",
    "get_params",
    "get_param_names",
    "set_params",
    "with_params",
]
