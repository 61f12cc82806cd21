# gapjax/inference/optimisation/typeii.py
"""
Type-II optimisation (ML-II and MAP-II) over log-parameters.

The optimiser finds log-parameters that minimise an energy
    theta* = argmin_theta E(theta)

where theta is the concatenated `get_params()` of the given components
(kernel, likelihood, ...). Log-space keeps the search unconstrained, so
no clamping is needed.

The energy either returns a scalar (gradients come from `jax.value_and_grad`)
or, with `analytic_grad=True`, a `(value, grad)` pair built from the
closed-form derivatives of the kernels and likelihoods.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

import jax
import jax.numpy as jnp
import optax
from jax import lax

from ..base import InferenceMethod
from ...gp.params import get_params, set_params


@dataclass(frozen=True)
class TypeIICFG:
    """Configuration for Type-II optimisation (ML-II or MAP-II)."""
    steps: int = 200
    lr: float = 1e-2
    optimizer: Literal["sgd", "adam", "rmsprop"] = "adam"
    clip_grad_norm: Optional[float] = None
    jit: bool = True
    analytic_grad: bool = False  # energy returns (value, grad) itself


@dataclass
class TypeIIRun:
    """Type-II run results."""
    theta: jnp.ndarray  # final log-parameters
    energy_trace: jnp.ndarray  # shape [steps]
    grad_norm_trace: jnp.ndarray  # shape [steps]


def _as_components(components) -> list:
    if isinstance(components, (list, tuple)):
        return list(components)
    return [components]


class TypeII(InferenceMethod):
    """
    Type-II optimiser (for ML-II and MAP-II).

    Examples:
        >>> lik = GaussianLikelihood(0.0)
        >>> energy = make_likelihood_objective(lik, f, y)
        >>> method = TypeII(TypeIICFG(steps=200, lr=1e-2, analytic_grad=True))
        >>> result = method.run(energy, lik)
        >>> # lik now holds the optimum
    """

    def __init__(self, cfg: TypeIICFG = TypeIICFG()):
        self.cfg = cfg

    def _get_optimizer(self, lr: float):
        """Get optimizer based on configuration."""
        if self.cfg.optimizer == "sgd":
            return optax.sgd(lr)
        elif self.cfg.optimizer == "adam":
            return optax.adam(lr)
        elif self.cfg.optimizer == "rmsprop":
            return optax.rmsprop(lr)
        else:
            raise ValueError(f"Unknown optimizer: {self.cfg.optimizer}")

    def run(
        self,
        energy: Callable,
        components: Any,
        *,
        energy_args=(),
        energy_kwargs=None,
    ) -> TypeIIRun:
        """
        Run Type-II optimisation and write the optimum back into the components.

        Args:
            energy: E(theta, *energy_args, **energy_kwargs)
            components: a component or a sequence of them, in theta order
            energy_args: Additional arguments for energy
            energy_kwargs: Additional keyword arguments for energy

        Returns:
            TypeIIRun with final theta, energy trace, and grad norm trace
        """
        if energy_kwargs is None:
            energy_kwargs = {}

        cfg = self.cfg
        steps = cfg.steps
        clip_grad_norm = cfg.clip_grad_norm
        components = _as_components(components)

        def energy_fn(theta):
            return energy(theta, *energy_args, **energy_kwargs)

        if cfg.analytic_grad:
            value_and_grad_fn = energy_fn
        else:
            value_and_grad_fn = jax.value_and_grad(energy_fn)

        optimizer = self._get_optimizer(cfg.lr)
        theta_init = get_params(*components)
        opt_state = optimizer.init(theta_init)

        def clip_grads(grad):
            if clip_grad_norm is None:
                return grad
            norm = jnp.linalg.norm(grad)
            factor = jnp.minimum(1.0, clip_grad_norm / (norm + 1e-16))
            return grad * factor

        def step(carry, _):
            theta, opt_state = carry
            val, grad = value_and_grad_fn(theta)

            # non-finite steps must not poison the optimiser state
            val = jnp.where(jnp.isfinite(val), val, jnp.inf)
            grad = jnp.where(jnp.isfinite(grad), grad, 0.0)

            grad = clip_grads(grad)
            grad_norm = jnp.linalg.norm(grad)

            updates, opt_state = optimizer.update(grad, opt_state, params=theta)
            theta = optax.apply_updates(theta, updates)
            return (theta, opt_state), (val, grad_norm)

        if cfg.jit:
            (theta_final, _), (energy_trace, grad_norm_trace) = lax.scan(
                step, (theta_init, opt_state), None, length=steps
            )
        else:
            carry = (theta_init, opt_state)
            etrace, gtrace = [], []
            for _ in range(steps):
                carry, (val, grad_norm) = step(carry, None)
                etrace.append(val)
                gtrace.append(grad_norm)
            theta_final = carry[0]
            energy_trace = jnp.asarray(etrace) if etrace else jnp.zeros(0)
            grad_norm_trace = jnp.asarray(gtrace) if gtrace else jnp.zeros(0)

        if steps > 0 and not bool(jnp.isfinite(energy_trace[-1])):
            warnings.warn(
                "Type-II optimisation ended on a non-finite energy; "
                "check the parameter domain of the kernel/likelihood.",
                RuntimeWarning,
            )

        set_params(components, theta_final)
        return TypeIIRun(theta=theta_final, energy_trace=energy_trace, grad_norm_trace=grad_norm_trace)
