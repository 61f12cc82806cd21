# gapjax/gp/kernels/polynomial.py
from __future__ import annotations

import jax.numpy as jnp
import numpy as np
from jax.tree_util import register_pytree_node_class

from .base import Kernel
from .data import DataKind


@register_pytree_node_class
class Polynomial(Kernel):
    """
    Polynomial kernel:
        k(x, x') = sigma^2 (x^T x' + c)^d

    Args:
        lc: log of the offset c
        lsigma: log of the signal standard deviation sigma
        degree: degree d, a non-negative int held fixed (never optimised)

    Only the inner product enters, so the kernel reuses InnerProductData.
    d is an int, so (c + x^T x')^d stays real where the base is negative.
    """

    data_kind = DataKind.INNER_PRODUCT
    param_names = ("lc", "lsigma")

    def __init__(self, lc=0.0, lsigma=0.0, degree: int = 2):
        super().__init__()
        if isinstance(degree, bool) or not isinstance(degree, (int, np.integer)):
            raise TypeError(f"Polynomial degree must be an int, got {type(degree).__name__}.")
        if degree < 0:
            raise ValueError(f"Polynomial degree must be non-negative, got {degree}.")
        self.c = jnp.exp(lc)
        self.sigma2 = jnp.exp(2.0 * lsigma)
        self.degree = int(degree)

    def get_params(self) -> jnp.ndarray:
        return jnp.stack([jnp.log(self.c), 0.5 * jnp.log(self.sigma2)])

    def _set_params(self, hyp):
        self.c = jnp.exp(hyp[0])
        self.sigma2 = jnp.exp(2.0 * hyp[1])

    def _cov(self, xTy):
        return self.sigma2 * (self.c + xTy) ** self.degree

    def dk_dlc(self, xTy):
        """d k / d log c = c * d k / d c."""
        if self.degree == 0:
            # (c + t)^(-1) is never formed
            return jnp.zeros_like(self._cov(xTy))
        return self.c * self.degree * self.sigma2 * (self.c + xTy) ** (self.degree - 1)

    def dk_dlsigma(self, xTy):
        return 2.0 * self._cov(xTy)

    def _dk_dtheta(self, xTy, p: int):
        if p == 0:
            return self.dk_dlc(xTy)
        return self.dk_dlsigma(xTy)

    # ---- pytree protocol ----
    def tree_flatten(self):
        return (self.c, self.sigma2), (self.degree,)

    @classmethod
    def tree_unflatten(cls, aux, children):
        # priors are not pytree data; with_params copies them onto clones
        obj = object.__new__(cls)
        Kernel.__init__(obj)
        obj.c, obj.sigma2 = children
        (obj.degree,) = aux
        return obj
