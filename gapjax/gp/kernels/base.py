# gapjax/gp/kernels/base.py
from __future__ import annotations

import operator
from typing import Optional

import jax.numpy as jnp

from ...errors import DimensionMismatch
from ..params import as_param_vector
from .data import DataKind, KernelData, as_design_matrix, build_kernel_data, inner_products, squared_distances

_KERNEL_REGISTRY = {}


def register(name: str, obj):
    if name in _KERNEL_REGISTRY:
        raise KeyError(f"Kernel '{name}' already registered.")
    _KERNEL_REGISTRY[name] = obj


def get(name: str):
    try:
        return _KERNEL_REGISTRY[name]
    except KeyError:
        raise KeyError(
            f"Unknown kernel '{name}'. "
            f"Available: {list(_KERNEL_REGISTRY.keys())}"
        )


def _concrete_index(idx):
    # None for traced indices, which cannot be range-checked here
    try:
        return operator.index(idx)
    except TypeError:
        return None


class Kernel:
    """
    Base class for covariance functions.

    Design principles
    -----------------
    - Every positive hyperparameter is exposed in log-space through
      `get_params` / `set_params`; natural parameters never leave the object.
    - A kernel is a function of ONE pairwise statistic (inner product or
      squared distance, see `data_kind`). Subclasses implement `_cov(stat)`
      and `_dk_dtheta(stat, p)` once; the raw-input path and the cached
      path differ only in how `stat` is obtained.
    - Indices are 0-based. Design matrices are (N, D), rows are observations.
    """

    data_kind: DataKind = DataKind.INNER_PRODUCT
    param_names: tuple[str, ...] = ()

    def __init__(self):
        # prior specifications, interpreted elsewhere
        self.priors = []

    # ---- parameter interface ----
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

    # ---- closed-form pieces, implemented by subclasses ----
    def _cov(self, stat):
        raise NotImplementedError

    def _dk_dtheta(self, stat, p: int):
        raise NotImplementedError

    # ---- pairwise statistics ----
    def kernel_data(self, X) -> KernelData:
        return build_kernel_data(X, self.data_kind)

    def kernel_data_key(self, X=None) -> str:
        """Tag used by callers to decide whether a cached entry can be reused."""
        return self.data_kind.value

    def _pair_stat(self, x, y):
        if self.data_kind is DataKind.INNER_PRODUCT:
            return jnp.dot(x, y)
        return jnp.sum((x - y) ** 2)

    def _self_stat(self, X):
        if self.data_kind is DataKind.INNER_PRODUCT:
            return inner_products(X)
        return squared_distances(X)

    def _cross_stat(self, X, Z):
        G = X @ Z.T
        if self.data_kind is DataKind.INNER_PRODUCT:
            return G
        x2 = jnp.sum(X * X, axis=1)[:, None]
        z2 = jnp.sum(Z * Z, axis=1)[None, :]
        return jnp.maximum(x2 + z2 - 2.0 * G, 0.0)

    def _data_stat(self, data: KernelData, N: int):
        if data.kind is not self.data_kind:
            raise TypeError(
                f"{type(self).__name__} needs '{self.data_kind.value}' data, "
                f"got '{data.kind.value}'."
            )
        if data.num_obs != N:
            raise DimensionMismatch(
                f"Cached data covers {data.num_obs} observations, design matrix has {N}."
            )
        if data.kind is DataKind.INNER_PRODUCT:
            return data.XtX
        return data.R2

    def _check_param_index(self, p: int) -> None:
        if not 0 <= p < self.num_params():
            raise IndexError(
                f"{type(self).__name__} has {self.num_params()} parameters, got index {p}."
            )

    # ---- public evaluation ----
    def cov(self, x, y) -> jnp.ndarray:
        """Covariance of two input vectors of equal length."""
        x = jnp.atleast_1d(jnp.asarray(x))
        y = jnp.atleast_1d(jnp.asarray(y))
        if x.ndim != 1 or x.shape != y.shape:
            raise DimensionMismatch(
                f"cov expects two vectors of equal length, got shapes {x.shape} and {y.shape}."
            )
        return self._cov(self._pair_stat(x, y))

    def cov_matrix(self, X, Z=None, data: Optional[KernelData] = None) -> jnp.ndarray:
        """
        Covariance matrix.

        Args:
            X: (N, D) inputs
            Z: optional (M, D) second input set; cross-covariance is never cached
            data: optional cached statistics of X (self-covariance only)

        Returns:
            (N, N) symmetric matrix, or (N, M) if Z is given
        """
        X = as_design_matrix(X)
        if Z is not None:
            if data is not None:
                raise ValueError("Cached kernel data only applies to the self-covariance of X.")
            Z = as_design_matrix(Z)
            if Z.shape[1] != X.shape[1]:
                raise DimensionMismatch(
                    f"Input dimensions differ: X has {X.shape[1]}, Z has {Z.shape[1]}."
                )
            return self._cov(self._cross_stat(X, Z))
        if data is None:
            return self._cov(self._self_stat(X))
        return self._cov(self._data_stat(data, X.shape[0]))

    def dKij_dtheta(self, X, i: int, j: int, p: int, data: Optional[KernelData] = None,
                    dim: Optional[int] = None) -> jnp.ndarray:
        """
        Derivative of K[i, j] with respect to the p-th log-parameter.

        X may be passed flattened (length N*dim) together with `dim`.
        """
        self._check_param_index(p)
        X = jnp.asarray(X)
        if X.ndim == 1 and dim is not None:
            if X.shape[0] % dim:
                raise DimensionMismatch(f"Flattened input of length {X.shape[0]} is not a multiple of dim={dim}.")
            X = X.reshape(-1, dim)
        else:
            X = as_design_matrix(X)
        N = X.shape[0]
        for idx in (i, j):
            idx = _concrete_index(idx)
            if idx is not None and not -N <= idx < N:
                raise IndexError(f"Observation index {idx} out of range for {N} observations.")
        if data is None:
            stat = self._pair_stat(X[i], X[j])
        else:
            stat = self._data_stat(data, N)[i, j]
        return self._dk_dtheta(stat, p)

    def grad_stack(self, X, data: Optional[KernelData] = None) -> jnp.ndarray:
        """
        Gradient tensor of the covariance matrix, (P, N, N).

        Entry [p, i, j] equals dKij_dtheta(X, i, j, p); every pair is
        evaluated at once.
        """
        X = as_design_matrix(X)
        stat = self._self_stat(X) if data is None else self._data_stat(data, X.shape[0])
        return jnp.stack([self._dk_dtheta(stat, p) for p in range(self.num_params())])
