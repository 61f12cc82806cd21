# gapjax/gp/kernels/data.py
"""
Pairwise statistics of a design matrix.

Kernels that only depend on inner products (linear, polynomial) share one
statistic, stationary kernels share another. Computing it once per design
matrix and reusing it across every kernel evaluation of an optimisation run
removes the O(N^2 D) term from each step.

Design principle:
  The cache belongs to the caller (the GP model). It is immutable once
  built and is never written to by kernel code.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

import jax.numpy as jnp
from jax.tree_util import register_pytree_node_class

from ...errors import DimensionMismatch


class DataKind(str, Enum):
    """Shape of pairwise statistic a kernel family needs."""
    INNER_PRODUCT = "LinIsoData"
    DISTANCE = "IsoData"


def as_design_matrix(X) -> jnp.ndarray:
    """
    Return X as an (N, D) array, rows are observations.

    A 1-D input is read as N scalar observations.
    """
    X = jnp.asarray(X)
    if X.ndim == 1:
        X = X[:, None]
    if X.ndim != 2:
        raise DimensionMismatch(f"Design matrix must be (N, D), got shape {X.shape}.")
    return X


def _mirror_upper(A: jnp.ndarray) -> jnp.ndarray:
    # copy the upper triangle onto the lower one
    return jnp.triu(A) + jnp.triu(A, 1).T


def inner_products(X) -> jnp.ndarray:
    """Symmetric (N, N) matrix of x_i . x_j."""
    X = as_design_matrix(X)
    return _mirror_upper(X @ X.T)


def squared_distances(X) -> jnp.ndarray:
    """Symmetric (N, N) matrix of |x_i - x_j|^2 with an exact zero diagonal."""
    G = inner_products(X)
    g = jnp.diag(G)
    return jnp.maximum(g[:, None] + g[None, :] - 2.0 * G, 0.0)


@register_pytree_node_class
@dataclass(frozen=True)
class InnerProductData:
    """Cached inner products XtX[i, j] = x_i . x_j of an (N, D) design matrix."""
    XtX: jnp.ndarray  # (N, N)

    kind: ClassVar[DataKind] = DataKind.INNER_PRODUCT

    @property
    def num_obs(self) -> int:
        return self.XtX.shape[0]

    def tree_flatten(self):
        return (self.XtX,), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        return cls(*children)


@register_pytree_node_class
@dataclass(frozen=True)
class DistanceData:
    """Cached squared distances R2[i, j] = |x_i - x_j|^2."""
    R2: jnp.ndarray  # (N, N)

    kind: ClassVar[DataKind] = DataKind.DISTANCE

    @property
    def num_obs(self) -> int:
        return self.R2.shape[0]

    def tree_flatten(self):
        return (self.R2,), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        return cls(*children)


KernelData = Union[InnerProductData, DistanceData]


def build_kernel_data(X, kind: Union[DataKind, str]) -> KernelData:
    """
    Compute the pairwise statistic of the given kind for X.

    Args:
        X: (N, D) design matrix
        kind: DataKind or its string value

    Returns:
        InnerProductData or DistanceData
    """
    kind = DataKind(kind)
    if kind is DataKind.INNER_PRODUCT:
        return InnerProductData(inner_products(X))
    return DistanceData(squared_distances(X))


class PairwiseStatisticsCache:
    """
    Caller-owned store of pairwise statistics for one design matrix.

    Entries are keyed by DataKind, so kernels of the same family share one
    entry. Rebinding to a different design matrix object drops all entries.
    There is no locking: build first, then read from as many places as needed.

    Example:
        >>> cache = PairwiseStatisticsCache(X)
        >>> K = kernel.cov_matrix(X, data=cache.get(kernel))
    """

    def __init__(self, X):
        self._source = X
        self.X = as_design_matrix(X)
        self._entries: dict[DataKind, KernelData] = {}

    def rebind(self, X) -> bool:
        """
        Point the cache at X. Returns True if the entries were dropped.
        """
        if X is self._source:
            return False
        self._source = X
        self.X = as_design_matrix(X)
        self._entries = {}
        return True

    def get(self, kernel_or_kind) -> KernelData:
        kind = getattr(kernel_or_kind, "data_kind", kernel_or_kind)
        kind = DataKind(kind)
        if kind not in self._entries:
            self._entries[kind] = build_kernel_data(self.X, kind)
        return self._entries[kind]

    def keys(self) -> list[DataKind]:
        return list(self._entries.keys())

    def __contains__(self, kind) -> bool:
        try:
            return DataKind(kind) in self._entries
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._entries)


__all__ = [
    "DataKind",
    "InnerProductData",
    "DistanceData",
    "KernelData",
    "PairwiseStatisticsCache",
    "as_design_matrix",
    "build_kernel_data",
    "inner_products",
    "squared_distances",
]
