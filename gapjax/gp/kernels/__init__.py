# gapjax/gp/kernels/__init__.py

from .base import register, get, Kernel

# pairwise statistics
from .data import (
    DataKind,
    InnerProductData,
    DistanceData,
    PairwiseStatisticsCache,
    build_kernel_data,
)

# primitive kernels
from .polynomial import Polynomial

# --------------------------------------------------
# Registry
# --------------------------------------------------
register("polynomial", Polynomial)

__all__ = [
    "get",
    "register",
    "Kernel",
    # statistics
    "DataKind",
    "InnerProductData",
    "DistanceData",
    "PairwiseStatisticsCache",
    "build_kernel_data",
    # primitives
    "Polynomial",
]
