# gapjax/core/typing.py
from __future__ import annotations
from typing import Protocol, Any, Sequence

try:
    from jax import Array as JaxArray
except Exception:
    JaxArray = Any  # Fallback type for older JAX
Array = JaxArray


class Parametrised(Protocol):
    """
    Uniform log-parameter interface shared by kernels and likelihoods.

    Optimisers must only talk to components through these four methods.
    """

    def get_params(self) -> Array:
        ...

    def set_params(self, hyp: Sequence[float] | Array) -> None:
        ...

    def num_params(self) -> int:
        ...

    def get_param_names(self) -> list[str]:
        ...
