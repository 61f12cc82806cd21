# gapjax/inference/base.py
from __future__ import annotations

from typing import Protocol, runtime_checkable, Any, Callable


@runtime_checkable
class InferenceMethod(Protocol):
    """
    Protocol for hyperparameter inference methods.

    Design principles
    -----------------
    - A method consumes an energy over the flat log-parameter vector and a
      sequence of components (kernels, likelihoods).
    - It MUST talk to components only through `get_params`, `set_params`
      and `num_params`; no per-type code.
    - It MUST treat the energy as a black box.
    """

    def run(self, energy: Callable, components: Any, *args, **kwargs) -> Any:
        ...
