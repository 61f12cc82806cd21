# gapjax/core/__init__.py
from .typing import Array, Parametrised

__all__ = [
    "Array",
    "Parametrised",
]
