# gapjax/inference/__init__.py
from .base import InferenceMethod
from .optimisation import TypeII, TypeIICFG, TypeIIRun

__all__ = [
    "InferenceMethod",
    "TypeII",
    "TypeIICFG",
    "TypeIIRun",
]
