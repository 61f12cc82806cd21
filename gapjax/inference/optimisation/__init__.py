# gapjax/inference/optimisation/__init__.py
from .typeii import TypeII, TypeIICFG, TypeIIRun
from .objectives import make_likelihood_objective, make_likelihood_energy

__all__ = [
    "TypeII",
    "TypeIICFG",
    "TypeIIRun",
    "make_likelihood_objective",
    "make_likelihood_energy",
]
