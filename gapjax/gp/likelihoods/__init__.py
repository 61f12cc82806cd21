# gapjax/gp/likelihoods/__init__.py

from .base import register, get, Likelihood

from .gaussian import GaussianLikelihood
from .poisson import PoissonLikelihood

# --------------------------------------------------
# Registry
# --------------------------------------------------
register("gaussian", GaussianLikelihood)
register("poisson", PoissonLikelihood)

__all__ = [
    "get",
    "register",
    "Likelihood",
    "GaussianLikelihood",
    "PoissonLikelihood",
]
