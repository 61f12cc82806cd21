# gapjax/gp/likelihoods/gaussian.py
import jax.numpy as jnp
from jax.tree_util import register_pytree_node_class

from .base import Likelihood


@register_pytree_node_class
class GaussianLikelihood(Likelihood):
    """
    Gaussian likelihood:
        p(y | f, sigma) = N(y; f, sigma^2)

    Args:
        lsigma: log of the observation noise standard deviation sigma
    """

    param_names = ("lsigma",)

    def __init__(self, lsigma=0.0):
        super().__init__()
        self.sigma = jnp.exp(lsigma)

    def get_params(self):
        return jnp.stack([jnp.log(self.sigma)])

    def _set_params(self, hyp):
        self.sigma = jnp.exp(hyp[0])

    def log_density(self, f, y):
        f, y = self._check_pair(f, y)
        return (
            -0.5 * jnp.log(2.0 * jnp.pi)
            - jnp.log(self.sigma)
            - 0.5 * ((y - f) / self.sigma) ** 2
        )

    def dlog_density_df(self, f, y):
        f, y = self._check_pair(f, y)
        return (y - f) / self.sigma ** 2

    def dlog_density_dtheta(self, f, y):
        """Derivative with respect to log(sigma), one entry per observation."""
        f, y = self._check_pair(f, y)
        return self.sigma * (-1.0 / self.sigma + (y - f) ** 2 / self.sigma ** 3)

    def mean(self, f):
        return jnp.asarray(f)

    def variance(self, f):
        return jnp.ones(jnp.shape(f)) * self.sigma ** 2

    def predict_obs(self, fmean, fvar):
        """Additive noise: the mean is unchanged, sigma^2 is added to the variance."""
        fmean, fvar = self._check_pair(fmean, fvar, names=("fmean", "fvar"))
        return fmean, fvar + self.sigma ** 2

    # ---- pytree protocol ----
    def tree_flatten(self):
        return (self.sigma,), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        # priors are not pytree data; with_params copies them onto clones
        obj = object.__new__(cls)
        Likelihood.__init__(obj)
        (obj.sigma,) = children
        return obj
