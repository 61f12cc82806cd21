# gapjax/gp/likelihoods/poisson.py
import jax.numpy as jnp
import jax.scipy.special as jsp
from jax.tree_util import register_pytree_node_class

from .base import Likelihood


@register_pytree_node_class
class PoissonLikelihood(Likelihood):
    """
    Poisson likelihood with log link:
        p(y = k | f) = rate^k exp(-rate) / k!,  rate = exp(f)

    y are non-negative integer counts. There are no free parameters.
    """

    def __init__(self):
        super().__init__()

    def get_params(self):
        return jnp.zeros((0,))

    def _set_params(self, hyp):
        pass

    def log_density(self, f, y):
        f, y = self._check_pair(f, y)
        return y * f - jnp.exp(f) - jsp.gammaln(1.0 + y)

    def dlog_density_df(self, f, y):
        f, y = self._check_pair(f, y)
        return y - jnp.exp(f)

    def mean(self, f):
        return jnp.exp(f)

    def variance(self, f):
        return jnp.exp(f)

    def predict_obs(self, fmean, fvar):
        """
        Moments of y when the log-rate is N(fmean, fvar).

        The rate is log-normal, so
            E[y]   = exp(m + v/2)
            Var[y] = E[rate] + Var[rate] = exp(m + v/2) + (exp(v) - 1) exp(2m + v)
        """
        fmean, fvar = self._check_pair(fmean, fvar, names=("fmean", "fvar"))
        mean = jnp.exp(fmean + 0.5 * fvar)
        var = mean + jnp.expm1(fvar) * jnp.exp(2.0 * fmean + fvar)
        return mean, var

    # ---- pytree protocol ----
    def tree_flatten(self):
        return (), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        return cls()
