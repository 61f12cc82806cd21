import jax.numpy as jnp
import pytest

from gapjax.errors import ParameterCountError
from gapjax.gp.kernels import Polynomial
from gapjax.gp.likelihoods import GaussianLikelihood, PoissonLikelihood
from gapjax.gp.params import get_param_names, get_params, num_params, set_params, with_params


def test_flat_vector_layout():
    k = Polynomial(0.1, 0.2, 2)
    lik = GaussianLikelihood(-0.3)
    pois = PoissonLikelihood()
    assert num_params(k, lik, pois) == 3
    assert jnp.allclose(get_params(k, lik, pois), jnp.array([0.1, 0.2, -0.3]))
    assert get_param_names(k, lik, pois) == ["0.lc", "0.lsigma", "1.lsigma"]
    assert get_params().shape == (0,)


def test_set_params_splits_vector():
    k = Polynomial()
    lik = GaussianLikelihood()
    set_params([k, lik], jnp.array([0.5, -0.5, 1.5]))
    assert jnp.allclose(k.get_params(), jnp.array([0.5, -0.5]))
    assert jnp.allclose(lik.get_params(), jnp.array([1.5]))


def test_set_params_wrong_total_leaves_components_untouched():
    k = Polynomial(0.1, 0.2, 2)
    lik = GaussianLikelihood(-0.3)
    with pytest.raises(ParameterCountError):
        set_params([k, lik], jnp.array([0.0, 0.0]))
    assert jnp.allclose(k.get_params(), jnp.array([0.1, 0.2]))
    assert jnp.allclose(lik.get_params(), jnp.array([-0.3]))


def test_with_params_copies():
    k = Polynomial(0.1, 0.2, 3)
    k2 = with_params(k, jnp.array([1.0, 2.0]))
    assert k2 is not k
    assert k2.degree == 3
    assert jnp.allclose(k2.get_params(), jnp.array([1.0, 2.0]))
    assert jnp.allclose(k.get_params(), jnp.array([0.1, 0.2]))


def test_with_params_keeps_priors():
    k = Polynomial()
    k.priors.append("p")
    k2 = with_params(k, jnp.array([1.0, 2.0]))
    assert k2.priors == ["p"]
    k2.priors.append("q")
    assert k.priors == ["p"]
