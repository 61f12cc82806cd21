import jax.numpy as jnp
import pytest

from gapjax.gp.kernels import Polynomial
from gapjax.gp.likelihoods import GaussianLikelihood, PoissonLikelihood
from gapjax.inference.optimisation import (
    TypeII,
    TypeIICFG,
    make_likelihood_energy,
    make_likelihood_objective,
)

N = 40
f = jnp.linspace(-1.0, 1.0, N)
r = 0.5 * jnp.sin(3.0 * jnp.arange(N))
y = f + r
# maximum-likelihood noise level of the residuals
target = 0.5 * jnp.log(jnp.mean(r ** 2))


def test_objective_gradient_matches_energy():
    lik = GaussianLikelihood(0.2)
    obj = make_likelihood_objective(lik, f, y)
    energy = make_likelihood_energy(lik, f, y)
    theta = jnp.array([0.2])
    value, grad = obj(theta)
    h = 1e-6
    fd = (energy(theta + h) - energy(theta - h)) / (2 * h)
    assert jnp.allclose(value, energy(theta))
    assert grad.shape == (1,)
    assert jnp.allclose(grad[0], fd, rtol=1e-5)
    # objective must not mutate the likelihood
    assert jnp.allclose(lik.get_params(), theta)


@pytest.mark.parametrize("jit", [True, False])
def test_gaussian_noise_analytic(jit):
    lik = GaussianLikelihood(0.0)
    method = TypeII(TypeIICFG(steps=200, lr=1e-2, optimizer="sgd", jit=jit, analytic_grad=True))
    result = method.run(make_likelihood_objective(lik, f, y), lik)
    assert result.energy_trace.shape == (200,)
    assert result.grad_norm_trace.shape == (200,)
    assert jnp.allclose(result.theta, target, atol=1e-8)
    assert jnp.allclose(lik.get_params(), target, atol=1e-8)
    assert jnp.all(jnp.diff(result.energy_trace) <= 1e-10)


def test_gaussian_noise_autodiff():
    lik = GaussianLikelihood(0.0)
    method = TypeII(TypeIICFG(steps=200, lr=1e-2, optimizer="sgd"))
    method.run(make_likelihood_energy(lik, f, y), [lik])
    assert jnp.allclose(lik.get_params(), target, atol=1e-8)


def test_multiple_components():
    k = Polynomial(0.0, 0.0, 2)
    lik = GaussianLikelihood(0.0)
    goal = jnp.array([0.3, -0.7, 1.1])

    def energy(theta):
        return jnp.sum((theta - goal) ** 2)

    method = TypeII(TypeIICFG(steps=200, lr=1e-1, optimizer="sgd"))
    result = method.run(energy, [k, lik])
    assert jnp.allclose(result.theta, goal, atol=1e-8)
    assert jnp.allclose(k.get_params(), goal[:2], atol=1e-8)
    assert jnp.allclose(lik.get_params(), goal[2:], atol=1e-8)


def test_clip_grad_norm():
    lik = GaussianLikelihood(0.0)
    method = TypeII(TypeIICFG(steps=20, lr=1e-2, optimizer="adam", clip_grad_norm=1.0, analytic_grad=True))
    result = method.run(make_likelihood_objective(lik, f, y), lik)
    assert jnp.all(result.grad_norm_trace <= 1.0 + 1e-12)


def test_unknown_optimizer():
    method = TypeII(TypeIICFG(optimizer="lbfgs-b"))
    with pytest.raises(ValueError):
        method.run(lambda th: jnp.sum(th ** 2), GaussianLikelihood())


def test_non_finite_energy_warns():
    lik = GaussianLikelihood(0.0)
    method = TypeII(TypeIICFG(steps=3))
    with pytest.warns(RuntimeWarning):
        method.run(lambda th: jnp.sum(th) * jnp.nan, lik)
    assert jnp.all(jnp.isfinite(lik.get_params()))


def test_parameter_free_likelihood_objective():
    lik = PoissonLikelihood()
    fp = jnp.array([0.0, 1.0])
    yp = jnp.array([2, 1])
    value, grad = make_likelihood_objective(lik, fp, yp)(jnp.zeros(0))
    assert jnp.allclose(value, -jnp.sum(lik.log_density(fp, yp)))
    assert grad.shape == (0,)

    result = TypeII(TypeIICFG(steps=5, analytic_grad=True)).run(make_likelihood_objective(lik, fp, yp), lik)
    assert result.theta.shape == (0,)
    assert jnp.allclose(result.energy_trace, value)
