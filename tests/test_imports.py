def test_imports():
    import gapjax

    from gapjax.errors import ParameterCountError, DimensionMismatch
    from gapjax.gp.kernels.data import PairwiseStatisticsCache
    from gapjax.inference.optimisation import TypeII, TypeIICFG

    # kernels
    from gapjax.gp.kernels import get as get_kernel
    get_kernel("polynomial")

    # likelihoods
    from gapjax.gp.likelihoods import get as get_likelihood
    get_likelihood("gaussian")
    get_likelihood("poisson")
