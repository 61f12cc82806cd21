# gapjax/errors.py
"""
Exceptions raised by kernels and likelihoods.

Both derive from ValueError so callers that only guard against bad
arguments keep working.
"""


class ParameterCountError(ValueError):
    """A parameter vector does not have exactly `num_params()` entries."""

    def __init__(self, owner: str, expected: int, got: int):
        self.owner = owner
        self.expected = expected
        self.got = got
        super().__init__(
            f"{owner} has {expected} free parameter(s), got a vector of length {got}."
        )


class DimensionMismatch(ValueError):
    """Array arguments have incompatible lengths or shapes."""


__all__ = ["ParameterCountError", "DimensionMismatch"]
