"""Typed errors raised while configuring and evaluating amplitude models.

Configuration errors derive from `ValueError`, so that callers can decide whether
to abort or to retry with corrected input. Numerical singularities that have a
defined sentinel value are *not* reported through exceptions.
"""


class ParameterCountError(ValueError):
    """The number of parameter values does not match the declared count."""


class QuantumNumberError(ValueError):
    """A spin-parity combination is not supported by the amplitude model."""


class RankMismatchError(ValueError):
    """Two Lorentz tensors of different rank cannot be contracted."""


class IntegrationError(RuntimeError):
    """Adaptive numerical integration did not converge."""
