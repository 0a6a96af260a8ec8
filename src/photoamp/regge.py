"""Regge trajectories of exchanged particles."""

from __future__ import annotations

from typing import Protocol

from attrs import field, frozen
from attrs.validators import in_, instance_of


class Trajectory(Protocol):
    r"""Interface of a Regge trajectory :math:`\alpha(t)`.

    Used by `.PseudoscalarExchange` and `.TripleRegge` when the exchange is
    Reggeized.
    """

    @property
    def signature(self) -> int:
        """Signature :math:`\\pm 1` of the trajectory."""

    @property
    def min_j(self) -> int:
        """Lowest physical spin on the trajectory."""

    def eval(self, t: float) -> complex:
        """Value of :math:`\\alpha(t)`."""

    def slope(self, t: float = 0.0) -> float:
        """Derivative :math:`\\alpha'(t)`."""


@frozen
class LinearTrajectory:
    r"""Linear trajectory :math:`\alpha(t) = \alpha_0 + \alpha' t`.

    >>> rho = LinearTrajectory(signature=-1, intercept=0.5, slope=1.0, min_j=1)
    >>> rho.eval(-0.25)
    (0.25+0j)
    >>> rho.slope()
    1.0
    """

    signature: int = field(validator=in_({-1, +1}))
    intercept: float = field(converter=float)
    _slope: float = field(converter=float)
    min_j: int = field(default=0, validator=instance_of(int))
    name: str = ""

    def eval(self, t: float) -> complex:
        return complex(self.intercept + self._slope * t)

    def slope(self, t: float = 0.0) -> float:
        return self._slope
