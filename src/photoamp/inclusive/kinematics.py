r"""Kinematics of semi-inclusive photoproduction :math:`\gamma p \to X + Y`.

The unobserved system has invariant mass squared :math:`M^2`. The observed particle
:math:`X` is described either by :math:`(t, M^2)` or, at high energies, by
:math:`(t, x)` with Feynman-:math:`x` approximated as :math:`x = 1 - M^2/s`.
"""

from __future__ import annotations

import numpy as np
from attrs import field, frozen
from attrs.validators import ge

from photoamp.constants import M_PION, M_PROTON
from photoamp.dynamics.phasespace import kallen


@frozen
class InclusiveKinematics:
    """Phase-space boundaries for a produced particle of given mass.

    >>> kinematics = InclusiveKinematics(produced_mass=1.2295)
    >>> round(kinematics.x_from_m2(s=20.0, m2=4.0), 12)
    0.8
    """

    produced_mass: float = field(converter=float, validator=ge(0))
    target_mass: float = field(default=M_PROTON, converter=float, validator=ge(0))

    @property
    def produced_mass2(self) -> float:
        return self.produced_mass**2

    @property
    def min_m2(self) -> float:
        """Lowest missing mass squared, the :math:`\\pi N` threshold."""
        return (self.target_mass + M_PION) ** 2

    def max_m2(self, s: float) -> float:
        return (np.sqrt(s) - self.produced_mass) ** 2

    def beam_momentum(self, s: float) -> float:
        """Photon momentum in the centre-of-mass frame."""
        return (s - self.target_mass**2) / (2 * np.sqrt(s))

    def produced_energy(self, s: float, m2: float) -> float:
        return (s + self.produced_mass2 - m2) / (2 * np.sqrt(s))

    def produced_momentum(self, s: float, m2: float) -> float:
        lam = kallen(s, self.produced_mass2, m2)
        return np.sqrt(max(lam, 0.0)) / (2 * np.sqrt(s))

    def t_man(self, s: float, m2: float, cos_theta: float) -> float:
        k = self.beam_momentum(s)
        energy = self.produced_energy(s, m2)
        momentum = self.produced_momentum(s, m2)
        return self.produced_mass2 - 2 * k * (energy - momentum * cos_theta)

    def t_bounds(self, s: float, m2: float) -> tuple[float, float]:
        """Physical :math:`t` range at fixed :math:`M^2`, as :code:`(lower, upper)`."""
        return self.t_man(s, m2, -1.0), self.t_man(s, m2, +1.0)

    def t_min(self, s: float, m2: float) -> float:
        """Forward value of :math:`t`, the upper end of :meth:`t_bounds`."""
        return self.t_man(s, m2, +1.0)

    def x_from_m2(self, s: float, m2: float) -> float:
        return 1 - m2 / s

    def m2_from_x(self, s: float, x: float) -> float:
        return s * (1 - x)

    def m2_max_at_t(self, s: float, t: float) -> float:
        """Largest :math:`M^2` that is kinematically reachable at fixed :math:`t`.

        At fixed :math:`t`, the energy of the produced particle is lowest in the
        forward direction, which gives the largest missing mass.
        """
        a = (self.produced_mass2 - t) / (2 * self.beam_momentum(s))
        min_energy = (a**2 + self.produced_mass2) / (2 * a)
        m2 = s + self.produced_mass2 - 2 * np.sqrt(s) * min_energy
        return min(self.max_m2(s), m2)

    def m2_max_at_pt2(self, s: float, pt2: float) -> float:
        """Largest :math:`M^2` at fixed transverse momentum squared."""
        return s + self.produced_mass2 - 2 * np.sqrt(s) * np.sqrt(
            self.produced_mass2 + pt2
        )
