r"""Integrated observables of semi-inclusive production.

A parametrization implements the invariant cross-section
:math:`E\,d^3\sigma/d^3p` through :meth:`InclusiveProduction.d3sigma_d3p`. All other
observables follow by numerical integration with :func:`.integrate`, using

.. math::
    \frac{d^2\sigma}{dt\,dM^2} = \frac{\pi}{s - m_p^2}\,E\frac{d^3\sigma}{d^3p}.

Integrals that do not converge raise an `.IntegrationError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from photoamp.inclusive.kinematics import InclusiveKinematics
from photoamp.integrate import integrate


class InclusiveProduction(ABC):
    """Base class for invariant cross-sections and their integrals.

    Args:
        produced_mass: Mass of the observed particle.
        identifier: Free label of this parametrization.

    By default, the third argument :code:`mm` of :meth:`d3sigma_d3p` is the missing
    mass squared :math:`M^2`. After :code:`set_tx(True)`, it is Feynman-:math:`x`.
    """

    def __init__(self, produced_mass: float, identifier: str = "") -> None:
        self.kinematics = InclusiveKinematics(produced_mass)
        self.identifier = identifier
        self.use_tx = False

    def set_tx(self, use_tx: bool) -> None:
        self.use_tx = use_tx

    @abstractmethod
    def d3sigma_d3p(self, s: float, t: float, mm: float) -> float:
        """Invariant cross-section :math:`E\\,d^3\\sigma/d^3p`."""

    def invariant_xsection(self, s: float, t: float, mm: float) -> float:
        return self.d3sigma_d3p(s, t, mm)

    def d2sigma_dtdm2(self, s: float, t: float, m2: float) -> float:
        """Double-differential cross-section in :math:`t` and :math:`M^2`."""
        mm = self.kinematics.x_from_m2(s, m2) if self.use_tx else m2
        jacobian = np.pi / (s - self.kinematics.target_mass**2)
        return jacobian * self.d3sigma_d3p(s, t, mm)

    def dsigma_dt(self, s: float, t: float) -> float:
        """Integrate over :math:`M^2` at fixed :math:`t`."""
        kin = self.kinematics
        return integrate(
            lambda m2: self.d2sigma_dtdm2(s, t, m2),
            kin.min_m2,
            kin.m2_max_at_t(s, t),
        )

    def dsigma_dm2(self, s: float, m2: float) -> float:
        """Integrate over :math:`t` at fixed :math:`M^2`."""
        t_lower, t_upper = self.kinematics.t_bounds(s, m2)
        return integrate(lambda t: self.d2sigma_dtdm2(s, t, m2), t_lower, t_upper)

    def dsigma_dx(self, s: float, x: float) -> float:
        """Distribution in Feynman-:math:`x`, with :math:`dM^2 = s\\,dx`."""
        m2 = self.kinematics.m2_from_x(s, x)
        return s * self.dsigma_dm2(s, m2)

    def dsigma_dy2(self, s: float, y2: float) -> float:
        r"""Distribution in transverse momentum squared :math:`y^2 = p_T^2`.

        Integrates the invariant cross-section over the longitudinal momentum,
        :math:`d\sigma/dp_T^2 = \int dp_L\,\pi/E\;E\,d^3\sigma/d^3p`.
        """
        kin = self.kinematics
        if kin.m2_max_at_pt2(s, y2) <= kin.min_m2:
            return 0.0
        max_energy = kin.produced_energy(s, kin.min_m2)
        pl_max = np.sqrt(max(max_energy**2 - kin.produced_mass2 - y2, 0.0))
        k = kin.beam_momentum(s)

        def integrand(pl: float) -> float:
            energy = np.sqrt(kin.produced_mass2 + y2 + pl**2)
            m2 = s + kin.produced_mass2 - 2 * np.sqrt(s) * energy
            t = kin.produced_mass2 - 2 * k * (energy - pl)
            mm = kin.x_from_m2(s, m2) if self.use_tx else m2
            return np.pi / energy * self.d3sigma_d3p(s, t, mm)

        return integrate(integrand, -pl_max, pl_max)

    def integrated_xsection(self, s: float) -> float:
        """Integrate :meth:`dsigma_dm2` over the full missing-mass range."""
        kin = self.kinematics
        return integrate(
            lambda m2: self.dsigma_dm2(s, m2), kin.min_m2, kin.max_m2(s), epsrel=1e-4
        )
