r"""Triple-Regge form of semi-inclusive photoproduction.

The exclusive amplitude :math:`\gamma p \to X p` fixes the top vertex and the
exchange. The bottom vertex is replaced by the total cross-section of the exchanged
particle scattering off the proton,

.. math::
    E\frac{d^3\sigma}{d^3p} = \frac{
        \sigma_\mathrm{tot}(M^2)\; g^2(t)\; F^2(t)\; |P(s, t, M^2)|^2\; \hat{s}
    }{(4\pi)^3},

with :math:`\hat{s} = M^2/s` or, in the high-energy approximation, :math:`1 - x`.
"""

from __future__ import annotations

import logging
from typing import Callable, Union

import numpy as np
from scipy.special import gamma

from photoamp.amplitude.core import Amplitude
from photoamp.inclusive.production import InclusiveProduction
from photoamp.inclusive.sigma_total import (
    PDGParameterization,
    SigmaOption,
    TotalCrossSection,
    ZeroCrossSection,
    create_sigma_total,
)

_LOGGER = logging.getLogger(__name__)

SigmaSource = Union[SigmaOption, TotalCrossSection]


class TripleRegge(InclusiveProduction):
    """Triple-Regge parametrization built on an exclusive amplitude.

    Args:
        amplitude: Exclusive amplitude that is referenced (not copied) for its
            couplings, exchange and form factor cutoff.
        identifier: Free label, defaults to the identifier of the amplitude.

    Whether the exchange is Reggeized follows the exclusive amplitude. A Reggeized
    exchange is only defined for :math:`t < 0` and vanishes elsewhere.
    """

    def __init__(self, amplitude: Amplitude, identifier: str = "") -> None:
        super().__init__(
            amplitude.kinematics.meson_mass, identifier or amplitude.identifier
        )
        self.amplitude = amplitude
        self.sigma_total: TotalCrossSection = ZeroCrossSection()
        self._coupling: Callable[[float], float] = _zero_coupling
        self.initialize()

    def initialize(self) -> None:
        """Select top-vertex coupling and default total cross-section."""
        amplitude_type = self.amplitude.amplitude_type
        if amplitude_type == "pseudoscalar_exchange":
            _LOGGER.debug("Using pseudoscalar top-vertex coupling for %s", self)
            self._coupling = self._pseudoscalar_coupling
            self.sigma_total = PDGParameterization(iso=-1)
        else:
            _LOGGER.warning(
                "%s has no inclusive coupling for amplitude type %r, so it will"
                " vanish identically",
                self,
                amplitude_type,
            )
            self._coupling = _zero_coupling
            self.sigma_total = ZeroCrossSection()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"

    def set_sigma_total(self, sigma: SigmaSource) -> None:
        """Replace the total cross-section of the bottom vertex."""
        if isinstance(sigma, SigmaOption):
            sigma = create_sigma_total(sigma)
        _LOGGER.debug("Replacing total cross-section of %s with %s", self, sigma)
        self.sigma_total = sigma

    def set_high_energy_approximation(self, use: bool) -> None:
        """Use :math:`(t, x)` instead of :math:`(t, M^2)` as variables."""
        self.set_tx(use)

    @property
    def use_regge(self) -> bool:
        return bool(getattr(self.amplitude, "is_reggeized", False))

    @property
    def cutoff(self) -> float:
        """Form factor cutoff of the amplitude, zero if it has no form factor."""
        if not getattr(self.amplitude, "use_formfactor", False):
            return 0.0
        return float(getattr(self.amplitude, "cutoff", 0.0))

    def coupling(self, t: float) -> float:
        return self._coupling(t)

    def _pseudoscalar_coupling(self, t: float) -> float:
        mass = self.kinematics.produced_mass
        g = self.amplitude.top_coupling  # type: ignore[attr-defined]
        return g / mass * (t - mass**2)

    def d3sigma_d3p(self, s: float, t: float, mm: float) -> float:
        if self.use_tx and abs(mm - 1) < 1e-3:
            return 0.0
        coupling2 = self.coupling(t) ** 2
        if coupling2 == 0:
            return 0.0
        t_min = self.kinematics.t_min(s, self.kinematics.min_m2)
        formfactor2 = np.exp(2 * self.cutoff * (t - t_min))
        s_piece = 1 - mm if self.use_tx else mm / s
        if self.use_regge:
            propagator2 = self._regge_propagator2(t, s_piece)
            if propagator2 is None:
                return 0.0
        else:
            pole = 1 / (self.amplitude.exchange_mass2 - t)  # type: ignore[attr-defined]
            min_j = self.amplitude.min_j  # type: ignore[attr-defined]
            propagator2 = pole**2 * s_piece ** (-2 * min_j)
        m2 = self.kinematics.m2_from_x(s, mm) if self.use_tx else mm
        sigma_tot = self.sigma_total.eval(m2)
        numerator = sigma_tot * coupling2 * formfactor2 * propagator2 * s_piece
        return float(numerator / (4 * np.pi) ** 3)

    def _regge_propagator2(self, t: float, s_piece: float) -> float | None:
        trajectory = self.amplitude.trajectory  # type: ignore[attr-defined]
        alpha = np.real(trajectory.eval(t))
        alpha_prime = np.real(trajectory.slope(t))
        if t >= 0:
            return None
        if self.cutoff + alpha_prime - alpha_prime * np.log(-alpha_prime * t) < 0:
            return None
        phase = np.exp(-1j * np.pi * alpha)
        signature_factor = (1 + trajectory.signature * phase) / 2
        residue = alpha_prime * signature_factor * gamma(trajectory.min_j - alpha)
        t_piece = abs(residue) ** 2
        return t_piece * s_piece ** (-2 * alpha)


def _zero_coupling(t: float) -> float:
    return 0.0
