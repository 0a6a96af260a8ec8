r"""Total hadronic cross-sections for the bottom vertex of an inclusive process.

All cross-sections are functions of the invariant mass squared of the hadronic
system and are given in millibarn.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Protocol

import numpy as np
from attrs import field, frozen
from attrs.validators import in_

from photoamp.constants import M_PION, M_PROTON


class TotalCrossSection(Protocol):
    """Interface of a total cross-section :math:`\\sigma_\\mathrm{tot}(s)`."""

    def eval(self, s: float) -> float:
        """Cross-section in mb at centre-of-mass energy squared :math:`s`."""


@frozen
class ZeroCrossSection:
    """Vanishing cross-section, used when no bottom vertex is known."""

    def eval(self, s: float) -> float:
        return 0.0


@frozen
class PDGParameterization:
    r"""High-energy PDG fit of the :math:`\pi^\pm p` total cross-section.

    .. math::
        \sigma(s) = c_P\left[Z + B\log^2\frac{s}{s_M}\right]
            + Y_1\left(\frac{s_1}{s}\right)^{\eta_1}
            - \tau\,Y_2\left(\frac{s_1}{s}\right)^{\eta_2}

    with :math:`s_1 = 1~\mathrm{GeV}^2`, :math:`\tau = +1` for :math:`\pi^+ p` and
    :math:`\tau = -1` for :math:`\pi^- p`. Only the Regge terms are included, so the
    fit does not describe the resonance region.

    Args:
        iso: Isospin sign :math:`\tau`.
        pomeron_scale: Scale factor :math:`c_P` of the Pomeron terms.
        y1: Coefficient :math:`Y_1` in mb.
        y2: Coefficient :math:`Y_2` in mb.
        z: Coefficient :math:`Z` in mb.

    >>> pi_minus = PDGParameterization(iso=-1)
    >>> pi_minus.eval(1.0)
    0.0
    >>> pi_minus.eval(100.0) > PDGParameterization(iso=+1).eval(100.0)
    True
    """

    iso: int = field(default=-1, validator=in_({-1, +1}))
    pomeron_scale: float = field(default=1.0, converter=float)
    y1: float = field(default=9.56, converter=float)
    y2: float = field(default=1.767, converter=float)
    z: float = field(default=18.75, converter=float)
    beam_mass: float = M_PION
    target_mass: float = M_PROTON

    B = 0.2720
    M = 2.1206
    ETA1 = 0.4473
    ETA2 = 0.5486

    @property
    def threshold(self) -> float:
        return (self.beam_mass + self.target_mass) ** 2

    def eval(self, s: float) -> float:
        if s <= self.threshold:
            return 0.0
        s_m = (self.beam_mass + self.target_mass + self.M) ** 2
        pomeron = self.z + self.B * np.log(s / s_m) ** 2
        regge = self.y1 * s ** (-self.ETA1) - self.iso * self.y2 * s ** (-self.ETA2)
        return float(self.pomeron_scale * pomeron + regge)


class SigmaOption(Enum):
    """Predefined total cross-sections for :func:`create_sigma_total`."""

    PDG_PIPP_ONLY_REGGE = auto()
    PDG_PIMP_ONLY_REGGE = auto()
    ZERO = auto()


def create_sigma_total(option: SigmaOption) -> TotalCrossSection:
    """Create one of the predefined `TotalCrossSection` objects."""
    if option is SigmaOption.PDG_PIPP_ONLY_REGGE:
        return PDGParameterization(iso=+1)
    if option is SigmaOption.PDG_PIMP_ONLY_REGGE:
        return PDGParameterization(iso=-1)
    if option is SigmaOption.ZERO:
        return ZeroCrossSection()
    msg = f"No total cross-section available for {option!r}"
    raise NotImplementedError(msg)
