r"""Narrow baryon resonance in the :math:`s`-channel.

The amplitude of :math:`\gamma p \to R \to V p` factorizes into a photoexcitation
coupling, a hadronic decay coupling, a Wigner-:math:`d` function for the angular
dependence and a Breit-Wigner pole,

.. math::
    A_{\lambda_i\lambda_f}(s, t) = \frac{
        g^\gamma_{\lambda_i}\, g^V_{\lambda_f}\,
        \beta^{\ell_\mathrm{min}}\,
        d^{J}_{\lambda_i\lambda_f}(\theta)
    }{s - M^2 + iM\Gamma},

with :math:`\lambda_i = \lambda_\gamma - \lambda_p` and
:math:`\lambda_f = \lambda_V - \lambda_{p'}`. The threshold factor
:math:`\beta = q(s)/q(M^2)` suppresses the resonance towards threshold with the
lowest allowed orbital angular momentum :math:`\ell_\mathrm{min}`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Sequence

import numpy as np
import sympy as sp
from sympy.physics.quantum.spin import Rotation as Wigner

from photoamp.amplitude.core import Amplitude
from photoamp.constants import E_CHARGE, F_JPSI
from photoamp.exceptions import QuantumNumberError
from photoamp.kinematics.reaction import (
    HALF_PLUS,
    VECTOR,
    ReactionKinematics,
    SpinParity,
)

THRESHOLD_TABLE: dict[int, tuple[int, float]] = {
    +1: (0, 2 / 3),
    -1: (1, 3 / 5),
    +3: (1, 3 / 5),
    -3: (0, 2 / 3),
    +5: (1, 3 / 5),
    -5: (2, 1 / 3),
}
"""Lowest orbital angular momentum and transverse fraction, keyed by :math:`2J\\cdot P`.

The transverse fraction is the share of the hadronic width that goes into
transversely polarized vector mesons.
"""


@lru_cache(maxsize=None)
def wigner_small_d(
    doubled_j: int, doubled_m: int, doubled_n: int
) -> Callable[[float], complex]:
    r"""Numeric Wigner :math:`d^j_{mn}(\theta)` for (half-)integer spins.

    Arguments are given in units of :math:`\frac{1}{2}`. The symbolic function is
    unfolded once with :mod:`sympy` and then cached as a :mod:`numpy` function.

    >>> d = wigner_small_d(1, 1, 1)
    >>> round(float(d(0.0)), 12)
    1.0
    """
    theta = sp.Symbol("theta", real=True)
    expr = Wigner.d(
        sp.Rational(doubled_j, 2),
        sp.Rational(doubled_m, 2),
        sp.Rational(doubled_n, 2),
        theta,
    ).doit()
    return sp.lambdify(theta, expr, "numpy")


class BaryonResonance(Amplitude):
    """Breit-Wigner baryon resonance in vector-meson photoproduction.

    Args:
        kinematics: Reaction kinematics with a :math:`1^-` meson and a
            :math:`\\frac{1}{2}^+` baryon.
        J: Spin of the resonance in units of :math:`\\frac{1}{2}` (1, 3 or 5).
        parity: Parity of the resonance, :math:`\\pm 1`.
        mass: Resonance mass.
        width: Total width.
        decay_constant: Decay constant of the vector meson, which fixes the
            photocoupling through vector-meson dominance.
        identifier: Free label of this amplitude.

    Parameters are the hadronic branching fraction and the photocoupling ratio
    :math:`R = A_{3/2}/A_{1/2}`. For :math:`J = 1/2`, only :math:`A_{1/2}` exists
    and the ratio is ignored.

    Raises:
        QuantumNumberError: For an invalid parity or for a spin-parity
            combination that is not in `THRESHOLD_TABLE`.
    """

    def __init__(
        self,
        kinematics: ReactionKinematics,
        J: int,  # noqa: N803
        parity: int,
        mass: float,
        width: float,
        decay_constant: float = F_JPSI,
        identifier: str = "baryon_resonance",
    ) -> None:
        super().__init__(kinematics, 2, "baryon_resonance", identifier)
        if parity not in {-1, +1}:
            msg = f"Invalid parity {parity} for {identifier}"
            raise QuantumNumberError(msg)
        if J * parity not in THRESHOLD_TABLE:
            msg = (
                f"Spin-parity combination J = {J}/2 and P = {parity} is not"
                f" available for {type(self).__name__}"
            )
            raise QuantumNumberError(msg)
        self.J = J
        self.parity = parity
        self.mass = mass
        self.width = width
        self.decay_constant = decay_constant
        self.l_min, self.transverse_fraction = THRESHOLD_TABLE[J * parity]
        self.branching_fraction = 0.0
        self.photocoupling_ratio = 0.0
        self.__p_bar = kinematics.initial_momentum(mass**2).real
        self.__q_bar = kinematics.final_momentum(mass**2).real

    def allowed_meson_jp(self) -> list[SpinParity]:
        return [VECTOR]

    def allowed_baryon_jp(self) -> list[SpinParity]:
        return [HALF_PLUS]

    def parameter_labels(self) -> list[str]:
        return ["branching fraction", "photocoupling ratio"]

    def _allocate_parameters(self, values: tuple[float, ...]) -> None:
        self.branching_fraction, self.photocoupling_ratio = values

    def helicity_amplitude(
        self, helicities: Sequence[int], s: float, t: float
    ) -> complex:
        self.store(helicities, s, t)
        return self.evaluate()

    def evaluate(self) -> complex:
        lam_gamma, lam_target, lam_meson, lam_recoil = self.helicities
        lam_i = 2 * lam_gamma - lam_target
        lam_f = 2 * lam_meson - lam_recoil
        if abs(lam_i) > self.J or abs(lam_f) > self.J:
            return 0j
        residue = self.photo_coupling(lam_i) * self.hadronic_coupling(lam_meson)
        residue *= self.threshold_factor(self.s)
        residue *= wigner_small_d(self.J, lam_i, lam_f)(self.theta)
        pole = self.s - self.mass**2 + 1j * self.mass * self.width
        return complex(residue / pole)

    def photo_coupling(self, lam_i: int) -> float:
        r"""Photoexcitation coupling :math:`g^\gamma_{\lambda_i}`, VMD normalized."""
        vmd = E_CHARGE * self.decay_constant / self.kinematics.meson_mass
        exponent = 2 * self.l_min + 1
        radiative_fraction = (
            self.branching_fraction
            * vmd**2
            * (self.__p_bar / self.__q_bar) ** exponent
            / self.transverse_fraction
        )
        norm = self.__normalization(radiative_fraction, self.__p_bar)
        ratio = self.photocoupling_ratio if self.J > 1 else 0.0
        if abs(lam_i) == 1:
            return norm / np.sqrt(1 + ratio**2)
        return norm * ratio / np.sqrt(1 + ratio**2)

    def hadronic_coupling(self, lam_meson: int) -> float:
        r"""Hadronic decay coupling :math:`g^V_{\lambda_f}`."""
        norm = self.__normalization(self.branching_fraction, self.__q_bar)
        if abs(lam_meson) == 1:
            return norm * np.sqrt(self.transverse_fraction)
        return norm * np.sqrt(1 - self.transverse_fraction)

    def threshold_factor(self, s: float) -> float:
        q = self.kinematics.final_momentum(s).real
        return (q / self.__q_bar) ** self.l_min

    def __normalization(self, fraction: float, momentum: float) -> float:
        partial_width = self.width * fraction
        multiplicity = self.J + 1
        width_term = multiplicity * partial_width / momentum
        return np.sqrt(4 * np.pi * self.mass**2 * width_term)
