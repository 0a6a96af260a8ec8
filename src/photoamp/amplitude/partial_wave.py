r"""Partial-wave amplitudes, unitarized with a K-matrix.

A partial wave of spin :math:`J` does not depend on helicities. It is therefore
evaluated only for the reference helicity tuple of the kinematics and projected
back onto the full amplitude with a Legendre polynomial,

.. math::
    A(s, t) = \sqrt{2}\,(2J+1)\,P_J(\cos\theta)\,f_J(s).

The factor :math:`\sqrt{2}(2J+1)` compensates the helicity average of
:meth:`.Amplitude.probability_distribution`.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Sequence

import numpy as np
from attrs import frozen
from scipy.special import eval_legendre

from photoamp.amplitude.core import Amplitude
from photoamp.dynamics.phasespace import breakup_momentum, chew_mandelstam
from photoamp.kinematics.reaction import (
    AXIAL_VECTOR,
    HALF_MINUS,
    HALF_PLUS,
    PSEUDOSCALAR,
    VECTOR,
    ReactionKinematics,
    SpinParity,
)


class RawPartialWave(Amplitude):
    """Helicity-independent partial wave with fixed integer spin :math:`J`."""

    def __init__(
        self,
        kinematics: ReactionKinematics,
        J: int,  # noqa: N803
        n_parameters: int,
        amplitude_type: str,
        identifier: str = "",
    ) -> None:
        if not isinstance(J, (int, np.integer)) or J < 0:
            msg = f"Partial-wave spin has to be a non-negative integer, not {J!r}"
            raise ValueError(msg)
        self.J = int(J)
        super().__init__(kinematics, n_parameters, amplitude_type, identifier)

    def allowed_meson_jp(self) -> list[SpinParity]:
        return [PSEUDOSCALAR, VECTOR, AXIAL_VECTOR]

    def allowed_baryon_jp(self) -> list[SpinParity]:
        return [HALF_PLUS, HALF_MINUS]

    def helicity_amplitude(
        self, helicities: Sequence[int], s: float, t: float
    ) -> complex:
        if tuple(helicities) != self.kinematics.helicities[0]:
            return 0j
        self.store(helicities, s, t)
        legendre = eval_legendre(self.J, np.cos(self.theta))
        return np.sqrt(2) * (2 * self.J + 1) * legendre * self.evaluate()

    @abstractmethod
    def evaluate(self) -> complex:
        """The partial wave :math:`f_J(s)` at the stored :math:`s`."""

    def _primary_momentum(self, s: float) -> complex:
        return self.kinematics.final_momentum(s)

    def _primary_loop_function(self, s: float) -> complex:
        return chew_mandelstam(
            s, self.kinematics.meson_mass, self.kinematics.baryon_mass
        )


class ScatteringLength(RawPartialWave):
    r"""Single-channel partial wave in the scattering-length approximation.

    .. math::
        f_J(s) = \frac{q^J\,b}{1 - G(s)\,q^{2J} a}

    with parameters :code:`{a, b}`.
    """

    def __init__(
        self,
        kinematics: ReactionKinematics,
        J: int,  # noqa: N803
        identifier: str = "scattering_length",
    ) -> None:
        super().__init__(kinematics, J, 2, "scattering_length", identifier)
        self.__a = 0.0
        self.__b = 0.0

    def _allocate_parameters(self, values: tuple[float, ...]) -> None:
        self.__a, self.__b = values

    def parameter_labels(self) -> list[str]:
        return [f"a[{self.J}]", f"b[{self.J}]"]

    def evaluate(self) -> complex:
        s = self.s
        q = self._primary_momentum(s)
        loop = self._primary_loop_function(s)
        production = q**self.J * self.__b
        k = q ** (2 * self.J) * self.__a
        return complex(production / (1 - loop * k))


@frozen
class KMatrixTerms:
    """Intermediate values of one `TwoChannelKMatrix` evaluation."""

    momenta: tuple[complex, complex]
    loop_functions: tuple[complex, complex]
    production: tuple[complex, complex]
    k00: complex
    k01: complex
    k11: complex
    denominator: complex
    determinant: complex
    a00: complex
    a01: complex


class TwoChannelKMatrix(RawPartialWave):
    r"""Two coupled channels in the scattering-length approximation.

    Channel 0 is the final state of the kinematics, channel 1 a rescattering channel
    with masses :code:`masses`. The symmetric K-matrix and production legs are

    .. math::
        K_{ij} = (q_i q_j)^J a_{ij}, \qquad B_i = q_i^J b_i,

    and with the Chew-Mandelstam functions :math:`G_i` the partial wave is

    .. math::
        f_J = B_0\left(1 + G_0 A_{00}\right) + B_1 G_1 A_{01},
        \quad
        A_{00} = \frac{K_{00} - G_1 \det K}{D},
        \quad
        A_{01} = \frac{K_{01}}{D},

    where :math:`D = (1-G_0K_{00})(1-G_1K_{11}) - G_0G_1K_{01}^2`. A zero of
    :math:`D` is a resonance pole of the model and is not guarded against.

    Parameters are :code:`{a00, a01, a11, b0, b1}`. There is one off-diagonal
    coupling, so :math:`K_{01} = K_{10}` always holds.
    """

    def __init__(
        self,
        kinematics: ReactionKinematics,
        J: int,  # noqa: N803
        masses: tuple[float, float],
        identifier: str = "two_channel",
    ) -> None:
        super().__init__(kinematics, J, 5, "two_channel", identifier)
        m1, m2 = masses
        self.masses = (float(m1), float(m2))
        self.__couplings = dict.fromkeys(("a00", "a01", "a11", "b0", "b1"), 0.0)
        self.__terms: KMatrixTerms | None = None

    def _allocate_parameters(self, values: tuple[float, ...]) -> None:
        self.__couplings = dict(zip(("a00", "a01", "a11", "b0", "b1"), values))

    def parameter_labels(self) -> list[str]:
        return [f"{name}[{self.J}]" for name in ("a00", "a01", "a11", "b0", "b1")]

    def evaluate(self) -> complex:
        s = self.s
        m1, m2 = self.masses
        c = self.__couplings
        q0 = self._primary_momentum(s)
        q1 = complex(breakup_momentum(s, m1, m2))
        g0 = self._primary_loop_function(s)
        g1 = chew_mandelstam(s, m1, m2)
        b0 = q0**self.J * c["b0"]
        b1 = q1**self.J * c["b1"]
        k00 = (q0 * q0) ** self.J * c["a00"]
        k01 = (q0 * q1) ** self.J * c["a01"]
        k11 = (q1 * q1) ** self.J * c["a11"]
        denominator = (1 - g0 * k00) * (1 - g1 * k11) - g0 * g1 * k01**2
        determinant = k00 * k11 - k01**2
        a00 = (k00 - g1 * determinant) / denominator
        a01 = k01 / denominator
        self.__terms = KMatrixTerms(
            momenta=(q0, q1),
            loop_functions=(g0, g1),
            production=(b0, b1),
            k00=k00,
            k01=k01,
            k11=k11,
            denominator=denominator,
            determinant=determinant,
            a00=a00,
            a01=a01,
        )
        return complex(b0 * (1 + g0 * a00) + b1 * g1 * a01)

    @property
    def terms(self) -> KMatrixTerms:
        if self.__terms is None:
            msg = f"{self!r} has not been evaluated yet"
            raise RuntimeError(msg)
        return self.__terms

    @property
    def momenta(self) -> tuple[complex, complex]:
        return self.terms.momenta

    @property
    def loop_functions(self) -> tuple[complex, complex]:
        return self.terms.loop_functions

    @property
    def production(self) -> tuple[complex, complex]:
        return self.terms.production

    @property
    def k_matrix(self) -> np.ndarray:
        terms = self.terms
        return np.array([[terms.k00, terms.k01], [terms.k01, terms.k11]])

    @property
    def denominator(self) -> complex:
        return self.terms.denominator

    @property
    def determinant(self) -> complex:
        return self.terms.determinant

    @property
    def a00(self) -> complex:
        return self.terms.a00

    @property
    def a01(self) -> complex:
        return self.terms.a01
