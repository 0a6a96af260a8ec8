r"""Kinematics of a two-body photoproduction reaction :math:`\gamma\,N \to X\,B`.

All quantities are evaluated in the centre-of-mass frame, with the beam along
:math:`+z` and the produced meson in the xz-plane at polar angle :math:`\theta`.
Momenta are complex, so that they continue below the respective thresholds.

Spin-parity pairs are given as :code:`(J, P)` for mesons and as :code:`(2J, P)` for
baryons. Likewise, spin-1/2 helicities are given in units of :math:`\frac{1}{2}`.
"""

from __future__ import annotations

import itertools
from typing import Tuple

import numpy as np
from attrs import define, field
from attrs.validators import ge, instance_of

from photoamp.constants import M_PROTON
from photoamp.dynamics.phasespace import breakup_momentum
from photoamp.kinematics.lorentz import LorentzTensor, lorentz_vector
from photoamp.kinematics.spinor import DiracSpinor, helicity_spinor

SpinParity = Tuple[int, int]
Helicities = Tuple[int, int, int, int]

PSEUDOSCALAR: SpinParity = (0, -1)
VECTOR: SpinParity = (1, -1)
AXIAL_VECTOR: SpinParity = (1, +1)
HALF_PLUS: SpinParity = (1, +1)
HALF_MINUS: SpinParity = (1, -1)


def _check_spin_parity(jp: SpinParity) -> SpinParity:
    spin, parity = jp
    if spin < 0 or parity not in {-1, +1}:
        msg = f"Invalid spin-parity combination {jp}"
        raise ValueError(msg)
    return int(spin), int(parity)


@define
class ReactionKinematics:
    """Centre-of-mass kinematics of :math:`\\gamma N \\to X B`.

    Args:
        meson_mass: Mass of the produced meson :math:`X`.
        baryon_mass: Mass of the recoiling baryon :math:`B`.
        beam_mass: Mass of the beam, zero for a real photon.
        target_mass: Mass of the target nucleon.
        name: Label of the produced meson, used in logging.
    """

    meson_mass: float = field(converter=float, validator=ge(0))
    baryon_mass: float = field(default=M_PROTON, converter=float, validator=ge(0))
    beam_mass: float = field(default=0.0, converter=float, validator=ge(0))
    target_mass: float = field(default=M_PROTON, converter=float, validator=ge(0))
    name: str = field(default="", validator=instance_of(str))
    meson_jp: SpinParity = field(default=PSEUDOSCALAR, converter=_check_spin_parity)
    baryon_jp: SpinParity = field(default=HALF_PLUS, converter=_check_spin_parity)

    def set_meson_jp(self, spin: int, parity: int) -> None:
        self.meson_jp = _check_spin_parity((spin, parity))

    def set_baryon_jp(self, doubled_spin: int, parity: int) -> None:
        self.baryon_jp = _check_spin_parity((doubled_spin, parity))

    @property
    def s_threshold(self) -> float:
        """Production threshold :math:`(m_X + m_B)^2`."""
        return (self.meson_mass + self.baryon_mass) ** 2

    @property
    def helicities(self) -> list[Helicities]:
        """All helicity tuples :code:`(photon, target, meson, recoil)`.

        The first entry serves as reference for helicity-independent amplitudes.
        """
        if self.beam_mass > 0:
            photon = [-1, 0, +1]
        else:
            photon = [+1, -1]
        meson_spin = self.meson_jp[0]
        meson = list(range(-meson_spin, meson_spin + 1))
        if meson_spin > 0 and self.meson_mass == 0:
            meson = [-meson_spin, meson_spin]
        baryon_spin = self.baryon_jp[0]
        recoil = list(range(-baryon_spin, baryon_spin + 1, 2))
        return list(itertools.product(photon, [+1, -1], meson, recoil))

    def initial_momentum(self, s: complex) -> complex:
        return complex(breakup_momentum(s, self.beam_mass, self.target_mass))

    def final_momentum(self, s: complex) -> complex:
        return complex(breakup_momentum(s, self.meson_mass, self.baryon_mass))

    def beam_energy(self, s: float) -> float:
        return (s + self.beam_mass**2 - self.target_mass**2) / (2 * np.sqrt(s))

    def target_energy(self, s: float) -> float:
        return (s - self.beam_mass**2 + self.target_mass**2) / (2 * np.sqrt(s))

    def meson_energy(self, s: float) -> float:
        return (s + self.meson_mass**2 - self.baryon_mass**2) / (2 * np.sqrt(s))

    def recoil_energy(self, s: float) -> float:
        return (s - self.meson_mass**2 + self.baryon_mass**2) / (2 * np.sqrt(s))

    def t_man(self, s: float, theta: float) -> float:
        r"""Momentum transfer :math:`t = (k - q)^2` at CM angle :math:`\theta`."""
        k = self.initial_momentum(s)
        q = self.final_momentum(s)
        energy_term = self.beam_energy(s) * self.meson_energy(s)
        value = (
            self.beam_mass**2
            + self.meson_mass**2
            - 2 * (energy_term - k * q * np.cos(theta))
        )
        return float(np.real(value))

    def cos_theta(self, s: float, t: float) -> float:
        """Inverse of :meth:`t_man`, clipped to the physical range."""
        k = self.initial_momentum(s)
        q = self.final_momentum(s)
        energy_term = self.beam_energy(s) * self.meson_energy(s)
        numerator = t - self.beam_mass**2 - self.meson_mass**2 + 2 * energy_term
        denominator = 2 * k * q
        if denominator == 0:
            return 1.0
        return float(np.clip(np.real(numerator / denominator), -1.0, 1.0))

    def theta(self, s: float, t: float) -> float:
        return float(np.arccos(self.cos_theta(s, t)))

    def t_bounds(self, s: float) -> tuple[float, float]:
        """Physical :math:`t` range as :code:`(backward, forward)` values."""
        return self.t_man(s, np.pi), self.t_man(s, 0.0)

    def beam_momentum_vector(self, s: float) -> LorentzTensor:
        k = self.initial_momentum(s).real
        return lorentz_vector([self.beam_energy(s), 0.0, 0.0, k])

    def target_momentum_vector(self, s: float) -> LorentzTensor:
        k = self.initial_momentum(s).real
        return lorentz_vector([self.target_energy(s), 0.0, 0.0, -k])

    def meson_momentum_vector(self, s: float, theta: float) -> LorentzTensor:
        q = self.final_momentum(s).real
        return lorentz_vector(
            [self.meson_energy(s), q * np.sin(theta), 0.0, q * np.cos(theta)]
        )

    def recoil_momentum_vector(self, s: float, theta: float) -> LorentzTensor:
        q = self.final_momentum(s).real
        return lorentz_vector(
            [self.recoil_energy(s), -q * np.sin(theta), 0.0, -q * np.cos(theta)]
        )

    def beam_polarization(self, helicity: int, s: float) -> LorentzTensor:
        r"""Polarization vector :math:`\varepsilon^\mu(k, \lambda)` of the beam."""
        if helicity == 0:
            return _longitudinal_polarization(
                self.beam_mass, self.beam_energy(s), self.initial_momentum(s).real, 0.0
            )
        return _transverse_polarization(helicity, theta=0.0)

    def meson_polarization(
        self, helicity: int, s: float, theta: float
    ) -> LorentzTensor:
        r"""Polarization vector :math:`\varepsilon^\mu(q, \lambda)` of the meson."""
        if helicity == 0:
            return _longitudinal_polarization(
                self.meson_mass,
                self.meson_energy(s),
                self.final_momentum(s).real,
                theta,
            )
        return _transverse_polarization(helicity, theta)

    def target_spinor(self, helicity: int, s: float) -> DiracSpinor:
        return helicity_spinor(
            helicity,
            energy=self.target_energy(s),
            momentum=self.initial_momentum(s).real,
            mass=self.target_mass,
            theta=np.pi,
        )

    def recoil_spinor(self, helicity: int, s: float, theta: float) -> DiracSpinor:
        return helicity_spinor(
            helicity,
            energy=self.recoil_energy(s),
            momentum=self.final_momentum(s).real,
            mass=self.baryon_mass,
            theta=theta + np.pi,
        )


def _transverse_polarization(helicity: int, theta: float) -> LorentzTensor:
    if helicity not in {-1, +1}:
        msg = f"Transverse helicity has to be +1 or -1, not {helicity}"
        raise ValueError(msg)
    norm = 1 / np.sqrt(2)
    return lorentz_vector(
        [
            0.0,
            -helicity * np.cos(theta) * norm,
            -1j * norm,
            helicity * np.sin(theta) * norm,
        ]
    )


def _longitudinal_polarization(
    mass: float, energy: float, momentum: float, theta: float
) -> LorentzTensor:
    if mass == 0:
        msg = "A massless particle has no longitudinal polarization"
        raise ValueError(msg)
    return lorentz_vector(
        [
            momentum / mass,
            energy * np.sin(theta) / mass,
            0.0,
            energy * np.cos(theta) / mass,
        ]
    )
