r"""Meson exchange in the :math:`t`-channel.

Vertices are assembled from `.LorentzTensor` objects and Dirac bilinears with
:func:`.contract`. The exchange propagator is either a simple pole (fixed spin) or
Reggeized along a `.Trajectory`:

.. math::
    P(s, t) = \alpha'\,\frac{1 + \tau e^{-i\pi\alpha(t)}}{2}\,
        \Gamma\big(J_\mathrm{min} - \alpha(t)\big)\,(\alpha' s)^{\alpha(t)}.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from scipy.special import gamma

from photoamp.amplitude.core import Amplitude
from photoamp.kinematics.lorentz import contract, dot, metric_tensor
from photoamp.kinematics.reaction import (
    AXIAL_VECTOR,
    HALF_PLUS,
    ReactionKinematics,
    SpinParity,
)
from photoamp.kinematics.spinor import GAMMA_5
from photoamp.regge import Trajectory

Exchange = Union[float, Trajectory]


class PseudoscalarExchange(Amplitude):
    r"""Axial-vector photoproduction through a pseudoscalar exchange.

    The photon couples to the produced axial vector :math:`X` and the exchanged
    pseudoscalar through

    .. math::
        T_\mathrm{top} = \frac{g_\mathrm{top}}{m_X}\,
            \varepsilon_\gamma^\mu\,\varepsilon_X^{*\nu}
            \left(g_{\mu\nu}\,k\cdot q - q_\mu k_\nu\right),

    with :math:`k` the photon momentum and :math:`q = k - p_X` the exchanged
    momentum. The nucleon vertex is :math:`g_\mathrm{bottom}\,\bar{u}\gamma_5 u`.

    Args:
        kinematics: Reaction kinematics. The meson has to be :math:`1^+`.
        exchange: Mass squared of the exchanged particle for a fixed-spin exchange,
            or a `.Trajectory` for a Reggeized exchange.
        identifier: Free label of this amplitude.
    """

    def __init__(
        self,
        kinematics: ReactionKinematics,
        exchange: Exchange,
        identifier: str = "pseudoscalar_exchange",
    ) -> None:
        super().__init__(kinematics, 2, "pseudoscalar_exchange", identifier)
        if isinstance(exchange, (int, float)):
            self.exchange_mass2 = float(exchange)
            self.trajectory: Trajectory | None = None
        else:
            self.exchange_mass2 = 0.0
            self.trajectory = exchange
        self.top_coupling = 0.0
        self.bottom_coupling = 0.0
        self.use_formfactor = False
        self.cutoff = 0.0

    @property
    def is_reggeized(self) -> bool:
        return self.trajectory is not None

    @property
    def min_j(self) -> int:
        """Lowest spin of the exchange, zero for a fixed-spin pseudoscalar."""
        if self.trajectory is None:
            return 0
        return self.trajectory.min_j

    def allowed_meson_jp(self) -> list[SpinParity]:
        return [AXIAL_VECTOR]

    def allowed_baryon_jp(self) -> list[SpinParity]:
        return [HALF_PLUS]

    def parameter_labels(self) -> list[str]:
        return ["g_top", "g_bottom"]

    def _allocate_parameters(self, values: tuple[float, ...]) -> None:
        self.top_coupling, self.bottom_coupling = values

    def set_formfactor(self, use: bool, cutoff: float = 0.0) -> None:
        r"""Switch an exponential form factor :math:`e^{b(t - t_\mathrm{min})}`."""
        self.use_formfactor = use
        self.cutoff = float(cutoff)

    def helicity_amplitude(
        self, helicities: Sequence[int], s: float, t: float
    ) -> complex:
        self.store(helicities, s, t)
        return self.evaluate()

    def evaluate(self) -> complex:
        lam_gamma, lam_target, lam_meson, lam_recoil = self.helicities
        return complex(
            self.top_vertex(lam_gamma, lam_meson)
            * self.bottom_vertex(lam_target, lam_recoil)
            * self.propagator()
            * self.formfactor()
        )

    def top_vertex(self, lam_gamma: int, lam_meson: int) -> complex:
        s, theta = self.s, self.theta
        kin = self.kinematics
        k = kin.beam_momentum_vector(s)
        q = k - kin.meson_momentum_vector(s, theta)
        polarizations = kin.beam_polarization(lam_gamma, s).outer(
            kin.meson_polarization(lam_meson, s, theta).map(np.conj)
        )
        structure = dot(k, q) * metric_tensor() - q.outer(k)
        return self.top_coupling / kin.meson_mass * contract(polarizations, structure)

    def bottom_vertex(self, lam_target: int, lam_recoil: int) -> complex:
        s, theta = self.s, self.theta
        recoil = self.kinematics.recoil_spinor(lam_recoil, s, theta)
        target = self.kinematics.target_spinor(lam_target, s)
        return self.bottom_coupling * (recoil.adjoint() * GAMMA_5).contract(target)

    def propagator(self) -> complex:
        s, t = self.s, self.t
        if self.trajectory is None:
            return 1 / (self.exchange_mass2 - t)
        alpha = self.trajectory.eval(t)
        alpha_prime = self.trajectory.slope(t)
        phase = np.exp(-1j * np.pi * alpha)
        signature_factor = (1 + self.trajectory.signature * phase) / 2
        return (
            alpha_prime
            * signature_factor
            * gamma(self.trajectory.min_j - alpha)
            * (alpha_prime * s) ** alpha
        )

    def formfactor(self) -> float:
        if not self.use_formfactor:
            return 1.0
        t_min = self.kinematics.t_man(self.s, 0.0)
        return float(np.exp(self.cutoff * (self.t - t_min)))
