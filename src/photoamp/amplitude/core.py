"""Interface that every exclusive amplitude model implements.

An `Amplitude` refers to a `.ReactionKinematics` object that is shared between all
amplitudes of a reaction model. Each call to :meth:`Amplitude.helicity_amplitude`
first stores an `EvaluationPoint`, so that helper methods such as
:meth:`~Amplitude.evaluate` can read a consistent snapshot of :math:`s`, :math:`t`,
:math:`\\theta` and the helicities. An instance is therefore not safe to evaluate
from several threads at once.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
from attrs import field, frozen

from photoamp.constants import GEV2_TO_NB
from photoamp.exceptions import ParameterCountError, QuantumNumberError
from photoamp.integrate import integrate
from photoamp.kinematics.reaction import Helicities, ReactionKinematics, SpinParity

_LOGGER = logging.getLogger(__name__)


@frozen
class EvaluationPoint:
    """Kinematic point of the most recent evaluation."""

    helicities: Helicities = field(converter=tuple)
    s: float = field(converter=float)
    t: float = field(converter=float)
    theta: float = field(converter=float)


class Amplitude(ABC):
    """Base class for helicity amplitudes of :math:`\\gamma N \\to X B`.

    Args:
        kinematics: Reaction kinematics, referenced and not copied.
        n_parameters: Number of values that :meth:`set_parameters` expects.
        amplitude_type: Label of the amplitude class, for instance
            :code:`"pseudoscalar_exchange"`.
        identifier: Free label of this instance.

    Raises:
        QuantumNumberError: If the quantum numbers of the kinematics are not in
            :meth:`allowed_meson_jp` and :meth:`allowed_baryon_jp`.
    """

    def __init__(
        self,
        kinematics: ReactionKinematics,
        n_parameters: int,
        amplitude_type: str,
        identifier: str = "",
    ) -> None:
        self.kinematics = kinematics
        self.n_parameters = n_parameters
        self.amplitude_type = amplitude_type
        self.identifier = identifier or amplitude_type
        self.parameters: tuple[float, ...] = ()
        self.__point: EvaluationPoint | None = None
        self.check_quantum_numbers()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"

    @property
    def point(self) -> EvaluationPoint:
        """The `EvaluationPoint` of the most recent :meth:`store`."""
        if self.__point is None:
            msg = f"{self!r} has not been evaluated yet, so there is no stored point"
            raise RuntimeError(msg)
        return self.__point

    @property
    def s(self) -> float:
        return self.point.s

    @property
    def t(self) -> float:
        return self.point.t

    @property
    def theta(self) -> float:
        return self.point.theta

    @property
    def helicities(self) -> Helicities:
        return self.point.helicities

    def store(self, helicities: Sequence[int], s: float, t: float) -> EvaluationPoint:
        """Cache a kinematic point before anything is computed from it."""
        theta = self.kinematics.theta(s, t)
        self.__point = EvaluationPoint(helicities, s, t, theta)
        return self.__point

    def set_parameters(self, values: Sequence[float]) -> None:
        """Set the couplings, in the order of :meth:`parameter_labels`.

        Raises:
            ParameterCountError: If the number of values does not match
                `n_parameters`.
        """
        values = tuple(values)
        if len(values) != self.n_parameters:
            msg = (
                f"{self!r} expects {self.n_parameters} parameters, but"
                f" {len(values)} were given"
            )
            raise ParameterCountError(msg)
        self.parameters = values
        self._allocate_parameters(values)

    def _allocate_parameters(self, values: tuple[float, ...]) -> None:
        """Distribute parameter values over the couplings of the model."""

    @abstractmethod
    def helicity_amplitude(
        self, helicities: Sequence[int], s: float, t: float
    ) -> complex:
        """Amplitude for one helicity configuration.

        Implementations call :meth:`store` first. Helicity configurations that a model
        does not describe give exactly :code:`0`.
        """

    @abstractmethod
    def evaluate(self) -> complex:
        """Model-specific value at the stored `EvaluationPoint`."""

    def allowed_meson_jp(self) -> list[SpinParity]:
        return []

    def allowed_baryon_jp(self) -> list[SpinParity]:
        return []

    def check_quantum_numbers(self) -> None:
        meson_jp = self.kinematics.meson_jp
        if meson_jp not in self.allowed_meson_jp():
            msg = (
                f"{type(self).__name__} does not support a meson with J^P ="
                f" {meson_jp}. Allowed are {self.allowed_meson_jp()}"
            )
            raise QuantumNumberError(msg)
        baryon_jp = self.kinematics.baryon_jp
        if baryon_jp not in self.allowed_baryon_jp():
            msg = (
                f"{type(self).__name__} does not support a baryon with (2J)^P ="
                f" {baryon_jp}. Allowed are {self.allowed_baryon_jp()}"
            )
            raise QuantumNumberError(msg)

    def parameter_labels(self) -> list[str]:
        return [f"par[{i}]" for i in range(self.n_parameters)]

    def probability_distribution(self, s: float, t: float) -> float:
        r"""Helicity-averaged squared amplitude :math:`\overline{|A|^2}`."""
        helicities = self.kinematics.helicities
        n_initial = len({(h[0], h[1]) for h in helicities})
        total = sum(abs(self.helicity_amplitude(h, s, t)) ** 2 for h in helicities)
        return total / n_initial

    def differential_xsection(self, s: float, t: float) -> float:
        r"""Differential cross-section :math:`d\sigma/dt` in nb/GeV\ :sup:`2`."""
        k = self.kinematics.initial_momentum(s)
        norm = 64 * np.pi * s * abs(k) ** 2
        return self.probability_distribution(s, t) / norm * GEV2_TO_NB

    def integrated_xsection(self, s: float) -> float:
        """Total cross-section in nb, integrated over the physical :math:`t` range."""
        if s <= self.kinematics.s_threshold:
            return 0.0
        t_lower, t_upper = self.kinematics.t_bounds(s)
        return integrate(lambda t: self.differential_xsection(s, t), t_lower, t_upper)


class AmplitudeSum(Amplitude):
    """Linear superposition of amplitudes without interference cross-terms.

    The parameter vector is the concatenation of the parameters of all parts, in the
    order in which the parts are given.
    """

    def __init__(self, amplitudes: Sequence[Amplitude], identifier: str = "") -> None:
        if len(amplitudes) == 0:
            msg = "An amplitude sum requires at least one amplitude"
            raise ValueError(msg)
        self.amplitudes = list(amplitudes)
        kinematics = self.amplitudes[0].kinematics
        if any(amp.kinematics is not kinematics for amp in self.amplitudes):
            _LOGGER.warning(
                "Amplitudes in %s do not share the same kinematics object",
                identifier or "sum",
            )
        super().__init__(
            kinematics,
            n_parameters=sum(amp.n_parameters for amp in self.amplitudes),
            amplitude_type="sum",
            identifier=identifier,
        )

    def add(self, amplitude: Amplitude) -> None:
        """Append a part, leaving the sum untouched if its quantum numbers clash."""
        if amplitude.kinematics is not self.kinematics:
            _LOGGER.warning(
                "Amplitudes in %s do not share the same kinematics object",
                self.identifier,
            )
        self.amplitudes.append(amplitude)
        try:
            self.check_quantum_numbers()
        except QuantumNumberError:
            self.amplitudes.pop()
            raise
        self.n_parameters += amplitude.n_parameters

    def allowed_meson_jp(self) -> list[SpinParity]:
        allowed = set(self.amplitudes[0].allowed_meson_jp())
        for amp in self.amplitudes[1:]:
            allowed &= set(amp.allowed_meson_jp())
        return sorted(allowed)

    def allowed_baryon_jp(self) -> list[SpinParity]:
        allowed = set(self.amplitudes[0].allowed_baryon_jp())
        for amp in self.amplitudes[1:]:
            allowed &= set(amp.allowed_baryon_jp())
        return sorted(allowed)

    def _allocate_parameters(self, values: tuple[float, ...]) -> None:
        offset = 0
        for amp in self.amplitudes:
            amp.set_parameters(values[offset : offset + amp.n_parameters])
            offset += amp.n_parameters

    def parameter_labels(self) -> list[str]:
        labels = []
        for amp in self.amplitudes:
            labels.extend(amp.parameter_labels())
        return labels

    def helicity_amplitude(
        self, helicities: Sequence[int], s: float, t: float
    ) -> complex:
        self.store(helicities, s, t)
        return sum(
            (amp.helicity_amplitude(helicities, s, t) for amp in self.amplitudes),
            0j,
        )

    def evaluate(self) -> complex:
        point = self.point
        for amp in self.amplitudes:
            amp.store(point.helicities, point.s, point.t)
        return sum((amp.evaluate() for amp in self.amplitudes), 0j)
