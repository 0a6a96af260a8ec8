r"""Dirac spinors and gamma matrices in the Dirac representation.

Both `DiracMatrix` and `DiracSpinor` implement the `.ElementContractible` protocol,
so that they can be elements of a `.LorentzTensor`. Matrices contract through their
matrix product, spinors through the Dirac bilinear :math:`\bar{u}\,v`.

>>> u = helicity_spinor(+1, energy=2.0, momentum=0.0, mass=2.0, theta=0.0)
>>> u.adjoint().contract(u)
(4+0j)
"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np
from attrs import field, frozen

from photoamp.kinematics.lorentz import LorentzTensor, contract, lorentz_vector


def _to_matrix(value: Any) -> np.ndarray:
    matrix = np.array(value, dtype=complex)
    if matrix.shape != (4, 4):
        msg = f"A Dirac matrix has shape (4, 4), got {matrix.shape}"
        raise ValueError(msg)
    return matrix


def _to_spinor(value: Any) -> np.ndarray:
    components = np.array(value, dtype=complex)
    if components.shape != (4,):
        msg = f"A Dirac spinor has 4 components, got shape {components.shape}"
        raise ValueError(msg)
    return components


@frozen(eq=False)
class DiracMatrix:
    """A :math:`4\\times 4` matrix in Dirac space."""

    __array_ufunc__ = None

    matrix: np.ndarray = field(converter=_to_matrix)

    def __add__(self, other: DiracMatrix) -> DiracMatrix:
        if not isinstance(other, DiracMatrix):
            return NotImplemented
        return DiracMatrix(self.matrix + other.matrix)

    def __radd__(self, other: Any) -> DiracMatrix:
        if isinstance(other, numbers.Number) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: DiracMatrix) -> DiracMatrix:
        if not isinstance(other, DiracMatrix):
            return NotImplemented
        return DiracMatrix(self.matrix - other.matrix)

    def __neg__(self) -> DiracMatrix:
        return DiracMatrix(-self.matrix)

    def __mul__(self, other: Any) -> DiracMatrix | DiracSpinor:
        if isinstance(other, DiracMatrix):
            return DiracMatrix(self.matrix @ other.matrix)
        if isinstance(other, DiracSpinor):
            if other.is_adjoint:
                msg = "Cannot multiply a Dirac matrix with an adjoint spinor"
                raise ValueError(msg)
            return DiracSpinor(self.matrix @ other.components)
        if isinstance(other, numbers.Number):
            return DiracMatrix(self.matrix * other)
        return NotImplemented

    def __rmul__(self, other: Any) -> DiracMatrix:
        if isinstance(other, numbers.Number):
            return DiracMatrix(other * self.matrix)
        return NotImplemented

    __matmul__ = __mul__

    def contract(self, other: Any) -> DiracMatrix | DiracSpinor:
        """Contracting two Dirac matrices is their ordinary (matrix) product."""
        return self * other


@frozen(eq=False)
class DiracSpinor:
    r"""Dirac spinor :math:`u` or, if `is_adjoint`, its adjoint :math:`\bar{u}`."""

    __array_ufunc__ = None

    components: np.ndarray = field(converter=_to_spinor)
    is_adjoint: bool = field(default=False)

    def adjoint(self) -> DiracSpinor:
        r"""Dirac adjoint :math:`\bar{u} = u^\dagger\gamma^0`, or its inverse."""
        if self.is_adjoint:
            return DiracSpinor(GAMMA_0.matrix @ self.components.conj())
        return DiracSpinor(self.components.conj() @ GAMMA_0.matrix, is_adjoint=True)

    def __add__(self, other: DiracSpinor) -> DiracSpinor:
        if not isinstance(other, DiracSpinor):
            return NotImplemented
        self.__check_same_kind(other)
        return DiracSpinor(self.components + other.components, self.is_adjoint)

    def __radd__(self, other: Any) -> DiracSpinor:
        if isinstance(other, numbers.Number) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: DiracSpinor) -> DiracSpinor:
        if not isinstance(other, DiracSpinor):
            return NotImplemented
        self.__check_same_kind(other)
        return DiracSpinor(self.components - other.components, self.is_adjoint)

    def __neg__(self) -> DiracSpinor:
        return DiracSpinor(-self.components, self.is_adjoint)

    def __mul__(self, other: Any) -> DiracSpinor:
        if isinstance(other, DiracMatrix):
            if not self.is_adjoint:
                msg = "Only an adjoint spinor can be multiplied with a Dirac matrix"
                raise ValueError(msg)
            return DiracSpinor(self.components @ other.matrix, is_adjoint=True)
        if isinstance(other, numbers.Number):
            return DiracSpinor(self.components * other, self.is_adjoint)
        return NotImplemented

    def __rmul__(self, other: Any) -> DiracSpinor:
        if isinstance(other, numbers.Number):
            return DiracSpinor(other * self.components, self.is_adjoint)
        return NotImplemented

    def contract(self, other: DiracSpinor) -> complex:
        r"""Dirac bilinear :math:`\bar{u}_\mathrm{left}\,u_\mathrm{right}`.

        The left spinor has to be an adjoint spinor, see :meth:`adjoint`, so that the
        contraction is linear in both arguments.
        """
        if not self.is_adjoint:
            msg = "The left-hand side of a Dirac bilinear has to be an adjoint spinor"
            raise ValueError(msg)
        if not isinstance(other, DiracSpinor) or other.is_adjoint:
            msg = "The right-hand side of a Dirac bilinear has to be a plain spinor"
            raise ValueError(msg)
        return complex(self.components @ other.components)

    def __check_same_kind(self, other: DiracSpinor) -> None:
        if self.is_adjoint != other.is_adjoint:
            msg = "Cannot combine a spinor with an adjoint spinor"
            raise ValueError(msg)


_SIGMA = (
    np.array([[0, 1], [1, 0]]),
    np.array([[0, -1j], [1j, 0]]),
    np.array([[1, 0], [0, -1]]),
)
_ZERO = np.zeros((2, 2))
_ONE = np.eye(2)

IDENTITY = DiracMatrix(np.eye(4))
GAMMA_0 = DiracMatrix(np.block([[_ONE, _ZERO], [_ZERO, -_ONE]]))
GAMMA_1 = DiracMatrix(np.block([[_ZERO, _SIGMA[0]], [-_SIGMA[0], _ZERO]]))
GAMMA_2 = DiracMatrix(np.block([[_ZERO, _SIGMA[1]], [-_SIGMA[1], _ZERO]]))
GAMMA_3 = DiracMatrix(np.block([[_ZERO, _SIGMA[2]], [-_SIGMA[2], _ZERO]]))
GAMMA_5 = DiracMatrix(np.block([[_ZERO, _ONE], [_ONE, _ZERO]]))


def gamma_vector() -> LorentzTensor:
    r"""The gamma matrices :math:`\gamma^\mu` as a rank-1 tensor."""
    return lorentz_vector([GAMMA_0, GAMMA_1, GAMMA_2, GAMMA_3])


def slash(momentum: LorentzTensor) -> DiracMatrix:
    r"""Feynman slash :math:`\gamma^\mu p_\mu` of a four-vector.

    >>> p = lorentz_vector([2.0, 0.0, 0.0, 0.0])
    >>> np.allclose(slash(p).matrix, 2 * GAMMA_0.matrix)
    True
    """
    return contract(gamma_vector(), momentum)


def two_component_spinor(helicity: int, theta: float) -> np.ndarray:
    r"""Helicity eigenstate :math:`\chi_\lambda` along a direction in the xz-plane.

    The helicity is given in units of :math:`\frac{1}{2}`, so as :math:`\pm 1`.
    """
    if helicity == +1:
        return np.array([np.cos(theta / 2), np.sin(theta / 2)], dtype=complex)
    if helicity == -1:
        return np.array([-np.sin(theta / 2), np.cos(theta / 2)], dtype=complex)
    msg = f"Spin-1/2 helicity has to be +1 or -1 (doubled), not {helicity}"
    raise ValueError(msg)


def helicity_spinor(
    helicity: int, energy: complex, momentum: complex, mass: float, theta: float
) -> DiracSpinor:
    r"""Positive-energy spinor :math:`u(p, \lambda)` of a spin-1/2 particle.

    Args:
        helicity: Helicity in units of :math:`\frac{1}{2}`, so :math:`\pm 1`.
        energy: Energy of the particle.
        momentum: Magnitude of the three-momentum.
        mass: Mass of the particle.
        theta: Polar angle of the momentum in the xz-plane.

    The normalization is :math:`\bar{u}u = 2m`.
    """
    chi = two_component_spinor(helicity, theta)
    upper = np.sqrt(complex(energy + mass))
    lower = helicity * momentum / upper if upper != 0 else 0.0
    return DiracSpinor(np.concatenate([upper * chi, lower * chi]))
