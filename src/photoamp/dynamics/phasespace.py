r"""Two-body phase space and its analytic continuation.

The K-matrix amplitudes in :mod:`photoamp.amplitude.partial_wave` replace the naive
phase-space factor :math:`i\rho` with the Chew-Mandelstam function :math:`G(s)`,
which has the correct branch point at threshold and is analytic below it.

Each quantity comes twice: as a :mod:`sympy` expression class that renders nicely in
LaTeX and unfolds with :meth:`~sympy.core.basic.Basic.doit`, and as a numeric
function that works on `float`, `complex` and :mod:`numpy` arrays.

Branch convention
-----------------
:math:`\rho = \sqrt{\lambda(s, m_a^2, m_b^2)}/s` uses the principal complex square
root (:func:`numpy.lib.scimath.sqrt`, `.ComplexSqrt`), so that :math:`\rho` is
positive above threshold and positive imaginary between pseudo-threshold and
threshold. The logarithm is the principal logarithm, with arguments on the negative
real axis evaluated as if approached from *below*. Above threshold, this gives
:math:`\mathrm{Im}\,G = +\rho`, and :math:`G` is continuous across threshold.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import sympy as sp
from numpy.lib import scimath
from sympy.printing.latex import LatexPrinter

from photoamp.sympy import UnevaluatedExpression, implement_expr
from photoamp.sympy.math import ComplexSqrt


@implement_expr(n_args=3)
class Kallen(UnevaluatedExpression):
    """Källén triangle function :math:`\\lambda(x, y, z)`.

    >>> x, y, z = sp.symbols("x y z")
    >>> Kallen(x, y, z).doit()
    x**2 - 2*x*y - 2*x*z + y**2 - 2*y*z + z**2
    """

    def evaluate(self) -> sp.Expr:
        x, y, z = self.args
        return x**2 + y**2 + z**2 - 2 * x * y - 2 * y * z - 2 * z * x

    def _latex(self, printer: LatexPrinter, *args: Any) -> str:
        x, y, z = map(printer._print, self.args)
        return Rf"\lambda\left({x}, {y}, {z}\right)"


@implement_expr(n_args=3)
class BreakupMomentumComplex(UnevaluatedExpression):
    r"""Two-body break-up momentum with a `.ComplexSqrt`.

    For a two-body system :math:`ab` with invariant mass squared :math:`s`, this is
    the absolute value of the momentum of :math:`a` and :math:`b` in the centre-of-mass
    frame, continued to imaginary values below threshold.
    """

    def evaluate(self) -> sp.Expr:
        s, m_a, m_b = self.args
        return ComplexSqrt(Kallen(s, m_a**2, m_b**2)) / (2 * sp.sqrt(s))

    def _latex(self, printer: LatexPrinter, *args: Any) -> str:
        s = printer._print(self.args[0])
        return Rf"q^\mathrm{{c}}\left({s}\right)"


@implement_expr(n_args=3)
class ChewMandelstam(UnevaluatedExpression):
    r"""Chew-Mandelstam function :math:`G(s)` for two masses :math:`m_a, m_b`.

    .. math::
        G(s) = -\frac{1}{\pi}\left[
            \rho \log\frac{\xi + \rho}{\xi - \rho}
            - \xi\,\frac{m_b - m_a}{m_b + m_a}\log\frac{m_b}{m_a}
        \right],
        \quad
        \rho = \frac{\sqrt{\lambda(s, m_a^2, m_b^2)}}{s},
        \quad
        \xi = 1 - \frac{(m_a + m_b)^2}{s}

    The logarithm of the ratio is written as :math:`-\log\frac{\xi-\rho}{\xi+\rho}`,
    which places the branch of :func:`~sympy.functions.elementary.exponential.log`
    on the side that the numeric :func:`chew_mandelstam` uses.
    """

    def evaluate(self) -> sp.Expr:
        s, m_a, m_b = self.args
        rho = ComplexSqrt(Kallen(s, m_a**2, m_b**2)) / s
        xi = 1 - (m_a + m_b) ** 2 / s
        log_ratio = -sp.log((xi - rho) / (xi + rho))
        mass_term = xi * (m_b - m_a) / (m_b + m_a) * sp.log(m_b / m_a)
        return -(rho * log_ratio - mass_term) / sp.pi

    def _latex(self, printer: LatexPrinter, *args: Any) -> str:
        s, m_a, m_b = map(printer._print, self.args)
        return Rf"G\left({s}; {m_a}, {m_b}\right)"


def kallen(x: Any, y: Any, z: Any) -> Any:
    """Numeric Källén function, see `Kallen`.

    >>> kallen(4.0, 1.0, 1.0)
    0.0
    """
    return x**2 + y**2 + z**2 - 2 * x * y - 2 * y * z - 2 * z * x


def breakup_momentum(s: Any, m_a: float, m_b: float) -> Any:
    """Numeric complex break-up momentum, see `BreakupMomentumComplex`.

    >>> complex(breakup_momentum(4.0, 0.0, 0.0))
    (1+0j)
    """
    lam = kallen(s, m_a**2, m_b**2)
    return scimath.sqrt(lam) / scimath.sqrt(4 * np.asarray(s, dtype=complex))


def phase_space_factor(s: Any, m_a: float, m_b: float) -> Any:
    r"""Complex phase-space factor :math:`\rho(s) = \sqrt{\lambda}/s`."""
    return scimath.sqrt(kallen(s, m_a**2, m_b**2)) / s


def chew_mandelstam(s: Any, m_a: float, m_b: float) -> Any:
    """Numeric Chew-Mandelstam function, see `ChewMandelstam`."""
    rho = np.asarray(phase_space_factor(s, m_a, m_b), dtype=complex)
    xi = 1 - (m_a + m_b) ** 2 / np.asarray(s)
    log_ratio = _log_from_below((xi + rho) / (xi - rho))
    mass_term = xi * (m_b - m_a) / (m_b + m_a) * np.log(m_b / m_a)
    result = -(rho * log_ratio - mass_term) / np.pi
    if result.ndim == 0:
        return complex(result)
    return result


def _log_from_below(z: np.ndarray) -> np.ndarray:
    """Principal logarithm, taking :math:`\\arg z = -\\pi` on the negative real axis."""
    z = np.asarray(z, dtype=complex)
    on_cut = (z.imag == 0) & (z.real < 0)
    phase = np.where(on_cut, -np.pi, np.angle(z))
    return np.log(np.abs(z)) + 1j * phase
