"""A collection of basic math operations, used in `photoamp.dynamics`."""

from __future__ import annotations

from typing import Any

import sympy as sp
from sympy.printing.printer import Printer


class ComplexSqrt(sp.Expr):
    """Square root that returns positive imaginary values for negative input.

    A special version of :func:`~sympy.functions.elementary.miscellaneous.sqrt`
    that renders nicely as LaTeX and that has a defined branch for negative real
    input: :math:`\\sqrt[c]{x} = i\\sqrt{-x}` for :math:`x<0`. Its numerical
    counterpart is :func:`numpy.lib.scimath.sqrt`.

    >>> x = sp.Symbol("x", real=True)
    >>> ComplexSqrt(-4)
    2*I
    >>> ComplexSqrt(x).evaluate()
    Piecewise((I*sqrt(-x), x < 0), (sqrt(x), True))
    """

    is_commutative = True

    def __new__(cls, x: sp.Expr, *args: Any, **kwargs: Any) -> sp.Expr:
        x = sp.sympify(x)
        expr = sp.Expr.__new__(cls, x, *args, **kwargs)
        if hasattr(x, "free_symbols") and not x.free_symbols:
            return expr.evaluate()
        return expr

    def evaluate(self) -> sp.Expr:
        x = self.args[0]
        if x.is_real is False:
            return sp.sqrt(x)
        return self._evaluate_complex(x)

    def doit(self, deep: bool = True, **hints: Any) -> sp.Expr:
        x = self.args[0]
        if deep:
            x = x.doit(**hints)
        return type(self)(x).evaluate() if x.free_symbols else type(self)(x)

    @staticmethod
    def _evaluate_complex(x: sp.Expr) -> sp.Expr:
        if x.is_number:
            return sp.I * sp.sqrt(-x) if x.is_negative else sp.sqrt(x)
        return sp.Piecewise(
            (sp.I * sp.sqrt(-x), x < 0),
            (sp.sqrt(x), True),
        )

    def _latex(self, printer: Printer, *args: Any) -> str:
        x = printer._print(self.args[0])
        return Rf"\sqrt[\mathrm{{c}}]{{{x}}}"

