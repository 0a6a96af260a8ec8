"""Tools that facilitate in building :mod:`sympy` expressions.

Expression classes in :mod:`photoamp.dynamics` derive from `UnevaluatedExpression`,
so that they render condensed in LaTeX and only unfold with
:meth:`~sympy.core.basic.Basic.doit`.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, TypeVar

import sympy as sp
from sympy.printing.latex import LatexPrinter


class UnevaluatedExpression(sp.Expr):
    """Base class for classes that expressions with an ``evaluate()`` method.

    Derive from this class when decorating a class with :func:`implement_expr`
    or :func:`implement_doit_method`. It is important to derive from
    `UnevaluatedExpression`, because an :code:`evaluate()` method has to be
    implemented.
    """

    @abstractmethod
    def evaluate(self) -> sp.Expr:
        """Evaluate and 'unfold' this expression by one level."""

    def _latex(self, printer: LatexPrinter, *args: Any) -> str:
        """Provide a mathematical Latex representation for notebooks."""
        args = tuple(map(printer._print, self.args))
        return f"{type(self).__name__}{args}"


DecoratedClass = TypeVar("DecoratedClass", bound=UnevaluatedExpression)
"""`~typing.TypeVar` for decorators like :func:`implement_doit_method`."""


def implement_expr(
    n_args: int,
) -> Callable[[type[DecoratedClass]], type[DecoratedClass]]:
    """Decorator for classes that derive from `UnevaluatedExpression`.

    Implement a `~object.__new__` and `~sympy.core.basic.Basic.doit` method for a
    class that derives from `~sympy.core.expr.Expr` (via `UnevaluatedExpression`).
    """

    def decorator(decorated_class: type[DecoratedClass]) -> type[DecoratedClass]:
        decorated_class = implement_new_method(n_args)(decorated_class)
        return implement_doit_method()(decorated_class)

    return decorator


def implement_new_method(
    n_args: int,
) -> Callable[[type[DecoratedClass]], type[DecoratedClass]]:
    """Implement ``__new__()`` method for an `UnevaluatedExpression` class."""

    def decorator(decorated_class: type[DecoratedClass]) -> type[DecoratedClass]:
        def new_method(cls: type, *args: sp.Basic, **hints: Any) -> sp.Expr:
            if len(args) != n_args:
                msg = f"{n_args} parameters expected, got {len(args)}"
                raise ValueError(msg)
            args = sp.sympify(args)
            return create_expression(cls, hints.get("evaluate", False), *args)

        decorated_class.__new__ = new_method  # type: ignore[assignment]
        return decorated_class

    return decorator


def implement_doit_method() -> Callable[[type[DecoratedClass]], type[DecoratedClass]]:
    """Implement ``doit()`` method for an `UnevaluatedExpression` class.

    The resulting :meth:`~sympy.core.basic.Basic.doit` unfolds the expression
    recursively, so that nested `UnevaluatedExpression` instances are evaluated as
    well.
    """

    def decorator(decorated_class: type[DecoratedClass]) -> type[DecoratedClass]:
        def doit_method(self: Any, deep: bool = True, **hints: Any) -> sp.Expr:
            expr = self.evaluate()
            if deep:
                return expr.doit(deep=deep, **hints)
            return expr

        decorated_class.doit = doit_method  # type: ignore[assignment]
        return decorated_class

    return decorator


def create_expression(
    cls: type[UnevaluatedExpression], evaluate: bool, *args: Any, **kwargs: Any
) -> sp.Expr:
    """Helper function for implementing :code:`Expr.__new__`."""
    expr = sp.Expr.__new__(cls, *args, **kwargs)
    if evaluate:
        return expr.evaluate()  # type: ignore[attr-defined]
    return expr
