"""Adaptive quadrature that reports non-convergence as an error.

:func:`scipy.integrate.quad` only *warns* when it does not converge. Observables in
:mod:`photoamp` are integrated with :func:`integrate`, which escalates such
warnings to an `.IntegrationError`.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Callable

import numpy as np
from scipy import integrate as sp_integrate
from scipy.integrate import IntegrationWarning

from photoamp.exceptions import IntegrationError

_LOGGER = logging.getLogger(__name__)

DEFAULT_OPTIONS = {"epsabs": 1e-10, "epsrel": 1e-6, "limit": 200}


def integrate(
    function: Callable[[float], float], lower: float, upper: float, **options: Any
) -> float:
    """Integrate a real function over :code:`[lower, upper]`.

    Keyword arguments are forwarded to :func:`scipy.integrate.quad` and override
    `DEFAULT_OPTIONS`. An empty or inverted interval integrates to zero.

    >>> round(integrate(lambda x: x**2, 0.0, 3.0), 6)
    9.0
    """
    if not upper > lower:
        return 0.0
    quad_options = {**DEFAULT_OPTIONS, **options}
    with warnings.catch_warnings():
        warnings.simplefilter("error", IntegrationWarning)
        try:
            result, error = sp_integrate.quad(function, lower, upper, **quad_options)
        except IntegrationWarning as exc:
            msg = f"Integration over [{lower}, {upper}] did not converge: {exc}"
            raise IntegrationError(msg) from exc
    if not np.isfinite(result):
        msg = f"Integration over [{lower}, {upper}] gave a non-finite result {result}"
        raise IntegrationError(msg)
    _LOGGER.debug("Integrated over [%s, %s]: %s +/- %s", lower, upper, result, error)
    return float(result)
