"""Physical constants in GeV units.

Cross-sections are expressed in millibarn unless stated otherwise.
"""

import numpy as np

PI = np.pi
ALPHA = 1.0 / 137.0
E_CHARGE = np.sqrt(4.0 * PI * ALPHA)

GEV2_TO_NB = 0.3894e6
"""Conversion factor from :math:`\\mathrm{GeV}^{-2}` to nanobarn."""

M_PROTON = 0.938272
M_PION = 0.13957
M2_PION = M_PION**2
M_B1 = 1.2295
M_JPSI = 3.0969

F_JPSI = 0.278
"""Decay constant of the :math:`J/\\psi` in GeV."""

