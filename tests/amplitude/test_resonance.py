import numpy as np
import pytest

from photoamp.amplitude.resonance import (
    THRESHOLD_TABLE,
    BaryonResonance,
    wigner_small_d,
)
from photoamp.exceptions import QuantumNumberError
from photoamp.kinematics.reaction import ReactionKinematics

MASS, WIDTH = 4.45, 0.04
SPIN_PARITIES = sorted((abs(key), int(np.sign(key))) for key in THRESHOLD_TABLE)


@pytest.mark.parametrize("theta", [0.0, 0.4, 1.7, np.pi])
def test_wigner_small_d_spin_half(theta: float):
    d = wigner_small_d(1, 1, 1)
    assert float(np.real(d(theta))) == pytest.approx(np.cos(theta / 2))


@pytest.mark.parametrize("doubled_j", [1, 3, 5])
@pytest.mark.parametrize("theta", [0.3, 2.2])
def test_wigner_small_d_is_orthogonal(doubled_j: int, theta: float):
    projections = range(-doubled_j, doubled_j + 1, 2)
    for m in projections:
        values = [wigner_small_d(doubled_j, m, n)(theta) for n in projections]
        norm = sum(abs(value) ** 2 for value in values)
        assert norm == pytest.approx(1.0)


class TestBaryonResonance:
    @pytest.mark.parametrize("parity", [0, 2])
    def test_invalid_parity(self, jpsi_kinematics, parity: int):
        with pytest.raises(QuantumNumberError, match="Invalid parity"):
            BaryonResonance(jpsi_kinematics, 3, parity, MASS, WIDTH)

    @pytest.mark.parametrize("J", [7, 2])
    def test_unavailable_spin(self, jpsi_kinematics, J: int):  # noqa: N803
        with pytest.raises(QuantumNumberError, match="not available"):
            BaryonResonance(jpsi_kinematics, J, +1, MASS, WIDTH)

    @pytest.mark.parametrize(("J", "parity"), SPIN_PARITIES)
    def test_threshold_table(self, jpsi_kinematics, J: int, parity: int):  # noqa: N803
        amplitude = BaryonResonance(jpsi_kinematics, J, parity, MASS, WIDTH)
        l_min, fraction = THRESHOLD_TABLE[J * parity]
        assert amplitude.l_min == l_min
        assert amplitude.transverse_fraction == fraction
        assert amplitude.threshold_factor(MASS**2) == pytest.approx(1.0)

    def test_zero_without_parameters(self, jpsi_kinematics):
        amplitude = BaryonResonance(jpsi_kinematics, 3, -1, MASS, WIDTH)
        s = MASS**2
        t = jpsi_kinematics.t_man(s, 0.5)
        assert amplitude.helicity_amplitude((1, 1, 1, 1), s, t) == 0

    def test_helicity_conservation(self, jpsi_kinematics: ReactionKinematics):
        amplitude = BaryonResonance(jpsi_kinematics, 1, +1, MASS, WIDTH)
        amplitude.set_parameters([0.01, 0.5])
        s = MASS**2
        t = jpsi_kinematics.t_man(s, 0.5)
        # initial helicity 3/2 does not couple to a spin-1/2 resonance
        assert amplitude.helicity_amplitude((1, -1, 1, 1), s, t) == 0
        assert amplitude.helicity_amplitude((1, 1, 0, 1), s, t) != 0

    def test_ratio_ignored_for_spin_half(self, jpsi_kinematics):
        amplitude = BaryonResonance(jpsi_kinematics, 1, -1, MASS, WIDTH)
        amplitude.set_parameters([0.01, 0.0])
        reference = amplitude.photo_coupling(1)
        amplitude.set_parameters([0.01, 0.7])
        assert amplitude.photo_coupling(1) == pytest.approx(reference)

    def test_photocoupling_ratio(self, jpsi_kinematics):
        amplitude = BaryonResonance(jpsi_kinematics, 3, -1, MASS, WIDTH)
        amplitude.set_parameters([0.01, 0.7])
        assert amplitude.photo_coupling(3) / amplitude.photo_coupling(1) == (
            pytest.approx(0.7)
        )

    def test_breit_wigner_peak(self, jpsi_kinematics: ReactionKinematics):
        amplitude = BaryonResonance(jpsi_kinematics, 3, -1, MASS, WIDTH)
        amplitude.set_parameters([0.01, 0.5])
        helicities = (1, 1, 1, 1)
        theta = 0.8

        def magnitude(s: float) -> float:
            t = jpsi_kinematics.t_man(s, theta)
            return abs(amplitude.helicity_amplitude(helicities, s, t))

        on_peak = magnitude(MASS**2)
        off_peak = magnitude((MASS + 5 * WIDTH) ** 2)
        off_pole = (MASS + 5 * WIDTH) ** 2 - MASS**2 + 1j * MASS * WIDTH
        pole_ratio = abs(off_pole) / (MASS * WIDTH)
        assert on_peak / off_peak == pytest.approx(pole_ratio, rel=1e-6)

    def test_cross_section_is_positive(self, jpsi_kinematics):
        amplitude = BaryonResonance(jpsi_kinematics, 5, +1, MASS, WIDTH)
        amplitude.set_parameters([0.01, 0.5])
        s = MASS**2
        t = jpsi_kinematics.t_man(s, 1.0)
        assert amplitude.differential_xsection(s, t) > 0
