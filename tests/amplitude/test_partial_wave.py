import numpy as np
import pytest

from photoamp.amplitude.partial_wave import ScatteringLength, TwoChannelKMatrix
from photoamp.dynamics.phasespace import chew_mandelstam
from photoamp.kinematics.reaction import ReactionKinematics


class TestRawPartialWave:
    @pytest.mark.parametrize("J", [-1, 1.5, "1"])
    def test_invalid_spin(self, pseudoscalar_kinematics, J):  # noqa: N803
        with pytest.raises(ValueError, match="non-negative integer"):
            ScatteringLength(pseudoscalar_kinematics, J=J)

    def test_only_reference_helicities(self, b1_kinematics: ReactionKinematics):
        amplitude = ScatteringLength(b1_kinematics, J=1)
        amplitude.set_parameters([0.1, 1.0])
        s = 12.0
        t = b1_kinematics.t_man(s, theta=0.4)
        reference, *others = b1_kinematics.helicities
        assert amplitude.helicity_amplitude(reference, s, t) != 0
        for helicities in others:
            assert amplitude.helicity_amplitude(helicities, s, t) == 0

    @pytest.mark.parametrize("J", [0, 1, 2])
    def test_legendre_projection(self, pseudoscalar_kinematics, J: int):  # noqa: N803
        amplitude = ScatteringLength(pseudoscalar_kinematics, J=J)
        amplitude.set_parameters([0.3, 2.0])
        s = 10.0
        reference = pseudoscalar_kinematics.helicities[0]
        forward = amplitude.helicity_amplitude(
            reference, s, pseudoscalar_kinematics.t_man(s, 0.0)
        )
        assert forward == pytest.approx(np.sqrt(2) * (2 * J + 1) * amplitude.evaluate())
        if J == 1:
            t = pseudoscalar_kinematics.t_man(s, np.pi / 2)
            value = amplitude.helicity_amplitude(reference, s, t)
            assert value == pytest.approx(0, abs=1e-12)

    def test_probability_distribution(self, pseudoscalar_kinematics):
        amplitude = ScatteringLength(pseudoscalar_kinematics, J=0)
        amplitude.set_parameters([0.1, 1.0])
        s = 6.0
        t = pseudoscalar_kinematics.t_man(s, 1.0)
        reference = pseudoscalar_kinematics.helicities[0]
        value = amplitude.helicity_amplitude(reference, s, t)
        expected = abs(value) ** 2 / 4
        assert amplitude.probability_distribution(s, t) == pytest.approx(expected)

    def test_s_wave_cross_section_is_flat(self, pseudoscalar_kinematics):
        amplitude = ScatteringLength(pseudoscalar_kinematics, J=0)
        amplitude.set_parameters([0.1, 1.0])
        s = 6.0
        t_lower, t_upper = pseudoscalar_kinematics.t_bounds(s)
        dsigma_dt = amplitude.differential_xsection(s, 0.5 * (t_lower + t_upper))
        expected = dsigma_dt * (t_upper - t_lower)
        assert amplitude.integrated_xsection(s) == pytest.approx(expected, rel=1e-6)


class TestScatteringLength:
    def test_labels(self, pseudoscalar_kinematics):
        amplitude = ScatteringLength(pseudoscalar_kinematics, J=3)
        assert amplitude.parameter_labels() == ["a[3]", "b[3]"]

    def test_s_wave(self, pseudoscalar_kinematics: ReactionKinematics):
        amplitude = ScatteringLength(pseudoscalar_kinematics, J=0)
        amplitude.set_parameters([0.1, 1.0])
        s = 5.0
        amplitude.store(pseudoscalar_kinematics.helicities[0], s, -0.5)
        loop = chew_mandelstam(s, 1.0, pseudoscalar_kinematics.baryon_mass)
        assert amplitude.evaluate() == pytest.approx(1 / (1 - 0.1 * loop))


class TestTwoChannelKMatrix:
    MASSES = (1.0, 1.1)

    def test_labels(self, pseudoscalar_kinematics):
        amplitude = TwoChannelKMatrix(pseudoscalar_kinematics, 2, self.MASSES)
        assert amplitude.parameter_labels() == [
            "a00[2]",
            "a01[2]",
            "a11[2]",
            "b0[2]",
            "b1[2]",
        ]

    def test_no_terms_before_evaluation(self, pseudoscalar_kinematics):
        amplitude = TwoChannelKMatrix(pseudoscalar_kinematics, 0, self.MASSES)
        with pytest.raises(RuntimeError, match="not been evaluated"):
            _ = amplitude.k_matrix

    @pytest.mark.parametrize("s", [2.5, 4.2, 4.5, 8.0, 30.0])
    def test_decoupled_channels(self, pseudoscalar_kinematics, s: float):
        amplitude = TwoChannelKMatrix(pseudoscalar_kinematics, 0, self.MASSES)
        amplitude.set_parameters([0.1, 0.0, 0.1, 1.0, 0.0])
        single_channel = ScatteringLength(pseudoscalar_kinematics, 0)
        single_channel.set_parameters([0.1, 1.0])
        reference = pseudoscalar_kinematics.helicities[0]
        for amp in (amplitude, single_channel):
            amp.store(reference, s, -0.3)
        value = amplitude.evaluate()
        assert amplitude.a01 == 0
        g0, _ = amplitude.loop_functions
        k00 = amplitude.k_matrix[0, 0]
        b0, _ = amplitude.production
        assert value == pytest.approx(b0 * (1 + g0 * k00 / (1 - g0 * k00)))
        assert value == pytest.approx(single_channel.evaluate())

    @pytest.mark.parametrize("J", [0, 1, 2])
    def test_k_matrix_is_symmetric(self, pseudoscalar_kinematics, J: int):  # noqa: N803
        amplitude = TwoChannelKMatrix(pseudoscalar_kinematics, J, self.MASSES)
        amplitude.set_parameters([0.2, -0.4, 0.3, 1.0, 0.5])
        amplitude.store(pseudoscalar_kinematics.helicities[0], 6.0, -0.3)
        amplitude.evaluate()
        k_matrix = amplitude.k_matrix
        np.testing.assert_allclose(k_matrix, k_matrix.T)
        q0, q1 = amplitude.momenta
        assert k_matrix[0, 1] == pytest.approx((q0 * q1) ** J * -0.4)

    def test_intermediate_terms(self, pseudoscalar_kinematics):
        amplitude = TwoChannelKMatrix(pseudoscalar_kinematics, 1, self.MASSES)
        amplitude.set_parameters([0.2, -0.4, 0.3, 1.0, 0.5])
        amplitude.store(pseudoscalar_kinematics.helicities[0], 6.0, -0.3)
        value = amplitude.evaluate()
        g0, g1 = amplitude.loop_functions
        b0, b1 = amplitude.production
        k = amplitude.k_matrix
        determinant = k[0, 0] * k[1, 1] - k[0, 1] ** 2
        denominator = (1 - g0 * k[0, 0]) * (1 - g1 * k[1, 1]) - g0 * g1 * k[0, 1] ** 2
        assert amplitude.determinant == pytest.approx(determinant)
        assert amplitude.denominator == pytest.approx(denominator)
        a00 = (k[0, 0] - g1 * determinant) / denominator
        a01 = k[0, 1] / denominator
        assert value == pytest.approx(b0 * (1 + g0 * a00) + b1 * g1 * a01)

    def test_matches_matrix_inversion(self, pseudoscalar_kinematics):
        amplitude = TwoChannelKMatrix(pseudoscalar_kinematics, 0, self.MASSES)
        amplitude.set_parameters([0.2, -0.4, 0.3, 1.0, 0.5])
        amplitude.store(pseudoscalar_kinematics.helicities[0], 6.0, -0.3)
        value = amplitude.evaluate()
        g = np.diag(amplitude.loop_functions)
        k = amplitude.k_matrix
        t_matrix = np.linalg.solve(np.eye(2) - k @ g, k)
        production = np.array(amplitude.production)
        expected = production[0] + (production @ g @ t_matrix)[0]
        assert value == pytest.approx(expected)
