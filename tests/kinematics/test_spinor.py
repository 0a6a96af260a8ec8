import numpy as np
import pytest

from photoamp.kinematics.lorentz import contract, lorentz_vector
from photoamp.kinematics.spinor import (
    GAMMA_0,
    GAMMA_1,
    GAMMA_2,
    GAMMA_3,
    GAMMA_5,
    IDENTITY,
    DiracMatrix,
    DiracSpinor,
    gamma_vector,
    helicity_spinor,
    slash,
)


class TestDiracMatrix:
    @pytest.mark.parametrize("mu", [0, 1, 2, 3])
    @pytest.mark.parametrize("nu", [0, 1, 2, 3])
    def test_clifford_algebra(self, mu: int, nu: int):
        gammas = [GAMMA_0, GAMMA_1, GAMMA_2, GAMMA_3]
        anticommutator = gammas[mu] * gammas[nu] + gammas[nu] * gammas[mu]
        metric = np.diag([1, -1, -1, -1])
        np.testing.assert_allclose(
            anticommutator.matrix, 2 * metric[mu, nu] * IDENTITY.matrix
        )

    def test_gamma5_anticommutes(self):
        for gamma in [GAMMA_0, GAMMA_1, GAMMA_2, GAMMA_3]:
            product = GAMMA_5 @ gamma + gamma @ GAMMA_5
            np.testing.assert_allclose(product.matrix, 0)

    def test_slash_squares_to_mass(self):
        p = lorentz_vector([5.0, 1.0, 2.0, 3.0])
        p_slash = slash(p)
        mass2 = 25.0 - 1.0 - 4.0 - 9.0
        np.testing.assert_allclose((p_slash * p_slash).matrix, mass2 * np.eye(4))

    def test_contract_gamma_vectors(self):
        # gamma^mu gamma_mu = 4
        result = contract(gamma_vector(), gamma_vector())
        np.testing.assert_allclose(result.matrix, 4 * np.eye(4))

    def test_wrong_shape(self):
        with pytest.raises(ValueError, match="shape"):
            DiracMatrix(np.eye(3))


class TestDiracSpinor:
    def test_adjoint_is_involution(self):
        u = DiracSpinor([1.0, 2.0j, -1.0, 0.5])
        np.testing.assert_allclose(u.adjoint().adjoint().components, u.components)
        assert u.adjoint().is_adjoint

    def test_bilinear_is_not_plain_product(self):
        u = DiracSpinor([1.0, 0.0, 1.0, 0.0])
        assert u.adjoint().contract(u) == 0
        assert np.dot(u.components, u.components) == 2

    def test_plain_spinor_on_the_left(self):
        u = DiracSpinor([1.0, 0.0, 0.0, 0.0])
        with pytest.raises(ValueError, match="adjoint"):
            u.contract(u)

    def test_mixed_addition(self):
        u = DiracSpinor([1.0, 0.0, 0.0, 0.0])
        with pytest.raises(ValueError, match="Cannot combine"):
            _ = u + u.adjoint()

    @pytest.mark.parametrize("helicity", [+1, -1])
    @pytest.mark.parametrize("theta", [0.0, 0.7, np.pi])
    def test_helicity_spinor_normalization(self, helicity: int, theta: float):
        mass, momentum = 0.938272, 1.5
        energy = np.sqrt(mass**2 + momentum**2)
        u = helicity_spinor(helicity, energy, momentum, mass, theta)
        assert u.adjoint().contract(u) == pytest.approx(2 * mass)

    @pytest.mark.parametrize("helicity", [+1, -1])
    def test_dirac_equation(self, helicity: int):
        mass, momentum, theta = 1.2, 0.8, 0.4
        energy = np.sqrt(mass**2 + momentum**2)
        u = helicity_spinor(helicity, energy, momentum, mass, theta)
        p = lorentz_vector(
            [energy, momentum * np.sin(theta), 0.0, momentum * np.cos(theta)]
        )
        lhs = slash(p) * u
        np.testing.assert_allclose(lhs.components, mass * u.components, atol=1e-12)

    def test_invalid_helicity(self):
        with pytest.raises(ValueError, match="has to be"):
            helicity_spinor(0, 1.0, 0.0, 1.0, 0.0)
