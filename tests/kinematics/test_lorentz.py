from __future__ import annotations

from typing import Any, Callable

import numpy as np
import pytest

from photoamp.exceptions import RankMismatchError
from photoamp.kinematics.lorentz import (
    ElementContractible,
    LorentzIndex,
    LorentzTensor,
    contract,
    dot,
    lorentz_vector,
    metric,
    metric_tensor,
    permutations,
)
from photoamp.kinematics.spinor import DiracMatrix, DiracSpinor

RNG = np.random.default_rng(seed=0)


def _random_complex(size=None) -> Any:
    return RNG.normal(size=size) + 1j * RNG.normal(size=size)


def _scalar() -> complex:
    return complex(_random_complex())


def _matrix() -> DiracMatrix:
    return DiracMatrix(_random_complex(size=(4, 4)))


def _spinor() -> DiracSpinor:
    return DiracSpinor(_random_complex(size=4))


def _adjoint_spinor() -> DiracSpinor:
    return DiracSpinor(_random_complex(size=4), is_adjoint=True)


def _random_tensor(rank: int, element: Callable[[], Any]) -> LorentzTensor:
    return LorentzTensor.from_function(rank, lambda *_: element())


def _as_array(value: Any) -> np.ndarray:
    if isinstance(value, DiracMatrix):
        return value.matrix
    return np.asarray(value)


class TestMetric:
    @pytest.mark.parametrize(
        ("index", "expected"),
        [(LorentzIndex.T, 1), (LorentzIndex.X, -1), (2, -1), (3, -1)],
    )
    def test_single_index(self, index, expected: int):
        assert metric(index) == expected

    @pytest.mark.parametrize(
        ("indices", "expected"),
        [
            ((0, 0), 1),
            ((0, 1), -1),
            ((1, 2), 1),
            ((1, 2, 3), -1),
            ((0, 0, 0, 3), -1),
        ],
    )
    def test_index_tuple(self, indices: tuple, expected: int):
        assert metric(indices) == expected

    def test_invalid_index(self):
        with pytest.raises(ValueError, match="has to be 0, 1, 2, or 3"):
            metric(4)

    @pytest.mark.parametrize("rank", [0, 1, 2, 3])
    def test_permutations_are_complete(self, rank: int):
        perms = permutations(rank)
        assert len(perms) == 4**rank
        assert len(set(perms)) == 4**rank


class TestLorentzTensor:
    def test_indexed_access(self):
        tensor = LorentzTensor.from_function(2, lambda mu, nu: 10 * mu + nu)
        assert tensor[1, 3] == 13
        assert tensor(3, 1) == 31
        vector = lorentz_vector([1.0, 2.0, 3.0, 4.0])
        assert vector[LorentzIndex.Z] == 4.0
        assert vector(0) == 1.0

    def test_missing_components(self):
        with pytest.raises(ValueError, match="requires components for all"):
            LorentzTensor(rank=1, components={(LorentzIndex.T,): 1.0})

    def test_wrong_vector_length(self):
        with pytest.raises(ValueError, match="has 4 components"):
            lorentz_vector([1.0, 2.0])

    def test_linear_operations(self):
        p = lorentz_vector([4.0, 1.0, 2.0, 3.0])
        q = lorentz_vector([1.0, 1.0, 1.0, 1.0])
        combined = 2 * p - q + (-q)
        assert [combined(mu) for mu in LorentzIndex] == [6.0, 0.0, 2.0, 4.0]

    def test_outer_product(self):
        p = lorentz_vector([1.0, 2.0, 3.0, 4.0])
        q = lorentz_vector([5.0, 6.0, 7.0, 8.0])
        outer = p.outer(q)
        assert outer.rank == 2
        assert outer[2, 3] == 3.0 * 8.0

    def test_dot_product(self):
        p = lorentz_vector([5.0, 1.0, 2.0, 3.0])
        q = lorentz_vector([2.0, 1.0, 0.0, -1.0])
        assert dot(p, q) == pytest.approx(10.0 - 1.0 + 3.0)

    def test_metric_tensor_trace(self):
        g = metric_tensor()
        assert contract(g, g) == 4

    def test_rank_mismatch(self):
        vector = lorentz_vector([1.0, 0.0, 0.0, 0.0])
        with pytest.raises(RankMismatchError):
            contract(vector, metric_tensor())
        with pytest.raises(RankMismatchError):
            _ = vector + metric_tensor()
        with pytest.raises(RankMismatchError):
            dot(metric_tensor(), metric_tensor())


class TestContraction:
    def test_protocol_membership(self):
        assert isinstance(_matrix(), ElementContractible)
        assert isinstance(_spinor(), ElementContractible)
        assert not isinstance(1.0, ElementContractible)

    @pytest.mark.parametrize("rank", [1, 2])
    @pytest.mark.parametrize(
        ("left_element", "right_element"),
        [
            (_scalar, _scalar),
            (_matrix, _matrix),
            (_matrix, _scalar),
            (_adjoint_spinor, _spinor),
        ],
        ids=["scalar-scalar", "matrix-matrix", "matrix-scalar", "spinor-spinor"],
    )
    def test_bilinearity(self, rank: int, left_element, right_element):
        a, b = 0.7 - 1.3j, -2.1 + 0.4j
        x = _random_tensor(rank, left_element)
        y = _random_tensor(rank, left_element)
        z = _random_tensor(rank, right_element)
        np.testing.assert_allclose(
            _as_array(contract(a * x + b * y, z)),
            _as_array(a * contract(x, z) + b * contract(y, z)),
        )
        w = _random_tensor(rank, left_element)
        u = _random_tensor(rank, right_element)
        v = _random_tensor(rank, right_element)
        np.testing.assert_allclose(
            _as_array(contract(w, a * u + b * v)),
            _as_array(a * contract(w, u) + b * contract(w, v)),
        )

    def test_spinor_elements_use_bilinear(self):
        u = _spinor()
        v = _spinor()
        left = lorentz_vector([u.adjoint()] * 4)
        right = lorentz_vector([v] * 4)
        bilinear = u.adjoint().contract(v)
        # metric signs +1 -1 -1 -1 sum to -2
        assert contract(left, right) == pytest.approx(-2 * bilinear)
