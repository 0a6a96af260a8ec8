"""Lorentz tensors and their contraction with the Minkowski metric.

Helicity amplitudes are assembled by contracting vertex factors, propagators and
spinor bilinears over their Lorentz indices. A `LorentzTensor` holds one element per
index tuple. The element type can be a number, a `.DiracMatrix` or a `.DiracSpinor`,
and :func:`contract` weights each term with the product of diagonal metric entries
in the mostly-minus convention :math:`g = \\mathrm{diag}(+1, -1, -1, -1)`.

>>> p = lorentz_vector([5.0, 0.0, 0.0, 3.0])
>>> dot(p, p)
16.0
"""

from __future__ import annotations

import itertools
import operator
from enum import IntEnum
from functools import lru_cache, reduce, singledispatch
from typing import Any, Callable, Mapping, Protocol, Sequence, runtime_checkable

from attrs import field, frozen
from attrs.validators import ge, instance_of

from photoamp.exceptions import RankMismatchError


class LorentzIndex(IntEnum):
    """One of the four space-time directions."""

    T = 0
    X = 1
    Y = 2
    Z = 3


@singledispatch
def metric(index: Any) -> int:
    """Diagonal entry of the Minkowski metric.

    For a single index, this is :math:`+1` for the time component and :math:`-1` for
    the spatial components. For a `tuple` of indices, it is the product of the
    individual entries.

    >>> metric(LorentzIndex.T), metric(2)
    (1, -1)
    >>> metric((LorentzIndex.X, LorentzIndex.Y))
    1
    """
    msg = f"Cannot compute metric of {type(index).__name__}"
    raise TypeError(msg)


@metric.register(int)
def _(index: int) -> int:
    if index not in range(len(LorentzIndex)):
        msg = f"Lorentz index has to be 0, 1, 2, or 3, not {index}"
        raise ValueError(msg)
    return 1 if index == LorentzIndex.T else -1


@metric.register(tuple)
@metric.register(list)
def _(indices: Sequence[int]) -> int:
    return reduce(operator.mul, (metric(int(mu)) for mu in indices), 1)


@lru_cache(maxsize=None)
def permutations(rank: int) -> tuple[tuple[LorentzIndex, ...], ...]:
    """All :math:`4^\\mathrm{rank}` index tuples of a tensor of given rank.

    >>> len(permutations(2))
    16
    >>> permutations(1)[:2]
    ((<LorentzIndex.T: 0>,), (<LorentzIndex.X: 1>,))
    """
    if rank < 0:
        msg = f"Rank has to be non-negative, not {rank}"
        raise ValueError(msg)
    return tuple(itertools.product(LorentzIndex, repeat=rank))


@runtime_checkable
class ElementContractible(Protocol):
    """Element type with its own rule for contracting with another element.

    Types that do not implement this protocol (numbers in particular) are contracted
    with an ordinary product.
    """

    def contract(self, other: Any) -> Any:
        """Contract this element with an element of the same kind."""


def contract_elements(left: Any, right: Any) -> Any:
    """Contract two tensor elements.

    `ElementContractible` elements decide themselves how to contract with the other
    element (see `.DiracSpinor.contract`). Anything else is multiplied.
    """
    if isinstance(left, ElementContractible):
        return left.contract(right)
    return left * right


def _to_index_tuple(indices: Any) -> tuple[LorentzIndex, ...]:
    if isinstance(indices, tuple):
        return tuple(LorentzIndex(mu) for mu in indices)
    return (LorentzIndex(indices),)


def _check_components(
    instance: LorentzTensor, attribute: Any, value: Mapping[tuple, Any]
) -> None:
    expected = set(permutations(instance.rank))
    if set(value) != expected:
        msg = (
            f"A rank-{instance.rank} tensor requires components for all"
            f" {len(expected)} index tuples, got {len(value)}"
        )
        raise ValueError(msg)


@frozen
class LorentzTensor:
    """Tensor of fixed rank with one element per tuple of `LorentzIndex` values.

    Elements are accessed with :code:`tensor[mu, nu]` or :code:`tensor(mu, nu)`.
    Tensors of equal rank can be added and subtracted, and every tensor can be
    multiplied by a scalar, so that :func:`contract` is bilinear.
    """

    __array_ufunc__ = None

    rank: int = field(validator=[instance_of(int), ge(0)])
    components: Mapping[tuple[LorentzIndex, ...], Any] = field(
        converter=dict, validator=_check_components, repr=False
    )

    @classmethod
    def from_function(cls, rank: int, function: Callable[..., Any]) -> LorentzTensor:
        """Create a tensor by evaluating a function on every index tuple."""
        return cls(
            rank=rank,
            components={perm: function(*perm) for perm in permutations(rank)},
        )

    def __getitem__(self, indices: Any) -> Any:
        return self.components[_to_index_tuple(indices)]

    def __call__(self, *indices: int) -> Any:
        return self.components[_to_index_tuple(indices)]

    def __add__(self, other: LorentzTensor) -> LorentzTensor:
        return self.__combine(other, operator.add)

    def __sub__(self, other: LorentzTensor) -> LorentzTensor:
        return self.__combine(other, operator.sub)

    def __mul__(self, factor: Any) -> LorentzTensor:
        if isinstance(factor, LorentzTensor):
            return NotImplemented
        return LorentzTensor(
            self.rank,
            {perm: value * factor for perm, value in self.components.items()},
        )

    def __rmul__(self, factor: Any) -> LorentzTensor:
        if isinstance(factor, LorentzTensor):
            return NotImplemented
        return LorentzTensor(
            self.rank,
            {perm: factor * value for perm, value in self.components.items()},
        )

    def __neg__(self) -> LorentzTensor:
        return self * -1

    def __combine(
        self, other: LorentzTensor, operation: Callable[[Any, Any], Any]
    ) -> LorentzTensor:
        if not isinstance(other, LorentzTensor):
            return NotImplemented
        _check_same_rank(self, other)
        return LorentzTensor(
            self.rank,
            {
                perm: operation(value, other.components[perm])
                for perm, value in self.components.items()
            },
        )

    def outer(self, other: LorentzTensor) -> LorentzTensor:
        r"""Tensor product :math:`T^{\mu\nu} = A^{\mu}B^{\nu}` for any ranks."""
        return LorentzTensor(
            self.rank + other.rank,
            {
                left_perm + right_perm: left * right
                for left_perm, left in self.components.items()
                for right_perm, right in other.components.items()
            },
        )

    def map(self, function: Callable[[Any], Any]) -> LorentzTensor:
        """Apply a function to every element, for instance a complex conjugation."""
        return LorentzTensor(
            self.rank,
            {perm: function(value) for perm, value in self.components.items()},
        )


def lorentz_vector(components: Sequence[Any]) -> LorentzTensor:
    """Create a rank-1 tensor from its four components :math:`(v^0, v^1, v^2, v^3)`."""
    if len(components) != len(LorentzIndex):
        msg = f"A Lorentz vector has 4 components, got {len(components)}"
        raise ValueError(msg)
    return LorentzTensor(
        rank=1,
        components={(mu,): components[mu] for mu in LorentzIndex},
    )


def metric_tensor() -> LorentzTensor:
    r"""The rank-2 metric tensor :math:`g^{\mu\nu}`."""
    return LorentzTensor.from_function(
        rank=2, function=lambda mu, nu: metric(int(mu)) if mu == nu else 0
    )


def contract(left: LorentzTensor, right: LorentzTensor) -> Any:
    r"""Fully contract two tensors of the same rank.

    .. math::
        \sum_{\mu\ldots} g_{\mu\mu}\cdots\, L^{\mu\ldots} \otimes R^{\mu\ldots}

    where :math:`\otimes` is the element-level contraction of
    :func:`contract_elements`. The result type follows from the element type: a
    number for scalar or spinor elements and a `.DiracMatrix` for matrix elements.
    """
    _check_same_rank(left, right)
    terms = (
        metric(perm) * contract_elements(left.components[perm], right.components[perm])
        for perm in permutations(left.rank)
    )
    return reduce(operator.add, terms)


def dot(p: LorentzTensor, q: LorentzTensor) -> Any:
    """Minkowski product of two rank-1 tensors."""
    if p.rank != 1:
        msg = f"Can only take the dot product of vectors, not of rank-{p.rank} tensors"
        raise RankMismatchError(msg)
    return contract(p, q)


def _check_same_rank(left: LorentzTensor, right: LorentzTensor) -> None:
    if left.rank != right.rank:
        msg = (
            f"Cannot combine a rank-{left.rank} tensor with a rank-{right.rank}"
            " tensor"
        )
        raise RankMismatchError(msg)
