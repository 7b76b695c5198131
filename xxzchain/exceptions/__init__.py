"""Exceptions and warnings raised by xxzchain."""

from xxzchain.exceptions.base import XXZChainError, XXZChainValueError
from xxzchain.exceptions.hamiltonian import (
    FieldsLengthError,
    InvalidSelectorError,
    StateNotInBasisError,
    UnbuiltHamiltonianError,
    UnsupportedMethodError,
)


class NonConvergenceWarning(UserWarning):
    """The iterative eigensolver stopped before converging."""

    pass


__all__ = [
    "XXZChainError",
    "XXZChainValueError",
    "FieldsLengthError",
    "InvalidSelectorError",
    "StateNotInBasisError",
    "UnbuiltHamiltonianError",
    "UnsupportedMethodError",
    "NonConvergenceWarning",
]
