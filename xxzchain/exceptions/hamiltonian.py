"""Errors raised while building or diagonalizing a Hamiltonian."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from xxzchain.exceptions.base import XXZChainError, XXZChainValueError


@dataclass
class InvalidSelectorError(XXZChainValueError):
    """The up-spin selector is incompatible with the chain length.

    Attributes:
        size: The chain length.
        selector: The invalid selector.
    """

    size: int
    selector: Any

    def __str__(self) -> str:
        return (
            f"Invalid selector {self.selector!r} for a chain of {self.size} "
            "sites: up-spin counts must be distinct integers between 0 and "
            f"{self.size}."
        )


@dataclass
class FieldsLengthError(XXZChainValueError):
    """The local fields don't match the number of sites.

    Attributes:
        size: The chain length.
        invalid: The length of the fields that were given.
    """

    size: int
    invalid: int

    def __str__(self) -> str:
        return (
            f"Length of fields ({self.invalid}) must match the number of "
            f"sites ({self.size})."
        )


@dataclass
class StateNotInBasisError(XXZChainValueError):
    """A state label could not be found in the basis.

    During assembly this means the operator leaves the symmetry sector the
    basis was built for.

    Attributes:
        state: The label that was looked up.
    """

    state: int

    def __str__(self) -> str:
        return (
            f"State {int(self.state)} (0b{int(self.state):b}) is not part "
            "of the basis."
        )


class UnbuiltHamiltonianError(XXZChainError):
    """The Hamiltonian matrix was requested before being built."""

    def __str__(self) -> str:
        return (
            "Hamiltonian matrix not set. Call `build()` before using or "
            "diagonalizing the matrix."
        )


@dataclass
class UnsupportedMethodError(XXZChainValueError):
    """An unknown diagonalization method was requested.

    Attributes:
        method: The invalid method.
        expected: The names of the supported methods.
    """

    method: Any
    expected: Sequence[str]

    def __str__(self) -> str:
        return (
            f"Method {self.method!r} not allowed. Allowed methods are "
            f"instances of {', '.join(self.expected)}."
        )
