# Copyright 2025 xxzchain Development Team
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Defines the XXZHamiltonian class and its sparse assembly."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

import numpy as np
import qutip
import scipy.sparse

from xxzchain.basis import Basis
from xxzchain.exceptions import FieldsLengthError, UnbuiltHamiltonianError
from xxzchain.operators.spin import SiteOperator, sz
from xxzchain.operators.terms import HOPPING_TERMS, interaction

logger = logging.getLogger(__name__)


class BuildState(Enum):
    """Whether the matrix of a Hamiltonian has been assembled."""

    UNBUILT = "unbuilt"
    BUILT = "built"


class XXZHamiltonian:
    r"""The periodic spin-1/2 XXZ chain on a given basis.

    .. math::

        H = J \sum_s \left[\Delta S^z_s S^z_{s+1}
            + \frac{1}{2}(S^+_s S^-_{s+1} + S^-_s S^+_{s+1})\right]
            + \sum_s h_s S^z_s

    with ``s + 1`` taken modulo the chain size.

    The matrix is only assembled when calling ``build()``; until then the
    Hamiltonian is in the ``BuildState.UNBUILT`` state.

    Args:
        basis: The basis on which the Hamiltonian acts. It must be closed
            under the spin-flip terms (e.g. a fixed up-spin sector).
        J: The exchange coupling.
        delta: The anisotropy of the Ising term.
        fields: The local fields along z, one per site. Defaults to zero.
    """

    def __init__(
        self,
        basis: Basis,
        J: float,
        delta: float,
        fields: Optional[Sequence[float]] = None,
    ) -> None:
        """Instantiates an XXZHamiltonian."""
        if not isinstance(basis, Basis):
            raise TypeError(
                f"'basis' must be an instance of Basis, not {type(basis)}."
            )
        self._basis = basis
        self._J = float(J)
        self._delta = float(delta)
        self._fields = (
            np.zeros(basis.size)
            if fields is None
            else np.array(fields, dtype=float)
        )
        if self._fields.ndim != 1 or len(self._fields) != basis.size:
            raise FieldsLengthError(basis.size, self._fields.size)
        self._fields.flags.writeable = False

        self._matrix: Optional[scipy.sparse.csr_matrix] = None
        self._state = BuildState.UNBUILT

    @property
    def basis(self) -> Basis:
        """The basis the Hamiltonian acts on."""
        return self._basis

    @property
    def J(self) -> float:
        """The exchange coupling."""
        return self._J

    @property
    def delta(self) -> float:
        """The anisotropy of the Ising term."""
        return self._delta

    @property
    def fields(self) -> np.ndarray:
        """The (read-only) local fields."""
        return self._fields

    @property
    def state(self) -> BuildState:
        """The build state of the matrix."""
        return self._state

    @property
    def is_built(self) -> bool:
        """Whether the matrix has been assembled."""
        return self._state is BuildState.BUILT

    @property
    def matrix(self) -> scipy.sparse.csr_matrix:
        """The assembled sparse matrix.

        Raises:
            UnbuiltHamiltonianError: If ``build()`` was never called.
        """
        if self._matrix is None:
            raise UnbuiltHamiltonianError()
        return self._matrix

    @property
    def shape(self) -> tuple[int, int]:
        """The shape of the matrix."""
        return (self._basis.nstates, self._basis.nstates)

    def _prepare_nnz(self) -> int:
        """Upper bound on the number of emitted matrix elements.

        One diagonal and at most two off-diagonal elements per state and
        site.
        """
        return self._basis.nstates * (2 * self._basis.size + 1)

    def _apply_diag(
        self,
        site: int,
        rows: np.ndarray,
        cols: np.ndarray,
        vals: np.ndarray,
        count: int,
    ) -> int:
        """Emits the Ising and field terms of a site for every state.

        A diagonal element is emitted for every state, even if it is zero.
        """
        states = self._basis.states
        nstates = len(states)
        neighbour = (site + 1) % self._basis.size
        ifactor, _ = interaction(states, site, neighbour)
        ffactor, _ = sz(states, site)
        stop = count + nstates
        rows[count:stop] = np.arange(nstates)
        cols[count:stop] = np.arange(nstates)
        vals[count:stop] = (
            ifactor * self._delta * self._J + ffactor * self._fields[site]
        )
        return stop

    def _apply_offdiag(
        self,
        op: SiteOperator,
        site: int,
        rows: np.ndarray,
        cols: np.ndarray,
        vals: np.ndarray,
        count: int,
    ) -> int:
        """Emits the non-zero elements of a spin-flip term of a site."""
        states = self._basis.states
        neighbour = (site + 1) % self._basis.size
        factor, newstates = op(states, site, neighbour)
        allowed = np.flatnonzero(factor)
        # Raises StateNotInBasisError if the term leaves the sector
        found = self._basis.indices(newstates[allowed])
        stop = count + len(allowed)
        rows[count:stop] = allowed
        cols[count:stop] = found
        vals[count:stop] = factor[allowed] * self._J * 0.5
        return stop

    def build(self) -> None:
        """Assembles the sparse matrix, discarding any previous one.

        The matrix and the build state are only updated once the assembly
        has succeeded.
        """
        nnz = self._prepare_nnz()
        rows = np.empty(nnz, dtype=np.int64)
        cols = np.empty(nnz, dtype=np.int64)
        vals = np.empty(nnz, dtype=np.float64)

        count = 0
        for site in range(self._basis.size):
            count = self._apply_diag(site, rows, cols, vals, count)
            for op in HOPPING_TERMS:
                count = self._apply_offdiag(op, site, rows, cols, vals, count)

        # Duplicate coordinates are summed when converting to CSR
        matrix = scipy.sparse.coo_matrix(
            (vals[:count], (rows[:count], cols[:count])), shape=self.shape
        ).tocsr()
        logger.debug(
            "Built a %dx%d XXZ matrix: %d emitted elements, %d stored.",
            *self.shape,
            count,
            matrix.nnz,
        )
        self._matrix = matrix
        self._state = BuildState.BUILT

    def to_qobj(self) -> qutip.Qobj:
        """Returns the built matrix as a qutip.Qobj.

        Over the full Hilbert space, the Qobj carries the tensor structure
        of the chain.
        """
        matrix = self.matrix
        if self._basis.full_hilbert_space and self._basis.size > 0:
            dims = [[2] * self._basis.size, [2] * self._basis.size]
            return qutip.Qobj(matrix, dims=dims)
        return qutip.Qobj(matrix)

    def __repr__(self) -> str:
        return (
            f"XXZHamiltonian({self._basis!r}, J={self._J}, "
            f"delta={self._delta}, state={self._state.value})"
        )


def make_hamiltonian(
    basis: Basis,
    J: float,
    delta: float,
    fields: Optional[Sequence[float]] = None,
) -> XXZHamiltonian:
    """Creates an unbuilt XXZHamiltonian (see XXZHamiltonian)."""
    return XXZHamiltonian(basis, J, delta, fields)


def build(hamiltonian: XXZHamiltonian) -> None:
    """Assembles the matrix of a Hamiltonian (see XXZHamiltonian.build)."""
    hamiltonian.build()
