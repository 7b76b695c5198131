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
"""Eigen-decomposition of a built XXZHamiltonian."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

import numpy as np
import scipy.linalg
import scipy.sparse.linalg

from xxzchain.exceptions import (
    NonConvergenceWarning,
    UnbuiltHamiltonianError,
    UnsupportedMethodError,
)
from xxzchain.hamiltonian import XXZHamiltonian

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dense:
    """Full diagonalization of a dense copy of the matrix."""

    pass


@dataclass(frozen=True)
class DenseInPlace:
    """Full diagonalization that overwrites its dense working copy."""

    pass


@dataclass(frozen=True)
class Iterative:
    """Krylov (Lanczos) diagonalization of the sparse matrix.

    Args:
        k: The number of eigenpairs to compute. Must be smaller than the
            number of basis states.
        which: Which eigenvalues to target, as in
            ``scipy.sparse.linalg.eigsh`` ("SA", "LA", "LM", "SM", "BE").
        sigma: If given, finds the eigenvalues closest to ``sigma``
            (shift-invert mode).
        maxiter: The maximal number of Arnoldi update iterations. This is
            the only way of bounding the run time of the solver.
        tol: The relative accuracy of the eigenvalues (0 means machine
            precision).
        ncv: The number of Lanczos vectors.
    """

    k: int = 6
    which: str = "SA"
    sigma: Optional[float] = None
    maxiter: Optional[int] = None
    tol: float = 0.0
    ncv: Optional[int] = None


DiagonalizationMethod = Union[Dense, DenseInPlace, Iterative]
_METHODS = (Dense, DenseInPlace, Iterative)


@dataclass(frozen=True, eq=False)
class Spectrum:
    """Eigenvalues and eigenvectors of a Hamiltonian.

    Attributes:
        eigenvalues: The eigenvalues, in increasing order.
        eigenvectors: The unit-norm eigenvectors, as columns.
    """

    eigenvalues: np.ndarray
    eigenvectors: np.ndarray

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.eigenvalues, self.eigenvectors))

    def __len__(self) -> int:
        return len(self.eigenvalues)


@dataclass(frozen=True, eq=False)
class IterativeSpectrum(Spectrum):
    """A (partial) spectrum from the iterative solver.

    Unpacks as ``eigenvalues, eigenvectors, converged``.

    Attributes:
        converged: Whether all requested eigenpairs converged. If not, only
            the converged ones are kept.
    """

    converged: bool = True

    def __iter__(self) -> Iterator[Any]:
        return iter((self.eigenvalues, self.eigenvectors, self.converged))


def _sorted_spectrum(
    eigenvalues: np.ndarray, eigenvectors: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    order = np.argsort(eigenvalues)
    return eigenvalues[order], eigenvectors[:, order]


def _diagonalize_iterative(
    matrix: scipy.sparse.csr_matrix, method: Iterative
) -> IterativeSpectrum:
    nstates = matrix.shape[0]
    if not 0 < method.k < nstates:
        raise ValueError(
            f"The iterative method can compute between 1 and {nstates - 1} "
            f"eigenpairs of a {nstates}x{nstates} matrix, not {method.k}."
        )
    try:
        eigenvalues, eigenvectors = scipy.sparse.linalg.eigsh(
            matrix,
            k=method.k,
            which=method.which,
            sigma=method.sigma,
            maxiter=method.maxiter,
            tol=method.tol,
            ncv=method.ncv,
        )
        converged = True
    except scipy.sparse.linalg.ArpackNoConvergence as err:
        eigenvalues, eigenvectors = err.eigenvalues, err.eigenvectors
        converged = False
        warnings.warn(
            f"The iterative solver only converged {len(eigenvalues)} of the "
            f"{method.k} requested eigenpairs; returning those.",
            NonConvergenceWarning,
            stacklevel=3,
        )
    eigenvalues, eigenvectors = _sorted_spectrum(eigenvalues, eigenvectors)
    return IterativeSpectrum(eigenvalues, eigenvectors, converged=converged)


def diagonalize(
    hamiltonian: XXZHamiltonian,
    method: DiagonalizationMethod = Dense(),
) -> Spectrum:
    """Diagonalizes the matrix of a built Hamiltonian.

    The Hamiltonian's sparse matrix is never modified, whatever the method.

    Args:
        hamiltonian: A built XXZHamiltonian.
        method: One of ``Dense()``, ``DenseInPlace()`` or
            ``Iterative(...)``.

    Returns:
        The spectrum, which unpacks as ``eigenvalues, eigenvectors``. The
        iterative method returns an ``IterativeSpectrum``, which unpacks
        as ``eigenvalues, eigenvectors, converged``.

    Raises:
        UnbuiltHamiltonianError: If the matrix was not built.
        UnsupportedMethodError: If the method is not supported.
    """
    if not isinstance(method, _METHODS):
        raise UnsupportedMethodError(
            method, [m.__name__ for m in _METHODS]
        )
    if not hamiltonian.is_built:
        raise UnbuiltHamiltonianError()

    matrix = hamiltonian.matrix
    logger.debug(
        "Diagonalizing a %dx%d matrix with %r.", *matrix.shape, method
    )
    if isinstance(method, Iterative):
        return _diagonalize_iterative(matrix, method)

    # toarray() always returns a new array
    dense = matrix.toarray()
    if isinstance(method, Dense):
        eigenvalues, eigenvectors = np.linalg.eigh(dense)
    else:
        eigenvalues, eigenvectors = scipy.linalg.eigh(
            dense, overwrite_a=True, check_finite=False
        )
    return Spectrum(eigenvalues, eigenvectors)
