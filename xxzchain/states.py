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
"""Initial states and the survival probability of a time-evolved state."""

from __future__ import annotations

from typing import Optional, Union

import numpy as np
from numpy.typing import ArrayLike

from xxzchain.basis import Basis
from xxzchain.diagonalize import Spectrum


def random_gaussian_state(
    dim: int,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Draws a normalized state with complex Gaussian amplitudes.

    Args:
        dim: The dimension of the state.
        seed: Seed of a new random generator. Ignored if ``rng`` is given.
        rng: The random generator to draw from.

    Returns:
        A unit-norm complex vector.
    """
    rng = rng or np.random.default_rng(seed)
    psi = rng.standard_normal(dim) + 1j * rng.standard_normal(dim)
    return psi / np.linalg.norm(psi)


def basis_state(basis: Basis, label: int) -> np.ndarray:
    """The product state with a given label, as a vector on the basis."""
    psi = np.zeros(basis.nstates, dtype=np.complex128)
    psi[basis.index(label)] = 1.0
    return psi


class SurvivalProbability:
    r"""The survival probability of an initial state under a Hamiltonian.

    With :math:`c_k = |\langle v_k|\psi_0\rangle|^2` the weights of the
    initial state on the eigenvectors, the survival amplitude is

    .. math:: A(t) = \sum_k c_k e^{-i \lambda_k t}

    and calling the object returns the survival probability
    :math:`|A(t)|^2`, a real number in [0, 1]. The complex amplitude is
    available through ``SurvivalProbability.amplitude()``.

    Args:
        eigenvalues: The eigenvalues of the Hamiltonian.
        eigenvectors: The matching eigenvectors, as columns.
        initial_state: The unit-norm initial state, on the same basis as the
            eigenvectors.
        atol: The tolerance on the norm of the initial state.
    """

    def __init__(
        self,
        eigenvalues: ArrayLike,
        eigenvectors: ArrayLike,
        initial_state: ArrayLike,
        atol: float = 1e-8,
    ) -> None:
        """Computes the weights of the initial state."""
        eigenvalues = np.array(eigenvalues, dtype=float)
        eigenvectors = np.asarray(eigenvectors)
        psi0 = np.asarray(initial_state, dtype=np.complex128)
        if (
            eigenvalues.ndim != 1
            or eigenvectors.ndim != 2
            or eigenvectors.shape[1] != len(eigenvalues)
        ):
            raise ValueError(
                f"{len(eigenvalues)} eigenvalues don't match eigenvectors "
                f"of shape {eigenvectors.shape}."
            )
        if psi0.shape != (eigenvectors.shape[0],):
            raise ValueError(
                f"The initial state must have shape "
                f"{(eigenvectors.shape[0],)}, not {psi0.shape}."
            )
        norm = np.linalg.norm(psi0)
        if not np.isclose(norm, 1.0, rtol=0.0, atol=atol):
            raise ValueError(
                f"The initial state must be normalized; its norm is {norm}."
            )
        coefficients = np.abs(eigenvectors.conj().T @ psi0) ** 2

        eigenvalues.flags.writeable = False
        coefficients.flags.writeable = False
        self._eigenvalues = eigenvalues
        self._coefficients = coefficients

    @classmethod
    def from_spectrum(
        cls, spectrum: Spectrum, initial_state: ArrayLike
    ) -> SurvivalProbability:
        """Creates the survival probability from a diagonalization result."""
        return cls(spectrum.eigenvalues, spectrum.eigenvectors, initial_state)

    @property
    def eigenvalues(self) -> np.ndarray:
        """The eigenvalues of the Hamiltonian."""
        return self._eigenvalues

    @property
    def coefficients(self) -> np.ndarray:
        """The weights of the initial state on each eigenvector."""
        return self._coefficients

    def amplitude(self, t: ArrayLike) -> Union[complex, np.ndarray]:
        """The complex survival amplitude at time(s) ``t``."""
        t = np.asarray(t, dtype=float)
        phases = np.exp(-1j * np.multiply.outer(t, self._eigenvalues))
        amp = phases @ self._coefficients
        return complex(amp) if t.ndim == 0 else amp

    def __call__(self, t: ArrayLike) -> Union[float, np.ndarray]:
        """The survival probability at time(s) ``t``."""
        prob = np.abs(self.amplitude(t)) ** 2
        return float(prob) if np.ndim(prob) == 0 else prob

    def __repr__(self) -> str:
        return f"SurvivalProbability(n_eigenpairs={len(self._eigenvalues)})"


def make_survival_probability(
    eigenvalues: ArrayLike,
    eigenvectors: ArrayLike,
    initial_state: ArrayLike,
) -> SurvivalProbability:
    """Creates the survival probability (see SurvivalProbability)."""
    return SurvivalProbability(eigenvalues, eigenvectors, initial_state)
