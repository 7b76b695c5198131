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
import re

import numpy as np
import pytest
import scipy.sparse.linalg

from xxzchain import (
    Basis,
    Dense,
    DenseInPlace,
    Iterative,
    IterativeSpectrum,
    Spectrum,
    XXZHamiltonian,
    diagonalize,
)
from xxzchain.exceptions import (
    NonConvergenceWarning,
    UnbuiltHamiltonianError,
    UnsupportedMethodError,
)


def test_unbuilt(half_filled_basis):
    ham = XXZHamiltonian(half_filled_basis, 1.0, 1.0)
    with pytest.raises(UnbuiltHamiltonianError):
        diagonalize(ham)


@pytest.mark.parametrize("method", ["dense", Dense, None, 3])
def test_unsupported_method(heisenberg, method):
    with pytest.raises(
        UnsupportedMethodError,
        match=re.escape(
            f"Method {method!r} not allowed. Allowed methods are instances "
            "of Dense, DenseInPlace, Iterative."
        ),
    ):
        diagonalize(heisenberg, method)


def test_dense(disordered):
    before = disordered.matrix.copy()
    spectrum = diagonalize(disordered)
    assert isinstance(spectrum, Spectrum)
    evals, evecs = spectrum
    assert len(spectrum) == disordered.basis.nstates
    assert np.all(np.diff(evals) >= 0)

    mat = disordered.matrix.toarray()
    np.testing.assert_allclose(mat @ evecs, evecs * evals, atol=1e-10)
    np.testing.assert_allclose(
        evecs.conj().T @ evecs, np.eye(len(evals)), atol=1e-10
    )
    # The Hamiltonian is left untouched
    assert (disordered.matrix != before).nnz == 0


def test_dense_in_place_matches_dense(disordered):
    before = disordered.matrix.copy()
    dense = diagonalize(disordered, Dense())
    in_place = diagonalize(disordered, DenseInPlace())
    assert len(in_place.eigenvalues) == disordered.basis.nstates
    np.testing.assert_allclose(
        dense.eigenvalues, in_place.eigenvalues, atol=1e-10
    )
    assert (disordered.matrix != before).nnz == 0


def test_iterative_lowest(disordered):
    dense = diagonalize(disordered, Dense())
    spectrum = diagonalize(disordered, Iterative(k=4, which="SA"))
    assert isinstance(spectrum, IterativeSpectrum)
    assert spectrum.converged
    np.testing.assert_allclose(
        spectrum.eigenvalues, dense.eigenvalues[:4], atol=1e-8
    )
    assert spectrum.eigenvectors.shape == (disordered.basis.nstates, 4)

    evals, evecs, converged = spectrum
    assert evals is spectrum.eigenvalues
    assert evecs is spectrum.eigenvectors
    assert converged is True


def test_iterative_shift_invert(heisenberg):
    spectrum = diagonalize(
        heisenberg, Iterative(k=1, sigma=-1.9, which="LM")
    )
    np.testing.assert_allclose(spectrum.eigenvalues, [-2.0], atol=1e-8)


@pytest.mark.parametrize("k", [0, 6, 10])
def test_iterative_invalid_k(heisenberg, k):
    with pytest.raises(
        ValueError, match="between 1 and 5 eigenpairs of a 6x6 matrix"
    ):
        diagonalize(heisenberg, Iterative(k=k))


def test_iterative_non_convergence(disordered, monkeypatch):
    nstates = disordered.basis.nstates
    vecs = np.eye(nstates)[:, [1, 0]]

    def no_convergence(*args, **kwargs):
        raise scipy.sparse.linalg.ArpackNoConvergence(
            "No convergence", np.array([0.3, -0.7]), vecs
        )

    monkeypatch.setattr(scipy.sparse.linalg, "eigsh", no_convergence)
    with pytest.warns(
        NonConvergenceWarning, match="only converged 2 of the 5 requested"
    ):
        spectrum = diagonalize(disordered, Iterative(k=5, maxiter=1))
    assert not spectrum.converged
    _, _, converged = spectrum
    assert converged is False
    np.testing.assert_array_equal(spectrum.eigenvalues, [-0.7, 0.3])
    np.testing.assert_array_equal(
        spectrum.eigenvectors, np.eye(nstates)[:, :2]
    )


def test_method_is_immutable():
    method = Iterative(k=3)
    with pytest.raises(AttributeError):
        method.k = 4
    assert Iterative(k=3) == method
    assert Dense() == Dense()
    assert Dense() != DenseInPlace()


def test_tiny_basis():
    ham = XXZHamiltonian(Basis(3, 0), 1.0, 1.0)
    ham.build()
    evals, evecs = diagonalize(ham, DenseInPlace())
    np.testing.assert_allclose(evals, [0.75])
    assert evecs.shape == (1, 1)
