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
"""Exact diagonalization of the periodic spin-1/2 XXZ chain."""

from xxzchain._version import __version__ as __version__
from xxzchain.basis import Basis, make_basis
from xxzchain.hamiltonian import (
    BuildState,
    XXZHamiltonian,
    build,
    make_hamiltonian,
)
from xxzchain.diagonalize import (
    Dense,
    DenseInPlace,
    Iterative,
    IterativeSpectrum,
    Spectrum,
    diagonalize,
)
from xxzchain.states import (
    SurvivalProbability,
    basis_state,
    make_survival_probability,
    random_gaussian_state,
)
from xxzchain.apply import apply_site_operator
from xxzchain.config import ChainConfig

# Exposing relevant submodules
from xxzchain import (
    bits as bits,
    exceptions as exceptions,
    operators as operators,
)

__all__ = [
    # xxzchain.basis
    "Basis",
    "make_basis",
    # xxzchain.hamiltonian
    "BuildState",
    "XXZHamiltonian",
    "build",
    "make_hamiltonian",
    # xxzchain.diagonalize
    "Dense",
    "DenseInPlace",
    "Iterative",
    "IterativeSpectrum",
    "Spectrum",
    "diagonalize",
    # xxzchain.states
    "SurvivalProbability",
    "basis_state",
    "make_survival_probability",
    "random_gaussian_state",
    # xxzchain.apply
    "apply_site_operator",
    # xxzchain.config
    "ChainConfig",
]
