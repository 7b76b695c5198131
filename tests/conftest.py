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

import numpy as np
import pytest

from xxzchain import Basis, XXZHamiltonian


@pytest.fixture
def half_filled_basis() -> Basis:
    return Basis(4, 2)


@pytest.fixture
def heisenberg(half_filled_basis) -> XXZHamiltonian:
    ham = XXZHamiltonian(half_filled_basis, J=1.0, delta=1.0)
    ham.build()
    return ham


@pytest.fixture
def disordered() -> XXZHamiltonian:
    rng = np.random.default_rng(1234)
    basis = Basis(8, 4)
    ham = XXZHamiltonian(basis, J=1.0, delta=0.55, fields=rng.random(8))
    ham.build()
    return ham
