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
from math import comb

import numpy as np
import pytest

from xxzchain import Basis, make_basis
from xxzchain.bits import popcount
from xxzchain.exceptions import InvalidSelectorError, StateNotInBasisError


def test_small_bases():
    assert Basis(2, None).states.tolist() == [0, 1, 2, 3]
    assert Basis(2, 1).states.tolist() == [1, 2]

    basis = Basis(2, [1, 2])
    assert basis.states.tolist() == [1, 2, 3]
    assert basis.nstates == 3
    assert basis.selector == (1, 2)


@pytest.mark.parametrize("size", range(7))
def test_full_hilbert_space(size):
    basis = make_basis(size, None)
    assert basis.nstates == 2**size
    np.testing.assert_array_equal(basis.states, np.arange(2**size))
    assert basis.full_hilbert_space
    assert basis.is_sorted
    assert basis.selector is None


@pytest.mark.parametrize(
    "size, nup", [(size, nup) for size in range(7) for nup in range(size + 1)]
)
def test_fixed_sector(size, nup):
    basis = Basis(size, nup)
    assert basis.nstates == comb(size, nup)
    assert len(basis) == basis.nstates
    assert np.all(popcount(basis.states) == nup)
    assert np.all(np.diff(basis.states) > 0)
    assert basis.selector == nup


def test_several_sectors():
    basis = Basis(4, [1, 2])
    assert basis.nstates == comb(4, 1) + comb(4, 2)
    # The blocks interleave even for increasing counts
    assert basis.states.tolist() == [1, 2, 4, 8, 3, 5, 6, 9, 10, 12]
    assert not basis.is_sorted
    np.testing.assert_array_equal(
        basis.indices(basis.states), np.arange(basis.nstates)
    )
    assert Basis(2, [1, 2]).is_sorted

    # Blocks keep the order of the counts
    basis = Basis(4, [2, 1])
    assert basis.states.tolist() == [3, 5, 6, 9, 10, 12, 1, 2, 4, 8]
    assert not basis.is_sorted
    assert basis.index(1) == 6
    assert basis.index(12) == 5
    np.testing.assert_array_equal(
        basis.indices(basis.states), np.arange(basis.nstates)
    )


def test_full_hilbert_space_is_derived():
    assert not Basis(3, 1).full_hilbert_space
    assert Basis(1, [0, 1]).full_hilbert_space
    assert Basis(0, 0).full_hilbert_space


@pytest.mark.parametrize("selector", [3, -1, [1, 3], [1, 1], []])
def test_invalid_selector(selector):
    with pytest.raises(
        InvalidSelectorError,
        match=re.escape(f"Invalid selector {selector!r} for a chain of 2"),
    ):
        Basis(2, selector)
    # Also catchable as a ValueError
    with pytest.raises(ValueError):
        Basis(2, selector)


@pytest.mark.parametrize("size", [-1, 63])
def test_invalid_size(size):
    with pytest.raises(ValueError, match="The chain size must be between"):
        Basis(size)


def test_states_are_read_only():
    basis = Basis(3, 1)
    with pytest.raises(ValueError):
        basis.states[0] = 7


def test_lookup():
    basis = Basis(4, 2)
    assert basis.index(0b0011) == 0
    assert basis.index(0b1100) == 5
    np.testing.assert_array_equal(basis.indices([0b1010, 0b0101]), [4, 1])
    assert 0b1001 in basis
    assert 0b0111 not in basis
    assert 1 << 10 not in basis
    assert np.int64(0b0110) in basis

    # Only integer labels belong to a basis
    assert 1 in Basis(2, 1)
    assert 1.5 not in Basis(2, 1)
    assert 2.0 not in Basis(2, 1)
    assert True not in Basis(2, 1)
    assert "1" not in Basis(2, 1)

    with pytest.raises(
        StateNotInBasisError,
        match=re.escape("State 7 (0b111) is not part of the basis."),
    ):
        basis.index(7)

    pos, found = basis.search([0b0011, 0b1111, 0b0101])
    assert found.tolist() == [True, False, True]
    assert pos[0] == 0 and pos[2] == 1


def test_iteration_and_equality():
    basis = Basis(3, 2)
    assert list(basis) == [3, 5, 6]
    assert basis == Basis(3, [2])
    assert hash(basis) == hash(Basis(3, [2]))
    assert basis != Basis(3, 1)
    assert basis != Basis(4, 2)
    assert basis != [3, 5, 6]
    assert repr(basis) == "Basis(size=3, selector=2, nstates=3)"
