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
"""Defines the Basis class."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from math import comb
from typing import Any, Optional, Union

import numpy as np

from xxzchain.bits import popcount
from xxzchain.exceptions import InvalidSelectorError, StateNotInBasisError

logger = logging.getLogger(__name__)

Selector = Optional[Union[int, Sequence[int]]]

# Labels are stored as int64, leaving the sign bit unused
MAX_SIZE = 62


def _normalize_selector(size: int, selector: Selector) -> Selector:
    if selector is None:
        return None
    if isinstance(selector, (int, np.integer)):
        counts: tuple[int, ...] = (int(selector),)
        normalized: Selector = int(selector)
    else:
        counts = tuple(int(nu) for nu in selector)
        normalized = counts
    if (
        not counts
        or len(set(counts)) < len(counts)
        or any(not 0 <= nu <= size for nu in counts)
    ):
        raise InvalidSelectorError(size, selector)
    return normalized


def select_states(size: int, nup: int) -> np.ndarray:
    """Selects the labels of a chain with a given number of up spins.

    Args:
        size: The number of sites.
        nup: The number of up spins.

    Returns:
        The ``C(size, nup)`` matching labels, in increasing order.
    """
    if not 0 <= nup <= size:
        raise InvalidSelectorError(size, nup)
    candidates = np.arange(1 << size, dtype=np.int64)
    states = candidates[popcount(candidates) == nup]
    assert len(states) == comb(size, nup)
    return states


class Basis:
    """The labels spanning a sector of a spin-1/2 chain.

    Args:
        size: The number of sites of the chain.
        selector: Which states to keep. ``None`` keeps the full Hilbert
            space, an integer keeps the states with that many up spins and a
            sequence of integers keeps the union of those sectors.

    Note:
        With several up-spin counts, the states are stored as one
        increasing block per count, in the order the counts were given.
        The blocks usually interleave, so the whole sequence is generally
        not increasing (see ``Basis.is_sorted``); lookups work in any case.
    """

    def __init__(self, size: int, selector: Selector = None) -> None:
        """Initializes a Basis."""
        size = int(size)
        if not 0 <= size <= MAX_SIZE:
            raise ValueError(
                f"The chain size must be between 0 and {MAX_SIZE}, "
                f"not {size}."
            )
        self._size = size
        self._selector = _normalize_selector(size, selector)
        self._states = self._get_states()
        self._states.flags.writeable = False
        self._is_sorted = bool(np.all(np.diff(self._states) > 0))
        self._sorter: Optional[np.ndarray] = (
            None if self._is_sorted else np.argsort(self._states)
        )
        logger.debug(
            "Basis of %d sites with selector %r: %d states.",
            self._size,
            self._selector,
            len(self._states),
        )

    def _get_states(self) -> np.ndarray:
        if self._selector is None:
            return np.arange(1 << self._size, dtype=np.int64)

        counts = (
            (self._selector,)
            if isinstance(self._selector, int)
            else self._selector
        )
        nstates = sum(comb(self._size, nu) for nu in counts)
        states = np.empty(nstates, dtype=np.int64)
        start = 0
        for nu in counts:
            block = select_states(self._size, nu)
            states[start : start + len(block)] = block
            start += comb(self._size, nu)
        return states

    @property
    def size(self) -> int:
        """The number of sites."""
        return self._size

    @property
    def selector(self) -> Selector:
        """The up-spin count(s) defining the sector, if any."""
        return self._selector

    @property
    def states(self) -> np.ndarray:
        """The (read-only) state labels."""
        return self._states

    @property
    def nstates(self) -> int:
        """The number of basis states."""
        return len(self._states)

    @property
    def full_hilbert_space(self) -> bool:
        """Whether the basis spans the whole Hilbert space."""
        return self.nstates == 1 << self._size

    @property
    def is_sorted(self) -> bool:
        """Whether the state labels are strictly increasing."""
        return self._is_sorted

    def search(
        self, states: Union[Sequence[int], np.ndarray]
    ) -> tuple[np.ndarray, np.ndarray]:
        """Binary search of state labels in the basis.

        Args:
            states: The labels to look up.

        Returns:
            The candidate index of each label in ``Basis.states`` and a mask
            of the labels that were actually found there.
        """
        states = np.asarray(states, dtype=np.int64)
        pos = np.searchsorted(self._states, states, sorter=self._sorter)
        pos = np.minimum(pos, self.nstates - 1)
        if self._sorter is not None:
            pos = self._sorter[pos]
        return pos, self._states[pos] == states

    def indices(self, states: Union[Sequence[int], np.ndarray]) -> np.ndarray:
        """Finds the positions of state labels in the basis.

        Args:
            states: The labels to look up.

        Returns:
            The index of each label in ``Basis.states``.

        Raises:
            StateNotInBasisError: If any label is not in the basis.
        """
        pos, found = self.search(states)
        if not np.all(found):
            missing = np.asarray(states, dtype=np.int64)[~found]
            raise StateNotInBasisError(int(missing[0]))
        return pos

    def index(self, state: int) -> int:
        """Finds the position of a single state label in the basis."""
        return int(self.indices([state])[0])

    def __contains__(self, state: Any) -> bool:
        if isinstance(state, bool) or not isinstance(
            state, (int, np.integer)
        ):
            return False
        try:
            self.index(state)
        except (ValueError, OverflowError):
            return False
        return True

    def __len__(self) -> int:
        return self.nstates

    def __iter__(self) -> Iterator[int]:
        return (int(s) for s in self._states)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Basis):
            return False
        return self._size == other._size and np.array_equal(
            self._states, other._states
        )

    def __hash__(self) -> int:
        return hash((self._size, self._states.tobytes()))

    def __repr__(self) -> str:
        return (
            f"Basis(size={self._size}, selector={self._selector!r}, "
            f"nstates={self.nstates})"
        )


def make_basis(size: int, selector: Selector = None) -> Basis:
    """Creates the basis of a chain sector.

    Args:
        size: The number of sites of the chain.
        selector: ``None`` for the full Hilbert space, or the up-spin
            count(s) of the sector.

    Returns:
        The corresponding Basis.
    """
    return Basis(size, selector)
