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
"""Elementary operations on integer state labels.

Bit ``i`` of a label encodes site ``i`` of the chain (1 is up, 0 is down).
The functions are unchecked and work element-wise on numpy integer arrays,
so the assembler can apply them to a whole basis at once.
"""

from __future__ import annotations

from typing import TypeVar, Union

import numpy as np

Label = TypeVar("Label", int, np.integer, np.ndarray)


def get_bit(state: Label, bit: int) -> Label:
    """Gets the value of ``bit`` in ``state``.

    Example:
        ``get_bit(0b0101, 2) == 1``
    """
    return (state >> bit) & 1


def flip_bit(state: Label, bit: int) -> Label:
    """Flips ``bit`` of ``state`` into the opposite value.

    Example:
        ``flip_bit(0b0101, 0) == 0b0100``
    """
    return state ^ (1 << bit)


def popcount(
    state: Union[int, np.integer, np.ndarray]
) -> Union[int, np.ndarray]:
    """Counts the number of set bits (up spins) in ``state``.

    Arrays are counted element-wise and must hold non-negative labels.
    """
    if isinstance(state, np.ndarray):
        remaining = state.astype(np.int64, copy=True)
        counts = np.zeros(remaining.shape, dtype=np.int64)
        while np.any(remaining):
            counts += remaining & 1
            remaining >>= 1
        return counts
    return bin(int(state)).count("1")
