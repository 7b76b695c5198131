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
"""Spin-1/2 operators acting on integer state labels.

Every operator maps ``(state, site)`` to ``(amplitude, new_state)``. A zero
amplitude marks a forbidden transition, in which case the state is returned
unchanged. Labels can be numpy arrays, in which case the operators act
element-wise (a constant amplitude is then returned as a scalar).
"""

from __future__ import annotations

from typing import Any, Callable, Tuple

from xxzchain.bits import flip_bit, get_bit

SiteOperator = Callable[[Any, int], Tuple[Any, Any]]


def sx(state: Any, site: int) -> tuple[Any, Any]:
    """S^x: flips the spin with amplitude 0.5."""
    return 0.5, flip_bit(state, site)


def sy(state: Any, site: int) -> tuple[Any, Any]:
    """S^y: flips the spin with amplitude -0.5j (down) or 0.5j (up)."""
    return 0.5j * (2 * get_bit(state, site) - 1), flip_bit(state, site)


def sz(state: Any, site: int) -> tuple[Any, Any]:
    """S^z: amplitude 0.5 for an up spin, -0.5 for a down spin."""
    return get_bit(state, site) - 0.5, state


def identity(state: Any, site: int) -> tuple[Any, Any]:
    """The identity."""
    return 1.0, state


def sp(state: Any, site: int) -> tuple[Any, Any]:
    """S^+: raises a down spin, annihilates an up spin."""
    return 1.0 - get_bit(state, site), state | (1 << site)


def sm(state: Any, site: int) -> tuple[Any, Any]:
    """S^-: lowers an up spin, annihilates a down spin."""
    return 1.0 * get_bit(state, site), state & ~(1 << site)


OPERATORS: dict[str, SiteOperator] = {
    "x": sx,
    "y": sy,
    "z": sz,
    "p": sp,
    "m": sm,
    "id": identity,
}
