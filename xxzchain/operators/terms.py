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
"""Two-site terms of the XXZ Hamiltonian."""

from __future__ import annotations

from typing import Any

from xxzchain.operators.spin import sm, sp, sz


def interaction(state: Any, i: int, j: int) -> tuple[Any, Any]:
    """The Ising coupling S^z_i S^z_j; leaves the state unchanged."""
    factor_i, _ = sz(state, i)
    factor_j, _ = sz(state, j)
    return factor_i * factor_j, state


def spsm(state: Any, i: int, j: int) -> tuple[Any, Any]:
    """S^+_i S^-_j: moves an up spin from site ``j`` to site ``i``.

    Non-zero only when ``j`` is up and ``i`` is down.
    """
    factor_sm, state = sm(state, j)
    factor_sp, state = sp(state, i)
    return factor_sm * factor_sp, state


def smsp(state: Any, i: int, j: int) -> tuple[Any, Any]:
    """S^-_i S^+_j: moves an up spin from site ``i`` to site ``j``.

    Non-zero only when ``i`` is up and ``j`` is down.
    """
    factor_sp, state = sp(state, j)
    factor_sm, state = sm(state, i)
    return factor_sm * factor_sp, state


# The spin-flip terms of the XY exchange
HOPPING_TERMS = (spsm, smsp)
