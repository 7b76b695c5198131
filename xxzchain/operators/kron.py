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
"""Tensor-product construction of chain operators with qutip.

These builders embed 2x2 site operators into the full ``2**size``
dimensional space with identities on the remaining sites. They scale
exponentially with the chain size and serve as an independent reference
for the bit-encoded assembly in ``xxzchain.hamiltonian``.

Sites are tensored from the last to the first, so that the matrix index of
a product state is equal to its integer label.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Union

import numpy as np
import qutip

from xxzchain.basis import Basis

SiteOperation = tuple[Union[str, qutip.Qobj, np.ndarray], Sequence[int]]


def local_matrices() -> dict[str, qutip.Qobj]:
    """The single-site operators, with index 0 down and index 1 up."""
    return {
        "x": qutip.Qobj(np.array([[0.0, 0.5], [0.5, 0.0]])),
        "y": qutip.Qobj(np.array([[0.0, 0.5j], [-0.5j, 0.0]])),
        "z": qutip.Qobj(np.diag([-0.5, 0.5])),
        "p": qutip.Qobj(np.array([[0.0, 0.0], [1.0, 0.0]])),
        "m": qutip.Qobj(np.array([[0.0, 1.0], [0.0, 0.0]])),
        "id": qutip.qeye(2),
    }


def embed_operator(
    operations: Union[SiteOperation, list[SiteOperation]], size: int
) -> qutip.Qobj:
    """Creates an operator with non-trivial actions on some sites.

    Takes as argument a list of tuples ``[(operator_1, sites_1),
    (operator_2, sites_2)...]``. Returns the tensor product of
    ``operator_i`` applied on ``sites_i`` and the identity on the rest.

    Example for 4 sites: ``[("z", [1, 2]), ("x", [3])]`` returns
    ``S^x_3 S^z_2 S^z_1 I_0``.

    Args:
        operations: List of tuples `(operator, sites)`. `operator` can be
            a ``qutip.Qobj``, a 2x2 array or a key of ``local_matrices()``.
        size: The number of sites of the chain.

    Returns:
        The embedded operator.
    """
    if size < 1:
        raise ValueError(
            f"The chain must have at least one site, not {size}."
        )
    matrices = local_matrices()
    op_list = [matrices["id"] for _ in range(size)]

    if not isinstance(operations, list):
        operations = [operations]

    used: set[int] = set()
    for operator, sites in operations:
        sites_set = set(sites)
        if len(sites_set) < len(sites) or sites_set & used:
            raise ValueError("Duplicate site ids in argument list.")
        invalid = {s for s in sites_set if not 0 <= s < size}
        if invalid:
            raise ValueError(f"Invalid site ids: {invalid}")
        used |= sites_set
        if isinstance(operator, str):
            try:
                operator = matrices[operator]
            except KeyError:
                raise ValueError(f"{operator} is not a valid operator")
        elif not isinstance(operator, qutip.Qobj):
            operator = qutip.Qobj(operator)
        for site in sites:
            op_list[site] = operator
    return qutip.tensor(op_list[::-1])


def kron_xxz_hamiltonian(
    size: int,
    J: float,
    delta: float,
    fields: Optional[Sequence[float]] = None,
) -> qutip.Qobj:
    """Builds the periodic XXZ Hamiltonian over the full Hilbert space.

    Two-site terms are products of embedded single-site operators, which
    also covers the single-site chain where a site is its own neighbour.
    """
    J, delta = float(J), float(delta)
    fields = [0.0] * size if fields is None else [float(h) for h in fields]
    if len(fields) != size:
        raise ValueError(
            f"Length of fields ({len(fields)}) must match the number of "
            f"sites ({size})."
        )

    def site_op(name: str, site: int) -> qutip.Qobj:
        return embed_operator([(name, [site])], size)

    ham = 0 * embed_operator([], size)
    for s in range(size):
        s1 = (s + 1) % size
        ham += J * delta * site_op("z", s) * site_op("z", s1)
        ham += (
            0.5
            * J
            * (
                site_op("p", s) * site_op("m", s1)
                + site_op("m", s) * site_op("p", s1)
            )
        )
        ham += fields[s] * site_op("z", s)
    return ham


def project_to_basis(operator: qutip.Qobj, basis: Basis) -> np.ndarray:
    """Restricts a full-space operator to the states of a basis."""
    full = operator.full()
    if full.shape[0] != 1 << basis.size:
        raise ValueError(
            f"An operator of shape {full.shape} does not act on a chain of "
            f"{basis.size} sites."
        )
    return full[np.ix_(basis.states, basis.states)]
