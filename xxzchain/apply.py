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
"""Matrix-free application of single-site operators to state vectors.

The action is computed in "gather" form: each output amplitude is
accumulated only from the source states mapped onto it, so every output
slot is written by a single task.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Union

import numpy as np
from numpy.typing import ArrayLike

from xxzchain.basis import Basis
from xxzchain.bits import flip_bit
from xxzchain.operators.spin import OPERATORS, SiteOperator

logger = logging.getLogger(__name__)


def _gather_chunk(
    op: SiteOperator,
    psi: np.ndarray,
    basis: Basis,
    site: int,
    start: int,
    stop: int,
    out: np.ndarray,
) -> None:
    """Fills ``out[start:stop]``, and nothing else."""
    targets = basis.states[start:stop]
    out_chunk = out[start:stop]
    # A site operator either keeps or flips the spin it acts on
    for sources in (targets, flip_bit(targets, site)):
        amp, image = op(sources, site)
        amp = np.broadcast_to(amp, sources.shape)
        hits = np.flatnonzero((image == targets) & (amp != 0))
        pos, found = basis.search(sources[hits])
        hits, pos = hits[found], pos[found]
        out_chunk[hits] += amp[hits] * psi[pos]


def apply_site_operator(
    op: Union[str, SiteOperator],
    psi: ArrayLike,
    basis: Basis,
    site: int,
    max_workers: int = 1,
) -> np.ndarray:
    """Applies a single-site operator to a state vector.

    Contributions from source states outside of the basis are dropped,
    which amounts to projecting the result back onto the basis.

    Args:
        op: The operator, as a function of ``xxzchain.operators`` or as one
            of the keys of ``OPERATORS`` ("x", "y", "z", "p", "m", "id").
        psi: The state, as a vector of amplitudes on ``basis``.
        basis: The basis of ``psi`` (and of the result).
        site: The site the operator acts on.
        max_workers: The number of threads sharing the output vector; each
            one fills a contiguous, disjoint range of it.

    Returns:
        The new state vector.
    """
    if isinstance(op, str):
        try:
            op = OPERATORS[op]
        except KeyError:
            raise ValueError(f"{op} is not a valid operator")
    psi = np.asarray(psi)
    if psi.shape != (basis.nstates,):
        raise ValueError(
            f"A state of shape {psi.shape} does not match a basis of "
            f"{basis.nstates} states."
        )
    if not 0 <= site < basis.size:
        raise ValueError(
            f"Invalid site {site} for a chain of {basis.size} sites."
        )
    if max_workers < 1:
        raise ValueError(
            f"'max_workers' must be a positive integer, not {max_workers}."
        )

    out = np.zeros(basis.nstates, dtype=np.result_type(psi, np.complex128))
    n_chunks = min(max_workers, basis.nstates)
    if n_chunks == 1:
        _gather_chunk(op, psi, basis, site, 0, basis.nstates, out)
        return out

    bounds = np.linspace(0, basis.nstates, n_chunks + 1, dtype=int)
    logger.debug(
        "Applying %s on site %d with %d workers.",
        getattr(op, "__name__", op),
        site,
        n_chunks,
    )
    with ThreadPoolExecutor(max_workers=n_chunks) as executor:
        futures = [
            executor.submit(
                _gather_chunk, op, psi, basis, site, start, stop, out
            )
            for start, stop in zip(bounds[:-1], bounds[1:])
        ]
        for future in futures:
            # Re-raises any exception from the workers
            future.result()
    return out
