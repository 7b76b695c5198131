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
"""Contains the ChainConfig class that sets the parameters of a chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Optional, Tuple, Type, TypeVar, Union

import numpy as np

from xxzchain.basis import Basis, _normalize_selector
from xxzchain.exceptions import FieldsLengthError
from xxzchain.hamiltonian import XXZHamiltonian

T = TypeVar("T", bound="ChainConfig")


@dataclass(frozen=True)
class ChainConfig:
    """Specifies an XXZ chain and the sector it is studied in.

    Note:
        Being a frozen dataclass, the configuration chosen upon instantiation
        cannot be changed later on.

    Args:
        size: The number of sites.
        selector: ``None`` for the full Hilbert space, or the up-spin
            count(s) of the sector.
        J: The exchange coupling.
        delta: The anisotropy of the Ising term.
        fields: The local fields along z. Defaults to zero on every site.
    """

    size: int
    selector: Union[None, int, Tuple[int, ...]] = None
    J: float = 1.0
    delta: float = 1.0
    fields: Tuple[float, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(
            self.size, (int, np.integer)
        ):
            raise TypeError(
                f"'size' must be an integer, not {type(self.size)}."
            )
        if self.size < 0:
            raise ValueError(f"'size' must be non-negative, not {self.size}.")
        self._change_attribute("size", int(self.size))
        self._change_attribute(
            "selector", _normalize_selector(self.size, self.selector)
        )
        for param in ("J", "delta"):
            value = getattr(self, param)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise TypeError(
                    f"'{param}' must be a real number, not {type(value)}."
                )
            self._change_attribute(param, float(value))
        fields = tuple(float(h) for h in self.fields) or (0.0,) * self.size
        if len(fields) != self.size:
            raise FieldsLengthError(self.size, len(fields))
        self._change_attribute("fields", fields)

    @classmethod
    def disordered(
        cls: Type[T],
        size: int,
        W: float,
        seed: Optional[int] = None,
        **kwargs: Any,
    ) -> T:
        """Creates a chain with random fields drawn uniformly in [0, W).

        Args:
            size: The number of sites.
            W: The disorder strength.
            seed: The seed of the random generator.
            kwargs: The other parameters of ChainConfig.
        """
        rng = np.random.default_rng(seed)
        return cls(size, fields=tuple(W * rng.random(size)), **kwargs)

    def make_basis(self) -> Basis:
        """Creates the basis of the chosen sector."""
        return Basis(self.size, self.selector)

    def make_hamiltonian(
        self, basis: Optional[Basis] = None
    ) -> XXZHamiltonian:
        """Creates the (unbuilt) Hamiltonian of the chain.

        Args:
            basis: A basis to reuse. Must have the configured size; defaults
                to a new basis from ``ChainConfig.make_basis()``.
        """
        if basis is None:
            basis = self.make_basis()
        if basis.size != self.size:
            raise ValueError(
                f"A basis of {basis.size} sites can't be used for a chain "
                f"of {self.size} sites."
            )
        return XXZHamiltonian(basis, self.J, self.delta, self.fields)

    def _change_attribute(self, attr_name: str, new_value: Any) -> None:
        object.__setattr__(self, attr_name, new_value)

    def __str__(self) -> str:
        lines = [
            "Chain:",
            "----------",
            f"Sites:                 {self.size}",
            f"Sector:                {self.selector}",
            f"J:                     {self.J}",
            f"Delta:                 {self.delta}",
        ]
        if any(self.fields):
            lines.append(f"Fields:                {list(self.fields)}")
        return "\n".join(lines)
