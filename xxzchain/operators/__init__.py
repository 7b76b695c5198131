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
"""Spin-1/2 operators acting on bit-encoded states."""

from xxzchain.operators.spin import (
    OPERATORS,
    SiteOperator,
    identity,
    sm,
    sp,
    sx,
    sy,
    sz,
)
from xxzchain.operators.terms import HOPPING_TERMS, interaction, smsp, spsm

__all__ = [
    "OPERATORS",
    "SiteOperator",
    "HOPPING_TERMS",
    "identity",
    "interaction",
    "sm",
    "smsp",
    "sp",
    "spsm",
    "sx",
    "sy",
    "sz",
]
