# CliffSimp - Python library for phase-exact simplification
#             of Clifford+rotation quantum circuits
# Copyright (C) 2026 - The CliffSimp developers

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#    http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from fractions import Fraction
from typing import Union
from typing_extensions import Literal, Final


FloatInt = Union[float,int]
FractionLike = Union[Fraction,int]
AngleLike = Union[Fraction,int,float]


class Axis:
    """Axis of a single-qubit axis rotation."""
    Type = Literal['X','Y','Z']
    X: Final = 'X'
    Y: Final = 'Y'
    Z: Final = 'Z'


class Settings(object): # namespace class
    tolerance: float = 1e-9 # Below this, float angles are treated as equal
    max_denominator: int = 1 << 10 # Largest denominator recovered from float input
    max_iterations: int = 1_000_000 # Safety valve for the worklist driver
    semantics_check_max_qubits: int = 8 # Largest circuit for which unitaries are compared

settings = Settings()
