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


"""This file contains the Scalar class used to represent the global phase of a Circuit."""

import math
import cmath

from .phase import Phase, PhaseLike

__all__ = ['Scalar']

def cexp(val) -> complex:
    return cmath.exp(1j*math.pi*float(val))

class Scalar(object):
    """Represents the global phase exp(i*pi*phase) of a Circuit.
    The phase is always kept reduced modulo 2."""
    def __init__(self, phase: PhaseLike = 0) -> None:
        self.phase: Phase = Phase(phase).mod2()

    def __repr__(self) -> str:
        return "Scalar({})".format(str(self))

    def __str__(self) -> str:
        n = self.to_number()
        return "{0.real:.2f}{0.imag:+.2f}i = exp({1}ipi)".format(n, self.phase)

    def __complex__(self) -> complex:
        return self.to_number()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return False
        return self.phase == other.phase

    def copy(self) -> 'Scalar':
        return Scalar(self.phase)

    def to_number(self) -> complex:
        return cexp(self.phase)

    def is_trivial(self) -> bool:
        return self.phase.is_zero()

    def add_phase(self, phase: PhaseLike) -> None:
        """Multiplies the scalar by exp(i*pi*phase)."""
        self.phase = (self.phase + phase).mod2()

    add = add_phase

    def mult_with_scalar(self, other: 'Scalar') -> None:
        """Multiplies two instances of Scalar together."""
        self.add_phase(other.phase)
