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

"""This file contains the Phase class used to represent rotation angles
and global phases as multiples of pi."""

from __future__ import annotations
import math
from fractions import Fraction
from typing import Tuple, Union

from ..utils import AngleLike, settings

__all__ = ['Phase', 'PhaseLike']


def _snap(value: float) -> Union[Fraction, float]:
    """Recovers the exact rational behind a float if there is one close enough."""
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Phase must be finite, got {!r}".format(value))
    f = Fraction(value).limit_denominator(settings.max_denominator)
    if abs(float(f) - value) <= settings.tolerance:
        return f
    return value


class Phase(object):
    """An angle expressed as a multiple of pi.

    The value is an exact :class:`~fractions.Fraction` whenever the input is rational.
    A float is only stored when the input could not be matched to a rational multiple
    of pi; such values are compared using ``settings.tolerance``."""

    def __init__(self, value: PhaseLike = 0) -> None:
        if isinstance(value, Phase):
            value = value.value
        if isinstance(value, bool):
            raise TypeError("Cannot interpret a bool as a phase")
        if isinstance(value, int):
            value = Fraction(value)
        elif isinstance(value, float):
            value = _snap(value)
        elif not isinstance(value, Fraction):
            raise TypeError("Cannot interpret {!r} as a phase".format(value))
        self._value: Union[Fraction, float] = value

    @staticmethod
    def from_radians(radians: float) -> Phase:
        """Converts an angle in radians into a multiple of pi."""
        return Phase(float(radians) / math.pi)

    @property
    def value(self) -> Union[Fraction, float]:
        return self._value

    def is_exact(self) -> bool:
        return isinstance(self._value, Fraction)

    def to_radians(self) -> float:
        return float(self._value) * math.pi

    def __float__(self) -> float:
        return float(self._value)

    def __str__(self) -> str:
        if self.is_exact():
            return str(self._value)
        return "{:.6g}".format(self._value)

    def __repr__(self) -> str:
        return "Phase({!s})".format(self)

    def __add__(self, other: PhaseLike) -> Phase:
        return Phase(self._value + Phase(other).value)

    __radd__ = __add__

    def __sub__(self, other: PhaseLike) -> Phase:
        return Phase(self._value - Phase(other).value)

    def __rsub__(self, other: PhaseLike) -> Phase:
        return Phase(Phase(other).value - self._value)

    def __neg__(self) -> Phase:
        return Phase(-self._value)

    def __mul__(self, other: Union[int, Fraction]) -> Phase:
        return Phase(self._value * other)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool):
            other = Phase(other)
        if not isinstance(other, Phase):
            return False
        if self.is_exact() and other.is_exact():
            return self._value == other.value
        return abs(float(self._value) - float(other.value)) <= settings.tolerance

    def __hash__(self) -> int:
        return hash(self._value)

    def reduce(self) -> Tuple[Phase, int]:
        """Returns the phase reduced into [0,2) together with the number of full turns removed.

        A rotation over an extra full turn equals minus the rotation, so a caller that
        reduces a rotation angle has to add ``wraps`` to the global phase."""
        v = self._value
        if isinstance(v, Fraction):
            wraps = math.floor(v / 2)
            return Phase(v - 2 * wraps), wraps
        wraps = math.floor(v / 2)
        r = v - 2 * wraps
        if 2 - r <= settings.tolerance:
            r = 0.0
            wraps += 1
        elif r <= settings.tolerance:
            r = 0.0
        return Phase(r), wraps

    def mod2(self) -> Phase:
        return self.reduce()[0]

    def is_zero(self) -> bool:
        if self.is_exact():
            return self._value == 0
        return abs(self._value) <= settings.tolerance

    def is_pauli(self) -> bool:
        """Whether the phase is an odd multiple of pi, i.e. the rotation is a Pauli up to phase."""
        return self.mod2() == 1

    def is_clifford(self) -> bool:
        """Whether the phase is a multiple of pi/2."""
        if self.is_exact():
            return (2 * self._value).denominator == 1
        twice = 2 * self._value
        return abs(twice - round(twice)) <= settings.tolerance


PhaseLike = Union[Phase, AngleLike]
