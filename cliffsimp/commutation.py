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

"""This module decides when a gate can be moved past a neighbouring gate.

The central object is :data:`COMMUTATION_TABLE`, which says what happens when a rotation
R_P(theta) on one wire of a CX or CZ is moved to the other side of it.
It follows from conjugating the generator P by the two-qubit gate G, which is self-inverse:

    CX Z_c CX = Z_c          CX X_t CX = X_t
    CX X_c CX = X_c X_t      CX Z_t CX = Z_c Z_t
    CX Y_c CX = Y_c X_t      CX Y_t CX = Z_c Y_t
    CZ Z_a CZ = Z_a          CZ X_a CZ = X_a Z_b      CZ Y_a CZ = Y_a Z_b

If the conjugate is P itself the rotation moves through unchanged. Otherwise the conjugate
is P (x) Q with Q a Pauli on the other wire, and exp(-i theta P (x) Q/2) is entangling
unless theta is a multiple of pi. For theta = pi we have R_P(pi) = -iP, so

    G R_P(pi) = -i (P (x) Q) G = exp(i pi/2) R_P(pi) R_Q(pi) G,

meaning the rotation moves through while leaving R_Q(pi) behind on the other wire,
and the global phase increases by 1/2.
"""

from fractions import Fraction
from typing import Dict, Optional, Tuple
from typing_extensions import Final

from .circuit.gates import Gate, AxisPhase, XPhase, YPhase, ZPhase, CX, CZ, MCX
from .circuit.phase import Phase
from .utils import Axis

__all__ = ['Role', 'Commutation', 'CommutationResult', 'COMMUTATION_TABLE',
           'role_of', 'commute_through', 'wire_type', 'gates_commute']


class Role:
    """The wire of a two-qubit controlled gate a rotation sits on."""
    CONTROL: Final = 'control'
    TARGET: Final = 'target'


class Commutation(object):
    FREE: Final = 'free'
    CORRECTION: Final = 'correction'

    def __init__(self, kind: str, correction_axis: Optional[Axis.Type] = None) -> None:
        self.kind = kind
        self.correction_axis = correction_axis

    def __repr__(self) -> str:
        if self.correction_axis is None:
            return "Commutation({})".format(self.kind)
        return "Commutation({}, {})".format(self.kind, self.correction_axis)


FREE = Commutation(Commutation.FREE)

def _correction(axis: Axis.Type) -> Commutation:
    return Commutation(Commutation.CORRECTION, axis)

# (gate name, rotation axis, role) -> what happens. Missing entries are blocked.
COMMUTATION_TABLE: Dict[Tuple[str, Axis.Type, str], Commutation] = {
    ('CX', Axis.Z, Role.CONTROL): FREE,
    ('CX', Axis.X, Role.TARGET): FREE,
    ('CX', Axis.X, Role.CONTROL): _correction(Axis.X),
    ('CX', Axis.Y, Role.CONTROL): _correction(Axis.X),
    ('CX', Axis.Z, Role.TARGET): _correction(Axis.Z),
    ('CX', Axis.Y, Role.TARGET): _correction(Axis.Z),
    ('CZ', Axis.Z, Role.CONTROL): FREE,
    ('CZ', Axis.Z, Role.TARGET): FREE,
    ('CZ', Axis.X, Role.CONTROL): _correction(Axis.Z),
    ('CZ', Axis.X, Role.TARGET): _correction(Axis.Z),
    ('CZ', Axis.Y, Role.CONTROL): _correction(Axis.Z),
    ('CZ', Axis.Y, Role.TARGET): _correction(Axis.Z),
}

_rotation_types = {Axis.X: XPhase, Axis.Y: YPhase, Axis.Z: ZPhase}


class CommutationResult(object):
    """How a rotation got past a two-qubit gate: the correction left on the other wire
    (if any) and the global phase this introduced."""
    def __init__(self, kind: str, correction: Optional[AxisPhase] = None, phase: Phase = Phase(0)) -> None:
        self.kind = kind
        self.correction = correction
        self.phase = phase

    def __repr__(self) -> str:
        return "CommutationResult({}, {}, phase={})".format(self.kind, self.correction, self.phase)


def role_of(gate: Gate, qubit: int) -> str:
    if not isinstance(gate, (CX, CZ)) or qubit not in gate.qubits():
        raise ValueError("Qubit {} is not a wire of {}".format(qubit, gate))
    return Role.CONTROL if qubit == gate.control else Role.TARGET


def commute_through(rotation: AxisPhase, gate: Gate, qubit: int) -> Optional[CommutationResult]:
    """Determines how ``rotation``, sitting on ``qubit`` directly next to the two-qubit ``gate``,
    can be moved to the other side of ``gate``. Returns None when this is not possible.

    The rotation angle is expected to be reduced into [0,2)."""
    if not isinstance(gate, (CX, CZ)):
        return None
    entry = COMMUTATION_TABLE.get((gate.name, rotation.axis, role_of(gate, qubit)))
    if entry is None:
        return None
    if entry.kind == Commutation.FREE:
        return CommutationResult(Commutation.FREE)
    if rotation.phase != 1:
        return None
    assert entry.correction_axis is not None
    other = gate.target if qubit == gate.control else gate.control
    correction = _rotation_types[entry.correction_axis](other, 1)
    return CommutationResult(Commutation.CORRECTION, correction, Phase(Fraction(1, 2)))


def wire_type(gate: Gate, qubit: int) -> Optional[Axis.Type]:
    """Returns Z if ``gate`` is diagonal in the computational basis on ``qubit``, X if it is
    diagonal in the Hadamard basis there, and None otherwise."""
    if isinstance(gate, ZPhase):
        return Axis.Z
    if isinstance(gate, XPhase):
        return Axis.X
    if isinstance(gate, CZ):
        return Axis.Z
    if isinstance(gate, CX):
        return Axis.Z if qubit == gate.control else Axis.X
    if isinstance(gate, MCX):
        return Axis.Z if qubit in gate.controls else Axis.X
    return None


def gates_commute(a: Gate, b: Gate) -> bool:
    """Sufficient condition for two gates to commute: on every qubit they share, both are
    diagonal in the same basis. Gates on disjoint qubits always commute."""
    shared = set(a.qubits()).intersection(b.qubits())
    for q in shared:
        t = wire_type(a, q)
        if t is None or t != wire_type(b, q):
            return False
    return True
