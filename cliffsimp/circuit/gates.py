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

"""
This file contains the definition of the gates that can appear in a Circuit.

The gate set is closed: single-qubit rotations about the X, Y or Z axis,
the generalised Euler rotation Rz(alpha)Rx(beta)Rz(gamma), the two-qubit
controlled gates CX and CZ, the multi-controlled NOT family, and measurements.
Named Clifford gates such as H or S are not separate types; they are built
from these gates together with the global phase they differ by,
see :data:`named_gate_table`.

All angles are multiples of pi. A rotation about the Pauli P over angle ``phase``
is the unitary exp(-i*pi*phase*P/2).
"""

import copy
import math
from fractions import Fraction
from typing import Callable, ClassVar, Dict, List, Sequence, Tuple, Type, TypeVar, TYPE_CHECKING

import numpy as np

from .phase import Phase, PhaseLike
from ..utils import Axis

if TYPE_CHECKING:
    from qiskit import QuantumCircuit

# We need this type variable so that the subclasses of Gate return the correct type for functions like copy()
Tvar = TypeVar('Tvar', bound='Gate')


def rotation_matrix(axis: Axis.Type, phase: PhaseLike) -> np.ndarray:
    """The 2x2 unitary exp(-i*pi*phase*P/2) for the Pauli P given by ``axis``."""
    theta = Phase(phase).to_radians()
    c = math.cos(theta / 2)
    s = math.sin(theta / 2)
    if axis == Axis.Z:
        return np.array([[complex(c, -s), 0], [0, complex(c, s)]], dtype=complex)
    if axis == Axis.X:
        return np.array([[c, -1j * s], [-1j * s, c]], dtype=complex)
    if axis == Axis.Y:
        return np.array([[c, -s], [s, c]], dtype=complex)
    raise ValueError("Unknown rotation axis {!r}".format(axis))


class Gate(object):
    """Base class for representing quantum gates."""
    name: ClassVar[str] = "BaseGate"
    qasm_name: ClassVar[str] = 'undefined'

    def qubits(self) -> List[int]:
        """The qubits this gate acts on. For controlled gates the controls come first."""
        raise NotImplementedError("qubits() must be implemented by each Gate subclass.")

    def __str__(self) -> str:
        attribs = [str(q) for q in self.qubits()]
        for a in ["phase", "alpha", "beta", "gamma"]:
            if hasattr(self, a):
                attribs.append("{}={!s}".format(a, getattr(self, a)))
        return "{}({})".format(self.name, ",".join(attribs))

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if type(self) != type(other):
            return False
        for a in ["target", "control", "controls", "phase", "alpha", "beta", "gamma"]:
            if hasattr(self, a):
                if not hasattr(other, a):
                    return False
                if getattr(self, a) != getattr(other, a):
                    return False
            elif hasattr(other, a):
                return False
        return True

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.qubits())))

    def copy(self: Tvar) -> Tvar:
        return copy.deepcopy(self)

    def to_adjoint(self: Tvar) -> Tvar:
        g = self.copy()
        if hasattr(g, "phase"):
            g.phase = -g.phase  # type: ignore
        return g

    def reposition(self: Tvar, mask: Sequence[int]) -> Tvar:
        g = self.copy()
        if hasattr(g, "target"):
            g.target = mask[g.target]  # type: ignore
        if hasattr(g, "control"):
            g.control = mask[g.control]  # type: ignore
        if hasattr(g, "controls"):
            g.controls = [mask[c] for c in g.controls]  # type: ignore
        return g

    def normalize(self) -> Phase:
        """Reduces all the angles of the gate into [0,2) and returns the global phase
        this introduces. Gates without angles are left alone."""
        return Phase(0)

    def is_identity(self) -> bool:
        return False

    def to_matrix(self) -> np.ndarray:
        """The unitary of the gate on ``self.qubits()``, with the first qubit as most significant."""
        raise ValueError("Gate {} does not have a unitary description".format(str(self)))

    def to_qiskit(self, qc: 'QuantumCircuit') -> None:
        raise ValueError("Gate {} does not have a Qiskit counterpart".format(str(self)))


class AxisPhase(Gate):
    """Base class for a rotation about a fixed Pauli axis."""
    name = 'AxisPhase'
    axis: ClassVar[Axis.Type]

    def __init__(self, target: int, phase: PhaseLike = 0) -> None:
        self.target = target
        self.phase = Phase(phase)

    def qubits(self) -> List[int]:
        return [self.target]

    def normalize(self) -> Phase:
        self.phase, wraps = self.phase.reduce()
        return Phase(wraps).mod2()

    def is_identity(self) -> bool:
        return self.phase.is_zero()

    def to_matrix(self) -> np.ndarray:
        return rotation_matrix(self.axis, self.phase)


class ZPhase(AxisPhase):
    name = 'ZPhase'
    qasm_name = 'rz'
    axis = Axis.Z

    def to_qiskit(self, qc):
        qc.rz(self.phase.to_radians(), self.target)


class XPhase(AxisPhase):
    name = 'XPhase'
    qasm_name = 'rx'
    axis = Axis.X

    def to_qiskit(self, qc):
        qc.rx(self.phase.to_radians(), self.target)


class YPhase(AxisPhase):
    name = 'YPhase'
    qasm_name = 'ry'
    axis = Axis.Y

    def to_qiskit(self, qc):
        qc.ry(self.phase.to_radians(), self.target)


class EulerPhase(Gate):
    """The generalised single-qubit gate Rz(alpha)Rx(beta)Rz(gamma).
    As a circuit, the Rz(gamma) rotation is applied first."""
    name = 'Euler'

    def __init__(self, target: int, alpha: PhaseLike = 0, beta: PhaseLike = 0, gamma: PhaseLike = 0) -> None:
        self.target = target
        self.alpha = Phase(alpha)
        self.beta = Phase(beta)
        self.gamma = Phase(gamma)

    @property
    def params(self) -> Tuple[Phase, Phase, Phase]:
        return (self.alpha, self.beta, self.gamma)

    def qubits(self) -> List[int]:
        return [self.target]

    def to_adjoint(self) -> 'EulerPhase':
        return EulerPhase(self.target, -self.gamma, -self.beta, -self.alpha)

    def normalize(self) -> Phase:
        self.alpha, w1 = self.alpha.reduce()
        self.beta, w2 = self.beta.reduce()
        self.gamma, w3 = self.gamma.reduce()
        return Phase(w1 + w2 + w3).mod2()

    def is_identity(self) -> bool:
        return all(p.is_zero() for p in self.params)

    def to_matrix(self) -> np.ndarray:
        return rotation_matrix(Axis.Z, self.alpha) @ rotation_matrix(Axis.X, self.beta) @ rotation_matrix(Axis.Z, self.gamma)

    def to_qiskit(self, qc):
        qc.rz(self.gamma.to_radians(), self.target)
        qc.rx(self.beta.to_radians(), self.target)
        qc.rz(self.alpha.to_radians(), self.target)


class GateWithControl(Gate):
    """Base class for two-qubit gates that have a control qubit."""
    control: int = -1

    def __init__(self, control: int, target: int) -> None:
        self.control = control
        self.target = target

    def qubits(self) -> List[int]:
        return [self.control, self.target]


class CX(GateWithControl):
    name = 'CX'
    qasm_name = 'cx'

    def to_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, 1, 0, 0],
                         [0, 0, 0, 1],
                         [0, 0, 1, 0]], dtype=complex)

    def to_qiskit(self, qc):
        qc.cx(self.control, self.target)


class CZ(GateWithControl):
    name = 'CZ'
    qasm_name = 'cz'

    def __eq__(self, other: object) -> bool:
        # CZ is symmetric in its two qubits
        if not isinstance(other, CZ):
            return False
        return {self.control, self.target} == {other.control, other.target}

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.qubits())))

    def to_matrix(self) -> np.ndarray:
        return np.diag([1, 1, 1, -1]).astype(complex)

    def to_qiskit(self, qc):
        qc.cz(self.control, self.target)


class MCX(Gate):
    """Multi-controlled NOT acting on at least three qubits."""
    name = 'MCX'
    qasm_name = 'mcx'

    def __init__(self, controls: Sequence[int], target: int) -> None:
        self.controls = list(controls)
        self.target = target

    def qubits(self) -> List[int]:
        return self.controls + [self.target]

    def to_matrix(self) -> np.ndarray:
        n = 2 ** (len(self.controls) + 1)
        m = np.eye(n, dtype=complex)
        m[[n - 2, n - 1]] = m[[n - 1, n - 2]]
        return m

    def to_qiskit(self, qc):
        qc.mcx(self.controls, self.target)


class CCX(MCX):
    name = 'CCX'
    qasm_name = 'ccx'

    def __init__(self, ctrl1: int, ctrl2: int, target: int) -> None:
        super().__init__([ctrl1, ctrl2], target)

    @property
    def ctrl1(self) -> int:
        return self.controls[0]

    @property
    def ctrl2(self) -> int:
        return self.controls[1]


class Measurement(Gate):
    """A computational basis measurement. No rewrite rule touches it."""
    name = 'Measurement'
    qasm_name = 'measure'

    def __init__(self, target: int) -> None:
        self.target = target

    def qubits(self) -> List[int]:
        return [self.target]

    def to_qiskit(self, qc):
        qc.measure(self.target, self.target)


gate_types: Dict[str, Type[Gate]] = {
    "XPhase": XPhase,
    "YPhase": YPhase,
    "ZPhase": ZPhase,
    "Rx": XPhase,
    "Ry": YPhase,
    "Rz": ZPhase,
    "Euler": EulerPhase,
    "CX": CX,
    "CNOT": CX,
    "CZ": CZ,
    "CCX": CCX,
    "TOF": CCX,
    "MCX": MCX,
    "Measurement": Measurement,
}

HALF = Fraction(1, 2)
QUARTER = Fraction(1, 4)
EIGHTH = Fraction(1, 8)

# name -> (constructor on a single target, global phase the named gate differs by)
# e.g. H = exp(i*pi/2) Rz(1/2)Rx(1/2)Rz(1/2) and S = exp(i*pi/4) Rz(1/2).
named_gate_table: Dict[str, Tuple[Callable[[int], Gate], Fraction]] = {
    "H": (lambda q: EulerPhase(q, HALF, HALF, HALF), HALF),
    "HAD": (lambda q: EulerPhase(q, HALF, HALF, HALF), HALF),
    "X": (lambda q: XPhase(q, 1), HALF),
    "NOT": (lambda q: XPhase(q, 1), HALF),
    "Y": (lambda q: YPhase(q, 1), HALF),
    "Z": (lambda q: ZPhase(q, 1), HALF),
    "S": (lambda q: ZPhase(q, HALF), QUARTER),
    "Sdg": (lambda q: ZPhase(q, -HALF), -QUARTER),
    "T": (lambda q: ZPhase(q, QUARTER), EIGHTH),
    "Tdg": (lambda q: ZPhase(q, -QUARTER), -EIGHTH),
    "SX": (lambda q: XPhase(q, HALF), QUARTER),
    "SXdg": (lambda q: XPhase(q, -HALF), -QUARTER),
}


def _record_phase(value) -> Phase:
    """Angles in gate records are exact multiples of pi, or floats in radians."""
    if isinstance(value, Phase):
        return value
    if isinstance(value, float):
        return Phase.from_radians(value)
    return Phase(value)


def gate_from_record(tag: str, qubits: Sequence[int], params: Sequence = ()) -> Tuple[Gate, Fraction]:
    """Builds a gate from a structural description ``(tag, qubits, params)``.
    Returns the gate together with the global phase that the named gate differs by.

    Exact parameters (``int``/``Fraction``) are multiples of pi, ``float`` parameters are in radians."""
    if isinstance(qubits, (int, str)):
        raise ValueError("Qubits of gate {} should be a list of qubit indices, got {!r}".format(tag, qubits))
    qubits = list(qubits)
    if not all(isinstance(q, int) for q in qubits):
        raise ValueError("Qubits of gate {} should be integers, got {!r}".format(tag, qubits))
    if tag in named_gate_table:
        if len(qubits) != 1 or params:
            raise ValueError("Gate {} takes a single qubit and no parameters".format(tag))
        constructor, phase = named_gate_table[tag]
        return constructor(qubits[0]), phase
    if tag not in gate_types:
        raise ValueError("Unknown gate type {!r}".format(tag))
    gate_class = gate_types[tag]
    phases = [_record_phase(p) for p in params]
    gate: Gate
    if issubclass(gate_class, AxisPhase):
        if len(qubits) != 1 or len(phases) != 1:
            raise ValueError("Gate {} takes a single qubit and a single angle".format(tag))
        gate = gate_class(qubits[0], phases[0])
    elif gate_class is EulerPhase:
        if len(qubits) != 1 or len(phases) != 3:
            raise ValueError("Gate {} takes a single qubit and three angles".format(tag))
        gate = EulerPhase(qubits[0], *phases)
    elif issubclass(gate_class, GateWithControl):
        if len(qubits) != 2 or phases:
            raise ValueError("Gate {} takes a control and a target qubit".format(tag))
        gate = gate_class(qubits[0], qubits[1])
    elif gate_class is CCX:
        if len(qubits) != 3 or phases:
            raise ValueError("Gate {} takes two controls and a target qubit".format(tag))
        gate = CCX(qubits[0], qubits[1], qubits[2])
    elif gate_class is MCX:
        if len(qubits) < 3 or phases:
            raise ValueError("Gate {} takes at least two controls and a target qubit".format(tag))
        gate = MCX(qubits[:-1], qubits[-1])
    else:
        if len(qubits) != 1 or phases:
            raise ValueError("Gate {} takes a single qubit".format(tag))
        gate = gate_class(qubits[0])  # type: ignore
    return gate, Fraction(0)


def gate_to_record(gate: Gate) -> Tuple:
    """The inverse of :func:`gate_from_record` for the core gate types.
    Angles are written as exact multiples of pi where possible, else as floats in radians."""
    def angle(p: Phase):
        return p.value if p.is_exact() else p.to_radians()
    if isinstance(gate, AxisPhase):
        return (gate.name, gate.qubits(), angle(gate.phase))
    if isinstance(gate, EulerPhase):
        return (gate.name, gate.qubits(), angle(gate.alpha), angle(gate.beta), angle(gate.gamma))
    return (gate.name, gate.qubits())
