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

from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np

from qiskit import QuantumCircuit

from .gates import (Gate, AxisPhase, EulerPhase, GateWithControl, CX, CZ, MCX, Measurement,
                    gate_types, gate_from_record, gate_to_record, named_gate_table)
from .phase import Phase
from .scalar import Scalar
from .. import symplectic

CircuitLike = Union['Circuit', Gate]

__all__ = ['Circuit', 'InvalidCircuit', 'id']


class InvalidCircuit(ValueError):
    """Raised when a circuit references qubits outside of its register,
    or when a multi-qubit gate uses the same qubit twice."""


class Circuit(object):
    """Class for representing quantum circuits.

    A circuit is an ordered list of gates on a fixed register of qubits,
    together with a global phase. The unitary it represents is
    ``exp(i*pi*phase)`` times the product of the unitaries of its gates.

    Gates are not checked when they are added; call :meth:`validate` (which the
    simplifier does before touching anything) to detect malformed input."""
    def __init__(self, qubit_amount: int, name: str = '') -> None:
        self.qubits: int        = qubit_amount
        self.gates:  List[Gate] = []
        self.name:   str        = name
        self.scalar: Scalar     = Scalar()

    ### BASIC FUNCTIONALITY
    @property
    def phase(self) -> Phase:
        return self.scalar.phase

    def __str__(self) -> str:
        return "Circuit({} qubits, {} gates, phase={!s})".format(self.qubits, len(self.gates), self.phase)

    def __repr__(self) -> str:
        return str(self)

    def copy(self) -> 'Circuit':
        c = Circuit(self.qubits, self.name)
        c.gates = [g.copy() for g in self.gates]
        c.scalar = self.scalar.copy()
        return c

    def adjoint(self) -> 'Circuit':
        c = Circuit(self.qubits, self.name + 'Adjoint')
        for g in reversed(self.gates):
            if isinstance(g, Measurement):
                raise ValueError("Cannot take the adjoint of a circuit containing measurements")
            c.gates.append(g.to_adjoint())
        c.scalar = Scalar(-self.phase)
        return c

    def verify_equality(self, other: 'Circuit') -> bool:
        """Checks whether the two circuits implement the same unitary, including the global phase.
        This computes both unitaries, so is only feasible for a small number of qubits."""
        if self.qubits != other.qubits:
            return False
        return bool(np.allclose(self.to_matrix(), other.to_matrix(), atol=1e-8))

    def validate(self) -> None:
        """Checks that every gate only references qubits in the register,
        and that no gate uses the same qubit twice.

        :raises: InvalidCircuit on the first malformed gate."""
        for i, g in enumerate(self.gates):
            if not isinstance(g, Gate):
                raise InvalidCircuit("Entry {} is not a gate: {!r}".format(i, g))
            qs = g.qubits()
            for q in qs:
                if not isinstance(q, (int, np.integer)) or isinstance(q, bool) or not 0 <= q < self.qubits:
                    raise InvalidCircuit("Gate {} ({}) acts on qubit {!r}, outside of the register of {} qubits"
                                         .format(i, g, q, self.qubits))
            if len(set(qs)) != len(qs):
                raise InvalidCircuit("Gate {} ({}) uses the same qubit more than once".format(i, g))
            if isinstance(g, MCX) and len(g.controls) < 2:
                raise InvalidCircuit("Gate {} ({}) is a multi-controlled gate with fewer than two controls".format(i, g))

    def add_gate(self, gate: Union[Gate,str], *args, **kwargs) -> None:
        """Adds a gate to the circuit. ``gate`` can either be
        an instance of a :class:`Gate`, or it can be the name of a gate,
        in which case additional arguments should be given.

        Named gates such as ``"H"`` or ``"S"`` are stored as the rotations they
        are made of, and the phase they differ by is added to the global phase.
        Angles are reduced into [0,2), again keeping track of the global phase.

        Example::

            circuit.add_gate("CNOT", 1, 4) # adds a CNOT gate with control 1 and target 4
            circuit.add_gate("ZPhase", 2, phase=Fraction(3,4)) # Adds a ZPhase gate on qubit 2 with phase 3/4
            circuit.add_gate("H", 0) # Adds a Hadamard gate on qubit 0
        """
        if isinstance(gate, str):
            if gate in named_gate_table:
                constructor, phase = named_gate_table[gate]
                gate = constructor(*args, **kwargs)
                self.scalar.add_phase(phase)
            else:
                if gate not in gate_types:
                    raise ValueError("Unknown gate type {!r}".format(gate))
                gate = gate_types[gate](*args, **kwargs) # type: ignore
        self.scalar.add_phase(gate.normalize())
        self.gates.append(gate)

    def add_gates(self, gates: str, qubit: int) -> None:
        """Adds a series of single qubit gates on the same qubit.
        ``gates`` should be a space-separated string of gatenames.

        Example::

            circuit.add_gates("S T H T H", 1)
        """
        for g in gates.split(" "):
            self.add_gate(g, qubit)

    def add_circuit(self, other: 'Circuit') -> None:
        """Adds the gates of another circuit to this circuit, and multiplies in its global phase.
        If the other circuit has more qubits than this circuit, the number of qubits
        in this circuit is updated to match."""
        self.gates.extend(g.copy() for g in other.gates)
        self.scalar.mult_with_scalar(other.scalar)
        if other.qubits > self.qubits:
            self.qubits = other.qubits

    @staticmethod
    def from_gate_list(qubit_amount: int, records: Iterable[Sequence], name: str = '') -> 'Circuit':
        """Builds a circuit from a list of gate records ``(tag, qubits, *angles)``.

        Angles given as ``int`` or ``Fraction`` are multiples of pi, ``float`` angles are in radians.
        Records are checked with :meth:`validate`.

        Example::

            Circuit.from_gate_list(3, [("CX", [1, 0]), ("Rz", [2], Fraction(1,4)), ("H", [0])])
        """
        c = Circuit(qubit_amount, name)
        for record in records:
            if len(record) < 2:
                raise InvalidCircuit("Gate record {!r} needs a type tag and a list of qubits".format(record))
            tag, qubits, *params = record
            try:
                gate, phase = gate_from_record(tag, qubits, params)
            except (ValueError, TypeError) as e:
                raise InvalidCircuit(str(e)) from e
            c.scalar.add_phase(phase)
            c.scalar.add_phase(gate.normalize())
            c.gates.append(gate)
        c.validate()
        return c

    def to_gate_list(self) -> List[Tuple]:
        """The gates of the circuit as records ``(tag, qubits, *angles)``.
        The global phase is not part of the records, see :attr:`phase`."""
        return [gate_to_record(g) for g in self.gates]

    def stats(self) -> str:
        """Returns a string with some information regarding the gate counts of the circuit."""
        single = sum(1 for g in self.gates if len(g.qubits()) == 1)
        two = self.twoqubitcount()
        return "Circuit {} on {} qubits with {} gates.\n        {} are single-qubit gates\n" \
               "        {} are two-qubit gates\n        {} are other gates".format(
                   self.name, self.qubits, len(self.gates), single, two, len(self.gates) - single - two)

    def twoqubitcount(self) -> int:
        return sum(1 for g in self.gates if isinstance(g, GateWithControl))

    ### OPERATORS

    def __iadd__(self, other: CircuitLike) -> 'Circuit':
        if isinstance(other, Circuit):
            self.add_circuit(other)
        elif isinstance(other, Gate):
            self.add_gate(other)
            if max(other.qubits()) + 1 > self.qubits:
                self.qubits = max(other.qubits()) + 1
        else:
            raise TypeError("Cannot add object of type {} to Circuit".format(type(other)))
        return self

    def __add__(self, other: CircuitLike) -> 'Circuit':
        c = self.copy()
        c += other
        return c

    def __len__(self) -> int:
        return len(self.gates)

    def __iter__(self) -> Iterator[Gate]:
        return iter(self.gates)

    ### CONVERSION METHODS

    def to_matrix(self) -> np.ndarray:
        """Returns the unitary of the circuit, including the global phase.
        Qubit 0 is the most significant bit of a basis state index."""
        n = self.qubits
        dim = 2 ** n
        tensor = np.eye(dim, dtype=complex).reshape((2,) * n + (dim,))
        for g in self.gates:
            m = g.to_matrix()
            qs = g.qubits()
            k = len(qs)
            m = m.reshape((2,) * (2 * k))
            tensor = np.tensordot(m, tensor, axes=(list(range(k, 2 * k)), qs))
            tensor = np.moveaxis(tensor, list(range(k)), qs)
        return self.scalar.to_number() * tensor.reshape((dim, dim))

    def to_symplectic_matrix(self) -> symplectic.Matrix:
        """Calculates the binary symplectic representation of the circuit. This forgets about
        Pauli corrections and phases, and only supports Clifford gates."""
        mat = symplectic.ID(self.qubits)
        for g in self.gates:
            if isinstance(g, AxisPhase):
                m = symplectic.rotation(g.axis, g.target, self.qubits, g.phase)
            elif isinstance(g, EulerPhase):
                m = symplectic.euler(g.target, self.qubits, g.alpha, g.beta, g.gamma)
            elif isinstance(g, CX):
                m = symplectic.CX(g.control, g.target, self.qubits)
            elif isinstance(g, CZ):
                m = symplectic.CZ(g.control, g.target, self.qubits)
            else:
                raise ValueError("Unsupported gate", str(g))
            mat = m*mat # We multiply this way since circuit order goes the opposite direction of matrix multiplication order
        return mat

    def to_qiskit_rep(self) -> QuantumCircuit:
        """Converts the circuit into a Qiskit circuit, for instance to hand it to a
        rebasing pass. Euler gates are written as their three rotations."""
        if any(isinstance(g, Measurement) for g in self.gates):
            qc = QuantumCircuit(self.qubits, self.qubits)
        else:
            qc = QuantumCircuit(self.qubits)
        for g in self.gates:
            g.to_qiskit(qc)
        qc.global_phase = self.phase.to_radians()
        return qc


def id(n: int) -> Circuit:
    return Circuit(n)
