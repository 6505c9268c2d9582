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

"""This module rewrites multi-controlled NOT gates into CX gates and single-qubit rotations.

The doubly-controlled NOT uses the standard circuit with six CX gates and seven T gates.
Gates with more controls use the phase polynomial of the multi-controlled Z gate:
for bits x_1,...,x_n we have

    x_1 x_2 ... x_n = 2^(1-n) * sum over nonempty S of (-1)^(|S|+1) (XOR of x_i for i in S)

so that the multi-controlled Z is a product of phase gates on the parities of all the
nonempty subsets of its qubits. Each parity is computed into the last qubit of the subset
with a ladder of CX gates, and uncomputed afterwards. Conjugating with Hadamards on the
target gives the multi-controlled NOT. No ancillas are used."""

from fractions import Fraction
from itertools import combinations
from typing import List, Tuple

from .circuit import Circuit
from .circuit.gates import Gate, ZPhase, CX, MCX, named_gate_table
from .circuit.phase import Phase
from .dag import CircuitDAG

__all__ = ['ccx_gates', 'mcx_gates', 'decompose_gate', 'decompose_dag', 'decompose_circuit']


class _GateList(object):
    """Collects core gates together with the global phase of the named gates they come from."""
    def __init__(self) -> None:
        self.gates: List[Gate] = []
        self.phase = Phase(0)

    def add(self, name: str, q: int) -> None:
        constructor, phase = named_gate_table[name]
        gate = constructor(q)
        self.phase = self.phase + phase + gate.normalize()
        self.gates.append(gate)

    def add_gate(self, gate: Gate) -> None:
        self.phase = self.phase + gate.normalize()
        self.gates.append(gate)

    def cx(self, control: int, target: int) -> None:
        self.gates.append(CX(control, target))

    def result(self) -> Tuple[List[Gate], Phase]:
        return self.gates, self.phase.mod2()


def ccx_gates(ctrl1: int, ctrl2: int, target: int) -> Tuple[List[Gate], Phase]:
    """The Toffoli gate as six CX gates and single-qubit rotations, together with the global phase."""
    res = _GateList()
    res.add('H', target)
    res.cx(ctrl2, target)
    res.add('Tdg', target)
    res.cx(ctrl1, target)
    res.add('T', target)
    res.cx(ctrl2, target)
    res.add('Tdg', target)
    res.cx(ctrl1, target)
    res.add('T', ctrl2)
    res.add('T', target)
    res.add('H', target)
    res.cx(ctrl1, ctrl2)
    res.add('T', ctrl1)
    res.add('Tdg', ctrl2)
    res.cx(ctrl1, ctrl2)
    return res.result()


def mcx_gates(controls: List[int], target: int) -> Tuple[List[Gate], Phase]:
    """A multi-controlled NOT on any number of controls, using the phase polynomial
    of the multi-controlled Z gate."""
    qubits = list(controls) + [target]
    n = len(qubits)
    res = _GateList()
    res.add('H', target)
    for size in range(1, n + 1):
        for subset in combinations(qubits, size):
            *rest, last = subset
            angle = Fraction((-1) ** (size + 1), 2 ** (n - 1))
            for q in rest:
                res.cx(q, last)
            # The phase gate diag(1, exp(i*pi*angle)) is exp(i*pi*angle/2) Rz(angle)
            res.add_gate(ZPhase(last, angle))
            res.phase = res.phase + angle / 2
            for q in reversed(rest):
                res.cx(q, last)
    res.add('H', target)
    return res.result()


def decompose_gate(gate: Gate) -> Tuple[List[Gate], Phase]:
    """Returns core gates equal to ``gate`` up to the returned global phase.

    :raises: ValueError if the gate is not a multi-controlled NOT."""
    if not isinstance(gate, MCX):
        raise ValueError("Don't know how to decompose {}".format(gate))
    if len(gate.controls) == 2:
        return ccx_gates(gate.controls[0], gate.controls[1], gate.target)
    return mcx_gates(gate.controls, gate.target)


def decompose_dag(dag: CircuitDAG) -> Phase:
    """Decomposes every multi-controlled gate in a :class:`~cliffsimp.dag.CircuitDAG`.
    Returns the global phase that the decompositions introduced."""
    phase = Phase(0)
    for node in dag.nodes():
        if isinstance(node.node, MCX):
            gates, p = decompose_gate(node.node)
            dag.substitute(node, gates)
            phase = phase + p
    return phase.mod2()


def decompose_circuit(circuit: Circuit) -> bool:
    """Decomposes every multi-controlled gate of ``circuit`` in place.
    Returns whether there was anything to decompose."""
    if not any(isinstance(g, MCX) for g in circuit.gates):
        return False
    dag = CircuitDAG.from_circuit(circuit)
    circuit.scalar.add_phase(decompose_dag(dag))
    dag.to_circuit(circuit)
    return True
