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

"""This module contains the simplification strategies that work on a whole circuit.
All of them change the circuit in place and return whether anything changed."""

from typing import Dict, List, Optional

from .circuit import Circuit
from .clifford_simplifier import CliffordSimplifier, SimplifierConfig
from .canonicalize import canonicalize_dag
from .dag import CircuitDAG
from .decompose import decompose_circuit

__all__ = ['clifford_simp', 'full_reduce', 'decompose_multi_controlled', 'canonicalize',
           'qubit_partitions', 'reduce_partitions']


def clifford_simp(circuit: Circuit, **kwargs) -> bool:
    """Simplifies ``circuit`` in place. The keyword arguments are those of :class:`SimplifierConfig`,
    so that for instance ``clifford_simp(c, commute=False)`` only merges and cancels adjacent gates."""
    return CliffordSimplifier(circuit, SimplifierConfig(**kwargs)).run()


def full_reduce(circuit: Circuit, config: Optional[SimplifierConfig] = None) -> bool:
    """Runs every rewrite the simplifier knows about, reducing each independent
    part of the circuit separately."""
    return reduce_partitions(circuit, config)


def decompose_multi_controlled(circuit: Circuit) -> bool:
    """Rewrites every multi-controlled NOT gate into CX gates and rotations."""
    circuit.validate()
    return decompose_circuit(circuit)


def canonicalize(circuit: Circuit) -> bool:
    """Folds every run of single-qubit gates into a single rotation, without applying any other rule."""
    circuit.validate()
    dag = CircuitDAG.from_circuit(circuit)
    rewrites = canonicalize_dag(dag)
    if not rewrites:
        return False
    for rewrite in rewrites:
        circuit.scalar.add_phase(rewrite.phase)
    dag.to_circuit(circuit)
    return True


def qubit_partitions(circuit: Circuit) -> List[List[int]]:
    """Splits the qubits into groups such that no gate acts on qubits from two different groups.
    Groups are sorted, and are ordered by their smallest qubit."""
    parent = list(range(circuit.qubits))

    def find(q: int) -> int:
        while parent[q] != q:
            parent[q] = parent[parent[q]]
            q = parent[q]
        return q

    for g in circuit.gates:
        qs = g.qubits()
        for q in qs[1:]:
            a, b = find(qs[0]), find(q)
            if a != b:
                parent[max(a, b)] = min(a, b)
    groups: Dict[int, List[int]] = {}
    for q in range(circuit.qubits):
        groups.setdefault(find(q), []).append(q)
    return [groups[k] for k in sorted(groups)]


def reduce_partitions(circuit: Circuit, config: Optional[SimplifierConfig] = None) -> bool:
    """Simplifies each group of :func:`qubit_partitions` as a separate circuit and merges the results.
    Gates in different groups commute, so the gates of each group are placed after those of the
    previous group."""
    circuit.validate()
    partitions = qubit_partitions(circuit)
    if len(partitions) <= 1:
        return CliffordSimplifier(circuit, config).run()
    location = {}
    for i, part in enumerate(partitions):
        for j, q in enumerate(part):
            location[q] = (i, j)
    subcircuits = [Circuit(len(part), "{}[{}]".format(circuit.name, i)) for i, part in enumerate(partitions)]
    for g in circuit.gates:
        i = location[g.qubits()[0]][0]
        mask = {q: location[q][1] for q in g.qubits()}
        subcircuits[i].gates.append(g.reposition(mask))
    changed = False
    for sub in subcircuits:
        if CliffordSimplifier(sub, config).run():
            changed = True
    if not changed:
        return False
    gates = []
    for part, sub in zip(partitions, subcircuits):
        gates.extend(g.reposition(part) for g in sub.gates)
        circuit.scalar.add_phase(sub.phase)
    circuit.gates = gates
    return True
