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

"""The dependency graph of a circuit, stored as one doubly linked chain of gates per qubit.

A gate acting on several qubits is a single node that sits on the chain of each of its qubits.
Two gates are ordered precisely when they are connected by a path of chain links, so the
chains together form a directed acyclic graph. All the mutations offered here keep the chains
consistent with each other, and hence keep the graph acyclic."""

import heapq
from typing import Dict, Iterator, List, Optional, Sequence

from .circuit import Circuit
from .circuit.gates import Gate


class StructuralViolation(ValueError):
    """Raised when a mutation would break the per-qubit chains of a CircuitDAG,
    for instance when removing a node that is no longer part of the circuit."""


class DAG:
    """A node in the dependency graph: a gate together with its neighbours on each qubit it acts on."""
    def __init__(self, node: Gate, index: int) -> None:
        self.node: Gate = node
        self.index: int = index # Creation order, used to make the topological order deterministic
        self.parents: Dict[int, Optional['DAG']] = {q: None for q in node.qubits()}
        self.children: Dict[int, Optional['DAG']] = {q: None for q in node.qubits()}
        self.attached: bool = False

    def qubits(self) -> List[int]:
        return self.node.qubits()

    def __repr__(self) -> str:
        return "DAG({}: {})".format(self.index, self.node)


class CircuitDAG:
    """Per-qubit operation chains of a circuit.

    Use :meth:`from_circuit` to build one and :meth:`to_circuit` to write the gates back in a
    deterministic topological order."""
    def __init__(self, qubits: int) -> None:
        self.qubits: int = qubits
        self.first: Dict[int, Optional[DAG]] = {q: None for q in range(qubits)}
        self.last: Dict[int, Optional[DAG]] = {q: None for q in range(qubits)}
        self.max_index: int = 0
        self.size: int = 0

    @staticmethod
    def from_circuit(circuit: Circuit) -> 'CircuitDAG':
        """Create the dependency graph of a circuit. The gates are copied, so that
        the circuit itself is left alone until the result is written back."""
        dag = CircuitDAG(circuit.qubits)
        for gate in circuit.gates:
            dag.append(gate.copy())
        return dag

    def to_circuit(self, circuit: Circuit) -> None:
        """Overwrites the gates of ``circuit`` with the gates of this graph, in topological order."""
        circuit.gates = self.to_gates()

    def to_gates(self) -> List[Gate]:
        return [n.node for n in self.topological_sort()]

    def __len__(self) -> int:
        return self.size

    def _new_node(self, gate: Gate) -> DAG:
        for q in gate.qubits():
            if q not in self.first:
                raise StructuralViolation("Gate {} acts on qubit {} outside of the register".format(gate, q))
        node = DAG(gate, self.max_index)
        self.max_index += 1
        return node

    def _link(self, a: Optional[DAG], b: Optional[DAG], q: int) -> None:
        """Make ``b`` directly follow ``a`` on qubit ``q``. ``None`` stands for the chain boundary."""
        if a is None:
            self.first[q] = b
        else:
            a.children[q] = b
        if b is None:
            self.last[q] = a
        else:
            b.parents[q] = a

    def _check_attached(self, node: DAG) -> None:
        if not node.attached:
            raise StructuralViolation("{} is not part of the circuit".format(node))
        for q in node.qubits():
            p = node.parents[q]
            c = node.children[q]
            if (self.first[q] if p is None else p.children[q]) is not node or \
               (self.last[q] if c is None else c.parents[q]) is not node:
                raise StructuralViolation("The links of {} on qubit {} are inconsistent".format(node, q))

    ### TRAVERSAL

    def first_on(self, q: int) -> Optional[DAG]:
        return self.first[q]

    def last_on(self, q: int) -> Optional[DAG]:
        return self.last[q]

    def next_on(self, node: DAG, q: int) -> Optional[DAG]:
        """The gate directly after ``node`` on qubit ``q``, or None at the end of the chain."""
        if q not in node.children:
            raise StructuralViolation("{} does not act on qubit {}".format(node, q))
        return node.children[q]

    def prev_on(self, node: DAG, q: int) -> Optional[DAG]:
        """The gate directly before ``node`` on qubit ``q``, or None at the start of the chain."""
        if q not in node.parents:
            raise StructuralViolation("{} does not act on qubit {}".format(node, q))
        return node.parents[q]

    def nodes_on(self, q: int) -> Iterator[DAG]:
        node = self.first[q]
        while node is not None:
            yield node
            node = node.children[q]

    def nodes_on_reversed(self, q: int) -> Iterator[DAG]:
        node = self.last[q]
        while node is not None:
            yield node
            node = node.parents[q]

    def nodes(self) -> List[DAG]:
        return self.topological_sort()

    ### MUTATION

    def append(self, gate: Gate) -> DAG:
        """Adds a gate at the end of the circuit."""
        node = self._new_node(gate)
        for q in gate.qubits():
            self._link(self.last[q], node, q)
            self._link(node, None, q)
        node.attached = True
        self.size += 1
        return node

    def insert_after(self, anchor: DAG, gate: Gate) -> DAG:
        """Inserts a single-qubit gate directly after ``anchor`` on the qubit of the gate."""
        self._check_attached(anchor)
        qs = gate.qubits()
        if len(qs) != 1 or qs[0] not in anchor.children:
            raise StructuralViolation("Can only insert a single-qubit gate on a qubit of {}, got {}".format(anchor, gate))
        q = qs[0]
        node = self._new_node(gate)
        child = anchor.children[q]
        self._link(anchor, node, q)
        self._link(node, child, q)
        node.attached = True
        self.size += 1
        return node

    def insert_before(self, anchor: DAG, gate: Gate) -> DAG:
        """Inserts a single-qubit gate directly before ``anchor`` on the qubit of the gate."""
        self._check_attached(anchor)
        qs = gate.qubits()
        if len(qs) != 1 or qs[0] not in anchor.parents:
            raise StructuralViolation("Can only insert a single-qubit gate on a qubit of {}, got {}".format(anchor, gate))
        q = qs[0]
        node = self._new_node(gate)
        parent = anchor.parents[q]
        self._link(parent, node, q)
        self._link(node, anchor, q)
        node.attached = True
        self.size += 1
        return node

    def substitute(self, node: DAG, gates: Sequence[Gate]) -> List[DAG]:
        """Replaces ``node`` by a sequence of gates acting on a subset of its qubits.
        The neighbours of ``node`` are spliced onto the new gates, or onto each other where
        no new gate acts. Returns the new nodes in order."""
        self._check_attached(node)
        qs = node.qubits()
        for g in gates:
            if not set(g.qubits()).issubset(qs):
                raise StructuralViolation("Gate {} acts outside of the qubits of {}".format(g, node))
        tails: Dict[int, Optional[DAG]] = {q: node.parents[q] for q in qs}
        new_nodes = []
        for g in gates:
            n = self._new_node(g)
            for q in g.qubits():
                self._link(tails[q], n, q)
                tails[q] = n
            n.attached = True
            new_nodes.append(n)
        for q in qs:
            self._link(tails[q], node.children[q], q)
            node.parents[q] = None
            node.children[q] = None
        node.attached = False
        self.size += len(new_nodes) - 1
        return new_nodes

    def remove(self, node: DAG) -> None:
        """Removes a node, splicing together its neighbours on each of its qubits."""
        self.substitute(node, [])

    def replace_gate(self, node: DAG, gate: Gate) -> DAG:
        """Swaps out the gate of a node for another gate on the same qubits."""
        self._check_attached(node)
        if sorted(gate.qubits()) != sorted(node.qubits()):
            raise StructuralViolation("Gate {} does not act on the qubits of {}".format(gate, node))
        node.node = gate
        return node

    ### ORDERING

    def topological_sort(self) -> List[DAG]:
        """Returns the nodes in topological order. Among the nodes that are ready to be placed,
        the one created first goes first, which makes the order deterministic."""
        indegree: Dict[DAG, int] = {}
        heap = []
        for q in range(self.qubits):
            for node in self.nodes_on(q):
                if node in indegree: continue
                indegree[node] = sum(1 for p in node.parents.values() if p is not None)
                if indegree[node] == 0:
                    heapq.heappush(heap, (node.index, id(node), node))
        order: List[DAG] = []
        while heap:
            _, _, node = heapq.heappop(heap)
            order.append(node)
            for child in node.children.values():
                if child is None: continue
                indegree[child] -= 1
                if indegree[child] == 0:
                    heapq.heappush(heap, (child.index, id(child), child))
        if len(order) != len(indegree):
            raise StructuralViolation("The dependency graph contains a cycle")
        return order

    def check_invariants(self) -> None:
        """Verifies that all chain links are mutually consistent and that the graph is acyclic.

        :raises: StructuralViolation if this is not the case."""
        seen = set()
        for q in range(self.qubits):
            prev = None
            for node in self.nodes_on(q):
                if node.parents[q] is not prev:
                    raise StructuralViolation("The links of {} on qubit {} are inconsistent".format(node, q))
                if not node.attached:
                    raise StructuralViolation("{} is linked but not attached".format(node))
                seen.add(node)
                prev = node
            if self.last[q] is not prev:
                raise StructuralViolation("The chain of qubit {} does not end at its last node".format(q))
        if len(seen) != self.size:
            raise StructuralViolation("Expected {} nodes, found {}".format(self.size, len(seen)))
        self.topological_sort()
