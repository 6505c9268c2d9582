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

"""This module contains the rewrite rules used by the simplifier.

Every rule comes as a pair of functions. ``check_<rule>(dag, node)`` inspects the
neighbourhood of ``node`` and returns a match (or None when the rule does not apply).
``<rule>(dag, node)`` performs the rewrite and returns a :class:`Rewrite` describing it,
or None when the check fails. Rules never touch the global phase themselves:
the phase they introduce is returned in ``Rewrite.phase`` and should be added to the
scalar of the circuit by the caller.

Each rule that fires strictly decreases the number of gates, except for the
decomposition of multi-controlled gates, which is only applied once per gate."""

from typing import Callable, Iterable, List, Optional, Tuple

from .circuit.gates import AxisPhase, EulerPhase, CX, CZ, MCX
from .circuit.phase import Phase, PhaseLike
from .commutation import Commutation, commute_through, gates_commute
from .dag import CircuitDAG, DAG
from . import decompose

__all__ = ['Rewrite', 'RuleFunction',
           'check_remove_identity', 'remove_identity',
           'check_merge_rotations', 'merge_rotations',
           'check_cancel_inverse', 'cancel_inverse',
           'check_cancel_two_qubit', 'cancel_two_qubit',
           'check_commute_and_merge', 'commute_and_merge',
           'check_decompose_multi_controlled', 'decompose_multi_controlled']


class Rewrite(object):
    """The outcome of a rewrite: a description, the global phase it introduced,
    the nodes whose neighbourhood changed, and the change in the number of gates."""
    def __init__(self, name: str, phase: PhaseLike = 0, dirty: Iterable[Optional[DAG]] = (), gate_delta: int = 0) -> None:
        self.name = name
        self.phase = Phase(phase)
        self.dirty: List[DAG] = []
        for n in dirty:
            if n is not None and n not in self.dirty:
                self.dirty.append(n)
        self.gate_delta = gate_delta

    def __repr__(self) -> str:
        return "Rewrite({}, phase={}, gates {:+d})".format(self.name, self.phase, self.gate_delta)


RuleFunction = Callable[[CircuitDAG, DAG], Optional[Rewrite]]


def _neighbours(dag: CircuitDAG, node: DAG) -> List[Optional[DAG]]:
    res: List[Optional[DAG]] = []
    for q in node.qubits():
        res.append(dag.prev_on(node, q))
        res.append(dag.next_on(node, q))
    return res


def _combine(dag: CircuitDAG, node: DAG, phase: Phase) -> Tuple[Phase, bool]:
    """Adds ``phase`` to the angle of the rotation in ``node``.
    Returns the phase introduced by reducing the angle, and whether the node was
    removed because it became the identity."""
    gate = node.node
    assert isinstance(gate, AxisPhase)
    new_gate = type(gate)(gate.target, gate.phase + phase)
    wraps = new_gate.normalize()
    if new_gate.is_identity():
        dag.remove(node)
        return wraps, True
    dag.replace_gate(node, new_gate)
    return wraps, False


### REMOVE IDENTITY

def check_remove_identity(dag: CircuitDAG, node: DAG) -> bool:
    return node.attached and isinstance(node.node, (AxisPhase, EulerPhase)) and node.node.is_identity()


def remove_identity(dag: CircuitDAG, node: DAG) -> Optional[Rewrite]:
    """Removes a rotation over a zero angle."""
    if not check_remove_identity(dag, node):
        return None
    gate = node.node
    # An angle that is zero only up to reduction still carries its wraps
    phase = gate.copy().normalize()
    dirty = _neighbours(dag, node)
    dag.remove(node)
    return Rewrite("Remove identity", phase, dirty, -1)


### MERGE ROTATIONS

def check_merge_rotations(dag: CircuitDAG, node: DAG) -> Optional[DAG]:
    """Returns the next gate on the wire if it is a rotation about the same axis as ``node``."""
    if not node.attached or not isinstance(node.node, AxisPhase):
        return None
    child = dag.next_on(node, node.node.target)
    if child is None or not isinstance(child.node, AxisPhase) or child.node.axis != node.node.axis:
        return None
    return child


def merge_rotations(dag: CircuitDAG, node: DAG) -> Optional[Rewrite]:
    """Merges two consecutive rotations about the same axis into a single rotation,
    removing it entirely when the angles add up to a multiple of 2pi."""
    child = check_merge_rotations(dag, node)
    if child is None:
        return None
    q = node.node.target
    before = dag.prev_on(node, q)
    after = dag.next_on(child, q)
    dag.remove(child)
    wraps, removed = _combine(dag, node, child.node.phase)
    if removed:
        return Rewrite("Merge rotations into identity", wraps, [before, after], -2)
    return Rewrite("Merge rotations", wraps, [node, before, after], -1)


### CANCEL INVERSE

def _inverse_wraps(first: EulerPhase, second: EulerPhase) -> Optional[int]:
    """If ``second`` undoes ``first`` up to full turns, returns the number of full turns.
    Rz(a)Rx(b)Rz(c) is undone by Rz(-c)Rx(-b)Rz(-a), and every extra full turn flips the sign."""
    total = 0
    for p1, p2 in zip(first.params, reversed(second.params)):
        r, wraps = (p1 + p2).reduce()
        if not r.is_zero():
            return None
        total += wraps
    return total


def check_cancel_inverse(dag: CircuitDAG, node: DAG) -> Optional[Tuple[DAG, int]]:
    if not node.attached or not isinstance(node.node, EulerPhase):
        return None
    child = dag.next_on(node, node.node.target)
    if child is None or not isinstance(child.node, EulerPhase):
        return None
    wraps = _inverse_wraps(node.node, child.node)
    if wraps is None:
        return None
    return child, wraps


def cancel_inverse(dag: CircuitDAG, node: DAG) -> Optional[Rewrite]:
    """Removes an Euler gate that is directly followed by its inverse.
    The pair multiplies to (-1)^k for the number k of full turns left in the angles."""
    match = check_cancel_inverse(dag, node)
    if match is None:
        return None
    child, wraps = match
    q = node.node.target
    dirty = [dag.prev_on(node, q), dag.next_on(child, q)]
    dag.remove(child)
    dag.remove(node)
    return Rewrite("Cancel inverse gates", Phase(wraps).mod2(), dirty, -2)


### CANCEL TWO-QUBIT GATES

def check_cancel_two_qubit(dag: CircuitDAG, node: DAG) -> Optional[DAG]:
    """Looks for a copy of the CX, CZ or multi-controlled NOT gate of ``node`` later on in the
    circuit, such that every gate in between commutes with it. Such a pair multiplies to the identity."""
    if not node.attached or not isinstance(node.node, (CX, CZ, MCX)):
        return None
    gate = node.node
    qs = node.qubits()
    cur = dag.next_on(node, qs[0])
    while cur is not None:
        if cur.node == gate and _reachable_through_commuting(dag, node, cur, qs[1:]):
            return cur
        if not gates_commute(gate, cur.node):
            return None
        cur = dag.next_on(cur, qs[0])
    return None


def _reachable_through_commuting(dag: CircuitDAG, start: DAG, end: DAG, qubits: List[int]) -> bool:
    gate = start.node
    for q in qubits:
        cur = dag.next_on(start, q)
        while cur is not end:
            if cur is None or not gates_commute(gate, cur.node):
                return False
            cur = dag.next_on(cur, q)
    return True


def cancel_two_qubit(dag: CircuitDAG, node: DAG) -> Optional[Rewrite]:
    """Removes a pair of identical CX, CZ or multi-controlled NOT gates that are separated only by
    gates that commute with them."""
    partner = check_cancel_two_qubit(dag, node)
    if partner is None:
        return None
    dirty = [n for n in _neighbours(dag, node) + _neighbours(dag, partner) if n is not node and n is not partner]
    dag.remove(partner)
    dag.remove(node)
    return Rewrite("Cancel {} pair".format(node.node.name), 0, dirty, -2)


### COMMUTE AND MERGE

class CommuteMatch(object):
    """A rotation that can be pushed forward past two-qubit gates until it reaches ``partner``.
    ``corrections`` lists the two-qubit gates that leave a correction behind, together with that
    correction and the rotation directly after the gate that absorbs it (if there is one)."""
    def __init__(self, partner: DAG, corrections: List[Tuple[DAG, AxisPhase, Optional[DAG]]], phase: Phase, gate_delta: int) -> None:
        self.partner = partner
        self.corrections = corrections
        self.phase = phase
        self.gate_delta = gate_delta


def _absorber(dag: CircuitDAG, gate_node: DAG, correction: AxisPhase) -> Optional[DAG]:
    after = dag.next_on(gate_node, correction.target)
    if after is not None and isinstance(after.node, AxisPhase) and after.node.axis == correction.axis:
        return after
    return None


def _merge_delta(first: Phase, second: Phase) -> int:
    """Change in gate count when a rotation is merged into another one."""
    return -2 if (first + second).mod2().is_zero() else -1


def check_commute_and_merge(dag: CircuitDAG, node: DAG) -> Optional[CommuteMatch]:
    """Walks forward from the rotation in ``node`` through CX and CZ gates, using the commutation
    table, until it meets a rotation about the same axis. Only matches when the merge removes
    more gates than the corrections picked up on the way add."""
    if not node.attached or not isinstance(node.node, AxisPhase) or node.node.is_identity():
        return None
    rot = node.node
    q = rot.target
    corrections: List[Tuple[DAG, AxisPhase, Optional[DAG]]] = []
    phase = Phase(0)
    cur = dag.next_on(node, q)
    crossed = 0
    while cur is not None:
        g = cur.node
        if isinstance(g, AxisPhase) and g.axis == rot.axis:
            break
        result = commute_through(rot, g, q)
        if result is None:
            return None
        crossed += 1
        if result.kind == Commutation.CORRECTION:
            assert result.correction is not None
            corrections.append((cur, result.correction, _absorber(dag, cur, result.correction)))
            phase = phase + result.phase
        cur = dag.next_on(cur, q)
    if cur is None or crossed == 0:
        return None # Adjacent rotations are handled by merge_rotations
    delta = _merge_delta(rot.phase, cur.node.phase)
    for _, correction, absorber in corrections:
        if absorber is None:
            delta += 1
        else:
            delta += _merge_delta(correction.phase, absorber.node.phase) + 1
    if delta >= 0:
        return None
    return CommuteMatch(cur, corrections, phase, delta)


def commute_and_merge(dag: CircuitDAG, node: DAG) -> Optional[Rewrite]:
    """Moves a rotation forward past two-qubit gates and merges it into the next rotation
    about the same axis on its wire. Pauli rotations passing a wire on which they do not commute
    leave a Pauli correction on the other wire, which is merged into a rotation directly following
    the two-qubit gate when possible."""
    match = check_commute_and_merge(dag, node)
    if match is None:
        return None
    rot = node.node
    q = rot.target
    phase = match.phase
    dirty: List[Optional[DAG]] = [dag.prev_on(node, q), dag.next_on(node, q)]
    for gate_node, correction, absorber in match.corrections:
        if absorber is None:
            dirty.append(dag.insert_after(gate_node, correction))
        else:
            dirty.extend([dag.next_on(absorber, correction.target), absorber])
            wraps, _ = _combine(dag, absorber, correction.phase)
            phase = phase + wraps
        dirty.append(gate_node)
    partner = match.partner
    dirty.extend([dag.prev_on(partner, q), dag.next_on(partner, q), partner])
    wraps, _ = _combine(dag, partner, rot.phase)
    phase = phase + wraps
    dag.remove(node)
    dirty = [n for n in dirty if n is not None and n.attached]
    return Rewrite("Commute {} and merge".format(rot.name), phase.mod2(), dirty, match.gate_delta)


### MULTI-CONTROLLED GATES

def check_decompose_multi_controlled(dag: CircuitDAG, node: DAG) -> bool:
    return node.attached and isinstance(node.node, MCX)


def decompose_multi_controlled(dag: CircuitDAG, node: DAG) -> Optional[Rewrite]:
    """Replaces a multi-controlled NOT by an equivalent circuit of CX gates and rotations."""
    if not check_decompose_multi_controlled(dag, node):
        return None
    gates, phase = decompose.decompose_gate(node.node)
    outside = [n for n in _neighbours(dag, node) if n is not None]
    new_nodes = dag.substitute(node, gates)
    return Rewrite("Decompose {}".format(node.node.name), phase, outside + new_nodes, len(new_nodes) - 1)
