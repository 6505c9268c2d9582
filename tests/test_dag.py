import unittest
import sys
from fractions import Fraction

sys.path.append('..')

from cliffsimp import Circuit
from cliffsimp.circuit.gates import XPhase, ZPhase, EulerPhase, CX, CZ
from cliffsimp.dag import CircuitDAG, StructuralViolation


def example_circuit() -> Circuit:
    return Circuit.from_gate_list(3, [("H", [0]), ("CX", [0, 1]), ("Z", [1]), ("Rx", [2], Fraction(1,3)),
                                      ("CZ", [1, 2]), ("T", [0])])


class TestCircuitDAG(unittest.TestCase):
    def test_round_trip_keeps_order(self):
        c = example_circuit()
        dag = CircuitDAG.from_circuit(c)
        self.assertEqual(len(dag), len(c))
        self.assertEqual(dag.to_gates(), c.gates)
        dag.check_invariants()

    def test_chains_hold_every_gate(self):
        c = example_circuit()
        dag = CircuitDAG.from_circuit(c)
        for q in range(c.qubits):
            on_q = [g for g in c.gates if q in g.qubits()]
            self.assertEqual([n.node for n in dag.nodes_on(q)], on_q)
            self.assertIs(dag.last_on(q), list(dag.nodes_on(q))[-1])
        single = Circuit(1)
        single.add_gates("T T T", 0)
        dag = CircuitDAG.from_circuit(single)
        self.assertEqual(len(list(dag.nodes_on(0))), 3)
        self.assertIs(dag.prev_on(dag.last_on(0), 0), dag.next_on(dag.first_on(0), 0))

    def test_gates_are_copied(self):
        c = example_circuit()
        dag = CircuitDAG.from_circuit(c)
        self.assertIsNot(dag.first_on(0).node, c.gates[0])

    def test_traversal(self):
        dag = CircuitDAG.from_circuit(example_circuit())
        first = dag.first_on(0)
        self.assertIsInstance(first.node, EulerPhase)
        cx = dag.next_on(first, 0)
        self.assertEqual(cx.node, CX(0, 1))
        z = dag.next_on(cx, 1)
        self.assertEqual(z.node, ZPhase(1, 1))
        self.assertIs(dag.prev_on(z, 1), cx)
        self.assertIsNone(dag.prev_on(first, 0))
        self.assertIs(dag.last_on(0).node, dag.next_on(cx, 0).node)
        self.assertEqual([n.node for n in dag.nodes_on(2)], [XPhase(2, Fraction(1,3)), CZ(1, 2)])
        self.assertEqual([n.node for n in dag.nodes_on_reversed(2)], [CZ(1, 2), XPhase(2, Fraction(1,3))])

    def test_traversal_on_wrong_qubit(self):
        dag = CircuitDAG.from_circuit(example_circuit())
        with self.assertRaises(StructuralViolation):
            dag.next_on(dag.first_on(0), 2)

    def test_remove_splices_neighbours(self):
        dag = CircuitDAG.from_circuit(example_circuit())
        cx = dag.next_on(dag.first_on(0), 0)
        dag.remove(cx)
        self.assertEqual(len(dag), 5)
        self.assertEqual(dag.next_on(dag.first_on(0), 0).node, ZPhase(0, Fraction(1,4)))
        self.assertEqual(dag.first_on(1).node, ZPhase(1, 1))
        dag.check_invariants()
        with self.assertRaises(StructuralViolation):
            dag.remove(cx)

    def test_insert(self):
        dag = CircuitDAG.from_circuit(example_circuit())
        cx = dag.next_on(dag.first_on(0), 0)
        node = dag.insert_after(cx, XPhase(0, 1))
        self.assertIs(dag.next_on(cx, 0), node)
        self.assertEqual(dag.next_on(node, 0).node, ZPhase(0, Fraction(1,4)))
        before = dag.insert_before(cx, ZPhase(1, Fraction(1,2)))
        self.assertIs(dag.first_on(1), before)
        self.assertEqual(len(dag), 8)
        dag.check_invariants()
        gates = dag.to_gates()
        self.assertLess(gates.index(ZPhase(1, Fraction(1,2))), gates.index(CX(0, 1)))
        self.assertLess(gates.index(CX(0, 1)), gates.index(XPhase(0, 1)))

    def test_insert_rejects_two_qubit_gates(self):
        dag = CircuitDAG.from_circuit(example_circuit())
        cx = dag.next_on(dag.first_on(0), 0)
        with self.assertRaises(StructuralViolation):
            dag.insert_after(cx, CZ(0, 1))
        with self.assertRaises(StructuralViolation):
            dag.insert_after(cx, ZPhase(2, 1))

    def test_substitute(self):
        dag = CircuitDAG.from_circuit(example_circuit())
        cx = dag.next_on(dag.first_on(0), 0)
        new = dag.substitute(cx, [ZPhase(0, Fraction(1,2)), CZ(0, 1), XPhase(1, Fraction(1,2))])
        self.assertEqual(len(new), 3)
        self.assertEqual(len(dag), 8)
        self.assertIs(dag.next_on(dag.first_on(0), 0), new[0])
        self.assertIs(dag.first_on(1), new[1])
        self.assertEqual(dag.next_on(new[2], 1).node, ZPhase(1, 1))
        self.assertFalse(cx.attached)
        dag.check_invariants()
        with self.assertRaises(StructuralViolation):
            dag.substitute(new[1], [XPhase(2, 1)])

    def test_replace_gate(self):
        dag = CircuitDAG.from_circuit(example_circuit())
        cx = dag.next_on(dag.first_on(0), 0)
        dag.replace_gate(cx, CZ(1, 0))
        self.assertEqual(dag.to_gates()[1], CZ(0, 1))
        with self.assertRaises(StructuralViolation):
            dag.replace_gate(cx, CX(0, 2))

    def test_topological_sort_is_deterministic(self):
        c = Circuit.from_gate_list(2, [("Rz", [1], Fraction(1,4)), ("Rz", [0], Fraction(1,4)), ("CX", [0, 1])])
        dag = CircuitDAG.from_circuit(c)
        self.assertEqual(dag.to_gates(), c.gates)
        dag.append(ZPhase(1, Fraction(1,2)))
        dag.append(ZPhase(0, Fraction(1,2)))
        c2 = Circuit(2)
        dag.to_circuit(c2)
        self.assertEqual(c2.gates[3:], [ZPhase(1, Fraction(1,2)), ZPhase(0, Fraction(1,2))])


if __name__ == '__main__':
    unittest.main()
