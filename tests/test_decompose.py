import unittest
import sys

sys.path.append('..')

from cliffsimp import Circuit
from cliffsimp.circuit.gates import AxisPhase, EulerPhase, CX, CCX, MCX
from cliffsimp.decompose import ccx_gates, mcx_gates, decompose_gate, decompose_circuit, decompose_dag
from cliffsimp.dag import CircuitDAG


def from_decomposition(qubits, decomposition) -> Circuit:
    gates, phase = decomposition
    c = Circuit(qubits)
    c.gates = gates
    c.scalar.add_phase(phase)
    return c


def single(qubits, gate) -> Circuit:
    c = Circuit(qubits)
    c.gates = [gate]
    return c


class TestDecompose(unittest.TestCase):
    def test_ccx(self):
        c = from_decomposition(3, ccx_gates(0, 1, 2))
        self.assertTrue(c.verify_equality(single(3, CCX(0, 1, 2))))
        self.assertEqual(sum(1 for g in c.gates if isinstance(g, CX)), 6)
        for g in c.gates:
            self.assertIsInstance(g, (AxisPhase, EulerPhase, CX))

    def test_ccx_permuted_qubits(self):
        c = from_decomposition(3, ccx_gates(2, 0, 1))
        self.assertTrue(c.verify_equality(single(3, CCX(2, 0, 1))))

    def test_mcx_three_controls(self):
        c = from_decomposition(4, mcx_gates([0, 1, 2], 3))
        self.assertTrue(c.verify_equality(single(4, MCX([0, 1, 2], 3))))

    def test_mcx_four_controls(self):
        c = from_decomposition(5, mcx_gates([4, 0, 2, 3], 1))
        self.assertTrue(c.verify_equality(single(5, MCX([4, 0, 2, 3], 1))))

    def test_mcx_with_two_controls(self):
        c = from_decomposition(3, mcx_gates([0, 1], 2))
        self.assertTrue(c.verify_equality(single(3, CCX(0, 1, 2))))

    def test_decompose_gate(self):
        gates, _ = decompose_gate(MCX([0, 1], 2))
        self.assertEqual(len(gates), 15)
        with self.assertRaises(ValueError):
            decompose_gate(CX(0, 1))

    def test_decompose_circuit(self):
        c = Circuit.from_gate_list(4, [("H", [0]), ("CCX", [0, 1, 2]), ("T", [2]), ("MCX", [0, 1, 2, 3])])
        original = c.copy()
        self.assertTrue(decompose_circuit(c))
        self.assertFalse(any(isinstance(g, MCX) for g in c.gates))
        self.assertTrue(c.verify_equality(original))
        self.assertFalse(decompose_circuit(c))

    def test_decompose_dag(self):
        c = Circuit.from_gate_list(3, [("CCX", [0, 1, 2]), ("CCX", [1, 2, 0])])
        dag = CircuitDAG.from_circuit(c)
        phase = decompose_dag(dag)
        dag.check_invariants()
        result = Circuit(3)
        dag.to_circuit(result)
        result.scalar.add_phase(phase)
        self.assertEqual(len(result), 30)
        self.assertTrue(result.verify_equality(c))


if __name__ == '__main__':
    unittest.main()
