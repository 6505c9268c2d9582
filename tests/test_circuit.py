import unittest
import math
import sys
from fractions import Fraction

import numpy as np

sys.path.append('..')

from cliffsimp import Circuit, InvalidCircuit
from cliffsimp.circuit.gates import XPhase, YPhase, ZPhase, EulerPhase, CX, CZ, CCX, MCX, Measurement
from cliffsimp import symplectic

from qiskit.quantum_info import Operator

s2 = 1/math.sqrt(2)

named_matrices = {
    'H': np.array([[s2, s2], [s2, -s2]]),
    'X': np.array([[0, 1], [1, 0]]),
    'Y': np.array([[0, -1j], [1j, 0]]),
    'Z': np.array([[1, 0], [0, -1]]),
    'S': np.diag([1, 1j]),
    'Sdg': np.diag([1, -1j]),
    'T': np.diag([1, np.exp(1j*math.pi/4)]),
    'Tdg': np.diag([1, np.exp(-1j*math.pi/4)]),
    'SX': 0.5*np.array([[1+1j, 1-1j], [1-1j, 1+1j]]),
    'SXdg': 0.5*np.array([[1-1j, 1+1j], [1+1j, 1-1j]]),
}


class TestGates(unittest.TestCase):
    def test_named_gates_are_exact(self):
        for name, m in named_matrices.items():
            c = Circuit(1)
            c.add_gate(name, 0)
            self.assertTrue(np.allclose(c.to_matrix(), m), name)

    def test_named_gates_are_core_gates(self):
        c = Circuit(1)
        c.add_gates("H S T X Y Z SX Tdg", 0)
        for g in c.gates:
            self.assertIsInstance(g, (XPhase, YPhase, ZPhase, EulerPhase))

    def test_add_gate_normalizes_angles(self):
        c = Circuit(1)
        c.add_gate("ZPhase", 0, phase=Fraction(9,4))
        self.assertEqual(c.gates[0].phase, Fraction(1,4))
        self.assertEqual(c.phase, 1)
        self.assertTrue(np.allclose(c.to_matrix(), ZPhase(0, Fraction(9,4)).to_matrix()))

    def test_euler_adjoint(self):
        g = EulerPhase(0, Fraction(1,3), Fraction(1,5), Fraction(3,4))
        self.assertTrue(np.allclose(g.to_adjoint().to_matrix() @ g.to_matrix(), np.eye(2)))

    def test_cz_is_symmetric(self):
        self.assertEqual(CZ(0,1), CZ(1,0))
        self.assertEqual(hash(CZ(0,1)), hash(CZ(1,0)))
        self.assertNotEqual(CX(0,1), CX(1,0))

    def test_structural_equality(self):
        self.assertEqual(ZPhase(0, Fraction(1,2)), ZPhase(0, Fraction(1,2)))
        self.assertNotEqual(ZPhase(0, Fraction(1,2)), XPhase(0, Fraction(1,2)))
        self.assertNotEqual(ZPhase(0, Fraction(1,2)), ZPhase(1, Fraction(1,2)))
        self.assertEqual(MCX([0,1], 2), MCX([0,1], 2))


class TestCircuit(unittest.TestCase):
    def test_cx_matrix_big_endian(self):
        c = Circuit(2)
        c.add_gate("CX", 0, 1)
        self.assertTrue(np.allclose(c.to_matrix(), CX(0,1).to_matrix()))
        c = Circuit(2)
        c.add_gate("CX", 1, 0)
        m = np.eye(4)[[0, 3, 2, 1]]
        self.assertTrue(np.allclose(c.to_matrix(), m))

    def test_ccx_matrix(self):
        c = Circuit(3)
        c.add_gate("CCX", 0, 1, 2)
        m = np.eye(8)
        m[[6, 7]] = m[[7, 6]]
        self.assertTrue(np.allclose(c.to_matrix(), m))

    def test_from_gate_list(self):
        c = Circuit.from_gate_list(3, [("CX", [1, 0]), ("Rz", [2], Fraction(1,4)), ("H", [0]),
                                       ("Rx", [1], math.pi/2), ("Euler", [2], 0, Fraction(1,2), 1)])
        self.assertEqual(len(c), 5)
        self.assertEqual(c.phase, Fraction(1,2))
        self.assertEqual(c.gates[3], XPhase(1, Fraction(1,2)))
        records = c.to_gate_list()
        self.assertEqual(records[0], ('CX', [1, 0]))
        self.assertEqual(records[1], ('ZPhase', [2], Fraction(1,4)))

    def test_gate_list_round_trip(self):
        c = Circuit.from_gate_list(2, [("CZ", [0, 1]), ("Ry", [1], Fraction(2,3)), ("S", [0])])
        c2 = Circuit.from_gate_list(2, c.to_gate_list())
        c2.scalar = c.scalar.copy()
        self.assertEqual(c.gates, c2.gates)
        self.assertTrue(c.verify_equality(c2))

    def test_invalid_records(self):
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("CX", [0, 5])])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("CX", [1, 1])])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("Foo", [0])])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("Rz", [0])])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("H",)])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("H", 0)])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("CX", None)])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("CX", [0, 1.0])])
        with self.assertRaises(InvalidCircuit):
            Circuit.from_gate_list(2, [("Rz", [0], "pi")])

    def test_validate(self):
        c = Circuit(2)
        c.gates.append(CX(0, 2))
        with self.assertRaises(InvalidCircuit):
            c.validate()
        c = Circuit(3)
        c.gates.append(MCX([0, 0], 2))
        with self.assertRaises(InvalidCircuit):
            c.validate()
        c = Circuit(3)
        c.gates.append(CCX(0, 1, 2))
        c.gates.append(Measurement(1))
        c.validate()

    def test_adjoint(self):
        c = Circuit.from_gate_list(2, [("H", [0]), ("CX", [0, 1]), ("T", [1]), ("Euler", [0], Fraction(1,3), Fraction(1,5), 1)])
        self.assertTrue((c + c.adjoint()).verify_equality(Circuit(2)))

    def test_stats(self):
        c = Circuit.from_gate_list(3, [("H", [0]), ("CX", [0, 1]), ("CCX", [0, 1, 2])])
        self.assertEqual(c.twoqubitcount(), 1)
        self.assertIn("3 gates", c.stats())

    def test_matches_qiskit(self):
        c = Circuit.from_gate_list(3, [("H", [0]), ("CX", [0, 1]), ("T", [1]), ("Rx", [2], Fraction(1,3)),
                                       ("CZ", [1, 2]), ("Euler", [0], Fraction(1,4), Fraction(1,3), Fraction(1,5)),
                                       ("Ry", [2], 0.7), ("CCX", [2, 0, 1]), ("S", [2])])
        qc = c.to_qiskit_rep()
        m = Operator(qc).reverse_qargs().data
        self.assertTrue(np.allclose(m, c.to_matrix()))


class TestSymplectic(unittest.TestCase):
    def test_hadamard(self):
        c = Circuit(1)
        c.add_gate("H", 0)
        self.assertTrue(symplectic.compare_matrices(c.to_symplectic_matrix(), symplectic.embed_block(symplectic.Hmat, 1, [0])))

    def test_hsh_is_sx(self):
        c1 = Circuit(1)
        c1.add_gates("H S H", 0)
        c2 = Circuit(1)
        c2.add_gate("SX", 0)
        self.assertTrue(symplectic.compare_matrices(c1.to_symplectic_matrix(), c2.to_symplectic_matrix()))

    def test_double_cx_is_identity(self):
        c = Circuit(2)
        c.add_gate("CX", 0, 1)
        c.add_gate("CX", 0, 1)
        self.assertTrue(symplectic.compare_matrices(c.to_symplectic_matrix(), symplectic.ID(2)))

    def test_non_clifford_rejected(self):
        c = Circuit(1)
        c.add_gate("T", 0)
        with self.assertRaises(ValueError):
            c.to_symplectic_matrix()


if __name__ == '__main__':
    unittest.main()
