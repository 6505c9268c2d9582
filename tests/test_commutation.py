import unittest
import sys
from fractions import Fraction

sys.path.append('..')

from cliffsimp import Circuit
from cliffsimp.circuit.gates import XPhase, YPhase, ZPhase, EulerPhase, CX, CZ, MCX, Measurement
from cliffsimp.commutation import (COMMUTATION_TABLE, Commutation, Role, commute_through, gates_commute,
                                   wire_type)
from cliffsimp.utils import Axis

rotations = {Axis.X: XPhase, Axis.Y: YPhase, Axis.Z: ZPhase}
two_qubit_gates = {'CX': CX, 'CZ': CZ}


def circuit_of(gates, phase=0) -> Circuit:
    c = Circuit(2)
    c.gates = list(gates)
    c.scalar.add_phase(phase)
    return c


class TestCommutationTable(unittest.TestCase):
    def test_table_reproduces_conjugation(self):
        for (name, axis, role), entry in COMMUTATION_TABLE.items():
            gate = two_qubit_gates[name](0, 1)
            q = 0 if role == Role.CONTROL else 1
            angle = Fraction(1,3) if entry.kind == Commutation.FREE else 1
            rot = rotations[axis](q, angle)
            result = commute_through(rot, gate, q)
            self.assertIsNotNone(result)
            self.assertEqual(result.kind, entry.kind)
            after = [gate, rot]
            if result.correction is not None:
                self.assertEqual(result.correction.qubits(), [1 - q])
                self.assertEqual(result.correction.axis, entry.correction_axis)
                after.append(result.correction)
            before = circuit_of([rot, gate])
            self.assertTrue(before.verify_equality(circuit_of(after, result.phase)), (name, axis, role))

    def test_every_rotation_is_covered(self):
        for name in two_qubit_gates:
            for axis in rotations:
                for role in (Role.CONTROL, Role.TARGET):
                    self.assertIn((name, axis, role), COMMUTATION_TABLE)

    def test_free_moves(self):
        self.assertEqual(commute_through(ZPhase(0, Fraction(1,4)), CX(0, 1), 0).kind, Commutation.FREE)
        self.assertEqual(commute_through(XPhase(1, Fraction(1,4)), CX(0, 1), 1).kind, Commutation.FREE)
        self.assertEqual(commute_through(ZPhase(1, Fraction(1,4)), CZ(0, 1), 1).kind, Commutation.FREE)
        self.assertTrue(commute_through(ZPhase(0, Fraction(1,4)), CX(0, 1), 0).phase.is_zero())

    def test_non_pauli_corrections_are_blocked(self):
        self.assertIsNone(commute_through(XPhase(0, Fraction(1,2)), CX(0, 1), 0))
        self.assertIsNone(commute_through(ZPhase(1, Fraction(1,4)), CX(0, 1), 1))
        self.assertIsNone(commute_through(XPhase(1, Fraction(1,3)), CZ(0, 1), 1))

    def test_pauli_correction(self):
        result = commute_through(ZPhase(1, 1), CX(0, 1), 1)
        self.assertEqual(result.kind, Commutation.CORRECTION)
        self.assertEqual(result.correction, ZPhase(0, 1))
        self.assertEqual(result.phase, Fraction(1,2))

    def test_other_gates_are_blocked(self):
        self.assertIsNone(commute_through(ZPhase(0, Fraction(1,4)), Measurement(0), 0))
        self.assertIsNone(commute_through(ZPhase(0, Fraction(1,4)), MCX([0, 1], 2), 0))


class TestGatesCommute(unittest.TestCase):
    def check(self, a, b, expected):
        self.assertEqual(gates_commute(a, b), expected, (a, b))
        self.assertEqual(gates_commute(b, a), expected, (b, a))
        if expected:
            n = max(a.qubits() + b.qubits()) + 1
            c1 = Circuit(n)
            c1.gates = [a, b]
            c2 = Circuit(n)
            c2.gates = [b, a]
            self.assertTrue(c1.verify_equality(c2))

    def test_cx_pairs(self):
        self.check(CX(0, 1), CX(0, 2), True)
        self.check(CX(0, 2), CX(1, 2), True)
        self.check(CX(0, 1), CX(1, 2), False)
        self.check(CX(0, 1), CX(1, 0), False)
        self.check(CX(0, 1), CX(2, 3), True)

    def test_mixed(self):
        self.check(ZPhase(0, Fraction(1,3)), CZ(0, 1), True)
        self.check(ZPhase(0, Fraction(1,3)), CX(0, 1), True)
        self.check(XPhase(1, Fraction(1,3)), CX(0, 1), True)
        self.check(XPhase(0, Fraction(1,3)), CX(0, 1), False)
        self.check(CZ(0, 1), CX(0, 2), True)
        self.check(CZ(0, 1), CX(2, 1), False)
        self.check(EulerPhase(0, Fraction(1,2), Fraction(1,2), Fraction(1,2)), CZ(0, 1), False)
        self.check(MCX([0, 1], 2), CX(0, 3), True)
        self.check(MCX([0, 1], 2), CX(3, 2), True)

    def test_wire_type(self):
        self.assertEqual(wire_type(CX(0, 1), 0), Axis.Z)
        self.assertEqual(wire_type(CX(0, 1), 1), Axis.X)
        self.assertEqual(wire_type(MCX([0, 1], 2), 1), Axis.Z)
        self.assertIsNone(wire_type(Measurement(0), 0))
        self.assertIsNone(wire_type(YPhase(0, 1), 0))


if __name__ == '__main__':
    unittest.main()
