"""Modules with tools for representing qubit Clifford circuits as binary symplectic matrices.
We are ignoring phases everywhere, and so everything is 'up to Paulis'.
The symplectic matrices are constructed according to the order (x1,z1,x2,z2,...) and hence not in terms of Z and X blocks.
A matrix acts on column vectors, so that the column of x_i is the image of the Pauli X on qubit i.
"""

from sympy import Matrix, eye

from .circuit.phase import Phase, PhaseLike
from .utils import Axis

Hmat = Matrix([[0,1],[1,0]])
idmat = Matrix([[1,0],[0,1]])

def Smat(rep):
    """Create a matrix representing `rep` repetitions of the S gate."""
    return Matrix([[1  ,0],
                   [rep,1]])

def SXmat(rep):
    """Create a matrix representing `rep` repetitions of the square root of X."""
    return Matrix([[1,rep],
                   [0,1  ]])

def CXmat():
    return Matrix([
                [1,0,0,0],
                [0,1,0,1],
                [1,0,1,0],
                [0,0,0,1]])

def CZmat():
    return Matrix([
                [1,0,0,0],
                [0,1,1,0],
                [0,0,1,0],
                [1,0,0,1]])

def embed_block(block, n, mapping):
    """
    Embed a 2k x 2k symplectic 'block' into a 2n x 2n matrix.

    Parameters
    ----------
    block   : sympy.Matrix (2k x 2k)
              Symplectic block defined on local qubits [0..k-1],
              ordered [x0, z0, x1, z1, ...].
    n       : int
              Total number of qubits in the global system.
    mapping : list[int]
              Mapping of local qubits to global qubits.
              E.g. [2,4] means local 0 → global 2, local 1 → global 4.
    """
    k = len(mapping)
    assert block.shape == (2*k, 2*k)

    M = eye(2*n)

    # Local-to-global index map
    idx = []
    for q in mapping:
        idx.extend([2*q, 2*q+1])  # (x_q, z_q) in global basis order

    # Place the block into M
    for r in range(2*k):
        for c in range(2*k):
            M[idx[r], idx[c]] = block[r, c]

    return M

def ID(num_qubits):
    return eye(2*num_qubits)

def _quarter_turns(phase: PhaseLike) -> int:
    phase = Phase(phase)
    if not phase.is_clifford():
        raise ValueError("Phase {} is not a multiple of pi/2, so the rotation is not Clifford".format(phase))
    return round(2 * float(phase.mod2()))

def rotation_block(axis: Axis.Type, phase: PhaseLike):
    reps = _quarter_turns(phase) % 2 # Rotations over pi are Paulis, and hence trivial here
    if reps == 0: return idmat
    if axis == Axis.Z: return Smat(1)
    if axis == Axis.X: return SXmat(1)
    return Hmat # A quarter turn about Y swaps X and Z up to sign

def rotation(axis: Axis.Type, target, num_qubits, phase: PhaseLike):
    return embed_block(rotation_block(axis, phase), num_qubits, [target])

def euler(target, num_qubits, alpha: PhaseLike, beta: PhaseLike, gamma: PhaseLike):
    mat = rotation_block(Axis.Z, alpha) * rotation_block(Axis.X, beta) * rotation_block(Axis.Z, gamma)
    return embed_block(mat, num_qubits, [target])

def CX(control, target, num_qubits):
    return embed_block(CXmat(), num_qubits, [control,target])

def CZ(control, target, num_qubits):
    return embed_block(CZmat(), num_qubits, [control,target])

def modulo_matrix(M, p):
    reduced_entries = []
    for i in range(M.rows):
        row = M.row(i)
        newrow = []
        for entry in row:
            entry = entry % p
            newrow.append(entry)
        reduced_entries.append(newrow)
    return Matrix(reduced_entries)

def compare_matrices(m1: Matrix, m2: Matrix, modulus: int = 2):
    if modulus != 0:
        m1 = modulo_matrix(m1,modulus)
        m2 = modulo_matrix(m2,modulus)
    return m1 == m2
