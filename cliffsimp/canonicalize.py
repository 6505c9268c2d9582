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

"""Folding of runs of single-qubit gates into a single Euler rotation.

Any single-qubit unitary U can be written as exp(i*pi*phase) Rz(alpha)Rx(beta)Rz(gamma).
A run of consecutive single-qubit gates on a wire is replaced by the smallest gate of this form:
nothing at all, a single Z or X rotation, or an :class:`EulerPhase` gate. The angles are computed
numerically and then matched to exact rationals. When the gates of the run have exact angles but
the result does not, the run is left alone rather than introducing floating point angles."""

import cmath
import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from .circuit.gates import Gate, AxisPhase, XPhase, ZPhase, EulerPhase
from .circuit.phase import Phase
from .circuit.scalar import cexp
from .dag import CircuitDAG, DAG
from .rules import Rewrite
from .utils import settings

__all__ = ['euler_angles', 'minimal_gate', 'is_canonical', 'find_runs', 'canonicalize_run', 'canonicalize_dag']

logger = logging.getLogger(__name__)


def euler_angles(m: np.ndarray) -> Tuple[Phase, Phase, Phase, Phase]:
    """Returns ``(alpha, beta, gamma, phase)`` with ``m == exp(i*pi*phase) Rz(alpha)Rx(beta)Rz(gamma)``
    for a 2x2 unitary ``m``. The angles are reduced into [0,2). When beta is 0 or 1,
    gamma is chosen to be 0."""
    det_phase = cmath.phase(np.linalg.det(m)) / 2
    v = m * cmath.exp(-1j * det_phase) # v is in SU(2)
    b = 2 * math.atan2(abs(v[1, 0]), abs(v[0, 0]))
    s = 2 * cmath.phase(v[1, 1]) if abs(v[1, 1]) > settings.tolerance else 0.0
    d = 2 * cmath.phase(1j * v[1, 0]) if abs(v[1, 0]) > settings.tolerance else 0.0
    beta = Phase.from_radians(b).mod2()
    if beta.is_zero():
        alpha, gamma = Phase.from_radians(s), Phase(0)
    elif beta == 1:
        alpha, gamma = Phase.from_radians(d), Phase(0)
    else:
        alpha, gamma = Phase.from_radians((s + d) / 2), Phase.from_radians((s - d) / 2)
    alpha, gamma = alpha.mod2(), gamma.mod2()
    r = EulerPhase(0, alpha, beta, gamma).to_matrix()
    i, j = np.unravel_index(np.argmax(np.abs(r)), r.shape)
    phase = Phase.from_radians(cmath.phase(m[i, j] / r[i, j])).mod2()
    return alpha, beta, gamma, phase


def minimal_gate(target: int, alpha: Phase, beta: Phase, gamma: Phase) -> Optional[Gate]:
    """The gate with the fewest non-zero parameters implementing Rz(alpha)Rx(beta)Rz(gamma),
    or None for the identity. ``gamma`` should be zero whenever ``beta`` is zero."""
    if beta.is_zero():
        angle = alpha + gamma
        if angle.mod2().is_zero():
            return None
        return ZPhase(target, angle)
    if alpha.is_zero() and gamma.is_zero():
        return XPhase(target, beta)
    return EulerPhase(target, alpha, beta, gamma)


def is_canonical(gate: Gate) -> bool:
    """Whether a single gate is already in the form produced by the canonicaliser."""
    if isinstance(gate, (ZPhase, XPhase)):
        return not gate.is_identity()
    if isinstance(gate, EulerPhase):
        if gate.beta.is_zero() or (gate.alpha.is_zero() and gate.gamma.is_zero()):
            return False
        return gate.beta != 1 or gate.gamma.is_zero()
    return False


def _foldable(gate: Gate) -> bool:
    return isinstance(gate, (AxisPhase, EulerPhase))


def find_runs(dag: CircuitDAG) -> List[List[DAG]]:
    """Returns the maximal runs of consecutive foldable single-qubit gates on each wire."""
    runs = []
    for q in range(dag.qubits):
        run: List[DAG] = []
        for node in dag.nodes_on(q):
            if _foldable(node.node):
                run.append(node)
                continue
            if run: runs.append(run)
            run = []
        if run: runs.append(run)
    return runs


def _is_exact(gate: Gate) -> bool:
    if isinstance(gate, AxisPhase):
        return gate.phase.is_exact()
    assert isinstance(gate, EulerPhase)
    return all(p.is_exact() for p in gate.params)


def canonicalize_run(dag: CircuitDAG, run: List[DAG]) -> Optional[Rewrite]:
    """Replaces a run of single-qubit gates by the minimal gate implementing their product.
    Returns None when the run is already canonical or cannot be folded exactly."""
    if len(run) == 1 and is_canonical(run[0].node):
        return None
    q = run[0].node.target
    m = np.eye(2, dtype=complex)
    for node in run:
        m = node.node.to_matrix() @ m
    alpha, beta, gamma, phase = euler_angles(m)
    exact = all(_is_exact(n.node) for n in run)
    if exact and not all(p.is_exact() for p in (alpha, beta, gamma, phase)):
        return None
    gate = minimal_gate(q, alpha, beta, gamma)
    if gate is not None:
        phase = phase + gate.normalize()
    check = cexp(phase) * (gate.to_matrix() if gate is not None else np.eye(2))
    if not np.allclose(check, m, atol=1e-8):
        logger.warning("Could not fold the gates %s on qubit %d exactly, leaving them in place", run, q)
        return None
    if len(run) == 1 and gate == run[0].node:
        return None
    name = "Fold {} into {}".format(", ".join(str(n.node) for n in run), gate if gate is not None else "identity")
    before = dag.prev_on(run[0], q)
    after = dag.next_on(run[-1], q)
    for node in run[1:]:
        dag.remove(node)
    dirty: List[Optional[DAG]] = [before, after]
    if gate is None:
        dag.remove(run[0])
    else:
        dag.replace_gate(run[0], gate)
        dirty.append(run[0])
    return Rewrite(name, phase.mod2(), dirty, (0 if gate is not None else -1) - (len(run) - 1))


def canonicalize_dag(dag: CircuitDAG) -> List[Rewrite]:
    """Canonicalises every run of single-qubit gates. Returns the rewrites that were applied."""
    rewrites = []
    for run in find_runs(dag):
        rewrite = canonicalize_run(dag, run)
        if rewrite is not None:
            rewrites.append(rewrite)
    return rewrites
