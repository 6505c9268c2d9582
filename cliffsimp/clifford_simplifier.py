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

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional, Set
from typing_extensions import Final

import numpy as np

from .circuit import Circuit
from .circuit.gates import MCX, Measurement
from .circuit.scalar import Scalar
from .dag import CircuitDAG, DAG
from .canonicalize import canonicalize_run, find_runs
from .rules import (Rewrite, RuleFunction, remove_identity, merge_rotations, cancel_inverse,
                    cancel_two_qubit, commute_and_merge, decompose_multi_controlled)
from .utils import settings

__all__ = ['SemanticsException', 'ReductionDidNotConverge', 'SimplifierConfig', 'State', 'CliffordSimplifier']

logger = logging.getLogger(__name__)


class SemanticsException(Exception):
    """Exception type for telling the user that the rewrite that was applied
    has not preserved the semantics of the circuit."""


class ReductionDidNotConverge(RuntimeError):
    """Raised when the simplifier needs more iterations than it is allowed to take.
    The circuit is left as it was before the simplifier started."""


class SimplifierConfig(object):
    """Which categories of rewrite rules the simplifier uses, and the limits it runs with.

    - ``merge``: merge consecutive rotations about the same axis.
    - ``cancel``: remove identities, inverse pairs and pairs of CX, CZ or multi-controlled NOT gates.
    - ``commute``: push rotations past two-qubit gates to merge them (needs ``merge``).
    - ``decompose``: rewrite multi-controlled NOT gates into the core gate set.
    - ``canonicalize``: fold the remaining single-qubit runs into single Euler rotations."""
    def __init__(self,
                 merge: bool = True,
                 cancel: bool = True,
                 commute: bool = True,
                 decompose: bool = True,
                 canonicalize: bool = True,
                 max_iterations: Optional[int] = None,
                 check_semantics_each_step: bool = False,
                 verbose: bool = False
                 ) -> None:
        self.merge = merge
        self.cancel = cancel
        self.commute = commute
        self.decompose = decompose
        self.canonicalize = canonicalize
        self.max_iterations: int = settings.max_iterations if max_iterations is None else max_iterations
        self.check_semantics_each_step = check_semantics_each_step
        self.verbose = verbose

    def rules(self) -> List[RuleFunction]:
        """The enabled local rewrite rules, in the order in which they are tried on a node."""
        rules: List[RuleFunction] = []
        if self.cancel:
            rules.extend([remove_identity, cancel_inverse, cancel_two_qubit])
        if self.merge:
            rules.append(merge_rotations)
            if self.commute:
                rules.append(commute_and_merge)
        return rules


class State:
    INITIALIZE: Final = 'initialize'
    DECOMPOSE: Final = 'decompose'
    REDUCE: Final = 'reduce'
    CANONICALIZE: Final = 'canonicalize'
    DONE: Final = 'done'


class CliffordSimplifier:
    """Takes in a circuit of Clifford gates and rotations and simplifies it in place, keeping track
    of the exact global phase.

    It first removes pairs of multi-controlled gates that cancel, and decomposes the others.
    It then keeps a worklist of gates whose neighbourhood changed, and tries the rewrite rules on
    each of them until nothing applies anymore.
    Every rule that fires removes at least one gate, so this terminates. Finally the runs of
    single-qubit gates are folded into single rotations, after which the worklist is run again
    on whatever changed.

    It remembers all the steps it did in ``steps_done``. With ``check_semantics_each_step`` set, it
    compares the unitary after every step with the original one. The circuit passed in is only
    written to once the simplification has finished."""
    def __init__(self, circuit: Circuit, config: Optional[SimplifierConfig] = None) -> None:
        self.circuit: Circuit = circuit
        self.config: SimplifierConfig = config if config is not None else SimplifierConfig()
        self.state: str = State.INITIALIZE
        self.steps_done: List[str] = []
        self.iterations: int = 0
        self.dag: Optional[CircuitDAG] = None
        self.scalar: Scalar = circuit.scalar.copy()
        self._rules = self.config.rules()
        self._reference: Optional[np.ndarray] = None

    @property
    def verbose(self) -> bool:
        return self.config.verbose

    @property
    def check_semantics_each_step(self) -> bool:
        return self.config.check_semantics_each_step

    def run(self) -> bool:
        """Simplifies the circuit. Returns whether any rewrite was applied.

        :raises: InvalidCircuit if the circuit is malformed, in which case nothing is changed.
        :raises: ReductionDidNotConverge if more than ``config.max_iterations`` worklist entries
            were processed, in which case nothing is changed."""
        self.initialize()
        changed = False
        if self.config.decompose:
            if self.has_multi_controlled():
                # Pairs of multi-controlled gates that cancel are removed before they are decomposed
                self.state = State.REDUCE
                changed = self.reduce() or changed
            self.state = State.DECOMPOSE
            changed = self.decompose() or changed
        while True:
            self.state = State.REDUCE
            changed = self.reduce() or changed
            if not self.config.canonicalize:
                break
            self.state = State.CANONICALIZE
            if not self.canonicalize():
                break
            changed = True
        self.state = State.DONE
        if changed:
            self.update_circuit()
        logger.info("Simplified %s in %d steps (%d worklist iterations)", self.circuit, len(self.steps_done), self.iterations)
        return changed

    def initialize(self) -> None:
        self.state = State.INITIALIZE
        self.circuit.validate()
        self.dag = CircuitDAG.from_circuit(self.circuit)
        self.scalar = self.circuit.scalar.copy()
        for node in self.dag.nodes():
            self.scalar.add_phase(node.node.normalize())
        if self.check_semantics_each_step:
            self._reference = self._reference_matrix()

    def _reference_matrix(self) -> Optional[np.ndarray]:
        if self.circuit.qubits > settings.semantics_check_max_qubits:
            logger.warning("Not checking semantics of a circuit with %d qubits", self.circuit.qubits)
            return None
        if any(isinstance(g, Measurement) for g in self.circuit.gates):
            logger.warning("Not checking semantics of a circuit with measurements")
            return None
        return self.circuit.to_matrix()

    def current_circuit(self) -> Circuit:
        """The circuit in its current state of simplification, as a new Circuit."""
        assert self.dag is not None
        c = Circuit(self.circuit.qubits, self.circuit.name)
        c.gates = [g.copy() for g in self.dag.to_gates()]
        c.scalar = self.scalar.copy()
        return c

    def update_circuit(self) -> None:
        """Writes the simplified gates and global phase back into the circuit."""
        assert self.dag is not None
        self.dag.to_circuit(self.circuit)
        self.circuit.scalar = self.scalar.copy()

    def apply(self, rewrite: Rewrite) -> None:
        """Records a rewrite that has been applied to the dependency graph."""
        self.scalar.add_phase(rewrite.phase)
        self.steps_done.append(rewrite.name)
        logger.debug("%s: %s", self.state, rewrite)
        if self.verbose:
            print(rewrite.name)
            print(self.current_circuit())
        if self.check_semantics_each_step and self._reference is not None:
            if not np.allclose(self.current_circuit().to_matrix(), self._reference, atol=1e-8):
                raise SemanticsException("Semantics were not preserved by the last rewrite applied: " + rewrite.name)

    def has_multi_controlled(self) -> bool:
        assert self.dag is not None
        return any(isinstance(n.node, MCX) for n in self.dag.nodes())

    def decompose(self) -> bool:
        """Rewrites every multi-controlled gate into the core gate set."""
        assert self.dag is not None
        success = False
        for node in self.dag.nodes():
            rewrite = decompose_multi_controlled(self.dag, node)
            if rewrite is not None:
                self.apply(rewrite)
                success = True
        return success

    def reduce(self) -> bool:
        """Applies the rewrite rules until none of them applies anywhere in the circuit.
        After the worklist runs dry, all the gates are tried once more, as a rule can become
        applicable to a gate far away from where the last rewrite happened."""
        assert self.dag is not None
        success = False
        while self._run_worklist(self.dag.nodes()):
            success = True
        return success

    def _run_worklist(self, seed: Iterable[DAG]) -> bool:
        assert self.dag is not None
        worklist: Deque[DAG] = deque()
        queued: Set[DAG] = set()
        for node in seed:
            worklist.append(node)
            queued.add(node)
        success = False
        while worklist:
            self.iterations += 1
            if self.iterations > self.config.max_iterations:
                raise ReductionDidNotConverge("No fixpoint reached after {} iterations".format(self.config.max_iterations))
            node = worklist.popleft()
            queued.discard(node)
            if not node.attached:
                continue
            rewrite = self._try_rules(node)
            if rewrite is None:
                continue
            success = True
            self.apply(rewrite)
            for n in rewrite.dirty:
                if n.attached and n not in queued:
                    worklist.append(n)
                    queued.add(n)
        return success

    def _try_rules(self, node: DAG) -> Optional[Rewrite]:
        assert self.dag is not None
        for rule in self._rules:
            rewrite = rule(self.dag, node)
            if rewrite is not None:
                return rewrite
        return None

    def canonicalize(self) -> bool:
        """Folds the runs of single-qubit gates. Returns whether anything changed."""
        assert self.dag is not None
        success = False
        for run in find_runs(self.dag):
            rewrite = canonicalize_run(self.dag, run)
            if rewrite is not None:
                self.apply(rewrite)
                success = True
        return success
