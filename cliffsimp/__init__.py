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

__version__ = "0.1.0"

from .circuit import Circuit, InvalidCircuit
from .circuit.phase import Phase
from .circuit.scalar import Scalar
from .dag import CircuitDAG, StructuralViolation
from .clifford_simplifier import (CliffordSimplifier, SimplifierConfig, SemanticsException,
                                  ReductionDidNotConverge)
from .simplify import clifford_simp, full_reduce, qubit_partitions, reduce_partitions
from .utils import settings
