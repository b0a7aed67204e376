# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
"""Conversion between Clifford circuits and their stabiliser tableau.

Circuits over the gates ``H``, ``V``, ``S``, ``CX``, ``X`` and ``Z`` are described
by :mod:`cliffordtab.circuit`. Their tableau, which records how the circuit acts
on the Pauli group, is implemented by :mod:`cliffordtab.tableau`. The two
representations are converted into each other by :mod:`cliffordtab.converters`,
which relies on the binary linear algebra of :mod:`cliffordtab.gf2`.

>>> from cliffordtab import Circuit, circuit_to_tableau, tableau_to_circuit
>>> tab = circuit_to_tableau(Circuit.from_str("S 0\\nCX 0 1"))
>>> circuit_to_tableau(tableau_to_circuit(tab)) == tab
True
"""

import sys

import numpy as np

from cliffordtab.circuit import Circuit, CircuitBuilder  # noqa: F401
from cliffordtab.converters import (  # noqa: F401
    InvalidTableauError,
    circuit_to_tableau,
    tableau_to_circuit,
)
from cliffordtab.tableau import (  # noqa: F401
    CliffTableau,
    QubitBijection,
    UnsupportedOperationError,
)

__version__ = "0.1.0"

#: Random number generator (specifically :func:`numpy.random.Generator.default_rng`)
#:
#: Used to draw random circuits in :mod:`cliffordtab.circuit.generator`. To make
#: them deterministic, replace this module variable with a seeded generator.
rng = np.random.default_rng()

# Avoid surprises
assert sys.version_info >= (3, 10), "Please upgrade Python to at least 3.10"
