# %% Import necessary objects and functions   # noqa: D100
import numpy as np

import cliffordtab
from cliffordtab import Circuit, CircuitBuilder, circuit_to_tableau, tableau_to_circuit
from cliffordtab.circuit.generator import random_clifford_circuit

# %% Set fixed RNG seed, so we always get the same results
cliffordtab.rng = np.random.default_rng(seed=1234567890)

# %% Create a circuit, either from a string
circ = Circuit.from_str(
    """
    H 0
    CX 0 1
    S 1
    """
)
# %% or programmatically. Qubits can be any hashable object.
named = Circuit()
cb = CircuitBuilder(named)
cb.H("anc")
cb.CX("anc", ("data", 0), "anc", ("data", 1))
cb.V(("data", 1))

# %% The tableau records where each Pauli generator is mapped to
tab = circuit_to_tableau(circ)
print(tab)
print(circuit_to_tableau(named))

# %% Any tableau can be turned back into a circuit in canonical form
synth = tableau_to_circuit(tab)
print(synth)
assert circuit_to_tableau(synth) == tab

# %% The same works for random circuits; `check=True` verifies the result
rand = random_clifford_circuit(5, 200)
synth = tableau_to_circuit(circuit_to_tableau(rand), check=True)
print(f"{len(rand)} gates synthesised into {len(synth)} gates")
