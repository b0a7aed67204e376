# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
"""Conversion between Clifford circuits and their tableau.

:func:`circuit_to_tableau` simulates a circuit gate by gate. The opposite
direction, :func:`tableau_to_circuit`, synthesises a circuit in the canonical
form ``H-C-P-C-P-C-H-P-C-P-C`` of :cite:`aaronson_improved_2004` (Theorem 8),
where ``C`` are layers of CNOTs and ``P`` layers of phase gates.

>>> from cliffordtab.circuit import Circuit
>>> tab = circuit_to_tableau(Circuit.from_str("H 0\\nCX 0 1"))
>>> circ = tableau_to_circuit(tab)
>>> circuit_to_tableau(circ) == tab
True

Notes:
    The synthesis works on a copy of the tableau. Every gate added to the
    output circuit is also peeled off the front of that copy, by prepending its
    inverse. When the copy has been reduced to the identity, the output circuit
    implements the original tableau. Hadamards of the canonical form are
    replaced by ``V`` gates in the first layer, which serve the same purpose
    of making the X-part of the stabilisers full rank.
"""
from __future__ import annotations

import numpy as np

from cliffordtab import gf2
from cliffordtab.circuit import Circuit
from cliffordtab.tableau import CliffTableau


class InvalidTableauError(ValueError):
    """Raised when a tableau does not describe a Clifford unitary."""


def circuit_to_tableau(circuit: Circuit) -> CliffTableau:
    """Compute the tableau of a circuit made of ``H, V, S, CX, X, Z`` gates.

    The qubits of the tableau are the qubits of the circuit, in the same order.
    The circuit itself is left untouched.

    Raises:
        UnsupportedOperationError: if the circuit contains any other gate.
    """
    tab = CliffTableau(circuit.qubits)
    for command in circuit:
        tab.apply_gate_at_end(
            command.name, [tab.qubits_.index(q) for q in command.qubits]
        )
    return tab


class _PeelingCircuit:
    """Output circuit of the synthesis, coupled with the tableau left to realise.

    Each gate is appended to the circuit and its inverse is prepended to the
    tableau, using only the ``S``, ``V`` and ``CX`` front rules.
    """

    def __init__(self, tab: CliffTableau):
        self.tab = tab
        self.circ = Circuit(tab.size)

    def cx(self, control: int, target: int):
        self.circ.append("CX", control, target)
        self.tab.apply_CX_at_front(control, target)

    def s(self, qubit: int):
        self.circ.append("S", qubit)
        for _ in range(3):
            self.tab.apply_S_at_front(qubit)

    def v(self, qubit: int):
        self.circ.append("V", qubit)
        for _ in range(3):
            self.tab.apply_V_at_front(qubit)

    def h(self, qubit: int):
        self.circ.append("H", qubit)
        self.tab.apply_S_at_front(qubit)
        self.tab.apply_V_at_front(qubit)
        self.tab.apply_S_at_front(qubit)

    def x(self, qubit: int):
        self.circ.append("X", qubit)
        self.tab.apply_V_at_front(qubit)
        self.tab.apply_V_at_front(qubit)

    def z(self, qubit: int):
        self.circ.append("Z", qubit)
        self.tab.apply_S_at_front(qubit)
        self.tab.apply_S_at_front(qubit)

    def cx_layer(self, ops: list[tuple[int, int]]):
        for control, target in ops:
            self.cx(control, target)


def _check_tableau(tab: CliffTableau):
    r"""Make sure that the rows of ``tab`` are the image of a Clifford unitary.

    The stabilisers must be independent, and all rows must satisfy the
    commutation relations of the generators: :math:`X_i` and :math:`Z_j`
    anticommute iff :math:`i = j`, all other pairs commute.

    Raises:
        InvalidTableauError: if any of these conditions fails.
    """
    n = tab.size
    if gf2.rank(np.hstack([tab.zpauli_x, tab.zpauli_z])) < n:
        raise InvalidTableauError("Stabilisers are not mutually independent")
    x = np.vstack([tab.xpauli_x, tab.zpauli_x]).astype(int)
    z = np.vstack([tab.xpauli_z, tab.zpauli_z]).astype(int)
    # entry (a, b) is 1 iff rows a and b anticommute
    anticommuting = (x @ z.T + z @ x.T) % 2
    eye = np.eye(n, dtype=int)
    zero = np.zeros((n, n), dtype=int)
    if not np.array_equal(anticommuting, np.block([[zero, eye], [eye, zero]])):
        raise InvalidTableauError(
            "Tableau rows do not satisfy the commutation relations of a Clifford "
            "tableau"
        )


def _add_to_echelon(echelon, col: int, leading_rows: dict[int, int]) -> bool:
    """Reduce column ``col`` against the previous ones, in place.

    ``leading_rows`` maps the leading row of each independent column to that
    column, and is updated if ``col`` turns out independent.

    Returns:
        whether ``col`` is linearly independent of the previous columns.
    """
    for row in range(echelon.shape[0]):
        if echelon[row, col]:
            if row not in leading_rows:
                leading_rows[row] = col
                return True
            echelon[:, col] ^= echelon[:, leading_rows[row]]
    return False


def tableau_to_circuit(tableau: CliffTableau, *, check: bool = False) -> Circuit:
    """Synthesise a circuit implementing the given tableau.

    The circuit uses the qubit identifiers of the tableau and only contains
    ``V, CX, S, H`` gates, in the layer order ``V-CX-S-CX-S-CX-H-S-CX-S-CX``,
    followed by a layer of ``Z`` and ``X`` gates fixing the signs. For ``n``
    qubits it has :math:`O(n^2)` gates. The identity gives an empty circuit.

    Args:
        tableau: the tableau to realise. It is not modified.

    Keyword Args:
        check: convert the result back and compare it with ``tableau``.

    Returns:
        a new circuit ``circ`` with ``circuit_to_tableau(circ) == tableau``.

    Raises:
        InvalidTableauError: if the stabilisers of ``tableau`` are not mutually
            independent, or if its rows do not satisfy the commutation
            relations of a Clifford tableau.
        RuntimeError: if ``check`` is set and the circuit does not reproduce the
            tableau.
    """
    tab = tableau.copy()
    size = tab.size
    out = _PeelingCircuit(tab)

    if not tab.is_identity():
        _check_tableau(tab)

        # Step 1: make zpauli_x full rank. V on a qubit adds its zpauli_z column to
        # its zpauli_x column, and a dependent column only needs the former.
        echelon = tab.zpauli_x.copy()
        leading_rows: dict[int, int] = {}
        for i in range(size):
            if _add_to_echelon(echelon, i, leading_rows):
                continue
            out.v(i)
            echelon[:, i] = tab.zpauli_z[:, i]
            if not _add_to_echelon(echelon, i, leading_rows):
                raise InvalidTableauError("Stabilisers are not mutually independent")

        # Step 2: Gaussian elimination on zpauli_x, giving
        #   / A B \
        #   \ I D /
        out.cx_layer(gf2.gaussian_elimination_col_ops(tab.zpauli_x))

        # Step 3: the stabilisers commute, so D is symmetric. Phase gates add a
        # diagonal to it such that D = M M^T with M invertible.
        factor, diag = gf2.binary_llt_decomposition(tab.zpauli_z)
        for i in range(size):
            if diag[i]:
                out.s(i)

        # Step 4: CNOTs realising M map I to M and D = M M^T to M:
        #   / A B \
        #   \ M M /
        ops = gf2.gaussian_elimination_col_ops(factor)
        out.cx_layer(ops[::-1])

        # Step 5: phase on every qubit clears D. The resulting stabiliser signs
        # are fixed at the very end.
        for i in range(size):
            out.s(i)

        # Step 6: Gaussian elimination on M. Commutation with the stabilisers
        # then forces B = I:
        #   / A I \
        #   \ I 0 /
        out.cx_layer(gf2.gaussian_elimination_col_ops(tab.zpauli_x))

        # Step 7: Hadamard on every qubit:
        #   / I A \
        #   \ 0 I /
        for i in range(size):
            out.h(i)

        # Step 8: the destabilisers commute, so A is symmetric and can be
        # brought into the form N N^T like in step 3.
        factor, diag = gf2.binary_llt_decomposition(tab.xpauli_z)
        for i in range(size):
            if diag[i]:
                out.s(i)

        # Step 9: CNOTs realising N:
        #   / N N \
        #   \ 0 C /
        ops = gf2.gaussian_elimination_col_ops(factor)
        out.cx_layer(ops[::-1])

        # Step 10: phase on every qubit:
        #   / N 0 \
        #   \ 0 C /
        for i in range(size):
            out.s(i)

        # Step 11: Gaussian elimination on N. C = N^-T becomes the identity too.
        out.cx_layer(gf2.gaussian_elimination_col_ops(tab.xpauli_x))

        # Only the signs are left, each fixed by a Pauli gate.
        for i in range(size):
            if tab.xpauli_phase[i]:
                out.z(i)
            if tab.zpauli_phase[i]:
                out.x(i)

    circ = out.circ
    circ.rename_qubits({i: q for q, i in tableau.qubits_})

    if check and circuit_to_tableau(circ) != tableau:
        raise RuntimeError("Synthesised circuit does not reproduce the tableau")
    return circ
