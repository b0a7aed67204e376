# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
r"""Tableau representation of a Clifford unitary.

A :class:`CliffTableau` on :math:`n` qubits stores, for each of the :math:`2n`
generators :math:`X_i` (destabilisers) and :math:`Z_i` (stabilisers), the X-part,
Z-part and sign of a Pauli string, following :cite:`aaronson_improved_2004`.

Notes:
    For the unitary :math:`U` of the circuit described by the tableau, the row of
    the generator :math:`P` holds :math:`U^\dagger P U`, i.e. the generator
    evolved *backwards* through the circuit (Heisenberg picture). With this
    convention:

    * appending a gate :math:`G` at the **end** of the circuit
      (:math:`U \mapsto GU`) replaces each row by a product of rows, since
      :math:`G^\dagger P G` is a product of generators;
    * prepending a gate at the **front** of the circuit (:math:`U \mapsto UG`)
      conjugates every row by :math:`G^\dagger`, which only touches the columns
      of the qubits :math:`G` acts on.

    Both directions are available as separate methods for each gate of the
    generating set ``H, V, S, CX, X, Z``, where ``V`` is :math:`\sqrt{X}` and
    ``S`` is :math:`\sqrt{Z}`.

Pauli strings are written as a sign followed by one character per qubit
(e.g. ``"-XIZY"``).
"""
from __future__ import annotations

import copy
from collections.abc import Hashable, Iterable, Iterator, Sequence
from typing import Any

import numpy as np

_MATRICES = (
    "xpauli_x",
    "xpauli_z",
    "xpauli_phase",
    "zpauli_x",
    "zpauli_z",
    "zpauli_phase",
)


class UnsupportedOperationError(Exception):
    """Raised for gates outside of the Clifford generating set.

    Attributes:
        gate: The unsupported gate name.
    """

    def __init__(self, gate: str):
        """Create new ``gate`` error instance.

        Args:
            gate: the unsupported gate identifier.
        """
        self.gate = gate
        super().__init__(
            f"Gate not supported by the tableau: {gate} "
            "(allowed are H, V, S, CX, X and Z)"
        )


def _g(x1, z1, x2, z2) -> np.ndarray:
    """Exponent of :math:`i` when multiplying two single-qubit Pauli operators.

    Vectorised version of ``g`` in ``rowsum(h, i)`` from
    :cite:`aaronson_improved_2004`, operating qubit-wise on whole rows.
    """
    # unsigned types would wrap around on the subtractions below
    x1, z1, x2, z2 = (np.asarray(a, dtype=int) for a in (x1, z1, x2, z2))
    return np.where(
        x1 & z1,
        z2 - x2,
        np.where(x1, z2 * (2 * x2 - 1), np.where(z1, x2 * (1 - 2 * z2), 0)),
    )


def _row_product(
    first: tuple[np.ndarray, np.ndarray, int],
    second: tuple[np.ndarray, np.ndarray, int],
    exponent: int = 0,
) -> tuple[np.ndarray, np.ndarray, int]:
    """Multiply two signed Pauli rows, times an extra factor :math:`i^{exponent}`.

    Returns:
        the X-part, Z-part and sign bit of the product.

    Raises:
        ValueError: if the product is not Hermitian, which means that the two rows
            commute although they should anticommute (or vice versa).
    """
    x1, z1, r1 = first
    x2, z2, r2 = second
    total = (exponent + 2 * int(r1) + 2 * int(r2) + int(_g(x1, z1, x2, z2).sum())) % 4
    if total % 2:
        raise ValueError(
            "Tableau rows do not satisfy the commutation relations of a Clifford "
            "tableau"
        )
    return x1 ^ x2, z1 ^ z2, total // 2


def _pauli_string(xs: np.ndarray, zs: np.ndarray, sign: int) -> str:
    """Format a row as a signed Pauli string, e.g. ``'-XIZ'``."""
    return ("-" if sign else "+") + "".join("IXZY"[x + 2 * z] for x, z in zip(xs, zs))


def _parse_pauli_string(op_str: str) -> tuple[np.ndarray, np.ndarray, int]:
    """Parse a signed Pauli string such as ``"+XIZY"``.

    Spaces and underscores are removed before parsing.
    """
    op_str = op_str.replace(" ", "").replace("_", "")
    sign = 0
    if op_str and op_str[0] in "+-":
        sign = int(op_str[0] == "-")
        op_str = op_str[1:]
    if any(c not in "IXYZ" for c in op_str):
        raise ValueError(f"Invalid Pauli string {op_str!r}, only IXYZ are allowed")
    xs = np.array([c in "XY" for c in op_str], dtype="u1")
    zs = np.array([c in "ZY" for c in op_str], dtype="u1")
    return xs, zs, sign


class QubitBijection:
    """Association between qubit identifiers and tableau indices ``0..n-1``.

    Identifiers can be any hashable object. The association is fixed at creation
    and can be queried in both directions.

    >>> b = QubitBijection(["a", "b"])
    >>> b.index("b")
    1
    >>> b.qubit(0)
    'a'
    >>> list(b)
    [('a', 0), ('b', 1)]
    """

    def __init__(self, qubits: Iterable[Hashable]):
        """Create the bijection, assigning indices in iteration order.

        Raises:
            ValueError: if an identifier appears more than once.
        """
        self._to_index: dict[Hashable, int] = {}
        self._to_qubit: list[Hashable] = []
        for q in qubits:
            if q in self._to_index:
                raise ValueError(f"Duplicate qubit identifier {q!r}")
            self._to_index[q] = len(self._to_qubit)
            self._to_qubit.append(q)

    def index(self, qubit: Hashable) -> int:
        """Index of the given qubit identifier."""
        try:
            return self._to_index[qubit]
        except KeyError:
            raise KeyError(f"Unknown qubit {qubit!r}") from None

    def qubit(self, index: int) -> Hashable:
        """Qubit identifier of the given index."""
        if not 0 <= index < len(self._to_qubit):
            raise KeyError(f"No qubit with index {index}")
        return self._to_qubit[index]

    @property
    def qubits(self) -> list[Hashable]:
        """Qubit identifiers sorted by index."""
        return list(self._to_qubit)

    def __iter__(self) -> Iterator[tuple[Hashable, int]]:
        return ((q, i) for i, q in enumerate(self._to_qubit))

    def __len__(self) -> int:
        return len(self._to_qubit)

    def __contains__(self, qubit: Hashable) -> bool:
        return qubit in self._to_index

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, QubitBijection):
            return NotImplemented
        return self._to_qubit == other._to_qubit

    def __repr__(self) -> str:
        return f"QubitBijection({self._to_qubit!r})"


class CliffTableau:
    """Symplectic representation of a Clifford unitary on ``size`` qubits.

    A new tableau is the identity:

    >>> tab = CliffTableau(2)
    >>> print(tab)
    Destabilisers:
    +XI
    +IX
    Stabilisers:
    +ZI
    +IZ

    Gates are added at the end of the (implicit) circuit with the
    ``apply_*_at_end`` methods, or at its front with ``apply_*_at_front``:

    >>> tab.apply_H_at_end(0)
    >>> tab.apply_CX_at_end(0, 1)
    >>> tab.get_xpauli(0)
    '+ZX'
    >>> tab.get_zpauli(1)
    '+XZ'

    .. automethod:: __init__
    """

    #: Number of qubits.
    size: int
    #: X-part of the destabiliser rows (row ``i`` belongs to :math:`X_i`).
    xpauli_x: np.ndarray
    #: Z-part of the destabiliser rows.
    xpauli_z: np.ndarray
    #: Sign bits of the destabiliser rows.
    xpauli_phase: np.ndarray
    #: X-part of the stabiliser rows (row ``i`` belongs to :math:`Z_i`).
    zpauli_x: np.ndarray
    #: Z-part of the stabiliser rows.
    zpauli_z: np.ndarray
    #: Sign bits of the stabiliser rows.
    zpauli_phase: np.ndarray
    #: Association between qubit identifiers and row/column indices.
    qubits_: QubitBijection

    def __init__(self, qubits: int | Iterable[Hashable]):
        """Create the identity tableau.

        Args:
            qubits: either the number of qubits, in which case the identifiers are
                ``0..n-1``, or the qubit identifiers themselves, in index order.
        """
        if isinstance(qubits, int):
            if qubits < 0:
                raise ValueError("The number of qubits can't be negative")
            qubits = range(qubits)
        self.qubits_ = QubitBijection(qubits)
        n = len(self.qubits_)
        self.size = n
        self.xpauli_x = np.eye(n, dtype="u1")
        self.xpauli_z = np.zeros((n, n), dtype="u1")
        self.xpauli_phase = np.zeros(n, dtype="u1")
        self.zpauli_x = np.zeros((n, n), dtype="u1")
        self.zpauli_z = np.eye(n, dtype="u1")
        self.zpauli_phase = np.zeros(n, dtype="u1")

    @classmethod
    def from_pauli_strings(
        cls,
        destabilisers: Sequence[str],
        stabilisers: Sequence[str],
        qubits: Iterable[Hashable] | None = None,
    ) -> CliffTableau:
        """Build a tableau from the string form of its rows.

        No check is made that the rows form a valid Clifford tableau.

        Args:
            destabilisers: one signed Pauli string per qubit, the rows of the
                :math:`X_i` generators.
            stabilisers: same for the :math:`Z_i` generators.
            qubits: optional qubit identifiers, ``0..n-1`` if not given.

        Raises:
            ValueError: if the number or length of the strings is not consistent.

        Examples:
            >>> tab = CliffTableau.from_pauli_strings(["+Z"], ["+X"])
            >>> tab.xpauli_z
            array([[1]], dtype=uint8)
        """
        n = len(stabilisers)
        if len(destabilisers) != n:
            raise ValueError(
                "The number of stabilisers and destabilisers must match, got "
                f"{n} and {len(destabilisers)}"
            )
        tab = cls(range(n) if qubits is None else qubits)
        if tab.size != n:
            raise ValueError(f"Expected {tab.size} rows per block, got {n}")
        for block, rows in (("x", destabilisers), ("z", stabilisers)):
            for i, row in enumerate(rows):
                xs, zs, sign = _parse_pauli_string(row)
                if xs.size != n:
                    raise ValueError(
                        f"Pauli string {row!r} acts on {xs.size} qubits, expected {n}"
                    )
                tab._set_row(block, i, (xs, zs, sign))
        return tab

    def copy(self) -> CliffTableau:
        """Return an independent copy of this tableau."""
        new = copy.copy(self)
        for name in _MATRICES:
            setattr(new, name, getattr(self, name).copy())
        return new

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CliffTableau):
            return NotImplemented
        return (
            self.size == other.size
            and self.qubits_ == other.qubits_
            and all(
                np.array_equal(getattr(self, name), getattr(other, name))
                for name in _MATRICES
            )
        )

    def __str__(self) -> str:
        destabilisers = "\n".join(self._row_string("x", i) for i in range(self.size))
        stabilisers = "\n".join(self._row_string("z", i) for i in range(self.size))
        return f"Destabilisers:\n{destabilisers}\nStabilisers:\n{stabilisers}"

    def __repr__(self) -> str:
        return f"<CliffTableau on {self.qubits_.qubits!r}>"

    def is_identity(self) -> bool:
        """Whether this tableau describes the identity (with all signs positive)."""
        ident = np.eye(self.size, dtype="u1")
        return bool(
            np.array_equal(self.xpauli_x, ident)
            and np.array_equal(self.zpauli_z, ident)
            and not self.xpauli_z.any()
            and not self.zpauli_x.any()
            and not self.xpauli_phase.any()
            and not self.zpauli_phase.any()
        )

    def get_xpauli(self, qubit: Hashable) -> str:
        """Row of the destabiliser :math:`X_q` as a signed Pauli string."""
        return self._row_string("x", self.qubits_.index(qubit))

    def get_zpauli(self, qubit: Hashable) -> str:
        """Row of the stabiliser :math:`Z_q` as a signed Pauli string."""
        return self._row_string("z", self.qubits_.index(qubit))

    def _row(self, block: str, i: int) -> tuple[np.ndarray, np.ndarray, int]:
        if block == "x":
            return self.xpauli_x[i], self.xpauli_z[i], self.xpauli_phase[i]
        return self.zpauli_x[i], self.zpauli_z[i], self.zpauli_phase[i]

    def _set_row(self, block: str, i: int, row: tuple[np.ndarray, np.ndarray, int]):
        xs, zs, sign = row
        if block == "x":
            self.xpauli_x[i], self.xpauli_z[i], self.xpauli_phase[i] = xs, zs, sign
        else:
            self.zpauli_x[i], self.zpauli_z[i], self.zpauli_phase[i] = xs, zs, sign

    def _row_string(self, block: str, i: int) -> str:
        return _pauli_string(*self._row(block, i))

    def _blocks(self) -> tuple[tuple[np.ndarray, np.ndarray, np.ndarray], ...]:
        """X-part, Z-part and signs of destabilisers and stabilisers."""
        return (
            (self.xpauli_x, self.xpauli_z, self.xpauli_phase),
            (self.zpauli_x, self.zpauli_z, self.zpauli_phase),
        )

    def _check_qubits(self, *qubits: int):
        for q in qubits:
            if not 0 <= q < self.size:
                raise IndexError(
                    f"Qubit index {q} out of range for a tableau of {self.size} qubits"
                )
        if len(set(qubits)) != len(qubits):
            raise ValueError("Control and target must be different qubits")

    # Gates at the end of the circuit: U -> G U, rows become products of rows.

    def apply_H_at_end(self, qubit: int):
        r"""Append a Hadamard gate, :math:`H X H = Z`: the two rows swap."""
        self._check_qubits(qubit)
        x_row = tuple(np.copy(a) for a in self._row("x", qubit))
        self._set_row("x", qubit, self._row("z", qubit))
        self._set_row("z", qubit, x_row)

    def apply_S_at_end(self, qubit: int):
        r"""Append a phase gate, :math:`S^\dagger X S = -iXZ`."""
        self._check_qubits(qubit)
        self._set_row(
            "x",
            qubit,
            _row_product(self._row("x", qubit), self._row("z", qubit), exponent=3),
        )

    def apply_V_at_end(self, qubit: int):
        r"""Append a :math:`\sqrt{X}` gate, :math:`V^\dagger Z V = iXZ`."""
        self._check_qubits(qubit)
        self._set_row(
            "z",
            qubit,
            _row_product(self._row("x", qubit), self._row("z", qubit), exponent=1),
        )

    def apply_X_at_end(self, qubit: int):
        """Append a Pauli X gate, which flips the sign of :math:`Z_q`."""
        self._check_qubits(qubit)
        self.zpauli_phase[qubit] ^= 1

    def apply_Z_at_end(self, qubit: int):
        """Append a Pauli Z gate, which flips the sign of :math:`X_q`."""
        self._check_qubits(qubit)
        self.xpauli_phase[qubit] ^= 1

    def apply_CX_at_end(self, control: int, target: int):
        r"""Append a CNOT gate.

        :math:`X_c \mapsto X_c X_t` and :math:`Z_t \mapsto Z_c Z_t`, the other
        generators are left untouched.
        """
        self._check_qubits(control, target)
        self._set_row(
            "x",
            control,
            _row_product(self._row("x", control), self._row("x", target)),
        )
        self._set_row(
            "z",
            target,
            _row_product(self._row("z", control), self._row("z", target)),
        )

    # Gates at the front of the circuit: U -> U G, every row is conjugated by
    # G^dagger.

    def apply_H_at_front(self, qubit: int):
        """Prepend a Hadamard gate."""
        self._check_qubits(qubit)
        for x, z, r in self._blocks():
            r ^= x[:, qubit] & z[:, qubit]
            x[:, qubit], z[:, qubit] = z[:, qubit].copy(), x[:, qubit].copy()

    def apply_S_at_front(self, qubit: int):
        r"""Prepend a phase gate: :math:`X \mapsto -Y`, :math:`Y \mapsto X`."""
        self._check_qubits(qubit)
        for x, z, r in self._blocks():
            r ^= x[:, qubit] & (z[:, qubit] ^ 1)
            z[:, qubit] ^= x[:, qubit]

    def apply_V_at_front(self, qubit: int):
        r"""Prepend a :math:`\sqrt{X}` gate: :math:`Z \mapsto Y, Y \mapsto -Z`."""
        self._check_qubits(qubit)
        for x, z, r in self._blocks():
            r ^= x[:, qubit] & z[:, qubit]
            x[:, qubit] ^= z[:, qubit]

    def apply_X_at_front(self, qubit: int):
        """Prepend a Pauli X gate."""
        self._check_qubits(qubit)
        for _, z, r in self._blocks():
            r ^= z[:, qubit]

    def apply_Z_at_front(self, qubit: int):
        """Prepend a Pauli Z gate."""
        self._check_qubits(qubit)
        for x, _, r in self._blocks():
            r ^= x[:, qubit]

    def apply_CX_at_front(self, control: int, target: int):
        """Prepend a CNOT gate."""
        self._check_qubits(control, target)
        for x, z, r in self._blocks():
            # r = r ^ (x_control * z_target *(x_target ^ z_control ^1))
            r ^= x[:, control] & z[:, target] & (x[:, target] ^ z[:, control] ^ 1)
            x[:, target] ^= x[:, control]
            z[:, control] ^= z[:, target]

    def apply_gate_at_end(self, name: str, qubits: Sequence[int]):
        """Append a gate given by name, acting on the given qubit indices.

        Raises:
            UnsupportedOperationError: if ``name`` is not one of
                ``H, V, S, CX, X, Z``.
            ValueError: if the number of qubits does not match the gate.
        """
        self._apply_gate(name, qubits, "end")

    def apply_gate_at_front(self, name: str, qubits: Sequence[int]):
        """Prepend a gate given by name, see :meth:`apply_gate_at_end`."""
        self._apply_gate(name, qubits, "front")

    def _apply_gate(self, name: str, qubits: Sequence[int], where: str):
        qubits = tuple(qubits)
        match name:
            case "H" | "V" | "S" | "X" | "Z":
                arity = 1
            case "CX":
                arity = 2
            case _:
                raise UnsupportedOperationError(name)
        if len(qubits) != arity:
            raise ValueError(
                f"Gate {name} acts on {arity} qubit(s), but {len(qubits)} were given"
            )
        getattr(self, f"apply_{name}_at_{where}")(*qubits)
