# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
r"""Representation of Clifford circuits.

Circuits are represented by the class :class:`.Circuit`. A circuit can be built
using :class:`.Circuit` itself or using the wrapper class :class:`.CircuitBuilder`.

Random circuits over the Clifford generating set can be obtained from
:func:`.generator.random_clifford_circuit`.

Supported instructions:

* single-qubit gates ``X``, ``Y``, ``Z``, ``H``, ``S`` (:math:`\sqrt{Z}`) and
  ``V`` (:math:`\sqrt{X}`);
* two-qubit gates ``CX`` and ``CZ``;
* measurement ``M`` and reset ``R``.

Only ``H``, ``V``, ``S``, ``CX``, ``X`` and ``Z`` can be converted to a tableau,
see :mod:`cliffordtab.converters`.
"""
from __future__ import annotations

import warnings
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import NamedTuple


class Command(NamedTuple):
    """A single gate application, as yielded when iterating over a circuit."""

    #: Gate name
    name: str
    #: Qubit identifiers the gate acts on, in order (control first for ``CX``).
    qubits: tuple[Hashable, ...]


def _parse_qubit(token: str) -> Hashable:
    """Integer tokens are integer qubit identifiers, anything else a string."""
    try:
        return int(token)
    except ValueError:
        return token


class Circuit:
    """A Clifford circuit.

    This class represents a Clifford circuit by storing a list of gates together
    with the ordered list of qubits the circuit acts on.

    Qubits can be identified by any hashable object. Qubits that gates are applied
    to are added to the circuit automatically, in order of first use. Qubits that
    should be part of the circuit without any gate acting on them can be declared
    when creating it:

    >>> circ = Circuit(3)
    >>> circ.append("H", 0)
    >>> circ.append("CX", 0, "anc")
    >>> circ.qubits
    [0, 1, 2, 'anc']

    A circuit can be defined from strings as follows:

    >>> circ = Circuit.from_str('''
    ... H 0
    ... CX 0 1 1 2
    ... S 2
    ... ''')
    >>> print(circ)
    H 0
    CX 0 1 1 2
    S 2

    Instructions with several targets are broadcast. Iterating over the circuit
    yields one :class:`Command` per elementary gate:

    >>> [tuple(c) for c in circ]
    [('H', (0,)), ('CX', (0, 1)), ('CX', (1, 2)), ('S', (2,))]

    .. automethod:: __init__
    """

    def __init__(self, qubits: int | Iterable[Hashable] | None = None):
        """Create a new circuit which does not contain any gates.

        Args:
            qubits: either a number of qubits, in which case they are identified by
                ``0..n-1``, or the qubit identifiers. Defaults to no qubits.

        Raises:
            ValueError: if the same qubit identifier is given more than once.
        """
        self.gates: list[tuple[str, tuple[Hashable, ...]]] = []
        """Sequence of gates."""
        self._qubits: list[Hashable] = []
        self._known: set[Hashable] = set()
        if isinstance(qubits, int):
            qubits = range(qubits)
        for q in qubits or ():
            if q in self._known:
                raise ValueError(f"Duplicate qubit identifier {q!r}")
            self._add_qubit(q)

    def __str__(self) -> str:
        """Convert circuit description to string."""
        return "\n".join(
            f"{name} " + " ".join(map(str, args)) for name, args in self.gates
        )

    def __iter__(self) -> Iterator[Command]:
        """Iterate over elementary gate applications, in circuit order."""
        for name, args in self.gates:
            arity = self.arity(name)
            for i in range(0, len(args), arity):
                yield Command(name, tuple(args[i : i + arity]))

    def __len__(self) -> int:
        """Number of elementary gate applications."""
        return sum(len(args) // self.arity(name) for name, args in self.gates)

    @property
    def single_qubit_gates(self):
        """Gates acting on a single qubit, broadcast over all given targets."""
        return {"X", "Y", "Z", "H", "S", "V", "M", "R"}

    @property
    def two_qubit_gates(self):
        """Gates acting on pairs of qubits, e.g. ``CX 0 1 2 3``."""
        return {"CX", "CZ"}

    @property
    def allowed_gates(self):
        """All instructions understood by :class:`Circuit`."""
        return self.single_qubit_gates.union(self.two_qubit_gates)

    def arity(self, name: str) -> int:
        """Number of qubits a single application of gate ``name`` acts on."""
        return 2 if name in self.two_qubit_gates else 1

    @property
    def qubits(self) -> list[Hashable]:
        """Qubit identifiers of the circuit, in order of declaration or first use."""
        return list(self._qubits)

    @property
    def number_of_qubits(self) -> int:
        """Number of qubits in the circuit, including idle ones."""
        return len(self._qubits)

    @property
    def n_q(self) -> int:
        """Alias of :attr:`number_of_qubits`."""
        return self.number_of_qubits

    def _add_qubit(self, qubit: Hashable):
        if qubit not in self._known:
            self._known.add(qubit)
            self._qubits.append(qubit)

    @classmethod
    def from_str(cls, s: str) -> Circuit:
        """Create circuit from string.

        Tokens which are integers become integer qubit identifiers, any other token
        is used as a string identifier.

        >>> circ = Circuit.from_str('''
        ... X 0
        ... V a
        ... ''')
        >>> circ.qubits
        [0, 'a']
        """
        c = cls()
        c.append_from_str(s)
        return c

    def append_from_str(self, s: str):
        r"""Append instructions to current gate sequence.

        >>> circ = Circuit.from_str("X 0 1")
        >>> circ.append_from_str("S 2 3\nZ 4 5  # comments are ignored")
        >>> print(circ)
        X 0 1
        S 2 3
        Z 4 5

        Args:
            s: String which contains one instruction per line.
        """
        for line in s.strip().split("\n"):
            line = line.split("#", 1)[0].strip()
            if line:
                name, *args = line.split()
                self.append(name, *map(_parse_qubit, args))

    def append(self, name: str, *args: Hashable):
        """Append one instruction to the circuit.

        >>> circ = Circuit.from_str("X 0 1")
        >>> circ.append("CX", 2, 3)
        >>> print(circ)
        X 0 1
        CX 2 3

        Args:
            name: Name of the gate
            *args: Qubits the gate acts on. Two-qubit gates take pairs of
                qubits, all other gates are applied to each given qubit.

        Raises:
            ValueError: if the gate is unknown, if no target is given or if the
                targets of a two-qubit gate do not form distinct pairs.
            TypeError: if a qubit identifier is not hashable.
        """
        if name not in self.allowed_gates:
            raise ValueError(f"Do not know how to handle gate {name!r}")
        if not args:
            raise ValueError(f"Gate {name} needs at least one target qubit")
        for arg in args:
            if not isinstance(arg, Hashable):
                raise TypeError("Qubit identifiers must be hashable")
        if name in self.two_qubit_gates:
            if len(args) % 2:
                raise ValueError(f"Gate {name} needs an even number of targets")
            for control, target in zip(args[::2], args[1::2]):
                if control == target:
                    raise ValueError(
                        f"Gate {name} can't act twice on the same qubit {control!r}"
                    )
        for arg in args:
            self._add_qubit(arg)
        self.gates.append((str(name), tuple(args)))

    def rename_qubits(self, mapping: Mapping[Hashable, Hashable]):
        """Rename qubits in place, all at the same time.

        Qubits that don't appear in ``mapping`` keep their name. Since all qubits
        are renamed at once, permutations of identifiers are allowed:

        >>> circ = Circuit.from_str("CX 0 1")
        >>> circ.rename_qubits({0: 1, 1: 0})
        >>> print(circ)
        CX 1 0

        Args:
            mapping: old identifiers to new identifiers.

        Raises:
            ValueError: if two distinct qubits would end up with the same name.
        """
        unknown = [q for q in mapping if q not in self._known]
        if unknown:
            warnings.warn(
                f"Qubits {unknown!r} are not part of the circuit, ignoring them",
                stacklevel=2,
            )
        rename = {q: mapping[q] for q in self._qubits if q in mapping}
        new_qubits = [rename.get(q, q) for q in self._qubits]
        if len(set(new_qubits)) != len(new_qubits):
            raise ValueError("Renaming would merge distinct qubits")
        self._qubits = new_qubits
        self._known = set(new_qubits)
        self.gates = [
            (name, tuple(rename.get(q, q) for q in args)) for name, args in self.gates
        ]


class CircuitBuilder:
    """Helper class to build circuits programatically.

    >>> circ = Circuit()
    >>> c = CircuitBuilder(circ)
    >>> c.H(0, 1)
    >>> c.CX(0, 1, 11, 12)
    >>> print(circ)
    H 0 1
    CX 0 1 11 12

    .. automethod:: __init__
    """

    #: Circuit to which gates are added
    circ: Circuit

    def __init__(self, circ: Circuit):
        """Create a new circuit builder.

        Args:
            circ: Gates are added to this circuit object.
        """
        self.circ = circ

    def X(self, *args):
        """Append Pauli X gate."""
        return self.circ.append("X", *args)

    def Y(self, *args):
        """Append Pauli Y gate."""
        return self.circ.append("Y", *args)

    def Z(self, *args):
        """Append Pauli Z gate."""
        return self.circ.append("Z", *args)

    def H(self, *args):
        """Append Hadamard gate."""
        return self.circ.append("H", *args)

    def S(self, *args):
        """Append phase gate."""
        return self.circ.append("S", *args)

    def V(self, *args):
        """Append square root of X gate."""
        return self.circ.append("V", *args)

    def M(self, *args):
        """Append measurement gate."""
        return self.circ.append("M", *args)

    def R(self, *args):
        """Append reset gate."""
        return self.circ.append("R", *args)

    def CX(self, *args):
        """Append controlled-X gate."""
        return self.circ.append("CX", *args)

    def CZ(self, *args):
        """Append controlled-Z gate."""
        return self.circ.append("CZ", *args)
