# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
import numpy as np
import pytest as pt

from cliffordtab.tableau import (
    CliffTableau,
    QubitBijection,
    UnsupportedOperationError,
    _g,
)

GATES = ["H", "V", "S", "X", "Z", "CX"]
#: Each gate and an equivalent sequence for its inverse
INVERSES = {
    "H": ["H"],
    "V": ["V", "V", "V"],
    "S": ["S", "S", "S"],
    "X": ["X"],
    "Z": ["Z"],
    "CX": ["CX"],
}


def targets(name):
    return [0, 1] if name == "CX" else [0]


def random_tableau(rng, size=3, depth=40) -> CliffTableau:
    tab = CliffTableau(size)
    for _ in range(depth):
        name = GATES[rng.integers(len(GATES))]
        if name == "CX":
            qubits = [int(q) for q in rng.choice(size, size=2, replace=False)]
        else:
            qubits = [int(rng.integers(size))]
        tab.apply_gate_at_end(name, qubits)
    return tab


class TestQubitBijection:
    def test_lookup(self):
        b = QubitBijection(["a", 3, ("x", 1)])
        assert b.index(3) == 1
        assert b.qubit(2) == ("x", 1)
        assert b.qubits == ["a", 3, ("x", 1)]
        assert list(b) == [("a", 0), (3, 1), (("x", 1), 2)]
        assert len(b) == 3
        assert "a" in b
        assert "b" not in b

    def test_unknown(self):
        b = QubitBijection(range(2))
        with pt.raises(KeyError):
            b.index(2)
        with pt.raises(KeyError):
            b.qubit(-1)

    def test_duplicates(self):
        with pt.raises(ValueError, match="Duplicate"):
            QubitBijection([0, 1, 0])

    def test_eq(self):
        assert QubitBijection([0, 1]) == QubitBijection(range(2))
        assert QubitBijection([0, 1]) != QubitBijection([1, 0])


class TestCliffTableau:
    def test_identity(self):
        tab = CliffTableau(3)
        assert tab.size == 3
        assert tab.is_identity()
        assert np.array_equal(tab.xpauli_x, np.eye(3))
        assert np.array_equal(tab.zpauli_z, np.eye(3))
        assert not tab.xpauli_z.any() and not tab.zpauli_x.any()
        assert not tab.xpauli_phase.any() and not tab.zpauli_phase.any()
        assert tab.xpauli_x.dtype == np.uint8

    def test_qubit_identifiers(self):
        tab = CliffTableau(["a", "b"])
        assert tab.qubits_.index("b") == 1
        tab.apply_CX_at_end(0, 1)
        assert tab.get_xpauli("a") == "+XX"
        assert tab.get_zpauli("b") == "+ZZ"

    def test_empty(self):
        tab = CliffTableau(0)
        assert tab.size == 0
        assert tab.is_identity()

    def test_negative_size(self):
        with pt.raises(ValueError):
            CliffTableau(-1)

    def test_str(self):
        tab = CliffTableau(2)
        tab.apply_H_at_end(1)
        tab.apply_X_at_end(0)
        assert str(tab) == "Destabilisers:\n+XI\n+IZ\nStabilisers:\n-ZI\n+IX"

    def test_copy(self):
        tab = CliffTableau(2)
        other = tab.copy()
        other.apply_S_at_end(0)
        assert tab.is_identity()
        assert not other.is_identity()
        assert other.qubits_ == tab.qubits_

    def test_eq(self):
        assert CliffTableau(2) == CliffTableau(2)
        assert CliffTableau(2) != CliffTableau(["a", "b"])
        assert CliffTableau(2) != CliffTableau(3)
        assert CliffTableau(1) != "tableau"
        tab = CliffTableau(2)
        tab.apply_Z_at_end(1)
        assert tab != CliffTableau(2)

    @pt.mark.parametrize(
        "name, destabilisers, stabilisers",
        [
            ("H", ["+Z"], ["+X"]),
            ("S", ["-Y"], ["+Z"]),
            ("V", ["+X"], ["+Y"]),
            ("X", ["+X"], ["-Z"]),
            ("Z", ["-X"], ["+Z"]),
            ("CX", ["+XX", "+IX"], ["+ZI", "+ZZ"]),
        ],
    )
    @pt.mark.parametrize("where", ["end", "front"])
    def test_single_gate(self, name, destabilisers, stabilisers, where):
        size = len(stabilisers)
        tab = CliffTableau(size)
        getattr(tab, f"apply_gate_at_{where}")(name, targets(name))
        assert [tab.get_xpauli(i) for i in range(size)] == destabilisers
        assert [tab.get_zpauli(i) for i in range(size)] == stabilisers
        assert tab == CliffTableau.from_pauli_strings(destabilisers, stabilisers)

    def test_composite(self):
        tab = CliffTableau(2)
        tab.apply_H_at_end(0)
        tab.apply_CX_at_end(0, 1)
        assert [tab.get_xpauli(i) for i in range(2)] == ["+ZX", "+IX"]
        assert [tab.get_zpauli(i) for i in range(2)] == ["+XI", "+XZ"]

    @pt.mark.parametrize("name", GATES)
    @pt.mark.parametrize("where", ["end", "front"])
    def test_inverse(self, stable_rgen, name, where):
        tab = random_tableau(stable_rgen)
        expected = tab.copy()
        apply = getattr(tab, f"apply_gate_at_{where}")
        apply(name, targets(name))
        assert tab != expected
        for inv in INVERSES[name]:
            apply(inv, targets(name))
        assert tab == expected

    @pt.mark.parametrize(
        "sequence, equivalent",
        [
            (["S", "V", "S"], ["H"]),
            (["S", "S"], ["Z"]),
            (["V", "V"], ["X"]),
            (["H", "S", "S", "H"], ["X"]),
            (["S"] * 4, []),
            (["V"] * 4, []),
        ],
    )
    @pt.mark.parametrize("where", ["end", "front"])
    def test_gate_identities(self, stable_rgen, sequence, equivalent, where):
        tab = random_tableau(stable_rgen)
        other = tab.copy()
        for name in sequence:
            getattr(tab, f"apply_gate_at_{where}")(name, [1])
        for name in equivalent:
            getattr(other, f"apply_gate_at_{where}")(name, [1])
        assert tab == other

    def test_front_is_reversed_end(self, stable_rgen):
        size = 4
        gates = []
        for _ in range(50):
            name = GATES[stable_rgen.integers(len(GATES))]
            if name == "CX":
                pair = stable_rgen.choice(size, size=2, replace=False)
                qubits = [int(q) for q in pair]
            else:
                qubits = [int(stable_rgen.integers(size))]
            gates.append((name, qubits))
        at_end = CliffTableau(size)
        for name, qubits in gates:
            at_end.apply_gate_at_end(name, qubits)
        at_front = CliffTableau(size)
        for name, qubits in reversed(gates):
            at_front.apply_gate_at_front(name, qubits)
        assert at_end == at_front

    @pt.mark.parametrize("name", ["Y", "CZ", "M", "R", "T"])
    def test_unsupported_gate(self, name):
        tab = CliffTableau(2)
        with pt.raises(UnsupportedOperationError) as excinfo:
            tab.apply_gate_at_end(name, [0])
        assert excinfo.value.gate == name
        with pt.raises(UnsupportedOperationError):
            tab.apply_gate_at_front(name, [0])

    @pt.mark.parametrize(
        "name, qubits, exc_type",
        [
            ("CX", [0], ValueError),
            ("H", [0, 1], ValueError),
            ("CX", [1, 1], ValueError),
            ("H", [2], IndexError),
            ("CX", [0, -1], IndexError),
        ],
    )
    def test_bad_targets(self, name, qubits, exc_type):
        tab = CliffTableau(2)
        with pt.raises(exc_type):
            tab.apply_gate_at_end(name, qubits)

    def test_invalid_rows(self):
        # the destabiliser and stabiliser of a qubit must anticommute
        tab = CliffTableau.from_pauli_strings(["+X"], ["+X"])
        with pt.raises(ValueError, match="commutation"):
            tab.apply_S_at_end(0)


class TestFromPauliStrings:
    def test_signs_and_qubits(self):
        tab = CliffTableau.from_pauli_strings(
            ["-XZ", "+IX"], ["+Z Y", "-I_Z"], qubits=["a", "b"]
        )
        assert tab.qubits_.qubits == ["a", "b"]
        assert tab.get_xpauli("a") == "-XZ"
        assert tab.get_zpauli("a") == "+ZY"
        assert tab.get_zpauli("b") == "-IZ"
        assert np.array_equal(tab.xpauli_phase, [1, 0])
        assert np.array_equal(tab.zpauli_phase, [0, 1])

    def test_unsigned(self):
        tab = CliffTableau.from_pauli_strings(["X"], ["Z"])
        assert tab.is_identity()

    @pt.mark.parametrize(
        "destabilisers, stabilisers, qubits",
        [
            (["+X"], ["+Z", "+Z"], None),
            (["+XI"], ["+Z"], None),
            (["+A"], ["+Z"], None),
            (["+X"], ["+Z"], ["a", "b"]),
        ],
    )
    def test_invalid(self, destabilisers, stabilisers, qubits):
        with pt.raises(ValueError):
            CliffTableau.from_pauli_strings(destabilisers, stabilisers, qubits)


@pt.mark.parametrize(
    "x1, z1, x2, z2, expected",
    [
        (0, 0, 1, 1, 0),
        (1, 0, 0, 1, -1),
        (1, 0, 1, 1, 1),
        (0, 1, 1, 0, 1),
        (0, 1, 1, 1, -1),
        (1, 1, 1, 0, -1),
        (1, 1, 0, 1, 1),
    ],
)
def test_g(x1, z1, x2, z2, expected):
    assert _g(x1, z1, x2, z2) == expected
