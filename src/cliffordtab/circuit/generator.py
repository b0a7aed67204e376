# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
"""Generate random circuits over the Clifford generating set."""

from __future__ import annotations

from collections.abc import Hashable, Iterable

import numpy as np

import cliffordtab
from cliffordtab.circuit import Circuit

#: Gates drawn by :func:`random_clifford_circuit`.
GENERATING_SET: tuple[str, ...] = ("H", "V", "S", "CX", "X", "Z")


def random_clifford_circuit(
    qubits: int | Iterable[Hashable],
    depth: int,
    *,
    rng: np.random.Generator | None = None,
) -> Circuit:
    """Draw a random circuit made of ``H``, ``V``, ``S``, ``CX``, ``X`` and ``Z``.

    Each of the ``depth`` gates is drawn uniformly from :data:`GENERATING_SET`
    and applied to uniformly drawn qubits (two distinct ones for ``CX``). On a
    single qubit ``CX`` is never drawn.

    Args:
        qubits: number of qubits or qubit identifiers, as in :class:`.Circuit`.
        depth: number of gates.

    Keyword Args:
        rng: random number generator. Defaults to :data:`cliffordtab.rng`.

    Returns:
        the new circuit. All ``qubits`` are part of it, even if idle.

    Raises:
        ValueError: if ``depth`` is negative, or positive on a circuit without
            qubits.

    Examples:
        >>> circ = random_clifford_circuit(3, 10, rng=np.random.default_rng(1))
        >>> len(circ)
        10
        >>> circ.qubits
        [0, 1, 2]
    """
    if rng is None:
        rng = cliffordtab.rng
    circ = Circuit(qubits)
    ids = circ.qubits
    n = len(ids)
    if depth < 0:
        raise ValueError(f"The depth can't be negative, got {depth}")
    if depth and n == 0:
        raise ValueError("Can't place gates on a circuit without qubits")
    gates = GENERATING_SET if n > 1 else tuple(g for g in GENERATING_SET if g != "CX")
    for _ in range(depth):
        name = gates[int(rng.integers(len(gates)))]
        if name == "CX":
            control, target = rng.choice(n, size=2, replace=False)
            circ.append(name, ids[int(control)], ids[int(target)])
        else:
            circ.append(name, ids[int(rng.integers(n))])
    return circ
