# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
"""Linear algebra over GF(2) used by the tableau synthesis.

All functions take binary matrices as numpy arrays (any integer dtype, only the
parity of each entry is considered) and return ``uint8`` arrays. Inputs are never
modified in place; you always get a fresh array back.

The column operations returned by :func:`gaussian_elimination_col_ops` are the
bridge between matrices and circuits: an operation ``(i, j)`` means "XOR column
``i`` into column ``j``", which is exactly what a ``CX`` gate with control ``i``
and target ``j`` does to the X-part of a tableau.
"""
from collections.abc import Iterable

import numpy as np

BinaryMatrix = np.ndarray


def _as_binary(matrix: BinaryMatrix) -> BinaryMatrix:
    """Return a ``uint8`` copy of ``matrix`` reduced modulo 2."""
    m = np.array(matrix, dtype=np.int64) % 2
    return m.astype("u1")


def _check_square(matrix: BinaryMatrix):
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {matrix.shape!r}")


def gaussian_elimination_col_ops(matrix: BinaryMatrix) -> list[tuple[int, int]]:
    """Compute the column operations that reduce ``matrix`` to the identity.

    Column ``k`` is processed after columns ``0..k-1``. Its pivot is the
    lowest-index column ``j >= k`` with a one in row ``k``; if ``j != k`` it is
    added to column ``k`` first. Then row ``k`` is cleared in every other column,
    in ascending column order. This makes the output fully determined by the input.

    Args:
        matrix: a square binary matrix, invertible over GF(2).

    Returns:
        the ordered list of operations ``(i, j)``, each meaning "XOR column ``i``
        into column ``j``". Applying them in order to ``matrix`` yields the
        identity.

    Raises:
        ValueError: if ``matrix`` is not square.
        numpy.linalg.LinAlgError: if ``matrix`` is singular over GF(2).

    Examples:
        >>> gaussian_elimination_col_ops(np.array([[1, 1], [0, 1]]))
        [(0, 1)]
        >>> gaussian_elimination_col_ops(np.array([[0, 1], [1, 0]]))
        [(1, 0), (0, 1), (1, 0)]
    """
    m = _as_binary(matrix)
    _check_square(m)
    size = m.shape[0]
    ops: list[tuple[int, int]] = []
    for k in range(size):
        # rows 0..k-1 are already zero in columns k.., so the lower right block
        # is invertible and row k must have a one somewhere at or after column k
        candidates = np.flatnonzero(m[k, k:])
        if candidates.size == 0:
            raise np.linalg.LinAlgError("Matrix is singular over GF(2)")
        pivot = k + int(candidates[0])
        if pivot != k:
            m[:, k] ^= m[:, pivot]
            ops.append((pivot, k))
        for j in range(size):
            if j != k and m[k, j]:
                m[:, j] ^= m[:, k]
                ops.append((k, j))
    return ops


def apply_col_ops(
    matrix: BinaryMatrix, ops: Iterable[tuple[int, int]]
) -> BinaryMatrix:
    """Apply a sequence of column operations to a copy of ``matrix``.

    Args:
        matrix: the binary matrix to transform.
        ops: operations ``(i, j)`` meaning "XOR column ``i`` into column ``j``".

    Returns:
        the transformed copy.
    """
    m = _as_binary(matrix)
    for i, j in ops:
        m[:, j] ^= m[:, i]
    return m


def binary_llt_decomposition(
    matrix: BinaryMatrix,
) -> tuple[BinaryMatrix, BinaryMatrix]:
    r"""Write a symmetric binary matrix as :math:`MM^T` plus a diagonal.

    Over GF(2) not every symmetric matrix :math:`D` is of the form :math:`MM^T`,
    but adding a suitable diagonal matrix always makes it so (Lemma 7 of
    :cite:`aaronson_improved_2004`). :math:`M` is built row by row as a unit lower
    triangular matrix, so it is always invertible:

    .. math::

        M_{ij} = D_{ij} + \sum_{k<j} M_{ik} M_{jk} \quad (j < i)

    and the diagonal entries of :math:`MM^T` that do not agree with :math:`D` are
    flagged in the returned vector.

    Args:
        matrix: a square symmetric binary matrix :math:`D`.

    Returns:
        a tuple ``(M, diag)`` where ``M`` is unit lower triangular and
        ``D == (M @ M.T + np.diag(diag)) % 2``.

    Raises:
        ValueError: if ``matrix`` is not square or not symmetric.

    Examples:
        The zero matrix needs every diagonal entry corrected:

        >>> m, diag = binary_llt_decomposition(np.zeros((2, 2), dtype="u1"))
        >>> m
        array([[1, 0],
               [0, 1]], dtype=uint8)
        >>> diag
        array([1, 1], dtype=uint8)
    """
    d = _as_binary(matrix)
    _check_square(d)
    if np.any(d != d.T):
        raise ValueError("Matrix must be symmetric")
    size = d.shape[0]
    m = np.eye(size, dtype="u1")
    diag = np.zeros(size, dtype="u1")
    for i in range(size):
        for j in range(i):
            overlap = int(np.dot(m[i, :j].astype(int), m[j, :j].astype(int)))
            m[i, j] = d[i, j] ^ (overlap % 2)
        # (MM^T)_ii = 1 + sum_{k<i} M_ik, flag it when it differs from D_ii
        diag[i] = d[i, i] ^ 1 ^ (int(m[i, :i].sum()) % 2)
    return m, diag


def rank(matrix: BinaryMatrix) -> int:
    """Rank of a binary matrix over GF(2).

    Examples:
        >>> rank(np.array([[1, 1], [1, 1]]))
        1
        >>> rank(np.eye(3, dtype="u1"))
        3
    """
    m = _as_binary(matrix)
    if m.ndim != 2:
        raise ValueError("Only 2D arrays have a rank")
    r = 0
    rows, cols = m.shape
    for col in range(cols):
        pivots = np.flatnonzero(m[r:, col])
        if pivots.size == 0:
            continue
        pivot = r + int(pivots[0])
        m[[r, pivot]] = m[[pivot, r]]
        for row in range(rows):
            if row != r and m[row, col]:
                m[row] ^= m[r]
        r += 1
        if r == rows:
            break
    return r
