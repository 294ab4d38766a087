from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np

Array = np.ndarray


@dataclass(frozen=True, eq=False)
class GaussResult:
    """
    Outcome of a dense Gaussian elimination.

    Attributes:
        x: Solution vector.
        skipped: Indices of pivot columns whose best pivot fell below the
            tolerance. The matching unknowns are indeterminate and set to 0.
    """
    x: Array
    skipped: Tuple[int, ...] = ()

    @property
    def is_determinate(self) -> bool:
        return not self.skipped


def gauss_solve(A: Array, b: Array, pivot_tolerance: float = 1e-15) -> GaussResult:
    """
    Solve A x = b by Gaussian elimination with partial pivoting.

    At step i the row (among i..n-1) holding the largest |A[r, i]| is swapped
    into place. If that magnitude is below ``pivot_tolerance`` the step is
    skipped instead of raising; the column is reported in ``skipped`` and the
    corresponding unknown is left at 0 during back-substitution.

    Args:
        A: Square coefficient matrix. Not modified.
        b: Right-hand side. Not modified.
        pivot_tolerance: Smallest usable pivot magnitude.

    Returns:
        GaussResult with the solution and the skipped pivot columns.

    Raises:
        ValueError: If the shapes of A and b are inconsistent.
    """
    M = np.array(A, dtype=float, copy=True)
    rhs = np.array(b, dtype=float, copy=True)
    n = rhs.shape[0]
    if M.shape != (n, n):
        raise ValueError(f"Expected a square {n}x{n} matrix, got {M.shape}.")

    skipped = []
    for i in range(n):
        p = i + int(np.argmax(np.abs(M[i:, i])))
        if p != i:
            M[[i, p]] = M[[p, i]]
            rhs[[i, p]] = rhs[[p, i]]
        if abs(M[i, i]) < pivot_tolerance:
            skipped.append(i)
            continue
        factors = M[i + 1:, i] / M[i, i]
        M[i + 1:, i:] -= np.outer(factors, M[i, i:])
        rhs[i + 1:] -= factors * rhs[i]

    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        if i in skipped:
            continue
        x[i] = (rhs[i] - M[i, i + 1:] @ x[i + 1:]) / M[i, i]
    return GaussResult(x=x, skipped=tuple(skipped))
