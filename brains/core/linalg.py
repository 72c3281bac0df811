"""Small array helpers used by the forward and backward passes."""

from __future__ import annotations

from typing import Callable

import numpy as np

from .types import Array


def freeze(values) -> Array:
    """Return a read-only float64 copy of ``values``."""

    out = np.array(values, dtype=np.float64)
    out.setflags(write=False)
    return out


def dot(xs, ys) -> float:
    """Sum of the elementwise products of two equally long vectors."""

    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.shape != ys.shape or xs.ndim != 1:
        raise ValueError(
            f"dot expects two vectors of equal length, got shapes {xs.shape} and {ys.shape}"
        )
    return float(np.dot(xs, ys))


def transpose(matrix) -> Array:
    """Transpose a ``(n_dst, width)`` weight matrix into ``(width, n_dst)``."""

    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2:
        raise ValueError(f"transpose expects a 2-d matrix, got {matrix.ndim} dimensions")
    return freeze(matrix.T)


def build_matrix(rows: int, cols: int, generator: Callable[[], float]) -> Array:
    """Return ``cols`` vectors of ``rows`` entries, each drawn from ``generator``."""

    return freeze([[generator() for _ in range(rows)] for _ in range(cols)])
