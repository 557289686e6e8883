"""Matrix helpers: weight initialisation and a compact textual preview."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = ["xavier_uniform", "preview"]


def xavier_uniform(
    rows: int, cols: int, rng: np.random.Generator | None = None
) -> NDArray[np.float64]:
    """Return a ``rows x cols`` matrix drawn from the Xavier/Glorot uniform distribution."""
    if rows < 0 or cols < 0:
        raise ValueError("matrix dimensions must be non-negative")
    if rows + cols == 0:
        return np.zeros((rows, cols))
    generator = rng if rng is not None else np.random.default_rng()
    limit = np.sqrt(6.0 / (rows + cols))
    return generator.uniform(-limit, limit, size=(rows, cols))


def preview(matrix: ArrayLike, limit: int = 5) -> str:
    """Render at most ``limit`` rows and columns of a matrix, one row per line."""
    values = np.atleast_2d(np.asarray(matrix, dtype=float))
    if values.ndim != 2:
        raise ValueError("preview expects a two-dimensional matrix")
    corner = values[:limit, :limit]
    return "\n".join(" ".join(f"{value:g}" for value in row) for row in corner)