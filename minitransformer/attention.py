"""Sinusoidal positional encoding and (single-projection) multi-head attention."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .functions import softmax
from .matrix import xavier_uniform

__all__ = ["PositionalEncoding", "MultiHeadAttention"]

MASKED_SCORE = -1e9


class PositionalEncoding:
    """Precomputed sine/cosine position table."""

    def __init__(self, d_model: int, max_seq_len: int = 5000) -> None:
        if d_model <= 0:
            raise ValueError("d_model must be positive")
        if max_seq_len < 0:
            raise ValueError("max_seq_len must be non-negative")
        self.d_model = d_model
        self.max_seq_len = max_seq_len

        positions = np.arange(max_seq_len, dtype=float)[:, None]
        dims = np.arange(d_model)
        # Odd columns reuse the exponent of the preceding even column.
        exponents = 2.0 * (dims - dims % 2) / d_model
        angles = positions / np.power(10000.0, exponents)
        self._table = np.where(dims % 2 == 0, np.sin(angles), np.cos(angles))

    def encoding(self, seq_len: int) -> NDArray[np.float64]:
        """Return the first ``seq_len`` rows of the table."""
        if not 0 <= seq_len <= self.max_seq_len:
            raise ValueError(
                f"sequence length {seq_len} outside 0..{self.max_seq_len}"
            )
        return self._table[:seq_len].copy()


class MultiHeadAttention:
    """Scaled dot-product attention with query, key, value and output projections."""

    def __init__(
        self, d_model: int, n_heads: int, rng: np.random.Generator | None = None
    ) -> None:
        if n_heads <= 0 or d_model % n_heads != 0:
            raise ValueError("d_model must be divisible by n_heads")
        self.d_model = d_model
        self.n_heads = n_heads
        self.d_k = d_model // n_heads
        generator = rng if rng is not None else np.random.default_rng()
        self.w_q = xavier_uniform(d_model, d_model, generator)
        self.w_k = xavier_uniform(d_model, d_model, generator)
        self.w_v = xavier_uniform(d_model, d_model, generator)
        self.w_o = xavier_uniform(d_model, d_model, generator)

    def scaled_dot_product_attention(
        self,
        q: ArrayLike,
        k: ArrayLike,
        v: ArrayLike,
        mask: ArrayLike | None = None,
    ) -> NDArray[np.float64]:
        """softmax(Q Kᵀ / sqrt(d_k)) V, with masked positions set to a large negative score.

        A mask with a single row applies to every query row.
        """
        q = np.asarray(q, dtype=float)
        k = np.asarray(k, dtype=float)
        v = np.asarray(v, dtype=float)
        scores = (q @ k.T) / math.sqrt(self.d_k)
        if mask is not None:
            keep = np.broadcast_to(np.asarray(mask, dtype=float), scores.shape)
            scores = np.where(keep == 0, MASKED_SCORE, scores)
        return softmax(scores) @ v

    def forward(
        self,
        query: ArrayLike,
        key: ArrayLike,
        value: ArrayLike,
        mask: ArrayLike | None = None,
    ) -> NDArray[np.float64]:
        """Project inputs, attend, and project the result back to ``d_model``."""
        q = np.asarray(query, dtype=float) @ self.w_q
        k = np.asarray(key, dtype=float) @ self.w_k
        v = np.asarray(value, dtype=float) @ self.w_v
        return self.scaled_dot_product_attention(q, k, v, mask) @ self.w_o