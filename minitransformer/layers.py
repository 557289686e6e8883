"""Token embedding, layer normalisation and position-wise feed-forward layers."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .functions import relu
from .matrix import xavier_uniform

__all__ = ["Embedding", "LayerNorm", "FeedForward"]


class Embedding:
    """Lookup table mapping token ids to ``d_model``-dimensional vectors."""

    def __init__(
        self, vocab_size: int, d_model: int, rng: np.random.Generator | None = None
    ) -> None:
        if vocab_size < 0 or d_model <= 0:
            raise ValueError("vocab_size must be non-negative and d_model positive")
        self.vocab_size = vocab_size
        self.d_model = d_model
        self.table = xavier_uniform(vocab_size, d_model, rng)

    def forward(self, input_ids: Sequence[int]) -> NDArray[np.float64]:
        """Embed each id; ids outside the vocabulary give a row of zeros."""
        ids = np.asarray(input_ids, dtype=int).reshape(-1)
        result = np.zeros((ids.size, self.d_model))
        valid = (ids >= 0) & (ids < self.vocab_size)
        result[valid] = self.table[ids[valid]]
        return result


class LayerNorm:
    """Normalise each row to zero mean and unit variance, then scale and shift."""

    def __init__(self, d_model: int, eps: float = 1e-6) -> None:
        if d_model <= 0:
            raise ValueError("d_model must be positive")
        self.d_model = d_model
        self.eps = eps
        self.gamma = np.ones(d_model)
        self.beta = np.zeros(d_model)

    def forward(self, x: ArrayLike) -> NDArray[np.float64]:
        """Apply the normalisation row by row."""
        values = np.atleast_2d(np.asarray(x, dtype=float))
        if values.shape[-1] != self.d_model:
            raise ValueError(
                f"expected {self.d_model} columns, got {values.shape[-1]}"
            )
        mean = values.mean(axis=-1, keepdims=True)
        variance = values.var(axis=-1, keepdims=True)
        return self.gamma * (values - mean) / np.sqrt(variance + self.eps) + self.beta


class FeedForward:
    """Two linear transformations with a ReLU in between."""

    def __init__(
        self, d_model: int, d_ff: int = 2048, rng: np.random.Generator | None = None
    ) -> None:
        if d_model <= 0 or d_ff <= 0:
            raise ValueError("d_model and d_ff must be positive")
        generator = rng if rng is not None else np.random.default_rng()
        self.d_model = d_model
        self.d_ff = d_ff
        self.w1 = xavier_uniform(d_model, d_ff, generator)
        self.w2 = xavier_uniform(d_ff, d_model, generator)
        self.b1 = np.zeros(d_ff)
        self.b2 = np.zeros(d_model)

    def forward(self, x: ArrayLike) -> NDArray[np.float64]:
        """``relu(x W1 + b1) W2 + b2``."""
        values = np.atleast_2d(np.asarray(x, dtype=float))
        if values.shape[-1] != self.d_model:
            raise ValueError(
                f"expected {self.d_model} columns, got {values.shape[-1]}"
            )
        hidden = relu(values @ self.w1 + self.b1)
        return hidden @ self.w2 + self.b2